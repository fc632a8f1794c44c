"""Tests for marathon_spine.container.models.

Covers the builder methods, the unset / explicitly-empty / populated
contract of optional lists, and the service port lookup.
"""

from __future__ import annotations

import pytest

from marathon_spine.container import (
    PROTOCOL_TCP,
    PROTOCOL_UDP,
    Container,
    ContainerType,
    Docker,
    NetworkMode,
    Parameter,
    PortMapping,
    Volume,
    new_docker_container,
)
from marathon_spine.core.errors import ErrorCategory, NoPortMappingsError, PortNotFoundError
from marathon_spine.core.result import Err, Ok


class TestNewDockerContainer:
    """Tests for the docker-defaulting constructor."""

    def test_type_is_docker(self):
        container = new_docker_container()
        assert container.type == "DOCKER"
        assert container.type == ContainerType.DOCKER.value

    def test_docker_record_is_empty(self):
        container = new_docker_container()
        assert container.docker is not None
        assert container.docker == Docker()

    def test_volumes_unset(self):
        assert new_docker_container().volumes is None

    def test_instances_are_independent(self):
        first = new_docker_container()
        second = new_docker_container()
        first.docker.expose_tcp_ports(80)
        assert second.docker.port_mappings is None

    def test_plain_container_is_fully_unset(self):
        container = Container()
        assert container.type is None
        assert container.docker is None
        assert container.volumes is None


class TestVolumes:
    """Tests for add_volume / clear_volumes."""

    def test_add_volume_materializes_list(self):
        container = new_docker_container()
        assert container.volumes is None

        container.add_volume("/host", "/container", "RW")

        assert container.volumes == [Volume(host_path="/host", container_path="/container", mode="RW")]

    def test_add_volume_fields_verbatim(self):
        container = Container().add_volume("/var/lib/data", "/data", "RO")
        volume = container.volumes[0]
        assert volume.host_path == "/var/lib/data"
        assert volume.container_path == "/data"
        assert volume.mode == "RO"

    def test_add_volume_preserves_order(self):
        container = new_docker_container()
        for index in range(5):
            container.add_volume(f"/host/{index}", f"/c/{index}", "RW")
        assert len(container.volumes) == 5
        assert [v.host_path for v in container.volumes] == [f"/host/{i}" for i in range(5)]

    def test_add_volume_returns_container(self):
        container = new_docker_container()
        assert container.add_volume("/a", "/b", "RW") is container

    def test_clear_volumes_is_explicit_empty(self):
        container = new_docker_container()
        assert container.volumes is None

        returned = container.clear_volumes()

        assert returned is container
        assert container.volumes == []
        assert container.volumes is not None

    def test_clear_volumes_drops_existing(self):
        container = new_docker_container().add_volume("/a", "/b", "RW").add_volume("/c", "/d", "RO")
        container.clear_volumes()
        assert container.volumes == []

    def test_clear_then_append_stays_present(self):
        container = new_docker_container().clear_volumes().add_volume("/a", "/b", "RW")
        assert len(container.volumes) == 1
        container.clear_volumes()
        assert container.volumes == []


class TestDockerFlags:
    """Tests for the tri-state booleans and scalar setters."""

    def test_flags_unset_by_default(self):
        docker = Docker()
        assert docker.force_pull_image is None
        assert docker.privileged is None

    @pytest.mark.parametrize("value", [True, False])
    def test_set_force_pull_image(self, value):
        docker = Docker().set_force_pull_image(value)
        assert docker.force_pull_image is value

    @pytest.mark.parametrize("value", [True, False])
    def test_set_privileged(self, value):
        docker = Docker().set_privileged(value)
        assert docker.privileged is value

    def test_set_image(self):
        docker = Docker()
        assert docker.set_image("nginx:1.25") is docker
        assert docker.image == "nginx:1.25"


class TestNetwork:
    """Tests for network mode selection."""

    def test_network_unset_by_default(self):
        assert Docker().network is None

    def test_set_network_accepts_enum(self):
        docker = Docker().set_network(NetworkMode.HOST)
        assert docker.network == "HOST"
        assert isinstance(docker.network, str)

    def test_set_network_accepts_free_form_string(self):
        docker = Docker().set_network("CUSTOM_OVERLAY")
        assert docker.network == "CUSTOM_OVERLAY"

    def test_use_bridged_network_sets_bridge(self):
        assert Docker().use_bridged_network().network == "BRIDGE"

    def test_use_host_network_sets_host(self):
        assert Docker().use_host_network().network == "HOST"


class TestPortMappings:
    """Tests for expose_* / clear_port_mappings."""

    def test_expose_tcp_ports(self):
        docker = Docker().expose_tcp_ports(80, 443)
        assert docker.port_mappings == [
            PortMapping(container_port=80, host_port=0, service_port=0, protocol="tcp"),
            PortMapping(container_port=443, host_port=0, service_port=0, protocol="tcp"),
        ]

    def test_expose_udp_ports(self):
        docker = Docker().expose_udp_ports(53, 5353)
        assert [m.protocol for m in docker.port_mappings] == [PROTOCOL_UDP, PROTOCOL_UDP]
        assert [m.container_port for m in docker.port_mappings] == [53, 5353]
        assert all(m.host_port == 0 and m.service_port == 0 for m in docker.port_mappings)

    def test_expose_no_ports_leaves_unset(self):
        assert Docker().expose_tcp_ports().port_mappings is None

    def test_expose_port_fully_specified(self):
        docker = Docker().expose_port(8080, 31000, 10000, PROTOCOL_TCP)
        mapping = docker.port_mappings[0]
        assert mapping.container_port == 8080
        assert mapping.host_port == 31000
        assert mapping.service_port == 10000
        assert mapping.protocol == "tcp"

    def test_mixed_protocols_keep_call_order(self):
        docker = Docker().expose_tcp_ports(80).expose_udp_ports(53).expose_port(9000, 0, 0, "tcp")
        assert [(m.container_port, m.protocol) for m in docker.port_mappings] == [
            (80, "tcp"),
            (53, "udp"),
            (9000, "tcp"),
        ]

    def test_clear_port_mappings(self):
        docker = Docker().expose_tcp_ports(80)
        assert docker.clear_port_mappings() is docker
        assert docker.port_mappings == []

    def test_clear_then_expose(self):
        docker = Docker().clear_port_mappings().expose_tcp_ports(80)
        assert len(docker.port_mappings) == 1


class TestParameters:
    """Tests for add_parameter / add_parameters / clear_parameters."""

    def test_add_parameter_materializes_list(self):
        docker = Docker()
        assert docker.parameters is None
        docker.add_parameter("label", "tier=web")
        assert docker.parameters == [Parameter(key="label", value="tier=web")]

    def test_repeated_keys_are_kept_in_order(self):
        docker = (
            Docker()
            .add_parameter("label", "a=1")
            .add_parameter("env", "X=1")
            .add_parameter("label", "b=2")
        )
        assert [(p.key, p.value) for p in docker.parameters] == [
            ("label", "a=1"),
            ("env", "X=1"),
            ("label", "b=2"),
        ]

    def test_add_parameters(self):
        docker = Docker().add_parameter("hostname", "web-1")
        docker.add_parameters([("label", "a=1"), ("label", "b=2")])
        assert len(docker.parameters) == 3
        assert docker.parameters[-1].value == "b=2"

    def test_add_parameters_empty_materializes(self):
        assert Docker().add_parameters([]).parameters == []

    def test_clear_parameters(self):
        docker = Docker().add_parameter("a", "b")
        assert docker.clear_parameters() is docker
        assert docker.parameters == []

    def test_clear_then_add_stays_present(self):
        docker = Docker().clear_parameters().add_parameter("label", "tier=web")
        assert docker.parameters == [Parameter(key="label", value="tier=web")]
        docker.clear_parameters()
        assert docker.parameters == []
        assert docker.parameters is not None


class TestServicePortIndex:
    """Tests for the service port lookup."""

    def test_finds_second_port(self):
        docker = Docker().expose_tcp_ports(80, 443)
        assert docker.service_port_index(443) == Ok(1)

    def test_finds_first_port(self):
        docker = Docker().expose_tcp_ports(80, 443)
        assert docker.service_port_index(80).unwrap() == 0

    def test_no_port_mappings_when_unset(self):
        result = Docker().service_port_index(80)
        assert result.is_err()
        assert isinstance(result.error, NoPortMappingsError)

    def test_no_port_mappings_when_explicitly_empty(self):
        result = Docker().clear_port_mappings().service_port_index(80)
        assert isinstance(result.error, NoPortMappingsError)

    def test_port_not_found(self):
        result = Docker().expose_port(80, 8080, 0, "tcp").service_port_index(9999)
        assert result.is_err()
        assert isinstance(result.error, PortNotFoundError)
        assert result.error.port == 9999

    def test_failures_are_lookup_category(self):
        assert Docker().service_port_index(1).error.category == ErrorCategory.LOOKUP
        assert Docker().expose_tcp_ports(2).service_port_index(1).error.category == ErrorCategory.LOOKUP

    def test_duplicate_container_port_returns_first(self):
        docker = Docker().expose_tcp_ports(80).expose_udp_ports(80)
        assert docker.service_port_index(80) == Ok(0)

    def test_matches_container_port_not_host_port(self):
        docker = Docker().expose_port(8080, 80, 0, "tcp")
        assert isinstance(docker.service_port_index(80).error, PortNotFoundError)

    def test_pattern_matching(self):
        docker = Docker().expose_tcp_ports(80, 443)
        match docker.service_port_index(443):
            case Ok(index):
                found = index
            case Err(_):
                found = None
        assert found == 1

    def test_unwrap_on_failure_raises(self):
        with pytest.raises(NoPortMappingsError):
            Docker().service_port_index(80).unwrap()

    def test_lookup_does_not_mutate(self):
        docker = Docker()
        docker.service_port_index(80)
        assert docker.port_mappings is None


class TestPortMappingFor:
    """Tests for port_mapping_for."""

    def test_returns_mapping(self):
        docker = Docker().expose_tcp_ports(80).expose_port(443, 0, 10443, "tcp")
        mapping = docker.port_mapping_for(443).unwrap()
        assert mapping.service_port == 10443

    def test_propagates_error(self):
        result = Docker().expose_tcp_ports(80).port_mapping_for(22)
        assert isinstance(result.error, PortNotFoundError)


class TestFluentChain:
    """A realistic definition built in one expression."""

    def test_full_chain(self):
        container = new_docker_container().add_volume("/var/log/web", "/logs", "RW")
        (
            container.docker.set_image("nginx:1.25")
            .use_bridged_network()
            .set_force_pull_image(True)
            .set_privileged(False)
            .expose_tcp_ports(80, 443)
            .add_parameter("label", "tier=web")
        )

        assert container.docker.image == "nginx:1.25"
        assert container.docker.network == "BRIDGE"
        assert container.docker.force_pull_image is True
        assert container.docker.privileged is False
        assert len(container.docker.port_mappings) == 2
        assert len(container.docker.parameters) == 1
        assert len(container.volumes) == 1

    def test_set_docker(self):
        docker = Docker().set_image("redis:7")
        container = Container(type="DOCKER").set_docker(docker)
        assert container.docker is docker
