"""Container definition records and their fluent builder methods.

Pydantic v2 models describing the ``container`` section of an application
definition submitted to the orchestrator. Each builder method mutates the
record and returns it, so definitions read as one chained expression.

Partial Updates:
    The orchestrator treats an absent field as "keep the current value" and
    an explicit empty list as "remove all entries". Optional lists and
    booleans therefore default to ``None`` (unset) and the codec drops
    ``None`` on output. ``clear_volumes()`` and friends set ``[]`` so a
    caller can wipe entries that an earlier deployment created.

Key Concepts:
    Container: Top-level record (``type``, ``docker``, ``volumes``).
    Docker: Image, network, port mappings, parameters, privilege flags.
    Volume / PortMapping / Parameter: Leaf value records.

Example::

    container = new_docker_container()
    container.add_volume("/var/log/app", "/logs", "RW")
    container.docker.set_image("nginx:1.25").use_bridged_network().expose_tcp_ports(80, 443)
    body = container.to_json()

Tags:
    container, docker, builder, pydantic, wire-format
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    ValidationError,
    model_serializer,
)
from pydantic.alias_generators import to_camel

from marathon_spine.container.constants import (
    PROTOCOL_TCP,
    PROTOCOL_UDP,
    ContainerType,
    NetworkMode,
)
from marathon_spine.core.errors import ContainerSpecError, NoPortMappingsError, PortNotFoundError
from marathon_spine.core.logging import get_logger
from marathon_spine.core.result import Err, Ok, Result

logger = get_logger(__name__)


class _WireModel(BaseModel):
    """Shared config: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Fields left off the wire when they hold "" or 0
    omit_when_empty: ClassVar[tuple[str, ...]] = ()

    @model_serializer(mode="wrap")
    def _omit_empty_values(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name in self.omit_when_empty:
            for key in (name, to_camel(name)):
                if key in data and data[key] in ("", 0):
                    del data[key]
        return data

    def to_dict(self) -> dict[str, Any]:
        """Wire representation with unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Leaf records
# ---------------------------------------------------------------------------


class Volume(_WireModel):
    """A host path mounted into the container. No validation at this layer."""

    omit_when_empty = ("container_path", "host_path", "mode")

    container_path: str | None = None
    host_path: str | None = None
    mode: str | None = None  # e.g. RW / RO


class PortMapping(_WireModel):
    """Maps a container port onto the host and the service port range.

    ``hostPort`` and ``protocol`` are always sent; zero container and
    service ports are not.
    """

    omit_when_empty = ("container_port", "service_port")

    container_port: int = 0
    host_port: int = 0  # 0 asks the orchestrator to pick one
    service_port: int = 0  # 0 asks the orchestrator to pick one
    protocol: str = PROTOCOL_TCP


class Parameter(_WireModel):
    """One ``--key=value`` option for the docker run command line.

    Kept as an ordered list entry rather than a mapping because keys may
    repeat (``--label``, ``--env``) and the runtime applies them in order.
    """

    omit_when_empty = ("key", "value")

    key: str | None = None
    value: str | None = None


# ---------------------------------------------------------------------------
# Docker
# ---------------------------------------------------------------------------


class Docker(_WireModel):
    """Docker-specific part of a container definition."""

    omit_when_empty = ("image", "network")

    force_pull_image: bool | None = None
    image: str | None = None
    network: str | None = None
    parameters: list[Parameter] | None = None
    port_mappings: list[PortMapping] | None = None
    privileged: bool | None = None

    # -- flags -------------------------------------------------------------

    def set_force_pull_image(self, force_pull: bool) -> Docker:
        """Always pull the image before starting an instance (or explicitly never)."""
        self.force_pull_image = force_pull
        return self

    def set_privileged(self, privileged: bool) -> Docker:
        """Start the container with extended privileges (or explicitly without)."""
        self.privileged = privileged
        return self

    def set_image(self, image: str) -> Docker:
        self.image = image
        return self

    # -- networking --------------------------------------------------------

    def set_network(self, mode: str | NetworkMode) -> Docker:
        """Set the network mode. Any string is accepted; see :class:`NetworkMode`."""
        self.network = mode.value if isinstance(mode, NetworkMode) else mode
        return self

    def use_bridged_network(self) -> Docker:
        return self.set_network(NetworkMode.BRIDGE)

    def use_host_network(self) -> Docker:
        return self.set_network(NetworkMode.HOST)

    # -- port mappings -----------------------------------------------------

    def expose_tcp_ports(self, *ports: int) -> Docker:
        """Expose each container port over TCP with host and service ports left to the orchestrator."""
        for port in ports:
            self.expose_port(port, 0, 0, PROTOCOL_TCP)
        return self

    def expose_udp_ports(self, *ports: int) -> Docker:
        """Expose each container port over UDP with host and service ports left to the orchestrator."""
        for port in ports:
            self.expose_port(port, 0, 0, PROTOCOL_UDP)
        return self

    def expose_port(
        self,
        container_port: int,
        host_port: int = 0,
        service_port: int = 0,
        protocol: str = PROTOCOL_TCP,
    ) -> Docker:
        """Append one fully specified port mapping."""
        if self.port_mappings is None:
            self.clear_port_mappings()
        self.port_mappings.append(
            PortMapping(
                container_port=container_port,
                host_port=host_port,
                service_port=service_port,
                protocol=protocol,
            )
        )
        return self

    def clear_port_mappings(self) -> Docker:
        """Explicitly empty the port mappings.

        Use this to remove mappings from an application that already has
        some; leaving the field unset keeps the current value.
        """
        self.port_mappings = []
        return self

    # -- parameters --------------------------------------------------------

    def add_parameter(self, key: str, value: str) -> Docker:
        """Add an option to the docker run command line."""
        if self.parameters is None:
            self.clear_parameters()
        self.parameters.append(Parameter(key=key, value=value))
        return self

    def add_parameters(self, pairs: Iterable[tuple[str, str]]) -> Docker:
        """Append ``(key, value)`` pairs in order; repeated keys are kept.

        The list is materialized even when ``pairs`` is empty.
        """
        if self.parameters is None:
            self.clear_parameters()
        for key, value in pairs:
            self.add_parameter(key, value)
        return self

    def clear_parameters(self) -> Docker:
        """Explicitly empty the parameters (unset keeps the current value)."""
        self.parameters = []
        return self

    # -- lookups -----------------------------------------------------------

    def service_port_index(self, port: int) -> Result[int]:
        """Find the index of the first mapping whose container port is ``port``.

        The index lines up with the application's service port list, which
        is how callers turn a container port into the port that
        service discovery advertises.

        Returns:
            ``Ok(index)``, ``Err(NoPortMappingsError)`` when the list is unset
            or empty, or ``Err(PortNotFoundError)`` when nothing matches.
        """
        if not self.port_mappings:
            logger.debug("service_port_lookup_failed", port=port, reason="no_port_mappings")
            return Err(NoPortMappingsError(port))

        for index, mapping in enumerate(self.port_mappings):
            if mapping.container_port == port:
                return Ok(index)

        logger.debug(
            "service_port_lookup_failed",
            port=port,
            reason="port_not_found",
            mappings=len(self.port_mappings),
        )
        return Err(PortNotFoundError(port))

    def port_mapping_for(self, port: int) -> Result[PortMapping]:
        """Like :meth:`service_port_index` but returns the mapping itself."""
        return self.service_port_index(port).map(lambda index: self.port_mappings[index])


# ---------------------------------------------------------------------------
# Container
# ---------------------------------------------------------------------------


class Container(_WireModel):
    """Top-level container definition of an application."""

    omit_when_empty = ("type",)

    type: str | None = None
    docker: Docker | None = None
    volumes: list[Volume] | None = None

    def set_docker(self, docker: Docker) -> Container:
        self.docker = docker
        return self

    def add_volume(self, host_path: str, container_path: str, mode: str) -> Container:
        """Attach a volume to the container.

        Args:
            host_path: Path on the docker host to map
            container_path: Path inside the container where the host path is mounted
            mode: Mount mode token (e.g. RW / RO)
        """
        if self.volumes is None:
            self.clear_volumes()
        self.volumes.append(
            Volume(container_path=container_path, host_path=host_path, mode=mode)
        )
        return self

    def clear_volumes(self) -> Container:
        """Explicitly empty the volumes.

        Use this to remove volumes from an application that already has
        them; leaving the field unset keeps the current value.
        """
        self.volumes = []
        return self

    # -- codec -------------------------------------------------------------

    def to_json(self, indent: int | None = None) -> str:
        """JSON request body for this container definition."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Container:
        """Parse a wire object. Absent keys stay unset, ``[]`` stays explicitly empty."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ContainerSpecError(
                f"Invalid container definition: {exc.error_count()} validation error(s)",
                cause=exc,
            ) from exc

    @classmethod
    def from_json(cls, text: str | bytes) -> Container:
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise ContainerSpecError(
                f"Invalid container definition: {exc.error_count()} validation error(s)",
                cause=exc,
            ) from exc


def new_docker_container() -> Container:
    """Create a docker-typed container with an empty Docker record and no volumes set."""
    return Container(type=ContainerType.DOCKER.value, docker=Docker())


__all__ = [
    "Container",
    "Docker",
    "Parameter",
    "PortMapping",
    "Volume",
    "new_docker_container",
]
