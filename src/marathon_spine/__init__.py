"""
marathon-spine: fluent builder for orchestrator container definitions.

Builds the ``container`` section of an application definition (image,
network mode, port mappings, volumes, docker parameters) and serializes it
to the JSON shape the orchestration API expects, omitting every field the
caller never touched.

Example::

    from marathon_spine import new_docker_container

    container = new_docker_container()
    container.docker.set_image("nginx:1.25").use_bridged_network().expose_tcp_ports(80, 443)
    container.docker.service_port_index(443)   # Ok(1)
    container.to_json()
"""

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
from marathon_spine.core.errors import (
    ContainerSpecError,
    MarathonSpineError,
    NoPortMappingsError,
    PortNotFoundError,
)
from marathon_spine.core.result import Err, Ok, Result

__version__ = "0.1.0"

__all__ = [
    "Container",
    "ContainerSpecError",
    "ContainerType",
    "Docker",
    "Err",
    "MarathonSpineError",
    "NetworkMode",
    "NoPortMappingsError",
    "Ok",
    "Parameter",
    "PortMapping",
    "PortNotFoundError",
    "PROTOCOL_TCP",
    "PROTOCOL_UDP",
    "Result",
    "Volume",
    "__version__",
    "new_docker_container",
]
