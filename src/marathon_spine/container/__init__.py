"""Container definition builder.

Related Modules:
    - :mod:`marathon_spine.container.models` - Records and builder methods
    - :mod:`marathon_spine.container.constants` - Network modes, protocols, container types
    - :mod:`marathon_spine.cli` - ``marathon-spine render`` / ``port-index``
"""

from marathon_spine.container.constants import (
    PROTOCOL_TCP,
    PROTOCOL_UDP,
    ContainerType,
    NetworkMode,
)
from marathon_spine.container.models import (
    Container,
    Docker,
    Parameter,
    PortMapping,
    Volume,
    new_docker_container,
)

__all__ = [
    "Container",
    "ContainerType",
    "Docker",
    "NetworkMode",
    "Parameter",
    "PortMapping",
    "PROTOCOL_TCP",
    "PROTOCOL_UDP",
    "Volume",
    "new_docker_container",
]
