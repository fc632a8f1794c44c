"""Well-known tokens for container definitions.

The wire fields that carry these values are free-form strings, so the enums
here are conveniences, not a closed set. A newer orchestrator release may
accept a network mode this module does not list, and ``Docker.set_network``
takes any string.
"""

from __future__ import annotations

from enum import Enum


class ContainerType(str, Enum):
    """Containerizer used to launch the task."""

    DOCKER = "DOCKER"  # Docker engine
    MESOS = "MESOS"  # Universal containerizer


class NetworkMode(str, Enum):
    """Docker networking mode."""

    BRIDGE = "BRIDGE"  # Container ports mapped onto host ports
    HOST = "HOST"  # Share the host network namespace
    USER = "USER"  # User-defined / CNI network
    NONE = "NONE"  # No networking


PROTOCOL_TCP = "tcp"
PROTOCOL_UDP = "udp"


__all__ = ["ContainerType", "NetworkMode", "PROTOCOL_TCP", "PROTOCOL_UDP"]
