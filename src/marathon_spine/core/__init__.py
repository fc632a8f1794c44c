"""
Core primitives shared across marathon-spine: errors, results, logging, settings.
"""

from marathon_spine.core.errors import (
    ConfigError,
    ContainerSpecError,
    ErrorCategory,
    ErrorContext,
    MarathonSpineError,
    NoPortMappingsError,
    PortLookupError,
    PortNotFoundError,
)
from marathon_spine.core.result import Err, Ok, Result

__all__ = [
    "ConfigError",
    "ContainerSpecError",
    "Err",
    "ErrorCategory",
    "ErrorContext",
    "MarathonSpineError",
    "NoPortMappingsError",
    "Ok",
    "PortLookupError",
    "PortNotFoundError",
    "Result",
]
