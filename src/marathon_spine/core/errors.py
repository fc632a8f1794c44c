"""
Structured error types for marathon-spine.

Provides a small hierarchy of typed errors with a category and structured
context, so callers can log, route, and render failures without parsing
message strings.

Manifesto:
    - **Typed Error Hierarchy:** Lookup, validation, and config failures are
      distinct classes, not one generic exception
    - **Errors as values:** Port lookups return these inside ``Err`` rather
      than raising them (see :mod:`marathon_spine.core.result`)
    - **Rich Context:** Errors carry the field and port that failed
    - **Error Chaining:** Codec errors keep the pydantic error as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                  MarathonSpineError                       │
        │              (category, context, cause)                   │
        ├──────────────────────────────────────────────────────────┤
        │                                                           │
        │  PortLookupError        ContainerSpecError   ConfigError  │
        │  (LOOKUP)               (VALIDATION)         (CONFIG)     │
        │       │                                                   │
        │  NoPortMappingsError                                      │
        │  PortNotFoundError                                        │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = PortNotFoundError(9999)
    >>> error.category.value
    'LOOKUP'
    >>> error.port
    9999
    >>> error.to_dict()["context"]
    {'field': 'portMappings', 'port': 9999}

Tags:
    error-handling, exception-hierarchy, error-context, marathon-spine
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    LOOKUP = "LOOKUP"  # Query against a built record found nothing
    VALIDATION = "VALIDATION"  # Malformed wire payload
    CONFIG = "CONFIG"  # Invalid settings
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        field: Wire name of the record field involved (e.g. ``portMappings``)
        port: Container port that was being looked up
        metadata: Additional key-value pairs
    """

    field: str | None = None
    port: int | None = None
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging, dropping unset keys."""
        result: dict[str, Any] = {}
        for key in ["field", "port"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class MarathonSpineError(Exception):
    """
    Base exception for all marathon-spine errors.

    Subclasses set ``default_category`` so callers can route on
    ``error.category`` without isinstance ladders.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> MarathonSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ContainerSpecError("bad payload").with_context(source="app.json")
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class PortLookupError(MarathonSpineError):
    """A service port lookup against a Docker record failed."""

    default_category = ErrorCategory.LOOKUP


class NoPortMappingsError(PortLookupError):
    """The port mapping list is unset or empty, so there is nothing to search."""

    def __init__(self, port: int | None = None):
        self.port = port
        super().__init__(
            "The docker record does not contain any port mappings to search",
            context=ErrorContext(field="portMappings", port=port),
        )


class PortNotFoundError(PortLookupError):
    """No port mapping exposes the requested container port."""

    def __init__(self, port: int):
        self.port = port
        super().__init__(
            f"Container port {port} was not found in the port mappings",
            context=ErrorContext(field="portMappings", port=port),
        )


# =============================================================================
# VALIDATION / CONFIG ERRORS
# =============================================================================


class ContainerSpecError(MarathonSpineError):
    """A wire payload could not be parsed into a container record."""

    default_category = ErrorCategory.VALIDATION


class ConfigError(MarathonSpineError):
    """Configuration value is invalid."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(
            message or f"Invalid configuration for {key}: {value!r}",
            context=ErrorContext(metadata={"key": key}),
        )


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "MarathonSpineError",
    "PortLookupError",
    "NoPortMappingsError",
    "PortNotFoundError",
    "ContainerSpecError",
    "ConfigError",
]
