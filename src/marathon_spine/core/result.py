"""
Result envelope for consistent success/failure handling.

Provides a typed ``Result[T]`` so that expected failures, such as looking up
a port that was never exposed, come back as values instead of exceptions.

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions that callers might miss
    - **Pattern matching:** ``match`` on ``Ok(value)`` / ``Err(error)``
    - **Functional composition:** Chain with ``map`` / ``flat_map`` without
      nested try/except blocks

Examples:
    >>> from marathon_spine import new_docker_container
    >>> docker = new_docker_container().docker.expose_tcp_ports(80, 443)
    >>> match docker.service_port_index(443):
    ...     case Ok(index):
    ...         print(f"index: {index}")
    ...     case Err(error):
    ...         print(f"error: {error}")
    index: 1

    >>> docker.service_port_index(8080).unwrap_or(-1)
    -1

Guardrails:
    ❌ DON'T: Use unwrap() without checking is_ok() first
    ✅ DO: Use unwrap_or() or pattern matching for safe extraction

Tags:
    result-pattern, error-handling, functional-programming, marathon-spine
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform error if Err (no-op for Ok)."""
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    ``map`` and ``flat_map`` return the same Err unchanged, so an error
    flows through a chain of transformations untouched.
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the wrapped error."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Return the default."""
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the wrapped error."""
        return Err(f(self.error))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        to_dict = getattr(self.error, "to_dict", None)
        error = to_dict() if callable(to_dict) else {
            "error_type": type(self.error).__name__,
            "message": str(self.error),
        }
        return {"ok": False, "error": error}

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


__all__ = ["Result", "Ok", "Err"]
