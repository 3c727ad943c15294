"""Exception hierarchy for search tool failures.

Callers can tell the three failure kinds apart by type:

* :class:`ValidationError` - bad tool input, raised before any network activity.
* :class:`TransportError` - network, proxy, timeout or header generation failure.
* :class:`BackendError` - the search backend answered, but unusably
  (rate limited upstream, malformed payload).

None of them are retried internally.
"""

from __future__ import annotations

from typing import Any


class ToolError(Exception):
    """Base class for all tool errors."""


class ValidationError(ToolError):
    """Raised when tool input violates the input schema."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    @classmethod
    def from_pydantic(cls, error: Any, default_field: str = "input") -> ValidationError:
        """Build from a pydantic ``ValidationError``, naming its first failing field."""

        first = error.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or default_field
        return cls(field, first["msg"])


class TransportError(ToolError):
    """Raised when a request could not be delivered or answered."""


class BackendError(ToolError):
    """Raised when the search backend reports a failure."""


class SerializationError(ToolError):
    """Raised when a snapshot cannot be produced or restored."""
