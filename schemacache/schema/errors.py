from __future__ import annotations

from typing import Any


class ValidationError(ValueError):
    """Raised when a request is malformed before it reaches the cache or network."""

    def __init__(self, field: str, message: str, *, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class SchemaRegistryError(RuntimeError):
    """Raised for failures reported by the registry service."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(SchemaRegistryError):
    """The registry has no schema for the requested id or content."""


class ServiceError(SchemaRegistryError):
    """Any other registry failure: rejected request, auth, transport fault."""


__all__ = [
    "NotFoundError",
    "SchemaRegistryError",
    "ServiceError",
    "ValidationError",
]
