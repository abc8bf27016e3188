from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SerializationFormat(Enum):
    """Serialization formats the registry accepts."""

    AVRO = "avro"
    JSON = "json"

    @classmethod
    def lookup(cls, value: str | "SerializationFormat") -> Optional["SerializationFormat"]:
        """Case-insensitive match of ``value`` against the known formats."""

        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for fmt in cls:
            if fmt.value == normalized:
                return fmt
        return None

    @property
    def wire_name(self) -> str:
        """Spelling used in the ``serialization=`` content-type parameter."""

        return self.value.capitalize()


@dataclass(frozen=True)
class SchemaDescription:
    """A schema identified by its coordinates and textual content.

    Fields are typed loosely on purpose: callers hand over whatever they have
    and :func:`~schemacache.schema.validation.validate_description` rejects
    missing or unsupported values before any cache or network work happens.
    """

    group_name: Optional[str]
    name: Optional[str]
    serialization_format: Optional[str | SerializationFormat]
    content: Optional[str]


@dataclass(frozen=True)
class SchemaProperties:
    """Identity the service assigned to a registered schema."""

    id: str
    serialization_format: SerializationFormat
    version: Optional[int] = None

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "serialization_format": self.serialization_format.value,
            "version": self.version,
        }


@dataclass(frozen=True)
class Schema:
    """Schema content together with its registered identity."""

    content: str
    properties: SchemaProperties


__all__ = [
    "Schema",
    "SchemaDescription",
    "SchemaProperties",
    "SerializationFormat",
]
