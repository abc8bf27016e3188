"""Local checks run before any cache lookup or registry call."""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any

from . import metrics as schema_metrics
from .errors import ValidationError
from .models import SchemaDescription, SerializationFormat

logger = logging.getLogger(__name__)


def _fail(field: str, message: str, value: Any = None) -> ValidationError:
    schema_metrics.record_validation_failure(field)
    logger.debug("Rejected schema request: %s", message)
    return ValidationError(field, message, value=value)


def _require_text(field: str, value: Any) -> str:
    if value is None:
        raise _fail(field, f"{field} must not be None")
    if not isinstance(value, str):
        raise _fail(field, f"{field} must be a string, got {type(value).__name__}", value)
    if not value:
        raise _fail(field, f"{field} must not be empty", value)
    return value


def parse_serialization_format(value: Any) -> SerializationFormat:
    """Return the :class:`SerializationFormat` named by ``value``.

    Matching is case-insensitive. Unknown names raise :class:`ValidationError`
    with the offending value in the message.
    """

    field = "serialization_format"
    if value is None:
        raise _fail(field, f"{field} must not be None")
    if isinstance(value, SerializationFormat):
        return value
    if not isinstance(value, str) or not value:
        raise _fail(field, f"{field} must be a non-empty string, got {value!r}", value)
    fmt = SerializationFormat.lookup(value)
    if fmt is None:
        supported = ", ".join(f.value for f in SerializationFormat)
        raise _fail(
            field,
            f"Unsupported serialization format {value!r}; expected one of: {supported}",
            value,
        )
    return fmt


def validate_description(description: SchemaDescription) -> SchemaDescription:
    """Check ``description`` and return it with its format parsed.

    The input is not modified; a copy carrying the
    :class:`SerializationFormat` member is returned so the content key and
    the registry call see one canonical spelling of the format.
    """

    if description is None:
        raise _fail("description", "description must not be None")
    _require_text("name", description.name)
    _require_text("group_name", description.group_name)
    _require_text("content", description.content)
    fmt = parse_serialization_format(description.serialization_format)
    if fmt is description.serialization_format:
        return description
    return replace(description, serialization_format=fmt)


def validate_schema_id(schema_id: Any) -> str:
    return _require_text("schema_id", schema_id)


__all__ = [
    "parse_serialization_format",
    "validate_description",
    "validate_schema_id",
]
