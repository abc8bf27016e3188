"""Content keys for the content -> id cache index."""

from __future__ import annotations

import json

from blake3 import blake3

from .models import SchemaDescription, SerializationFormat

__all__ = ["compute_content_key"]


def compute_content_key(description: SchemaDescription) -> str:
    """Return a stable key for the coordinates and content of ``description``.

    The four fields are JSON-encoded as a list before hashing so a delimiter
    inside any field cannot make two different descriptions collide. Content
    is hashed byte-for-byte; whitespace variants produce different keys.
    """

    fmt = description.serialization_format
    fmt_part = fmt.value if isinstance(fmt, SerializationFormat) else str(fmt).lower()
    payload = json.dumps(
        [description.group_name, description.name, fmt_part, description.content],
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")
    return f"blake3:{blake3(payload).hexdigest()}"
