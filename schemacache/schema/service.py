from __future__ import annotations

"""Registry service collaborators.

The cache-through client talks to the registry only through
:class:`RegistryService`. :class:`InMemoryRegistryService` is a process-local
implementation used offline and in tests; the HTTP binding lives in
:mod:`schemacache.schema.http_service`.
"""

import asyncio
from dataclasses import dataclass
import json
import logging
from typing import Dict, Protocol
import uuid

from .errors import NotFoundError, ServiceError
from .models import Schema, SchemaProperties, SerializationFormat

logger = logging.getLogger(__name__)


class RegistryService(Protocol):
    """Remote operations the client consumes."""

    async def register(
        self,
        group_name: str,
        name: str,
        serialization_format: SerializationFormat,
        content: str,
    ) -> SchemaProperties:
        ...

    async def get_id(
        self,
        group_name: str,
        name: str,
        serialization_format: SerializationFormat,
        content: str,
    ) -> SchemaProperties:
        ...

    async def get_by_id(self, schema_id: str) -> Schema:
        ...


@dataclass
class _StoredSchema:
    group_name: str
    name: str
    serialization_format: SerializationFormat
    content: str
    version: int

    def properties(self, schema_id: str) -> SchemaProperties:
        return SchemaProperties(
            id=schema_id,
            serialization_format=self.serialization_format,
            version=self.version,
        )


class InMemoryRegistryService:
    """Process-local registry with the service's id and version rules.

    Content is stored in canonical form when ``normalize`` is true: JSON
    documents are re-serialized without insignificant whitespace, so
    :meth:`get_by_id` may return a rewrite of what was registered.
    Registering content that is already stored under the same coordinates
    returns the existing id.
    """

    def __init__(self, *, normalize: bool = True) -> None:
        self._normalize = normalize
        self._by_id: Dict[str, _StoredSchema] = {}
        self._versions: Dict[tuple[str, str], int] = {}
        self._ids_by_content: Dict[tuple[str, str, SerializationFormat, str], str] = {}

    @property
    def endpoint(self) -> str:
        return "memory://"

    async def register(
        self,
        group_name: str,
        name: str,
        serialization_format: SerializationFormat,
        content: str,
    ) -> SchemaProperties:
        await asyncio.sleep(0)
        stored_content = self._canonical(content)
        key = (group_name, name, serialization_format, stored_content)
        existing = self._ids_by_content.get(key)
        if existing is not None:
            return self._by_id[existing].properties(existing)

        version = self._versions.get((group_name, name), 0) + 1
        self._versions[(group_name, name)] = version
        schema_id = uuid.uuid4().hex
        self._by_id[schema_id] = _StoredSchema(
            group_name=group_name,
            name=name,
            serialization_format=serialization_format,
            content=stored_content,
            version=version,
        )
        self._ids_by_content[key] = schema_id
        logger.debug(
            "Registered %s/%s version %d as %s", group_name, name, version, schema_id
        )
        return self._by_id[schema_id].properties(schema_id)

    async def get_id(
        self,
        group_name: str,
        name: str,
        serialization_format: SerializationFormat,
        content: str,
    ) -> SchemaProperties:
        await asyncio.sleep(0)
        key = (group_name, name, serialization_format, self._canonical(content))
        schema_id = self._ids_by_content.get(key)
        if schema_id is None:
            raise NotFoundError(
                f"No schema registered as {group_name}/{name} with matching content",
                status_code=404,
            )
        return self._by_id[schema_id].properties(schema_id)

    async def get_by_id(self, schema_id: str) -> Schema:
        await asyncio.sleep(0)
        stored = self._by_id.get(schema_id)
        if stored is None:
            raise NotFoundError(f"Schema id {schema_id!r} not found", status_code=404)
        return Schema(content=stored.content, properties=stored.properties(schema_id))

    async def close(self) -> None:
        return None

    def _canonical(self, content: str) -> str:
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ServiceError(f"Invalid schema content: {exc}", status_code=400) from exc
        if not self._normalize:
            return content
        return json.dumps(parsed, ensure_ascii=False, separators=(",", ":"))


__all__ = ["InMemoryRegistryService", "RegistryService"]
