from __future__ import annotations

import json

from schemacache.schema import (
    InMemoryRegistryService,
    Schema,
    SchemaDescription,
    SchemaProperties,
    SerializationFormat,
)

USER_SCHEMA = json.dumps(
    {
        "type": "record",
        "name": "User",
        "namespace": "com.example.schemaregistry.samples",
        "fields": [
            {"name": "name", "type": "string"},
            {"name": "favoriteNumber", "type": "int"},
        ],
    }
)

WHITESPACE_SCHEMA = (
    "{\n"
    '  "type": "record",\n'
    '  "name": "Test",\n'
    '  "fields": [{ "name": "X", "type": { "type": "string" } }]\n'
    "}\n"
)


def make_description(**overrides) -> SchemaDescription:
    fields = {
        "group_name": "test-group",
        "name": "user_schema",
        "serialization_format": "avro",
        "content": USER_SCHEMA,
    }
    fields.update(overrides)
    return SchemaDescription(**fields)


class CountingRegistryService:
    """In-memory registry that records every remote call."""

    def __init__(self, *, normalize: bool = True) -> None:
        self.inner = InMemoryRegistryService(normalize=normalize)
        self.calls: list[tuple[str, tuple]] = []

    @property
    def endpoint(self) -> str:
        return self.inner.endpoint

    def count(self, operation: str | None = None) -> int:
        if operation is None:
            return len(self.calls)
        return sum(1 for op, _ in self.calls if op == operation)

    async def register(
        self, group_name: str, name: str, serialization_format: SerializationFormat, content: str
    ) -> SchemaProperties:
        self.calls.append(("register", (group_name, name, serialization_format, content)))
        return await self.inner.register(group_name, name, serialization_format, content)

    async def get_id(
        self, group_name: str, name: str, serialization_format: SerializationFormat, content: str
    ) -> SchemaProperties:
        self.calls.append(("get_id", (group_name, name, serialization_format, content)))
        return await self.inner.get_id(group_name, name, serialization_format, content)

    async def get_by_id(self, schema_id: str) -> Schema:
        self.calls.append(("get_by_id", (schema_id,)))
        return await self.inner.get_by_id(schema_id)
