import pytest

from schemacache.schema import (
    InMemoryRegistryService,
    NotFoundError,
    SerializationFormat,
    ServiceError,
)
from tests.schema.helpers import WHITESPACE_SCHEMA

AVRO = SerializationFormat.AVRO


@pytest.mark.asyncio
async def test_register_assigns_ids_and_versions():
    service = InMemoryRegistryService()

    first = await service.register("g", "n", AVRO, '{"type":"string"}')
    second = await service.register("g", "n", AVRO, '{"type":"int"}')
    other = await service.register("g", "m", AVRO, '{"type":"int"}')

    assert len(first.id) == 32
    assert first.id != second.id
    assert (first.version, second.version, other.version) == (1, 2, 1)


@pytest.mark.asyncio
async def test_same_content_resolves_to_existing_id():
    service = InMemoryRegistryService()

    first = await service.register("g", "n", AVRO, WHITESPACE_SCHEMA)
    again = await service.register("g", "n", AVRO, WHITESPACE_SCHEMA.replace("\n", ""))

    assert again == first


@pytest.mark.asyncio
async def test_get_by_id_returns_normalized_content():
    service = InMemoryRegistryService()
    props = await service.register("g", "n", AVRO, WHITESPACE_SCHEMA)

    schema = await service.get_by_id(props.id)

    assert schema.content == (
        '{"type":"record","name":"Test","fields":[{"name":"X","type":{"type":"string"}}]}'
    )
    assert schema.properties == props


@pytest.mark.asyncio
async def test_without_normalization_content_is_kept_verbatim():
    service = InMemoryRegistryService(normalize=False)
    props = await service.register("g", "n", AVRO, WHITESPACE_SCHEMA)

    schema = await service.get_by_id(props.id)

    assert schema.content == WHITESPACE_SCHEMA


@pytest.mark.asyncio
async def test_lookup_and_fetch_failures():
    service = InMemoryRegistryService()

    with pytest.raises(NotFoundError):
        await service.get_id("g", "n", AVRO, "{}")
    with pytest.raises(NotFoundError):
        await service.get_by_id("ffffffffffffffffffffffffffffffff")
    with pytest.raises(ServiceError) as excinfo:
        await service.register("g", "n", AVRO, "not json")
    assert excinfo.value.status_code == 400
