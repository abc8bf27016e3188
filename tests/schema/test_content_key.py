from schemacache.schema import SerializationFormat, compute_content_key, validate_description
from tests.schema.helpers import WHITESPACE_SCHEMA, make_description


def _key(**overrides) -> str:
    return compute_content_key(validate_description(make_description(**overrides)))


def test_identical_descriptions_share_a_key():
    assert _key() == _key()
    assert _key(serialization_format="AVRO") == _key(
        serialization_format=SerializationFormat.AVRO
    )
    assert _key().startswith("blake3:")


def test_every_coordinate_contributes():
    base = _key()
    assert _key(group_name="other") != base
    assert _key(name="other") != base
    assert _key(serialization_format="json") != base
    assert _key(content='{"type":"int"}') != base


def test_whitespace_in_content_is_not_normalized():
    compact = '{"type":"record","name":"Test","fields":[{"name":"X","type":{"type":"string"}}]}'
    assert _key(content=WHITESPACE_SCHEMA) != _key(content=compact)


def test_field_boundaries_cannot_be_shifted():
    assert _key(group_name="a|b", name="c") != _key(group_name="a", name="b|c")
    assert _key(group_name="a\x1fb", name="c") != _key(group_name="a", name="b\x1fc")
