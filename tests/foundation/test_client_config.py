import logging
import textwrap

import pytest

from schemacache.foundation.config import (
    DEFAULT_API_VERSION,
    RegistryClientConfig,
    apply_env_overrides,
    find_config_file,
    load_config,
)


def _write(tmp_path, body: str):
    path = tmp_path / "schemacache.yml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def test_load_config_reads_registry_section(tmp_path):
    path = _write(
        tmp_path,
        """
        registry:
          endpoint: https://example.com/schemaregistry/
          timeout: 2.5
          api_version: "2022-10"
        """,
    )

    cfg = load_config(str(path))

    assert cfg.endpoint == "https://example.com/schemaregistry/"
    assert cfg.timeout == 2.5
    assert cfg.api_version == "2022-10"
    assert cfg.auth_token is None


def test_missing_section_uses_defaults(tmp_path):
    path = _write(tmp_path, "other: {}\n")

    cfg = load_config(str(path))

    assert cfg == RegistryClientConfig()
    assert cfg.api_version == DEFAULT_API_VERSION


def test_deprecated_alias_is_accepted_with_warning(tmp_path, caplog):
    path = _write(
        tmp_path,
        """
        registry:
          url: https://example.com/
        """,
    )

    with caplog.at_level(logging.WARNING):
        cfg = load_config(str(path))

    assert cfg.endpoint == "https://example.com/"
    assert "deprecated" in caplog.text


def test_unknown_keys_are_rejected(tmp_path):
    path = _write(
        tmp_path,
        """
        registry:
          endpont: https://example.com/
        """,
    )

    with pytest.raises(TypeError, match="endpont"):
        load_config(str(path))


def test_malformed_yaml_raises_value_error(tmp_path):
    path = _write(tmp_path, "registry: [unclosed\n")

    with pytest.raises(ValueError):
        load_config(str(path))


@pytest.mark.parametrize("body", ["- a\n- b\n", "registry: 3\n"])
def test_non_mapping_documents_raise_type_error(tmp_path, body):
    path = _write(tmp_path, body)

    with pytest.raises(TypeError):
        load_config(str(path))


def test_find_config_file(tmp_path):
    assert find_config_file(tmp_path) is None
    path = tmp_path / "schemacache.yaml"
    path.write_text("registry: {}\n", encoding="utf-8")

    assert find_config_file(tmp_path) == str(path)


def test_env_overrides_take_precedence():
    cfg = RegistryClientConfig(endpoint="https://file.example.com/")

    updated = apply_env_overrides(
        cfg,
        {
            "SCHEMACACHE_ENDPOINT": "https://env.example.com/",
            "SCHEMACACHE_TIMEOUT": "3",
            "SCHEMACACHE_AUTH_TOKEN": "tok",
        },
    )

    assert updated.endpoint == "https://env.example.com/"
    assert updated.timeout == 3.0
    assert updated.auth_token == "tok"
    assert cfg.endpoint == "https://file.example.com/"


def test_env_overrides_without_matches_return_same_object():
    cfg = RegistryClientConfig()

    assert apply_env_overrides(cfg, {}) is cfg


def test_invalid_timeout_in_env():
    with pytest.raises(ValueError, match="SCHEMACACHE_TIMEOUT"):
        apply_env_overrides(RegistryClientConfig(), {"SCHEMACACHE_TIMEOUT": "soon"})
