from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2021-10"

_REGISTRY_ALIASES: dict[str, str] = {
    "url": "endpoint",
    "endpoint_url": "endpoint",
    "token": "auth_token",
}


@dataclass
class RegistryClientConfig:
    """Connection settings handed to the registry collaborator.

    The cache layer never reads these; they only shape how the HTTP
    collaborator reaches the service.
    """

    endpoint: str | None = field(
        default=None, metadata={"env": "SCHEMACACHE_ENDPOINT"}
    )
    api_version: str = field(
        default=DEFAULT_API_VERSION, metadata={"env": "SCHEMACACHE_API_VERSION"}
    )
    timeout: float = field(
        default=10.0, metadata={"env": "SCHEMACACHE_TIMEOUT"}
    )
    auth_token: str | None = field(
        default=None, metadata={"env": "SCHEMACACHE_AUTH_TOKEN"}
    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RegistryClientConfig":
        """Construct :class:`RegistryClientConfig` from a raw mapping."""

        normalized = _apply_aliases(data, _REGISTRY_ALIASES, logger_prefix="registry")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(normalized) - known)
        if unknown:
            raise TypeError(f"Unknown registry config keys: {', '.join(unknown)}")
        return cls(**normalized)


def find_config_file(cwd: Path | None = None) -> str | None:
    """Return the first discoverable configuration file in ``cwd``."""

    base = Path.cwd() if cwd is None else cwd

    for name in ("schemacache.yml", "schemacache.yaml"):
        candidate = base / name
        if candidate.is_file():
            return str(candidate)
    return None


def load_config(path: str) -> RegistryClientConfig:
    """Parse YAML and populate :class:`RegistryClientConfig`."""

    data = _read_config_mapping(path)
    section = data.get("registry", {})
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise TypeError("registry section must be a mapping")
    return RegistryClientConfig.from_mapping(section)


def apply_env_overrides(
    cfg: RegistryClientConfig, environ: Mapping[str, str] | None = None
) -> RegistryClientConfig:
    """Return a copy of ``cfg`` with values taken from the environment."""

    env = os.environ if environ is None else environ
    updates: dict[str, Any] = {}
    for f in fields(cfg):
        key = f.metadata.get("env")
        if not key or key not in env:
            continue
        raw = env[key]
        if f.name == "timeout":
            try:
                updates[f.name] = float(raw)
            except ValueError as exc:
                raise ValueError(f"{key} must be a number, got {raw!r}") from exc
        else:
            updates[f.name] = raw or None
    if not updates:
        return cfg
    logger.debug("Registry config overridden from environment: %s", sorted(updates))
    return replace(cfg, **updates)


def _read_config_mapping(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            try:
                data = yaml.safe_load(fh) or {}
            except yaml.YAMLError as exc:
                logger.error("Failed to parse configuration file %s: %s", path, exc)
                raise ValueError(f"Failed to parse configuration file {path}") from exc
    except (FileNotFoundError, OSError) as exc:
        logger.error("Unable to open configuration file %s: %s", path, exc)
        raise

    if not isinstance(data, dict):
        raise TypeError("Config must be a mapping")
    return data


def _apply_aliases(
    section: Mapping[str, Any], aliases: Mapping[str, str], *, logger_prefix: str
) -> dict[str, Any]:
    normalized = dict(section)
    for alias, canonical in aliases.items():
        if canonical in normalized:
            continue
        if alias in normalized:
            logger.warning(
                "%s: key '%s' is deprecated; use '%s' instead",
                logger_prefix,
                alias,
                canonical,
            )
            normalized[canonical] = normalized.pop(alias)
    return normalized


__all__ = [
    "DEFAULT_API_VERSION",
    "RegistryClientConfig",
    "apply_env_overrides",
    "find_config_file",
    "load_config",
]
