"""Shared configuration and helpers for the schema registry client."""

from .config import (
    RegistryClientConfig,
    apply_env_overrides,
    find_config_file,
    load_config,
)

__all__ = [
    "RegistryClientConfig",
    "apply_env_overrides",
    "find_config_file",
    "load_config",
]
