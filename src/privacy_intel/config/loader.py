"""
Configuration loader with YAML file support and environment variable overrides.

Sources, lowest to highest priority:
1. Defaults from settings.py
2. YAML configuration file
3. Environment variables named PRIVACY_INTEL__{SECTION}__{KEY}

Nested sections use additional separators, e.g.
PRIVACY_INTEL__ANALYSIS__VALIDATORS__BLOCKING=true
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from privacy_intel.config.settings import Settings
from privacy_intel.core.exceptions import ConfigurationError

ENV_PREFIX = "PRIVACY_INTEL"

_settings_instance: Settings | None = None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base, recursing into nested mappings."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _parse_env_value(value: str) -> Any:
    """
    Parse an environment variable string into a Python value.

    Booleans and null literals are recognized; numbers are left to
    pydantic, which coerces numeric strings for int/float fields and
    keeps them intact for str fields.
    """
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    if lowered in ("none", "null"):
        return None
    return value


def _load_env_overrides(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Collect {PREFIX}__SECTION__KEY variables into a nested dictionary."""
    overrides: dict[str, Any] = {}
    prefix_with_sep = f"{prefix}__"

    for key, value in os.environ.items():
        if not key.startswith(prefix_with_sep):
            continue

        key_path = key[len(prefix_with_sep):].lower().split("__")
        if len(key_path) < 2:
            continue

        current = overrides
        for part in key_path[:-1]:
            current = current.setdefault(part, {})
        current[key_path[-1]] = _parse_env_value(value)

    return overrides


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load configuration from a YAML file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    if not path.exists():
        raise ConfigurationError(
            "Configuration file not found", details={"path": str(path)})

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML: {e}", details={"path": str(path)}) from e

    if content is None:
        return {}

    if not isinstance(content, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping, got: {type(content).__name__}",
            details={"path": str(path)},
        )

    return content


def load_config(
    config_path: Path | str | None = None,
    env_prefix: str = ENV_PREFIX,
) -> Settings:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to YAML configuration file. If None, uses defaults only.
        env_prefix: Prefix for environment variables

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If the file is invalid or values fail validation
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_data = _deep_merge(config_data, _load_yaml_file(Path(config_path)))

    config_data = _deep_merge(config_data, _load_env_overrides(env_prefix))

    try:
        return Settings(**config_data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            details={"errors": [err["loc"] for err in e.errors()]},
        ) from e


def get_settings(
    config_path: Path | str | None = None,
    reload: bool = False,
) -> Settings:
    """
    Get the process-wide Settings instance, loading it on first use.

    When no path is given, the default search locations are tried.
    """
    global _settings_instance

    if _settings_instance is None or reload:
        _settings_instance = load_config(config_path or get_default_config_path())

    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings instance (used by tests)."""
    global _settings_instance
    _settings_instance = None
    get_default_config_path.cache_clear()


@lru_cache(maxsize=1)
def get_default_config_path() -> Path | None:
    """
    Find the default configuration file path.

    Searches for config.yaml in:
    1. Current working directory
    2. ./config/
    3. ~/.privacy_intel/
    """
    search_paths = [
        Path.cwd() / "config.yaml",
        Path.cwd() / "config" / "config.yaml",
        Path.home() / ".privacy_intel" / "config.yaml",
    ]

    for path in search_paths:
        if path.exists():
            return path

    return None
