"""Configuration loader with support for drop-in directories."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from promptline.config.defaults import DEFAULT_CONFIG_YAML
from promptline.config.schema import Config
from promptline.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "promptline" / "config.yaml"
DEFAULT_DROPIN_DIR = Path.home() / ".config" / "promptline" / "conf.d"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif key in result and isinstance(result[key], list) and isinstance(value, list):
            # For lists, extend rather than replace
            result[key] = result[key] + value
        else:
            result[key] = value

    return result


def _parse_yaml(text: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"{source}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping at the top level")
    return data


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}
    logger.debug("Loading configuration from %s", path)
    with open(path) as f:
        return _parse_yaml(f.read(), str(path))


def load_dropin_directory(dropin_dir: Path) -> dict[str, Any]:
    """Load and merge all YAML files from drop-in directory."""
    if not dropin_dir.is_dir():
        return {}

    result: dict[str, Any] = {}
    yaml_files = sorted(dropin_dir.glob("*.yaml")) + sorted(dropin_dir.glob("*.yml"))

    for yaml_file in yaml_files:
        data = load_yaml_file(yaml_file)
        result = deep_merge(result, data)

    return result


def build_config(data: dict[str, Any]) -> Config:
    """Validate merged configuration data on top of the defaults.

    Raises:
        ConfigError: If the data does not match the schema
    """
    merged = deep_merge(_parse_yaml(DEFAULT_CONFIG_YAML, "defaults"), data)
    try:
        return Config(**merged)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigError(f"invalid configuration: {problems}") from e


def load_config(
    config_path: Path | str | None = None,
    dropin_dir: Path | str | None = None,
) -> Config:
    """Load configuration from file and drop-in directory.

    Args:
        config_path: Path to main config file (default: ~/.config/promptline/config.yaml)
        dropin_dir: Path to drop-in directory (default: ~/.config/promptline/conf.d/)

    Returns:
        Merged configuration object

    Raises:
        ConfigError: If a file cannot be parsed or fails validation
    """
    # Resolve paths
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    elif isinstance(config_path, str):
        config_path = Path(config_path)

    if dropin_dir is None:
        dropin_dir = DEFAULT_DROPIN_DIR
    elif isinstance(dropin_dir, str):
        dropin_dir = Path(dropin_dir)

    main_config = load_yaml_file(config_path)
    dropin_config = load_dropin_directory(dropin_dir)
    return build_config(deep_merge(main_config, dropin_config))


def load_config_from_string(yaml_string: str) -> Config:
    """Load configuration from a YAML string (useful for testing)."""
    return build_config(_parse_yaml(yaml_string, "<string>"))
