"""Configuration loading and schema definitions."""

from promptline.config.loader import load_config, load_config_from_string
from promptline.config.schema import Config

__all__ = [
    "Config",
    "load_config",
    "load_config_from_string",
]
