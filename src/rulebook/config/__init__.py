"""Configuration loading, schema, and defaults."""

from rulebook.config.loader import ConfigError, load_config, resolve_import_path
from rulebook.config.schema import EngineConfig, OutputConfig, RulebookConfig

__all__ = [
    "ConfigError",
    "EngineConfig",
    "OutputConfig",
    "RulebookConfig",
    "load_config",
    "resolve_import_path",
]
