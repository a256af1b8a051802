"""Load and merge configuration from .rulebook.toml and env vars."""

from __future__ import annotations

import dataclasses
import importlib
import os
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from rulebook.config.schema import EngineConfig, OutputConfig, RulebookConfig

CONFIG_FILENAME = ".rulebook.toml"


class ConfigError(Exception):
    """Raised when config is malformed or references something unloadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: RulebookConfig) -> None:
    """Apply RULEBOOK_* environment variable overrides."""
    if val := os.environ.get("RULEBOOK_COERCION"):
        cfg.engine.coercion = val  # type: ignore[assignment]
    if val := os.environ.get("RULEBOOK_FORMAT"):
        cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("RULEBOOK_RULE_TYPES"):
        cfg.engine.rule_types.extend(p.strip() for p in val.split(",") if p.strip())


def _validate(cfg: RulebookConfig) -> None:
    if cfg.engine.coercion not in ("truthy", "strict"):
        raise ConfigError(f"Invalid coercion mode: {cfg.engine.coercion}")
    if cfg.output.format not in ("terminal", "json"):
        raise ConfigError(f"Invalid output format: {cfg.output.format}")
    if not isinstance(cfg.engine.rule_types, list):
        raise ConfigError("engine.rule_types must be a list of import paths")


def load_config(root: Path, config_override: Optional[str] = None) -> RulebookConfig:
    """Load, validate, and return a RulebookConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = RulebookConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = RulebookConfig(
                version=raw.get("version", "1.0"),
                engine=_build_section(raw, EngineConfig, "engine"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except (TypeError, AttributeError) as exc:
            raise ConfigError(f"Malformed config in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg


# ---- import paths ----


def resolve_import_path(path: str) -> Any:
    """Import the object named by ``"package.module:attr"``.

    Dotted attributes after the colon are followed (``mod:Class.attr``).
    A path without a colon imports and returns the module itself.
    """
    module_name, _, attr_path = path.partition(":")
    if not module_name:
        raise ConfigError(f"Invalid import path: {path!r}")
    try:
        obj = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import {module_name!r}: {exc}") from exc

    for part in filter(None, attr_path.split(".")):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigError(f"{path!r}: no attribute {part!r}") from exc
    return obj


def load_rule_types(paths: Iterable[str]) -> List[Any]:
    """Resolve plugin rule types, instantiating classes. Order is kept."""
    from rulebook.rules.types import RuleType

    loaded: List[RuleType] = []
    for path in paths:
        obj = resolve_import_path(path)
        if isinstance(obj, type) and issubclass(obj, RuleType):
            obj = obj()
        if not isinstance(obj, RuleType):
            raise ConfigError(f"{path!r} is not a RuleType")
        loaded.append(obj)
    return loaded
