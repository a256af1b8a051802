"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

Coercion = Literal["truthy", "strict"]
OutputFormat = Literal["terminal", "json"]


@dataclass
class EngineConfig:
    coercion: Coercion = "truthy"  # how clause outcomes become bools
    rule_types: List[str] = field(default_factory=list)  # "module:Class", lowest priority last


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_values: bool = True


@dataclass
class RulebookConfig:
    version: str = "1.0"
    engine: EngineConfig = field(default_factory=EngineConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
