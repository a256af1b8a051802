"""Rule type registry — the ordered list consulted to classify a rule."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional

from rulebook.rules.models import Rule
from rulebook.rules.types import FunctionRule, ModuleRule, OperatorRule, RuleType, StructRule

if TYPE_CHECKING:
    from rulebook.config.schema import RulebookConfig


class RegistryFrozenError(RuntimeError):
    """Raised when registering a rule type after the registry was frozen."""


class RuleTypeRegistry:
    """Ordered store of rule types. Earlier registrations win on overlap."""

    def __init__(self, rule_types: Optional[Iterable[RuleType]] = None) -> None:
        self._types: List[RuleType] = []
        self._frozen = False
        if rule_types is not None:
            self.register_many(rule_types)

    # ---- registration ----

    def register(self, rule_type: RuleType) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"registry is frozen, cannot add {rule_type!r}")
        if not isinstance(rule_type, RuleType):
            raise TypeError(f"not a RuleType instance: {rule_type!r}")
        self._types.append(rule_type)

    def register_many(self, rule_types: Iterable[RuleType]) -> None:
        for t in rule_types:
            self.register(t)

    def freeze(self) -> "RuleTypeRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ---- queries ----

    @property
    def rule_types(self) -> List[RuleType]:
        return list(self._types)

    def type_for(self, rule: Rule) -> Optional[RuleType]:
        """Return the first rule type accepting *rule*, or None."""
        for rule_type in self._types:
            if rule_type.is_rule(rule):
                return rule_type
        return None

    def is_rule(self, value: Rule) -> bool:
        return any(t.is_rule(value) for t in self._types)

    def __iter__(self) -> Iterator[RuleType]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


def default_rule_types() -> List[RuleType]:
    """Built-in rule types in priority order."""
    return [FunctionRule(), ModuleRule(), OperatorRule(), StructRule()]


def build_registry(config: Optional["RulebookConfig"] = None) -> RuleTypeRegistry:
    """Create a frozen registry: built-in types, then configured plugin types."""
    from rulebook.config.loader import load_rule_types

    registry = RuleTypeRegistry(default_rule_types())
    if config is not None:
        registry.register_many(load_rule_types(config.engine.rule_types))
    return registry.freeze()
