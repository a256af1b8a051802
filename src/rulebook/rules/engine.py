"""Core evaluation engine — classify a rule, evaluate it, wrap the result.

The engine is a pure dispatch layer: it never catches exceptions raised by
the rules it evaluates and keeps no state besides its (frozen) registry.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional, Tuple

from rulebook.operators.aggregatable import Aggregatable, is_operator_kind
from rulebook.rules.models import Result, Rule, outcome_passed
from rulebook.rules.registry import RuleTypeRegistry, build_registry
from rulebook.rules.types import OperatorRule, RuleType

COERCION_MODES: Tuple[str, ...] = ("truthy", "strict")


class InvalidRuleError(ValueError):
    """Raised when no registered rule type accepts the given rule."""

    def __init__(self, rule: Rule) -> None:
        self.rule = rule
        super().__init__(f"Invalid rule: {rule!r}")


class NonBooleanOutcomeError(TypeError):
    """Raised in strict mode when a clause outcome is not a bool."""

    def __init__(self, rule: Rule, outcome: Any) -> None:
        self.rule = rule
        self.outcome = outcome
        super().__init__(
            f"Clause {rule!r} returned {type(outcome).__name__} "
            f"{outcome!r}; strict mode requires a bool"
        )


class Engine:
    """Evaluates rules against values using a rule type registry."""

    def __init__(
        self,
        registry: Optional[RuleTypeRegistry] = None,
        *,
        coercion: str = "truthy",
    ) -> None:
        if coercion not in COERCION_MODES:
            raise ValueError(f"Unknown coercion mode: {coercion!r}")
        self.registry = registry if registry is not None else build_registry()
        self.coercion = coercion

    # ---- classification ----

    def rule_type(self, rule: Rule) -> Optional[RuleType]:
        return self.registry.type_for(rule)

    def is_rule(self, value: Any) -> bool:
        return self.registry.is_rule(value)

    def _type_or_raise(self, rule: Rule) -> RuleType:
        rule_type = self.registry.type_for(rule)
        if rule_type is None:
            raise InvalidRuleError(rule)
        return rule_type

    # ---- evaluation ----

    def evaluate(self, rule: Rule, value: Any) -> Any:
        """Evaluate *rule* against *value* and return the raw outcome."""
        return self._type_or_raise(rule).evaluate(rule, value, self)

    def result(self, rule: Rule, value: Any) -> Result:
        return Result(rule=rule, value=value, evaluation=self.evaluate(rule, value))

    def satisfies(self, rule: Rule, value: Any) -> bool:
        return outcome_passed(self.evaluate(rule, value))

    def trace(self, rule: Rule, value: Any) -> Result:
        """Evaluate like :meth:`result`, recording a child Result per clause.

        Operator clauses are all evaluated, in order, so the trace is
        complete even where plain evaluation would short-circuit.
        """
        rule_type = self._type_or_raise(rule)
        if not isinstance(rule_type, OperatorRule):
            return Result(rule=rule, value=value, evaluation=rule_type.evaluate(rule, value, self))

        children = tuple(self.trace(clause, value) for clause in rule.clauses)
        aggregate = rule.aggregator()
        evaluation = aggregate(self.coerce(c.rule, c.evaluation) for c in children)
        return Result(rule=rule, value=value, evaluation=evaluation, clauses=children)

    def coerce(self, rule: Rule, outcome: Any) -> bool:
        """Turn a clause outcome into the bool an aggregator consumes."""
        if isinstance(outcome, bool):
            return outcome
        if self.coercion == "strict":
            raise NonBooleanOutcomeError(rule, outcome)
        return outcome_passed(outcome)

    # ---- structure ----

    def number_of_clauses(self, rules: Any) -> int:
        return number_of_clauses(rules)


def number_of_clauses(rules: Any) -> int:
    """Count the leaf clauses of a rule, a list of rules, or an operator.

    Purely structural: nothing is evaluated.
    """
    if isinstance(rules, list):
        return sum(number_of_clauses(r) for r in rules)
    if isinstance(rules, tuple):
        if len(rules) == 2 and is_operator_kind(rules[0]):
            return number_of_clauses(list(rules[1]))
        return sum(number_of_clauses(r) for r in rules)
    if isinstance(rules, Aggregatable):
        return number_of_clauses(list(rules.clauses))
    return 1


# ---- process-wide default engine ----


@lru_cache(maxsize=None)
def default_engine() -> Engine:
    """The shared engine behind the module-level API, built on first use."""
    return Engine(build_registry())


def rule_type(rule: Rule) -> Optional[RuleType]:
    return default_engine().rule_type(rule)


def is_rule(value: Any) -> bool:
    return default_engine().is_rule(value)


def evaluate(rule: Rule, value: Any) -> Any:
    return default_engine().evaluate(rule, value)


def result(rule: Rule, value: Any) -> Result:
    return default_engine().result(rule, value)


def satisfies(rule: Rule, value: Any) -> bool:
    return default_engine().satisfies(rule, value)


def trace(rule: Rule, value: Any) -> Result:
    return default_engine().trace(rule, value)
