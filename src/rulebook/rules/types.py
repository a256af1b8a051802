"""Rule types — how a value is recognised as a rule and evaluated.

Each rule type answers two questions: ``is_rule(value)`` (is this value a
rule of my kind?) and ``evaluate(rule, value, engine)``. The engine asks the
registered types in priority order and the first type that accepts a value
owns it.
"""

from __future__ import annotations

import inspect
from functools import singledispatch
from typing import TYPE_CHECKING, Any

from rulebook.operators.aggregatable import Aggregatable
from rulebook.rules.models import Rule

if TYPE_CHECKING:
    from rulebook.rules.engine import Engine


def accepts_one_argument(func: Any) -> bool:
    """Return True if *func* can be called with exactly one positional arg."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins carry no signature; assume they are usable.
        return True
    try:
        sig.bind(None)
    except TypeError:
        return False
    return True


class RuleType:
    """Base class for rule types. Subclasses override both methods."""

    name: str = "rule"

    def is_rule(self, value: Any) -> bool:
        return False

    def evaluate(self, rule: Rule, value: Any, engine: "Engine") -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FunctionRule(RuleType):
    """A plain single-argument callable: ``lambda v: v > 0``."""

    name = "function"

    def is_rule(self, value: Any) -> bool:
        if not callable(value) or inspect.isclass(value):
            return False
        if isinstance(value, Aggregatable):
            return False
        return accepts_one_argument(value)

    def evaluate(self, rule: Rule, value: Any, engine: "Engine") -> Any:
        return rule(value)


class ModuleRule(RuleType):
    """A module or class exposing its own ``evaluate(value)``."""

    name = "module"

    def is_rule(self, value: Any) -> bool:
        if inspect.isclass(value):
            if issubclass(value, Aggregatable):
                return False
        elif not inspect.ismodule(value):
            return False

        evaluate = getattr(value, "evaluate", None)
        if evaluate is None or not callable(evaluate):
            return False
        return accepts_one_argument(evaluate)

    def evaluate(self, rule: Rule, value: Any, engine: "Engine") -> Any:
        return rule.evaluate(value)


class OperatorRule(RuleType):
    """Any Aggregatable: evaluate clauses recursively, fold with aggregator."""

    name = "operator"

    def is_rule(self, value: Any) -> bool:
        return isinstance(value, Aggregatable)

    def evaluate(self, rule: Rule, value: Any, engine: "Engine") -> Any:
        aggregate = rule.aggregator()
        return aggregate(
            engine.coerce(clause, engine.evaluate(clause, value))
            for clause in rule.clauses
        )


@singledispatch
def struct_rule(rule: Any, value: Any) -> Any:
    """Evaluate a data value that has rule behaviour attached to its type.

    Attach behaviour with ``@struct_rule.register(MyType)``; the registered
    function receives ``(rule, value)``.
    """
    raise NotImplementedError(f"no rule behaviour registered for {type(rule).__name__}")


class StructRule(RuleType):
    """Arbitrary values whose type registered an implementation of struct_rule."""

    name = "struct"

    def is_rule(self, value: Any) -> bool:
        return struct_rule.dispatch(type(value)) is not struct_rule.dispatch(object)

    def evaluate(self, rule: Rule, value: Any, engine: "Engine") -> Any:
        return struct_rule(rule, value)
