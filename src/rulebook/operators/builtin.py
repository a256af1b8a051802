"""Built-in operators — all, any, none."""

from __future__ import annotations

from typing import Dict, Iterable, List, Type

from rulebook.operators.aggregatable import Operator


def none_true(outcomes: Iterable[bool]) -> bool:
    """Logical NOR: True when no outcome is true."""
    return not any(outcomes)


class AllOf(Operator, aggregator=all):
    """Passes when every clause passes. Empty: True."""


class AnyOf(Operator, aggregator=any):
    """Passes when at least one clause passes. Empty: False."""


class NoneOf(Operator, aggregator=none_true):
    """Passes when no clause passes. Empty: True."""


DEFAULT_OPERATORS: List[Type[Operator]] = [AllOf, AnyOf, NoneOf]

OPERATORS_BY_NAME: Dict[str, Type[Operator]] = {
    "all": AllOf,
    "any": AnyOf,
    "none": NoneOf,
}
