"""Operators — aggregation capability and built-in operators."""

from rulebook.operators.aggregatable import (
    Aggregatable,
    Operator,
    UnsupportedCapabilityError,
    aggregator,
    clauses,
    clauses_or_none,
    is_operator_kind,
    new_operator,
    rule_label,
)
from rulebook.operators.builtin import (
    DEFAULT_OPERATORS,
    OPERATORS_BY_NAME,
    AllOf,
    AnyOf,
    NoneOf,
)

__all__ = [
    "Aggregatable",
    "AllOf",
    "AnyOf",
    "DEFAULT_OPERATORS",
    "NoneOf",
    "OPERATORS_BY_NAME",
    "Operator",
    "UnsupportedCapabilityError",
    "aggregator",
    "clauses",
    "clauses_or_none",
    "is_operator_kind",
    "new_operator",
    "rule_label",
]
