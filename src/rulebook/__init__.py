"""rulebook — compose predicates, modules and operators into rules.

    >>> from rulebook import AllOf, AnyOf, evaluate
    >>> rule = AllOf(AnyOf(lambda v: v < 0, lambda v: v > 10), lambda v: v % 2 == 0)
    >>> evaluate(rule, 12)
    True
"""

__version__ = "1.0.0"

from rulebook.rules import (
    Engine,
    InvalidRuleError,
    NonBooleanOutcomeError,
    Result,
    RuleType,
    RuleTypeRegistry,
    evaluate,
    is_rule,
    number_of_clauses,
    result,
    rule_type,
    satisfies,
    struct_rule,
    trace,
)
from rulebook.operators import (
    Aggregatable,
    AllOf,
    AnyOf,
    NoneOf,
    Operator,
    UnsupportedCapabilityError,
    new_operator,
)

__all__ = [
    "Aggregatable",
    "AllOf",
    "AnyOf",
    "Engine",
    "InvalidRuleError",
    "NonBooleanOutcomeError",
    "NoneOf",
    "Operator",
    "Result",
    "RuleType",
    "RuleTypeRegistry",
    "UnsupportedCapabilityError",
    "__version__",
    "evaluate",
    "is_rule",
    "new_operator",
    "number_of_clauses",
    "result",
    "rule_type",
    "satisfies",
    "struct_rule",
    "trace",
]
