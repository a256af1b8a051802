"""Rule engine — result model, rule types, registry, dispatcher."""

from rulebook.rules.models import Result
from rulebook.rules.types import (
    FunctionRule,
    ModuleRule,
    OperatorRule,
    RuleType,
    StructRule,
    struct_rule,
)
from rulebook.rules.registry import (
    RegistryFrozenError,
    RuleTypeRegistry,
    build_registry,
    default_rule_types,
)
from rulebook.rules.engine import (
    Engine,
    InvalidRuleError,
    NonBooleanOutcomeError,
    default_engine,
    evaluate,
    is_rule,
    number_of_clauses,
    result,
    rule_type,
    satisfies,
    trace,
)

__all__ = [
    "Engine",
    "FunctionRule",
    "InvalidRuleError",
    "ModuleRule",
    "NonBooleanOutcomeError",
    "OperatorRule",
    "RegistryFrozenError",
    "Result",
    "RuleType",
    "RuleTypeRegistry",
    "StructRule",
    "build_registry",
    "default_engine",
    "default_rule_types",
    "evaluate",
    "is_rule",
    "number_of_clauses",
    "result",
    "rule_type",
    "satisfies",
    "struct_rule",
    "trace",
]
