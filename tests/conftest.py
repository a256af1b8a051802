"""Shared test fixtures — importable rule modules, clean env."""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep RULEBOOK_* variables from the outer environment out of tests."""
    for name in ("RULEBOOK_COERCION", "RULEBOOK_FORMAT", "RULEBOOK_RULE_TYPES"):
        monkeypatch.delenv(name, raising=False)


RULES_MODULE = "sample_rules"

RULES_SOURCE = textwrap.dedent("""\
    from rulebook import AllOf, AnyOf, NoneOf
    from rulebook.rules.types import RuleType


    def is_positive(value):
        return isinstance(value, (int, float)) and value > 0


    def is_even(value):
        return isinstance(value, int) and value % 2 == 0


    POSITIVE_EVEN = AllOf(is_positive, is_even)
    NOT_NEGATIVE = NoneOf(lambda v: isinstance(v, (int, float)) and v < 0)
    CLAUSES = [is_positive, AnyOf(is_even, is_positive)]
    COUNTS_ONE = AllOf(lambda v: 1)
    REPORTS_ERROR = AllOf(lambda v: ("error", "out of range"))
    NOT_A_RULE = "not a rule"


    class AcceptEverything(RuleType):
        name = "everything"

        def is_rule(self, value):
            return True

        def evaluate(self, rule, value, engine):
            return True
""")


@pytest.fixture
def rules_module(tmp_path: Path, monkeypatch) -> str:
    """Write an importable rules module and return its name."""
    (tmp_path / f"{RULES_MODULE}.py").write_text(RULES_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, RULES_MODULE, raising=False)
    return RULES_MODULE
