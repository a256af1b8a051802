"""Result data model — what an evaluation produced, and whether it passed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple

Rule = Any


def is_error_marker(outcome: Any) -> bool:
    """True for outcomes that signal failure regardless of truthiness."""
    if outcome is False or outcome is None:
        return True
    if isinstance(outcome, BaseException):
        return True
    return isinstance(outcome, tuple) and bool(outcome) and outcome[0] == "error"


def outcome_passed(outcome: Any) -> bool:
    """Return True if *outcome* counts as a passing evaluation.

    ``True`` and ``("ok", ...)`` pass. Error markers (``False``, ``None``,
    exception instances, ``("error", ...)``) fail. Anything else passes when
    truthy.
    """
    if outcome is True:
        return True
    if is_error_marker(outcome):
        return False
    if isinstance(outcome, tuple) and outcome and outcome[0] == "ok":
        return True
    return bool(outcome)


@dataclass(frozen=True)
class Result:
    """Outcome of evaluating *rule* against *value*.

    ``clauses`` is only populated by traced evaluation, where it holds one
    child Result per operator clause in declaration order.
    """

    rule: Rule
    value: Any
    evaluation: Any
    clauses: Tuple["Result", ...] = field(default=(), compare=False)

    @property
    def passed(self) -> bool:
        return outcome_passed(self.evaluation)

    @property
    def failed_clauses(self) -> List["Result"]:
        return [r for r in self.clauses if not r.passed]
