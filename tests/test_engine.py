"""Tests for the engine — dispatch, recursive evaluation, results, counting."""

from collections.abc import Mapping
from dataclasses import FrozenInstanceError

import pytest

from rulebook import (
    AllOf,
    AnyOf,
    Engine,
    InvalidRuleError,
    NonBooleanOutcomeError,
    NoneOf,
    Operator,
    Result,
    evaluate,
    is_rule,
    number_of_clauses,
    result,
    satisfies,
    trace,
)


def is_list(value):
    return isinstance(value, list)


def is_map(value):
    return isinstance(value, Mapping)


def is_string(value):
    return isinstance(value, str)


def is_integer(value):
    return isinstance(value, int) and not isinstance(value, bool)


def always_true(_value):
    return True


def always_false(_value):
    return False


def explode(_value):
    raise ZeroDivisionError("rule blew up")


class ListMap(list, Mapping):
    """A list that also passes as a mapping."""


class TestEvaluate:
    def test_function_rule(self):
        assert evaluate(is_list, []) is True
        assert evaluate(is_list, {}) is False

    def test_leaf_outcome_not_coerced(self):
        assert evaluate(lambda v: v * 2, 21) == 42

    def test_all_of_list_and_map(self):
        rule = AllOf([is_list, is_map])
        assert evaluate(rule, []) is False
        assert evaluate(rule, {}) is False
        assert evaluate(rule, ListMap()) is True

    def test_none_of(self):
        assert evaluate(NoneOf([is_string, is_integer]), 3.14) is True
        assert evaluate(NoneOf([is_string, is_integer]), 3) is False

    @pytest.mark.parametrize("value", [None, 0, "x", [], {}])
    def test_empty_operators(self, value):
        assert evaluate(AllOf([]), value) is True
        assert evaluate(AnyOf([]), value) is False
        assert evaluate(NoneOf([]), value) is True

    @pytest.mark.parametrize("value", [-3, -2, 0, 1, 2, 7, 10, 12])
    def test_nesting(self, value):
        f1 = lambda v: v < 0
        f2 = lambda v: v > 5
        f3 = lambda v: v % 2 == 0
        rule = AllOf(clauses=[AnyOf(clauses=[f1, f2]), f3])
        assert evaluate(rule, value) == ((f1(value) or f2(value)) and f3(value))

    def test_deep_nesting(self):
        rule = always_true
        for _ in range(50):
            rule = AllOf(AnyOf(rule))
        assert evaluate(rule, None) is True

    def test_custom_operator_needs_no_engine_change(self):
        class ExactlyOne(Operator, aggregator=lambda bs: sum(bs) == 1):
            pass

        assert evaluate(ExactlyOne(is_list, is_string), []) is True
        assert evaluate(ExactlyOne(is_list, is_map), ListMap()) is False


class TestShortCircuit:
    def test_all_stops_at_first_false(self):
        assert evaluate(AllOf(always_false, explode), None) is False

    def test_any_stops_at_first_true(self):
        assert evaluate(AnyOf(always_true, explode), None) is True

    def test_none_stops_at_first_true(self):
        assert evaluate(NoneOf(always_true, explode), None) is False

    def test_order_is_declaration_order(self):
        seen = []

        def record(name):
            def rule(_value):
                seen.append(name)
                return True
            return rule

        evaluate(AllOf(record("a"), record("b"), record("c")), None)
        assert seen == ["a", "b", "c"]


class TestErrors:
    @pytest.mark.parametrize("rule", ["not a rule", 42, None, {"a": 1}])
    def test_invalid_rule(self, rule):
        with pytest.raises(InvalidRuleError) as exc_info:
            evaluate(rule, 1)
        assert exc_info.value.rule is rule

    def test_invalid_nested_clause(self):
        with pytest.raises(InvalidRuleError) as exc_info:
            evaluate(AllOf(always_true, "nope"), 1)
        assert exc_info.value.rule == "nope"

    def test_result_propagates_invalid_rule(self):
        with pytest.raises(InvalidRuleError):
            result("nope", 1)

    def test_leaf_errors_propagate_unchanged(self):
        with pytest.raises(ZeroDivisionError, match="rule blew up"):
            evaluate(AllOf(AnyOf(explode)), 1)


class TestIsRule:
    def test_callable(self):
        assert is_rule(is_list) is True
        assert is_rule(lambda v: v) is True

    def test_operator(self):
        assert is_rule(AnyOf()) is True

    @pytest.mark.parametrize("value", ["not a rule", 1, None, [is_list]])
    def test_non_rules(self, value):
        assert is_rule(value) is False


class TestCoercion:
    def test_truthy_by_default(self):
        assert evaluate(AllOf(lambda v: 1, lambda v: "yes"), None) is True
        assert evaluate(AnyOf(lambda v: 0, lambda v: ""), None) is False

    def test_error_markers_fail_inside_operators(self):
        assert evaluate(AllOf(lambda v: ("error", "x")), None) is False
        assert evaluate(AnyOf(lambda v: ValueError()), None) is False
        assert evaluate(NoneOf(lambda v: ("error", "x")), None) is True
        assert evaluate(AllOf(lambda v: ("ok", 0)), None) is True

    def test_trace_agrees_with_clause_results(self):
        traced = trace(AllOf(lambda v: ("error", "x")), 1)
        assert traced.clauses[0].passed is False
        assert traced.evaluation is False
        assert traced.passed is False

    def test_strict_rejects_non_bool(self):
        engine = Engine(coercion="strict")
        one = lambda v: 1
        with pytest.raises(NonBooleanOutcomeError) as exc_info:
            engine.evaluate(AllOf(one), None)
        assert exc_info.value.rule is one
        assert exc_info.value.outcome == 1

    def test_strict_accepts_bool(self):
        engine = Engine(coercion="strict")
        assert engine.evaluate(AllOf(always_true), None) is True

    def test_strict_leaves_top_level_alone(self):
        assert Engine(coercion="strict").evaluate(lambda v: 1, None) == 1

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            Engine(coercion="lenient")


class TestResult:
    def test_wraps_evaluation(self):
        r = result(is_list, [])
        assert r == Result(rule=is_list, value=[], evaluation=True)
        assert r.passed is True
        assert r.clauses == ()

    def test_immutable(self):
        r = result(is_list, [])
        with pytest.raises(FrozenInstanceError):
            r.evaluation = False

    @pytest.mark.parametrize(
        "outcome, passed",
        [
            (True, True),
            (False, False),
            (None, False),
            (("ok", 1), True),
            (("error", "too small"), False),
            (ValueError("bad"), False),
            ("yes", True),
            (0, False),
        ],
    )
    def test_passed(self, outcome, passed):
        assert Result(rule=is_list, value=None, evaluation=outcome).passed is passed

    def test_satisfies(self):
        assert satisfies(AllOf(is_list), []) is True
        assert satisfies(lambda v: ("error", "no"), []) is False


class TestTrace:
    def test_leaf(self):
        traced = trace(is_list, [])
        assert traced.evaluation is True
        assert traced.clauses == ()

    def test_mirrors_tree(self):
        inner = AnyOf(is_string, is_integer)
        rule = AllOf(inner, is_list)
        traced = trace(rule, 3)

        assert traced.evaluation is False
        assert [c.rule for c in traced.clauses] == [inner, is_list]
        assert [c.evaluation for c in traced.clauses[0].clauses] == [False, True]
        assert traced.failed_clauses == [traced.clauses[1]]

    def test_evaluates_every_clause(self):
        traced = trace(AllOf(always_false, always_true), None)
        assert traced.evaluation is False
        assert len(traced.clauses) == 2

    def test_agrees_with_evaluate(self):
        rule = NoneOf(AnyOf(is_string, is_list), AllOf(is_integer, lambda v: isinstance(v, int) and v > 2))
        for value in ["a", [], 1, 3, 2.5]:
            assert trace(rule, value).evaluation == evaluate(rule, value)


class TestNumberOfClauses:
    def test_empty(self):
        assert number_of_clauses([]) == 0

    def test_single(self):
        assert number_of_clauses([always_true]) == 1
        assert number_of_clauses(always_true) == 1

    def test_operator_counts_its_clauses(self):
        rules = [always_true, AnyOf(always_false, always_true)]
        assert number_of_clauses(rules) == 3

    def test_operator_pair(self):
        assert number_of_clauses((AnyOf, [always_true, always_false])) == 2

    def test_nested(self):
        assert number_of_clauses(AllOf(AnyOf(is_list, is_map), NoneOf(is_string))) == 3

    def test_does_not_evaluate(self):
        assert number_of_clauses([explode, AllOf(explode)]) == 2
