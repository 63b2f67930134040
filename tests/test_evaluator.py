"""
Tests for the Rule Evaluator.

These tests verify the operator table:
    - Strict equality by type tag
    - Asymmetric contains / not_contains
    - Numeric coercion for comparisons
    - Emptiness checks
    - Unknown operators never raise
"""

import pytest
from formlogic.evaluator import evaluate_rule, to_number
from formlogic.model import ConditionalRule
from formlogic.values import BooleanValue, NumberValue, StringList, StringValue


def rule(operator, value=None, field_id="q"):
    return ConditionalRule(field_id=field_id, operator=operator, value=value)


class TestEquals:
    """Test equals / not_equals."""

    def test_same_string(self):
        assert evaluate_rule(rule("equals", "yes"), {"q": StringValue("yes")})

    def test_case_sensitive(self):
        assert not evaluate_rule(rule("equals", "Yes"), {"q": StringValue("yes")})

    def test_number_does_not_equal_string(self):
        """Strict equality: 1 is not '1'."""
        assert not evaluate_rule(rule("equals", "1"), {"q": NumberValue(1)})

    def test_int_equals_float(self):
        assert evaluate_rule(rule("equals", 2), {"q": NumberValue(2.0)})

    def test_bool_does_not_equal_number(self):
        assert not evaluate_rule(rule("equals", 1), {"q": BooleanValue(True)})
        assert evaluate_rule(rule("equals", True), {"q": BooleanValue(True)})

    def test_absent_never_equals(self):
        assert not evaluate_rule(rule("equals", "yes"), {})
        assert not evaluate_rule(rule("equals", None), {})

    def test_list_never_equals(self):
        assert not evaluate_rule(rule("equals", "a"), {"q": StringList(("a",))})

    def test_nan_never_equals(self):
        assert not evaluate_rule(rule("equals", float("nan")), {"q": NumberValue(float("nan"))})

    @pytest.mark.parametrize("answers", [
        {"q": StringValue("yes")},
        {"q": StringValue("no")},
        {"q": NumberValue(1)},
        {"q": StringList(("yes",))},
        {},
    ])
    def test_not_equals_is_negation(self, answers):
        """not_equals is always the negation of equals."""
        assert evaluate_rule(rule("not_equals", "yes"), answers) is not evaluate_rule(rule("equals", "yes"), answers)


class TestContains:
    """Test contains / not_contains."""

    def test_substring_case_insensitive(self):
        assert evaluate_rule(rule("contains", "FIRE"), {"q": StringValue("small fire near exit")})

    def test_substring_missing(self):
        assert not evaluate_rule(rule("contains", "flood"), {"q": StringValue("fire")})

    def test_list_membership_exact(self):
        answers = {"q": StringList(("Red", "Blue"))}
        assert evaluate_rule(rule("contains", "Red"), answers)
        assert not evaluate_rule(rule("contains", "red"), answers)
        assert not evaluate_rule(rule("contains", "Re"), answers)

    def test_other_types_false(self):
        assert not evaluate_rule(rule("contains", "1"), {"q": NumberValue(1)})
        assert not evaluate_rule(rule("contains", "a"), {})
        assert not evaluate_rule(rule("contains", 1), {"q": StringValue("1")})

    def test_not_contains_negates_string_branch(self):
        assert not evaluate_rule(rule("not_contains", "fire"), {"q": StringValue("Fire!")})
        assert evaluate_rule(rule("not_contains", "flood"), {"q": StringValue("Fire!")})

    def test_not_contains_negates_list_branch(self):
        answers = {"q": StringList(("ppe",))}
        assert not evaluate_rule(rule("not_contains", "ppe"), answers)
        assert evaluate_rule(rule("not_contains", "PPE"), answers)

    def test_not_contains_other_types_true(self):
        """Asymmetric with contains: mismatched types are True, not False."""
        assert evaluate_rule(rule("not_contains", "1"), {"q": NumberValue(1)})
        assert evaluate_rule(rule("not_contains", "a"), {})
        assert evaluate_rule(rule("not_contains", "a"), {"q": BooleanValue(False)})


class TestComparisons:
    """Test greater_than / less_than."""

    def test_numbers(self):
        assert evaluate_rule(rule("greater_than", 3), {"q": NumberValue(4)})
        assert not evaluate_rule(rule("greater_than", 4), {"q": NumberValue(4)})
        assert evaluate_rule(rule("less_than", 10), {"q": NumberValue(4)})

    def test_numeric_strings_coerced(self):
        assert evaluate_rule(rule("greater_than", "3"), {"q": StringValue(" 10 ")})
        assert evaluate_rule(rule("less_than", 3), {"q": StringValue("2.5")})

    def test_non_numeric_is_false_both_ways(self):
        answers = {"q": StringValue("abc")}
        assert not evaluate_rule(rule("greater_than", 0), answers)
        assert not evaluate_rule(rule("less_than", 0), answers)

    def test_absent_is_false_both_ways(self):
        assert not evaluate_rule(rule("greater_than", -1), {})
        assert not evaluate_rule(rule("less_than", 1), {})

    def test_empty_string_is_zero(self):
        assert evaluate_rule(rule("less_than", 1), {"q": StringValue("")})

    def test_boolean_coerces_to_one(self):
        assert evaluate_rule(rule("greater_than", 0), {"q": BooleanValue(True)})


class TestToNumber:
    """Test numeric coercion directly."""

    def test_lists(self):
        assert to_number(StringList(())) == 0
        assert to_number(StringList(("7",))) == 7
        assert to_number(StringList(("1", "2"))) != to_number(StringList(("1", "2")))  # NaN

    def test_python_only_spellings_rejected(self):
        """Spellings float() accepts but form inputs do not are NaN."""
        for text in ("inf", "nan", "1_000"):
            value = to_number(StringValue(text))
            assert value != value

    def test_infinity_and_hex(self):
        assert to_number(StringValue("Infinity")) == float("inf")
        assert to_number(StringValue("0x10")) == 16
        assert to_number(StringValue("1e3")) == 1000


class TestEmptiness:
    """Test is_empty / is_not_empty."""

    @pytest.mark.parametrize("answers", [{}, {"q": StringValue("")}, {"q": StringList(())}])
    def test_empty(self, answers):
        assert evaluate_rule(rule("is_empty"), answers)
        assert not evaluate_rule(rule("is_not_empty"), answers)

    @pytest.mark.parametrize("value", [
        StringValue("x"),
        StringValue(" "),
        StringList(("a",)),
        NumberValue(0),
        BooleanValue(False),
    ])
    def test_not_empty(self, value):
        assert not evaluate_rule(rule("is_empty"), {"q": value})
        assert evaluate_rule(rule("is_not_empty"), {"q": value})


class TestOptionOperators:
    """Test in / not_in."""

    def test_in(self):
        options = ("north", "south")
        assert evaluate_rule(rule("in", options), {"q": StringValue("south")})
        assert not evaluate_rule(rule("in", options), {"q": StringValue("east")})

    def test_single_string_option(self):
        assert evaluate_rule(rule("in", "north"), {"q": StringValue("north")})

    def test_not_in(self):
        options = ("north", "south")
        assert evaluate_rule(rule("not_in", options), {"q": StringValue("east")})
        assert not evaluate_rule(rule("not_in", options), {"q": StringValue("north")})
        assert evaluate_rule(rule("not_in", options), {})


class TestUnknownOperators:
    """Unknown operators degrade to False."""

    @pytest.mark.parametrize("operator", ["starts_with", "", None, "EQUALS"])
    def test_unknown_operator_false(self, operator):
        assert evaluate_rule(rule(operator, "x"), {"q": StringValue("x")}) is False

    def test_raw_answers_are_tagged(self):
        """Untagged answers are wrapped before dispatch."""
        assert evaluate_rule(rule("contains", "b"), {"q": ["a", "b"]})
        assert not evaluate_rule(rule("equals", 1), {"q": True})

    def test_untaggable_answer_treated_as_absent(self):
        assert evaluate_rule(rule("is_empty"), {"q": object()})
