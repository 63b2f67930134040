"""
Tests for the Logic Combinator.

The combination rule is unusual: strictly left to right, each rule joined
with ITS OWN logical operator, no precedence, no short-circuiting.
"""

from unittest import mock

from formlogic import combinator
from formlogic.combinator import combine_rules
from formlogic.model import ConditionalRule
from formlogic.values import StringValue

TRUE_RULE_ANSWERS = {"t": StringValue("yes"), "f": StringValue("no")}


def true_rule(logical_operator=None):
    return ConditionalRule(field_id="t", operator="equals", value="yes", logical_operator=logical_operator)


def false_rule(logical_operator=None):
    return ConditionalRule(field_id="f", operator="equals", value="yes", logical_operator=logical_operator)


class TestCombineRules:
    """Test left-to-right folding."""

    def test_empty_is_true(self):
        assert combine_rules([], {}) is True
        assert combine_rules((), TRUE_RULE_ANSWERS) is True

    def test_single_rule(self):
        assert combine_rules([true_rule()], TRUE_RULE_ANSWERS) is True
        assert combine_rules([false_rule()], TRUE_RULE_ANSWERS) is False

    def test_first_rule_operator_ignored(self):
        assert combine_rules([false_rule("OR")], TRUE_RULE_ANSWERS) is False

    def test_default_is_and(self):
        assert combine_rules([true_rule(), false_rule()], TRUE_RULE_ANSWERS) is False
        assert combine_rules([true_rule(), true_rule()], TRUE_RULE_ANSWERS) is True

    def test_second_rule_or_uses_its_own_operator(self):
        """R1 (default AND) = false, R2 (OR) = true -> true, not false AND true."""
        assert combine_rules([false_rule(), true_rule("OR")], TRUE_RULE_ANSWERS) is True

    def test_no_precedence_grouping(self):
        """true OR false AND false is ((true OR false) AND false) = false."""
        rules = [true_rule(), false_rule("OR"), false_rule("AND")]
        assert combine_rules(rules, TRUE_RULE_ANSWERS) is False

    def test_left_to_right_recovers_with_or(self):
        """false AND false OR true is ((false AND false) OR true) = true."""
        rules = [false_rule(), false_rule("AND"), true_rule("OR")]
        assert combine_rules(rules, TRUE_RULE_ANSWERS) is True

    def test_unknown_logical_operator_is_and(self):
        assert combine_rules([true_rule(), false_rule("XOR")], TRUE_RULE_ANSWERS) is False

    def test_every_rule_evaluated(self):
        """No short-circuiting: every rule is evaluated even when the result is known."""
        rules = [false_rule(), true_rule("AND"), true_rule("AND"), false_rule("AND")]
        with mock.patch.object(combinator, "evaluate_rule", wraps=combinator.evaluate_rule) as spy:
            assert combine_rules(rules, TRUE_RULE_ANSWERS) is False
        assert spy.call_count == 4

    def test_order_sensitive(self):
        a = [true_rule(), false_rule("AND"), true_rule("OR")]
        b = [true_rule(), true_rule("OR"), false_rule("AND")]
        assert combine_rules(a, TRUE_RULE_ANSWERS) is True
        assert combine_rules(b, TRUE_RULE_ANSWERS) is False
