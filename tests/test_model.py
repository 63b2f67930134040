"""
Tests for Form Logic Model Objects

These tests verify:
    - Basic model creation and defaults
    - Rules and logic blocks are immutable snapshots
    - Retrieval methods
"""

import pytest
from formlogic.business_days import BusinessDaysConfig
from formlogic.model import (
    ConditionalLogicBlock,
    ConditionalRule,
    Form,
    FormField,
    LogicAction,
    LogicalOperator,
    RuleOperator,
)


class TestConditionalRule:
    """Test ConditionalRule objects."""

    def test_defaults(self):
        """Logical operator and id are optional."""
        rule = ConditionalRule(field_id="q1", operator="equals", value="yes")
        assert rule.logical_operator is None
        assert rule.id is None

    def test_rule_immutable(self):
        rule = ConditionalRule(field_id="q1", operator="equals", value="yes")
        with pytest.raises(AttributeError):
            rule.value = "no"

    def test_enum_values_match_record_strings(self):
        """Enum members compare equal to the strings stored in records."""
        assert RuleOperator.GREATER_THAN == "greater_than"
        assert LogicalOperator.OR == "OR"
        assert LogicAction.DISABLE == "disable"


class TestConditionalLogicBlock:
    """Test ConditionalLogicBlock objects."""

    def test_empty_rules_default(self):
        block = ConditionalLogicBlock(action="show")
        assert block.rules == ()

    def test_block_immutable(self):
        block = ConditionalLogicBlock(action="show")
        with pytest.raises(AttributeError):
            block.action = "hide"


class TestForm:
    """Test Form objects."""

    def test_get_field(self):
        form = Form(id="f1", fields=[FormField(id="a"), FormField(id="b", required=True)])
        assert form.get_field("b").required is True

    def test_get_missing_field(self):
        form = Form(id="f1", fields=[FormField(id="a")])
        assert form.get_field("zzz") is None

    def test_defaults(self):
        form = Form(id="f1")
        assert form.version == 1
        assert form.fields == []
        assert form.business_days == BusinessDaysConfig()
        assert form.schedule is None

    def test_field_defaults(self):
        form_field = FormField(id="a")
        assert form_field.field_type == "text"
        assert form_field.required is False
        assert form_field.conditional_logic is None
