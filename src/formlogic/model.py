"""
Core Form Logic Model Objects

Defines the data structures the logic engine reads:
    - Rules (one atomic test against one answer)
    - Logic blocks (action + ordered rules, attached to a field)
    - Branching rules (option-driven jumps to fields or sections)
    - Sections (titled groups of fields)
    - Fields (form inputs with a base required flag)
    - Forms (root container, carries the rule-set version)

ARCHITECTURAL RULE:
    These objects:
        - Are read-only snapshots supplied per evaluation call
        - Are created by the configuration loader, never by the engine
        - Represent structure, not behavior

Operator and action values are kept as raw strings. A rule with an
operator the engine does not know must still load, and must evaluate to
the documented default instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from formlogic.business_days import BusinessDaysConfig
from formlogic.schedule import FormSchedule


class RuleOperator(str, Enum):
    """Operators understood by the rule evaluator."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    IN = "in"
    NOT_IN = "not_in"


class LogicalOperator(str, Enum):
    """Joins a rule to the running result of the rules before it."""

    AND = "AND"
    OR = "OR"


class LogicAction(str, Enum):
    """What a logic block does to its field when its condition is met."""

    SHOW = "show"
    HIDE = "hide"
    REQUIRE = "require"
    DISABLE = "disable"


class BranchTargetType(str, Enum):
    """What a branching rule jumps to."""

    FIELD = "field"
    SECTION = "section"


RuleValue = Union[str, int, float, bool, None, Tuple[str, ...]]


@dataclass(frozen=True)
class ConditionalRule:
    """
    One atomic test against one answer.

    Properties:
        field_id:
            Identifier of the trigger field whose answer is tested
        operator:
            Operator name, normally a RuleOperator value
        value:
            Scalar compared against the answer. For "in" / "not_in" this
            is a tuple of option strings.
        logical_operator:
            How this rule joins the result of the rules BEFORE it.
            None means AND. Ignored on the first rule.
        id:
            Opaque identifier used by the authoring UI only

    IMPORTANT:
        Evaluation never looks at `id`.
    """

    field_id: str
    operator: str
    value: RuleValue = None
    logical_operator: Optional[str] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class ConditionalLogicBlock:
    """
    An action plus an ordered rule list, attached to at most one field.

    The order of `rules` together with each rule's logical operator defines
    a single left-associative boolean expression. Reordering rules can
    change the result.

    An empty rule list is vacuously met.
    """

    action: str
    rules: Tuple[ConditionalRule, ...] = ()


@dataclass(frozen=True)
class BranchingRule:
    """
    Jump taken when a choice field has a given option selected.

    Properties:
        option_value: Option that triggers the jump (exact match)
        go_to_target: Id of the field or section revealed by the jump
        target_type: "field" or "section", normally a BranchTargetType value
    """

    option_value: str
    go_to_target: str
    target_type: str = BranchTargetType.FIELD.value


@dataclass(frozen=True)
class BranchingLogic:
    """
    Option-based branching attached to a choice field.

    Every target named by an enabled block starts hidden and is revealed
    only when its option is selected. A disabled block reveals nothing and
    hides nothing.
    """

    enabled: bool = True
    rules: Tuple[BranchingRule, ...] = ()


@dataclass(frozen=True)
class FormSection:
    """A titled group of fields."""

    id: str
    title: str = ""


@dataclass
class FormField:
    """
    A single form input.

    Properties:
        id: Stable field identifier, used as the answer map key
        label: Human-readable label
        field_type: Input type ("text", "number", "select", "checkbox", ...)
        required: Base required flag, before any logic is applied
        conditional_logic: Optional logic block
        section_id: Section the field belongs to, if any
        branching: Optional option-based branching (choice fields only)
    """

    id: str
    label: str = ""
    field_type: str = "text"
    required: bool = False
    conditional_logic: Optional[ConditionalLogicBlock] = None
    section_id: Optional[str] = None
    branching: Optional[BranchingLogic] = None


@dataclass
class Form:
    """
    Root container for a form's logic-relevant configuration.

    Properties:
        id: Form identifier
        title: Form title
        version:
            Rule-set version. Any change to fields or logic must bump it;
            resolution results are cached per (version, answers).
        fields: Ordered fields
        sections: Ordered sections; fields point at them by section_id
        business_days: Business-day settings used for due dates
        schedule: Optional response schedule
    """

    id: str
    title: str = ""
    version: int = 1
    fields: List[FormField] = field(default_factory=list)
    sections: List[FormSection] = field(default_factory=list)
    business_days: BusinessDaysConfig = field(default_factory=BusinessDaysConfig)
    schedule: Optional[FormSchedule] = None

    def get_field(self, field_id: str) -> Optional[FormField]:
        """
        Retrieve a field by ID.

        Args:
            field_id: Field identifier

        Returns:
            FormField object or None if not found
        """
        for form_field in self.fields:
            if form_field.id == field_id:
                return form_field
        return None

    def get_section(self, section_id: str) -> Optional[FormSection]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def section_fields(self, section_id: str) -> List[FormField]:
        """Fields belonging to a section, in form order."""
        return [f for f in self.fields if f.section_id == section_id]


__all__ = [
    "RuleOperator",
    "LogicalOperator",
    "LogicAction",
    "BranchTargetType",
    "RuleValue",
    "ConditionalRule",
    "ConditionalLogicBlock",
    "BranchingRule",
    "BranchingLogic",
    "FormSection",
    "FormField",
    "Form",
]
