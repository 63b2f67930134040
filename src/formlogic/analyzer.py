"""
Form Logic Analyzer: diagnostics and inventory of conditional logic.

This module provides lightweight analysis of Form objects:
    - Trigger field usage inventory
    - References to unknown fields and self-references
    - Unknown operators and actions
    - Operators that the builder does not offer for a trigger's field type
    - Dependency index (which fields must be re-resolved when an answer changes)
    - Branch targets that name no field or section

IMPORTANT: Analysis never modifies the form and never affects evaluation.
A rule flagged here still evaluates to its documented default.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple

from formlogic.branching import has_branching
from formlogic.evaluator import parse_operator
from formlogic.model import BranchTargetType, Form, LogicAction, RuleOperator

_BASE_OPERATORS: Tuple[RuleOperator, ...] = (
    RuleOperator.EQUALS,
    RuleOperator.NOT_EQUALS,
    RuleOperator.IS_EMPTY,
    RuleOperator.IS_NOT_EMPTY,
)

_EXTRA_OPERATORS: Dict[str, Tuple[RuleOperator, ...]] = {
    "select": (RuleOperator.IN, RuleOperator.NOT_IN),
    "radio": (RuleOperator.IN, RuleOperator.NOT_IN),
    "text": (RuleOperator.CONTAINS, RuleOperator.NOT_CONTAINS),
    "textarea": (RuleOperator.CONTAINS, RuleOperator.NOT_CONTAINS),
    "checkbox": (RuleOperator.CONTAINS, RuleOperator.NOT_CONTAINS),
    "multiselect": (RuleOperator.CONTAINS, RuleOperator.NOT_CONTAINS),
    "number": (RuleOperator.GREATER_THAN, RuleOperator.LESS_THAN),
}


def operators_for_field_type(field_type: str) -> Tuple[RuleOperator, ...]:
    """Operators the rule builder offers when the trigger field has `field_type`."""
    return _BASE_OPERATORS + _EXTRA_OPERATORS.get(field_type, ())


@dataclass
class FormLogicReport:
    """Analysis report for a form's conditional logic."""

    form_id: str
    total_fields: int = 0
    fields_with_logic: int = 0
    total_rules: int = 0

    # Trigger field usage
    field_references: Dict[str, int] = field(default_factory=dict)
    undefined_references: Set[str] = field(default_factory=set)
    self_references: Set[str] = field(default_factory=set)

    # Rule content
    unknown_operators: Set[str] = field(default_factory=set)
    unknown_actions: Set[str] = field(default_factory=set)
    operator_mismatches: List[Tuple[str, str, str]] = field(default_factory=list)  # (field, trigger, operator)

    # Option branching
    fields_with_branching: int = 0
    undefined_branch_targets: Set[str] = field(default_factory=set)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def build_dependency_index(form: Form) -> Dict[str, Set[str]]:
    """
    Map each trigger field id to the ids of fields whose logic reads it.

    Example:
        field "details" shows when "has_details" equals "yes"
        -> {"has_details": {"details"}}
    """
    index: Dict[str, Set[str]] = defaultdict(set)
    for form_field in form.fields:
        if form_field.conditional_logic is None:
            continue
        for rule in form_field.conditional_logic.rules:
            index[rule.field_id].add(form_field.id)
    return dict(index)


def dependent_fields(form: Form, changed_field_ids: Iterable[str]) -> Set[str]:
    """Ids of fields whose logic references any of the changed fields."""
    index = build_dependency_index(form)
    dependents: Set[str] = set()
    for field_id in changed_field_ids:
        dependents.update(index.get(field_id, ()))
    return dependents


def analyze_form(form: Form) -> FormLogicReport:
    """
    Perform analysis of a form's conditional logic.

    Returns a FormLogicReport with counts and warnings.
    """
    report = FormLogicReport(form_id=form.id)
    report.total_fields = len(form.fields)

    field_by_id = {f.id: f for f in form.fields}
    usage: Dict[str, int] = defaultdict(int)
    known_actions = {action.value for action in LogicAction}

    for form_field in form.fields:
        logic = form_field.conditional_logic
        if logic is None:
            continue
        report.fields_with_logic += 1
        report.total_rules += len(logic.rules)

        if logic.action not in known_actions:
            report.unknown_actions.add(str(logic.action))

        for rule in logic.rules:
            usage[rule.field_id] += 1

            if rule.field_id == form_field.id:
                report.self_references.add(form_field.id)

            trigger = field_by_id.get(rule.field_id)
            if trigger is None:
                report.undefined_references.add(rule.field_id)

            operator = parse_operator(rule.operator)
            if operator is None:
                report.unknown_operators.add(str(rule.operator))
            elif trigger is not None and operator not in operators_for_field_type(trigger.field_type):
                report.operator_mismatches.append((form_field.id, trigger.id, operator.value))

    report.field_references = dict(usage)

    section_ids = {s.id for s in form.sections}
    for form_field in form.fields:
        if not has_branching(form_field):
            continue
        report.fields_with_branching += 1
        for branch in form_field.branching.rules:
            if branch.target_type == BranchTargetType.SECTION.value:
                known = branch.go_to_target in section_ids
            elif branch.target_type == BranchTargetType.FIELD.value:
                known = branch.go_to_target in field_by_id
            else:
                known = False
            if not known:
                report.undefined_branch_targets.add(branch.go_to_target)

    # =========================================================================
    # WARNING FLAGS
    # =========================================================================

    if report.undefined_references:
        report.add_warning(
            f"Rules reference unknown fields: {', '.join(sorted(report.undefined_references))}"
        )

    if report.self_references:
        report.add_warning(
            f"Fields depend on their own answer: {', '.join(sorted(report.self_references))}"
        )

    if report.unknown_operators:
        report.add_warning(
            f"Unknown operators (always false): {', '.join(sorted(report.unknown_operators))}"
        )

    if report.unknown_actions:
        report.add_warning(
            f"Unknown actions (field always visible): {', '.join(sorted(report.unknown_actions))}"
        )

    if report.undefined_branch_targets:
        report.add_warning(
            f"Branches go to unknown targets (ignored): {', '.join(sorted(report.undefined_branch_targets))}"
        )

    for field_id, trigger_id, operator in report.operator_mismatches:
        report.add_warning(
            f"Operator '{operator}' on {field_id} is not offered for "
            f"{field_by_id[trigger_id].field_type} field {trigger_id}"
        )

    return report


__all__ = [
    "FormLogicReport",
    "analyze_form",
    "build_dependency_index",
    "dependent_fields",
    "operators_for_field_type",
]
