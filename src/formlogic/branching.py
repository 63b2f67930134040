"""
Option Branching

Choice fields (select, radio, checkbox) can carry branching rules: "when
option X is selected, go to field or section Y". Branching decides which
fields and sections are reachable at all, independently of the per-field
show/hide logic in formlogic.resolver.

Visibility is rebuilt from scratch for every answer map:

    1. Every section starts visible.
    2. If no field has enabled branching, every field is visible.
    3. Otherwise every existing field or section named as a branch target
       starts hidden, together with all fields of a hidden section.
    4. For each selected option that matches a rule, the target is
       revealed. A revealed field also reveals its section; a revealed
       section reveals all of its fields.

Option matching is exact and only text answers select options. Numbers,
booleans and empty text select nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Set, Tuple

from formlogic.model import BranchingRule, BranchTargetType, Form, FormField
from formlogic.values import AnswerMap, AnswerValue, StringList, StringValue

logger = logging.getLogger(__name__)

BRANCHING_FIELD_TYPES = frozenset({"select", "radio", "checkbox"})


@dataclass(frozen=True)
class BranchingVisibility:
    """
    Reachable fields and sections for one answer map.

    Properties:
        fields: Visible field ids, in form order
        sections: Visible section ids, in form order
    """

    fields: Tuple[str, ...] = ()
    sections: Tuple[str, ...] = ()

    def is_field_visible(self, field_id: str) -> bool:
        return field_id in self.fields

    def is_section_visible(self, section_id: str) -> bool:
        return section_id in self.sections

    def next_visible_field(self, current_field_id: str) -> Optional[str]:
        """
        Field that follows `current_field_id` when navigating.

        Returns:
            The next visible field id, or None when the current field is
            hidden, unknown or the last visible one
        """
        try:
            index = self.fields.index(current_field_id)
        except ValueError:
            return None
        if index + 1 >= len(self.fields):
            return None
        return self.fields[index + 1]


def has_branching(form_field: FormField) -> bool:
    """True when the field is a choice field with enabled, non-empty branching."""
    return (
        form_field.field_type in BRANCHING_FIELD_TYPES
        and form_field.branching is not None
        and form_field.branching.enabled
        and len(form_field.branching.rules) > 0
    )


def _selected_options(answer: Optional[AnswerValue]) -> Tuple[str, ...]:
    if isinstance(answer, StringValue):
        return (answer.value,) if answer.value else ()
    if isinstance(answer, StringList):
        return answer.values
    return ()


def _matching_rule(rules: Tuple[BranchingRule, ...], option: str) -> Optional[BranchingRule]:
    for rule in rules:
        if rule.option_value == option:
            return rule
    return None


def branch_targets(form: Form) -> Tuple[FrozenSet[str], FrozenSet[str]]:
    """
    Collect the fields and sections that start hidden.

    Targets that do not exist in the form are skipped.

    Returns:
        (target field ids, target section ids)
    """
    field_ids = {f.id for f in form.fields}
    section_ids = {s.id for s in form.sections}
    target_fields: Set[str] = set()
    target_sections: Set[str] = set()

    for form_field in form.fields:
        if not has_branching(form_field):
            continue
        for rule in form_field.branching.rules:
            if rule.target_type == BranchTargetType.FIELD.value and rule.go_to_target in field_ids:
                target_fields.add(rule.go_to_target)
            elif rule.target_type == BranchTargetType.SECTION.value and rule.go_to_target in section_ids:
                target_sections.add(rule.go_to_target)
    return frozenset(target_fields), frozenset(target_sections)


def resolve_branching(form: Form, answers: AnswerMap) -> BranchingVisibility:
    """
    Decide which fields and sections are reachable for the given answers.

    Args:
        form: Form with fields, sections and branching rules
        answers: Current tagged answers

    Returns:
        BranchingVisibility in form order. Never raises.
    """
    branching_fields = [f for f in form.fields if has_branching(f)]
    visible_sections: Set[str] = {s.id for s in form.sections}

    if not branching_fields:
        return BranchingVisibility(
            fields=tuple(f.id for f in form.fields),
            sections=tuple(s.id for s in form.sections),
        )

    target_fields, target_sections = branch_targets(form)
    visible_fields: Set[str] = {f.id for f in form.fields if f.id not in target_fields}
    for section_id in target_sections:
        visible_sections.discard(section_id)
        visible_fields.difference_update(f.id for f in form.section_fields(section_id))

    for form_field in branching_fields:
        for option in _selected_options(answers.get(form_field.id)):
            rule = _matching_rule(form_field.branching.rules, option)
            if rule is None or not rule.go_to_target:
                continue
            if rule.target_type == BranchTargetType.FIELD.value:
                target = form.get_field(rule.go_to_target)
                if target is None:
                    continue
                visible_fields.add(target.id)
                if target.section_id:
                    visible_sections.add(target.section_id)
            elif rule.target_type == BranchTargetType.SECTION.value:
                if form.get_section(rule.go_to_target) is None:
                    continue
                visible_sections.add(rule.go_to_target)
                visible_fields.update(f.id for f in form.section_fields(rule.go_to_target))
            else:
                continue
            logger.debug(
                "Option %r of %s reveals %s %s",
                option, form_field.id, rule.target_type, rule.go_to_target,
            )

    return BranchingVisibility(
        fields=tuple(f.id for f in form.fields if f.id in visible_fields),
        sections=_ordered_sections(form, visible_sections),
    )


def _ordered_sections(form: Form, section_ids: Set[str]) -> Tuple[str, ...]:
    ordered: List[str] = [s.id for s in form.sections if s.id in section_ids]
    # a field may point at a section the form does not list
    ordered.extend(sorted(section_ids.difference(ordered)))
    return tuple(ordered)


__all__ = [
    "BRANCHING_FIELD_TYPES",
    "BranchingVisibility",
    "has_branching",
    "branch_targets",
    "resolve_branching",
]
