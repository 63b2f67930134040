"""
Field Visibility Resolver

Applies a field's logic block to the current answers and decides how the
field is presented.

    action     visible             required
    ------     -------             --------
    (none)     True                base
    show       condition met       base
    hide       not condition met   base
    require    True                base OR condition met
    disable    True                base
    (unknown)  True                base

`require` never relaxes a field that is already required.

Disabling is a separate predicate, `should_disable_field`, because a field
can be visible, optional and disabled at the same time. `resolve_form`
combines both predicates into one FieldState per field.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from formlogic.analyzer import dependent_fields
from formlogic.combinator import combine_rules
from formlogic.model import ConditionalLogicBlock, Form, FormField, LogicAction
from formlogic.values import AnswerMap, AnswerValue, answer_snapshot, normalize_answers

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 128


@dataclass(frozen=True)
class FieldVisibility:
    """Visibility decision for one field."""

    visible: bool
    required: bool


@dataclass(frozen=True)
class FieldState:
    """Full presentation decision for one field."""

    visible: bool
    required: bool
    disabled: bool


def _parse_action(action: object) -> Optional[LogicAction]:
    try:
        return LogicAction(action)
    except ValueError:
        return None


def resolve_field(
    block: Optional[ConditionalLogicBlock],
    answers: AnswerMap,
    base_required: bool,
) -> FieldVisibility:
    """
    Decide visibility and required-ness of a field.

    Args:
        block: The field's logic block, or None
        answers: Current answers
        base_required: The field's own required flag

    Returns:
        FieldVisibility. Never raises; unknown actions leave the field
        visible with its base required flag.
    """
    if block is None:
        return FieldVisibility(visible=True, required=base_required)

    condition_met = combine_rules(block.rules, answers)
    action = _parse_action(block.action)

    if action is LogicAction.SHOW:
        return FieldVisibility(visible=condition_met, required=base_required)
    if action is LogicAction.HIDE:
        return FieldVisibility(visible=not condition_met, required=base_required)
    if action is LogicAction.REQUIRE:
        return FieldVisibility(visible=True, required=base_required or condition_met)
    if action is None:
        logger.debug("Unknown logic action %r, field left visible", block.action)
    return FieldVisibility(visible=True, required=base_required)


def should_disable_field(block: Optional[ConditionalLogicBlock], answers: AnswerMap) -> bool:
    """True when the block's action is disable and its condition is met."""
    if block is None or _parse_action(block.action) is not LogicAction.DISABLE:
        return False
    return combine_rules(block.rules, answers)


def resolve_field_state(form_field: FormField, answers: AnswerMap) -> FieldState:
    """Resolve visibility, required-ness and disabled state of one field."""
    visibility = resolve_field(form_field.conditional_logic, answers, form_field.required)
    return FieldState(
        visible=visibility.visible,
        required=visibility.required,
        disabled=should_disable_field(form_field.conditional_logic, answers),
    )


def resolve_form(form: Form, answers: AnswerMap) -> Dict[str, FieldState]:
    """Resolve every field of a form, keyed by field id, in field order."""
    return {f.id: resolve_field_state(f, answers) for f in form.fields}


class FormResolver:
    """
    Resolves a form's fields with memoization.

    Results are cached per (form.version, answers) in a bounded
    functools.lru_cache owned by this instance. The form must be treated
    as read-only: any change to its fields or logic must come with a new
    version.

    Answers that cannot be tagged are treated as absent, the same way the
    evaluator treats them, so one malformed value never fails the whole
    form.

    Safe to share between threads.
    """

    def __init__(self, form: Form, cache_size: int = DEFAULT_CACHE_SIZE):
        self.form = form
        self.cache_size = cache_size
        self._resolve_cached = functools.lru_cache(maxsize=cache_size)(self._resolve_snapshot)

    def _resolve_snapshot(
        self,
        version: int,
        snapshot: FrozenSet[Tuple[str, AnswerValue]],
    ) -> Dict[str, FieldState]:
        logger.debug("Resolving form %s version %s", self.form.id, version)
        return resolve_form(self.form, dict(snapshot))

    def resolve(self, answers: Mapping[str, object]) -> Dict[str, FieldState]:
        """Resolve all fields for the given raw or tagged answers."""
        tagged = normalize_answers(answers, strict=False)
        states = self._resolve_cached(self.form.version, answer_snapshot(tagged))
        return dict(states)

    def refresh(
        self,
        previous: Mapping[str, FieldState],
        answers: Mapping[str, object],
        changed_field_ids: Iterable[str],
    ) -> Dict[str, FieldState]:
        """
        Re-resolve only the fields affected by changed answers.

        Fields whose logic does not reference a changed field keep their
        previous state. Fields missing from `previous` are always resolved.
        """
        tagged = normalize_answers(answers, strict=False)
        affected = dependent_fields(self.form, changed_field_ids)

        states: Dict[str, FieldState] = {}
        for form_field in self.form.fields:
            if form_field.id in affected or form_field.id not in previous:
                states[form_field.id] = resolve_field_state(form_field, tagged)
            else:
                states[form_field.id] = previous[form_field.id]
        return states

    def clear_cache(self) -> None:
        self._resolve_cached.cache_clear()

    def cache_info(self):
        """Hit/miss statistics of the resolution cache."""
        return self._resolve_cached.cache_info()

    @property
    def cache_len(self) -> int:
        return self._resolve_cached.cache_info().currsize


__all__ = [
    "FieldVisibility",
    "FieldState",
    "resolve_field",
    "should_disable_field",
    "resolve_field_state",
    "resolve_form",
    "FormResolver",
    "DEFAULT_CACHE_SIZE",
]
