"""
Answer Values for Form Logic

Every answer a filler gives is represented as a tagged value, never as a
bare Python object. The rule evaluator dispatches on the tag, so behavior
like case-insensitive substring matching or list membership is explicit
rather than a side effect of ambient coercion.

Supported tags:
    - StringValue   (text, textarea, select, radio, date inputs)
    - NumberValue   (number inputs)
    - BooleanValue  (single checkbox / toggle)
    - StringList    (multi-select, checkbox groups)

An absent answer is represented by None.
"""

from __future__ import annotations

import logging
from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from formlogic.errors import AnswerTypeError

logger = logging.getLogger(__name__)


class AnswerValue(ABC):
    """
    Base class for all tagged answer values.

    Structure only. Comparison semantics live in the evaluator.
    """
    pass


@dataclass(frozen=True)
class StringValue(AnswerValue):
    """A single text answer."""

    value: str


@dataclass(frozen=True)
class NumberValue(AnswerValue):
    """
    A numeric answer.

    Integers and floats share one tag: NumberValue(1) and NumberValue(1.0)
    compare equal, matching how form inputs treat numbers.
    """

    value: Union[int, float]


@dataclass(frozen=True)
class BooleanValue(AnswerValue):
    """A yes/no answer."""

    value: bool


@dataclass(frozen=True)
class StringList(AnswerValue):
    """
    A multi-select answer.

    Properties:
        values: Selected options, in selection order. Stored as a tuple so
            the value stays hashable and can take part in cache keys.
    """

    values: Tuple[str, ...] = ()


AnswerMap = Mapping[str, AnswerValue]


def to_answer_value(raw: Any) -> Optional[AnswerValue]:
    """
    Wrap a raw Python value in its tagged representation.

    bool is checked before int because bool is a subclass of int.

    Raises:
        AnswerTypeError: If the value has no tagged representation
    """
    if raw is None or isinstance(raw, AnswerValue):
        return raw
    if isinstance(raw, bool):
        return BooleanValue(raw)
    if isinstance(raw, (int, float)):
        return NumberValue(raw)
    if isinstance(raw, str):
        return StringValue(raw)
    if isinstance(raw, (list, tuple)):
        if not all(isinstance(item, str) for item in raw):
            raise AnswerTypeError(f"Multi-select answers must contain only strings: {raw!r}")
        return StringList(tuple(raw))
    raise AnswerTypeError(f"Unsupported answer type: {type(raw).__name__}")


def normalize_answers(raw_answers: Mapping[str, Any], strict: bool = True) -> Dict[str, AnswerValue]:
    """
    Convert a raw field-id -> value mapping. None values are dropped.

    Args:
        raw_answers: Field id to raw answer
        strict: When False, values with no tagged representation are
            dropped like None instead of raising

    Raises:
        AnswerTypeError: If strict and a value has no tagged representation
    """
    answers: Dict[str, AnswerValue] = {}
    for field_id, raw in raw_answers.items():
        try:
            value = to_answer_value(raw)
        except AnswerTypeError:
            if strict:
                raise
            logger.debug("Treating untaggable answer for %s as absent: %r", field_id, raw)
            continue
        if value is not None:
            answers[field_id] = value
    return answers


def answer_snapshot(answers: AnswerMap) -> FrozenSet[Tuple[str, AnswerValue]]:
    """Hashable, order-independent snapshot of an answer map."""
    return frozenset(answers.items())


__all__ = [
    "AnswerValue",
    "StringValue",
    "NumberValue",
    "BooleanValue",
    "StringList",
    "AnswerMap",
    "to_answer_value",
    "normalize_answers",
    "answer_snapshot",
]
