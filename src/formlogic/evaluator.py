"""
Rule Evaluator

Evaluates one ConditionalRule against one answer map and returns a bool.

Dispatch is on the answer's type tag (see formlogic.values). Every
rule/answer combination produces a decision: unknown operators and
type-mismatched comparisons evaluate to the documented default, they
never raise. A misconfigured rule must not break form filling.

Operator table:
    equals          same tag and same value; lists and absent answers never match
    not_equals      negation of equals
    contains        text: case-insensitive substring; list: exact membership
    not_contains    negation of the two contains branches; anything else is True
    greater_than    numeric coercion of both sides, NaN compares False
    less_than       numeric coercion of both sides, NaN compares False
    is_empty        absent, "" or an empty list
    is_not_empty    present, not "" and not an empty list
    in              text answer is one of the rule's options
    not_in          negation of in for text answers; anything else is True
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Callable, Dict, Optional

from formlogic.errors import AnswerTypeError
from formlogic.model import ConditionalRule, RuleOperator
from formlogic.values import (
    AnswerMap,
    AnswerValue,
    BooleanValue,
    NumberValue,
    StringList,
    StringValue,
    to_answer_value,
)

logger = logging.getLogger(__name__)

_NAN = float("nan")

# Decimal literals as accepted by JavaScript's Number(): optional sign,
# optional fraction, optional exponent, or Infinity.
_DECIMAL_RE = re.compile(r"^[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity)$")
_RADIX_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")


def _tagged(raw: Any) -> Optional[AnswerValue]:
    """Tag a raw value, treating untaggable values as absent."""
    try:
        return to_answer_value(raw)
    except AnswerTypeError:
        logger.debug("Ignoring untaggable value %r", raw)
        return None


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def _string_to_number(text: str) -> float:
    text = text.strip()
    if text == "":
        return 0.0
    if _DECIMAL_RE.match(text):
        return float(text)
    if _RADIX_RE.match(text):
        return _int_to_float(int(text, 0))
    return _NAN


def to_number(value: Optional[AnswerValue]) -> float:
    """
    Numeric coercion with JavaScript Number() semantics.

    Absent values and unparseable text become NaN. An empty list is 0 and a
    one-element list coerces its only element.
    """
    if value is None:
        return _NAN
    if isinstance(value, BooleanValue):
        return 1.0 if value.value else 0.0
    if isinstance(value, NumberValue):
        return _int_to_float(value.value) if isinstance(value.value, int) else float(value.value)
    if isinstance(value, StringValue):
        return _string_to_number(value.value)
    if isinstance(value, StringList):
        if len(value.values) == 0:
            return 0.0
        if len(value.values) == 1:
            return _string_to_number(value.values[0])
    return _NAN


def _equals(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    if answer is None or isinstance(answer, StringList):
        return False
    expected = _tagged(rule.value)
    if isinstance(answer, NumberValue) and isinstance(expected, NumberValue):
        # NaN never equals itself
        return not math.isnan(answer.value) and answer.value == expected.value
    return answer == expected


def _not_equals(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    return not _equals(answer, rule)


def _contains(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    if not isinstance(rule.value, str):
        return False
    if isinstance(answer, StringValue):
        return rule.value.lower() in answer.value.lower()
    if isinstance(answer, StringList):
        return rule.value in answer.values
    return False


def _not_contains(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    if isinstance(rule.value, str) and isinstance(answer, (StringValue, StringList)):
        return not _contains(answer, rule)
    return True


def _greater_than(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    return to_number(answer) > to_number(_tagged(rule.value))


def _less_than(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    return to_number(answer) < to_number(_tagged(rule.value))


def _is_empty(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    if answer is None:
        return True
    if isinstance(answer, StringValue):
        return answer.value == ""
    if isinstance(answer, StringList):
        return len(answer.values) == 0
    return False


def _is_not_empty(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    return not _is_empty(answer, rule)


def _options(rule: ConditionalRule) -> tuple:
    if isinstance(rule.value, str):
        return (rule.value,)
    if isinstance(rule.value, (list, tuple)):
        return tuple(option for option in rule.value if isinstance(option, str))
    return ()


def _in(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    if isinstance(answer, StringValue):
        return answer.value in _options(rule)
    return False


def _not_in(answer: Optional[AnswerValue], rule: ConditionalRule) -> bool:
    if isinstance(answer, StringValue):
        return not _in(answer, rule)
    return True


_OPERATORS: Dict[RuleOperator, Callable[[Optional[AnswerValue], ConditionalRule], bool]] = {
    RuleOperator.EQUALS: _equals,
    RuleOperator.NOT_EQUALS: _not_equals,
    RuleOperator.CONTAINS: _contains,
    RuleOperator.NOT_CONTAINS: _not_contains,
    RuleOperator.GREATER_THAN: _greater_than,
    RuleOperator.LESS_THAN: _less_than,
    RuleOperator.IS_EMPTY: _is_empty,
    RuleOperator.IS_NOT_EMPTY: _is_not_empty,
    RuleOperator.IN: _in,
    RuleOperator.NOT_IN: _not_in,
}


def parse_operator(name: Any) -> Optional[RuleOperator]:
    """Return the RuleOperator for `name`, or None if it is not recognized."""
    try:
        return RuleOperator(name)
    except ValueError:
        return None


def evaluate_rule(rule: ConditionalRule, answers: AnswerMap) -> bool:
    """
    Evaluate one rule against the current answers.

    Args:
        rule: The rule to test
        answers: Field id -> tagged answer. Raw values are tagged on the fly.

    Returns:
        True if the rule's condition holds. Unknown operators return False.
    """
    operator = parse_operator(rule.operator)
    if operator is None:
        logger.debug("Unknown operator %r on rule for field %s", rule.operator, rule.field_id)
        return False
    answer = answers.get(rule.field_id)
    if answer is not None and not isinstance(answer, AnswerValue):
        answer = _tagged(answer)
    return bool(_OPERATORS[operator](answer, rule))


__all__ = ["evaluate_rule", "parse_operator", "to_number"]
