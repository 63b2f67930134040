"""
Logic Combinator

Folds the results of an ordered rule list into one boolean.

Combination is strictly left to right. Each rule after the first is joined
to the running result using ITS OWN logical operator:

    rules:   R1        R2 (OR)      R3 (AND)
    result:  ((r1 OR r2) AND r3)

There is no precedence grouping: "a OR b AND c" is ((a OR b) AND c), not
(a OR (b AND c)). Stored rule sets depend on this, so it must not be
"corrected" to standard boolean precedence.

Every rule is evaluated, even when the running result already decides the
outcome.
"""

from __future__ import annotations

import logging
from typing import Sequence

from formlogic.evaluator import evaluate_rule
from formlogic.model import ConditionalRule, LogicalOperator
from formlogic.values import AnswerMap

logger = logging.getLogger(__name__)


def _joins_with_or(rule: ConditionalRule) -> bool:
    if rule.logical_operator is None:
        return False
    try:
        return LogicalOperator(rule.logical_operator) is LogicalOperator.OR
    except ValueError:
        logger.debug("Unknown logical operator %r, using AND", rule.logical_operator)
        return False


def combine_rules(rules: Sequence[ConditionalRule], answers: AnswerMap) -> bool:
    """
    Combine an ordered rule list into a single decision.

    Args:
        rules: Rules in authoring order
        answers: Current answers

    Returns:
        True for an empty rule list, otherwise the left-to-right fold.
    """
    if not rules:
        return True

    results = [evaluate_rule(rule, answers) for rule in rules]

    accumulator = results[0]
    for rule, result in zip(rules[1:], results[1:]):
        if _joins_with_or(rule):
            accumulator = accumulator or result
        else:
            accumulator = accumulator and result
    return accumulator


__all__ = ["combine_rules"]
