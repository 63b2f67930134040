"""
Business-Day Calendar

Date arithmetic over a configurable set of working weekdays, used to
compute form due dates.

Weekdays are numbered Monday-first: 1=Monday ... 7=Sunday (ISO numbering).

KNOWN LIMITATION:
    `exclude_holidays` and `holiday_calendar` are carried on the config but
    never resolved here. Holiday sets come from an external collaborator;
    until then no holiday is excluded.

All functions accept `datetime.date` or `datetime.datetime` and return the
same type they were given. Time of day is preserved.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import FrozenSet, Optional, TypeVar

logger = logging.getLogger(__name__)

DateLike = TypeVar("DateLike", date, datetime)

DEFAULT_BUSINESS_DAYS = (1, 2, 3, 4, 5)

# Upper bound on extra days tried when searching for the next/previous
# business day. Keeps an empty weekday set from looping forever.
MAX_SEARCH_STEPS = 14

WEEKDAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class BusinessDaysConfig:
    """
    Business-day settings for a form.

    Properties:
        business_days_only:
            If False every calendar day counts and the weekday set is unused
        business_days:
            Working weekdays, 1=Monday ... 7=Sunday. Entries outside 1..7
            are ignored, they never match a date.
        exclude_holidays:
            Accepted, not resolved (see module docstring)
        holiday_calendar:
            Accepted, not resolved
    """

    business_days_only: bool = False
    business_days: FrozenSet[int] = field(default_factory=lambda: frozenset(DEFAULT_BUSINESS_DAYS))
    exclude_holidays: bool = False
    holiday_calendar: Optional[str] = None
    # Configured order, kept for display only
    display_order: tuple = field(default=(), compare=False)

    def __post_init__(self):
        if not isinstance(self.business_days, frozenset):
            days = tuple(self.business_days)
            object.__setattr__(self, "business_days", frozenset(days))
            if not self.display_order:
                object.__setattr__(self, "display_order", days)


def _is_valid_weekday(day: object) -> bool:
    return isinstance(day, int) and not isinstance(day, bool) and 1 <= day <= 7


def eligible_weekdays(config: BusinessDaysConfig) -> FrozenSet[int]:
    """The configured weekdays that can actually match a date."""
    valid = frozenset(day for day in config.business_days if _is_valid_weekday(day))
    if len(valid) != len(config.business_days):
        logger.debug(
            "Ignoring out-of-range business days: %s",
            sorted(set(config.business_days) - valid, key=repr),
        )
    return valid


def _calendar_day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def is_business_day(value: date, config: BusinessDaysConfig) -> bool:
    """
    Check whether a date counts under the configuration.

    If `business_days_only` is False every date counts. Otherwise the date's
    weekday (Sunday=7) must be in the configured set.
    """
    if not config.business_days_only:
        return True
    return value.isoweekday() in eligible_weekdays(config)


def _step_to_business_day(value: DateLike, config: BusinessDaysConfig, step: timedelta) -> DateLike:
    candidate = value + step
    attempts = 0
    while not is_business_day(candidate, config) and attempts < MAX_SEARCH_STEPS:
        candidate = candidate + step
        attempts += 1
    if not is_business_day(candidate, config):
        logger.warning(
            "No business day found within %d days of %s; returning %s",
            MAX_SEARCH_STEPS + 1, value.isoformat(), candidate.isoformat(),
        )
    return candidate


def next_business_day(value: DateLike, config: BusinessDaysConfig) -> DateLike:
    """
    The first business day strictly after `value`.

    The search is bounded; on exhaustion the last date tried is returned.
    Callers should treat that as a degraded result, not an error.
    """
    return _step_to_business_day(value, config, _ONE_DAY)


def previous_business_day(value: DateLike, config: BusinessDaysConfig) -> DateLike:
    """The last business day strictly before `value`. Bounded like next_business_day."""
    return _step_to_business_day(value, config, -_ONE_DAY)


def days_between(start: date, end: date, config: BusinessDaysConfig) -> int:
    """
    Count days from `start` up to, but excluding, `end`.

    Without business_days_only this is the calendar difference rounded up
    to whole days (negative when end precedes start). Otherwise the
    qualifying days between the two calendar days are counted, and a start
    on or after the end yields 0.
    """
    if not config.business_days_only:
        if isinstance(start, datetime) != isinstance(end, datetime):
            start, end = _as_datetime(start), _as_datetime(end)
        delta = end - start
        return math.ceil(delta.total_seconds() / _ONE_DAY.total_seconds())

    current = _calendar_day(start)
    stop = _calendar_day(end)
    count = 0
    while current < stop:
        if is_business_day(current, config):
            count += 1
        current += _ONE_DAY
    return count


def add_business_days(value: DateLike, days: int, config: BusinessDaysConfig) -> DateLike:
    """
    Move `days` business days forward from `value`.

    Without business_days_only this is plain calendar addition, so negative
    counts move backward. With business_days_only the date is stepped
    forward one day at a time and only qualifying days are counted; zero or
    negative counts return `value` unchanged.

    The walk is bounded to 7 days per requested business day plus
    MAX_SEARCH_STEPS, so a configuration with no working weekdays returns
    the last date reached instead of looping forever.
    """
    if not config.business_days_only:
        return value + timedelta(days=days)
    if days <= 0:
        return value

    max_steps = 7 * days + MAX_SEARCH_STEPS

    current = value
    added = 0
    steps = 0
    while added < days and steps < max_steps:
        current = current + _ONE_DAY
        steps += 1
        if is_business_day(current, config):
            added += 1

    if added < days:
        logger.warning(
            "Only %d of %d business days found from %s; returning %s",
            added, days, value.isoformat(), current.isoformat(),
        )
    return current


def format_business_days_config(config: BusinessDaysConfig) -> str:
    """
    Human-readable summary of a configuration.

    Examples:
        "All days"
        "Business days: Monday, Tuesday, Wednesday, Thursday, Friday"
    """
    if not config.business_days_only:
        return "All days"
    order = config.display_order or tuple(sorted(eligible_weekdays(config)))
    names = [WEEKDAY_NAMES[day] for day in order if _is_valid_weekday(day)]
    return f"Business days: {', '.join(names)}"


__all__ = [
    "BusinessDaysConfig",
    "DEFAULT_BUSINESS_DAYS",
    "MAX_SEARCH_STEPS",
    "WEEKDAY_NAMES",
    "eligible_weekdays",
    "is_business_day",
    "next_business_day",
    "previous_business_day",
    "days_between",
    "add_business_days",
    "format_business_days_config",
]
