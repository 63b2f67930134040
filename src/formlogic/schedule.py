"""
Form response schedules and due status.

A published form can ask for responses on a schedule. This module decides,
for a given moment, whether a response is due and whether it is already
overdue. Business-day settings decide which days a response is expected on.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from formlogic.business_days import BusinessDaysConfig, is_business_day
from formlogic.errors import ConfigurationError

SCHEDULE_TYPES = ("daily", "one_time", "weekly", "monthly")


@dataclass(frozen=True)
class FormSchedule:
    """
    When responses to a form are expected.

    Properties:
        schedule_type: One of SCHEDULE_TYPES
        start_date: First day responses are expected
        end_date: Last day responses are expected (open-ended if None)
        schedule_time: Due time of day (due all day if None)
    """

    schedule_type: str
    start_date: date
    end_date: Optional[date] = None
    schedule_time: Optional[time] = None


@dataclass(frozen=True)
class DueStatus:
    """Whether a response is due, and whether it is late."""

    is_due: bool
    is_overdue: bool


NOT_DUE = DueStatus(is_due=False, is_overdue=False)


def parse_schedule_time(text: str) -> time:
    """
    Parse an "HH:MM" or "HH:MM:SS" due time.

    Due times have minute resolution: a seconds part is validated and then
    dropped, so "17:05:10" and "17:05" are the same due time.

    Raises:
        ConfigurationError: If the text is not a valid time of day
    """
    parts = text.strip().split(":")
    if len(parts) not in (2, 3):
        raise ConfigurationError(f"Invalid schedule time: {text!r}")
    try:
        parsed = time(*(int(part) for part in parts))
    except ValueError as exc:
        raise ConfigurationError(f"Invalid schedule time: {text!r}") from exc
    return parsed.replace(second=0)


def check_due_status(schedule: FormSchedule, business_days: BusinessDaysConfig, now: datetime) -> DueStatus:
    """
    Decide whether a response is due at `now`.

    Only daily schedules produce due responses. A daily form with a due
    time is due from that time on and overdue strictly after it; without a
    due time it is due all day and never overdue.

    Days outside the schedule window and non-business days are never due.
    """
    today = now.date()

    if today < schedule.start_date:
        return NOT_DUE
    if schedule.end_date is not None and today > schedule.end_date:
        return NOT_DUE
    if not is_business_day(today, business_days):
        return NOT_DUE

    if schedule.schedule_type != "daily":
        return NOT_DUE

    if schedule.schedule_time is None:
        return DueStatus(is_due=True, is_overdue=False)

    due_at = datetime.combine(today, schedule.schedule_time, tzinfo=now.tzinfo)
    return DueStatus(is_due=now >= due_at, is_overdue=now > due_at)


__all__ = [
    "SCHEDULE_TYPES",
    "FormSchedule",
    "DueStatus",
    "NOT_DUE",
    "parse_schedule_time",
    "check_due_status",
]
