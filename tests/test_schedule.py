"""
Tests for response schedules and due status.
"""

from datetime import date, datetime, time

import pytest
from formlogic.business_days import BusinessDaysConfig
from formlogic.errors import ConfigurationError
from formlogic.schedule import DueStatus, FormSchedule, check_due_status, parse_schedule_time

WEEKDAYS = BusinessDaysConfig(business_days_only=True, business_days=(1, 2, 3, 4, 5))
ALL_DAYS = BusinessDaysConfig(business_days_only=False)

DAILY_AT_NINE = FormSchedule(
    schedule_type="daily",
    start_date=date(2024, 1, 1),
    end_date=date(2024, 1, 31),
    schedule_time=time(9, 0),
)


class TestParseScheduleTime:
    """Test due-time parsing."""

    def test_hours_minutes(self):
        assert parse_schedule_time("09:30") == time(9, 30)

    def test_seconds_dropped(self):
        assert parse_schedule_time("17:05:10") == time(17, 5)

    def test_bad_seconds_rejected(self):
        with pytest.raises(ConfigurationError):
            parse_schedule_time("17:05:99")

    @pytest.mark.parametrize("text", ["9", "25:00", "ab:cd", "1:2:3:4", ""])
    def test_invalid(self, text):
        with pytest.raises(ConfigurationError):
            parse_schedule_time(text)


class TestCheckDueStatus:
    """Test due / overdue decisions."""

    def test_before_due_time(self):
        status = check_due_status(DAILY_AT_NINE, WEEKDAYS, datetime(2024, 1, 2, 8, 59))
        assert status == DueStatus(is_due=False, is_overdue=False)

    def test_exactly_at_due_time(self):
        status = check_due_status(DAILY_AT_NINE, WEEKDAYS, datetime(2024, 1, 2, 9, 0))
        assert status == DueStatus(is_due=True, is_overdue=False)

    def test_after_due_time(self):
        status = check_due_status(DAILY_AT_NINE, WEEKDAYS, datetime(2024, 1, 2, 9, 1))
        assert status == DueStatus(is_due=True, is_overdue=True)

    def test_weekend_not_due(self):
        status = check_due_status(DAILY_AT_NINE, WEEKDAYS, datetime(2024, 1, 6, 12, 0))
        assert status.is_due is False
        assert check_due_status(DAILY_AT_NINE, ALL_DAYS, datetime(2024, 1, 6, 12, 0)).is_overdue is True

    def test_outside_window(self):
        assert not check_due_status(DAILY_AT_NINE, ALL_DAYS, datetime(2023, 12, 31, 12, 0)).is_due
        assert not check_due_status(DAILY_AT_NINE, ALL_DAYS, datetime(2024, 2, 1, 12, 0)).is_due

    def test_end_date_inclusive(self):
        assert check_due_status(DAILY_AT_NINE, ALL_DAYS, datetime(2024, 1, 31, 12, 0)).is_due

    def test_no_due_time_due_all_day(self):
        schedule = FormSchedule(schedule_type="daily", start_date=date(2024, 1, 1))
        status = check_due_status(schedule, WEEKDAYS, datetime(2024, 1, 3, 23, 59))
        assert status == DueStatus(is_due=True, is_overdue=False)

    @pytest.mark.parametrize("schedule_type", ["one_time", "weekly", "monthly", "unknown"])
    def test_other_schedule_types_not_due(self, schedule_type):
        schedule = FormSchedule(schedule_type=schedule_type, start_date=date(2024, 1, 1), schedule_time=time(9, 0))
        assert check_due_status(schedule, ALL_DAYS, datetime(2024, 1, 2, 12, 0)) == DueStatus(False, False)
