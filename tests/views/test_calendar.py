"""
Calendar View Tests
===================

Day ranges, required hours and the past-month lock.
"""

from datetime import date, datetime

import pytest

from timeregistration.contracts.base import DateRange
from timeregistration.views.calendar import (
    days_range, displayed_date_range, end_of_month, weekday_count,
    required_hours_for_month, is_month_read_only,
)

from tests.fixtures import TODAY, CURRENT_MONTH, PAST_MONTH, FUTURE_MONTH


class TestDaysRange:

    def test_full_month_with_weekends(self):
        days = days_range(date(2026, 10, 17), include_weekends=True)

        assert len(days) == 31
        assert days[0] == date(2026, 10, 1)
        assert days[-1] == date(2026, 10, 31)
        assert all(isinstance(d, date) for d in days)

    def test_weekends_excluded(self):
        days = days_range(CURRENT_MONTH, include_weekends=False)

        assert len(days) == 22
        assert all(d.weekday() < 5 for d in days)
        assert date(2026, 10, 3) not in days
        assert date(2026, 10, 31) not in days

    def test_leap_february(self):
        days = days_range(date(2028, 2, 10), include_weekends=True)

        assert len(days) == 29
        assert days[-1] == date(2028, 2, 29)

    def test_datetime_cursor_accepted(self):
        days = days_range(datetime(2026, 10, 17, 23, 59), include_weekends=True)

        assert days[0] == date(2026, 10, 1)


class TestDisplayedDateRange:

    def test_bounds(self):
        assert displayed_date_range(date(2026, 2, 14)) == DateRange(
            start_date=date(2026, 2, 1),
            end_date=date(2026, 2, 28)
        )

    def test_contains(self):
        bounds = displayed_date_range(CURRENT_MONTH)

        assert bounds.contains(date(2026, 10, 31))
        assert not bounds.contains(date(2026, 11, 1))

    def test_end_of_month_december(self):
        assert end_of_month(date(2026, 12, 5)) == date(2026, 12, 31)


class TestRequiredHours:

    @pytest.mark.parametrize("month, weekdays", [
        (date(2026, 10, 1), 22),
        (date(2026, 2, 1), 20),
        (date(2026, 8, 1), 21),
    ])
    def test_weekdays_times_eight(self, month, weekdays):
        assert weekday_count(month) == weekdays
        assert required_hours_for_month(month) == weekdays * 8

    def test_matches_weekday_range(self):
        weekdays = days_range(CURRENT_MONTH, include_weekends=False)

        assert required_hours_for_month(CURRENT_MONTH) == len(weekdays) * 8


class TestReadOnly:

    def test_past_month_is_read_only(self):
        assert is_month_read_only(PAST_MONTH, TODAY)

    def test_current_month_is_editable(self):
        assert not is_month_read_only(CURRENT_MONTH, TODAY)
        assert not is_month_read_only(date(2026, 10, 31), TODAY)

    def test_future_month_is_editable(self):
        assert not is_month_read_only(FUTURE_MONTH, TODAY)

    def test_previous_year_is_read_only(self):
        assert is_month_read_only(date(2025, 12, 31), date(2026, 1, 1))
