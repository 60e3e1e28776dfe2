"""
Log Entry View Tests
====================

Lookups, totals, work location and the holiday conflict rule.
"""

from datetime import date

import pytest

from timeregistration.contracts.base import LogEntry
from timeregistration.views.logs import (
    find_log, total_hours_for_day, total_hours_for_task, total_hours,
    is_work_from_home, is_log_invalid,
)

from tests.fixtures import (
    sample_entries, noon, MON, TUE, WED, SAT,
    NORMAL_TASK, OTHER_TASK, HOLIDAY_TASK, SECOND_HOLIDAY_TASK,
)


class TestLookup:

    def test_first_matching_entry(self):
        entries = sample_entries()

        found = find_log(entries, NORMAL_TASK, MON)

        assert found is entries[0]

    def test_day_level_match_ignores_time(self):
        entries = (LogEntry(task_id=NORMAL_TASK, date=noon(MON), hours=2),)

        assert find_log(entries, NORMAL_TASK, MON) is entries[0]

    def test_missing_cell(self):
        assert find_log(sample_entries(), NORMAL_TASK, SAT) is None
        assert find_log((), NORMAL_TASK, MON) is None


class TestTotals:

    def test_day_sums_across_tasks_and_splits(self):
        assert total_hours_for_day(sample_entries(), MON) == 8

    def test_day_without_entries_is_zero(self):
        assert total_hours_for_day(sample_entries(), SAT) == 0
        assert total_hours_for_day((), SAT) == 0

    def test_task_sums_across_days(self):
        assert total_hours_for_task(sample_entries(), NORMAL_TASK) == 9.5
        assert total_hours_for_task(sample_entries(), 999) == 0

    def test_month_sums_everything(self):
        assert total_hours(sample_entries()) == 27
        assert total_hours(()) == 0


class TestWorkFromHome:

    def test_all_from_home(self):
        assert is_work_from_home(sample_entries(), MON) is True

    def test_all_from_office(self):
        assert is_work_from_home(sample_entries(), WED) is False

    def test_mixed_day_is_ambiguous(self):
        assert is_work_from_home(sample_entries(), TUE) is None

    def test_empty_day_defaults_to_office(self):
        assert is_work_from_home(sample_entries(), SAT) is False


class TestInvalidity:

    def test_task_alongside_holiday_is_invalid(self):
        assert is_log_invalid(sample_entries(), NORMAL_TASK, TUE)

    @pytest.mark.parametrize("task_id", [HOLIDAY_TASK, SECOND_HOLIDAY_TASK])
    def test_holiday_tasks_never_invalid(self, task_id):
        entries = (
            LogEntry(task_id=HOLIDAY_TASK, date=TUE, hours=4),
            LogEntry(task_id=SECOND_HOLIDAY_TASK, date=TUE, hours=4),
        )

        assert not is_log_invalid(entries, task_id, TUE)

    def test_no_entry_for_task_is_valid(self):
        assert not is_log_invalid(sample_entries(), OTHER_TASK, TUE)

    def test_day_without_holiday_is_valid(self):
        assert not is_log_invalid(sample_entries(), NORMAL_TASK, MON)

    def test_second_holiday_task_also_conflicts(self):
        entries = (
            LogEntry(task_id=OTHER_TASK, date=date(2026, 10, 8), hours=2),
            LogEntry(task_id=SECOND_HOLIDAY_TASK, date=noon(date(2026, 10, 8)), hours=6),
        )

        assert is_log_invalid(entries, OTHER_TASK, date(2026, 10, 8))
