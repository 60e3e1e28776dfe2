"""
Property Tests for the View Rules
Verifies the calendar, totals and conflict rules over generated months and
entries, and that derived values always agree with their rule.
"""

from datetime import date, timedelta

from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from timeregistration.contracts.base import (
    LogEntry, HOLIDAY_TASK_IDS, REQUIRED_HOURS_PER_WEEKDAY, start_of_month,
)
from timeregistration.reactive import DerivationGraph
from timeregistration.views.calendar import (
    days_range, required_hours_for_month, is_month_read_only,
)
from timeregistration.views.logs import (
    total_hours_for_day, total_hours, is_work_from_home, is_log_invalid,
)

# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

days = st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 12, 31))

TASK_IDS = st.sampled_from([101, 102, 103] + sorted(HOLIDAY_TASK_IDS))


@composite
def month_entries(draw):
    """Entries spread over the first week of one month."""
    month = start_of_month(draw(days))
    return tuple(
        LogEntry(
            task_id=draw(TASK_IDS),
            date=month + timedelta(days=draw(st.integers(min_value=0, max_value=6))),
            hours=draw(st.integers(min_value=0, max_value=16)) / 2,
            is_work_from_home=draw(st.booleans())
        )
        for _ in range(draw(st.integers(min_value=0, max_value=12)))
    )


# =============================================================================
# CALENDAR
# =============================================================================

@given(days)
def test_weekday_range_is_full_range_minus_weekends(cursor):
    full = days_range(cursor, include_weekends=True)
    weekdays = days_range(cursor, include_weekends=False)

    assert set(weekdays) <= set(full)
    assert all(d.weekday() >= 5 for d in set(full) - set(weekdays))
    assert list(weekdays) == sorted(weekdays)
    assert full[0].day == 1
    assert (full[-1] + timedelta(days=1)).day == 1


@given(days)
def test_required_hours_tracks_weekdays(cursor):
    weekdays = days_range(cursor, include_weekends=False)

    assert required_hours_for_month(cursor) == len(weekdays) * REQUIRED_HOURS_PER_WEEKDAY


@given(days, days)
def test_read_only_iff_before_current_month(month, today):
    expected = (month.year, month.month) < (today.year, today.month)

    assert is_month_read_only(month, today) is expected


# =============================================================================
# LOG ENTRY RULES
# =============================================================================

@given(month_entries())
def test_day_totals_add_up_to_month_total(entries):
    month_days = {e.date for e in entries}

    assert sum(total_hours_for_day(entries, d) for d in month_days) == total_hours(entries)


@given(month_entries())
def test_work_from_home_is_none_only_for_mixed_days(entries):
    for day in {e.date for e in entries}:
        flags = {e.is_work_from_home for e in entries if e.date == day}
        result = is_work_from_home(entries, day)

        if len(flags) > 1:
            assert result is None
        else:
            assert result is flags.pop()


@given(month_entries(), TASK_IDS)
def test_holiday_tasks_are_never_invalid(entries, task_id):
    for day in {e.date for e in entries}:
        invalid = is_log_invalid(entries, task_id, day)

        if task_id in HOLIDAY_TASK_IDS:
            assert invalid is False
        if not any(e.task_id == task_id and e.date == day for e in entries):
            assert invalid is False


# =============================================================================
# DERIVED VALUES
# =============================================================================

@given(st.lists(st.lists(st.integers(min_value=-5, max_value=5), max_size=3), max_size=10))
def test_derived_value_matches_rule_after_any_batches(batches):
    graph = DerivationGraph()
    left = graph.root(0, key="left")
    right = graph.root(0, key="right")
    total = graph.derive([left, right], lambda a, b: a + b, key="total")
    doubled = graph.derive([total, left], lambda t, a: t * 2 - a, key="doubled")

    seen = []
    doubled.subscribe(seen.append)

    for writes in batches:
        with graph.batch():
            for n, value in enumerate(writes):
                (left if n % 2 == 0 else right).set(value)

        expected = (left.get() + right.get()) * 2 - left.get()
        assert doubled.get() == expected
        assert seen[-1] == expected

    # every notification published a new value
    assert all(a != b for a, b in zip(seen, seen[1:]))
