"""
Test Fixtures

Fixed dates and hand-written entries so every test is deterministic.
October 2026 starts on a Thursday: 31 days, 22 weekdays.
"""

from datetime import date, datetime

from timeregistration import (
    TimeRegistrationEngine, FixedClock, LogEntry, Selection, SelectionStatus,
    LoadingMarker,
)


# =============================================================================
# FIXED DATES (deterministic)
# =============================================================================

TODAY = date(2026, 10, 17)
CURRENT_MONTH = date(2026, 10, 1)
PAST_MONTH = date(2026, 9, 1)
FUTURE_MONTH = date(2026, 11, 1)

MON = date(2026, 10, 5)
TUE = date(2026, 10, 6)
WED = date(2026, 10, 7)
SAT = date(2026, 10, 10)

NORMAL_TASK = 101
OTHER_TASK = 102
HOLIDAY_TASK = 193
SECOND_HOLIDAY_TASK = 194


# =============================================================================
# ENTRY FIXTURES
# =============================================================================

def sample_entries():
    """A small month: split hours on Monday, a holiday clash on Tuesday."""
    return (
        LogEntry(task_id=NORMAL_TASK, date=MON, hours=4, is_work_from_home=True),
        LogEntry(task_id=NORMAL_TASK, date=MON, hours=2.5, is_work_from_home=True),
        LogEntry(task_id=OTHER_TASK, date=MON, hours=1.5, is_work_from_home=True),
        LogEntry(task_id=NORMAL_TASK, date=TUE, hours=3, is_work_from_home=False),
        LogEntry(task_id=HOLIDAY_TASK, date=TUE, hours=8, is_work_from_home=True),
        LogEntry(task_id=OTHER_TASK, date=WED, hours=8, is_work_from_home=False),
    )


def selections(count, status=SelectionStatus.SELECTED, task_id=NORMAL_TASK):
    return tuple(
        Selection(task_id=task_id, day=date(2026, 10, 1 + i), status=status)
        for i in range(count)
    )


def markers(count, task_id=NORMAL_TASK):
    return tuple(
        LoadingMarker(task_id=task_id, day=date(2026, 10, 1 + i))
        for i in range(count)
    )


def noon(day):
    return datetime(day.year, day.month, day.day, 12, 30)


def make_engine(month=CURRENT_MONTH, today=TODAY):
    return TimeRegistrationEngine(clock=FixedClock(today), month=month)
