"""
Log Entry Views
===============

Lookups and totals over the loaded log entries.

All date matching is day-level. Absent data yields zero totals and false
flags, never an error.
"""

from __future__ import annotations
from typing import Iterable, List, Optional

from ..contracts.base import DateLike, LogEntry, HOLIDAY_TASK_IDS, same_day


def entries_on_day(entries: Iterable[LogEntry], day: DateLike) -> List[LogEntry]:
    return [e for e in entries if same_day(e.date, day)]


def find_log(entries: Iterable[LogEntry], task_id: int, day: DateLike) -> Optional[LogEntry]:
    """First entry for the cell, if any."""
    for entry in entries:
        if entry.matches(task_id, day):
            return entry
    return None


def total_hours_for_day(entries: Iterable[LogEntry], day: DateLike) -> float:
    return sum((e.hours for e in entries if same_day(e.date, day)), 0)


def total_hours_for_task(entries: Iterable[LogEntry], task_id: int) -> float:
    return sum((e.hours for e in entries if e.task_id == task_id), 0)


def total_hours(entries: Iterable[LogEntry]) -> float:
    """Sum over the whole loaded set, which is already scoped to the month."""
    return sum((e.hours for e in entries), 0)


def is_work_from_home(entries: Iterable[LogEntry], day: DateLike) -> Optional[bool]:
    """
    Tri-state work location of a day.

    None when the day mixes home and office entries. A day without entries
    counts as office (False).
    """
    logs = entries_on_day(entries, day)
    any_from_home = any(e.is_work_from_home for e in logs)
    any_from_office = any(not e.is_work_from_home for e in logs)

    if any_from_home and any_from_office:
        return None
    return any_from_home


def is_log_invalid(entries: Iterable[LogEntry], task_id: int, day: DateLike) -> bool:
    """
    A normal task logged on a day that also carries a holiday entry.

    Holiday tasks themselves are never invalid.
    """
    if task_id in HOLIDAY_TASK_IDS:
        return False

    logs = entries_on_day(entries, day)
    if not any(e.task_id == task_id for e in logs):
        return False

    return any(e.task_id in HOLIDAY_TASK_IDS for e in logs)
