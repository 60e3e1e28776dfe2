"""
Calendar Views
==============

Month-level day arithmetic for the grid.

Business days are Monday to Friday; no public holiday calendar is applied.
"""

from __future__ import annotations
from calendar import monthrange
from datetime import date, timedelta
from typing import Tuple

import numpy as np

from ..contracts.base import (
    DateLike, DateRange, REQUIRED_HOURS_PER_WEEKDAY, as_day, start_of_month,
)


def end_of_month(value: DateLike) -> date:
    day = as_day(value)
    return day.replace(day=monthrange(day.year, day.month)[1])


def displayed_date_range(month: DateLike) -> DateRange:
    """First and last day of the month containing `month`."""
    return DateRange(start_date=start_of_month(month), end_date=end_of_month(month))


def days_range(month: DateLike, include_weekends: bool) -> Tuple[date, ...]:
    """Every day of the month, optionally without Saturdays and Sundays."""
    bounds = displayed_date_range(month)
    days = np.arange(
        np.datetime64(bounds.start_date, 'D'),
        np.datetime64(bounds.end_date, 'D') + 1
    )
    if not include_weekends:
        days = days[np.is_busday(days)]
    return tuple(days.tolist())


def weekday_count(month: DateLike) -> int:
    bounds = displayed_date_range(month)
    return int(np.busday_count(bounds.start_date, bounds.end_date + timedelta(days=1)))


def required_hours_for_month(month: DateLike) -> int:
    """Placeholder: every weekday requires the same number of hours."""
    return weekday_count(month) * REQUIRED_HOURS_PER_WEEKDAY


def is_month_read_only(month: DateLike, today: DateLike) -> bool:
    """Past months are locked for editing."""
    return start_of_month(month) < start_of_month(today)
