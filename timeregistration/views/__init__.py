"""
Derived Views Layer

Responsibility:
Domain rules of the time registration grid, as pure functions, and their
wiring onto the derivation graph (RegistrationViews).

PRINCIPLES:
1. Pure: every rule is a function of its arguments only
2. Total: absent data yields defaults, never exceptions
3. Read-only: no rule writes to a root container
"""

from .calendar import (
    days_range, displayed_date_range, end_of_month, weekday_count,
    required_hours_for_month, is_month_read_only,
)
from .logs import (
    entries_on_day, find_log, total_hours_for_day, total_hours_for_task,
    total_hours, is_work_from_home, is_log_invalid,
)
from .selections import (
    IMPORT_STATUSES, has_status, filter_by_status, has_imported_data,
    is_any_loading, is_cell_loading, entries_for_selections,
)
from .imports import is_import_metadata_ready, selected_type_of_work_key
from .favorites import favorite_task_ids, is_task_favorite
from .hints import hint_message
from .catalog import RegistrationViews

__all__ = [
    'days_range', 'displayed_date_range', 'end_of_month', 'weekday_count',
    'required_hours_for_month', 'is_month_read_only',
    'entries_on_day', 'find_log', 'total_hours_for_day', 'total_hours_for_task',
    'total_hours', 'is_work_from_home', 'is_log_invalid',
    'IMPORT_STATUSES', 'has_status', 'filter_by_status', 'has_imported_data',
    'is_any_loading', 'is_cell_loading', 'entries_for_selections',
    'is_import_metadata_ready', 'selected_type_of_work_key',
    'favorite_task_ids', 'is_task_favorite',
    'hint_message',
    'RegistrationViews',
]
