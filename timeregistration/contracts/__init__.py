"""
Contracts Layer

Immutable domain types, business constants and error states shared by
every other layer. Contracts import nothing from the rest of the package.
"""

from .base import (
    DateLike, HOLIDAY_TASK_IDS, DEFAULT_TYPE_OF_WORK,
    REQUIRED_HOURS_PER_WEEKDAY, SAVING_MESSAGE_THRESHOLD,
    ErrorCode, RegistrationError, DerivationError, PropagationError,
    as_day, same_day, start_of_month,
    SelectionStatus, EnteringMode, LogEntry, Selection, LoadingMarker,
    ImportInfo, TypeOfWork, FavoriteTask, DateRange,
)
from .events import AuditEventType, AuditLogEntry

__all__ = [
    'DateLike', 'HOLIDAY_TASK_IDS', 'DEFAULT_TYPE_OF_WORK',
    'REQUIRED_HOURS_PER_WEEKDAY', 'SAVING_MESSAGE_THRESHOLD',
    'ErrorCode', 'RegistrationError', 'DerivationError', 'PropagationError',
    'as_day', 'same_day', 'start_of_month',
    'SelectionStatus', 'EnteringMode', 'LogEntry', 'Selection', 'LoadingMarker',
    'ImportInfo', 'TypeOfWork', 'FavoriteTask', 'DateRange',
    'AuditEventType', 'AuditLogEntry',
]
