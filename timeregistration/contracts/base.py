"""
Base Contracts and Shared Types
===============================

Foundational types for the time registration grid.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- Root containers hold these values; derivations only read them
- All types are frozen dataclasses for immutability guarantee
- Absent optional data is an explicit None, never a missing attribute
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Union
from enum import Enum, auto
import hashlib


DateLike = Union[date, datetime]


# =============================================================================
# BUSINESS CONSTANTS
# =============================================================================

# Reserved "holiday" task numbers
HOLIDAY_TASK_IDS = frozenset({193, 194})

DEFAULT_TYPE_OF_WORK = "PROG"

# TODO: replace with the per-employee required hours once the backend exposes them
REQUIRED_HOURS_PER_WEEKDAY = 8

# Loading marker count at which the hint switches to the counted message
SAVING_MESSAGE_THRESHOLD = 5


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """Explicit error codes for engine misuse."""
    DERIVATION_FAILED = auto()
    NODE_HAS_DEPENDENTS = auto()
    FOREIGN_DEPENDENCY = auto()
    NODE_DISPOSED = auto()
    PROPAGATION_OVERFLOW = auto()


class RegistrationError(Exception):
    """Base error for the derivation layer."""

    def __init__(self, code: ErrorCode, message: str, node_key: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.node_key = node_key


class DerivationError(RegistrationError):
    """A derivation function raised, or a node was used incorrectly."""
    pass


class PropagationError(RegistrationError):
    """Re-entrant commits did not settle within the configured rounds."""
    pass


# =============================================================================
# DAY-LEVEL HELPERS
# =============================================================================

def as_day(value: DateLike) -> date:
    """Truncate a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def same_day(left: DateLike, right: DateLike) -> bool:
    """Day-level equality, ignoring time of day."""
    return as_day(left) == as_day(right)


def start_of_month(value: DateLike) -> date:
    return as_day(value).replace(day=1)


# =============================================================================
# DOMAIN TYPES
# =============================================================================

class SelectionStatus(Enum):
    """Interaction state of a grid cell."""
    SELECTED = "selected"
    IMPORTED = "imported"
    UPDATED = "updated"


class EnteringMode(Enum):
    """Current bulk-edit mode of the grid."""
    IDLE = "idle"
    HOURS = "hours"


@dataclass(frozen=True)
class LogEntry:
    """
    Logged work for a task on a day.

    Several entries may share a (task_id, date) pair, e.g. split hours.
    """
    task_id: int
    date: DateLike
    hours: float
    is_work_from_home: bool = False

    def __post_init__(self):
        if self.hours < 0:
            raise ValueError("LogEntry hours must be non-negative")

    def matches(self, task_id: int, day: DateLike) -> bool:
        return self.task_id == task_id and same_day(self.date, day)


@dataclass(frozen=True)
class Selection:
    """
    Grid cell interaction record.

    Independent of whether a LogEntry exists for the cell. The same
    (task_id, day) may appear with several statuses at once.
    """
    task_id: int
    day: DateLike
    status: SelectionStatus = SelectionStatus.SELECTED

    def matches(self, task_id: int, day: DateLike) -> bool:
        return self.task_id == task_id and same_day(self.day, day)


@dataclass(frozen=True)
class LoadingMarker:
    """A cell whose backing entry is in flight."""
    task_id: int
    day: DateLike

    def matches(self, task_id: int, day: DateLike) -> bool:
        return self.task_id == task_id and same_day(self.day, day)


@dataclass(frozen=True)
class ImportInfo:
    """
    Import metadata chosen by the user.

    None means "not yet chosen" for every field.
    """
    is_work_from_home: Optional[bool] = None
    selected_type_of_work_index: Optional[int] = None
    work_from_home_start: Optional[date] = None


@dataclass(frozen=True)
class TypeOfWork:
    """Catalog entry; addressed by its index in the catalog."""
    key: Optional[str]
    name: Optional[str] = None


@dataclass(frozen=True)
class FavoriteTask:
    task_number: int


@dataclass(frozen=True)
class DateRange:
    """Inclusive first/last day of the displayed month."""
    start_date: date
    end_date: date

    def contains(self, value: DateLike) -> bool:
        return self.start_date <= as_day(value) <= self.end_date


# =============================================================================
# AUDIT IDENTITY
# =============================================================================

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def make_entry_id(prefix: str, *parts: object) -> str:
    """Deterministic short id from its parts."""
    seed = "|".join(str(p) for p in parts)
    digest = hashlib.sha256(seed.encode('utf-8')).hexdigest()[:16]
    return f"{prefix}_{digest}"
