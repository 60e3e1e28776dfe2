"""
Selection & Loading Views
=========================

Cell status predicates over the selection and loading-marker collections.

Selections are searched, never keyed: one (task_id, day) can carry several
status records, so every lookup matches on the status too.
"""

from __future__ import annotations
from typing import Collection, Iterable, Tuple

from ..contracts.base import (
    DateLike, LogEntry, Selection, SelectionStatus, LoadingMarker,
)


IMPORT_STATUSES = frozenset({SelectionStatus.IMPORTED, SelectionStatus.UPDATED})


def has_status(
    selections: Iterable[Selection],
    task_id: int,
    day: DateLike,
    status: SelectionStatus
) -> bool:
    return any(s.status == status and s.matches(task_id, day) for s in selections)


def filter_by_status(
    selections: Iterable[Selection],
    statuses: Collection[SelectionStatus]
) -> Tuple[Selection, ...]:
    return tuple(s for s in selections if s.status in statuses)


def has_imported_data(selections: Iterable[Selection]) -> bool:
    return any(s.status in IMPORT_STATUSES for s in selections)


def is_any_loading(markers: Collection[LoadingMarker]) -> bool:
    return len(markers) > 0


def is_cell_loading(markers: Iterable[LoadingMarker], task_id: int, day: DateLike) -> bool:
    return any(m.matches(task_id, day) for m in markers)


def entries_for_selections(
    selections: Iterable[Selection],
    entries: Iterable[LogEntry]
) -> Tuple[LogEntry, ...]:
    """Log entries sitting in a selected cell, in entry order."""
    selections = tuple(selections)
    return tuple(
        entry for entry in entries
        if any(s.matches(entry.task_id, entry.date) for s in selections)
    )
