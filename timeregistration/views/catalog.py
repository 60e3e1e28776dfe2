"""
View Catalog
============

Wires every derived view of the grid onto one RegistrationState.

Month-level views are created up front. Per-cell views (one per task, day
or task/day pair) are created on first request and cached, so every reader
of the same cell shares one derived node. A cell is given back to the graph
when its last listener unsubscribes, or explicitly through release() /
dispose().
"""

from __future__ import annotations
from datetime import date
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..contracts.base import (
    DateLike, DateRange, DerivationError, ErrorCode, LogEntry, Selection,
    SelectionStatus, as_day,
)
from ..contracts.events import AuditEventType
from ..reactive import Clock, SystemClock, DerivedValue, Node
from ..state import RegistrationState
from . import calendar, favorites, hints, imports, logs, selections


class RegistrationViews:
    """
    Derived views of one registration session.

    READ-ONLY:
    ==========
    Every attribute is a DerivedValue; nothing here writes to the state.
    """

    def __init__(self, state: RegistrationState, clock: Optional[Clock] = None):
        self._state = state
        self._graph = state.graph
        self._clock = clock or SystemClock()
        self._month_views: List[DerivedValue] = []
        self._cells: Dict[Tuple[Any, ...], DerivedValue] = {}

        s = state

        # Calendar
        self.days_range: DerivedValue[Tuple[date, ...]] = self._view(
            "days_range", [s.month, s.display_weekend], calendar.days_range)
        self.displayed_date_range: DerivedValue[DateRange] = self._view(
            "displayed_date_range", [s.month], calendar.displayed_date_range)
        self.required_hours_for_month: DerivedValue[int] = self._view(
            "required_hours_for_month", [s.month], calendar.required_hours_for_month)
        self.grid_read_only: DerivedValue[bool] = self._view(
            "grid_read_only", [s.month], self._is_read_only)

        # Totals
        self.total_hours_for_month: DerivedValue[float] = self._view(
            "total_hours_for_month", [s.log_entries], logs.total_hours)

        # Loading & hints
        self.any_loading: DerivedValue[bool] = self._view(
            "any_loading", [s.loading_markers], selections.is_any_loading)
        self.hint_message: DerivedValue[str] = self._view(
            "hint_message",
            [s.month, s.logs_loading, s.selections, s.loading_markers, s.entering_mode],
            self._hint)

        # Selections & import
        self.has_imported_data: DerivedValue[bool] = self._view(
            "has_imported_data", [s.selections], selections.has_imported_data)
        self.selected: DerivedValue[Tuple[Selection, ...]] = self._view(
            "selected", [s.selections],
            partial(_by_status, statuses=(SelectionStatus.SELECTED,)))
        self.imported: DerivedValue[Tuple[Selection, ...]] = self._view(
            "imported", [s.selections],
            partial(_by_status, statuses=(SelectionStatus.IMPORTED,)))
        self.affected_selections: DerivedValue[Tuple[Selection, ...]] = self._view(
            "affected_selections", [s.selections],
            partial(_by_status, statuses=tuple(selections.IMPORT_STATUSES)))
        self.imported_entries: DerivedValue[Tuple[LogEntry, ...]] = self._view(
            "imported_entries", [self.imported, s.log_entries],
            selections.entries_for_selections)
        self.affected_entries: DerivedValue[Tuple[LogEntry, ...]] = self._view(
            "affected_entries", [self.affected_selections, s.log_entries],
            selections.entries_for_selections)
        self.import_metadata_ready: DerivedValue[bool] = self._view(
            "import_metadata_ready", [s.import_info], imports.is_import_metadata_ready)
        self.selected_type_of_work_key: DerivedValue[str] = self._view(
            "selected_type_of_work_key", [s.import_info, s.types_of_work],
            imports.selected_type_of_work_key)

        # Favorites
        self.favorite_task_ids: DerivedValue[Tuple[int, ...]] = self._view(
            "favorite_task_ids", [s.favorite_tasks], favorites.favorite_task_ids)

    @property
    def state(self) -> RegistrationState:
        return self._state

    @property
    def cell_view_count(self) -> int:
        return len(self._cells)

    # =========================================================================
    # PER-CELL VIEWS
    # =========================================================================

    def log_info(self, task_id: int, day: DateLike) -> DerivedValue[Optional[LogEntry]]:
        return self._cell("log_info", [self._state.log_entries], logs.find_log, task_id, as_day(day))

    def total_hours_for_day(self, day: DateLike) -> DerivedValue[float]:
        return self._cell("total_hours_for_day", [self._state.log_entries], logs.total_hours_for_day, as_day(day))

    def total_hours_for_task(self, task_id: int) -> DerivedValue[float]:
        return self._cell("total_hours_for_task", [self._state.log_entries], logs.total_hours_for_task, task_id)

    def is_work_from_home(self, day: DateLike) -> DerivedValue[Optional[bool]]:
        return self._cell("is_work_from_home", [self._state.log_entries], logs.is_work_from_home, as_day(day))

    def is_log_invalid(self, task_id: int, day: DateLike) -> DerivedValue[bool]:
        return self._cell("is_log_invalid", [self._state.log_entries], logs.is_log_invalid, task_id, as_day(day))

    def is_log_selected(self, task_id: int, day: DateLike) -> DerivedValue[bool]:
        return self._status_cell(task_id, day, SelectionStatus.SELECTED)

    def is_log_imported(self, task_id: int, day: DateLike) -> DerivedValue[bool]:
        return self._status_cell(task_id, day, SelectionStatus.IMPORTED)

    def is_log_updated(self, task_id: int, day: DateLike) -> DerivedValue[bool]:
        return self._status_cell(task_id, day, SelectionStatus.UPDATED)

    def is_log_loading(self, task_id: int, day: DateLike) -> DerivedValue[bool]:
        return self._cell("is_log_loading", [self._state.loading_markers], selections.is_cell_loading, task_id, as_day(day))

    def is_task_favorite(self, task_id: int) -> DerivedValue[bool]:
        return self._cell("is_task_favorite", [self.favorite_task_ids], favorites.is_task_favorite, task_id)

    def _status_cell(self, task_id: int, day: DateLike, status: SelectionStatus) -> DerivedValue[bool]:
        return self._cell(
            f"is_log_{status.value}", [self._state.selections], selections.has_status,
            task_id, as_day(day), status
        )

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def release(self, view: DerivedValue):
        """Dispose one per-cell view and forget it."""
        self._graph.dispose(view)
        for key, cached in list(self._cells.items()):
            if cached is view:
                del self._cells[key]

    def dispose(self):
        """
        Dispose every view this catalog created, dependents first.

        Refuses up front, leaving everything in place, when a node outside
        the catalog still depends on one of its views.
        """
        owned = [v for v in self._cells.values() if not v.is_disposed] + self._month_views
        owned_set = set(owned)
        for view in owned:
            outside = [n for n in self._graph.dependents(view) if n not in owned_set]
            if outside:
                raise DerivationError(
                    ErrorCode.NODE_HAS_DEPENDENTS,
                    f"View {view.key} is still used by {outside[0].key}",
                    node_key=view.key
                )

        for view in reversed(list(self._cells.values())):
            self._graph.dispose(view)
        self._cells.clear()

        for view in reversed(self._month_views):
            self._graph.dispose(view)
        self._month_views.clear()

    # =========================================================================
    # WIRING
    # =========================================================================

    def _view(self, name: str, deps: Sequence[Node], fn: Callable[..., Any]) -> DerivedValue:
        view = self._graph.derive(deps, fn, key=name)
        self._month_views.append(view)
        return view

    def _cell(self, name: str, deps: Sequence[Node], rule: Callable[..., Any], *args: Any) -> DerivedValue:
        cache_key = (name,) + args
        cached = self._cells.get(cache_key)
        if cached is not None and not cached.is_disposed:
            return cached

        label = ",".join(_label(a) for a in args)
        view = self._graph.derive(deps, partial(_bind_trailing, rule, args), key=f"{name}[{label}]")
        self._cells[cache_key] = view
        view.when_unobserved(self._release_idle)
        self._graph.observability.log_audit(
            AuditEventType.VIEW_CREATED,
            "cell_view",
            node_key=view.key,
            layer="views"
        )
        return view

    def _release_idle(self, view: Node):
        # Cells other nodes derive from stay until those are gone
        if view.is_disposed or self._graph.dependents(view):
            return
        self.release(view)

    def _is_read_only(self, month: date) -> bool:
        return calendar.is_month_read_only(month, self._clock.today())

    def _hint(self, month, logs_loading, selected, loading_markers, entering_mode) -> str:
        return hints.hint_message(
            month, logs_loading, selected, loading_markers, entering_mode,
            today=self._clock.today()
        )


def _by_status(all_selections, statuses) -> Tuple[Selection, ...]:
    return selections.filter_by_status(all_selections, statuses)


def _bind_trailing(rule: Callable[..., Any], args: Tuple[Any, ...], *values: Any) -> Any:
    """Call rule(*dep_values, *args)."""
    return rule(*values, *args)


def _label(value: Any) -> str:
    if isinstance(value, SelectionStatus):
        return value.value
    return str(value)
