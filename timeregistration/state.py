"""
Registration State
==================

The explicit set of root containers for one session.

The application shell creates one RegistrationState and passes it by
reference. Collaborators write to the containers; views only read them.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, fields
from datetime import date
from typing import Iterator, Optional, Tuple
import hashlib

from .contracts.base import (
    LogEntry, Selection, LoadingMarker, ImportInfo, TypeOfWork, FavoriteTask,
    EnteringMode, start_of_month,
)
from .reactive import DerivationGraph, RootContainer, Clock, SystemClock


@dataclass(frozen=True)
class StateSnapshot:
    """Immutable copy of every root value at one point in time."""
    log_entries: Tuple[LogEntry, ...]
    logs_loading: bool
    selections: Tuple[Selection, ...]
    loading_markers: Tuple[LoadingMarker, ...]
    month: date
    entering_mode: EnteringMode
    display_weekend: bool
    import_info: Optional[ImportInfo]
    types_of_work: Tuple[TypeOfWork, ...]
    favorite_tasks: Tuple[FavoriteTask, ...]

    def state_hash(self) -> str:
        """Deterministic hash of the snapshot contents."""
        parts = [f"{f.name}={getattr(self, f.name)!r}" for f in fields(self)]
        return hashlib.sha256("|".join(parts).encode('utf-8')).hexdigest()


class RegistrationState:
    """
    Root containers of the time registration grid.

    DEFAULTS:
    =========
    Empty collections, no loading, idle mode, weekends hidden, empty import
    info, and the month containing `clock.today()` unless given.
    """

    def __init__(
        self,
        graph: DerivationGraph,
        month: Optional[date] = None,
        clock: Optional[Clock] = None
    ):
        self._graph = graph
        initial_month = month or (clock or SystemClock()).today()

        self.log_entries: RootContainer[Tuple[LogEntry, ...]] = graph.root((), key="log_entries")
        self.logs_loading: RootContainer[bool] = graph.root(False, key="logs_loading")
        self.selections: RootContainer[Tuple[Selection, ...]] = graph.root((), key="selections")
        self.loading_markers: RootContainer[Tuple[LoadingMarker, ...]] = graph.root((), key="loading_markers")
        self.month: RootContainer[date] = graph.root(start_of_month(initial_month), key="month")
        self.entering_mode: RootContainer[EnteringMode] = graph.root(EnteringMode.IDLE, key="entering_mode")
        self.display_weekend: RootContainer[bool] = graph.root(False, key="display_weekend")
        self.import_info: RootContainer[Optional[ImportInfo]] = graph.root(ImportInfo(), key="import_info")
        self.types_of_work: RootContainer[Tuple[TypeOfWork, ...]] = graph.root((), key="types_of_work")
        self.favorite_tasks: RootContainer[Tuple[FavoriteTask, ...]] = graph.root((), key="favorite_tasks")

    @property
    def graph(self) -> DerivationGraph:
        return self._graph

    @contextmanager
    def batch(self) -> Iterator['RegistrationState']:
        """Apply several container writes as one commit."""
        with self._graph.batch():
            yield self

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            log_entries=tuple(self.log_entries.get()),
            logs_loading=self.logs_loading.get(),
            selections=tuple(self.selections.get()),
            loading_markers=tuple(self.loading_markers.get()),
            month=self.month.get(),
            entering_mode=self.entering_mode.get(),
            display_weekend=self.display_weekend.get(),
            import_info=self.import_info.get(),
            types_of_work=tuple(self.types_of_work.get()),
            favorite_tasks=tuple(self.favorite_tasks.get()),
        )
