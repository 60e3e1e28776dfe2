"""
Engine Orchestration Module

Single entry point that builds the graph, the root state and the view
catalog for one registration session.

DESIGN PRINCIPLES:
==================
1. Collaborators write through `engine.state`, read through `engine.views`
2. One graph per session; nothing is module-global
3. All activity is traceable through observability
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterator, Optional

from .observability import ObservabilityEngine, ObservabilityConfig
from .reactive import DerivationGraph, DerivationConfig, Clock, SystemClock
from .state import RegistrationState, StateSnapshot
from .views import RegistrationViews


@dataclass
class RegistrationConfig:
    """Unified configuration for a registration session."""
    derivation: DerivationConfig = None
    observability: ObservabilityConfig = None

    def __post_init__(self):
        self.derivation = self.derivation or DerivationConfig()
        self.observability = self.observability or ObservabilityConfig()


class TimeRegistrationEngine:
    """
    Unified session object for the time registration grid.

    LAYER FLOW:
    ===========
    1. Collaborator writes root containers (optionally inside batch())
    2. Graph commits and refreshes observed views in topological order
    3. Listeners receive post-commit values
    4. Observability records every commit, recompute and notification
    """

    def __init__(
        self,
        config: Optional[RegistrationConfig] = None,
        clock: Optional[Clock] = None,
        month: Optional[date] = None
    ):
        self._config = config or RegistrationConfig()
        self._clock = clock or SystemClock()

        self._observability = ObservabilityEngine(self._config.observability)
        self._graph = DerivationGraph(self._config.derivation, self._observability)
        self._state = RegistrationState(self._graph, month=month, clock=self._clock)
        self._views = RegistrationViews(self._state, clock=self._clock)

    @property
    def config(self) -> RegistrationConfig:
        return self._config

    @property
    def graph(self) -> DerivationGraph:
        return self._graph

    @property
    def state(self) -> RegistrationState:
        return self._state

    @property
    def views(self) -> RegistrationViews:
        return self._views

    @property
    def observability(self) -> ObservabilityEngine:
        return self._observability

    @contextmanager
    def batch(self) -> Iterator[RegistrationState]:
        with self._state.batch() as state:
            yield state

    def snapshot(self) -> StateSnapshot:
        return self._state.snapshot()

    def audit_report(self) -> Dict:
        return self._observability.generate_audit_report()

    def close(self):
        """Release every view created by this session."""
        self._views.dispose()
