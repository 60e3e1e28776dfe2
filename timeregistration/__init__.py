"""
Time Registration Derivation Layer

Read-only derived views of a monthly time registration grid, kept
consistently up to date as a small set of root containers change.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Immutable domain types, business constants, error states
   - MUST NOT: import from any other layer

2. REACTIVE ENGINE (reactive/)
   - Root containers, derived values, dependency graph, batching
   - MUST NOT: know anything about time registration

3. STATE (state.py)
   - The explicit set of root containers for one session

4. VIEWS (views/)
   - Pure domain rules and their wiring onto the graph
   - MUST NOT: write to root containers

5. OBSERVABILITY (observability/)
   - Audit log and counters of engine activity
   - MUST NOT: influence derivation

Persistence, transport and rendering belong to collaborators outside this
package.
"""

from .contracts import (
    LogEntry, Selection, SelectionStatus, LoadingMarker, ImportInfo,
    TypeOfWork, FavoriteTask, EnteringMode, DateRange,
    RegistrationError, DerivationError, PropagationError,
)
from .reactive import (
    DerivationGraph, DerivationConfig, RootContainer, DerivedValue, derive,
    Clock, SystemClock, FixedClock,
)
from .observability import ObservabilityEngine, ObservabilityConfig
from .state import RegistrationState, StateSnapshot
from .views import RegistrationViews
from .engine import TimeRegistrationEngine, RegistrationConfig

__all__ = [
    'LogEntry', 'Selection', 'SelectionStatus', 'LoadingMarker', 'ImportInfo',
    'TypeOfWork', 'FavoriteTask', 'EnteringMode', 'DateRange',
    'RegistrationError', 'DerivationError', 'PropagationError',
    'DerivationGraph', 'DerivationConfig', 'RootContainer', 'DerivedValue', 'derive',
    'Clock', 'SystemClock', 'FixedClock',
    'ObservabilityEngine', 'ObservabilityConfig',
    'RegistrationState', 'StateSnapshot',
    'RegistrationViews',
    'TimeRegistrationEngine', 'RegistrationConfig',
]
