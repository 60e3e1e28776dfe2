"""
Reactive Layer
==============

Incremental dependency graph turning pure functions into consistently
updated read-only values.

INVARIANTS:
- Root containers change only through set/update, inside or outside a batch
- Derived values are pure functions of their dependencies' committed values
- Observers never see a derived value computed from a partially applied batch

Modules:
- nodes: RootContainer / DerivedValue and the shared read/subscribe contract
- graph: DAG ownership, batching and topological propagation
- clock: injectable source of "today"
"""

from .nodes import Node, RootContainer, DerivedValue, values_equal
from .graph import DerivationGraph, DerivationConfig, derive
from .clock import Clock, SystemClock, FixedClock

__all__ = [
    'Node',
    'RootContainer',
    'DerivedValue',
    'values_equal',
    'DerivationGraph',
    'DerivationConfig',
    'derive',
    'Clock',
    'SystemClock',
    'FixedClock',
]
