"""
Observability & Audit Layer

RESPONSIBILITY: Record what the derivation engine does
ALLOWED INPUTS: Audit entries and counter increments from the engine and views
OUTPUTS: AuditLogEntry lists, counters

WHAT THIS LAYER MUST NOT DO:
============================
- Modify derivation behavior
- Make decisions based on logged data
- Hold references to root or derived values (metadata is stringified)
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional, Tuple
import itertools

from ..contracts.base import utc_now, make_entry_id
from ..contracts.events import AuditLogEntry, AuditEventType


# =============================================================================
# LOG COLLECTORS (One per layer)
# =============================================================================

class LogCollector:
    """
    Append-only audit collector for one layer.

    Bounded: once max_entries is reached the oldest entries are dropped.
    """

    def __init__(self, layer_name: str, max_entries: int = 10_000):
        self._layer_name = layer_name
        self._entries: Deque[AuditLogEntry] = deque(maxlen=max_entries)
        self._sequence: int = 0

    def collect(self, entry: AuditLogEntry):
        """Collect an audit entry (append-only)."""
        self._entries.append(entry)
        self._sequence += 1

    def get_entries(
        self,
        event_type: Optional[AuditEventType] = None,
        node_key: Optional[str] = None
    ) -> List[AuditLogEntry]:
        """Get entries, optionally filtered."""
        entries = list(self._entries)

        if event_type:
            entries = [e for e in entries if e.event_type == event_type]

        if node_key:
            entries = [e for e in entries if e.node_key == node_key]

        return entries

    @property
    def layer_name(self) -> str:
        return self._layer_name

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    @property
    def sequence(self) -> int:
        """Total entries ever collected, including dropped ones."""
        return self._sequence


# =============================================================================
# METRICS COLLECTOR
# =============================================================================

class MetricsCollector:
    """
    Named counters, optionally labelled by node key.

    The unlabelled counter is always the total over all labels.
    """

    DEFAULT_METRICS = (
        "batch_count",
        "recompute_count",
        "publish_count",
        "suppressed_count",
        "notify_count",
    )

    def __init__(self):
        self._counters: Dict[Tuple[str, Optional[str]], float] = {}
        for name in self.DEFAULT_METRICS:
            self._counters[(name, None)] = 0

    def increment(self, metric_name: str, node_key: Optional[str] = None, value: float = 1):
        total = (metric_name, None)
        self._counters[total] = self._counters.get(total, 0) + value
        if node_key is not None:
            labelled = (metric_name, node_key)
            self._counters[labelled] = self._counters.get(labelled, 0) + value

    def get_count(self, metric_name: str, node_key: Optional[str] = None) -> float:
        return self._counters.get((metric_name, node_key), 0)

    def get_all_metrics(self) -> Dict[str, float]:
        """Unlabelled totals (copy)."""
        return {
            name: value
            for (name, label), value in self._counters.items()
            if label is None
        }

    def reset(self):
        for key in list(self._counters):
            self._counters[key] = 0


# =============================================================================
# OBSERVABILITY ENGINE
# =============================================================================

@dataclass
class ObservabilityConfig:
    """Configuration for observability engine."""
    enable_audit: bool = True
    enable_metrics: bool = True
    max_entries: int = 10_000


class ObservabilityEngine:
    """
    Central observability for the derivation layer.

    BOUNDARY ENFORCEMENT:
    - ONLY observes, never modifies
    - Disabled collectors turn every call into a no-op
    """

    LAYERS = ('engine', 'views')

    def __init__(self, config: Optional[ObservabilityConfig] = None):
        self._config = config or ObservabilityConfig()
        self._counter = itertools.count(1)

        self._collectors: Dict[str, LogCollector] = {}
        if self._config.enable_audit:
            self._collectors = {
                name: LogCollector(name, self._config.max_entries)
                for name in self.LAYERS
            }

        self._metrics = MetricsCollector() if self._config.enable_metrics else None

    def log_audit(
        self,
        event_type: AuditEventType,
        action: str,
        node_key: Optional[str] = None,
        layer: str = "engine",
        **details: object
    ):
        """Record an audit entry; detail values are stringified."""
        collector = self._collectors.get(layer)
        if collector is None:
            return

        sequence = next(self._counter)
        entry = AuditLogEntry(
            entry_id=make_entry_id("audit", layer, action, node_key, sequence),
            event_type=event_type,
            timestamp=utc_now(),
            layer=layer,
            action=action,
            node_key=node_key,
            metadata=tuple((k, str(v)) for k, v in sorted(details.items()))
        )
        collector.collect(entry)

    def count(self, metric_name: str, node_key: Optional[str] = None):
        if self._metrics:
            self._metrics.increment(metric_name, node_key)

    def get_layer_log(
        self,
        layer_name: str,
        event_type: Optional[AuditEventType] = None
    ) -> List[AuditLogEntry]:
        """Get log for a specific layer."""
        collector = self._collectors.get(layer_name)
        if not collector:
            return []
        return collector.get_entries(event_type=event_type)

    def get_unified_log(self) -> List[AuditLogEntry]:
        """All layers, ordered by timestamp."""
        entries = []
        for collector in self._collectors.values():
            entries.extend(collector.get_entries())
        entries.sort(key=lambda e: e.timestamp)
        return entries

    def get_metrics(self) -> Optional[MetricsCollector]:
        """Get metrics collector (read-only access)."""
        return self._metrics

    def generate_audit_report(self) -> Dict:
        """Counts by layer and by event type."""
        entries = self.get_unified_log()

        by_layer: Dict[str, int] = {}
        by_type: Dict[str, int] = {}
        for entry in entries:
            by_layer[entry.layer] = by_layer.get(entry.layer, 0) + 1
            by_type[entry.event_type.value] = by_type.get(entry.event_type.value, 0) + 1

        return {
            'total_entries': len(entries),
            'by_layer': by_layer,
            'by_event_type': by_type,
            'metrics': self._metrics.get_all_metrics() if self._metrics else {},
            'generated_at': utc_now().isoformat(),
        }


__all__ = [
    'LogCollector',
    'MetricsCollector',
    'ObservabilityConfig',
    'ObservabilityEngine',
]
