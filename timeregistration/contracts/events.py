"""
Event Contracts
===============

Immutable records emitted by the derivation engine for observability.
These are COPIES of what happened; nothing reads them back to make decisions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple
from enum import Enum


class AuditEventType(Enum):
    """Explicit audit event types."""
    BATCH_COMMITTED = "batch_committed"
    BATCH_DISCARDED = "batch_discarded"
    RECOMPUTED = "recomputed"
    PUBLISHED = "published"
    SUPPRESSED = "suppressed"
    NOTIFIED = "notified"
    DISPOSED = "disposed"
    VIEW_CREATED = "view_created"
    LISTENER_FAILED = "listener_failed"
    DERIVATION_FAILED = "derivation_failed"


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable audit log entry."""
    entry_id: str
    event_type: AuditEventType
    timestamp: datetime
    layer: str  # Which layer generated this
    action: str
    node_key: Optional[str] = None
    metadata: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def get_metadata(self, key: str) -> Optional[str]:
        for k, v in self.metadata:
            if k == key:
                return v
        return None

