"""
Injectable Clock
================

Every "what is today" question goes through a clock so that views comparing
against the present month stay deterministic under test.

Derivations read the clock when they recompute; a clock change alone does
not trigger recomputation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import List


class Clock:
    """Source of the current calendar day."""

    def today(self) -> date:
        raise NotImplementedError


class SystemClock(Clock):
    """Uses the local system date."""

    def today(self) -> date:
        return date.today()

    def __repr__(self) -> str:
        return "SystemClock()"


@dataclass
class FixedClock(Clock):
    """
    Clock pinned to a given day.

    Every read is recorded so tests can assert whether a derivation
    consulted the clock.
    """
    current: date
    _reads: List[date] = field(default_factory=list, init=False, repr=False)

    def today(self) -> date:
        self._reads.append(self.current)
        return self.current

    def set(self, value: date):
        self.current = value

    def read_count(self) -> int:
        return len(self._reads)
