"""In-memory watcher state.

State is never mutated in place: each loop iteration produces a new
WatchState, and the observed listings are swapped wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple

from core.dedup import ErrorLog
from core.models import Listing


@dataclass(frozen=True)
class WatchState:
    """Everything the loop remembers between polls."""

    started_at: float
    last_report_at: float
    observed: Tuple[Listing, ...] = ()
    polls: int = 0
    changed: bool = False
    errors: ErrorLog = field(default_factory=ErrorLog)

    @classmethod
    def initial(cls, now: float) -> "WatchState":
        return cls(started_at=now, last_report_at=now)

    def with_observed(self, listings: Tuple[Listing, ...]) -> "WatchState":
        return replace(self, observed=tuple(listings))
