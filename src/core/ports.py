"""Ports (interfaces) used by the core watcher.

Ports define the minimal contracts for scraping, notification and time so
that the core can run against real adapters or test fakes.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from core.models import Notification


class ScraperPort(Protocol):
    """Listing source polled once per cycle."""

    async def fetch(self) -> Sequence[Any]:
        """Return Listing objects or mappings with name/size/price.

        Raises FetchError when the source cannot be read.
        """
        ...


class NotifierPort(Protocol):
    """Notification operations required by the core watcher."""

    async def send(self, notification: Notification) -> None:
        ...


class ClockPort(Protocol):
    """Monotonic time source and suspension primitive."""

    def now(self) -> float:
        ...

    async def sleep(self, seconds: float) -> None:
        ...
