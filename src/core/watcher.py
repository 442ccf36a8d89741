"""Core poll/notify/report loop.

This module is integration-agnostic. It only relies on ports for scraping,
notifications and time, enabling other sources or channels without changes
here.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.config import WatchConfig
from core.engine import step
from core.errors import FetchError, NotifyError
from core.models import Notification, PollOutcome
from core.ports import ClockPort, NotifierPort, ScraperPort
from core.state import WatchState

LOGGER = logging.getLogger(__name__)


class ListingWatcher:
    """Runs poll -> diff -> notify -> report-check -> sleep, strictly serially."""

    def __init__(
        self,
        scraper: ScraperPort,
        notifier: NotifierPort,
        clock: ClockPort,
        config: WatchConfig,
    ) -> None:
        self._scraper = scraper
        self._notifier = notifier
        self._clock = clock
        self._config = config
        self.state = WatchState.initial(clock.now())

    async def _poll(self) -> PollOutcome:
        try:
            records = await self._scraper.fetch()
        except FetchError as exc:
            return PollOutcome.failure(exc)
        except Exception as exc:
            LOGGER.exception("Unexpected scraper failure")
            return PollOutcome.failure(exc)
        return PollOutcome.success(records)

    async def _deliver(self, notification: Notification) -> bool:
        # Delivery failures are logged only: no retry, no error dedup.
        try:
            await self._notifier.send(notification)
        except NotifyError as exc:
            LOGGER.warning("Failed to send %s notification: %s", notification.kind, exc)
            return False
        except Exception:
            LOGGER.exception("Unexpected error while sending %s notification", notification.kind)
            return False
        return True

    async def run_cycle(self) -> List[Notification]:
        """Run one poll cycle and return the notifications it produced."""

        outcome = await self._poll()
        self.state, notifications = step(
            self.state,
            outcome,
            self._clock.now(),
            self._config.report_interval,
        )
        for notification in notifications:
            await self._deliver(notification)
        return notifications

    async def run(self, max_cycles: Optional[int] = None) -> None:
        """Loop until externally stopped, or for max_cycles iterations."""

        LOGGER.info(
            "Watching every %ss, reporting every %ss",
            self._config.poll_interval,
            self._config.report_interval,
        )
        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            await self.run_cycle()
            cycles += 1
            await self._clock.sleep(self._config.poll_interval)
