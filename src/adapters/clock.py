"""System clock adapter backed by the monotonic clock and asyncio."""

from __future__ import annotations

import asyncio
import time


class SystemClock:
    """ClockPort implementation for production runs."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
