"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WatchConfig:
    """Loop cadence for the watcher, in seconds."""

    poll_interval: float
    report_interval: float


@dataclass(frozen=True)
class NotificationConfig:
    """Notification delivery settings consumed by notifier adapters."""

    method: str
    chat_id: str
