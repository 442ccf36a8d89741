"""Cooperative report scheduling.

There is no timer thread: the main loop asks once per iteration whether a
report is due, so firing time drifts by at most one poll interval.
"""

from __future__ import annotations


def report_due(last_report_at: float, now: float, interval: float) -> bool:
    """Return True when at least interval seconds passed since the last report."""

    if interval <= 0:
        return False
    return now - last_report_at >= interval
