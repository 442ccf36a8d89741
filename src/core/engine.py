"""Pure state transition for one poll cycle.

step() is integration-agnostic: it receives the poll outcome and the current
time and returns the next state plus the notifications to deliver, so the
whole cycle can be tested without timers or network access.

Order within a cycle:
1) Count the poll and clear the changed flag
2) Classify the outcome (coerce records, or take the fetch failure)
3) Diff against the observed listings and replace them on success
4) Route failures through error dedup, leaving observed listings alone
5) Check whether a periodic report is due
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Tuple

from core.dedup import canonical_error_message, record_error
from core.diff import diff_listings, unique_listings
from core.errors import MalformedListingError
from core.models import ChangeReport, Listing, Notification, PollOutcome, ReportSnapshot
from core.scheduler import report_due
from core.state import WatchState

LOGGER = logging.getLogger(__name__)


def classify(outcome: PollOutcome) -> Tuple[Listing, ...]:
    """Return the listings of a successful poll or raise its failure."""

    if outcome.error is not None:
        raise outcome.error
    if outcome.records is None:
        raise MalformedListingError("Poll returned no result")
    return unique_listings(Listing.from_raw(raw) for raw in outcome.records)


def change_notifications(report: ChangeReport) -> List[Notification]:
    """Turn a change report into the notifications to send.

    An outage replaces the removed list: only one message goes out.
    """

    if report.unavailable:
        return [Notification(kind="unavailable", listings=report.removed)]

    notifications: List[Notification] = []
    if report.added:
        notifications.append(Notification(kind="added", listings=report.added))
    if report.removed:
        notifications.append(Notification(kind="removed", listings=report.removed))
    return notifications


def _apply_outcome(state: WatchState, outcome: PollOutcome) -> Tuple[WatchState, List[Notification]]:
    try:
        current = classify(outcome)
    except Exception as exc:
        message = canonical_error_message(exc)
        errors, should_notify = record_error(state.errors, message)
        LOGGER.warning("Poll %s failed: %s", state.polls, message)
        state = replace(state, errors=errors)
        if not should_notify:
            LOGGER.info("Suppressing repeated error notification")
            return state, []
        return state, [Notification(kind="error", error_message=message)]

    report = diff_listings(state.observed, current)
    LOGGER.debug("Poll %s returned %s listings", state.polls, len(current))
    state = state.with_observed(current)
    if not report.has_changes:
        return state, []

    LOGGER.info(
        "Listings changed: added=%s removed=%s unavailable=%s",
        len(report.added),
        len(report.removed),
        report.unavailable,
    )
    return replace(state, changed=True), change_notifications(report)


def step(
    state: WatchState,
    outcome: PollOutcome,
    now: float,
    report_interval: float,
) -> Tuple[WatchState, List[Notification]]:
    """Advance the watcher by one poll cycle."""

    state = replace(state, polls=state.polls + 1, changed=False)
    state, notifications = _apply_outcome(state, outcome)

    if report_due(state.last_report_at, now, report_interval):
        snapshot = ReportSnapshot(
            uptime_seconds=now - state.started_at,
            polls=state.polls,
            changed=state.changed,
            distinct_errors=state.errors.distinct_count,
        )
        notifications.append(Notification(kind="report", report=snapshot))
        state = replace(state, last_report_at=now)
        LOGGER.info("Periodic report due after %s polls", state.polls)

    return state, notifications
