from __future__ import annotations

from core.engine import change_notifications, step
from core.errors import FetchError
from core.models import ChangeReport, Listing, PollOutcome
from core.state import WatchState

A1 = Listing("A1", "500", "$900")
B2 = Listing("B2", "750", "$1,250")

NO_REPORTS = 0


def _state(observed=()) -> WatchState:
    return WatchState.initial(0.0).with_observed(tuple(observed))


def test_outage_sends_single_unavailable_notification() -> None:
    state, notifications = step(_state([A1]), PollOutcome.success([]), now=20.0, report_interval=NO_REPORTS)

    assert [n.kind for n in notifications] == ["unavailable"]
    assert state.observed == ()
    assert state.changed


def test_cold_start_addition_is_announced() -> None:
    raw = {"name": "A1", "size": "500", "price": "$900"}
    state, notifications = step(_state(), PollOutcome.success([raw]), now=20.0, report_interval=NO_REPORTS)

    assert [n.kind for n in notifications] == ["added"]
    assert notifications[0].listings == (A1,)
    assert state.observed == (A1,)


def test_unchanged_poll_is_quiet() -> None:
    state, notifications = step(_state([A1, B2]), PollOutcome.success([A1, B2]), now=20.0, report_interval=NO_REPORTS)

    assert notifications == []
    assert not state.changed
    assert state.polls == 1


def test_addition_and_removal_in_one_cycle() -> None:
    _, notifications = step(_state([A1]), PollOutcome.success([B2]), now=20.0, report_interval=NO_REPORTS)
    assert [n.kind for n in notifications] == ["added", "removed"]
    assert notifications[1].listings == (A1,)


def test_fetch_failure_keeps_observed_listings() -> None:
    start = _state([A1])
    state, notifications = step(start, PollOutcome.failure(FetchError("timed out")), now=20.0, report_interval=NO_REPORTS)

    assert state.observed == (A1,)
    assert [n.kind for n in notifications] == ["error"]
    assert notifications[0].error_message == "Encountered an error: timed out"
    assert state.errors.distinct_count == 1
    assert not state.changed


def test_malformed_record_is_handled_like_fetch_failure() -> None:
    outcome = PollOutcome.success([{"name": "A1", "size": "500"}])
    state, notifications = step(_state([B2]), outcome, now=20.0, report_interval=NO_REPORTS)

    assert state.observed == (B2,)
    assert [n.kind for n in notifications] == ["error"]
    assert "price" in notifications[0].error_message


def test_error_sequence_is_deduplicated_across_steps() -> None:
    state = _state()
    sent = []
    for message in ["E1", "E1", "E2", "E1"]:
        state, notifications = step(state, PollOutcome.failure(FetchError(message)), now=0.0, report_interval=NO_REPORTS)
        sent.extend(n.error_message for n in notifications)

    assert sent == [
        "Encountered an error: E1",
        "Encountered an error: E2",
        "Encountered an error: E1",
    ]
    assert state.errors.distinct_count == 2


def test_report_fires_when_interval_elapsed_and_resets_reference() -> None:
    state = WatchState.initial(100.0)
    state, notifications = step(state, PollOutcome.success([A1]), now=160.0, report_interval=60)

    assert [n.kind for n in notifications] == ["added", "report"]
    report = notifications[-1].report
    assert report.polls == 1
    assert report.changed
    assert report.uptime_seconds == 60.0
    assert state.last_report_at == 160.0

    state, notifications = step(state, PollOutcome.success([A1]), now=180.0, report_interval=60)
    assert notifications == []


def test_report_counts_distinct_errors() -> None:
    state = WatchState.initial(0.0)
    state, _ = step(state, PollOutcome.failure(FetchError("E1")), now=10.0, report_interval=60)
    state, notifications = step(state, PollOutcome.failure(FetchError("E1")), now=60.0, report_interval=60)

    assert [n.kind for n in notifications] == ["report"]
    assert notifications[0].report.distinct_errors == 1
    assert notifications[0].report.polls == 2
    assert not notifications[0].report.changed


def test_change_notifications_ignores_removed_list_on_outage() -> None:
    report = ChangeReport(added=(), removed=(A1, B2), unavailable=True)
    notifications = change_notifications(report)
    assert len(notifications) == 1
    assert notifications[0].kind == "unavailable"
