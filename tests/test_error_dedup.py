from __future__ import annotations

from core.dedup import (
    ERROR_PREFIX,
    ErrorLog,
    canonical_error_message,
    compute_fingerprint,
    record_error,
)
from core.errors import FetchError


def _run_sequence(messages: list[str]) -> tuple[ErrorLog, list[str]]:
    log = ErrorLog()
    notified = []
    for message in messages:
        log, should_notify = record_error(log, message)
        if should_notify:
            notified.append(message)
    return log, notified


def test_only_consecutive_repeats_are_suppressed() -> None:
    log, notified = _run_sequence(["E1", "E1", "E2", "E1"])
    assert notified == ["E1", "E2", "E1"]
    assert log.distinct_count == 2
    assert log.last_notified == "E1"


def test_every_error_is_counted_even_when_suppressed() -> None:
    log, notified = _run_sequence(["E1", "E1", "E1"])
    assert notified == ["E1"]
    assert log.distinct_count == 1


def test_canonical_message_uses_exception_text() -> None:
    message = canonical_error_message(FetchError("HTTP 503 from listing page"))
    assert message == f"{ERROR_PREFIX}HTTP 503 from listing page"


def test_canonical_message_falls_back_to_type_name() -> None:
    assert canonical_error_message(TimeoutError()) == f"{ERROR_PREFIX}TimeoutError"


def test_case_variants_are_counted_like_they_are_notified() -> None:
    log, notified = _run_sequence([f"{ERROR_PREFIX}HTTP Error", f"{ERROR_PREFIX}http error"])
    assert len(notified) == 2
    assert log.distinct_count == 2


def test_fingerprint_is_stable_per_message() -> None:
    assert compute_fingerprint("E1") == compute_fingerprint("E1")
    assert compute_fingerprint("E1") != compute_fingerprint("e1")
