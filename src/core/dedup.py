"""Error notification deduplication (core domain).

Every error is counted, but a notification is only produced when the message
differs from the one notified right before it. A message seen earlier but
not immediately before is announced again.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

ERROR_PREFIX = "Encountered an error: "


@dataclass(frozen=True)
class ErrorLog:
    """Distinct error fingerprints plus the last message that was notified."""

    fingerprints: FrozenSet[str] = field(default_factory=frozenset)
    last_notified: Optional[str] = None

    @property
    def distinct_count(self) -> int:
        return len(self.fingerprints)


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def compute_fingerprint(message: str) -> str:
    """Return a fixed-size hash of the canonical message.

    The message is hashed exactly as notified so that counting and the
    repeat check agree on what a distinct error is.
    """

    return hashlib.sha256(message.encode("utf-8")).hexdigest()


def canonical_error_message(error: BaseException) -> str:
    """Derive the single message string used for counting and notifying."""

    detail = _collapse_whitespace(str(error)) or type(error).__name__
    return f"{ERROR_PREFIX}{detail}"


def record_error(log: ErrorLog, message: str) -> Tuple[ErrorLog, bool]:
    """Count the error and decide whether it should be notified."""

    fingerprints = log.fingerprints | {compute_fingerprint(message)}
    if message == log.last_notified:
        return ErrorLog(fingerprints=fingerprints, last_notified=log.last_notified), False
    return ErrorLog(fingerprints=fingerprints, last_notified=message), True
