"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from core.errors import MalformedListingError

LISTING_FIELDS = ("name", "size", "price")


@dataclass(frozen=True)
class Listing:
    """One row of the availability table, kept as display strings."""

    name: str
    size: str
    price: str

    @classmethod
    def from_raw(cls, raw: Any) -> "Listing":
        """Coerce a scraper record into a Listing.

        Scrapers may hand back Listing instances or plain mappings. Anything
        with a missing or non-string field is rejected.
        """

        if isinstance(raw, Listing):
            return raw
        if not isinstance(raw, Mapping):
            raise MalformedListingError(f"Unexpected record type: {type(raw).__name__}")

        values = []
        for field in LISTING_FIELDS:
            value = raw.get(field)
            if value is None:
                raise MalformedListingError(f"Listing is missing field '{field}'")
            if not isinstance(value, str):
                raise MalformedListingError(
                    f"Listing field '{field}' must be a string, got {type(value).__name__}"
                )
            values.append(value.strip())
        return cls(*values)


@dataclass(frozen=True)
class ChangeReport:
    """Result of comparing two observations."""

    added: Tuple[Listing, ...]
    removed: Tuple[Listing, ...]
    unavailable: bool = False

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.unavailable)


@dataclass(frozen=True)
class ReportSnapshot:
    """Health summary values captured when a periodic report fires."""

    uptime_seconds: float
    polls: int
    changed: bool
    distinct_errors: int


@dataclass(frozen=True)
class Notification:
    """Outbound message produced by the core and rendered by notifiers.

    kind is one of: added, removed, unavailable, error, report.
    """

    kind: str
    listings: Tuple[Listing, ...] = ()
    error_message: Optional[str] = None
    report: Optional[ReportSnapshot] = None


@dataclass(frozen=True)
class PollOutcome:
    """What a single poll produced: raw records or the failure raised."""

    records: Optional[Tuple[Any, ...]] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, records) -> "PollOutcome":
        return cls(records=tuple(records))

    @classmethod
    def failure(cls, error: BaseException) -> "PollOutcome":
        return cls(error=error)
