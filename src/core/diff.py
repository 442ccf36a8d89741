"""Change detection between two listing observations (core domain)."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple

from core.keys import key_set, listing_key
from core.models import ChangeReport, Listing

LOGGER = logging.getLogger(__name__)


def unique_listings(listings: Iterable[Listing]) -> Tuple[Listing, ...]:
    """Drop later listings whose key was already seen, keeping order."""

    seen: set[str] = set()
    unique: list[Listing] = []
    for listing in listings:
        key = listing_key(listing)
        if key in seen:
            LOGGER.debug("Dropping duplicate listing %s", listing.name)
            continue
        seen.add(key)
        unique.append(listing)
    return tuple(unique)


def diff_listings(previous: Sequence[Listing], current: Sequence[Listing]) -> ChangeReport:
    """Compare the previous observation with the current poll.

    added keeps the order of current, removed keeps the order of previous.
    When the source goes from something to nothing the report is flagged
    unavailable; removed is still filled so callers can log it, but only the
    outage is announced.
    """

    current = unique_listings(current)
    previous_keys = key_set(previous)
    current_keys = key_set(current)

    added = tuple(item for item in current if listing_key(item) not in previous_keys)
    removed = tuple(item for item in previous if listing_key(item) not in current_keys)
    unavailable = not current and bool(previous)
    return ChangeReport(added=added, removed=removed, unavailable=unavailable)
