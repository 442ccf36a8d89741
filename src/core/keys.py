"""Listing identity keys (core domain)."""

from __future__ import annotations

import re
from typing import Iterable

from core.models import Listing

# ASCII unit separator; never present in scraped display text.
KEY_SEPARATOR = "\x1f"


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def normalize_field(value: str) -> str:
    """Normalize one display field for key comparison."""

    return _collapse_whitespace(value).lower()


def listing_key(listing: Listing) -> str:
    """Return the identity key of a listing.

    Two listings describe the same unit iff their keys are equal.
    """

    return KEY_SEPARATOR.join(
        normalize_field(part) for part in (listing.name, listing.size, listing.price)
    )


def key_set(listings: Iterable[Listing]) -> set[str]:
    return {listing_key(listing) for listing in listings}
