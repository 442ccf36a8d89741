from __future__ import annotations

import pytest

from core.errors import MalformedListingError
from core.keys import KEY_SEPARATOR, key_set, listing_key
from core.models import Listing


def test_key_ignores_case_and_surrounding_whitespace() -> None:
    assert listing_key(Listing("A1", "500", "$900")) == listing_key(Listing(" a1", "500 ", "$900"))


def test_key_collapses_inner_whitespace() -> None:
    assert listing_key(Listing("Unit  A1", "500", "$900")) == listing_key(Listing("unit\tA1", "500", "$900"))


def test_key_distinguishes_field_boundaries() -> None:
    # Joining with a plain space would make these two collide.
    first = Listing("A1 500", "600", "$900")
    second = Listing("A1", "500 600", "$900")
    assert listing_key(first) != listing_key(second)
    assert listing_key(first).count(KEY_SEPARATOR) == 2


def test_key_set_collapses_equal_listings() -> None:
    keys = key_set([Listing("A1", "500", "$900"), Listing("a1", "500", "$900"), Listing("B2", "700", "$1,100")])
    assert len(keys) == 2


def test_from_raw_accepts_mapping_and_trims() -> None:
    listing = Listing.from_raw({"name": " A1 ", "size": "500", "price": "$900"})
    assert listing == Listing("A1", "500", "$900")


def test_from_raw_passes_listing_through() -> None:
    listing = Listing("A1", "500", "$900")
    assert Listing.from_raw(listing) is listing


@pytest.mark.parametrize(
    "raw",
    [
        {"name": "A1", "size": "500"},
        {"name": "A1", "size": None, "price": "$900"},
        {"name": "A1", "size": 500, "price": "$900"},
        ["A1", "500", "$900"],
    ],
)
def test_from_raw_rejects_malformed_records(raw) -> None:
    with pytest.raises(MalformedListingError):
        Listing.from_raw(raw)
