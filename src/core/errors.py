"""Error types shared by the core and its adapters."""

from __future__ import annotations


class WatchError(Exception):
    """Base class for every failure the watcher knows how to classify."""


class FetchError(WatchError):
    """The listing source could not be retrieved or parsed."""


class MalformedListingError(WatchError):
    """A scraped record is missing a field or has the wrong shape."""


class NotifyError(WatchError):
    """The delivery channel rejected or failed to send a message."""
