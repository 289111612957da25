"""Exception taxonomy for the matching core."""

from __future__ import annotations


class BliffoscopeError(Exception):
    """Base class for every error raised by the matching core."""


class DecodeError(BliffoscopeError, ValueError):
    """Input text could not be decoded into a sparse image."""


class DegenerateTargetError(BliffoscopeError, ValueError):
    """A target pattern has no on-pixels, so its match ratio is undefined."""


class SearchCancelled(BliffoscopeError):
    """Raised when a search is cancelled between scan rows."""

    def __init__(self, row: int) -> None:
        super().__init__(f"Search cancelled before row {row}")
        self.row = row
