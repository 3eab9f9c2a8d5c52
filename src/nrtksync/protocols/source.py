"""Feed source protocol.

Defines the interface for payload sources (remote API, staged file).

Example:
    >>> from nrtksync.protocols.source import FeedSource
    >>> hasattr(FeedSource, "fetch")
    True
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FeedSource(Protocol):
    """Feed source protocol.

    Implementations return the raw payload bytes untouched, since the
    fingerprint is computed over exactly those bytes.
    """

    @property
    def name(self) -> str:
        """Human-readable source name for logs."""
        ...

    def fetch(self) -> bytes:
        """Fetch the payload, raising FetchError on failure."""
        ...
