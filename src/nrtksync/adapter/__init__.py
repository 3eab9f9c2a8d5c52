"""Feed sources: remote API and staged local file."""

from __future__ import annotations

from nrtksync.adapter.file import LocalFeedSource
from nrtksync.adapter.http import HttpFeedSource
from nrtksync.core.config import Settings
from nrtksync.protocols.source import FeedSource


def source_from_settings(settings: Settings) -> FeedSource:
    """Pick the feed source configured by ``is_remote``.

    Raises:
        ConfigurationError: If remote mode is set without an API URL.
    """
    if settings.is_remote:
        return HttpFeedSource(
            settings.require_remote(),
            token=settings.token,
            timeout=settings.request_timeout,
            user_agent=settings.user_agent,
        )
    return LocalFeedSource(settings.local_path)


__all__ = ["FeedSource", "HttpFeedSource", "LocalFeedSource", "source_from_settings"]
