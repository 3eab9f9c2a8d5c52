"""Custom exceptions.

nrtk-sync uses a small hierarchy of exceptions so callers can tell fatal
errors (fetch, parse, directory setup) from per-artifact write failures:

Example:
    >>> from nrtksync.core.exceptions import FetchError, NrtkSyncError, PayloadError
    >>> isinstance(FetchError("timeout", source="api"), NrtkSyncError)
    True
    >>> try:
    ...     raise PayloadError("not json")
    ... except NrtkSyncError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: PayloadError
"""

from __future__ import annotations

from pathlib import Path


class NrtkSyncError(Exception):
    """Base exception for nrtk-sync.

    Example:
        >>> from nrtksync.core.exceptions import NrtkSyncError
        >>> str(NrtkSyncError("something went wrong"))
        'something went wrong'
    """


class ConfigurationError(NrtkSyncError):
    """Configuration is invalid.

    Example:
        >>> from nrtksync.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("api_url is required")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: api_url is required
    """


class FetchError(NrtkSyncError):
    """Payload could not be retrieved from its source.

    Covers network failures, timeouts, non-200 responses and unreadable
    staged files.

    Example:
        >>> from nrtksync.core.exceptions import FetchError
        >>> err = FetchError("request error: 503", source="https://api", status_code=503)
        >>> err.status_code
        503
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.status_code = status_code
        self.cause = cause


class PayloadError(NrtkSyncError):
    """Payload bytes are not a valid site feed.

    Example:
        >>> from nrtksync.core.exceptions import PayloadError
        >>> raise PayloadError("unable to parse JSON data")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        PayloadError: unable to parse JSON data
    """


class SnapshotError(NrtkSyncError):
    """Current metadata record exists but cannot be read or decoded."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class PublishError(NrtkSyncError):
    """Writing a single artifact failed.

    Example:
        >>> from pathlib import Path
        >>> from nrtksync.core.exceptions import PublishError
        >>> err = PublishError(Path("www/index.html"), PermissionError("denied"))
        >>> str(err)
        'unable to open www/index.html for writing: denied'
    """

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"unable to open {path} for writing: {cause}")
        self.path = path
        self.cause = cause


class SetupError(NrtkSyncError):
    """Output directories could not be created."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"unable to create app dir {path}: {cause}")
        self.path = path
        self.cause = cause
