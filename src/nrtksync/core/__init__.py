"""Core configuration, errors and process wiring."""

from nrtksync.core.config import Settings, SiteLayout, get_settings
from nrtksync.core.exceptions import (
    ConfigurationError,
    FetchError,
    NrtkSyncError,
    PayloadError,
    PublishError,
    SetupError,
    SnapshotError,
)

__all__ = [
    "Settings",
    "SiteLayout",
    "get_settings",
    "NrtkSyncError",
    "ConfigurationError",
    "FetchError",
    "PayloadError",
    "PublishError",
    "SetupError",
    "SnapshotError",
]
