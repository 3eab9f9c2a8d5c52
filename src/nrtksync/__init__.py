"""
nrtk-sync - Publish a Newsroom Toolkit site feed to local files.

nrtk-sync fetches a site's feed (stories, error page, metadata), and
regenerates the local site only when the feed has actually changed.

Key Features:
- Whole-payload SHA-256 fingerprinting for change detection
- Write-once, content-addressed history of superseded metadata
- One publish path for every artifact (pages, error page, sitemap, metadata)
- Per-artifact failure isolation
- Run-once or fixed-interval repeat mode

Quick Start:
    >>> from nrtksync import SyncPipeline, get_settings
    >>> pipeline = SyncPipeline(get_settings(app_dir=".nrtk/").layout())
    >>> # result = pipeline.sync(raw_bytes)

Architecture:
    Sources: HttpFeedSource, LocalFeedSource
    Snapshot stores: FileSnapshotStore, MemorySnapshotStore
    Publishers: FilePublisher
"""

from nrtksync.adapter import HttpFeedSource, LocalFeedSource, source_from_settings
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
from nrtksync.core.runner import SyncRunner
from nrtksync.detector import ChangeDetector, DecisionReason, PublishDecision
from nrtksync.fingerprint import Fingerprint, compute_fingerprint
from nrtksync.models import (
    ArchivedMeta,
    ErrorPage,
    MetaRecord,
    SiteData,
    SitemapDocument,
    Story,
    parse_payload,
)
from nrtksync.pipeline import SyncPipeline, SyncResult
from nrtksync.protocols import FeedSource, Publishable, Publisher, SnapshotStore
from nrtksync.publisher import FilePublisher, PublishReport
from nrtksync.scheduler import RepeatLoop
from nrtksync.sitemap import generate_sitemap
from nrtksync.snapshot import FileSnapshotStore, MemorySnapshotStore

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "Settings",
    "SiteLayout",
    "get_settings",
    # Errors
    "NrtkSyncError",
    "ConfigurationError",
    "FetchError",
    "PayloadError",
    "PublishError",
    "SetupError",
    "SnapshotError",
    # Models
    "Story",
    "SiteData",
    "MetaRecord",
    "ArchivedMeta",
    "ErrorPage",
    "SitemapDocument",
    "parse_payload",
    # Fingerprinting and detection
    "Fingerprint",
    "compute_fingerprint",
    "ChangeDetector",
    "DecisionReason",
    "PublishDecision",
    # Protocols
    "FeedSource",
    "Publishable",
    "Publisher",
    "SnapshotStore",
    # Backends
    "FilePublisher",
    "PublishReport",
    "FileSnapshotStore",
    "MemorySnapshotStore",
    "HttpFeedSource",
    "LocalFeedSource",
    "source_from_settings",
    # Sitemap
    "generate_sitemap",
    # Orchestration
    "SyncPipeline",
    "SyncResult",
    "SyncRunner",
    "RepeatLoop",
    # Version
    "__version__",
]
