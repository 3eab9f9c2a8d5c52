"""Protocol definitions - all extension points."""

from nrtksync.protocols.publishable import Publishable, Publisher
from nrtksync.protocols.snapshot import SnapshotStore
from nrtksync.protocols.source import FeedSource

__all__ = [
    "FeedSource",
    "Publishable",
    "Publisher",
    "SnapshotStore",
]
