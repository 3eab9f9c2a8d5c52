"""Snapshot store backends."""

from nrtksync.snapshot.filesystem import FileSnapshotStore
from nrtksync.snapshot.memory import MemorySnapshotStore

__all__ = ["FileSnapshotStore", "MemorySnapshotStore"]
