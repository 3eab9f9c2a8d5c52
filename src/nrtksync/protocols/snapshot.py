"""Snapshot store protocol.

Defines the interface for the durable metadata state: the single current
record and the write-once archive of superseded records.

Example:
    >>> from nrtksync.protocols.snapshot import SnapshotStore
    >>> hasattr(SnapshotStore, "load_current")
    True
    >>> hasattr(SnapshotStore, "archive")
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nrtksync.models.meta import MetaRecord


@runtime_checkable
class SnapshotStore(Protocol):
    """Snapshot store protocol.

    See Also:
        nrtksync.snapshot.filesystem.FileSnapshotStore: On-disk implementation
        nrtksync.snapshot.memory.MemorySnapshotStore: In-memory implementation
    """

    def load_current(self) -> MetaRecord | None:
        """Load the current record.

        Returns None when no record exists yet (first run). Raises
        SnapshotError when a record exists but cannot be read.
        """
        ...

    def archive(self, record: MetaRecord) -> bool:
        """Archive a record under its own checksum.

        Returns False, without writing, if that checksum is already archived.
        """
        ...

    def save_current(self, record: MetaRecord) -> None:
        """Overwrite the current record."""
        ...
