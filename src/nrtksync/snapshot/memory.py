"""In-memory snapshot store.

Same contract as FileSnapshotStore without touching the filesystem.

Example:
    >>> from nrtksync.models.meta import MetaRecord
    >>> from nrtksync.snapshot.memory import MemorySnapshotStore
    >>> store = MemorySnapshotStore()
    >>> store.load_current() is None
    True
    >>> store.archive(MetaRecord(checksum="ab12"))
    True
    >>> store.archive(MetaRecord(checksum="ab12"))
    False
"""

from __future__ import annotations

from nrtksync.core.exceptions import SnapshotError
from nrtksync.models.meta import MetaRecord


class MemorySnapshotStore:
    """In-memory snapshot store for testing.

    Args:
        current: Initial current record.
        load_error: If set, ``load_current`` raises it, simulating a
            corrupt or unreadable record.
    """

    def __init__(
        self,
        current: MetaRecord | None = None,
        load_error: SnapshotError | None = None,
    ) -> None:
        self.current = current
        self.load_error = load_error
        self.archives: dict[str, MetaRecord] = {}
        self.saves = 0

    def load_current(self) -> MetaRecord | None:
        if self.load_error is not None:
            raise self.load_error
        return self.current

    def archive(self, record: MetaRecord) -> bool:
        if record.checksum in self.archives:
            return False
        self.archives[record.checksum] = record
        return True

    def save_current(self, record: MetaRecord) -> None:
        self.current = record
        self.load_error = None
        self.saves += 1
