"""Filesystem snapshot store.

Keeps the current metadata record at ``layout.meta_path`` and archives
superseded records as ``<snapshot_dir>/meta.<checksum>.json``. Archives are
content-addressed and written at most once.

Example:
    >>> import tempfile
    >>> from pathlib import Path
    >>> from nrtksync.core.config import SiteLayout
    >>> from nrtksync.models.meta import MetaRecord
    >>> from nrtksync.snapshot.filesystem import FileSnapshotStore
    >>> with tempfile.TemporaryDirectory() as tmpdir:
    ...     root = Path(tmpdir)
    ...     store = FileSnapshotStore(SiteLayout(root, root, root / "meta.json"))
    ...     store.save_current(MetaRecord(checksum="ab12"))
    ...     store.load_current().checksum
    'ab12'
"""

from __future__ import annotations

import logging

from nrtksync.core.config import SiteLayout
from nrtksync.core.exceptions import SnapshotError
from nrtksync.models.meta import MetaRecord
from nrtksync.protocols.publishable import Publisher
from nrtksync.publisher.filesystem import FilePublisher

logger = logging.getLogger(__name__)


class FileSnapshotStore:
    """Snapshot store backed by JSON files.

    Writes go through a publisher, so metadata records follow the same
    write path as every other artifact.

    Args:
        layout: Output layout holding the metadata and snapshot locations.
        publisher: Publisher used for writes (default: FilePublisher).
    """

    def __init__(self, layout: SiteLayout, publisher: Publisher | None = None) -> None:
        self._layout = layout
        self._publisher = publisher or FilePublisher(layout)

    @property
    def layout(self) -> SiteLayout:
        return self._layout

    def load_current(self) -> MetaRecord | None:
        """Load the current record from ``meta_path``.

        Returns:
            The record, or None if no record has been published yet.

        Raises:
            SnapshotError: If the file exists but is unreadable or corrupt.
        """
        path = self._layout.meta_path
        logger.debug("Reading JSON from %s", path)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SnapshotError(f"unable to read {path}: {e}", path=path) from e
        return MetaRecord.from_json(data, path=path)

    def archive(self, record: MetaRecord) -> bool:
        """Archive a superseded record under its own checksum.

        Returns:
            True if written, False if that checksum was already archived.

        Raises:
            PublishError: If the archive cannot be written.
        """
        snapshot = record.archived()
        if snapshot.output_path(self._layout).exists():
            return False
        self._publisher.publish(snapshot)
        return True

    def save_current(self, record: MetaRecord) -> None:
        """Overwrite the current record.

        Raises:
            PublishError: If the record cannot be written.
        """
        self._publisher.publish(record)

    def list_archived(self) -> list[str]:
        """Checksums of all archived records, sorted."""
        if not self._layout.snapshot_dir.exists():
            return []
        return sorted(
            path.name[len("meta.") : -len(".json")]
            for path in self._layout.snapshot_dir.glob("meta.*.json")
        )

    def load_archived(self, checksum: str) -> MetaRecord | None:
        """Load a historical record by the checksum it carried.

        Raises:
            SnapshotError: If the archive exists but is corrupt.
        """
        path = self._layout.snapshot_path(checksum)
        if not path.exists():
            return None
        return MetaRecord.from_json(path.read_bytes(), path=path)
