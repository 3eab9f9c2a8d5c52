"""Pipeline - Core sync orchestrator.

The SyncPipeline handles the complete flow of:
1. Parsing the raw payload (fatal on malformed JSON)
2. Creating the output directories
3. Fingerprinting the raw bytes
4. Asking the change detector whether to publish
5. Saving the new metadata record (the detector archived the old one)
6. Publishing every story, the error page and the sitemap

Example:
    >>> import tempfile
    >>> from pathlib import Path
    >>> from nrtksync.core.config import SiteLayout
    >>> from nrtksync.pipeline import SyncPipeline
    >>> with tempfile.TemporaryDirectory() as tmpdir:
    ...     root = Path(tmpdir)
    ...     layout = SiteLayout(root / "www", root / "snapshot", root / "meta.json")
    ...     pipeline = SyncPipeline(layout)
    ...     first = pipeline.sync(b'{"stories": []}')
    ...     second = pipeline.sync(b'{"stories": []}')
    ...     (first.published, second.published)
    (True, False)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from nrtksync.core.exceptions import PublishError, SetupError
from nrtksync.detector import ChangeDetector, DecisionReason
from nrtksync.fingerprint import compute_fingerprint
from nrtksync.models.artifacts import ErrorPage, SitemapDocument
from nrtksync.models.meta import MetaRecord
from nrtksync.models.payload import SiteData, parse_payload
from nrtksync.publisher.filesystem import FilePublisher, PublishReport
from nrtksync.snapshot.filesystem import FileSnapshotStore

if TYPE_CHECKING:
    from nrtksync.core.config import SiteLayout
    from nrtksync.protocols.publishable import Publishable, Publisher
    from nrtksync.protocols.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Statistics from a sync attempt.

    Example:
        >>> from nrtksync.pipeline import SyncResult
        >>> result = SyncResult(checksum="ab12", published=False)
        >>> result.ok
        True
    """

    checksum: str
    published: bool
    reason: DecisionReason = DecisionReason.UNCHANGED
    previous_checksum: str | None = None
    archived: bool = False
    story_count: int = 0
    written: list[Path] = field(default_factory=list)
    failures: list[PublishError] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    duration_ms: float = 0.0

    @property
    def forced(self) -> bool:
        return self.reason is DecisionReason.FORCED

    @property
    def ok(self) -> bool:
        """True if every artifact was written."""
        return not self.failures


class SyncPipeline:
    """Change-detect-and-publish pipeline.

    Args:
        layout: Output layout.
        store: Snapshot store (default: FileSnapshotStore over ``layout``).
        publisher: Publisher for content artifacts (default: FilePublisher).
    """

    def __init__(
        self,
        layout: SiteLayout,
        store: SnapshotStore | None = None,
        publisher: Publisher | None = None,
    ) -> None:
        self._layout = layout
        self._publisher = publisher or FilePublisher(layout)
        self._store = store or FileSnapshotStore(layout, publisher=self._publisher)
        self._detector = ChangeDetector(self._store)

    @property
    def layout(self) -> SiteLayout:
        return self._layout

    @property
    def store(self) -> SnapshotStore:
        return self._store

    def prepare(self) -> None:
        """Create the content and snapshot directories.

        Raises:
            SetupError: If a directory cannot be created.
        """
        for directory in (
            self._layout.content_dir,
            self._layout.snapshot_dir,
            self._layout.meta_path.parent,
        ):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise SetupError(directory, e) from e

    def sync(self, raw: bytes, force: bool = False) -> SyncResult:
        """Run one sync attempt over a fetched payload.

        Args:
            raw: Payload bytes exactly as fetched.
            force: Publish even if the payload is unchanged.

        Returns:
            What happened. Individual artifact failures are reported in
            ``failures`` rather than raised.

        Raises:
            PayloadError: If the payload cannot be parsed. Nothing is written.
            SetupError: If the output directories cannot be created.
        """
        start_time = time.perf_counter()
        site = parse_payload(raw)
        self.prepare()

        fingerprint = compute_fingerprint(raw)
        logger.info("Content checksum: %s", fingerprint.checksum)

        decision = self._detector.should_publish(fingerprint, force=force)
        result = SyncResult(
            checksum=fingerprint.checksum,
            published=decision.publish,
            reason=decision.reason,
            previous_checksum=decision.previous_checksum,
            archived=decision.archived,
            story_count=len(site.stories),
        )

        if not decision.publish:
            logger.info("Nothing to update")
        else:
            logger.info(
                "Sync content for %s with %d stories (force=%s)",
                site.site_name,
                len(site.stories),
                force,
            )
            report = self._publish(site, MetaRecord.from_site(site, fingerprint))
            result.written = report.written
            result.failures = report.failures

        result.duration_ms = (time.perf_counter() - start_time) * 1000
        return result

    def _publish(self, site: SiteData, record: MetaRecord) -> PublishReport:
        report = PublishReport()
        try:
            self._store.save_current(record)
            report.written.append(record.output_path(self._layout))
        except PublishError as e:
            logger.warning("%s", e)
            report.failures.append(e)

        report.extend(self._publisher.publish_all(self._artifacts(site)))
        return report

    @staticmethod
    def _artifacts(site: SiteData) -> list[Publishable]:
        return [
            *site.stories,
            ErrorPage(site.error_page),
            SitemapDocument(site.stories),
        ]
