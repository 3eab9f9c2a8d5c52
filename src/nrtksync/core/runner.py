"""SyncRunner - wires a feed source to the sync pipeline.

Builds the source, snapshot store and publisher from Settings, runs one
fetch-and-sync attempt, or repeats it on a fixed interval.

Example:
    >>> from nrtksync.core.config import get_settings
    >>> from nrtksync.core.runner import SyncRunner
    >>> runner = SyncRunner(get_settings(app_dir="/tmp/site"))
    >>> runner.source.name
    'local.json'
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from nrtksync.adapter import source_from_settings
from nrtksync.pipeline import SyncPipeline, SyncResult
from nrtksync.scheduler.loop import RepeatLoop

if TYPE_CHECKING:
    from nrtksync.core.config import Settings
    from nrtksync.protocols.source import FeedSource

logger = logging.getLogger(__name__)


class SyncRunner:
    """Process-level orchestrator.

    Args:
        settings: Resolved settings.
        source: Feed source (default: chosen from settings).
        pipeline: Sync pipeline (default: filesystem-backed over the layout).
    """

    def __init__(
        self,
        settings: Settings,
        *,
        source: FeedSource | None = None,
        pipeline: SyncPipeline | None = None,
    ) -> None:
        self._settings = settings
        self._source = source or source_from_settings(settings)
        self._pipeline = pipeline or SyncPipeline(settings.layout())

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def source(self) -> FeedSource:
        return self._source

    @property
    def pipeline(self) -> SyncPipeline:
        return self._pipeline

    @property
    def repeats(self) -> bool:
        """Whether a positive repeat interval is configured."""
        return self._settings.repeat_interval_ms > 0

    def sync_once(self) -> SyncResult:
        """Fetch the payload and sync it once.

        Raises:
            FetchError: If the payload cannot be fetched.
            PayloadError: If the payload cannot be parsed.
            SetupError: If the output directories cannot be created.
        """
        raw = self._source.fetch()
        result = self._pipeline.sync(raw, force=self._settings.is_force_update)
        for failure in result.failures:
            logger.error("%s", failure)
        return result

    def run(self, stop: threading.Event | None = None) -> int:
        """Run once, or loop until ``stop`` is set in repeat mode.

        Returns:
            Number of sync attempts made.
        """
        loop = RepeatLoop(self.sync_once, self._settings.repeat_interval_ms, stop=stop)
        if not self.repeats:
            loop.run_once()
            return loop.run_count
        return loop.run()
