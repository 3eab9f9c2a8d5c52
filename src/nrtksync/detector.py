"""Change detection.

Decides whether a freshly fingerprinted payload must be published by
comparing it with the current metadata record.

Decision table:

=====================  =======  =========
stored record          force    publish
=====================  =======  =========
missing                any      yes
unreadable / corrupt   any      yes
same checksum          False    no
same checksum          True     yes
different checksum     any      yes, after archiving the stored record
=====================  =======  =========

A load error never aborts the sync. Republishing is idempotent, so
overwriting possibly-corrupt state is preferred to skipping an update.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from nrtksync.core.exceptions import PublishError, SnapshotError
from nrtksync.fingerprint import Fingerprint
from nrtksync.models.meta import MetaRecord
from nrtksync.protocols.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


class DecisionReason(str, Enum):
    """Why the detector decided to publish or skip.

    Example:
        >>> DecisionReason.FIRST_RUN.value
        'first_run'
    """

    FIRST_RUN = "first_run"
    LOAD_ERROR = "load_error"
    CHANGED = "changed"
    FORCED = "forced"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class PublishDecision:
    """Outcome of a change check.

    Attributes:
        publish: Whether the payload must be published.
        reason: What drove the decision.
        previous: The stored record, if one could be loaded.
        archived: Whether the stored record was archived on this check.
    """

    publish: bool
    reason: DecisionReason
    previous: MetaRecord | None = None
    archived: bool = False

    @property
    def previous_checksum(self) -> str | None:
        return self.previous.checksum if self.previous is not None else None


class ChangeDetector:
    """Compares fingerprints against the snapshot store.

    Example:
        >>> from nrtksync.detector import ChangeDetector
        >>> from nrtksync.fingerprint import compute_fingerprint
        >>> from nrtksync.snapshot.memory import MemorySnapshotStore
        >>> detector = ChangeDetector(MemorySnapshotStore())
        >>> decision = detector.should_publish(compute_fingerprint(b"{}"))
        >>> decision.publish, decision.reason.value
        (True, 'first_run')
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    @property
    def store(self) -> SnapshotStore:
        return self._store

    def should_publish(self, fingerprint: Fingerprint, force: bool = False) -> PublishDecision:
        """Decide whether to publish.

        When the stored record carries a different checksum it is archived
        here, before the caller overwrites it.

        Args:
            fingerprint: Fingerprint of the incoming payload.
            force: Publish even if the checksum is unchanged.

        Returns:
            The publish decision.
        """
        try:
            previous = self._store.load_current()
        except SnapshotError as e:
            logger.warning("Treating metadata as stale: %s", e)
            return PublishDecision(publish=True, reason=DecisionReason.LOAD_ERROR)

        if previous is None:
            return PublishDecision(publish=True, reason=DecisionReason.FIRST_RUN)

        if fingerprint.matches(previous.checksum):
            if force:
                return PublishDecision(publish=True, reason=DecisionReason.FORCED, previous=previous)
            return PublishDecision(publish=False, reason=DecisionReason.UNCHANGED, previous=previous)

        logger.info("Meta update detected: %s -> %s", previous.checksum, fingerprint.checksum)
        archived = self._archive(previous)
        return PublishDecision(
            publish=True,
            reason=DecisionReason.CHANGED,
            previous=previous,
            archived=archived,
        )

    def _archive(self, record: MetaRecord) -> bool:
        try:
            return self._store.archive(record)
        except PublishError as e:
            logger.warning("Unable to archive metadata %s: %s", record.checksum, e)
            return False
