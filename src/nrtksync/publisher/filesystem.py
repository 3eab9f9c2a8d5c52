"""Filesystem publisher.

Writes any Publishable entity to its resolved path. The publisher knows
nothing about concrete entity types.

Example:
    >>> import tempfile
    >>> from pathlib import Path
    >>> from nrtksync.core.config import SiteLayout
    >>> from nrtksync.models.artifacts import ErrorPage
    >>> from nrtksync.publisher.filesystem import FilePublisher
    >>> with tempfile.TemporaryDirectory() as tmpdir:
    ...     root = Path(tmpdir)
    ...     publisher = FilePublisher(SiteLayout(root, root, root / "meta.json"))
    ...     path = publisher.publish(ErrorPage("oops"))
    ...     path.read_bytes()
    b'oops'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from nrtksync.core.config import SiteLayout
from nrtksync.core.exceptions import PublishError
from nrtksync.protocols.publishable import Publishable

logger = logging.getLogger(__name__)


@dataclass
class PublishReport:
    """Outcome of publishing a batch of entities.

    Example:
        >>> from nrtksync.publisher.filesystem import PublishReport
        >>> report = PublishReport()
        >>> report.ok
        True
    """

    written: list[Path] = field(default_factory=list)
    failures: list[PublishError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def extend(self, other: PublishReport) -> None:
        self.written.extend(other.written)
        self.failures.extend(other.failures)


class FilePublisher:
    """Writes entities to the local filesystem.

    Each write goes to a sibling temporary file that then replaces the
    target, so readers never observe a half-written page. Parent
    directories are not created: a missing directory is a publish failure.

    Args:
        layout: Output layout used to resolve entity paths.
    """

    def __init__(self, layout: SiteLayout) -> None:
        self._layout = layout

    @property
    def layout(self) -> SiteLayout:
        """Output layout."""
        return self._layout

    def publish(self, entity: Publishable) -> Path:
        """Write one entity, overwriting any existing file.

        Args:
            entity: Anything implementing the Publishable protocol.

        Returns:
            The path written.

        Raises:
            PublishError: If the path cannot be opened or written.
        """
        path = entity.output_path(self._layout)
        temp_path = path.with_name(f".{path.name}.tmp")
        logger.debug("Saving %s", path)

        try:
            temp_path.write_bytes(entity.render())
            temp_path.replace(path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise PublishError(path, e) from e

        return path

    def publish_all(self, entities: Iterable[Publishable]) -> PublishReport:
        """Publish entities independently.

        A failure on one entity is recorded and the remaining entities are
        still written.

        Returns:
            Written paths and per-entity failures.
        """
        report = PublishReport()
        for entity in entities:
            try:
                report.written.append(self.publish(entity))
            except PublishError as e:
                logger.warning("%s", e)
                report.failures.append(e)
        return report
