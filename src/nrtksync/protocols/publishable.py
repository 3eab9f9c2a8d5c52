"""Publishable entity protocol.

Anything that can resolve its own output path and render its bytes can be
written by a publisher: stories, the error page, the sitemap and metadata
records alike.

Example:
    >>> from nrtksync.protocols.publishable import Publishable
    >>> from nrtksync.models.artifacts import ErrorPage
    >>> isinstance(ErrorPage("oops"), Publishable)
    True
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nrtksync.core.config import SiteLayout


@runtime_checkable
class Publishable(Protocol):
    """Publishable entity protocol.

    Both operations must be pure: the same entity and layout always give
    the same path and bytes.
    """

    def output_path(self, layout: SiteLayout) -> Path:
        """Where this entity is written."""
        ...

    def render(self) -> bytes:
        """The exact bytes to write."""
        ...


@runtime_checkable
class Publisher(Protocol):
    """Publisher protocol.

    Implementations: FilePublisher, plus in-memory recorders in tests.
    """

    def publish(self, entity: Publishable) -> Path:
        """Write one entity, raising PublishError on failure."""
        ...
