"""Site-level output artifacts.

Stories and metadata records publish themselves; these wrap the remaining
site-wide files so they satisfy the same Publishable protocol.

Example:
    >>> from pathlib import Path
    >>> from nrtksync.core.config import SiteLayout
    >>> from nrtksync.models.artifacts import ErrorPage
    >>> layout = SiteLayout(Path("www"), Path("snapshot"), Path("meta.json"), ".htm")
    >>> ErrorPage("<h1>Not found</h1>").output_path(layout)
    PosixPath('www/error.htm')
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from nrtksync.sitemap import generate_sitemap

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nrtksync.core.config import SiteLayout
    from nrtksync.models.payload import Story

ERROR_PAGE_STEM = "error"
SITEMAP_FILENAME = "sitemap.xml"


@dataclass(frozen=True)
class ErrorPage:
    """The site's error page body, written verbatim."""

    content: str

    def output_path(self, layout: SiteLayout) -> Path:
        return layout.content_path(ERROR_PAGE_STEM)

    def render(self) -> bytes:
        return self.content.encode("utf-8")


@dataclass(frozen=True)
class SitemapDocument:
    """sitemap.xml derived from the feed's stories."""

    stories: Sequence[Story]

    def output_path(self, layout: SiteLayout) -> Path:
        return layout.content_dir / SITEMAP_FILENAME

    def render(self) -> bytes:
        return generate_sitemap(self.stories)
