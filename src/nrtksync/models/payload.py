"""Site feed payload models.

The feed is received whole, as one JSON document, once per sync attempt.

Example:
    >>> from nrtksync.models.payload import parse_payload
    >>> site = parse_payload(b'{"site_name": "Daily", "stories": [{"anchor": "index"}]}')
    >>> site.site_name
    'Daily'
    >>> [s.anchor for s in site.stories]
    ['index']
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field, ValidationError

from nrtksync.core.exceptions import PayloadError, PublishError
from nrtksync.models.base import NrtkModel

if TYPE_CHECKING:
    from nrtksync.core.config import SiteLayout

# Anchor of the site's landing page
LANDING_ANCHOR = "index"

_PATH_SEPARATORS = ("/", "\\", "\0")


def is_plain_anchor(anchor: str) -> bool:
    """Whether an anchor names a single file inside the content directory.

    Example:
        >>> is_plain_anchor("about"), is_plain_anchor("../etc/passwd")
        (True, False)
    """
    if anchor in ("", ".", ".."):
        return False
    return not any(sep in anchor for sep in _PATH_SEPARATORS)


class Story(NrtkModel):
    """A single published story.

    One story maps to exactly one page, named from its anchor.

    Example:
        >>> from pathlib import Path
        >>> from nrtksync.core.config import SiteLayout
        >>> from nrtksync.models.payload import Story
        >>> story = Story(anchor="about", content="<p>hi</p>")
        >>> layout = SiteLayout(Path("www"), Path("snapshot"), Path("meta.json"))
        >>> story.output_path(layout)
        PosixPath('www/about.html')
        >>> story.render()
        b'<p>hi</p>'
    """

    uid: str = ""
    anchor: str = ""
    canonical_url: str = ""
    title: str = ""
    credits: str = ""
    content: str = ""
    story_date: str = ""
    is_landing: bool = False
    updated_at: str = ""
    url: str = ""
    hash: str = Field(default="", description="Feed-supplied content hash, opaque")

    @property
    def is_index(self) -> bool:
        """Whether this story is the landing page by anchor."""
        return self.anchor == LANDING_ANCHOR

    def output_path(self, layout: SiteLayout) -> Path:
        """Page path for this story.

        Raises:
            PublishError: If the anchor is not a plain file name.
        """
        path = layout.content_path(self.anchor)
        if not is_plain_anchor(self.anchor):
            raise PublishError(path, ValueError(f"invalid anchor {self.anchor!r}"))
        return path

    def render(self) -> bytes:
        return self.content.encode("utf-8")


class SiteData(NrtkModel):
    """Parsed site feed."""

    title: str = ""
    entity: str = ""
    locale: str = ""
    site_name: str = ""
    logo_url: str = ""
    homepage_url: str = ""
    stories: tuple[Story, ...] = ()
    error_page: str = ""


def parse_payload(raw: bytes) -> SiteData:
    """Parse raw feed bytes.

    Args:
        raw: The fetched payload, exactly as received.

    Returns:
        The parsed site data.

    Raises:
        PayloadError: If the bytes are not JSON or do not have the feed shape.
    """
    try:
        return SiteData.model_validate_json(raw)
    except ValidationError as e:
        raise PayloadError(f"unable to parse JSON data: {e}") from e
