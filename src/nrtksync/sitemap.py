"""Sitemap generation: produce sitemap.xml from the feed's stories.

One ``<url>`` entry per story, in feed order. Nothing is sorted, skipped
or deduplicated.
"""

from __future__ import annotations

from collections.abc import Iterable
from xml.etree.ElementTree import Comment, Element, SubElement, tostring

from nrtksync.models.payload import Story

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
_XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
_SCHEMA_LOCATION = f"{_SITEMAP_NS} {_SITEMAP_NS}/sitemap.xsd"
_GENERATOR_COMMENT = " Created by Newsroom Toolkit www.newsroomtoolkit.com "

LANDING_PRIORITY = "1.0"
DEFAULT_PRIORITY = "0.8"

# updated_at is kept to whole seconds and pinned to UTC
_LASTMOD_LENGTH = 19
_LASTMOD_OFFSET = "+00:00"


def story_lastmod(story: Story) -> str:
    """Last-modified stamp for a story.

    Example:
        >>> from nrtksync.models.payload import Story
        >>> story_lastmod(Story(updated_at="2024-03-01T10:20:30.123456Z"))
        '2024-03-01T10:20:30+00:00'
    """
    return story.updated_at[:_LASTMOD_LENGTH] + _LASTMOD_OFFSET


def story_priority(story: Story) -> str:
    """Sitemap priority: the landing page outranks every other story."""
    return LANDING_PRIORITY if story.is_index else DEFAULT_PRIORITY


def generate_sitemap(stories: Iterable[Story]) -> bytes:
    """Generate a sitemap.xml document.

    Args:
        stories: Stories in feed order.

    Returns:
        UTF-8 encoded XML suitable for writing to ``sitemap.xml``.

    Example:
        >>> from nrtksync.models.payload import Story
        >>> xml = generate_sitemap([Story(anchor="index", canonical_url="https://x.test/")])
        >>> b"<priority>1.0</priority>" in xml
        True
    """
    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)
    urlset.set("xmlns:xsi", _XSI_NS)
    urlset.set("xsi:schemaLocation", _SCHEMA_LOCATION)
    urlset.append(Comment(_GENERATOR_COMMENT))

    for story in stories:
        url_el = SubElement(urlset, "url")
        SubElement(url_el, "loc").text = story.canonical_url
        SubElement(url_el, "lastmod").text = story_lastmod(story)
        SubElement(url_el, "priority").text = story_priority(story)

    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return ('<?xml version="1.0" encoding="UTF-8"?>' + xml).encode("utf-8")
