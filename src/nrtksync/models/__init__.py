"""Feed, metadata and artifact models."""

from nrtksync.models.artifacts import ErrorPage, SitemapDocument
from nrtksync.models.meta import ArchivedMeta, MetaRecord
from nrtksync.models.payload import LANDING_ANCHOR, SiteData, Story, parse_payload

__all__ = [
    "ArchivedMeta",
    "ErrorPage",
    "LANDING_ANCHOR",
    "MetaRecord",
    "SiteData",
    "SitemapDocument",
    "Story",
    "parse_payload",
]
