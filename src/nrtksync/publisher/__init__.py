"""Publisher backends."""

from nrtksync.publisher.filesystem import FilePublisher, PublishReport

__all__ = ["FilePublisher", "PublishReport"]
