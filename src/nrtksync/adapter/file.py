"""Local feed source.

Reads a payload staged on disk, ``local.json`` by default.
"""

from __future__ import annotations

import logging
from pathlib import Path

from nrtksync.core.exceptions import FetchError

logger = logging.getLogger(__name__)


class LocalFeedSource:
    """Feed source backed by a local file.

    Example:
        >>> from nrtksync.adapter.file import LocalFeedSource
        >>> LocalFeedSource("local.json").name
        'local.json'
    """

    def __init__(self, path: str | Path = "local.json") -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    def fetch(self) -> bytes:
        """Read the staged payload.

        Raises:
            FetchError: If the file is missing or unreadable.
        """
        logger.info("Reading JSON from %s", self.path)
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise FetchError(f"unable to read file data: {e}", source=self.name, cause=e) from e
