"""Site metadata records.

The *current* record lives at a single configured path and is overwritten
on every publish. When a record is superseded it is archived once, under
a name derived from its own checksum.

Example:
    >>> from nrtksync.models.meta import MetaRecord
    >>> record = MetaRecord(title="Daily", checksum="ab12")
    >>> MetaRecord.from_json(record.render()).checksum
    'ab12'
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field, ValidationError

from nrtksync.core.exceptions import SnapshotError
from nrtksync.models.base import NrtkModel
from nrtksync.models.payload import SiteData, Story

if TYPE_CHECKING:
    from nrtksync.core.config import SiteLayout
    from nrtksync.fingerprint import Fingerprint


class MetaRecord(NrtkModel):
    """Metadata describing the last published payload.

    Attributes:
        title: Site title.
        entity: Owning entity name.
        homepage_url: Site homepage.
        stories: Stories at the time of fingerprinting, in feed order.
        checksum: Hex SHA-256 of the raw payload bytes.
        updated_at: When the checksum was computed.
    """

    title: str = ""
    entity: str = ""
    homepage_url: str = ""
    stories: tuple[Story, ...] = ()
    checksum: str = ""
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_site(cls, site: SiteData, fingerprint: Fingerprint) -> MetaRecord:
        """Build the record for a freshly fingerprinted payload.

        Example:
            >>> from nrtksync.fingerprint import compute_fingerprint
            >>> from nrtksync.models.payload import SiteData
            >>> fp = compute_fingerprint(b"{}")
            >>> MetaRecord.from_site(SiteData(title="T"), fp).checksum == fp.checksum
            True
        """
        return cls(
            title=site.title,
            entity=site.entity,
            homepage_url=site.homepage_url,
            stories=site.stories,
            checksum=fingerprint.checksum,
            updated_at=fingerprint.taken_at,
        )

    @classmethod
    def from_json(cls, data: bytes | str, path: Path | None = None) -> MetaRecord:
        """Decode a stored record.

        Raises:
            SnapshotError: If the data is not a valid metadata record.
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise SnapshotError(f"corrupt metadata record: {e}", path=path) from e

    def output_path(self, layout: SiteLayout) -> Path:
        return layout.meta_path

    def render(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    def archived(self) -> ArchivedMeta:
        """View of this record as a historical snapshot."""
        return ArchivedMeta(self)


@dataclass(frozen=True)
class ArchivedMeta:
    """A superseded metadata record, addressed by its own checksum.

    Example:
        >>> from pathlib import Path
        >>> from nrtksync.core.config import SiteLayout
        >>> layout = SiteLayout(Path("www"), Path("snapshot"), Path("meta.json"))
        >>> MetaRecord(checksum="ab12").archived().output_path(layout)
        PosixPath('snapshot/meta.ab12.json')
    """

    record: MetaRecord

    @property
    def checksum(self) -> str:
        return self.record.checksum

    def output_path(self, layout: SiteLayout) -> Path:
        return layout.snapshot_path(self.record.checksum)

    def render(self) -> bytes:
        return self.record.render()
