"""Payload fingerprinting.

The fingerprint is a SHA-256 over the exact fetched bytes, not over the
parsed structure. Any byte change, including whitespace or key order,
produces a new fingerprint and therefore a republish.

Example:
    >>> from nrtksync.fingerprint import compute_fingerprint
    >>> fp = compute_fingerprint(b"hello")
    >>> fp.checksum
    '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    >>> fp.matches(compute_fingerprint(b"hello").checksum)
    True
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class Fingerprint:
    """Content hash of a payload and when it was taken."""

    checksum: str
    taken_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def matches(self, checksum: str | None) -> bool:
        return checksum is not None and checksum == self.checksum


def compute_fingerprint(raw: bytes) -> Fingerprint:
    """Fingerprint raw payload bytes."""
    return Fingerprint(checksum=hashlib.sha256(raw).hexdigest())
