"""Shared fixtures for nrtk-sync tests."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

import pytest

from nrtksync.core.config import SiteLayout
from nrtksync.publisher.filesystem import FilePublisher


def _story(anchor: str, **fields: Any) -> dict[str, Any]:
    story = {
        "uid": f"uid-{anchor}",
        "anchor": anchor,
        "canonical_url": f"https://news.example.com/{anchor}",
        "title": anchor.title(),
        "credits": "Staff",
        "content": f"<html><body>{anchor}</body></html>",
        "story_date": "2024-03-01",
        "is_landing": anchor == "index",
        "updated_at": "2024-03-01T10:20:30.123456Z",
        "url": f"https://api.example.com/stories/{anchor}",
        "hash": f"hash-{anchor}",
    }
    story.update(fields)
    return story


def _payload(anchors: list[str] | None = None, **fields: Any) -> dict[str, Any]:
    payload = {
        "title": "Daily News",
        "entity": "Example Media",
        "locale": "en",
        "site_name": "daily",
        "logo_url": "https://news.example.com/logo.png",
        "homepage_url": "https://news.example.com/",
        "stories": [_story(a) for a in (anchors if anchors is not None else ["index", "b", "c"])],
        "error_page": "<html><body>Not found</body></html>",
    }
    payload.update(fields)
    return payload


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# Unprefixed keys read from older .env files
LEGACY_ENV_KEYS = ("IS_REMOTE", "IS_FORCE_UPDATE", "INFINITY")


@pytest.fixture
def clean_env(monkeypatch, temp_dir):
    """Run without NRTK settings in the environment and outside any .env file."""
    for name in list(os.environ):
        if name.upper().startswith("NRTK_") or name.upper() in LEGACY_ENV_KEYS:
            monkeypatch.delenv(name)
    monkeypatch.chdir(temp_dir)


@pytest.fixture
def layout(temp_dir: Path) -> SiteLayout:
    """Layout rooted in a temporary app directory."""
    return SiteLayout(
        content_dir=temp_dir / "www",
        snapshot_dir=temp_dir / "snapshot",
        meta_path=temp_dir / "meta.json",
    )


@pytest.fixture
def make_story():
    """Factory for story dicts in feed shape."""
    return _story


@pytest.fixture
def make_payload():
    """Factory for payload dicts in feed shape."""
    return _payload


@pytest.fixture
def payload_bytes():
    """Factory for serialized payloads."""

    def _bytes(anchors: list[str] | None = None, **fields: Any) -> bytes:
        return json.dumps(_payload(anchors, **fields)).encode("utf-8")

    return _bytes


class RecordingPublisher(FilePublisher):
    """FilePublisher that remembers every path it attempted."""

    def __init__(self, layout: SiteLayout) -> None:
        super().__init__(layout)
        self.attempts: list[Path] = []

    def publish(self, entity):
        self.attempts.append(entity.output_path(self.layout))
        return super().publish(entity)


@pytest.fixture
def recording_publisher(layout: SiteLayout) -> RecordingPublisher:
    """Publisher that records attempted writes."""
    return RecordingPublisher(layout)
