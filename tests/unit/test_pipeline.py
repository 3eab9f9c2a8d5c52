"""Tests for the sync pipeline.

Covers the end-to-end properties of a sync attempt:
- First run always publishes
- Unchanged payloads are skipped with zero writes
- Force republishes
- Superseded metadata is archived before being overwritten
- One failing artifact does not stop the others
- Malformed payloads touch nothing
"""

import json

import pytest

from nrtksync.core.config import SiteLayout
from nrtksync.core.exceptions import PayloadError, SetupError
from nrtksync.detector import DecisionReason
from nrtksync.fingerprint import compute_fingerprint
from nrtksync.models.meta import MetaRecord
from nrtksync.pipeline import SyncPipeline, SyncResult
from nrtksync.snapshot.filesystem import FileSnapshotStore
from nrtksync.snapshot.memory import MemorySnapshotStore

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def pipeline(layout, recording_publisher):
    """Filesystem pipeline whose writes are recorded."""
    store = FileSnapshotStore(layout, publisher=recording_publisher)
    return SyncPipeline(layout, store=store, publisher=recording_publisher)


def _read_meta(layout: SiteLayout) -> MetaRecord:
    return MetaRecord.from_json(layout.meta_path.read_bytes())


# =============================================================================
# Publish Tests
# =============================================================================


class TestFirstRun:
    """With no metadata on disk every sync publishes."""

    def test_publishes_all_artifacts(self, pipeline, layout, payload_bytes):
        raw = payload_bytes(["index", "b", "c"])

        result = pipeline.sync(raw)

        assert result.published is True
        assert result.reason is DecisionReason.FIRST_RUN
        assert result.ok
        for anchor in ("index", "b", "c"):
            page = layout.content_dir / f"{anchor}.html"
            assert page.read_text() == f"<html><body>{anchor}</body></html>"
        assert (layout.content_dir / "error.html").read_text() == "<html><body>Not found</body></html>"
        assert (layout.content_dir / "sitemap.xml").exists()
        assert _read_meta(layout).checksum == compute_fingerprint(raw).checksum

    def test_creates_directories(self, pipeline, layout, payload_bytes):
        pipeline.sync(payload_bytes())
        assert layout.content_dir.is_dir()
        assert layout.snapshot_dir.is_dir()

    def test_result_counts(self, pipeline, layout, payload_bytes):
        result = pipeline.sync(payload_bytes(["index", "b"]))
        assert result.story_count == 2
        # meta + 2 stories + error page + sitemap
        assert len(result.written) == 5
        assert layout.meta_path in result.written

    def test_meta_record_contents(self, pipeline, layout, payload_bytes):
        """Metadata carries site fields and the full story sequence."""
        pipeline.sync(payload_bytes(["index", "b"]))
        meta = _read_meta(layout)
        assert meta.title == "Daily News"
        assert meta.entity == "Example Media"
        assert meta.homepage_url == "https://news.example.com/"
        assert [s.anchor for s in meta.stories] == ["index", "b"]

    def test_meta_json_shape(self, pipeline, layout, payload_bytes):
        pipeline.sync(payload_bytes(["index"]))
        data = json.loads(layout.meta_path.read_text())
        assert set(data) == {"title", "entity", "homepage_url", "stories", "checksum", "updated_at"}
        assert data["stories"][0]["is_landing"] is True

    def test_uses_configured_extension(self, temp_dir, payload_bytes):
        layout = SiteLayout(temp_dir / "www", temp_dir / "snap", temp_dir / "meta.json", ".htm")
        SyncPipeline(layout).sync(payload_bytes(["index"]))
        assert (layout.content_dir / "index.htm").exists()
        assert (layout.content_dir / "error.htm").exists()


class TestIdempotentSkip:
    """Re-syncing identical bytes writes nothing."""

    def test_second_sync_skips(self, pipeline, recording_publisher, payload_bytes):
        raw = payload_bytes()
        pipeline.sync(raw)
        recording_publisher.attempts.clear()

        result = pipeline.sync(raw)

        assert result.published is False
        assert result.reason is DecisionReason.UNCHANGED
        assert result.written == []
        assert recording_publisher.attempts == []

    def test_skip_leaves_files_untouched(self, pipeline, layout, payload_bytes):
        raw = payload_bytes()
        pipeline.sync(raw)
        page = layout.content_dir / "b.html"
        page.write_text("edited locally")

        pipeline.sync(raw)

        assert page.read_text() == "edited locally"

    def test_skip_does_not_archive(self, pipeline, layout, payload_bytes):
        raw = payload_bytes()
        pipeline.sync(raw)
        pipeline.sync(raw)
        assert list(layout.snapshot_dir.iterdir()) == []


class TestForcedRepublish:
    """force=True republishes an unchanged payload."""

    def test_force_rewrites(self, pipeline, layout, recording_publisher, payload_bytes):
        raw = payload_bytes(["index", "b"])
        pipeline.sync(raw)
        (layout.content_dir / "b.html").write_text("edited locally")
        recording_publisher.attempts.clear()

        result = pipeline.sync(raw, force=True)

        assert result.published is True
        assert result.forced is True
        assert (layout.content_dir / "b.html").read_text() == "<html><body>b</body></html>"
        assert layout.meta_path in recording_publisher.attempts
        assert layout.content_dir / "sitemap.xml" in recording_publisher.attempts


class TestArchiveBeforeOverwrite:
    """A checksum transition leaves the old record in the snapshot dir."""

    def test_old_record_archived_new_record_current(self, pipeline, layout, payload_bytes):
        old_raw = payload_bytes(["index", "b"])
        new_raw = payload_bytes(["index", "b", "c"])
        h_old = compute_fingerprint(old_raw).checksum
        h_new = compute_fingerprint(new_raw).checksum

        pipeline.sync(old_raw)
        result = pipeline.sync(new_raw)

        assert result.previous_checksum == h_old
        assert result.archived is True
        archived = MetaRecord.from_json(layout.snapshot_path(h_old).read_bytes())
        assert archived.checksum == h_old
        assert [s.anchor for s in archived.stories] == ["index", "b"]
        assert _read_meta(layout).checksum == h_new
        assert not layout.snapshot_path(h_new).exists()

    def test_history_accumulates(self, pipeline, layout, payload_bytes):
        payloads = [payload_bytes(["index"], title=f"v{i}") for i in range(3)]
        for raw in payloads:
            pipeline.sync(raw)

        archived = FileSnapshotStore(layout).list_archived()
        expected = sorted(compute_fingerprint(raw).checksum for raw in payloads[:2])
        assert archived == expected

    def test_corrupt_meta_republishes(self, pipeline, layout, payload_bytes):
        """Unreadable metadata is overwritten, not fatal."""
        layout.meta_path.parent.mkdir(parents=True, exist_ok=True)
        layout.meta_path.write_text("{not json")

        result = pipeline.sync(payload_bytes())

        assert result.published is True
        assert result.reason is DecisionReason.LOAD_ERROR
        assert _read_meta(layout).checksum == result.checksum


class TestPartialFailure:
    """One unwritable artifact does not abort the rest."""

    def test_other_artifacts_still_published(self, pipeline, layout, make_payload):
        # a directory squatting on b.html cannot be replaced by a file
        (layout.content_dir / "b.html").mkdir(parents=True)
        raw = json.dumps(make_payload(["index", "b", "c"])).encode()

        result = pipeline.sync(raw)

        assert result.published is True
        assert not result.ok
        assert [f.path for f in result.failures] == [layout.content_dir / "b.html"]
        assert (layout.content_dir / "index.html").exists()
        assert (layout.content_dir / "c.html").exists()
        assert (layout.content_dir / "error.html").exists()
        assert (layout.content_dir / "sitemap.xml").exists()
        assert _read_meta(layout).checksum == result.checksum

    def test_escaping_anchor_fails_alone(self, pipeline, layout, temp_dir, make_payload):
        raw = json.dumps(make_payload(["index", "../escape", "sub/page"])).encode()

        result = pipeline.sync(raw)

        assert result.published is True
        assert len(result.failures) == 2
        assert not (temp_dir / "escape.html").exists()
        assert not (layout.content_dir / "sub").exists()
        assert (layout.content_dir / "index.html").exists()
        assert (layout.content_dir / "sitemap.xml").exists()
        assert _read_meta(layout).checksum == result.checksum

    def test_no_temp_files_left(self, pipeline, layout, make_payload):
        (layout.content_dir / "b.html").mkdir(parents=True)
        raw = json.dumps(make_payload(["index", "b"])).encode()
        pipeline.sync(raw)
        assert not [p for p in layout.content_dir.iterdir() if p.name.endswith(".tmp")]


class TestFatalErrors:
    """Parse and setup errors stop the attempt before any write."""

    def test_malformed_json(self, pipeline, layout, recording_publisher):
        with pytest.raises(PayloadError):
            pipeline.sync(b'{"stories": [')
        assert recording_publisher.attempts == []
        assert not layout.content_dir.exists()

    def test_wrong_shape(self, pipeline):
        with pytest.raises(PayloadError):
            pipeline.sync(b'{"stories": "not a list"}')

    def test_directory_setup_failure(self, temp_dir, payload_bytes):
        blocker = temp_dir / "blocker"
        blocker.write_text("a file, not a directory")
        layout = SiteLayout(blocker / "www", temp_dir / "snap", temp_dir / "meta.json")

        with pytest.raises(SetupError):
            SyncPipeline(layout).sync(payload_bytes())


class TestWithMemoryStore:
    """The pipeline works against any SnapshotStore."""

    def test_memory_store_round(self, layout, payload_bytes):
        store = MemorySnapshotStore()
        pipeline = SyncPipeline(layout, store=store)
        raw = payload_bytes()

        first = pipeline.sync(raw)
        second = pipeline.sync(raw)

        assert first.published and not second.published
        assert store.current.checksum == first.checksum
        assert store.saves == 1
        assert not layout.meta_path.exists()


class TestSyncResult:
    def test_defaults(self):
        result = SyncResult(checksum="ab12", published=False)
        assert result.ok
        assert result.forced is False
        assert result.written == []
