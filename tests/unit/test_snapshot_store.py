"""Unit tests for SnapshotStore adapter."""

import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

from profilecache.adapters.store import MARKER_NAME, SnapshotStore
from profilecache.core.exceptions import SyncIOError


BASE_TIME = 1_700_000_000.0


@pytest.mark.store
class TestStorePath:
    """Tests for store_path(), exists() and ensure_store()."""

    def test_store_path_is_under_data_root(self, tmp_path: Path) -> None:
        """Each profile's store is <data_root>/<profile>."""
        store = SnapshotStore(tmp_path)
        assert store.store_path("desktop") == tmp_path / "desktop"

    def test_store_path_does_not_create(self, tmp_path: Path) -> None:
        """store_path() is pure path arithmetic."""
        store = SnapshotStore(tmp_path / "data")
        store.store_path("desktop")
        assert not (tmp_path / "data").exists()

    def test_invalid_profile_raises(self, tmp_path: Path) -> None:
        """Profiles that would escape the data root are rejected."""
        store = SnapshotStore(tmp_path)
        with pytest.raises(ValueError):
            store.store_path("../elsewhere")

    def test_ensure_store_creates_directory(self, tmp_path: Path) -> None:
        """ensure_store() creates the store and its parents."""
        store = SnapshotStore(tmp_path / "nested" / "data")

        root = store.ensure_store("android")

        assert root.is_dir()
        assert store.exists("android")

    def test_ensure_store_failure_raises_sync_io_error(self, tmp_path: Path) -> None:
        """A data root that is a file cannot hold stores."""
        blocker = tmp_path / "data"
        blocker.write_text("not a directory")
        store = SnapshotStore(blocker)

        with pytest.raises(SyncIOError) as exc_info:
            store.ensure_store("desktop")

        assert exc_info.value.path == blocker / "desktop"

    def test_exists_false_for_unknown_profile(self, tmp_path: Path) -> None:
        """A profile never saved has no store."""
        assert not SnapshotStore(tmp_path).exists("ios")


@pytest.mark.store
class TestMarker:
    """Tests for read_marker() and write_marker()."""

    def test_first_read_returns_never_and_creates_marker(self, tmp_path: Path) -> None:
        """Reading a store without a marker means it was never saved."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")

        assert store.read_marker(root) is None
        assert (root / MARKER_NAME).exists()

    def test_created_marker_still_reads_never(self, tmp_path: Path) -> None:
        """A marker created by a read does not count as a completed save."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")
        store.read_marker(root)

        assert store.read_marker(root) is None

    def test_read_without_create_leaves_store_untouched(self, tmp_path: Path) -> None:
        """create=False only reads."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")

        assert store.read_marker(root, create=False) is None
        assert not (root / MARKER_NAME).exists()

    def test_write_then_read_returns_timestamp(self, tmp_path: Path) -> None:
        """The marker remembers the time passed to write_marker()."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")
        saved_at = datetime.fromtimestamp(BASE_TIME, tz=UTC)

        store.write_marker(root, saved_at)

        assert store.read_marker(root) == saved_at

    def test_custom_marker_name(self, tmp_path: Path) -> None:
        """The marker file name is configurable."""
        store = SnapshotStore(tmp_path, marker_name=".last-save")
        root = store.ensure_store("desktop")

        store.write_marker(root, datetime.fromtimestamp(BASE_TIME, tz=UTC))

        assert (root / ".last-save").exists()


@pytest.mark.store
class TestIndex:
    """Tests for index()."""

    def test_index_excludes_marker(self, tmp_path: Path) -> None:
        """The marker is store metadata, not a cached artifact."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")
        store.write_marker(root, datetime.fromtimestamp(BASE_TIME, tz=UTC))
        (root / "ab").mkdir()
        (root / "ab" / "ab12cd34").write_text("artifact")

        assert set(store.index(root)) == {"ab/ab12cd34"}


@pytest.mark.store
class TestCopyArtifact:
    """Tests for copy_artifact()."""

    def test_copies_content_and_creates_parents(self, tmp_path: Path) -> None:
        """Intermediate directories are created as needed."""
        store = SnapshotStore(tmp_path / "data")
        src = tmp_path / "src"
        src.write_bytes(b"imported")
        dest = tmp_path / "data" / "desktop" / "ab" / "ab12cd34"

        store.copy_artifact(src, dest)

        assert dest.read_bytes() == b"imported"

    def test_preserves_modification_time(self, tmp_path: Path) -> None:
        """The cached copy keeps the artifact's own timestamp."""
        store = SnapshotStore(tmp_path)
        src = tmp_path / "src"
        src.write_bytes(b"imported")
        os.utime(src, (BASE_TIME, BASE_TIME))
        dest = tmp_path / "out" / "dest"

        store.copy_artifact(src, dest)

        assert dest.stat().st_mtime == pytest.approx(BASE_TIME)

    def test_overwrites_existing_destination(self, tmp_path: Path) -> None:
        """An existing file is replaced."""
        store = SnapshotStore(tmp_path)
        src = tmp_path / "src"
        src.write_bytes(b"new")
        dest = tmp_path / "dest"
        dest.write_bytes(b"old")

        store.copy_artifact(src, dest)

        assert dest.read_bytes() == b"new"

    def test_leaves_no_temporary_file(self, tmp_path: Path) -> None:
        """Only the destination remains after the rename."""
        store = SnapshotStore(tmp_path)
        src = tmp_path / "src"
        src.write_bytes(b"x")
        out = tmp_path / "out"

        store.copy_artifact(src, out / "dest")

        assert [p.name for p in out.iterdir()] == ["dest"]

    def test_missing_source_raises_file_not_found(self, tmp_path: Path) -> None:
        """A missing artifact is reported distinctly from I/O failures."""
        store = SnapshotStore(tmp_path)
        dest = tmp_path / "out" / "dest"

        with pytest.raises(FileNotFoundError):
            store.copy_artifact(tmp_path / "missing", dest)

        assert not dest.exists()

    def test_unwritable_destination_raises_sync_io_error(self, tmp_path: Path) -> None:
        """A destination whose parent is a file cannot be written."""
        store = SnapshotStore(tmp_path)
        src = tmp_path / "src"
        src.write_bytes(b"x")
        (tmp_path / "blocker").write_text("file")

        with pytest.raises(SyncIOError):
            store.copy_artifact(src, tmp_path / "blocker" / "dest")


@pytest.mark.store
class TestRemoveArtifact:
    """Tests for remove_artifact()."""

    def test_removes_file_and_empty_shard(self, tmp_path: Path) -> None:
        """Deleting the last entry of a shard removes the shard directory."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")
        (root / "ab").mkdir()
        (root / "ab" / "ab12cd34").write_text("x")

        store.remove_artifact(root, "ab/ab12cd34")

        assert not (root / "ab").exists()
        assert root.is_dir()

    def test_keeps_shard_with_other_entries(self, tmp_path: Path) -> None:
        """A shard that still holds entries is kept."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")
        (root / "ab").mkdir()
        (root / "ab" / "ab12cd34").write_text("x")
        (root / "ab" / "ab99").write_text("y")

        store.remove_artifact(root, "ab/ab12cd34")

        assert set(store.index(root)) == {"ab/ab99"}

    def test_missing_entry_does_not_raise(self, tmp_path: Path) -> None:
        """Removing an entry that is already gone is fine."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")

        store.remove_artifact(root, "ab/ab12cd34")


@pytest.mark.store
class TestProfilesAndStatistics:
    """Tests for profiles() and statistics()."""

    def test_profiles_empty_without_data_root(self, tmp_path: Path) -> None:
        """No data root means no profiles."""
        assert SnapshotStore(tmp_path / "data").profiles() == []

    def test_profiles_sorted(self, tmp_path: Path) -> None:
        """Profiles are listed by name."""
        store = SnapshotStore(tmp_path)
        for name in ["ios", "android", "desktop"]:
            store.ensure_store(name)
        (tmp_path / "stray-file").write_text("ignored")

        assert store.profiles() == ["android", "desktop", "ios"]

    def test_statistics(self, tmp_path: Path) -> None:
        """Statistics count entries and bytes, excluding the marker."""
        store = SnapshotStore(tmp_path)
        root = store.ensure_store("desktop")
        saved_at = datetime.fromtimestamp(BASE_TIME, tz=UTC)
        store.write_marker(root, saved_at)
        (root / "ab").mkdir()
        (root / "ab" / "ab12").write_bytes(b"12345")
        (root / "cd").mkdir()
        (root / "cd" / "cd34").write_bytes(b"123")

        stats = store.statistics("desktop")

        assert stats.profile == "desktop"
        assert stats.entry_count == 2
        assert stats.total_size == 8
        assert stats.last_saved == saved_at

    def test_statistics_of_unsaved_profile(self, tmp_path: Path) -> None:
        """A profile without a store has empty statistics."""
        stats = SnapshotStore(tmp_path).statistics("ios")

        assert stats.entry_count == 0
        assert stats.total_size == 0
        assert stats.last_saved is None
        assert not (tmp_path / "ios").exists()
