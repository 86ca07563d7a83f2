"""File-based snapshot store adapter implementing SnapshotStorePort."""

from __future__ import annotations

import contextlib
import os
import shutil
from datetime import UTC, datetime, timedelta
from pathlib import Path

from profilecache.adapters.store.indexer import index_directory
from profilecache.core.exceptions import SyncIOError
from profilecache.core.models import StoreStatistics, validate_profile


# Reserved file name of the marker; never a valid artifact location since
# every artifact lives inside a shard directory.
MARKER_NAME = ".profilecache-marker"

_TEMP_SUFFIX = ".tmp"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _to_ns(moment: datetime) -> int:
    """Convert a datetime to integer nanoseconds since the epoch.

    Exact at microsecond precision, so a marker reads back unchanged.
    """
    delta = moment.astimezone(UTC) - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 10**9 + delta.microseconds * 1_000


class SnapshotStore:
    """Per-profile artifact caches under a shared data directory.

    Each profile gets its own directory mirroring the working root's artifact
    layout, plus a marker file whose modification time records the last
    successful save of that profile.

    Attributes:
        data_root: Directory holding one store directory per profile.
        marker_name: File name of the marker inside each store.
    """

    def __init__(self, data_root: Path, marker_name: str = MARKER_NAME) -> None:
        """Initialize the store with a data directory.

        Args:
            data_root: Directory where profile stores are kept.
            marker_name: Reserved file name for the save marker.
        """
        self.data_root = data_root
        self.marker_name = marker_name

    def store_path(self, profile: str) -> Path:
        """Get the store directory of a profile without creating it."""
        return self.data_root / validate_profile(profile)

    def _marker_path(self, store_root: Path) -> Path:
        return store_root / self.marker_name

    def exists(self, profile: str) -> bool:
        """Check whether a profile has a store directory."""
        return self.store_path(profile).is_dir()

    def ensure_store(self, profile: str) -> Path:
        """Create the store directory of a profile if needed.

        Args:
            profile: The profile name.

        Returns:
            Path to the store directory.

        Raises:
            SyncIOError: If the directory cannot be created.
        """
        store_root = self.store_path(profile)
        try:
            store_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SyncIOError(
                f"Couldn't create cache directory: {store_root}",
                path=store_root,
                cause=e,
            ) from e
        return store_root

    def read_marker(self, store_root: Path, *, create: bool = True) -> datetime | None:
        """Get the time of the last successful save of a store.

        A missing marker means the profile is being cached for the first time.
        It is created stamped with the epoch so later reads still say "never"
        until a save completes.

        Args:
            store_root: The store directory.
            create: Whether to create a missing marker.

        Returns:
            UTC timestamp of the last save, or None if never saved.

        Raises:
            SyncIOError: If the marker cannot be read or created.
        """
        marker = self._marker_path(store_root)
        try:
            mtime_ns = marker.stat().st_mtime_ns
        except FileNotFoundError:
            if create:
                self._touch(marker, 0)
            return None
        except OSError as e:
            raise SyncIOError(
                f"Couldn't read marker: {marker}", path=marker, cause=e
            ) from e

        if mtime_ns <= 0:
            return None
        return _EPOCH + timedelta(microseconds=mtime_ns // 1_000)

    def write_marker(self, store_root: Path, now: datetime) -> None:
        """Record a successful save.

        Args:
            store_root: The store directory.
            now: Time of the save.

        Raises:
            SyncIOError: If the marker cannot be written.
        """
        self._touch(self._marker_path(store_root), _to_ns(now))

    def _touch(self, marker: Path, mtime_ns: int) -> None:
        try:
            marker.touch(exist_ok=True)
            os.utime(marker, ns=(mtime_ns, mtime_ns))
        except OSError as e:
            raise SyncIOError(
                f"Couldn't write marker: {marker}", path=marker, cause=e
            ) from e

    def index(self, root: Path) -> dict[str, datetime]:
        """Map artifact locations under root to modification times.

        The marker is never part of the result.
        """
        return index_directory(root, exclude=frozenset({self.marker_name}))

    def copy_artifact(self, src: Path, dest: Path) -> None:
        """Copy one artifact into place atomically.

        The file is copied next to dest under a temporary name, with its
        modification time preserved, then renamed over dest.

        Args:
            src: File to copy.
            dest: Destination path; parent directories are created.

        Raises:
            FileNotFoundError: If src does not exist.
            SyncIOError: For any other filesystem failure.
        """
        if not src.is_file():
            raise FileNotFoundError(f"Artifact not found: {src}")

        tmp = dest.with_name(dest.name + _TEMP_SUFFIX)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, tmp)
            tmp.replace(dest)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise SyncIOError(
                f"Couldn't copy {src} to {dest}", path=dest, cause=e
            ) from e

    def remove_artifact(self, store_root: Path, location: str) -> None:
        """Delete a cached artifact and prune its empty shard directory.

        Args:
            store_root: The store directory.
            location: Relative artifact location within the store.

        Raises:
            SyncIOError: If the file cannot be deleted.
        """
        path = store_root / location
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise SyncIOError(
                f"Couldn't delete cache entry: {path}", path=path, cause=e
            ) from e
        self._cleanup_empty_dirs(path.parent, store_root)

    def _cleanup_empty_dirs(self, path: Path, store_root: Path) -> None:
        """Remove empty directories recursively up to store_root."""
        try:
            while path != store_root and path.is_dir():
                if any(path.iterdir()):
                    break  # Directory not empty
                path.rmdir()
                path = path.parent
        except OSError:
            pass  # Directory not empty or other issue, ignore

    def profiles(self) -> list[str]:
        """List the profiles that have a store, sorted by name."""
        if not self.data_root.is_dir():
            return []
        return sorted(p.name for p in self.data_root.iterdir() if p.is_dir())

    def statistics(self, profile: str) -> StoreStatistics:
        """Get store statistics for a profile.

        Returns:
            StoreStatistics with entry count, total size in bytes (marker
            excluded) and the last save time.
        """
        store_root = self.store_path(profile)
        entries = self.index(store_root)

        total_size = 0
        for location in entries:
            with contextlib.suppress(OSError):
                total_size += (store_root / location).stat().st_size

        last_saved = (
            self.read_marker(store_root, create=False)
            if store_root.is_dir()
            else None
        )
        return StoreStatistics(
            profile=profile,
            entry_count=len(entries),
            total_size=total_size,
            last_saved=last_saved,
        )
