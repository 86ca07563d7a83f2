"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime
    from pathlib import Path

    from profilecache.core.models import StoreStatistics

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class AssetSource(Protocol):
    """Enumerates the source assets the host cares about."""

    def iter_assets(self) -> Iterator[Path]:
        """Yield source asset paths.

        The sequence is finite and restartable; order is irrelevant.
        """
        ...


@runtime_checkable
class IdentifierResolver(Protocol):
    """Maps source assets to stable artifact identifiers and back."""

    def resolve(self, asset: Path) -> str:
        """Return the artifact identifier of a source asset.

        Raises:
            ResolverError: If the asset has no identifier.
        """
        ...

    def reverse_lookup(self, artifact_id: str) -> Path | None:
        """Return the source asset for an identifier, or None if there is none.

        The returned path may point at a file that no longer exists; callers
        check existence before trusting it.
        """
        ...


@runtime_checkable
class RefreshableResolver(IdentifierResolver, Protocol):
    """An IdentifierResolver that caches lookups and can be told to rescan.

    The engine calls refresh() at the start of every restore pass, so assets
    added or removed since an earlier pass are seen.
    """

    def refresh(self) -> None:
        """Forget cached lookups."""
        ...


@runtime_checkable
class SnapshotStorePort(Protocol):
    """Per-profile snapshot stores with marker bookkeeping."""

    def store_path(self, profile: str) -> Path:
        """Return the store directory of a profile without creating it."""
        ...

    def exists(self, profile: str) -> bool:
        """Check whether a profile has ever been saved."""
        ...

    def ensure_store(self, profile: str) -> Path:
        """Create the store directory of a profile if needed and return it.

        Raises:
            SyncIOError: If the directory cannot be created.
        """
        ...

    def read_marker(self, store_root: Path, *, create: bool = True) -> datetime | None:
        """Return the last successful save time, or None if never saved.

        Creates an empty marker when none exists, unless create is False.
        """
        ...

    def write_marker(self, store_root: Path, now: datetime) -> None:
        """Record a successful save at the given time."""
        ...

    def index(self, root: Path) -> dict[str, datetime]:
        """Map artifact locations under root to their modification times."""
        ...

    def copy_artifact(self, src: Path, dest: Path) -> None:
        """Atomically copy one artifact, preserving its modification time.

        Raises:
            FileNotFoundError: If src does not exist.
            SyncIOError: For any other filesystem failure.
        """
        ...

    def remove_artifact(self, store_root: Path, location: str) -> None:
        """Delete one cached artifact from a store."""
        ...

    def profiles(self) -> list[str]:
        """List the profiles that have a store, sorted by name."""
        ...

    def statistics(self, profile: str) -> StoreStatistics:
        """Summarize one profile's store."""
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports sync progress to the user.

    This protocol defines the contract for progress display adapters.
    The core domain uses this to report progress without depending
    on any specific UI library.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a sync phase.

        Args:
            name: Human-readable name for the phase (e.g. "save:desktop").
            total: Total number of artifacts to process.

        Returns:
            A ProgressCallback to call with (completed, total).
        """
        ...

    def finish_task(self, name: str) -> None:
        """Mark a phase as complete. Not called for a phase that aborted.

        Args:
            name: The task name passed to start_task().
        """
        ...


class NullProgressReporter:
    """A ProgressReporter that produces no output.

    Used as the default when no progress reporting is desired.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:  # noqa: ARG002
        """Return a no-op callback."""
        return lambda _completed, _total: None

    def finish_task(self, name: str) -> None:
        """Do nothing."""
        _ = name  # Unused but required by protocol
