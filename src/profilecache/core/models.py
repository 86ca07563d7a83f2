"""Core domain models for profilecache.

These models are pure Python dataclasses with no I/O dependencies.
They describe the configuration of a project and the outcome of sync passes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal


if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path


ResolverKind = Literal["meta", "digest"]

# Formats the host imports natively. Switching profiles reimports these into a
# profile-specific representation, so they are the assets worth caching.
DEFAULT_TEXTURE_FORMATS = (
    ".png",
    ".jpg",
    ".jpeg",
    ".rgb",
    ".tga",
    ".targa",
    ".gif",
    ".tiff",
    ".tif",
    ".bmp",
    ".iff",
    ".pict",
    ".psd",
    ".exr",
)
DEFAULT_MESH_FORMATS = (
    ".mtl",
    ".obj",
    ".blend",
    ".fbm",
    ".fbx",
    ".3ds",
    ".mb",
    ".ma",
    ".max",
    ".c4d",
    ".collada",
    ".dxf",
)
DEFAULT_AUDIO_FORMATS = (".wav", ".mp3", ".aif", ".aiff", ".ogg")


def validate_profile(profile: str) -> str:
    """Check that a profile name can be used as a store directory name.

    Args:
        profile: The profile name.

    Returns:
        The profile name unchanged.

    Raises:
        ValueError: If the name is empty, a relative marker, or contains a
            path separator.
    """
    if not profile:
        raise ValueError("Profile name cannot be empty")
    if profile in {".", ".."} or "/" in profile or "\\" in profile:
        raise ValueError(f"Invalid profile name: {profile!r}")
    return profile


@dataclass(frozen=True, slots=True)
class AssetFormats:
    """File extensions that identify source assets worth caching.

    Extensions are matched case-insensitively and include the leading dot.

    Example:
        >>> formats = AssetFormats(textures=(".png",), meshes=(), audio=())
        >>> formats.matches(Path("Assets/Grass.PNG"))
        True
    """

    textures: tuple[str, ...] = DEFAULT_TEXTURE_FORMATS
    meshes: tuple[str, ...] = DEFAULT_MESH_FORMATS
    audio: tuple[str, ...] = DEFAULT_AUDIO_FORMATS

    @property
    def extensions(self) -> frozenset[str]:
        """All configured extensions, lower-cased."""
        return frozenset(
            ext.lower() for ext in (*self.textures, *self.meshes, *self.audio)
        )

    def matches(self, path: Path) -> bool:
        """Check whether a path has one of the configured extensions."""
        return path.suffix.lower() in self.extensions


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Resolved project configuration.

    Attributes:
        working_root: Shared directory the host reads derived artifacts from.
        data_root: Directory holding one snapshot store per profile.
        assets_root: Directory scanned for source assets.
        formats: Extensions of the source assets to cache.
        resolver: Which identifier resolver to use ("meta" or "digest").
    """

    working_root: Path
    data_root: Path
    assets_root: Path
    formats: AssetFormats = field(default_factory=AssetFormats)
    resolver: ResolverKind = "meta"

    def __post_init__(self) -> None:
        """Validate the resolver kind."""
        if self.resolver not in ("meta", "digest"):
            raise ValueError(f"Unknown resolver: {self.resolver!r}")


@dataclass(frozen=True, slots=True)
class StoreStatistics:
    """Summary of one profile's snapshot store."""

    profile: str
    entry_count: int
    total_size: int
    last_saved: datetime | None


@dataclass(frozen=True, slots=True)
class SaveReport:
    """Outcome of saving the working root into a profile's store.

    Locations are artifact locations relative to the store root.

    Attributes:
        profile: The profile that was saved.
        store_root: The store directory.
        added: Locations copied into the store for the first time.
        updated: Cached locations overwritten because their source changed.
        unchanged: Cached locations left untouched.
        missing: Locations with no artifact in the working root yet.
        unresolved: Source assets skipped because no identifier was found.
        marker: Marker timestamp after the pass (None if never written).
        dry_run: True when no files were written.
    """

    profile: str
    store_root: Path
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    unresolved: list[Path] = field(default_factory=list)
    marker: datetime | None = None
    dry_run: bool = False

    @property
    def copied(self) -> int:
        """Number of artifacts written into the store."""
        return len(self.added) + len(self.updated)


@dataclass(frozen=True, slots=True)
class RestoreReport:
    """Outcome of restoring a profile's store into the working root.

    Attributes:
        profile: The profile that was restored.
        store_root: The store directory.
        store_found: False when the profile has never been saved.
        restored: Locations copied into the working root.
        stale: Locations skipped because their source is not older.
        orphaned: Locations deleted because their source is gone.
        dry_run: True when no files were written or deleted.
    """

    profile: str
    store_root: Path
    store_found: bool = True
    restored: list[str] = field(default_factory=list)
    stale: list[str] = field(default_factory=list)
    orphaned: list[str] = field(default_factory=list)
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class SwitchReport:
    """Outcome of a full profile switch.

    Attributes:
        previous: The profile that was active before the switch, if known.
        target: The profile that is now active.
        save: Report of saving the previous profile (None if skipped).
        restore: Report of restoring the target (None if skipped).
        cached: False when the switch fell back to an uncached switch.
    """

    previous: str | None
    target: str
    save: SaveReport | None = None
    restore: RestoreReport | None = None
    cached: bool = True
