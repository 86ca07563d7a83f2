"""Configuration utilities for profilecache.

This module provides project root discovery and the persisted record of
which profile is currently active.
"""

from __future__ import annotations

from pathlib import Path

from profilecache.core.models import validate_profile


PROJECT_DIR = ".profilecache"
ACTIVE_PROFILE_FILE = "active"

# Locations relative to the project root, matching the host's own layout
DEFAULT_WORKING_ROOT = "Library/metadata"
DEFAULT_DATA_ROOT = "ProfileCacheData"
DEFAULT_ASSETS_ROOT = "Assets"


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root directory by walking up from start directory.

    Searches for marker files in the following priority order:
    1. .profilecache - Explicit project marker
    2. pyproject.toml - Python project root
    3. .git - Version control root

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to project root directory. Returns start directory if no markers found.

    Example:
        >>> from profilecache.config import find_project_root
        >>> root = find_project_root()
        >>> data_root = root / "ProfileCacheData"
    """
    if start is None:
        start = Path.cwd()

    markers = [PROJECT_DIR, "pyproject.toml", ".git"]
    current = start.resolve()

    for parent in [current, *current.parents]:
        for marker in markers:
            if (parent / marker).exists():
                return parent

    return start.resolve()


def read_active_profile(root: Path) -> str | None:
    """Read the name of the active profile recorded for a project.

    Args:
        root: Project root directory.

    Returns:
        The profile name, or None if no profile has been recorded.
    """
    path = root / PROJECT_DIR / ACTIVE_PROFILE_FILE
    if not path.exists():
        return None
    name = path.read_text(encoding="utf-8").strip()
    return name or None


def write_active_profile(root: Path, profile: str) -> None:
    """Record the active profile of a project.

    The file is replaced atomically so a reader never sees a partial name.

    Args:
        root: Project root directory.
        profile: The profile name.

    Raises:
        ValueError: If the profile name is invalid.
    """
    validate_profile(profile)
    path = root / PROJECT_DIR / ACTIVE_PROFILE_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(profile + "\n", encoding="utf-8")
    tmp.replace(path)
