"""Directory indexer shared by both sync phases."""

from __future__ import annotations

import os
import stat
from datetime import UTC, datetime
from pathlib import Path

from profilecache.core.exceptions import SyncIOError


def index_directory(
    root: Path, exclude: frozenset[str] = frozenset()
) -> dict[str, datetime]:
    """Map every regular file under root to its modification time.

    Args:
        root: Directory to walk recursively.
        exclude: File names at the top level of root to leave out
            (e.g. the store marker).

    Returns:
        Dict of POSIX-style path relative to root -> UTC modification time.
        Empty if root does not exist.

    Raises:
        SyncIOError: If root or one of its subdirectories cannot be read.
    """
    if not root.exists():
        return {}

    def _raise(error: OSError) -> None:
        raise SyncIOError(
            f"Cannot read directory: {error.filename}",
            path=root,
            cause=error,
        ) from error

    entries: dict[str, datetime] = {}
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        for filename in filenames:
            file_path = Path(dirpath, filename)
            relative = file_path.relative_to(root).as_posix()
            if relative in exclude:
                continue
            try:
                info = file_path.stat()
            except FileNotFoundError:
                continue  # Removed while walking
            except OSError as e:
                raise SyncIOError(
                    f"Cannot stat file: {file_path}", path=file_path, cause=e
                ) from e
            if not stat.S_ISREG(info.st_mode):
                continue
            entries[relative] = datetime.fromtimestamp(info.st_mtime, tz=UTC)

    return entries
