"""Asset enumeration adapter for local project directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from profilecache.core.models import AssetFormats


if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


# Sidecar files carrying asset identifiers, never assets themselves
META_SUFFIX = ".meta"


class ExtensionAssetSource:
    """Finds source assets under a directory by file extension.

    Implements the AssetSource protocol. Every call to iter_assets() walks
    the directory again, so the sequence is restartable.

    Example:
        >>> source = ExtensionAssetSource(Path("Assets"))
        >>> assets = sorted(source.iter_assets())
    """

    def __init__(self, assets_root: Path, formats: AssetFormats | None = None) -> None:
        self.assets_root = assets_root
        self.formats = formats if formats is not None else AssetFormats()

    def iter_assets(self) -> Iterator[Path]:
        """Yield asset files with a configured extension.

        Yields nothing if the assets root does not exist.
        """
        if not self.assets_root.is_dir():
            return

        for path in self.assets_root.rglob("*"):
            if path.suffix.lower() == META_SUFFIX:
                continue
            if self.formats.matches(path) and path.is_file():
                yield path
