"""Identifier resolver deriving identifiers from asset paths."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from profilecache.adapters.assets import ExtensionAssetSource
from profilecache.core.exceptions import ResolverError


if TYPE_CHECKING:
    from pathlib import Path

    from profilecache.core.models import AssetFormats


def path_digest(relative_path: str) -> str:
    """Compute the identifier of an asset from its relative POSIX path."""
    return hashlib.md5(relative_path.encode("utf-8")).hexdigest()


class PathDigestResolver:
    """Uses the MD5 digest of an asset's path relative to the assets root.

    For hosts without sidecar identifiers. Identifiers are stable while the
    asset stays where it is; a moved asset looks like a new asset and its old
    artifact becomes an orphan.
    """

    def __init__(self, assets_root: Path, formats: AssetFormats | None = None) -> None:
        self.assets_root = assets_root
        self._source = ExtensionAssetSource(assets_root, formats)
        self._by_digest: dict[str, Path] | None = None

    def resolve(self, asset: Path) -> str:
        """Return the digest of the asset's path relative to the assets root.

        Raises:
            ResolverError: If the asset is outside the assets root.
        """
        try:
            relative = asset.relative_to(self.assets_root)
        except ValueError as e:
            raise ResolverError(
                f"{asset} is not under {self.assets_root}", asset=asset, cause=e
            ) from e
        return path_digest(relative.as_posix())

    def reverse_lookup(self, artifact_id: str) -> Path | None:
        """Return the current asset with this digest, or None."""
        if self._by_digest is None:
            self._by_digest = {
                self.resolve(asset): asset for asset in self._source.iter_assets()
            }
        return self._by_digest.get(artifact_id)

    def refresh(self) -> None:
        """Forget the digest table so the next lookup rescans the assets root."""
        self._by_digest = None
