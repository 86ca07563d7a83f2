"""Identifier resolver reading host-assigned GUIDs from .meta sidecars."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from profilecache.adapters.assets import META_SUFFIX
from profilecache.core.exceptions import ResolverError


logger = logging.getLogger(__name__)

_GUID_PATTERN = re.compile(r"^guid:\s*([0-9a-fA-F]{2,})\s*$", re.MULTILINE)


def read_guid(meta_path: Path) -> str | None:
    """Extract the GUID from a .meta sidecar, or None if it has none."""
    match = _GUID_PATTERN.search(meta_path.read_text(encoding="utf-8"))
    return match.group(1).lower() if match else None


class MetaFileResolver:
    """Resolves artifact identifiers from `<asset>.meta` sidecar files.

    The host writes a sidecar next to every imported asset containing a line
    `guid: <hex>`. The GUID names the derived artifact and survives renames
    and moves of the asset, as long as the sidecar moves with it.

    Reverse lookups scan the assets root once and are served from memory
    afterwards; call refresh() after assets are added or removed.
    """

    def __init__(self, assets_root: Path) -> None:
        self.assets_root = assets_root
        self._by_guid: dict[str, Path] | None = None

    def resolve(self, asset: Path) -> str:
        """Return the GUID recorded in the asset's sidecar.

        Raises:
            ResolverError: If the sidecar is missing, unreadable, or has no GUID.
        """
        meta_path = asset.with_name(asset.name + META_SUFFIX)
        try:
            guid = read_guid(meta_path)
        except OSError as e:
            raise ResolverError(
                f"No readable {META_SUFFIX} file for {asset}", asset=asset, cause=e
            ) from e

        if guid is None:
            raise ResolverError(f"No guid in {meta_path}", asset=asset)
        return guid

    def reverse_lookup(self, artifact_id: str) -> Path | None:
        """Return the asset whose sidecar carries this GUID.

        Like the host's own lookup, the path is returned as long as the
        sidecar exists, even if the asset file itself has been deleted.
        """
        if self._by_guid is None:
            self._by_guid = self._scan()
        return self._by_guid.get(artifact_id.lower())

    def refresh(self) -> None:
        """Forget the GUID table so the next lookup rescans the assets root."""
        self._by_guid = None

    def _scan(self) -> dict[str, Path]:
        by_guid: dict[str, Path] = {}
        if not self.assets_root.is_dir():
            return by_guid

        for meta_path in self.assets_root.rglob(f"*{META_SUFFIX}"):
            try:
                guid = read_guid(meta_path)
            except OSError as e:
                logger.warning("Cannot read %s: %s", meta_path, e)
                continue
            if guid is not None:
                by_guid[guid] = meta_path.with_name(meta_path.name[: -len(META_SUFFIX)])

        logger.debug("Indexed %d asset GUIDs under %s", len(by_guid), self.assets_root)
        return by_guid
