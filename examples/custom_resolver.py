"""Plugging in a host-specific identifier resolver.

Any object with resolve() and reverse_lookup() satisfies the
IdentifierResolver protocol. Here the host keeps an asset database
as a plain mapping of asset path to identifier.
"""

from pathlib import Path

from profilecache import (
    IdentifierResolver,
    ResolverError,
    SnapshotStore,
    SyncEngine,
)


class AssetDatabaseResolver:
    """Resolver backed by an in-memory asset database."""

    def __init__(self, database: dict[Path, str]) -> None:
        self._by_path = dict(database)
        self._by_id = {artifact_id: path for path, artifact_id in database.items()}

    def resolve(self, asset: Path) -> str:
        try:
            return self._by_path[asset]
        except KeyError:
            raise ResolverError(f"{asset} is not imported", asset=asset) from None

    def reverse_lookup(self, artifact_id: str) -> Path | None:
        return self._by_id.get(artifact_id)


database = {Path("Assets/tree.fbx"): "ab12cd34"}
resolver = AssetDatabaseResolver(database)
assert isinstance(resolver, IdentifierResolver)

engine = SyncEngine(store=SnapshotStore(Path("ProfileCacheData")), resolver=resolver)
engine.save_current_profile("desktop", Path("Library/metadata"), database)
