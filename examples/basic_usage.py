"""Basic usage: cache one profile, restore another.

Call save before the host switches away from a profile, and restore
right after choosing the next one. Whatever restore could not satisfy
is regenerated by the host as usual.
"""

from pathlib import Path

from profilecache import (
    ExtensionAssetSource,
    MetaFileResolver,
    SnapshotStore,
    SyncEngine,
)


project = Path(".")

engine = SyncEngine(
    store=SnapshotStore(project / "ProfileCacheData"),
    resolver=MetaFileResolver(project / "Assets"),
)
assets = ExtensionAssetSource(project / "Assets")
working_root = project / "Library" / "metadata"

# Snapshot the outgoing profile
saved = engine.save_current_profile("desktop", working_root, assets.iter_assets())
print(f"Cached {saved.copied} artifacts, {len(saved.unchanged)} already current")

# Fill the working root from the incoming profile's cache
restored = engine.restore_profile("android", working_root)
if not restored.store_found:
    print("First switch to android, nothing cached yet")
else:
    print(f"Restored {len(restored.restored)}, {len(restored.stale)} need regenerating")
