"""Error handling patterns with recovery hints.

A failed save must not block the user: the host can still switch
profiles without the cache. A missing store on restore is not an
error at all, it is reported through RestoreReport.store_found.
"""

from pathlib import Path

from profilecache import (
    ExtensionAssetSource,
    MissingWorkingRootError,
    PathDigestResolver,
    ProfileCacheError,
    SnapshotStore,
    SyncEngine,
    SyncIOError,
)


project = Path(".")
engine = SyncEngine(
    store=SnapshotStore(project / "ProfileCacheData"),
    resolver=PathDigestResolver(project / "Assets"),
)
assets = ExtensionAssetSource(project / "Assets")
working_root = project / "Library" / "metadata"


# Pattern 1: Save, falling back to an uncached switch on failure
def save_or_fallback(profile: str) -> bool:
    """Return True if the profile was cached, False if the host should switch uncached."""
    try:
        engine.save_current_profile(profile, working_root, assets.iter_assets())
    except MissingWorkingRootError as e:
        print(f"Nothing to cache: {e.working_root} does not exist")
        return False
    except SyncIOError as e:
        # The marker was not advanced, the next save retries everything stale
        print(f"Couldn't cache {profile}: {e}")
        print(f"Hint: {e.recovery_hint}")
        return False
    return True


# Pattern 2: Catch-all for any library error
def restore_safe(profile: str) -> None:
    """Restore a profile, reporting any library error."""
    try:
        report = engine.restore_profile(profile, working_root)
    except ProfileCacheError as e:
        print(f"Unexpected error: {e}")
        print(f"Hint: {e.recovery_hint}")
        return

    if not report.store_found:
        print(f"No cache for {profile} yet")


if __name__ == "__main__":
    if save_or_fallback("desktop"):
        restore_safe("android")
