"""Full profile switch driven by a project config.

Reads .profilecache/config.py, remembers the active profile in
.profilecache/active, and shows progress bars while syncing.
"""

from profilecache import (
    ExtensionAssetSource,
    RichProgressReporter,
    SyncEngine,
    find_project_root,
    load_config,
    read_active_profile,
    write_active_profile,
)


root = find_project_root()
config = load_config(root)

engine = SyncEngine.from_config(config)
assets = ExtensionAssetSource(config.assets_root, config.formats)


def activate(profile: str) -> None:
    """Host hook: record the new profile once the cache is in place."""
    write_active_profile(root, profile)


with RichProgressReporter() as progress:
    report = engine.switch_profile(
        read_active_profile(root),
        "ios",
        config.working_root,
        assets.iter_assets(),
        activate,
        progress,
        fallback_uncached=True,
    )

if not report.cached:
    print("Switched without cache")
