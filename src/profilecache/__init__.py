"""profilecache - Per-profile caching of derived build artifacts.

Switching a project's build profile makes the host regenerate every derived
artifact. This library snapshots the shared artifact directory into a cache
per profile before a switch and restores the target profile's cache after,
so only artifacts that are genuinely new or changed get regenerated.

Example:
    >>> from profilecache import ExtensionAssetSource, SyncEngine
    >>> from profilecache.discovery import load_config
    >>> config = load_config(Path("."))
    >>> engine = SyncEngine.from_config(config)
    >>> assets = ExtensionAssetSource(config.assets_root, config.formats)
    >>> engine.save_current_profile("desktop", config.working_root, assets.iter_assets())
    >>> engine.restore_profile("android", config.working_root)
"""

from profilecache.adapters.assets import ExtensionAssetSource
from profilecache.adapters.resolvers import MetaFileResolver, PathDigestResolver
from profilecache.adapters.store import MARKER_NAME, SnapshotStore
from profilecache.config import (
    find_project_root,
    read_active_profile,
    write_active_profile,
)
from profilecache.core.exceptions import (
    ConfigLoadError,
    ConfigurationError,
    MissingWorkingRootError,
    ProfileAlreadyActiveError,
    ProfileCacheError,
    ResolverError,
    SyncIOError,
)
from profilecache.core.layout import artifact_id_of, locate
from profilecache.core.models import (
    AssetFormats,
    RestoreReport,
    SaveReport,
    StoreStatistics,
    SwitchReport,
    SyncConfig,
)
from profilecache.core.ports import (
    AssetSource,
    IdentifierResolver,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    RefreshableResolver,
    SnapshotStorePort,
)
from profilecache.core.services import SyncEngine
from profilecache.discovery import load_config
from profilecache.progress import RichProgressReporter


__version__ = "0.1.0"

__all__ = [
    "MARKER_NAME",
    "AssetFormats",
    "AssetSource",
    "ConfigLoadError",
    "ConfigurationError",
    "ExtensionAssetSource",
    "IdentifierResolver",
    "MetaFileResolver",
    "MissingWorkingRootError",
    "NullProgressReporter",
    "PathDigestResolver",
    "ProfileAlreadyActiveError",
    "ProfileCacheError",
    "ProgressCallback",
    "ProgressReporter",
    "RefreshableResolver",
    "ResolverError",
    "RestoreReport",
    "RichProgressReporter",
    "SaveReport",
    "SnapshotStore",
    "SnapshotStorePort",
    "StoreStatistics",
    "SwitchReport",
    "SyncConfig",
    "SyncEngine",
    "SyncIOError",
    "__version__",
    "artifact_id_of",
    "find_project_root",
    "load_config",
    "locate",
    "read_active_profile",
    "write_active_profile",
]
