"""Core domain module for profilecache.

This module contains pure Python domain models, layout rules and port
definitions. The sync engine depends only on these.
"""

from profilecache.core.layout import artifact_id_of, locate
from profilecache.core.models import (
    AssetFormats,
    RestoreReport,
    SaveReport,
    SwitchReport,
    SyncConfig,
)
from profilecache.core.ports import (
    AssetSource,
    IdentifierResolver,
    ProgressCallback,
    ProgressReporter,
    RefreshableResolver,
    SnapshotStorePort,
)


__all__ = [
    "AssetFormats",
    "AssetSource",
    "IdentifierResolver",
    "ProgressCallback",
    "ProgressReporter",
    "RefreshableResolver",
    "RestoreReport",
    "SaveReport",
    "SnapshotStorePort",
    "SwitchReport",
    "SyncConfig",
    "artifact_id_of",
    "locate",
]
