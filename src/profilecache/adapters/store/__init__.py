"""Snapshot store adapters."""

from profilecache.adapters.store.indexer import index_directory
from profilecache.adapters.store.snapshot_store import MARKER_NAME, SnapshotStore


__all__ = ["MARKER_NAME", "SnapshotStore", "index_directory"]
