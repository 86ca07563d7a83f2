"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

from profilecache.adapters.store import SnapshotStore
from profilecache.core.exceptions import ResolverError
from profilecache.core.layout import locate
from profilecache.core.ports import ProgressCallback
from profilecache.core.services import SyncEngine


# Fixed reference time for modification times in tests (2023-11-14 22:13:20 UTC)
BASE_TIME = 1_700_000_000.0


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, layout, ports, and services")
    config.addinivalue_line("markers", "store: Snapshot store and directory indexer")
    config.addinivalue_line("markers", "adapters: Asset and resolver adapters")
    config.addinivalue_line("markers", "progress: Rich progress integration")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


def set_mtime(path: Path, timestamp: float) -> None:
    """Set both access and modification time of a file."""
    os.utime(path, (timestamp, timestamp))


class FakeResolver:
    """In-memory IdentifierResolver keyed by asset path."""

    def __init__(self, mapping: dict[Path, str] | None = None) -> None:
        self.mapping = dict(mapping or {})

    def resolve(self, asset: Path) -> str:
        try:
            return self.mapping[asset]
        except KeyError:
            raise ResolverError(f"No identifier for {asset}", asset=asset) from None

    def reverse_lookup(self, artifact_id: str) -> Path | None:
        for path, known_id in self.mapping.items():
            if known_id == artifact_id:
                return path
        return None


class RecordingProgress:
    """ProgressReporter that records every call."""

    def __init__(self) -> None:
        self.started: list[tuple[str, int]] = []
        self.updates: list[tuple[str, int, int]] = []
        self.finished: list[str] = []

    def start_task(self, name: str, total: int) -> ProgressCallback:
        self.started.append((name, total))

        def callback(completed: int, total: int) -> None:
            self.updates.append((name, completed, total))

        return callback

    def finish_task(self, name: str) -> None:
        self.finished.append(name)


class FakeProject:
    """A host project on disk: source assets, a working root and a data root.

    Assets are registered with a FakeResolver; artifacts are written into the
    working root at their layout location. The engine clock is controlled
    through clock_time.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.assets_root = root / "Assets"
        self.working_root = root / "Library" / "metadata"
        self.data_root = root / "ProfileCacheData"
        self.assets_root.mkdir(parents=True)
        self.working_root.mkdir(parents=True)
        self.resolver = FakeResolver()
        self.store = SnapshotStore(self.data_root)
        self.clock_time = BASE_TIME + 1000

    @property
    def assets(self) -> list[Path]:
        return list(self.resolver.mapping)

    def add_asset(
        self, name: str, artifact_id: str, *, modified: float = BASE_TIME
    ) -> Path:
        path = self.assets_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"source of {name}")
        set_mtime(path, modified)
        self.resolver.mapping[path] = artifact_id
        return path

    def touch_asset(self, path: Path, modified: float) -> None:
        set_mtime(path, modified)

    def remove_asset(self, path: Path) -> None:
        path.unlink()
        del self.resolver.mapping[path]

    def write_artifact(
        self, artifact_id: str, content: bytes, *, modified: float = BASE_TIME + 10
    ) -> Path:
        path = self.working_root / locate(artifact_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        set_mtime(path, modified)
        return path

    def cached(self, profile: str, artifact_id: str) -> Path:
        return self.data_root / profile / locate(artifact_id)

    def now(self) -> datetime:
        return datetime.fromtimestamp(self.clock_time, tz=UTC)

    def engine(self) -> SyncEngine:
        return SyncEngine(store=self.store, resolver=self.resolver, clock=self.now)


@pytest.fixture
def project(tmp_path: Path) -> FakeProject:
    """A fresh on-disk project with a controllable engine clock."""
    return FakeProject(tmp_path)


@pytest.fixture
def fake_resolver() -> FakeResolver:
    """An empty in-memory resolver."""
    return FakeResolver()


@pytest.fixture
def progress() -> RecordingProgress:
    """A progress reporter that records calls."""
    return RecordingProgress()
