"""Unit tests for configuration utilities.

These tests verify project root discovery and the persisted record of the
active profile.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from pathlib import Path

from profilecache.config import (
    ACTIVE_PROFILE_FILE,
    PROJECT_DIR,
    find_project_root,
    read_active_profile,
    write_active_profile,
)


@pytest.mark.core
class TestFindProjectRoot:
    """Tests for find_project_root utility."""

    def test_find_project_root_with_profilecache_marker(self, tmp_path: Path) -> None:
        """Should find directory containing .profilecache marker."""
        # Arrange
        project_root = tmp_path
        (project_root / ".profilecache").mkdir()
        subdir = project_root / "Assets" / "Models"
        subdir.mkdir(parents=True)

        # Act
        result = find_project_root(start=subdir)

        # Assert
        assert result == project_root

    def test_find_project_root_with_pyproject_toml(self, tmp_path: Path) -> None:
        """Should find directory containing pyproject.toml marker."""
        project_root = tmp_path
        (project_root / "pyproject.toml").touch()
        subdir = project_root / "src" / "tools"
        subdir.mkdir(parents=True)

        result = find_project_root(start=subdir)

        assert result == project_root

    def test_find_project_root_with_git(self, tmp_path: Path) -> None:
        """Should find directory containing .git marker."""
        project_root = tmp_path
        (project_root / ".git").mkdir()
        subdir = project_root / "Assets"
        subdir.mkdir()

        result = find_project_root(start=subdir)

        assert result == project_root

    def test_nearest_marker_wins(self, tmp_path: Path) -> None:
        """A nested project takes precedence over an enclosing repository."""
        (tmp_path / ".git").mkdir()
        game = tmp_path / "games" / "forest"
        (game / ".profilecache").mkdir(parents=True)

        assert find_project_root(start=game / ".profilecache") == game

    def test_find_project_root_uses_cwd_by_default(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should start from the current directory when start is None."""
        (tmp_path / ".profilecache").mkdir()
        monkeypatch.chdir(tmp_path)

        assert find_project_root() == tmp_path.resolve()


@pytest.mark.core
class TestActiveProfile:
    """Tests for read_active_profile() and write_active_profile()."""

    def test_read_without_record_returns_none(self, tmp_path: Path) -> None:
        """A project that never switched has no active profile."""
        assert read_active_profile(tmp_path) is None

    def test_write_then_read(self, tmp_path: Path) -> None:
        """The recorded profile is read back."""
        write_active_profile(tmp_path, "android")

        assert read_active_profile(tmp_path) == "android"
        assert (tmp_path / PROJECT_DIR / ACTIVE_PROFILE_FILE).exists()

    def test_write_replaces_previous(self, tmp_path: Path) -> None:
        """Only the latest profile is kept."""
        write_active_profile(tmp_path, "android")
        write_active_profile(tmp_path, "desktop")

        assert read_active_profile(tmp_path) == "desktop"
        assert [p.name for p in (tmp_path / PROJECT_DIR).iterdir()] == [
            ACTIVE_PROFILE_FILE
        ]

    def test_blank_record_reads_as_none(self, tmp_path: Path) -> None:
        """An empty file is no record."""
        (tmp_path / PROJECT_DIR).mkdir()
        (tmp_path / PROJECT_DIR / ACTIVE_PROFILE_FILE).write_text("\n")

        assert read_active_profile(tmp_path) is None

    def test_invalid_profile_is_rejected(self, tmp_path: Path) -> None:
        """Names that can't be store directories are never recorded."""
        with pytest.raises(ValueError):
            write_active_profile(tmp_path, "../desktop")

        assert read_active_profile(tmp_path) is None
