"""Domain exceptions for profilecache.

All library errors inherit from ProfileCacheError, allowing callers to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path


class ProfileCacheError(Exception):
    """Base class for all profilecache exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class MissingWorkingRootError(ProfileCacheError):
    """Raised when the shared working directory does not exist.

    Attributes:
        working_root: The directory that was expected to exist.
    """

    def __init__(self, working_root: Path) -> None:
        self.working_root = working_root
        super().__init__(f"Working root does not exist: {working_root}")

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the configured working root."""
        return "Check working_root in .profilecache/config.py or open the project once"


class SyncIOError(ProfileCacheError):
    """Raised when a filesystem operation of a sync pass fails.

    Covers store creation, directory indexing, artifact copies and deletes,
    and marker updates. Fatal to the pass in progress.

    Attributes:
        path: The path that caused the error.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions and free space."""
        return f"Check permissions and free disk space for {self.path}"


class ResolverError(ProfileCacheError):
    """Raised when a source asset cannot be mapped to an artifact identifier.

    Attributes:
        asset: The source asset path.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        asset: Path,
        cause: Exception | None = None,
    ) -> None:
        self.asset = asset
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest re-importing the asset so it gets an identifier."""
        return f"Re-import {self.asset.name} so the host assigns it an identifier"


class ProfileAlreadyActiveError(ProfileCacheError):
    """Raised when switching to the profile that is already active.

    Attributes:
        profile: The requested profile.
    """

    def __init__(self, profile: str) -> None:
        self.profile = profile
        super().__init__(f"Profile '{profile}' is already active")


class ConfigurationError(ProfileCacheError):
    """Raised for configuration problems (invalid or missing settings)."""

    pass


class ConfigLoadError(ProfileCacheError):
    """Raised when the project config file cannot be loaded.

    Attributes:
        config_path: Path to the config file that failed to load.
        line: Line number where the error occurred (if available).
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        config_path: Path,
        line: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.config_path = config_path
        self.line = line
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the config file at the specific line."""
        if self.line:
            return f"Check {self.config_path.name} at line {self.line}"
        return f"Check {self.config_path.name} for syntax or import errors"
