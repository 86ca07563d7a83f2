"""Project config discovery.

Loads the optional project config module at .profilecache/config.py.
The module may define any of:

- working_root: directory the host keeps derived artifacts in
- data_root: directory holding the per-profile stores
- assets_root: directory scanned for source assets
- formats: an AssetFormats instance
- resolver: "meta" or "digest"

Relative paths are resolved against the project root.
"""

from __future__ import annotations

import importlib.util
import sys
import traceback
from pathlib import Path

from profilecache.config import (
    DEFAULT_ASSETS_ROOT,
    DEFAULT_DATA_ROOT,
    DEFAULT_WORKING_ROOT,
    PROJECT_DIR,
)
from profilecache.core.exceptions import ConfigLoadError, ConfigurationError
from profilecache.core.models import AssetFormats, SyncConfig


CONFIG_FILE = "config.py"


def config_path(root: Path) -> Path:
    """Get the path of the project config module."""
    return root / PROJECT_DIR / CONFIG_FILE


def _exec_config(path: Path) -> dict[str, object]:
    """Execute a config module and return its namespace.

    Raises:
        ConfigLoadError: If the module fails to import.
    """
    # Generate a unique module name to avoid conflicts
    module_name = f"_profilecache_config_{id(path)}"

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigLoadError(f"Could not load config from {path}", config_path=path)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module

    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        raise ConfigLoadError(
            f"Syntax error in {path.name}: {e.msg}",
            config_path=path,
            line=e.lineno,
            cause=e,
        ) from e
    except Exception as e:
        frames = [f for f in traceback.extract_tb(e.__traceback__) if f.filename == str(path)]
        raise ConfigLoadError(
            f"Error loading {path.name}: {e}",
            config_path=path,
            line=frames[-1].lineno if frames else None,
            cause=e,
        ) from e
    finally:
        # Clean up to avoid polluting sys.modules
        sys.modules.pop(module_name, None)

    return vars(module)


def _resolve(root: Path, value: object, name: str) -> Path:
    if not isinstance(value, str | Path):
        raise ConfigurationError(f"{name} must be a path, got {type(value).__name__}")
    path = Path(value)
    return path if path.is_absolute() else root / path


def load_config(root: Path) -> SyncConfig:
    """Build the SyncConfig of a project.

    Args:
        root: Project root directory.

    Returns:
        SyncConfig with absolute paths. Defaults are used for anything the
        config module does not define, or for everything if it is absent.

    Raises:
        ConfigLoadError: If the config module cannot be imported.
        ConfigurationError: If a setting has the wrong type or value.
    """
    path = config_path(root)
    namespace = _exec_config(path) if path.exists() else {}

    formats = namespace.get("formats", AssetFormats())
    if not isinstance(formats, AssetFormats):
        raise ConfigurationError("formats must be an AssetFormats instance")

    try:
        return SyncConfig(
            working_root=_resolve(
                root, namespace.get("working_root", DEFAULT_WORKING_ROOT), "working_root"
            ),
            data_root=_resolve(
                root, namespace.get("data_root", DEFAULT_DATA_ROOT), "data_root"
            ),
            assets_root=_resolve(
                root, namespace.get("assets_root", DEFAULT_ASSETS_ROOT), "assets_root"
            ),
            formats=formats,
            resolver=namespace.get("resolver", "meta"),  # type: ignore[arg-type]
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
