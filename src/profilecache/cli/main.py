"""CLI commands for profilecache."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import typer

from profilecache.core.exceptions import ProfileCacheError


if TYPE_CHECKING:
    from profilecache import RestoreReport, SaveReport, SyncConfig


app = typer.Typer(
    name="profilecache",
    help="Per-profile caching of derived build artifacts for fast profile switching.",
    no_args_is_help=True,
)


DEFAULT_CONFIG_TEMPLATE = '''\
"""profilecache project configuration.

Every setting is optional. Relative paths are resolved against the
project root.
"""

from profilecache import AssetFormats

# Directory the host keeps its derived artifacts in
working_root = "Library/metadata"

# Directory holding one cache per profile
data_root = "ProfileCacheData"

# Directory scanned for source assets
assets_root = "Assets"

# "meta" reads identifiers from <asset>.meta sidecars,
# "digest" derives them from asset paths
resolver = "meta"

# Extensions of the source assets worth caching
formats = AssetFormats()
'''


@app.callback()
def _configure(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every artifact decision.",
    ),
) -> None:
    """Per-profile caching of derived build artifacts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )


def _exit_with_error(error: ProfileCacheError) -> NoReturn:
    """Print an error with its recovery hint and exit with status 1."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    raise typer.Exit(1)


def load_project_context() -> tuple[Path, SyncConfig]:
    """Load project context for CLI commands.

    Returns:
        Tuple of (project root Path, resolved SyncConfig).

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    from profilecache.config import find_project_root
    from profilecache.discovery import load_config

    root = find_project_root()
    try:
        config = load_config(root)
    except ProfileCacheError as e:
        _exit_with_error(e)

    return root, config


def _validate_profile_arg(profile: str) -> str:
    from profilecache.core.models import validate_profile

    try:
        return validate_profile(profile)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _echo_save_report(report: SaveReport) -> None:
    prefix = "Would save" if report.dry_run else "Saved"
    typer.echo(
        f"{prefix} profile '{report.profile}': "
        f"{len(report.added)} added, {len(report.updated)} updated, "
        f"{len(report.unchanged)} unchanged"
    )
    if report.missing:
        typer.echo(f"  {len(report.missing)} not yet in working root")
    if report.unresolved:
        typer.echo(f"  {len(report.unresolved)} assets skipped (no identifier)")


def _echo_restore_report(report: RestoreReport) -> None:
    if not report.store_found:
        typer.echo(f"No cache for profile '{report.profile}'. Nothing to restore.")
        return
    prefix = "Would restore" if report.dry_run else "Restored"
    typer.echo(
        f"{prefix} profile '{report.profile}': "
        f"{len(report.restored)} restored, {len(report.stale)} stale, "
        f"{len(report.orphaned)} orphaned"
    )


@app.command()
def init(
    directory: str | None = typer.Argument(
        None,
        help="Directory to initialize. Defaults to current directory.",
    ),
    profile: str | None = typer.Option(
        None,
        "--profile",
        "-p",
        help="Record this profile as the currently active one.",
    ),
) -> None:
    """Initialize a new profilecache project structure."""
    from profilecache.config import PROJECT_DIR, write_active_profile
    from profilecache.discovery import CONFIG_FILE

    target = Path(directory) if directory else Path.cwd()
    target = target.resolve()

    project_dir = target / PROJECT_DIR
    if not project_dir.exists():
        project_dir.mkdir(parents=True)
        typer.echo(f"Created {project_dir.relative_to(target)}/")

    config_file = project_dir / CONFIG_FILE
    if not config_file.exists():
        config_file.write_text(DEFAULT_CONFIG_TEMPLATE)
        typer.echo(f"Created {config_file.relative_to(target)}")

    if profile:
        _validate_profile_arg(profile)
        write_active_profile(target, profile)
        typer.echo(f"Active profile: {profile}")


@app.command()
def save(
    profile: str | None = typer.Argument(
        None, help="Profile to save. Defaults to the active profile."
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be cached without writing anything.",
    ),
) -> None:
    """Snapshot the working root into a profile's cache."""
    from profilecache import ExtensionAssetSource, RichProgressReporter, SyncEngine
    from profilecache.config import read_active_profile

    root, config = load_project_context()

    if profile is None:
        profile = read_active_profile(root)
        if profile is None:
            typer.echo(
                "Error: No active profile recorded. Pass a profile name.", err=True
            )
            raise typer.Exit(1)
    _validate_profile_arg(profile)

    engine = SyncEngine.from_config(config)
    assets = ExtensionAssetSource(config.assets_root, config.formats)

    try:
        with RichProgressReporter() as progress:
            report = engine.save_current_profile(
                profile,
                config.working_root,
                assets.iter_assets(),
                progress,
                dry_run=dry_run,
            )
    except ProfileCacheError as e:
        _exit_with_error(e)

    _echo_save_report(report)


@app.command()
def restore(
    profile: str = typer.Argument(help="Profile whose cache to restore."),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be restored or deleted without touching files.",
    ),
) -> None:
    """Fill the working root from a profile's cache."""
    from profilecache import RichProgressReporter, SyncEngine

    _validate_profile_arg(profile)
    _root, config = load_project_context()
    engine = SyncEngine.from_config(config)

    try:
        with RichProgressReporter() as progress:
            report = engine.restore_profile(
                profile, config.working_root, progress, dry_run=dry_run
            )
    except ProfileCacheError as e:
        _exit_with_error(e)

    _echo_restore_report(report)


@app.command()
def switch(
    profile: str = typer.Argument(help="Profile to switch to."),
    fallback: bool = typer.Option(
        True,
        "--fallback/--no-fallback",
        help="Switch without the cache if the current profile can't be saved.",
    ),
) -> None:
    """Save the active profile, restore another, and make it active."""
    from profilecache import (
        ExtensionAssetSource,
        ProfileAlreadyActiveError,
        RichProgressReporter,
        SyncEngine,
    )
    from profilecache.config import read_active_profile, write_active_profile

    _validate_profile_arg(profile)
    root, config = load_project_context()
    current = read_active_profile(root)

    engine = SyncEngine.from_config(config)
    assets = ExtensionAssetSource(config.assets_root, config.formats)

    try:
        with RichProgressReporter() as progress:
            report = engine.switch_profile(
                current,
                profile,
                config.working_root,
                assets.iter_assets(),
                lambda target: write_active_profile(root, target),
                progress,
                fallback_uncached=fallback,
            )
    except ProfileAlreadyActiveError:
        typer.echo(f"You're already using profile '{profile}'.")
        return
    except ProfileCacheError as e:
        _exit_with_error(e)

    if report.save is not None:
        _echo_save_report(report.save)
    if report.restore is not None:
        _echo_restore_report(report.restore)
    if not report.cached:
        typer.echo("Warning: switched without cache; everything will be regenerated.")
    typer.echo(f"Active profile: {report.target}")


@app.command()
def active(
    profile: str | None = typer.Argument(
        None, help="Record this profile as active without syncing anything."
    ),
) -> None:
    """Show or set the active profile."""
    from profilecache.config import read_active_profile, write_active_profile

    root, _config = load_project_context()

    if profile is None:
        current = read_active_profile(root)
        typer.echo(current if current else "No active profile recorded.")
        return

    _validate_profile_arg(profile)
    write_active_profile(root, profile)
    typer.echo(f"Active profile: {profile}")


def main() -> None:
    """Entry point for the CLI."""
    app()
