"""Status command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from profilecache.cli.formatting import (
    _format_marker,
    _format_size,
    _format_status_with_color,
)
from profilecache.cli.main import app, load_project_context
from profilecache.core.formatting import profile_state


@app.command()
def status() -> None:
    """Show cached profiles with their size and last save time."""
    from profilecache import SnapshotStore
    from profilecache.config import read_active_profile

    root, config = load_project_context()
    store = SnapshotStore(config.data_root)
    active = read_active_profile(root)

    profiles = store.profiles()
    if not profiles:
        typer.echo("No cached profiles. Run 'profilecache save' to create one.")
        if active:
            typer.echo(f"Active profile: {active}")
        return

    # Build Rich table
    table = Table()
    table.add_column("Profile")
    table.add_column("Status")
    table.add_column("Entries", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Last saved")

    for profile in profiles:
        stats = store.statistics(profile)
        table.add_row(
            profile,
            _format_status_with_color(profile_state(stats, active)),
            str(stats.entry_count),
            _format_size(stats.total_size),
            _format_marker(stats.last_saved),
        )

    # Print table using Rich Console
    console = Console(force_terminal=True)
    console.print(table)
