"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from profilecache.core.formatting import status_to_color


if TYPE_CHECKING:
    from datetime import datetime


def _format_status_with_color(status: str) -> Text:
    """Format status string with color coding.

    Args:
        status: Status string ("active", "saved", or "incomplete")

    Returns:
        Rich Text object with the color from status_to_color().
    """
    color = status_to_color(status)
    return Text(status, style=color) if color else Text(status)


def _format_size(size_bytes: int) -> str:
    """Format size in bytes to human-readable format."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"


def _format_marker(last_saved: datetime | None) -> str:
    """Format a store marker timestamp in local time, or "never"."""
    if last_saved is None:
        return "never"
    return last_saved.astimezone().strftime("%Y-%m-%d %H:%M:%S")
