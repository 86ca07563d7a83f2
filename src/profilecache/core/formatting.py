"""Formatting utilities for domain logic."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from profilecache.core.models import StoreStatistics


def profile_state(stats: StoreStatistics, active: str | None) -> str:
    """Classify a profile store for display.

    Returns:
        "active" for the active profile, "saved" for a store with a completed
        save, "incomplete" for a store whose first save never finished.
    """
    if stats.profile == active:
        return "active"
    if stats.last_saved is None:
        return "incomplete"
    return "saved"


def status_to_color(status: str) -> str:
    """Map status string to color name.

    Args:
        status: Status string ("active", "saved", or "incomplete")

    Returns:
        Color name string:
        - "active" -> "green"
        - "saved" -> "cyan"
        - "incomplete" -> "yellow"
        - invalid -> empty string
    """
    color_map = {
        "active": "green",
        "saved": "cyan",
        "incomplete": "yellow",
    }
    return color_map.get(status, "")
