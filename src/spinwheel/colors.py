"""Segment colour palette."""

from typing import List

BASE_COLORS = (
    "#00D9FF",  # cyan bright
    "#0099CC",
    "#00FFAA",
    "#0088FF",
    "#00BBDD",
    "#00FF88",
    "#0077BB",
    "#00CCFF",
)

WINNER_COLOR = "#FFD700"
HUB_COLOR = "#0A1628"
ACCENT_COLOR = "#00D9FF"


def segment_colors(count: int) -> List[str]:
    """Colours for ``count`` segments, cycling through :data:`BASE_COLORS`."""
    return [BASE_COLORS[i % len(BASE_COLORS)] for i in range(max(0, int(count)))]


__all__ = [
    "BASE_COLORS",
    "WINNER_COLOR",
    "HUB_COLOR",
    "ACCENT_COLOR",
    "segment_colors",
]
