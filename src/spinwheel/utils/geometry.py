"""Geometry helpers used by the renderer and the UI layer."""

import math
from typing import Tuple


def rotate_point(
    x: float, y: float, cx: float, cy: float, angle_deg: float
) -> Tuple[float, float]:
    """Rotate a point around ``(cx, cy)`` by ``angle_deg`` degrees.

    With Qt's y-down screen axes a positive angle turns clockwise.
    """
    theta = math.radians(angle_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    x0 = x - cx
    y0 = y - cy
    xr = x0 * cos_t - y0 * sin_t + cx
    yr = x0 * sin_t + y0 * cos_t + cy
    return xr, yr


def polar_point(
    cx: float, cy: float, radius: float, screen_deg: float
) -> Tuple[float, float]:
    """Point at ``radius`` from the centre, ``screen_deg`` clockwise from 12 o'clock."""
    return rotate_point(cx, cy - radius, cx, cy, screen_deg)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


__all__ = ["rotate_point", "polar_point", "clamp"]
