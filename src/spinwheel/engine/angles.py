"""Angle helpers shared by the rotation engine and the renderer."""

from __future__ import annotations

import math

FULL_TURN_DEG = 360.0


def normalize_angle(angle_deg: float) -> float:
    """Map ``angle_deg`` into ``[0, 360)``.

    Python's ``%`` already returns a non-negative result for a positive
    modulus, but tiny negative inputs (``-1e-20 % 360``) round up to exactly
    ``360.0``; those are folded back to ``0.0``.
    """
    wrapped = float(angle_deg) % FULL_TURN_DEG
    if wrapped >= FULL_TURN_DEG:
        return 0.0
    return wrapped


def angle_per_segment(segment_count: int) -> float:
    """Angular width of one equal segment, in degrees."""
    return FULL_TURN_DEG / segment_count


def full_turns(angle_deg: float) -> int:
    """Number of whole turns contained in ``angle_deg`` (floored)."""
    return int(math.floor(float(angle_deg) / FULL_TURN_DEG))


def is_finite_angle(angle_deg: float) -> bool:
    try:
        return math.isfinite(float(angle_deg))
    except (TypeError, ValueError):
        return False


__all__ = [
    "FULL_TURN_DEG",
    "normalize_angle",
    "angle_per_segment",
    "full_turns",
    "is_finite_angle",
]
