"""Small helpers shared across spinwheel."""

from .geometry import clamp, polar_point, rotate_point

__all__ = ["clamp", "polar_point", "rotate_point"]
