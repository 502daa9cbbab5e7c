"""The one angular convention shared by the wheel renderer and the engine.

Screen angles are degrees measured clockwise from 12 o'clock. The pointer is
fixed at ``pointer_deg`` and a positive rotation turns the wheel clockwise.
Segment ``i`` of ``n`` covers the half-open screen interval::

    [pointer + rotation + i * A, pointer + rotation + (i + 1) * A)    A = 360 / n

so at rotation 0 segment 0 starts at the pointer and the segments follow
clockwise in list order. Everything that paints segments or asks which segment
sits under the pointer goes through :data:`WHEEL_CONVENTION`; no other module
carries its own offset.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import operator

from .angles import FULL_TURN_DEG, angle_per_segment, is_finite_angle, normalize_angle
from .errors import InvalidConfigurationError, InvalidTargetError


def check_segment_count(segment_count: int) -> int:
    """Return ``segment_count`` as an ``int`` or raise if it is not ``>= 1``."""
    if isinstance(segment_count, bool):
        raise InvalidConfigurationError(
            f"Segment count must be an integer, got {segment_count!r}."
        )
    try:
        n = operator.index(segment_count)
    except TypeError as exc:
        raise InvalidConfigurationError(
            f"Segment count must be an integer, got {segment_count!r}."
        ) from exc
    if n < 1:
        raise InvalidConfigurationError(f"Segment count must be >= 1, got {n}.")
    return n


def check_target_index(target_index: int, segment_count: int) -> int:
    """Return ``target_index`` as an ``int`` or raise if it is off the wheel."""
    if isinstance(target_index, bool):
        raise InvalidTargetError(
            f"Target index must be an integer, got {target_index!r}."
        )
    try:
        index = operator.index(target_index)
    except TypeError as exc:
        raise InvalidTargetError(
            f"Target index must be an integer, got {target_index!r}."
        ) from exc
    if not 0 <= index < segment_count:
        raise InvalidTargetError(
            f"Target index {index} is outside [0, {segment_count})."
        )
    return index


def check_rotation(rotation: float) -> float:
    if not is_finite_angle(rotation):
        raise InvalidConfigurationError(f"Rotation must be finite, got {rotation!r}.")
    return float(rotation)


@dataclass(frozen=True)
class AngularConvention:
    """Where segments sit on screen and which one the pointer reads."""

    pointer_deg: float = 0.0
    landing_fraction: float = 0.5  # 0 = segment start, 0.5 = centre

    def __post_init__(self) -> None:
        if not 0.0 <= self.landing_fraction < 1.0:
            raise InvalidConfigurationError(
                f"landing_fraction must lie in [0, 1), got {self.landing_fraction}."
            )

    # ------------------------------ Renderer side ------------------------------

    def segment_start(self, index: int, segment_count: int, rotation: float) -> float:
        """Screen angle where segment ``index`` begins, in ``[0, 360)``."""
        n = check_segment_count(segment_count)
        return normalize_angle(
            self.pointer_deg + check_rotation(rotation) + index * angle_per_segment(n)
        )

    def segment_center(self, index: int, segment_count: int, rotation: float) -> float:
        n = check_segment_count(segment_count)
        return normalize_angle(
            self.segment_start(index, n, rotation) + angle_per_segment(n) / 2.0
        )

    def wheel_angle_under_pointer(self, rotation: float) -> float:
        """Angle on the wheel (from segment 0's start) currently under the pointer."""
        return normalize_angle(-check_rotation(rotation))

    def segment_at_pointer(self, rotation: float, segment_count: int) -> int:
        """Index of the segment whose interval contains the pointer."""
        n = check_segment_count(segment_count)
        under = self.wheel_angle_under_pointer(rotation)
        index = int(math.floor(under * n / FULL_TURN_DEG))
        # under < 360 but the product can still round up to n
        return min(index, n - 1)

    # ------------------------------ Engine side --------------------------------

    def alignment_angle(self, target_index: int, segment_count: int) -> float:
        """Rotation (mod 360) that puts ``target_index`` under the pointer.

        Inverse of :meth:`segment_at_pointer`: the pointer reads wheel angle
        ``-rotation``, so landing ``landing_fraction`` of the way into the
        target segment needs ``rotation = -(index + landing_fraction) * A``.
        """
        n = check_segment_count(segment_count)
        index = check_target_index(target_index, n)
        return normalize_angle(-(index + self.landing_fraction) * angle_per_segment(n))


WHEEL_CONVENTION = AngularConvention()


def segment_at_pointer(rotation: float, segment_count: int) -> int:
    """Module-level shortcut for :meth:`AngularConvention.segment_at_pointer`."""
    return WHEEL_CONVENTION.segment_at_pointer(rotation, segment_count)


def alignment_angle(target_index: int, segment_count: int) -> float:
    return WHEEL_CONVENTION.alignment_angle(target_index, segment_count)


__all__ = [
    "AngularConvention",
    "WHEEL_CONVENTION",
    "segment_at_pointer",
    "alignment_angle",
    "check_segment_count",
    "check_target_index",
    "check_rotation",
]
