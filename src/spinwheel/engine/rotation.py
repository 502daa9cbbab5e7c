"""Target rotation computation for a spin that must land on a chosen segment."""

from __future__ import annotations

import math
import operator
from typing import Optional, Tuple

import numpy as np

from .angles import FULL_TURN_DEG, angle_per_segment, normalize_angle
from .convention import (
    WHEEL_CONVENTION,
    AngularConvention,
    check_rotation,
    check_segment_count,
    check_target_index,
)
from .errors import InvalidConfigurationError

DEFAULT_MIN_FULL_SPINS = 3
DEFAULT_MAX_FULL_SPINS = 6

# Correction steps allowed when a landing point sits on a float boundary
MAX_ULP_STEPS = 64


def _spin_count(name: str, value: int) -> int:
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}.")
    try:
        count = operator.index(value)
    except TypeError as exc:
        raise InvalidConfigurationError(
            f"{name} must be an integer, got {value!r}."
        ) from exc
    if count < 0:
        raise InvalidConfigurationError(f"{name} must be non-negative, got {count}.")
    return count


def check_spin_bounds(min_full_spins: int, max_full_spins: int) -> Tuple[int, int]:
    """Return both bounds as ``int`` or raise if they do not form a valid range."""
    lo = _spin_count("min_full_spins", min_full_spins)
    hi = _spin_count("max_full_spins", max_full_spins)
    if lo > hi:
        raise InvalidConfigurationError(
            f"min_full_spins ({lo}) exceeds max_full_spins ({hi})."
        )
    return lo, hi


def choose_full_spins(
    min_full_spins: int,
    max_full_spins: int,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """Draw a whole number of extra turns in ``[min_full_spins, max_full_spins]``."""
    lo, hi = check_spin_bounds(min_full_spins, max_full_spins)
    if lo == hi:
        return lo
    gen = rng if rng is not None else np.random.default_rng()
    return int(gen.integers(lo, hi, endpoint=True))


def forward_delta(
    current_rotation: float,
    segment_count: int,
    target_index: int,
    convention: AngularConvention = WHEEL_CONVENTION,
) -> float:
    """Smallest non-negative turn that brings ``target_index`` under the pointer."""
    current_normalized = normalize_angle(check_rotation(current_rotation))
    alignment = convention.alignment_angle(target_index, segment_count)
    return normalize_angle(alignment - current_normalized)


def land_on_target(
    rotation: float,
    segment_count: int,
    target_index: int,
    convention: AngularConvention = WHEEL_CONVENTION,
) -> float:
    """Nudge ``rotation`` by single ulps until the pointer reads ``target_index``.

    A landing point on a segment edge (``landing_fraction == 0``) is an exact
    boundary, and rounding in ``current + 360 * k + delta`` can leave the sum a
    hair on the wrong side of it. Rotations that already read the target are
    returned unchanged.
    """
    n = check_segment_count(segment_count)
    index = check_target_index(target_index, n)
    wanted = (index + convention.landing_fraction) * angle_per_segment(n)
    value = check_rotation(rotation)
    for _ in range(MAX_ULP_STEPS):
        if convention.segment_at_pointer(value, n) == index:
            return value
        under = convention.wheel_angle_under_pointer(value)
        # a larger rotation moves the pointer back across the wheel
        behind = normalize_angle(under - wanted) > FULL_TURN_DEG / 2.0
        value = math.nextafter(value, -math.inf if behind else math.inf)
    raise InvalidConfigurationError(
        f"Rotation {rotation!r} is too large to land on segment {target_index} "
        f"of {n}."
    )


def compute_target_rotation(
    current_rotation: float,
    segment_count: int,
    target_index: int,
    min_full_spins: int = DEFAULT_MIN_FULL_SPINS,
    max_full_spins: int = DEFAULT_MAX_FULL_SPINS,
    rng: Optional[np.random.Generator] = None,
    convention: AngularConvention = WHEEL_CONVENTION,
) -> float:
    """Return the new absolute rotation that lands ``target_index`` at the pointer.

    The result is ``current_rotation + 360 * k + delta`` where ``k`` is drawn
    from ``[min_full_spins, max_full_spins]`` and ``delta`` in ``[0, 360)`` is
    the forward turn to the target's alignment angle. The wheel always moves
    strictly forward: when ``k`` is 0 and the target is already aligned, one
    full turn is added.

    Raises:
        InvalidConfigurationError: bad segment count, spin bounds or rotation.
        InvalidTargetError: ``target_index`` is not in ``[0, segment_count)``.
    """
    rotation = check_rotation(current_rotation)
    n = check_segment_count(segment_count)
    index = check_target_index(target_index, n)
    lo, hi = check_spin_bounds(min_full_spins, max_full_spins)

    delta = forward_delta(rotation, n, index, convention)
    k = choose_full_spins(lo, hi, rng)
    target = rotation + FULL_TURN_DEG * k + delta
    if target <= rotation:
        # k == 0 and the target is already aligned (or delta vanished in rounding)
        target += FULL_TURN_DEG
    return land_on_target(target, n, index, convention)


__all__ = [
    "DEFAULT_MIN_FULL_SPINS",
    "DEFAULT_MAX_FULL_SPINS",
    "check_spin_bounds",
    "choose_full_spins",
    "forward_delta",
    "land_on_target",
    "compute_target_rotation",
]
