"""Wheel rotation and winner-selection engine."""

from ..models import SpinResult
from .angles import FULL_TURN_DEG, angle_per_segment, normalize_angle
from .controller import WheelController
from .convention import (
    WHEEL_CONVENTION,
    AngularConvention,
    alignment_angle,
    segment_at_pointer,
)
from .errors import (
    InvalidConfigurationError,
    InvalidTargetError,
    SpinInProgressError,
    WheelError,
)
from .rotation import choose_full_spins, compute_target_rotation

__all__ = [
    "FULL_TURN_DEG",
    "angle_per_segment",
    "normalize_angle",
    "AngularConvention",
    "WHEEL_CONVENTION",
    "alignment_angle",
    "segment_at_pointer",
    "choose_full_spins",
    "compute_target_rotation",
    "WheelController",
    "SpinResult",
    "WheelError",
    "InvalidConfigurationError",
    "InvalidTargetError",
    "SpinInProgressError",
]
