"""Exceptions raised by the wheel engine."""


class WheelError(ValueError):
    """Base class for invalid wheel input."""


class InvalidConfigurationError(WheelError):
    """The wheel itself is misconfigured (segment count, spin bounds, rotation)."""


class InvalidTargetError(WheelError):
    """The requested winner index does not exist on the wheel."""


class SpinInProgressError(RuntimeError):
    """A spin is already in flight for this wheel."""


__all__ = [
    "WheelError",
    "InvalidConfigurationError",
    "InvalidTargetError",
    "SpinInProgressError",
]
