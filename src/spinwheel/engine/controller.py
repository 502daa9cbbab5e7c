"""Per-wheel owner of the accumulated rotation."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..models import SpinParams, SpinResult
from .angles import FULL_TURN_DEG, full_turns, normalize_angle
from .convention import (
    WHEEL_CONVENTION,
    AngularConvention,
    check_rotation,
    check_segment_count,
    check_target_index,
)
from .errors import InvalidConfigurationError, SpinInProgressError
from .rotation import check_spin_bounds, compute_target_rotation

logger = logging.getLogger(__name__)


class WheelController:
    """Holds the rotation state of one wheel and runs its spins one at a time.

    ``rotation`` is only read when a spin starts and only written when that
    spin is confirmed with :meth:`complete_spin`. A cancelled spin leaves it
    untouched.
    """

    def __init__(
        self,
        segment_count: int = 0,
        params: Optional[SpinParams] = None,
        rng: Optional[np.random.Generator] = None,
        convention: AngularConvention = WHEEL_CONVENTION,
    ) -> None:
        self.params = params if params is not None else SpinParams()
        check_spin_bounds(self.params.min_full_spins, self.params.max_full_spins)
        self._rng = rng if rng is not None else np.random.default_rng()
        self._convention = convention
        self._segment_count = 0
        self._rotation = 0.0
        self._folded_turns = 0
        self._pending: Optional[SpinResult] = None
        self.set_segment_count(segment_count)

    # ----------------------------- Properties ---------------------------------

    @property
    def convention(self) -> AngularConvention:
        return self._convention

    @property
    def rotation(self) -> float:
        """Current rotation in degrees, as handed to the renderer."""
        return self._rotation

    @property
    def accumulated_rotation(self) -> float:
        """Total rotation since creation, including turns folded away."""
        return self._rotation + FULL_TURN_DEG * self._folded_turns

    @property
    def segment_count(self) -> int:
        return self._segment_count

    @property
    def is_spinning(self) -> bool:
        return self._pending is not None

    @property
    def pending(self) -> Optional[SpinResult]:
        return self._pending

    # ------------------------------ Mutation -----------------------------------

    def set_segment_count(self, segment_count: int) -> None:
        """Change the number of segments; 0 means an empty wheel."""
        if self._pending is not None:
            raise SpinInProgressError("Cannot change the wheel while it is spinning.")
        if segment_count == 0:
            self._segment_count = 0
            return
        self._segment_count = check_segment_count(segment_count)

    def pick_target(self) -> int:
        """Uniformly pick a winner index."""
        n = self._require_segments()
        return int(self._rng.integers(n))

    def start_spin(self, target_index: Optional[int] = None) -> SpinResult:
        """Compute the next spin without touching the rotation state."""
        if self._pending is not None:
            raise SpinInProgressError("A spin is already in progress.")
        n = self._require_segments()
        index = self.pick_target() if target_index is None else target_index
        index = check_target_index(index, n)

        start = self._rotation
        final = compute_target_rotation(
            start,
            n,
            index,
            self.params.min_full_spins,
            self.params.max_full_spins,
            rng=self._rng,
            convention=self._convention,
        )
        result = SpinResult(
            target_index=index,
            start_rotation=start,
            final_rotation=final,
            full_spins=full_turns(final - start),
        )
        self._pending = result
        logger.debug(
            "Spin started: target=%d of %d, %.3f -> %.3f deg",
            index,
            n,
            start,
            final,
        )
        return result

    def complete_spin(self) -> int:
        """Commit the pending spin and return the winner read at the pointer."""
        result = self._pending
        if result is None:
            raise RuntimeError("No spin in progress to complete.")
        self._pending = None
        self._rotation = result.final_rotation
        self._maybe_renormalize()

        winner = self.winner_at()
        if winner != result.target_index:
            logger.warning(
                "Pointer reads segment %d but spin targeted %d (rotation %.6f)",
                winner,
                result.target_index,
                result.final_rotation,
            )
        else:
            logger.info("Spin landed on segment %d", winner)
        return winner

    def cancel_spin(self) -> None:
        if self._pending is not None:
            logger.debug("Spin to %.3f deg cancelled", self._pending.final_rotation)
        self._pending = None

    def reset(self) -> None:
        """Return the wheel to rotation 0 (only between spins)."""
        if self._pending is not None:
            raise SpinInProgressError("Cannot reset the wheel while it is spinning.")
        self._rotation = 0.0
        self._folded_turns = 0

    # ------------------------------- Queries -----------------------------------

    def winner_at(self, rotation: Optional[float] = None) -> int:
        """Segment index under the pointer for ``rotation`` (default: current)."""
        n = self._require_segments()
        value = self._rotation if rotation is None else check_rotation(rotation)
        return self._convention.segment_at_pointer(value, n)

    # ------------------------------- Helpers -----------------------------------

    def _require_segments(self) -> int:
        if self._segment_count < 1:
            raise InvalidConfigurationError("The wheel has no segments.")
        return self._segment_count

    def _maybe_renormalize(self) -> None:
        limit = float(self.params.renormalize_after_deg)
        if limit <= 0 or abs(self._rotation) < limit:
            return
        normalized = normalize_angle(self._rotation)
        turns = int(round((self._rotation - normalized) / FULL_TURN_DEG))
        self._folded_turns += turns
        self._rotation = normalized
        logger.debug(
            "Rotation renormalized by %d turns to %.6f deg", turns, self._rotation
        )


__all__ = ["WheelController"]
