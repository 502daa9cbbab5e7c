"""WheelController: rotation ownership, one spin at a time, renormalization."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from spinwheel.engine import (
    InvalidConfigurationError,
    InvalidTargetError,
    SpinInProgressError,
    WheelController,
    segment_at_pointer,
)
from spinwheel.models import SpinParams, SpinResult


def _controller(n: int = 4, seed: int = 0, **params) -> WheelController:
    return WheelController(
        n, params=SpinParams(**params), rng=np.random.default_rng(seed)
    )


def test_new_wheel_starts_at_zero() -> None:
    wheel = _controller()
    assert wheel.rotation == 0.0
    assert wheel.accumulated_rotation == 0.0
    assert not wheel.is_spinning
    assert wheel.pending is None
    assert wheel.winner_at() == 0


def test_start_spin_does_not_move_rotation_until_completed() -> None:
    wheel = _controller()
    result = wheel.start_spin(2)
    assert isinstance(result, SpinResult)
    assert wheel.is_spinning
    assert wheel.rotation == 0.0
    assert result.start_rotation == 0.0
    assert result.target_index == 2

    winner = wheel.complete_spin()
    assert winner == 2
    assert wheel.rotation == result.final_rotation
    assert not wheel.is_spinning


def test_spin_result_reports_full_turns_and_delta() -> None:
    wheel = _controller(min_full_spins=5, max_full_spins=5)
    result = wheel.start_spin(0)
    assert result.full_spins == 5
    assert result.delta == pytest.approx(result.final_rotation)


def test_consecutive_spins_keep_moving_forward() -> None:
    wheel = _controller(n=7, seed=11, min_full_spins=3, max_full_spins=6)
    last = wheel.rotation
    for target in [3, 0, 6, 6, 1, 2, 5, 4]:
        result = wheel.start_spin(target)
        assert result.start_rotation == last
        assert result.final_rotation - last >= 3 * 360.0 - 1e-9
        assert wheel.complete_spin() == target
        last = wheel.rotation


def test_random_targets_are_reproducible_with_a_seed() -> None:
    a = _controller(n=10, seed=123)
    b = _controller(n=10, seed=123)
    for _ in range(5):
        ra = a.start_spin()
        rb = b.start_spin()
        assert ra == rb
        assert a.complete_spin() == ra.target_index
        assert b.complete_spin() == rb.target_index


def test_pick_target_covers_the_wheel() -> None:
    wheel = _controller(n=5, seed=3)
    picks = {wheel.pick_target() for _ in range(300)}
    assert picks == set(range(5))


def test_second_spin_while_pending_is_rejected() -> None:
    wheel = _controller()
    wheel.start_spin(1)
    with pytest.raises(SpinInProgressError):
        wheel.start_spin(2)
    assert wheel.pending is not None
    assert wheel.pending.target_index == 1


def test_segment_count_is_frozen_during_a_spin() -> None:
    wheel = _controller()
    wheel.start_spin(1)
    with pytest.raises(SpinInProgressError):
        wheel.set_segment_count(5)
    assert wheel.segment_count == 4
    wheel.complete_spin()
    wheel.set_segment_count(5)
    assert wheel.segment_count == 5


def test_cancel_leaves_rotation_untouched() -> None:
    wheel = _controller()
    wheel.start_spin(3)
    wheel.cancel_spin()
    assert wheel.rotation == 0.0
    assert not wheel.is_spinning
    result = wheel.start_spin(1)
    assert result.start_rotation == 0.0


def test_complete_without_spin_is_an_error() -> None:
    wheel = _controller()
    with pytest.raises(RuntimeError):
        wheel.complete_spin()


def test_empty_wheel_cannot_spin() -> None:
    wheel = WheelController()
    assert wheel.segment_count == 0
    with pytest.raises(InvalidConfigurationError):
        wheel.start_spin()
    with pytest.raises(InvalidConfigurationError):
        wheel.winner_at()


def test_invalid_target_is_rejected_before_state_changes() -> None:
    wheel = _controller()
    with pytest.raises(InvalidTargetError):
        wheel.start_spin(4)
    assert not wheel.is_spinning
    assert wheel.rotation == 0.0


def test_invalid_spin_bounds_are_rejected_at_construction() -> None:
    with pytest.raises(InvalidConfigurationError):
        WheelController(4, params=SpinParams(min_full_spins=8, max_full_spins=2))


def test_negative_segment_count_is_rejected() -> None:
    with pytest.raises(InvalidConfigurationError):
        WheelController(-2)


def test_renormalization_keeps_the_winner_and_total() -> None:
    wheel = _controller(
        n=9, seed=8, min_full_spins=3, max_full_spins=3, renormalize_after_deg=1000.0
    )
    result = wheel.start_spin(4)
    assert result.final_rotation > 1000.0
    assert wheel.complete_spin() == 4
    assert 0.0 <= wheel.rotation < 360.0
    assert wheel.winner_at() == 4
    assert segment_at_pointer(result.final_rotation, 9) == 4
    assert wheel.accumulated_rotation == pytest.approx(result.final_rotation)

    second = wheel.start_spin(7)
    assert second.start_rotation == wheel.rotation
    assert wheel.complete_spin() == 7
    assert wheel.accumulated_rotation > result.final_rotation


def test_rotation_grows_without_renormalization_below_threshold() -> None:
    wheel = _controller(min_full_spins=3, max_full_spins=3)
    wheel.start_spin(1)
    wheel.complete_spin()
    assert wheel.rotation > 360.0
    assert wheel.accumulated_rotation == wheel.rotation


def test_many_spins_stay_consistent() -> None:
    wheel = _controller(n=13, seed=21, renormalize_after_deg=50_000.0)
    for _ in range(200):
        result = wheel.start_spin()
        assert wheel.complete_spin() == result.target_index
        assert abs(wheel.rotation) < 50_000.0 + 11 * 360.0


def test_reset_returns_to_zero_between_spins() -> None:
    wheel = _controller()
    wheel.start_spin(2)
    with pytest.raises(SpinInProgressError):
        wheel.reset()
    wheel.complete_spin()
    wheel.reset()
    assert wheel.rotation == 0.0
    assert wheel.accumulated_rotation == 0.0


def test_winner_at_explicit_rotation() -> None:
    wheel = _controller()
    assert wheel.winner_at(-90.0) == 1
    with pytest.raises(InvalidConfigurationError):
        wheel.winner_at(float("nan"))


def test_completed_spin_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    wheel = _controller()
    with caplog.at_level(logging.INFO, logger="spinwheel.engine.controller"):
        wheel.start_spin(3)
        wheel.complete_spin()
    assert "landed on segment 3" in caplog.text
