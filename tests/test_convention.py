"""Tests for the shared angular convention and the pointer lookup."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st
import pytest

from spinwheel.engine import (
    WHEEL_CONVENTION,
    AngularConvention,
    InvalidConfigurationError,
    InvalidTargetError,
    alignment_angle,
    normalize_angle,
    segment_at_pointer,
)

ROTATIONS = (0.0, 37.5, 359.9, 720.3, -45.0)

finite_rotations = st.floats(
    min_value=-1e7, max_value=1e7, allow_nan=False, allow_infinity=False
)


@pytest.mark.parametrize(
    "angle, expected",
    [(0.0, 0.0), (360.0, 0.0), (-90.0, 270.0), (725.0, 5.0), (-1e-20, 0.0)],
)
def test_normalize_angle(angle: float, expected: float) -> None:
    assert normalize_angle(angle) == pytest.approx(expected)
    assert 0.0 <= normalize_angle(angle) < 360.0


@given(finite_rotations)
@settings(deadline=None, max_examples=200)
def test_single_segment_is_always_index_zero(rotation: float) -> None:
    assert segment_at_pointer(rotation, 1) == 0


@pytest.mark.parametrize(
    "rotation, expected",
    [
        (0.0, 0),  # segment 0 starts at the pointer
        (-90.0, 1),
        (-180.0, 2),
        (-270.0, 3),
        (90.0, 3),
        (360.0, 0),
        (-450.0, 1),
    ],
)
def test_boundaries_belong_to_the_segment_starting_there(
    rotation: float, expected: int
) -> None:
    for _ in range(3):
        assert segment_at_pointer(rotation, 4) == expected


def test_rotation_just_before_a_boundary_reads_previous_segment() -> None:
    assert segment_at_pointer(-89.999, 4) == 0
    assert segment_at_pointer(-90.001, 4) == 1


@given(finite_rotations, st.integers(min_value=1, max_value=100))
@settings(deadline=None, max_examples=300)
def test_lookup_is_pure(rotation: float, n: int) -> None:
    first = segment_at_pointer(rotation, n)
    second = segment_at_pointer(rotation, n)
    assert first == second
    assert 0 <= first < n


@pytest.mark.parametrize("n", [1, 2, 3, 4, 7, 12, 37, 100])
def test_alignment_angle_is_inverse_of_lookup(n: int) -> None:
    for i in range(n):
        angle = alignment_angle(i, n)
        assert 0.0 <= angle < 360.0
        assert segment_at_pointer(angle, n) == i
        for turns in (-3, 1, 10):
            assert segment_at_pointer(angle + 360.0 * turns, n) == i


def test_renderer_and_lookup_share_segment_starts() -> None:
    n = 6
    for rotation in ROTATIONS:
        index = segment_at_pointer(rotation, n)
        start = WHEEL_CONVENTION.segment_start(index, n, rotation)
        end = start + 360.0 / n
        # the pointer (screen angle 0 == 360) lies inside [start, end)
        pointer = WHEEL_CONVENTION.pointer_deg
        assert start <= pointer < end or start <= pointer + 360.0 < end


def test_segment_center_sits_half_a_segment_after_start() -> None:
    start = WHEEL_CONVENTION.segment_start(1, 4, 10.0)
    center = WHEEL_CONVENTION.segment_center(1, 4, 10.0)
    assert start == pytest.approx(100.0)
    assert center == pytest.approx(145.0)


def test_landing_fraction_moves_alignment_within_segment() -> None:
    edge = AngularConvention(landing_fraction=0.0)
    assert edge.alignment_angle(1, 4) == pytest.approx(270.0)
    assert edge.segment_at_pointer(edge.alignment_angle(1, 4), 4) == 1
    assert WHEEL_CONVENTION.alignment_angle(1, 4) == pytest.approx(225.0)


@pytest.mark.parametrize("fraction", [-0.1, 1.0, 2.5])
def test_landing_fraction_out_of_range_is_rejected(fraction: float) -> None:
    with pytest.raises(InvalidConfigurationError):
        AngularConvention(landing_fraction=fraction)


@pytest.mark.parametrize("n", [0, -3, 2.5, True, "4", None])
def test_bad_segment_count_is_rejected(n) -> None:
    with pytest.raises(InvalidConfigurationError):
        segment_at_pointer(0.0, n)


@pytest.mark.parametrize("index", [-1, 4, 10])
def test_alignment_of_missing_segment_is_rejected(index: int) -> None:
    with pytest.raises(InvalidTargetError):
        alignment_angle(index, 4)


@pytest.mark.parametrize("rotation", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_rotation_is_rejected(rotation: float) -> None:
    with pytest.raises(InvalidConfigurationError):
        segment_at_pointer(rotation, 4)


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        segment_at_pointer(0.0, 0)
    with pytest.raises(ValueError):
        alignment_angle(5, 4)
