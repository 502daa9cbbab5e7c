"""What is painted under the pointer matches the engine's winner."""

from __future__ import annotations

import numpy as np
import pytest

pytest.importorskip("PySide6.QtGui")

from PySide6 import QtCore  # noqa: E402

from spinwheel.colors import segment_colors  # noqa: E402
from spinwheel.engine import compute_target_rotation  # noqa: E402
from spinwheel.engine import segment_at_pointer  # noqa: E402
from spinwheel.render import (  # noqa: E402
    WheelRenderer,
    label_font_size,
    pointer_probe,
    qt_angle,
    render_to_image,
    truncate_label,
)
from spinwheel.utils.qt import hex_to_rgb, qimage_to_rgb, sample_rgb  # noqa: E402

SIZE = 400


def _colour_under_pointer(names, rotation: float) -> tuple:
    image = render_to_image(
        names, rotation, size=SIZE, renderer=WheelRenderer(show_labels=False)
    )
    rgb = qimage_to_rgb(image)
    assert rgb.shape == (SIZE, SIZE, 3)
    x, y = pointer_probe(QtCore.QRectF(0.0, 0.0, SIZE, SIZE))
    return sample_rgb(rgb, x, y)


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 8])
def test_winner_colour_is_under_the_pointer(qapp, n: int) -> None:
    names = [f"P{i}" for i in range(n)]
    colors = segment_colors(n)
    rng = np.random.default_rng(n)
    for target in range(n):
        for current in (0.0, 37.5, 359.9, 720.3, -45.0):
            final = compute_target_rotation(current, n, target, 3, 6, rng=rng)
            assert _colour_under_pointer(names, final) == hex_to_rgb(colors[target])


@pytest.mark.parametrize("rotation", [10.0, 100.0, -200.0, 3605.0])
def test_segment_at_pointer_matches_pixels(qapp, rotation: float) -> None:
    names = ["a", "b", "c", "d", "e", "f"]
    colors = segment_colors(len(names))
    index = segment_at_pointer(rotation, len(names))
    assert _colour_under_pointer(names, rotation) == hex_to_rgb(colors[index])


def test_winner_highlight_does_not_cover_pointer_probe(qapp) -> None:
    names = ["a", "b", "c"]
    final = compute_target_rotation(0.0, 3, 1, 3, 3)
    image = render_to_image(
        names,
        final,
        size=SIZE,
        winner_index=1,
        renderer=WheelRenderer(show_labels=False),
    )
    x, y = pointer_probe(QtCore.QRectF(0.0, 0.0, SIZE, SIZE))
    assert sample_rgb(qimage_to_rgb(image), x, y) == hex_to_rgb(segment_colors(3)[1])


def test_empty_wheel_renders_placeholder(qapp) -> None:
    image = render_to_image([], 0.0, size=SIZE)
    rgb = qimage_to_rgb(image)
    background = np.array([10, 22, 40], dtype=np.uint8)
    assert np.any(np.any(rgb != background, axis=-1))


def test_qt_angle_converts_from_clockwise_screen_angles() -> None:
    assert qt_angle(0.0) == 90.0
    assert qt_angle(90.0) == 0.0
    assert qt_angle(180.0) == -90.0


def test_label_font_shrinks_with_more_segments() -> None:
    sizes = [label_font_size(n) for n in (2, 6, 10, 16, 40)]
    assert sizes == sorted(sizes, reverse=True)
    assert sizes[0] > sizes[-1]


def test_truncate_label() -> None:
    assert truncate_label("short", 4) == "short"
    assert truncate_label("a" * 25, 4) == "a" * 17 + "..."
    assert truncate_label("a" * 16, 12) == "a" * 12 + "..."
