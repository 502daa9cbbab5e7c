"""QPainter drawing of the wheel.

Segment placement comes from :data:`~spinwheel.engine.WHEEL_CONVENTION`; this
module only converts its screen angles (clockwise from 12 o'clock) into Qt's
arc angles (counter-clockwise from 3 o'clock).
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

from PySide6 import QtCore, QtGui

from .colors import ACCENT_COLOR, HUB_COLOR, WINNER_COLOR, segment_colors
from .engine import WHEEL_CONVENTION, AngularConvention, angle_per_segment
from .utils import polar_point, rotate_point

POINTER_MARGIN_PX = 24.0
HUB_RADIUS_PX = 60.0
PLACEHOLDER_SEGMENTS = 8


def qt_angle(screen_deg: float) -> float:
    """Screen angle (clockwise from 12 o'clock) to Qt's arc angle convention."""
    return 90.0 - screen_deg


def wheel_geometry(rect: QtCore.QRectF) -> Tuple[float, float, float]:
    """Centre and radius of the wheel inside ``rect``, leaving room for the pointer."""
    cx = rect.center().x()
    cy = rect.center().y()
    radius = max(1.0, min(rect.width(), rect.height()) / 2.0 - POINTER_MARGIN_PX)
    return cx, cy, radius


def hub_radius(radius: float) -> float:
    return min(HUB_RADIUS_PX, radius * 0.24)


def pointer_probe(
    rect: QtCore.QRectF,
    depth: float = 0.85,
    convention: AngularConvention = WHEEL_CONVENTION,
) -> Tuple[float, float]:
    """A point on the wheel face directly below the pointer."""
    cx, cy, radius = wheel_geometry(rect)
    return polar_point(cx, cy, radius * depth, convention.pointer_deg)


def label_font_size(count: int) -> int:
    if count <= 4:
        return 24
    if count <= 8:
        return 20
    if count <= 12:
        return 18
    if count <= 20:
        return 16
    return 14


def truncate_label(name: str, count: int) -> str:
    max_chars = 20 if count <= 8 else 15
    if len(name) > max_chars:
        return name[: max_chars - 3] + "..."
    return name


class WheelRenderer:
    """Paints the wheel, its labels, hub and pointer."""

    def __init__(
        self,
        convention: AngularConvention = WHEEL_CONVENTION,
        show_labels: bool = True,
        hub_label: str = "SPIN",
    ) -> None:
        self.convention = convention
        self.show_labels = show_labels
        self.hub_label = hub_label

    def paint(
        self,
        painter: QtGui.QPainter,
        rect: QtCore.QRectF,
        names: Sequence[str],
        rotation: float,
        winner_index: Optional[int] = None,
        empty_phase: float = 0.0,
    ) -> None:
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        if not names:
            self._paint_empty(painter, rect, empty_phase)
        else:
            self._paint_segments(painter, rect, names, rotation, winner_index)
            self._paint_hub(painter, rect, self.hub_label)
        self._paint_pointer(painter, rect)

    # ------------------------------- Segments ---------------------------------

    def _paint_segments(
        self,
        painter: QtGui.QPainter,
        rect: QtCore.QRectF,
        names: Sequence[str],
        rotation: float,
        winner_index: Optional[int],
    ) -> None:
        n = len(names)
        cx, cy, radius = wheel_geometry(rect)
        disc = QtCore.QRectF(cx - radius, cy - radius, 2 * radius, 2 * radius)
        span = angle_per_segment(n)
        colors = segment_colors(n)

        for i in range(n):
            start = self.convention.segment_start(i, n, rotation)
            path = QtGui.QPainterPath()
            path.moveTo(cx, cy)
            path.arcTo(disc, qt_angle(start), -span)
            path.closeSubpath()

            painter.setBrush(QtGui.QBrush(QtGui.QColor(colors[i])))
            painter.setPen(QtGui.QPen(QtGui.QColor(255, 255, 255), 2))
            painter.drawPath(path)

        if winner_index is not None and 0 <= winner_index < n:
            start = self.convention.segment_start(winner_index, n, rotation)
            path = QtGui.QPainterPath()
            path.moveTo(cx, cy)
            path.arcTo(disc, qt_angle(start), -span)
            path.closeSubpath()
            painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
            painter.setPen(QtGui.QPen(QtGui.QColor(WINNER_COLOR), 8))
            painter.drawPath(path)

        if self.show_labels:
            self._paint_labels(painter, cx, cy, radius, names, rotation)

    def _paint_labels(
        self,
        painter: QtGui.QPainter,
        cx: float,
        cy: float,
        radius: float,
        names: Sequence[str],
        rotation: float,
    ) -> None:
        n = len(names)
        font = QtGui.QFont(painter.font())
        font.setBold(True)
        font.setPixelSize(label_font_size(n))
        painter.setFont(font)
        inner = hub_radius(radius) + 8.0
        outer = radius - 25.0
        height = float(label_font_size(n)) * 1.6

        for i, name in enumerate(names):
            center = self.convention.segment_center(i, n, rotation)
            painter.save()
            painter.translate(cx, cy)
            # +x now points along the segment's centre line
            painter.rotate(center - 90.0)
            box = QtCore.QRectF(inner, -height / 2.0, max(1.0, outer - inner), height)
            painter.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0, 160)))
            painter.drawText(
                box.translated(1.0, 1.0),
                QtCore.Qt.AlignmentFlag.AlignRight
                | QtCore.Qt.AlignmentFlag.AlignVCenter,
                truncate_label(name, n),
            )
            painter.setPen(QtGui.QPen(QtGui.QColor(255, 255, 255)))
            painter.drawText(
                box,
                QtCore.Qt.AlignmentFlag.AlignRight
                | QtCore.Qt.AlignmentFlag.AlignVCenter,
                truncate_label(name, n),
            )
            painter.restore()

    # --------------------------------- Hub -------------------------------------

    def _paint_hub(
        self, painter: QtGui.QPainter, rect: QtCore.QRectF, text: str
    ) -> None:
        cx, cy, radius = wheel_geometry(rect)
        r = hub_radius(radius)
        painter.setBrush(QtGui.QBrush(QtGui.QColor(HUB_COLOR)))
        painter.setPen(QtGui.QPen(QtGui.QColor(ACCENT_COLOR), 3))
        painter.drawEllipse(QtCore.QPointF(cx, cy), r, r)

        font = QtGui.QFont(painter.font())
        font.setBold(True)
        font.setPixelSize(18)
        painter.setFont(font)
        painter.setPen(QtGui.QPen(QtGui.QColor(ACCENT_COLOR)))
        painter.drawText(
            QtCore.QRectF(cx - r, cy - r, 2 * r, 2 * r),
            QtCore.Qt.AlignmentFlag.AlignCenter,
            text,
        )

    def _paint_empty(
        self, painter: QtGui.QPainter, rect: QtCore.QRectF, phase: float
    ) -> None:
        cx, cy, radius = wheel_geometry(rect)

        gradient = QtGui.QLinearGradient(
            cx + math.cos(phase) * radius,
            cy + math.sin(phase) * radius,
            cx - math.cos(phase) * radius,
            cy - math.sin(phase) * radius,
        )
        gradient.setColorAt(0.0, QtGui.QColor("#1a2942"))
        gradient.setColorAt(0.5, QtGui.QColor("#2a3952"))
        gradient.setColorAt(1.0, QtGui.QColor("#1a2942"))
        glow = QtGui.QColor(ACCENT_COLOR)
        glow.setAlphaF(0.5 + math.sin(phase * 2.0) * 0.3)

        painter.setBrush(QtGui.QBrush(gradient))
        painter.setPen(QtGui.QPen(glow, 4))
        painter.drawEllipse(QtCore.QPointF(cx, cy), radius, radius)

        faint = QtGui.QColor(ACCENT_COLOR)
        faint.setAlphaF(0.1)
        painter.setPen(QtGui.QPen(faint, 1))
        span = angle_per_segment(PLACEHOLDER_SEGMENTS)
        for i in range(PLACEHOLDER_SEGMENTS):
            x, y = polar_point(cx, cy, radius - 10.0, i * span)
            painter.drawLine(QtCore.QPointF(cx, cy), QtCore.QPointF(x, y))

        self._paint_hub(painter, rect, "Add names\nto start!")

    # ------------------------------- Pointer -----------------------------------

    def _paint_pointer(self, painter: QtGui.QPainter, rect: QtCore.QRectF) -> None:
        cx, cy, radius = wheel_geometry(rect)
        tip_y = cy - radius + 10.0
        base_y = cy - radius - POINTER_MARGIN_PX + 4.0
        half = 14.0
        corners = [(cx, tip_y), (cx - half, base_y), (cx + half, base_y)]
        angle = self.convention.pointer_deg
        poly = QtGui.QPolygonF(
            [QtCore.QPointF(*rotate_point(x, y, cx, cy, angle)) for x, y in corners]
        )
        painter.setBrush(QtGui.QBrush(QtGui.QColor(WINNER_COLOR)))
        painter.setPen(QtGui.QPen(QtGui.QColor(HUB_COLOR), 2))
        painter.drawPolygon(poly)


def render_to_image(
    names: Sequence[str],
    rotation: float,
    size: int = 500,
    winner_index: Optional[int] = None,
    renderer: Optional[WheelRenderer] = None,
) -> QtGui.QImage:
    """Draw the wheel offscreen into a square ``QImage``."""
    image = QtGui.QImage(size, size, QtGui.QImage.Format.Format_ARGB32)
    image.fill(QtGui.QColor(10, 22, 40))
    painter = QtGui.QPainter(image)
    try:
        (renderer or WheelRenderer()).paint(
            painter,
            QtCore.QRectF(0.0, 0.0, float(size), float(size)),
            names,
            rotation,
            winner_index=winner_index,
        )
    finally:
        painter.end()
    return image


__all__ = [
    "POINTER_MARGIN_PX",
    "qt_angle",
    "wheel_geometry",
    "hub_radius",
    "pointer_probe",
    "label_font_size",
    "truncate_label",
    "WheelRenderer",
    "render_to_image",
]
