"""Qt helper utilities."""

from typing import Tuple

import numpy as np
from PySide6 import QtGui


def qimage_to_rgb(image: QtGui.QImage) -> np.ndarray:
    """Convert a :class:`~PySide6.QtGui.QImage` into an ``(h, w, 3)`` RGB array."""
    fmt = getattr(QtGui.QImage, "Format_RGBA8888", None)
    if fmt is None:
        fmt = QtGui.QImage.Format.Format_RGBA8888
    img: QtGui.QImage = image.convertToFormat(fmt)
    width = img.width()
    height = img.height()
    bytes_per_line = img.bytesPerLine()
    buf = img.constBits()  # memoryview in PySide6
    arr = np.frombuffer(buf, np.uint8)
    arr = arr.reshape((height, bytes_per_line))  # include stride
    arr = arr[:, : width * 4]  # crop padding
    arr = arr.reshape((height, width, 4))
    return np.ascontiguousarray(arr[..., :3])


def qpixmap_to_rgb(pix: QtGui.QPixmap) -> np.ndarray:
    return qimage_to_rgb(pix.toImage())


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """``"#RRGGBB"`` to an ``(r, g, b)`` tuple."""
    c = QtGui.QColor(color)
    return c.red(), c.green(), c.blue()


def sample_rgb(rgb: np.ndarray, x: float, y: float) -> Tuple[int, int, int]:
    """Pixel at the rounded ``(x, y)`` position of an RGB array."""
    px = int(round(x))
    py = int(round(y))
    r, g, b = (int(v) for v in rgb[py, px])
    return r, g, b


__all__ = ["qimage_to_rgb", "qpixmap_to_rgb", "hex_to_rgb", "sample_rgb"]
