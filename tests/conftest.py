"""Shared fixtures: Qt runs headless for the rendering and UI tests."""

from __future__ import annotations

import os
import sys

import pytest

if sys.platform.startswith("linux"):
    if not os.environ.get("DISPLAY") and not os.environ.get("WAYLAND_DISPLAY"):
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("QT_OPENGL", "software")


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication for every Qt test in the session."""
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app
