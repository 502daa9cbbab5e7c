"""Qt application entry point for the spinwheel randomizer."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
import sys
from typing import List, Optional

import numpy as np
from PySide6 import QtCore, QtGui, QtWidgets

APP_VERSION: str

if __package__ in (None, ""):
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]
    if str(PACKAGE_ROOT) not in sys.path:
        sys.path.insert(0, str(PACKAGE_ROOT))

    import spinwheel as _pkg

    from spinwheel import roster as roster_ops
    from spinwheel.colors import segment_colors
    from spinwheel.engine import SpinInProgressError, WheelController, WheelError
    from spinwheel.engine.rotation import check_spin_bounds
    from spinwheel.logging_config import setup_logging
    from spinwheel.models import AppConfig, SpinParams, SpinResult
    from spinwheel.render import WheelRenderer, hub_radius, pointer_probe
    from spinwheel.render import wheel_geometry
    from spinwheel.roster import InvalidNameError
    from spinwheel.utils import clamp
    from spinwheel.utils.qt import hex_to_rgb, qpixmap_to_rgb, sample_rgb

    APP_VERSION = getattr(_pkg, "__version__", "0.0.0")
else:
    from . import __version__ as APP_VERSION
    from . import roster as roster_ops
    from .colors import segment_colors
    from .engine import SpinInProgressError, WheelController, WheelError
    from .engine.rotation import check_spin_bounds
    from .logging_config import setup_logging
    from .models import AppConfig, SpinParams, SpinResult
    from .render import WheelRenderer, hub_radius, pointer_probe, wheel_geometry
    from .roster import InvalidNameError
    from .utils import clamp
    from .utils.qt import hex_to_rgb, qpixmap_to_rgb, sample_rgb

logger = logging.getLogger(__name__)

SELFTEST_ENV = "SPINWHEEL_SELFTEST"
SELFTEST_MARKER_ENV = "SPINWHEEL_SELFTEST_MARKER"
SELFTEST_NAMES = ("Ada", "Grace", "Linus", "Guido", "Margaret", "Dennis")


# ------------------------------- Wheel Widget ---------------------------------


class WheelWidget(QtWidgets.QWidget):
    """Displays the wheel and animates it between two rotations."""

    spinRequested = QtCore.Signal()
    spinFinished = QtCore.Signal()

    def __init__(
        self,
        cfg: AppConfig,
        renderer: Optional[WheelRenderer] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("spinwheel")
        self.setWindowFlag(
            QtCore.Qt.WindowType.WindowStaysOnTopHint, cfg.ui.always_on_top
        )
        self._renderer = renderer or WheelRenderer(
            show_labels=cfg.ui.show_labels, hub_label=cfg.ui.hub_label
        )
        self._names: List[str] = []
        self._rotation = 0.0
        self._target = 0.0
        self._winner: Optional[int] = None
        self._animating = False
        self._settle_amplitude = 0.0
        self._spin_anim: Optional[QtCore.QVariantAnimation] = None
        self._settle_anim: Optional[QtCore.QVariantAnimation] = None

        size = max(320, int(cfg.ui.wheel_size_px))
        self.setMinimumSize(320, 320)
        self.resize(size, size)

        # Placeholder animation while the wheel is empty
        self._empty_phase = 0.0
        self._empty_timer = QtCore.QTimer(self)
        self._empty_timer.setInterval(50)
        self._empty_timer.timeout.connect(self._tick_empty)

    # ----------------------------- Properties ---------------------------------

    @property
    def renderer(self) -> WheelRenderer:
        return self._renderer

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def is_animating(self) -> bool:
        return self._animating

    def set_names(self, names: List[str]) -> None:
        self._names = list(names)
        self._winner = None
        if self._names:
            self._empty_timer.stop()
        else:
            self._empty_timer.start()
        self.update()

    def set_rotation(self, rotation: float) -> None:
        self._rotation = float(rotation)
        self.update()

    def set_winner(self, index: Optional[int]) -> None:
        self._winner = index
        self.update()

    def set_show_labels(self, enabled: bool) -> None:
        self._renderer.show_labels = bool(enabled)
        self.update()

    # ----------------------------- Animation ----------------------------------

    def animate(self, result: SpinResult, params: SpinParams) -> None:
        """Ease from ``result.start_rotation`` to ``result.final_rotation``."""
        self._stop_animations()
        self._animating = True
        self._winner = None
        self._target = result.final_rotation
        self._settle_amplitude = float(params.settle_amplitude_deg)
        settle_ms = int(params.settle_ms)
        self._rotation = result.start_rotation

        if params.duration_ms <= 0:
            self._start_settle(settle_ms)
            return

        anim = QtCore.QVariantAnimation(self)
        anim.setStartValue(float(result.start_rotation))
        anim.setEndValue(float(result.final_rotation))
        anim.setDuration(int(params.duration_ms))
        anim.setEasingCurve(QtCore.QEasingCurve.Type.OutQuint)
        anim.valueChanged.connect(self._on_spin_value)
        anim.finished.connect(lambda: self._start_settle(settle_ms))
        self._spin_anim = anim
        anim.start(QtCore.QAbstractAnimation.DeletionPolicy.DeleteWhenStopped)

    def _start_settle(self, settle_ms: int) -> None:
        self._spin_anim = None
        if settle_ms <= 0 or self._settle_amplitude <= 0:
            self._finish()
            return
        anim = QtCore.QVariantAnimation(self)
        anim.setStartValue(0.0)
        anim.setEndValue(1.0)
        anim.setDuration(int(settle_ms))
        anim.valueChanged.connect(self._on_settle_value)
        anim.finished.connect(self._finish)
        self._settle_anim = anim
        anim.start(QtCore.QAbstractAnimation.DeletionPolicy.DeleteWhenStopped)

    def _on_spin_value(self, value: float) -> None:
        self._rotation = float(value)
        self.update()

    def _on_settle_value(self, progress: float) -> None:
        p = clamp(float(progress), 0.0, 1.0)
        damping = (1.0 - p) ** 2
        wobble = math.sin(p * math.pi * 3.0) * self._settle_amplitude * damping
        self._rotation = self._target + wobble
        self.update()

    def _finish(self) -> None:
        self._settle_anim = None
        self._rotation = self._target
        self._animating = False
        self.update()
        self.spinFinished.emit()

    def _stop_animations(self) -> None:
        for anim in (self._spin_anim, self._settle_anim):
            if anim is not None:
                anim.stop()
        self._spin_anim = None
        self._settle_anim = None

    def _tick_empty(self) -> None:
        self._empty_phase += 0.05
        self.update()

    # ----------------------------- Interaction --------------------------------

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        pos = e.position()
        cx, cy, radius = wheel_geometry(QtCore.QRectF(self.rect()))
        if math.hypot(pos.x() - cx, pos.y() - cy) <= hub_radius(radius):
            if not self._animating:
                self.spinRequested.emit()
        e.accept()

    def keyPressEvent(self, e: QtGui.QKeyEvent) -> None:
        key = e.key()
        if key == QtCore.Qt.Key.Key_Space and not self._animating:
            self.spinRequested.emit()
        elif key == QtCore.Qt.Key.Key_Escape:
            self.close()

    # ----------------------------- Painting -----------------------------------

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.fillRect(self.rect(), QtGui.QColor(10, 22, 40))
        self._renderer.paint(
            painter,
            QtCore.QRectF(self.rect()),
            self._names,
            self._rotation,
            winner_index=None if self._animating else self._winner,
            empty_phase=self._empty_phase,
        )
        painter.end()


# ---------------------------- Control Dialog UI -------------------------------


class ControlDialog(QtWidgets.QDialog):
    addNameRequested = QtCore.Signal(str)
    removeNameRequested = QtCore.Signal(str)
    clearNamesRequested = QtCore.Signal()
    spinRequested = QtCore.Signal()
    removeWinnerRequested = QtCore.Signal()
    clearWinnersRequested = QtCore.Signal()
    removeAllWinnersRequested = QtCore.Signal()
    minSpinsChanged = QtCore.Signal(int)
    maxSpinsChanged = QtCore.Signal(int)
    durationChanged = QtCore.Signal(int)
    labelsToggled = QtCore.Signal(bool)
    alwaysOnTopToggled = QtCore.Signal(bool)

    def __init__(self, cfg: AppConfig, app_version: str) -> None:
        super().__init__(None)
        self._app_version = app_version or "unknown"
        self.setWindowTitle(f"spinwheel {self._app_version} — Participants")
        self.setWindowFlag(
            QtCore.Qt.WindowType.WindowStaysOnTopHint, cfg.ui.always_on_top
        )
        self.setMinimumWidth(420)

        # Widgets
        self.name_edit = QtWidgets.QLineEdit()
        self.name_edit.setPlaceholderText("Participant name")
        self.name_edit.returnPressed.connect(self._on_add)

        self.add_btn = QtWidgets.QPushButton("Add")
        self.add_btn.clicked.connect(self._on_add)

        self.names_list = QtWidgets.QListWidget()
        self.remove_btn = QtWidgets.QPushButton("Remove selected")
        self.remove_btn.clicked.connect(self._on_remove)
        self.clear_btn = QtWidgets.QPushButton("Clear all")
        self.clear_btn.clicked.connect(lambda: self.clearNamesRequested.emit())

        self.spin_btn = QtWidgets.QPushButton("Spin  (Space)")
        self.spin_btn.clicked.connect(lambda: self.spinRequested.emit())

        self.winner_label = QtWidgets.QLabel("")
        self.winner_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        font = self.winner_label.font()
        font.setPointSize(font.pointSize() + 6)
        font.setBold(True)
        self.winner_label.setFont(font)

        self.remove_winner_btn = QtWidgets.QPushButton("Remove winner from wheel")
        self.remove_winner_btn.setEnabled(False)
        self.remove_winner_btn.clicked.connect(
            lambda: self.removeWinnerRequested.emit()
        )

        self.winners_list = QtWidgets.QListWidget()
        self.clear_winners_btn = QtWidgets.QPushButton("Clear history")
        self.clear_winners_btn.clicked.connect(
            lambda: self.clearWinnersRequested.emit()
        )
        self.remove_all_winners_btn = QtWidgets.QPushButton("Remove winners from wheel")
        self.remove_all_winners_btn.clicked.connect(
            lambda: self.removeAllWinnersRequested.emit()
        )

        self.min_spin = QtWidgets.QSpinBox()
        self.min_spin.setRange(0, 50)
        self.min_spin.setValue(cfg.params.min_full_spins)
        self.min_spin.valueChanged.connect(self._on_min_change)

        self.max_spin = QtWidgets.QSpinBox()
        self.max_spin.setRange(0, 50)
        self.max_spin.setValue(cfg.params.max_full_spins)
        self.max_spin.valueChanged.connect(self._on_max_change)

        self.duration_spin = QtWidgets.QSpinBox()
        self.duration_spin.setRange(0, 60000)
        self.duration_spin.setSingleStep(500)
        self.duration_spin.setValue(cfg.params.duration_ms)
        self.duration_spin.valueChanged.connect(self.durationChanged)

        self.labels_check = QtWidgets.QCheckBox("Enable")
        self.labels_check.setChecked(cfg.ui.show_labels)
        self.labels_check.toggled.connect(self.labelsToggled)

        self.topmost_check = QtWidgets.QCheckBox("Enable")
        self.topmost_check.setChecked(cfg.ui.always_on_top)
        self.topmost_check.toggled.connect(self.alwaysOnTopToggled)

        self.status_label = QtWidgets.QLabel("Add at least two names, then spin.")
        self.status_label.setWordWrap(True)

        # Tabs
        self.tabs = QtWidgets.QTabWidget(self)

        # --- Participants tab
        people_page = QtWidgets.QWidget(self)
        add_row = QtWidgets.QHBoxLayout()
        add_row.addWidget(self.name_edit, stretch=1)
        add_row.addWidget(self.add_btn)
        edit_row = QtWidgets.QHBoxLayout()
        edit_row.addWidget(self.remove_btn)
        edit_row.addWidget(self.clear_btn)
        people_v = QtWidgets.QVBoxLayout(people_page)
        people_v.addLayout(add_row)
        people_v.addWidget(self.names_list, stretch=1)
        people_v.addLayout(edit_row)
        people_v.addWidget(self.spin_btn)
        people_v.addWidget(self.winner_label)
        people_v.addWidget(self.remove_winner_btn)
        self.tabs.addTab(people_page, "Participants")

        # --- Winners tab
        winners_page = QtWidgets.QWidget(self)
        winners_v = QtWidgets.QVBoxLayout(winners_page)
        winners_v.addWidget(self.winners_list, stretch=1)
        winners_row = QtWidgets.QHBoxLayout()
        winners_row.addWidget(self.clear_winners_btn)
        winners_row.addWidget(self.remove_all_winners_btn)
        winners_v.addLayout(winners_row)
        self.tabs.addTab(winners_page, "Winners")

        # --- Settings tab
        settings_page = QtWidgets.QWidget(self)
        settings_form = QtWidgets.QFormLayout(settings_page)
        settings_form.setFieldGrowthPolicy(
            QtWidgets.QFormLayout.FieldGrowthPolicy.AllNonFixedFieldsGrow
        )
        settings_form.addRow("Minimum full turns:", self.min_spin)
        settings_form.addRow("Maximum full turns:", self.max_spin)
        settings_form.addRow("Spin duration (ms):", self.duration_spin)
        settings_form.addRow("Names on wheel:", self.labels_check)
        settings_form.addRow("Always on top:", self.topmost_check)
        self.tabs.addTab(settings_page, "Settings")

        # --- Help tab
        help_page = QtWidgets.QScrollArea(self)
        help_page.setWidgetResizable(True)
        help_body = QtWidgets.QWidget()
        help_layout = QtWidgets.QVBoxLayout(help_body)
        help_text = QtWidgets.QLabel(self._help_markdown(), help_body)
        help_text.setTextFormat(QtCore.Qt.TextFormat.RichText)
        help_text.setWordWrap(True)
        help_layout.addWidget(help_text)
        help_layout.addStretch(1)
        help_page.setWidget(help_body)
        self.tabs.addTab(help_page, "Help")

        # Dialog layout
        v = QtWidgets.QVBoxLayout(self)
        v.addWidget(self.tabs)
        v.addWidget(self.status_label)
        self.tabs.setCurrentIndex(0)

    # --- helpers ---
    def _help_markdown(self) -> str:
        return (
            f"<h3>spinwheel {self._app_version} — quick reference</h3>"
            "<ul>"
            "<li><b>Add</b> participants by name; duplicates are refused.</li>"
            "<li>Click <b>Spin</b>, the wheel hub, or press <b>Space</b>.</li>"
            "<li>The name under the <b>pointer</b> at the top wins.</li>"
            "<li>Winners are kept in the <b>Winners</b> tab.</li>"
            "</ul>"
            "<h4>Shortcuts</h4>"
            "<ul>"
            "<li><b>Space</b> — Spin</li>"
            "<li><b>Esc</b> — Close wheel</li>"
            "</ul>"
        )

    def set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def set_names(self, names: List[str]) -> None:
        self.names_list.clear()
        for name in names:
            self.names_list.addItem(name)

    def set_winners(self, winners: List[str]) -> None:
        self.winners_list.clear()
        for i, name in enumerate(winners, start=1):
            self.winners_list.addItem(f"{i}. {name}")

    def show_winner(self, name: Optional[str]) -> None:
        self.winner_label.setText(f"🎉 {name}" if name else "")
        self.remove_winner_btn.setEnabled(bool(name))

    def set_spinning(self, spinning: bool) -> None:
        for w in (
            self.spin_btn,
            self.add_btn,
            self.remove_btn,
            self.clear_btn,
            self.remove_all_winners_btn,
        ):
            w.setEnabled(not spinning)
        if spinning:
            self.remove_winner_btn.setEnabled(False)

    def _on_add(self) -> None:
        self.addNameRequested.emit(self.name_edit.text())

    def _on_remove(self) -> None:
        item = self.names_list.currentItem()
        if item is not None:
            self.removeNameRequested.emit(item.text())

    def _on_min_change(self, val: int) -> None:
        if val > self.max_spin.value():
            self.max_spin.setValue(val)
        self.minSpinsChanged.emit(val)

    def _on_max_change(self, val: int) -> None:
        if val < self.min_spin.value():
            self.min_spin.setValue(val)
        self.maxSpinsChanged.emit(val)


# ---------------------------- Main Controller ---------------------------------


class MainController(QtCore.QObject):
    def __init__(
        self,
        app: QtWidgets.QApplication,
        cfg: Optional[AppConfig] = None,
        rng: Optional[np.random.Generator] = None,
        persist: bool = True,
    ) -> None:
        super().__init__(None)
        self.app = app
        self._persist = persist
        self.cfg = cfg if cfg is not None else self._load_config()
        self.roster = self.cfg.roster
        self.wheel_state = WheelController(
            len(self.roster.names), params=self.cfg.params, rng=rng
        )
        self._last_winner: Optional[str] = None

        # Windows
        self.wheel = WheelWidget(self.cfg)
        self._app_version = app.applicationVersion() or APP_VERSION
        self.ctrl = ControlDialog(self.cfg, self._app_version)

        # Wire signals
        self.wheel.spinRequested.connect(self.spin)
        self.wheel.spinFinished.connect(self._on_spin_finished)
        self.ctrl.spinRequested.connect(self.spin)
        self.ctrl.addNameRequested.connect(self.add_name)
        self.ctrl.removeNameRequested.connect(self.remove_name)
        self.ctrl.clearNamesRequested.connect(self.clear_names)
        self.ctrl.removeWinnerRequested.connect(self.remove_last_winner)
        self.ctrl.clearWinnersRequested.connect(self.clear_winners)
        self.ctrl.removeAllWinnersRequested.connect(self.remove_all_winners)
        self.ctrl.minSpinsChanged.connect(self._on_min_spins)
        self.ctrl.maxSpinsChanged.connect(self._on_max_spins)
        self.ctrl.durationChanged.connect(self._on_duration)
        self.ctrl.labelsToggled.connect(self._on_labels_toggle)
        self.ctrl.alwaysOnTopToggled.connect(self._on_topmost_toggle)

        # Apply initial values
        self._refresh_roster()

        # Show windows
        self.wheel.show()
        self.ctrl.show()
        self.ctrl.move(self.wheel.x() + self.wheel.width() + 24, self.wheel.y())

    # ---------------------------- Config I/O ----------------------------------

    def _config_path(self) -> Path:
        home = Path.home()
        return home / ".spinwheel_config.json"

    def _load_config(self) -> AppConfig:
        p = self._config_path()
        if p.exists():
            try:
                cfg = AppConfig.from_json(p.read_text(encoding="utf-8"))
                check_spin_bounds(cfg.params.min_full_spins, cfg.params.max_full_spins)
                stored = cfg.roster
                cfg.roster = roster_ops.load_roster(stored.names, stored.winners)
                return cfg
            except (OSError, ValueError, TypeError, AttributeError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", p, exc)
        return AppConfig()

    def save_config(self) -> None:
        if not self._persist:
            return
        p = self._config_path()
        try:
            p.write_text(self.cfg.to_json(), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save config to %s: %s", p, exc)

    # ----------------------------- Roster --------------------------------------

    def _refresh_roster(self) -> None:
        self.wheel.set_names(self.roster.names)
        self.ctrl.set_names(self.roster.names)
        self.ctrl.set_winners(self.roster.winners)

    def _edit_roster(self) -> bool:
        """True when the roster may change (no spin in flight)."""
        if self.wheel_state.is_spinning:
            self.ctrl.set_status("Wait for the wheel to stop first.")
            return False
        return True

    def _sync_segments(self) -> None:
        self.wheel_state.set_segment_count(len(self.roster.names))
        self._refresh_roster()
        self.save_config()

    def add_name(self, name: str) -> None:
        if not self._edit_roster():
            return
        try:
            clean = roster_ops.add_name(self.roster, name)
        except InvalidNameError as exc:
            self.ctrl.set_status(str(exc))
            return
        self.ctrl.name_edit.clear()
        self._sync_segments()
        self.ctrl.set_status(f"{clean} added!")

    def remove_name(self, name: str) -> None:
        if not self._edit_roster():
            return
        if roster_ops.remove_name(self.roster, name):
            if name == self._last_winner:
                self._set_last_winner(None)
            self._sync_segments()
            self.ctrl.set_status(f"{name} removed!")

    def clear_names(self) -> None:
        if not self._edit_roster():
            return
        roster_ops.clear_names(self.roster)
        self._set_last_winner(None)
        self._sync_segments()
        self.ctrl.set_status("All participants removed.")

    def remove_last_winner(self) -> None:
        if self._last_winner is not None:
            self.remove_name(self._last_winner)

    def clear_winners(self) -> None:
        roster_ops.clear_winners(self.roster)
        self.wheel.set_winner(None)
        self._refresh_roster()
        self.save_config()
        self.ctrl.set_status("Winner history cleared!")

    def remove_all_winners(self) -> None:
        if not self._edit_roster():
            return
        removed = roster_ops.remove_all_winners(self.roster)
        self._set_last_winner(None)
        self._sync_segments()
        self.ctrl.set_status(f"Removed {len(removed)} winner(s) from the wheel.")

    def _set_last_winner(self, name: Optional[str]) -> None:
        self._last_winner = name
        self.ctrl.show_winner(name)

    # ----------------------------- Core Actions --------------------------------

    def spin(self) -> Optional[SpinResult]:
        """Start a spin to a random participant; ignored while one is running."""
        if self.wheel_state.is_spinning or self.wheel.is_animating:
            return None
        if not roster_ops.can_spin(self.roster):
            self.ctrl.set_status(
                f"Add at least {roster_ops.MIN_NAMES_TO_SPIN} participants to spin!"
            )
            return None
        try:
            result = self.wheel_state.start_spin()
        except (WheelError, SpinInProgressError) as exc:
            logger.error("Spin rejected: %s", exc)
            self.ctrl.set_status(str(exc))
            return None

        self._set_last_winner(None)
        self.ctrl.set_spinning(True)
        self.ctrl.set_status("Spinning…")
        self.wheel.animate(result, self.cfg.params)
        return result

    def _on_spin_finished(self) -> None:
        if not self.wheel_state.is_spinning:
            return
        index = self.wheel_state.complete_spin()
        # renormalization may have folded whole turns away
        self.wheel.set_rotation(self.wheel_state.rotation)
        self.wheel.set_winner(index)

        name = self.roster.names[index]
        roster_ops.record_winner(self.roster, name)
        self._set_last_winner(name)
        self.ctrl.set_spinning(False)
        self.ctrl.set_winners(self.roster.winners)
        self.ctrl.set_status(f"Winner: {name}")
        self.save_config()

    # ------------------------------ Settings -----------------------------------

    def _on_min_spins(self, value: int) -> None:
        self.cfg.params.min_full_spins = int(value)
        self.save_config()

    def _on_max_spins(self, value: int) -> None:
        self.cfg.params.max_full_spins = int(value)
        self.save_config()

    def _on_duration(self, value: int) -> None:
        self.cfg.params.duration_ms = int(value)
        self.save_config()

    def _on_labels_toggle(self, enabled: bool) -> None:
        self.cfg.ui.show_labels = bool(enabled)
        self.wheel.set_show_labels(enabled)
        self.save_config()

    def _on_topmost_toggle(self, enabled: bool) -> None:
        self.cfg.ui.always_on_top = bool(enabled)
        self.wheel.setWindowFlag(QtCore.Qt.WindowType.WindowStaysOnTopHint, enabled)
        self.ctrl.setWindowFlag(QtCore.Qt.WindowType.WindowStaysOnTopHint, enabled)
        self.wheel.show()
        self.ctrl.show()
        self.save_config()

    # ------------------------------ Verification -------------------------------

    def color_under_pointer(self) -> tuple:
        """RGB of the wheel face just below the pointer, as currently drawn."""
        pix = self.wheel.grab()
        rgb = qpixmap_to_rgb(pix)
        dpr = float(pix.devicePixelRatio()) or 1.0
        x, y = pointer_probe(QtCore.QRectF(self.wheel.rect()))
        return sample_rgb(rgb, x * dpr, y * dpr)


# --------------------------------- Self-test -----------------------------------


class SelfTest(QtCore.QObject):
    """Scripted spin used by packaged builds to prove the UI works end to end."""

    def __init__(self, ctrl: MainController, marker: Optional[Path]) -> None:
        super().__init__(None)
        self._ctrl = ctrl
        self._marker = marker
        self._lines: List[str] = []
        self._result: Optional[SpinResult] = None
        self._timeout = QtCore.QTimer(self)
        self._timeout.setSingleShot(True)
        self._timeout.setInterval(10000)
        self._timeout.timeout.connect(lambda: self._fail("timeout"))

    def start(self) -> None:
        ctrl = self._ctrl
        ctrl.wheel.set_show_labels(False)
        ctrl.wheel.spinFinished.connect(self._check)
        self._timeout.start()
        self._result = ctrl.spin()
        if self._result is None:
            self._fail("spin did not start")

    def _check(self) -> None:
        self._timeout.stop()
        self._lines.append("spin-completed")
        result = self._result
        ctrl = self._ctrl
        if result is None:
            return
        winner = ctrl.wheel_state.winner_at()
        if winner != result.target_index:
            self._fail(f"pointer reads {winner}, expected {result.target_index}")
            return
        expected = hex_to_rgb(segment_colors(len(ctrl.roster.names))[winner])
        seen = ctrl.color_under_pointer()
        if tuple(seen) != expected:
            self._fail(f"colour under pointer {seen}, expected {expected}")
            return
        self._lines.append("selftest-ok")
        self._write()
        ctrl.app.exit(0)

    def _fail(self, reason: str) -> None:
        logger.error("Self-test failed: %s", reason)
        self._lines.append(f"selftest-error: {reason}")
        self._write()
        self._ctrl.app.exit(1)

    def _write(self) -> None:
        if self._marker is None:
            return
        try:
            self._marker.write_text("\n".join(self._lines) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.error("Could not write self-test marker: %s", exc)


def _selftest_config() -> AppConfig:
    cfg = AppConfig()
    cfg.roster.names = list(SELFTEST_NAMES)
    cfg.params.duration_ms = 300
    cfg.params.settle_ms = 0
    return cfg


# ---------------------------------- Main --------------------------------------


def main() -> None:
    setup_logging()
    selftest = os.environ.get(SELFTEST_ENV, "") not in ("", "0")

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("spinwheel")
    app.setApplicationVersion(APP_VERSION)
    logger.info("spinwheel %s starting", APP_VERSION)

    if selftest:
        marker_env = os.environ.get(SELFTEST_MARKER_ENV)
        ctrl = MainController(app, cfg=_selftest_config(), persist=False)
        runner = SelfTest(ctrl, Path(marker_env) if marker_env else None)
        QtCore.QTimer.singleShot(0, runner.start)
    else:
        ctrl = MainController(app)

    ret = app.exec()
    ctrl.save_config()
    sys.exit(ret)


if __name__ == "__main__":
    main()
