"""Dataclasses describing configuration, roster and spin results for spinwheel."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import json
from typing import Dict, List


@dataclass
class SpinParams:
    """Runtime configuration for spins and their animation."""

    min_full_spins: int = 5
    max_full_spins: int = 10
    duration_ms: int = 10000
    settle_ms: int = 800  # damped wobble after the main spin
    settle_amplitude_deg: float = 8.0
    renormalize_after_deg: float = 360_000.0


@dataclass
class UIState:
    """User-interface level preferences for the wheel window."""

    wheel_size_px: int = 500
    always_on_top: bool = False
    show_labels: bool = True
    hub_label: str = "SPIN"


@dataclass
class Roster:
    """Participant names on the wheel plus the winner history."""

    names: List[str] = field(default_factory=list)
    winners: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SpinResult:
    """One computed spin, handed to the animation layer."""

    target_index: int
    start_rotation: float
    final_rotation: float
    full_spins: int

    @property
    def delta(self) -> float:
        return self.final_rotation - self.start_rotation


@dataclass
class AppConfig:
    """Persisted configuration for the application."""

    params: SpinParams = field(default_factory=SpinParams)
    ui: UIState = field(default_factory=UIState)
    roster: Roster = field(default_factory=Roster)

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @staticmethod
    def from_json(text: str) -> "AppConfig":
        data: Dict = json.loads(text)
        p = data.get("params", {})
        u = data.get("ui", {})
        r = data.get("roster", {})
        return AppConfig(
            params=SpinParams(
                min_full_spins=int(p.get("min_full_spins", 5)),
                max_full_spins=int(p.get("max_full_spins", 10)),
                duration_ms=int(p.get("duration_ms", 10000)),
                settle_ms=int(p.get("settle_ms", 800)),
                settle_amplitude_deg=float(p.get("settle_amplitude_deg", 8.0)),
                renormalize_after_deg=float(
                    p.get("renormalize_after_deg", 360_000.0)
                ),
            ),
            ui=UIState(
                wheel_size_px=int(u.get("wheel_size_px", 500)),
                always_on_top=bool(u.get("always_on_top", False)),
                show_labels=bool(u.get("show_labels", True)),
                hub_label=str(u.get("hub_label", "SPIN")),
            ),
            roster=Roster(
                names=[str(n) for n in r.get("names", [])],
                winners=[str(w) for w in r.get("winners", [])],
            ),
        )


__all__ = [
    "SpinParams",
    "UIState",
    "Roster",
    "SpinResult",
    "AppConfig",
]
