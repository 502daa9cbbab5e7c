"""Configuration dataclasses and their JSON persistence."""

from __future__ import annotations

import json

import pytest

from spinwheel.models import AppConfig, Roster, SpinParams, SpinResult, UIState


def test_config_round_trips_through_json() -> None:
    cfg = AppConfig(
        params=SpinParams(min_full_spins=2, max_full_spins=4, duration_ms=1500),
        ui=UIState(wheel_size_px=640, always_on_top=True, show_labels=False),
        roster=Roster(names=["Ada", "Grace"], winners=["Grace"]),
    )
    assert AppConfig.from_json(cfg.to_json()) == cfg


def test_missing_keys_fall_back_to_defaults() -> None:
    cfg = AppConfig.from_json(json.dumps({"params": {"duration_ms": 250}}))
    assert cfg.params.duration_ms == 250
    assert cfg.params.min_full_spins == SpinParams().min_full_spins
    assert cfg.ui == UIState()
    assert cfg.roster == Roster()


def test_empty_document_gives_default_config() -> None:
    assert AppConfig.from_json("{}") == AppConfig()


def test_invalid_json_raises_value_error() -> None:
    with pytest.raises(ValueError):
        AppConfig.from_json("{not json")


def test_default_spin_params_spin_at_least_three_times() -> None:
    params = SpinParams()
    assert 3 <= params.min_full_spins <= params.max_full_spins
    assert params.renormalize_after_deg > 0


def test_spin_result_is_immutable() -> None:
    result = SpinResult(
        target_index=1, start_rotation=10.0, final_rotation=1500.0, full_spins=4
    )
    assert result.delta == pytest.approx(1490.0)
    with pytest.raises(AttributeError):
        result.final_rotation = 0.0  # type: ignore[misc]
