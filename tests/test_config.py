"""Tests covering ring configuration and profile loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ringmenu.config import ConfigError, RingConfig, load_config, load_profiles


def test_defaults() -> None:
    config = RingConfig()
    assert config.ring_width == 0.0
    assert config.ring_height == 0.0
    assert config.magnet_speed == pytest.approx(0.18)
    assert config.back_zoom_scale == pytest.approx(0.5)


def test_accepts_camel_case_names() -> None:
    config = RingConfig.model_validate(
        {"ringWidth": 100, "ringHeight": 50, "magnetSpeed": 0.3, "backZoomScale": 1.0}
    )
    assert config.ring_width == 100.0
    assert config.ring_height == 50.0
    assert config.magnet_speed == pytest.approx(0.3)
    assert config.back_zoom_scale == 1.0
    assert config.to_dict()["ringWidth"] == 100.0


@pytest.mark.parametrize("value", [0.0, -0.1, 1.5])
def test_back_zoom_scale_must_be_in_unit_interval(value: float) -> None:
    with pytest.raises(ValidationError):
        RingConfig(back_zoom_scale=value)


def test_rejects_negative_magnet_speed_and_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        RingConfig(magnet_speed=-1.0)
    with pytest.raises(ValidationError):
        RingConfig.model_validate({"ringDepth": 3})


def test_config_is_immutable() -> None:
    config = RingConfig()
    with pytest.raises(ValidationError):
        config.ring_width = 10.0  # type: ignore[misc]


def test_merged_applies_partial_changes() -> None:
    config = RingConfig(ring_width=100.0, ring_height=50.0)

    merged = config.merged({"ringWidth": 200.0, "back_zoom_scale": 0.25})

    assert merged.ring_width == 200.0
    assert merged.ring_height == 50.0
    assert merged.back_zoom_scale == 0.25
    assert config.ring_width == 100.0

    with pytest.raises(ValidationError):
        config.merged({"backZoomScale": 0.0})


def test_bundled_default_profile() -> None:
    profiles = load_profiles()
    assert "default" in profiles

    config = load_config()
    assert config.ring_width == 240.0
    assert config.magnet_speed == pytest.approx(0.18)


def test_load_config_from_custom_file(tmp_path: Path) -> None:
    path = tmp_path / "profiles.yaml"
    path.write_text(
        "wide:\n  ringWidth: 400\n  ringHeight: 20\n  backZoomScale: 0.3\n",
        encoding="utf-8",
    )

    config = load_config("wide", path)

    assert config.ring_width == 400.0
    assert config.back_zoom_scale == pytest.approx(0.3)
    assert config.magnet_speed == pytest.approx(0.18)


def test_missing_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "missing.yaml"
    assert load_profiles(path) == {}
    assert load_config(path=path) == RingConfig()
    with pytest.raises(ConfigError):
        load_config("wide", path)


def test_malformed_profiles_are_rejected(tmp_path: Path) -> None:
    broken = tmp_path / "broken.yaml"
    broken.write_text("default: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_profiles(broken)

    listing = tmp_path / "listing.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_profiles(listing)

    scalar_entry = tmp_path / "scalar.yaml"
    scalar_entry.write_text("default: 3\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path=scalar_entry)
