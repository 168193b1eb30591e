"""Tests for render settings loading."""

import json

import pytest

from anoint.seal.settings import (
    RenderSettings,
    SettingsError,
    load_settings,
    settings_from_dict,
    settings_to_dict,
)


def test_defaults():
    s = RenderSettings()
    assert (s.center_x, s.center_y) == (0, 0)
    assert s.central_radius == 80
    assert s.ring1_radius == 140
    assert s.ring2_radius == 200
    assert s.ring3_radius == 260
    assert s.canvas_base_size == 600
    assert s.scale_for(1200) == 2


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "nope.json") == RenderSettings()
    assert load_settings(None) == RenderSettings()


def test_json_with_settings_key(tmp_path):
    path = tmp_path / "generator-config.json"
    path.write_text(json.dumps({
        "settings": {"outerRadius": 250, "centerX": 5, "showGrid": True},
        "other": "ignored",
    }))
    s = load_settings(path)
    assert s.ring3_radius == 250
    assert s.center_x == 5
    assert s.show_grid is True
    assert s.ring1_radius == 140


def test_yaml_without_settings_key(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("innerRadius: 150\nmiddleRadius: 210\nshowWatermark: true\n")
    s = load_settings(path)
    assert s.ring1_radius == 150
    assert s.ring2_radius == 210
    assert s.show_watermark is True


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "generator-config.json"
    path.write_text("{oops")
    with pytest.raises(SettingsError):
        load_settings(path)


@pytest.mark.parametrize("values", [
    {"outerRadius": "big"},
    {"centralRadius": -1},
    {"canvasSize": 0},
    {"innerRadius": True},
])
def test_invalid_values_raise(values):
    with pytest.raises(SettingsError):
        settings_from_dict({"settings": values})


def test_non_mapping_raises():
    with pytest.raises(SettingsError):
        settings_from_dict(["not", "a", "mapping"])


def test_round_trip_dict():
    s = RenderSettings(center_x=3, ring3_radius=250, show_grid=True)
    assert settings_from_dict(settings_to_dict(s)) == s


@pytest.mark.parametrize("values", [
    {"middleRadius": 330, "outerRadius": 300},
    {"innerRadius": 200},
    {"centralRadius": 140},
])
def test_radii_must_increase_outward(values):
    with pytest.raises(SettingsError, match="must be smaller than"):
        settings_from_dict({"settings": values})


def test_unordered_radii_in_file_raise(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("middleRadius: 330\nouterRadius: 300\n")
    with pytest.raises(SettingsError):
        load_settings(path)
