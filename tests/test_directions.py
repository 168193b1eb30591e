"""Tests for the clock-position table."""

import math

import pytest

from anoint.seal.directions import (
    CLOCK_LABELS,
    DIRECTION_ANGLES,
    angle_for,
    clockwise_from_top,
    normalize_label,
    polar,
)


def test_table_is_a_bijection():
    assert len(CLOCK_LABELS) == 24
    angles = [angle_for(label) for label in CLOCK_LABELS]
    assert len(set(angles)) == 24
    assert {a % 360 for a in angles} == set(range(0, 360, 15))


def test_clock_face_convention():
    assert angle_for("12:00") == -90
    assert angle_for("12:30") == -75
    assert angle_for("3:00") == 0
    assert angle_for("6:00") == 90
    assert angle_for("9:00") == 180
    assert angle_for("11:30") == 255


@pytest.mark.parametrize("hour", range(1, 10))
def test_padded_and_unpadded_spellings_match(hour):
    for minute in ("00", "30"):
        assert angle_for(f"0{hour}:{minute}") == angle_for(f"{hour}:{minute}")
        assert angle_for(f"0{hour}:{minute}") is not None


@pytest.mark.parametrize("label", ["13:00", "12:15", "0:00", "noon", "", None, "3"])
def test_unrecognized_labels(label):
    assert angle_for(label) is None


def test_normalize_label():
    assert normalize_label(" 09:30 ") == "9:30"
    assert normalize_label("12:00") == "12:00"


def test_clockwise_from_top():
    assert clockwise_from_top("12:00") == 0
    assert clockwise_from_top("3:00") == 90
    assert clockwise_from_top("11:30") == 345


def test_labels_run_clockwise_from_twelve():
    assert CLOCK_LABELS[0] == "12:00"
    assert CLOCK_LABELS[1] == "12:30"
    assert CLOCK_LABELS[2] == "1:00"
    assert CLOCK_LABELS[-1] == "11:30"
    assert list(DIRECTION_ANGLES.values()) == sorted(DIRECTION_ANGLES.values())


def test_polar_top_and_right():
    x, y = polar(100, 100, 50, angle_for("12:00"))
    assert math.isclose(x, 100, abs_tol=1e-9)
    assert math.isclose(y, 50)
    x, y = polar(100, 100, 50, angle_for("3:00"))
    assert math.isclose(x, 150)
    assert math.isclose(y, 100, abs_tol=1e-9)
