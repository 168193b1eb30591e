"""Tests for backend-independent geometry."""

import math

import pytest

from anoint.seal.colors import GOLD_RING_COLOR
from anoint.seal.directions import angle_for
from anoint.seal.geometry import TEXT_COLOR, compute_geometry
from anoint.seal.settings import RenderSettings
from anoint.seal.textfit import SEPARATOR


def test_default_geometry_at_base_size():
    g = compute_geometry(RenderSettings(), 600)
    assert (g.cx, g.cy) == (300, 300)
    assert g.radius_scale == 1
    assert g.detail_scale == 0.5
    assert g.central_radius == 80
    assert g.ring1_radius == 140
    assert g.ring2_radius == 200
    assert g.ring3_radius == 260
    assert not g.clamped


def test_radii_scale_with_output_size():
    small = compute_geometry(RenderSettings(), 600)
    large = compute_geometry(RenderSettings(), 1200)
    assert large.ring1_radius == 2 * small.ring1_radius
    assert large.ring3_radius == 2 * small.ring3_radius
    assert large.gold_width == 22
    assert large.ring1_token_radius == 22.5
    assert large.ring2_token_radius > large.ring1_token_radius


def test_canvas_base_size_drives_radius_scale():
    g = compute_geometry(RenderSettings(canvas_base_size=1200, ring1_radius=280), 600)
    assert g.ring1_radius == 140
    # Details still follow the output size
    assert g.detail_scale == 0.5


@pytest.mark.parametrize("size", [600, 1200, 2400])
def test_overflow_is_clamped(size):
    settings = RenderSettings(ring3_radius=400)
    g = compute_geometry(settings, size)
    assert g.clamped
    assert g.gold_outer_edge <= size / 2 - 2 + 1e-9
    assert g.ring3_radius > 0


def test_center_offset_is_included_in_clamp():
    g = compute_geometry(RenderSettings(center_x=20), 600)
    assert g.cx == 320
    assert g.cx + g.gold_outer_edge <= 600 - 2 + 1e-9


def test_no_clamp_for_defaults_at_any_size():
    for size in (600, 900, 1200, 2400):
        assert not compute_geometry(RenderSettings(), size).clamped


def test_token_center_uses_angle_table():
    g = compute_geometry(RenderSettings(), 600)
    x, y = g.token_center(angle_for("12:00"), 1)
    assert math.isclose(x, 300, abs_tol=1e-9)
    assert math.isclose(y, 160)
    x, y = g.token_center(angle_for("3:00"), 2)
    assert math.isclose(x, 500)
    assert math.isclose(y, 300, abs_tol=1e-9)


def test_text_placements_start_at_top_clockwise():
    g = compute_geometry(RenderSettings(), 1200)
    fitted = g.fit("OM NAMAH SHIVAYA")
    places = g.text_placements(fitted)
    assert len(places) == len(fitted.text)

    first = places[0]
    assert first.char == "O"
    assert math.isclose(first.x, g.cx, abs_tol=1e-9)
    assert math.isclose(first.y, g.cy - g.ring3_radius)
    assert math.isclose(first.rotation, 0, abs_tol=1e-9)

    # Second character is clockwise, i.e. to the right of the top
    assert places[1].x > first.x


def test_separators_are_gold_and_larger():
    g = compute_geometry(RenderSettings(), 1200)
    fitted = g.fit("OM")
    places = g.text_placements(fitted)
    separators = [p for p in places if p.char == SEPARATOR]
    letters = [p for p in places if p.char == "O"]
    assert len(separators) == 3
    assert all(p.color == GOLD_RING_COLOR for p in separators)
    assert all(p.color == TEXT_COLOR for p in letters)
    assert separators[0].font_size > letters[0].font_size


def test_font_band_scales_with_output():
    small = compute_geometry(RenderSettings(), 600).fit("OM")
    large = compute_geometry(RenderSettings(), 2400).fit("OM")
    assert small.font_size == 15
    assert large.font_size == 60


def test_tick_points():
    g = compute_geometry(RenderSettings(), 600)
    ticks = g.tick_points((1, 3))
    assert len(ticks) == 48
    assert {t.ring for t in ticks} == {1, 3}
    top = next(t for t in ticks if t.ring == 1 and t.label == "12:00")
    assert math.isclose(top.y, 160)


def test_invalid_output_size():
    with pytest.raises(ValueError):
        compute_geometry(RenderSettings(), 0)


def test_clamp_shrinks_every_ring_by_one_factor():
    settings = RenderSettings(ring2_radius=330, ring3_radius=400)
    g = compute_geometry(settings, 600)
    assert g.clamped
    factor = g.ring2_radius / 330
    assert math.isclose(g.central_radius, 80 * factor)
    assert math.isclose(g.ring1_radius, 140 * factor)
    assert math.isclose(g.detail_scale, 0.5 * factor)
    assert g.ring2_radius + g.ring2_token_radius < g.gold_outer_edge
    assert g.ring2_radius < g.ring3_radius
    assert g.gold_outer_edge <= 298 + 1e-9


def test_outer_token_ring_beyond_ring3_is_clamped():
    # Ring 2 past ring 3 still has to stay on the canvas
    g = compute_geometry(RenderSettings(ring2_radius=320), 600)
    assert g.clamped
    assert g.ring2_radius + g.ring2_token_radius <= 298 + 1e-9


def test_far_offset_center_is_pulled_in():
    g = compute_geometry(RenderSettings(center_x=280, center_y=-400), 600)
    assert g.clamped
    assert g.cx == 600 - 2 - 150
    assert g.cy == 2 + 150
    assert g.ring3_radius > 0
    assert g.cx + g.gold_outer_edge <= 598 + 1e-9
    assert g.cy - g.gold_outer_edge >= 2 - 1e-9
