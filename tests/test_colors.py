"""Tests for color resolution."""

import re

from anoint.seal.colors import (
    COLOR_HEX,
    contrasting_text_color,
    luminance,
    outline_color,
    resolve_color,
    rgba,
)

HEX_RE = re.compile(r"^#[0-9A-F]{6}$")


def test_every_named_color_resolves_to_hex():
    assert len(COLOR_HEX) >= 30
    for name in COLOR_HEX:
        assert HEX_RE.match(resolve_color(name)), name


def test_unknown_color_is_white():
    assert resolve_color("NOT_A_COLOR") == "#FFFFFF"
    assert resolve_color("") == "#FFFFFF"
    assert resolve_color(None) == "#FFFFFF"


def test_lookup_is_case_insensitive():
    assert resolve_color("blue") == "#0000FF"
    assert resolve_color(" Turquoise ") == "#40E0D0"


def test_upstream_extras():
    assert resolve_color("AQUA") == "#06B6D4"
    assert resolve_color("GREY") == resolve_color("GRAY")


def test_contrasting_text_color():
    assert contrasting_text_color("#FFFF00") == "#000000"
    assert contrasting_text_color("#FFFFFF") == "#000000"
    assert contrasting_text_color("#0000FF") == "#FFFFFF"
    assert contrasting_text_color("#000000") == "#FFFFFF"


def test_luminance_range():
    assert luminance("#000000") == 0
    assert luminance("#FFFFFF") == 1


def test_outline_is_opposite():
    assert outline_color("#000000") == "#FFFFFF"
    assert outline_color("#FFFFFF") == "#000000"


def test_rgba():
    assert rgba("#D4AF37") == (212, 175, 55, 255)
    assert rgba("#FFFFFF", 0.2) == (255, 255, 255, 51)
