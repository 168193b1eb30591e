"""Tests for the SVG backend."""

import math
import xml.etree.ElementTree as ET

from anoint.seal.compositor import RenderMode, RenderOptions
from anoint.seal.export import build_svg, collect_assets
from anoint.seal.geometry import compute_geometry
from anoint.seal.layout import parse_layout
from anoint.seal.settings import RenderSettings
from anoint.seal.svg import _n, render_svg
from anoint.seal.textfit import SEPARATOR

NS = {"svg": "http://www.w3.org/2000/svg"}
XLINK_HREF = "{http://www.w3.org/1999/xlink}href"


def _parse(document: str) -> ET.Element:
    return ET.fromstring(document.encode("utf-8"))


def _circles(root, **attrs):
    found = []
    for el in root.iter(f"{{{NS['svg']}}}circle"):
        if all(el.get(k) == v for k, v in attrs.items()):
            found.append(el)
    return found


def test_document_size(blue_token_layout):
    root = _parse(render_svg(blue_token_layout, RenderSettings(), 600))
    assert root.get("width") == "600"
    assert root.get("viewBox") == "0 0 600 600"


def test_export_background_is_disc_not_rect(blue_token_layout):
    root = _parse(render_svg(blue_token_layout, RenderSettings(), 600))
    assert root.find("svg:rect", NS) is None
    g = compute_geometry(RenderSettings(), 600)
    assert _circles(root, r=_n(g.inner_white_radius), fill="#FFFFFF")


def test_ring3_stroke_only_in_preview(blue_token_layout):
    g = compute_geometry(RenderSettings(), 600)
    export = _parse(render_svg(blue_token_layout, RenderSettings(), 600))
    preview = _parse(render_svg(blue_token_layout, RenderSettings(), 600, mode=RenderMode.PREVIEW))
    ring3 = {"r": _n(g.ring3_radius), "stroke": "#000000"}
    assert not _circles(export, **ring3)
    assert _circles(preview, **ring3)
    for radius in (g.ring1_radius, g.ring2_radius):
        assert _circles(export, r=_n(radius), stroke="#000000")


def test_token_positions_match_geometry(sample_layout):
    g = compute_geometry(RenderSettings(), 1200)
    root = _parse(render_svg(sample_layout, RenderSettings(), 1200))
    for token in sample_layout.ring1_tokens:
        x, y = g.token_center(token.angle_degrees, 1)
        assert _circles(root, cx=_n(x), cy=_n(y), r=_n(g.ring1_token_radius))
    for token in sample_layout.ring2_tokens:
        x, y = g.token_center(token.angle_degrees, 2)
        assert _circles(root, cx=_n(x), cy=_n(y), r=_n(g.ring2_token_radius))


def test_blue_token_fill(blue_token_layout):
    root = _parse(render_svg(blue_token_layout, RenderSettings(), 600))
    tokens = _circles(root, fill="#0000FF")
    assert len(tokens) == 1
    assert math.isclose(float(tokens[0].get("cy")), 160)


def test_ring3_text_characters(blue_token_layout):
    g = compute_geometry(RenderSettings(), 600)
    fitted = g.fit(blue_token_layout.ring3_affirmation)
    root = _parse(render_svg(blue_token_layout, RenderSettings(), 600))
    group = root.find("svg:g[@class='ring3-text']", NS)
    chars = [el.text for el in group]
    assert "".join(chars) == fitted.text.replace(" ", "")
    assert chars.count(SEPARATOR) == 3
    separators = [el for el in group if el.text == SEPARATOR]
    assert all(el.get("fill") == "#D4AF37" for el in separators)
    assert all(el.get("transform").startswith("rotate(") for el in group)


def test_images_embedded_once_per_token(sample_layout, resolver):
    document = build_svg(sample_layout, RenderSettings(), 1200, resolver)
    root = _parse(document)
    images = root.findall(".//svg:image", NS)
    # central template + three glyph tokens
    assert len(images) == 4
    hrefs = [img.get(XLINK_HREF) for img in images]
    assert all(h.startswith("data:image/png;base64,") for h in hrefs)
    assert hrefs[1] == hrefs[2]  # lotus.png reused at 3:00 and 9:00
    assert images[0].get("preserveAspectRatio") == "xMidYMid slice"
    assert images[1].get("preserveAspectRatio") == "xMidYMid meet"
    clip_ids = {cp.get("id") for cp in root.iter(f"{{{NS['svg']}}}clipPath")}
    assert {"central-clip", "glyph-clip-0", "glyph-clip-1", "glyph-clip-2"} <= clip_ids


def test_missing_template_keeps_border(blue_token_layout):
    root = _parse(render_svg(blue_token_layout, RenderSettings(), 600))
    assert root.find(".//svg:image", NS) is None
    assert _circles(root, r="80", stroke="#D4AF37")


def test_fallback_shape_in_preview_only():
    layout = parse_layout({"centralDesign": "torus"})
    preview = _parse(render_svg(layout, RenderSettings(), 600, mode=RenderMode.PREVIEW))
    export = _parse(render_svg(layout, RenderSettings(), 600))
    assert len(preview.findall(".//svg:polygon", NS)) == 12
    assert export.findall(".//svg:polygon", NS) == []


def test_glyph_text_fallback_in_preview():
    layout = parse_layout({
        "centralDesign": "x",
        "ring2Tokens": [{"position": "6:00", "color": "RED", "content": "lotus.png"}],
    })
    preview = render_svg(layout, RenderSettings(), 600, mode=RenderMode.PREVIEW)
    export = render_svg(layout, RenderSettings(), 600)
    assert ">LO</text>" in preview
    assert ">LO</text>" not in export


def test_preview_overlays():
    layout = parse_layout({"centralDesign": "x"})
    settings = RenderSettings(show_grid=True, show_watermark=True)
    options = RenderOptions(debug_rings=(2,), tick_labels=True)
    preview = render_svg(layout, settings, 600, mode=RenderMode.PREVIEW, options=options)
    export = render_svg(layout, settings, 600, options=options)
    for doc, expected in ((preview, True), (export, False)):
        assert ("<line " in doc) is expected
        assert (">ANOINT</text>" in doc) is expected
        assert ("#FF0070" in doc) is expected
    assert len(_circles(_parse(preview), fill="#FF0070")) == 24
    assert ">11:30</text>" in preview


def test_numeral_has_outline_pass(blue_token_layout):
    root = _parse(render_svg(blue_token_layout, RenderSettings(), 600))
    numerals = [el for el in root.iter(f"{{{NS['svg']}}}text") if el.text == "7"]
    assert len(numerals) == 2
    outline, fill = numerals
    assert outline.get("stroke") == "#000000"
    assert fill.get("fill") == "#FFFFFF"


def test_svg_is_deterministic(sample_layout, resolver):
    assets = collect_assets(sample_layout, resolver)
    first = render_svg(sample_layout, RenderSettings(), 1200, assets)
    second = render_svg(sample_layout, RenderSettings(), 1200, assets)
    assert first == second
