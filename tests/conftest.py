"""Shared test fixtures."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from PIL import Image

from anoint.seal.assets import AssetResolver
from anoint.seal.layout import parse_layout

try:
    import cairosvg  # noqa: F401
    HAS_CAIRO = True
except (ImportError, OSError):
    # cairosvg needs the native cairo library
    HAS_CAIRO = False


TEMPLATE_COLOR = (0, 128, 0, 255)
LOTUS_COLOR = (255, 0, 0, 255)
OM_COLOR = (255, 255, 0, 255)

SAMPLE_SEAL = {
    "centralDesign": "flower_of_life",
    "ring1Tokens": [
        {"position": "12:00", "angle": 0, "color": "BLUE", "content": 7, "type": "number"},
        {"position": "3:00", "angle": 90, "color": "YELLOW", "content": 12, "type": "number"},
        {"position": "07:30", "angle": 225, "color": "EMERALD", "content": 3, "type": "number"},
    ],
    "ring2Tokens": [
        {"position": "3:00", "angle": 90, "color": "BLUE", "content": "lotus.png", "type": "glyph"},
        {"position": "9:00", "angle": 270, "color": "GOLD", "content": "lotus.png", "type": "glyph"},
        {"position": "6:00", "angle": 180, "color": "AQUA", "content": "om.png", "type": "glyph"},
    ],
    "ring3Affirmation": "OM NAMAH SHIVAYA",
    "userConfig": {"name": "Test"},
}


def png(color, size=(64, 64)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return buf.getvalue()


def write(path: Path, data: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def asset_root(tmp_path) -> Path:
    """Asset store with one template and two glyphs in different candidate dirs."""
    root = tmp_path / "store"
    write(root / "data/ai-resources/templates/flower_of_life.png", png(TEMPLATE_COLOR, (120, 80)))
    write(root / "public/glyphs/lotus.png", png(LOTUS_COLOR))
    write(root / "uploads/glyphs/om.png", png(OM_COLOR))
    return root


@pytest.fixture
def resolver(asset_root) -> AssetResolver:
    return AssetResolver(asset_root)


@pytest.fixture
def sample_seal() -> dict:
    return json.loads(json.dumps(SAMPLE_SEAL))


@pytest.fixture
def sample_layout(sample_seal):
    return parse_layout(sample_seal)


@pytest.fixture
def blue_token_layout():
    return parse_layout({
        "centralDesign": "does_not_exist",
        "ring1Tokens": [{"position": "12:00", "color": "BLUE", "content": 7}],
        "ring2Tokens": [],
        "ring3Affirmation": "OM NAMAH SHIVAYA",
    })


class CountingResolver(AssetResolver):
    """Resolver that records every lookup."""

    def __init__(self, root):
        super().__init__(root)
        self.template_calls = []
        self.glyph_calls = []

    def resolve_template(self, name):
        self.template_calls.append(name)
        return super().resolve_template(name)

    def resolve_glyph(self, filename):
        self.glyph_calls.append(filename)
        return super().resolve_glyph(filename)


@pytest.fixture
def counting_resolver(asset_root) -> CountingResolver:
    return CountingResolver(asset_root)
