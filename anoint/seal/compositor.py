"""Layer order and render options shared by the Pillow and SVG backends.

A backend subclasses ``Compositor`` and implements one ``draw_<layer>``
method per entry of ``LAYERS``. ``render`` walks the layers in order, so
later layers occlude earlier ones, and skips preview-only layers when
rendering for export.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from anoint.seal.assets import ResolvedAssets
from anoint.seal.colors import contrasting_text_color, outline_color, resolve_color
from anoint.seal.fallbacks import Polyline, fallback_for
from anoint.seal.geometry import SealGeometry, compute_geometry
from anoint.seal.layout import GlyphToken, NumberToken, SealLayout
from anoint.seal.settings import RenderSettings

logger = logging.getLogger(__name__)


class RenderMode(str, Enum):
    """Preview: opaque white, ring-3 stroke, overlays. Export: transparent outside the gold ring."""

    PREVIEW = "preview"
    EXPORT = "export"


LAYERS = (
    "background",
    "grid",
    "ring_boundaries",
    "gold_ring",
    "central_image",
    "ring1_tokens",
    "ring2_tokens",
    "ring3_text",
    "watermark",
    "debug_ticks",
)

PREVIEW_ONLY_LAYERS = {"grid", "watermark", "debug_ticks"}


@dataclass(frozen=True)
class RenderOptions:
    """Per-call drawing options.

    ``fallback_shapes`` and ``glyph_text_fallback`` default to on for
    preview and off for export when left as None.
    """

    debug_rings: tuple[int, ...] = ()
    tick_labels: bool = False
    fallback_shapes: Optional[bool] = None
    glyph_text_fallback: Optional[bool] = None


@dataclass(frozen=True)
class TokenStyle:
    fill: str
    text: str
    outline: str


def token_style(color_name: str) -> TokenStyle:
    """Fill plus numeral/outline colors for a token color name."""
    fill = resolve_color(color_name)
    text = contrasting_text_color(fill)
    return TokenStyle(fill=fill, text=text, outline=outline_color(text))


def glyph_fallback_text(glyph_ref: str) -> str:
    """Short label for an unresolved glyph: first two letters of the stem."""
    stem = glyph_ref.rsplit(".", 1)[0]
    return stem[:2].upper()


class Compositor:
    """Base class for seal backends."""

    def __init__(
        self,
        layout: SealLayout,
        settings: RenderSettings,
        output_size: int,
        assets: Optional[ResolvedAssets] = None,
        mode: RenderMode = RenderMode.EXPORT,
        options: Optional[RenderOptions] = None,
    ):
        self.layout = layout
        self.settings = settings
        self.assets = assets or ResolvedAssets()
        self.mode = RenderMode(mode)
        self.options = options or RenderOptions()
        self.geometry: SealGeometry = compute_geometry(settings, output_size)

    @property
    def preview(self) -> bool:
        return self.mode is RenderMode.PREVIEW

    @property
    def fallback_shapes_enabled(self) -> bool:
        flag = self.options.fallback_shapes
        return self.preview if flag is None else flag

    @property
    def glyph_text_enabled(self) -> bool:
        flag = self.options.glyph_text_fallback
        return self.preview if flag is None else flag

    def layer_enabled(self, layer: str) -> bool:
        if layer in PREVIEW_ONLY_LAYERS and not self.preview:
            return False
        if layer == "grid":
            return self.settings.show_grid
        if layer == "watermark":
            return self.settings.show_watermark
        if layer == "debug_ticks":
            return bool(self.options.debug_rings)
        return True

    def ring_boundary_radii(self) -> list[float]:
        g = self.geometry
        radii = [g.ring1_radius, g.ring2_radius]
        if self.preview:
            radii.append(g.ring3_radius)
        return radii

    def fallback_polylines(self) -> list[Polyline]:
        """Placeholder shapes when the template is missing, or []."""
        if self.assets.template is not None or not self.fallback_shapes_enabled:
            return []
        generator = fallback_for(self.layout.central_design)
        if generator is None:
            return []
        g = self.geometry
        return generator(g.cx, g.cy, g.central_radius)

    def number_tokens(self) -> list[tuple[NumberToken, float, float]]:
        g = self.geometry
        return [(t, *g.token_center(t.angle_degrees, 1)) for t in self.layout.ring1_tokens]

    def glyph_tokens(self) -> list[tuple[GlyphToken, float, float]]:
        g = self.geometry
        return [(t, *g.token_center(t.angle_degrees, 2)) for t in self.layout.ring2_tokens]

    def render_layers(self) -> None:
        for layer in LAYERS:
            if self.layer_enabled(layer):
                getattr(self, f"draw_{layer}")()

    def render(self):
        raise NotImplementedError
