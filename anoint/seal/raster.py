"""Pillow backend: draws a seal directly into an RGBA bitmap."""

import logging
from contextlib import contextmanager

from PIL import Image, ImageDraw

from anoint.seal.colors import (
    BACKGROUND_COLOR,
    GOLD_RING_COLOR,
    RING_STROKE_COLOR,
    rgba,
)
from anoint.seal.compositor import Compositor, glyph_fallback_text, token_style
from anoint.seal.geometry import (
    CENTRAL_BORDER,
    FALLBACK_STROKE,
    GRID_COLOR,
    TICK_COLOR,
    WATERMARK_COLOR,
    WATERMARK_TEXT,
)
from anoint.seal.imaging import (
    clip_to_circle,
    crop_to_fill,
    decode_image,
    fit_into_box,
    load_font,
    paste_over,
    rotated_char,
)

logger = logging.getLogger(__name__)


class RasterCompositor(Compositor):
    """Direct bitmap renderer."""

    def render(self) -> Image.Image:
        size = self.geometry.size
        background = rgba(BACKGROUND_COLOR) if self.preview else (0, 0, 0, 0)
        self.image = Image.new("RGBA", (size, size), background)
        self.draw = ImageDraw.Draw(self.image)
        self.render_layers()
        return self.image

    @contextmanager
    def overlay(self):
        """Translucent drawing surface blended onto the image on exit."""
        layer = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        yield ImageDraw.Draw(layer)
        self.image.alpha_composite(layer)

    def _disc(self, draw, cx, cy, r, fill=None, outline=None, width=1):
        draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=fill, outline=outline, width=width)

    def _ring(self, draw, cx, cy, r, width, color):
        # Pillow strokes inward from the box; widen it so the stroke is centered on r
        self._disc(draw, cx, cy, r + width / 2, outline=color, width=width)

    def draw_background(self):
        g = self.geometry
        if not self.preview:
            self._disc(self.draw, g.cx, g.cy, g.inner_white_radius, fill=rgba(BACKGROUND_COLOR))

    def draw_grid(self):
        g = self.geometry
        color = rgba(*GRID_COLOR)
        with self.overlay() as draw:
            for offset in g.grid_lines():
                draw.line([(offset, 0), (offset, g.size)], fill=color, width=1)
                draw.line([(0, offset), (g.size, offset)], fill=color, width=1)

    def draw_ring_boundaries(self):
        g = self.geometry
        width = g.stroke("ring_stroke")
        for radius in self.ring_boundary_radii():
            self._ring(self.draw, g.cx, g.cy, radius, width, RING_STROKE_COLOR)

    def draw_gold_ring(self):
        g = self.geometry
        self._ring(self.draw, g.cx, g.cy, g.gold_radius, g.gold_width, GOLD_RING_COLOR)

    def draw_central_image(self):
        g = self.geometry
        template = self.assets.template
        image = decode_image(template) if template is not None else None
        if image is not None:
            diameter = max(1, round(2 * g.central_radius))
            tile = clip_to_circle(crop_to_fill(image, diameter, diameter))
            paste_over(self.image, tile, round(g.cx - diameter / 2), round(g.cy - diameter / 2))
        else:
            shapes = self.fallback_polylines()
            if shapes:
                color = rgba(*FALLBACK_STROKE)
                width = g.stroke("fallback_stroke")
                with self.overlay() as draw:
                    for points in shapes:
                        draw.line(points + points[:1], fill=color, width=width, joint="curve")

        with self.overlay() as draw:
            self._ring(draw, g.cx, g.cy, g.central_radius, g.stroke("central_border"), rgba(*CENTRAL_BORDER))

    def draw_ring1_tokens(self):
        g = self.geometry
        radius = g.ring1_token_radius
        outline = g.stroke("token_outline")
        font_size = g.font_size("numeral_font")
        font = load_font("sans", font_size)
        for token, x, y in self.number_tokens():
            style = token_style(token.color)
            self._disc(self.draw, x, y, radius, fill=style.fill, outline=RING_STROKE_COLOR, width=outline)
            self.draw.text(
                (x, y),
                str(token.value),
                font=font,
                fill=style.text,
                anchor="mm",
                stroke_width=g.stroke("numeral_outline"),
                stroke_fill=style.outline,
            )

    def draw_ring2_tokens(self):
        g = self.geometry
        radius = g.ring2_token_radius
        outline = g.stroke("token_outline")
        box = g.glyph_box
        decoded = {}
        for token, x, y in self.glyph_tokens():
            style = token_style(token.color)
            self._disc(self.draw, x, y, radius, fill=style.fill, outline=RING_STROKE_COLOR, width=outline)

            ref = token.glyph_ref
            if ref not in decoded:
                asset = self.assets.glyph(ref)
                decoded[ref] = decode_image(asset, size_hint=box) if asset is not None else None
            glyph = decoded[ref]

            if glyph is not None:
                tile = clip_to_circle(fit_into_box(glyph, box), g.glyph_clip_radius)
                paste_over(self.image, tile, round(x - box / 2), round(y - box / 2))
            elif self.glyph_text_enabled:
                font = load_font("sans", g.font_size("glyph_fallback_font"))
                self.draw.text((x, y), glyph_fallback_text(ref), font=font, fill=style.text, anchor="mm")

    def draw_ring3_text(self):
        fitted = self.geometry.fit(self.layout.ring3_affirmation)
        for place in self.geometry.text_placements(fitted):
            if place.is_blank:
                continue
            font = load_font("serif", place.font_size)
            tile = rotated_char(place.char, font, place.font_size, place.color, place.rotation)
            paste_over(
                self.image,
                tile,
                round(place.x - tile.width / 2),
                round(place.y - tile.height / 2),
            )

    def draw_watermark(self):
        g = self.geometry
        font = load_font("sans", g.font_size("watermark_font"))
        with self.overlay() as draw:
            draw.text((g.cx, g.cy), WATERMARK_TEXT, font=font, fill=rgba(*WATERMARK_COLOR), anchor="mm")

    def draw_debug_ticks(self):
        g = self.geometry
        r = g.detail("tick_radius")
        label_font = load_font("sans", g.font_size("tick_label_font"))
        offset = g.detail("tick_label_offset")
        for tick in g.tick_points(self.options.debug_rings):
            self._disc(self.draw, tick.x, tick.y, r, fill=TICK_COLOR)
            if self.options.tick_labels:
                lx, ly = g.point(tick.angle, g.ring_radius(tick.ring) + offset)
                self.draw.text((lx, ly), tick.label, font=label_font, fill=TICK_COLOR, anchor="mm")


def render_raster(layout, settings, output_size, assets=None, mode="export", options=None) -> Image.Image:
    """Render a seal with the Pillow backend and return the RGBA image."""
    return RasterCompositor(layout, settings, output_size, assets, mode, options).render()
