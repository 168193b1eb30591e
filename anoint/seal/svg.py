"""SVG backend: assembles a seal as an SVG document.

Images are embedded as base64 ``data:`` URIs so the document is
self-contained and can be handed to an external rasterizer.
"""

import base64
from xml.sax.saxutils import escape, quoteattr

from anoint.seal.colors import BACKGROUND_COLOR, GOLD_RING_COLOR, RING_STROKE_COLOR
from anoint.seal.compositor import Compositor, glyph_fallback_text, token_style
from anoint.seal.geometry import (
    CENTRAL_BORDER,
    FALLBACK_STROKE,
    GRID_COLOR,
    TICK_COLOR,
    WATERMARK_COLOR,
    WATERMARK_TEXT,
)

SERIF_FONT = "'DejaVu Serif', 'Times New Roman', serif"
SANS_FONT = "'DejaVu Sans', Arial, sans-serif"


def _n(value: float) -> str:
    """Compact number formatting for attributes."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def data_uri(data: bytes, media_type: str) -> str:
    return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


class SvgCompositor(Compositor):
    """SVG-assembly renderer."""

    def render(self) -> str:
        size = self.geometry.size
        self.defs: list[str] = []
        self.body: list[str] = []
        self.render_layers()
        return "\n".join(
            [
                "<?xml version=\"1.0\" encoding=\"UTF-8\"?>",
                f"<svg xmlns=\"http://www.w3.org/2000/svg\" xmlns:xlink=\"http://www.w3.org/1999/xlink\" "
                f"width=\"{size}\" height=\"{size}\" viewBox=\"0 0 {size} {size}\">",
                "  <defs>",
                *(f"    {d}" for d in self.defs),
                "  </defs>",
                *(f"  {el}" for el in self.body),
                "</svg>",
                "",
            ]
        )

    def _circle(self, cx, cy, r, fill="none", stroke=None, width=None, opacity=None) -> str:
        attrs = f"cx=\"{_n(cx)}\" cy=\"{_n(cy)}\" r=\"{_n(r)}\" fill=\"{fill}\""
        if stroke:
            attrs += f" stroke=\"{stroke}\" stroke-width=\"{_n(width)}\""
        if opacity is not None:
            attrs += f" stroke-opacity=\"{_n(opacity)}\""
        return f"<circle {attrs} />"

    def _clip_circle(self, clip_id, cx, cy, r):
        self.defs.append(
            f"<clipPath id=\"{clip_id}\"><circle cx=\"{_n(cx)}\" cy=\"{_n(cy)}\" r=\"{_n(r)}\" /></clipPath>"
        )

    def _image(self, href, x, y, size, aspect, clip_id) -> str:
        return (
            f"<image x=\"{_n(x)}\" y=\"{_n(y)}\" width=\"{_n(size)}\" height=\"{_n(size)}\" "
            f"preserveAspectRatio=\"{aspect}\" clip-path=\"url(#{clip_id})\" xlink:href={quoteattr(href)} />"
        )

    def _text(self, x, y, text, family, size, fill, extra="") -> str:
        return (
            f"<text x=\"{_n(x)}\" y=\"{_n(y)}\" font-family=\"{family}\" font-weight=\"bold\" "
            f"font-size=\"{_n(size)}\" fill=\"{fill}\" text-anchor=\"middle\" "
            f"dominant-baseline=\"central\"{extra}>{escape(text)}</text>"
        )

    def draw_background(self):
        g = self.geometry
        if self.preview:
            self.body.append(f"<rect width=\"{g.size}\" height=\"{g.size}\" fill=\"{BACKGROUND_COLOR}\" />")
        else:
            self.body.append(self._circle(g.cx, g.cy, g.inner_white_radius, fill=BACKGROUND_COLOR))

    def draw_grid(self):
        g = self.geometry
        color, opacity = GRID_COLOR
        lines = []
        for offset in g.grid_lines():
            lines.append(f"<line x1=\"{_n(offset)}\" y1=\"0\" x2=\"{_n(offset)}\" y2=\"{g.size}\" />")
            lines.append(f"<line x1=\"0\" y1=\"{_n(offset)}\" x2=\"{g.size}\" y2=\"{_n(offset)}\" />")
        self.body.append(
            f"<g stroke=\"{color}\" stroke-opacity=\"{_n(opacity)}\" stroke-width=\"1\">{''.join(lines)}</g>"
        )

    def draw_ring_boundaries(self):
        g = self.geometry
        width = g.stroke("ring_stroke")
        for radius in self.ring_boundary_radii():
            self.body.append(self._circle(g.cx, g.cy, radius, stroke=RING_STROKE_COLOR, width=width))

    def draw_gold_ring(self):
        g = self.geometry
        self.body.append(self._circle(g.cx, g.cy, g.gold_radius, stroke=GOLD_RING_COLOR, width=g.gold_width))

    def draw_central_image(self):
        g = self.geometry
        template = self.assets.template
        if template is not None:
            self._clip_circle("central-clip", g.cx, g.cy, g.central_radius)
            d = 2 * g.central_radius
            self.body.append(self._image(
                data_uri(template.data, template.media_type),
                g.cx - g.central_radius,
                g.cy - g.central_radius,
                d,
                "xMidYMid slice",
                "central-clip",
            ))
        else:
            shapes = self.fallback_polylines()
            if shapes:
                color, opacity = FALLBACK_STROKE
                polys = "".join(
                    f"<polygon points=\"{' '.join(f'{_n(x)},{_n(y)}' for x, y in points)}\" />"
                    for points in shapes
                )
                self.body.append(
                    f"<g fill=\"none\" stroke=\"{color}\" stroke-opacity=\"{_n(opacity)}\" "
                    f"stroke-width=\"{g.stroke('fallback_stroke')}\">{polys}</g>"
                )

        color, opacity = CENTRAL_BORDER
        self.body.append(self._circle(
            g.cx, g.cy, g.central_radius, stroke=color, width=g.stroke("central_border"), opacity=opacity
        ))

    def draw_ring1_tokens(self):
        g = self.geometry
        outline = g.stroke("token_outline")
        font_size = g.font_size("numeral_font")
        numeral_stroke = g.stroke("numeral_outline")
        for token, x, y in self.number_tokens():
            style = token_style(token.color)
            self.body.append(self._circle(
                x, y, g.ring1_token_radius, fill=style.fill, stroke=RING_STROKE_COLOR, width=outline
            ))
            # Outline pass first, fill on top
            self.body.append(self._text(
                x, y, str(token.value), SANS_FONT, font_size, style.outline,
                extra=f" stroke=\"{style.outline}\" stroke-width=\"{numeral_stroke * 2}\" stroke-linejoin=\"round\"",
            ))
            self.body.append(self._text(x, y, str(token.value), SANS_FONT, font_size, style.text))

    def draw_ring2_tokens(self):
        g = self.geometry
        outline = g.stroke("token_outline")
        box = g.glyph_box
        for index, (token, x, y) in enumerate(self.glyph_tokens()):
            style = token_style(token.color)
            self.body.append(self._circle(
                x, y, g.ring2_token_radius, fill=style.fill, stroke=RING_STROKE_COLOR, width=outline
            ))
            asset = self.assets.glyph(token.glyph_ref)
            if asset is not None:
                clip_id = f"glyph-clip-{index}"
                self._clip_circle(clip_id, x, y, g.glyph_clip_radius)
                self.body.append(self._image(
                    data_uri(asset.data, asset.media_type),
                    x - box / 2,
                    y - box / 2,
                    box,
                    "xMidYMid meet",
                    clip_id,
                ))
            elif self.glyph_text_enabled:
                self.body.append(self._text(
                    x, y, glyph_fallback_text(token.glyph_ref), SANS_FONT,
                    g.font_size("glyph_fallback_font"), style.text,
                ))

    def draw_ring3_text(self):
        fitted = self.geometry.fit(self.layout.ring3_affirmation)
        chars = []
        for place in self.geometry.text_placements(fitted):
            if place.is_blank:
                continue
            chars.append(self._text(
                place.x, place.y, place.char, SERIF_FONT, place.font_size, place.color,
                extra=f" transform=\"rotate({_n(place.rotation)} {_n(place.x)} {_n(place.y)})\"",
            ))
        self.body.append(f"<g class=\"ring3-text\">{''.join(chars)}</g>")

    def draw_watermark(self):
        g = self.geometry
        color, opacity = WATERMARK_COLOR
        self.body.append(self._text(
            g.cx, g.cy, WATERMARK_TEXT, SANS_FONT, g.font_size("watermark_font"), color,
            extra=f" fill-opacity=\"{_n(opacity)}\"",
        ))

    def draw_debug_ticks(self):
        g = self.geometry
        r = g.detail("tick_radius")
        offset = g.detail("tick_label_offset")
        for tick in g.tick_points(self.options.debug_rings):
            self.body.append(self._circle(tick.x, tick.y, r, fill=TICK_COLOR))
            if self.options.tick_labels:
                lx, ly = g.point(tick.angle, g.ring_radius(tick.ring) + offset)
                self.body.append(self._text(
                    lx, ly, tick.label, SANS_FONT, g.font_size("tick_label_font"), TICK_COLOR
                ))


def render_svg(layout, settings, output_size, assets=None, mode="export", options=None) -> str:
    """Render a seal with the SVG backend and return the document text."""
    return SvgCompositor(layout, settings, output_size, assets, mode, options).render()
