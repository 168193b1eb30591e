"""Backend-independent seal geometry.

Every coordinate and size the backends draw comes from here, so the
Pillow and SVG renderers agree up to resolution scaling.

Two scale factors are computed once per render:

* ``radius_scale = output_size / canvas_base_size`` for configured radii
* ``detail_scale = output_size / REFERENCE_SIZE`` for strokes, token
  sizes and fonts, which are specified at the 1200 px working size

A seal that would reach past the canvas margin has both factors reduced
by the same amount, so the clamped seal is a scaled copy of the original.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from anoint.seal.colors import GOLD_RING_COLOR, RING_STROKE_COLOR
from anoint.seal.directions import CLOCK_LABELS, DIRECTION_ANGLES, TOP_ANGLE, polar
from anoint.seal.settings import RenderSettings
from anoint.seal.textfit import SEPARATOR, FittedText, fit_text

logger = logging.getLogger(__name__)

REFERENCE_SIZE = 1200

# Least free space kept around an offset center, as a fraction of the canvas
MIN_ROOM_FRACTION = 0.25

# Sizes in pixels at REFERENCE_SIZE
DETAILS = {
    "ring_stroke": 3,
    "gold_width": 22,
    "gold_offset": 22,
    "canvas_margin": 4,
    "ring1_token_radius": 22.5,
    "ring2_token_radius": 24,
    "glyph_clip_radius": 20,
    "glyph_box": 50,
    "token_outline": 2,
    "numeral_font": 24,
    "numeral_outline": 1,
    "central_border": 3,
    "text_font_min": 14,
    "text_font_max": 30,
    "tick_radius": 6,
    "tick_label_font": 14,
    "tick_label_offset": 18,
    "grid_spacing": 40,
    "watermark_font": 48,
    "fallback_stroke": 2,
    "glyph_fallback_font": 18,
}

# Separator drawn slightly larger than the text (26 vs 24 at reference)
SEPARATOR_SCALE = 26 / 24

CENTRAL_BORDER = (GOLD_RING_COLOR, 0.8)
FALLBACK_STROKE = ("#8B5CF6", 0.5)
GRID_COLOR = ("#9CA3AF", 0.1)
WATERMARK_COLOR = ("#8B5CF6", 0.2)
WATERMARK_TEXT = "ANOINT"
TICK_COLOR = "#FF0070"
TEXT_COLOR = RING_STROKE_COLOR


@dataclass(frozen=True)
class CharPlacement:
    """One character of the circular text."""

    char: str
    x: float
    y: float
    rotation: float  # degrees clockwise
    font_size: int
    color: str

    @property
    def is_blank(self) -> bool:
        return not self.char.strip()


@dataclass(frozen=True)
class TickPoint:
    ring: int
    label: str
    angle: float
    x: float
    y: float


@dataclass(frozen=True)
class SealGeometry:
    """Resolved pixel geometry for one seal at one output size."""

    size: int
    cx: float
    cy: float
    radius_scale: float
    detail_scale: float
    central_radius: float
    ring1_radius: float
    ring2_radius: float
    ring3_radius: float
    gold_radius: float
    gold_width: int
    inner_white_radius: float
    clamped: bool = False

    def detail(self, name: str) -> float:
        """A reference-size detail scaled to this output."""
        return DETAILS[name] * self.detail_scale

    def stroke(self, name: str) -> int:
        """A stroke width in whole pixels, never below 1."""
        return max(1, round(self.detail(name)))

    def font_size(self, name: str) -> int:
        return max(1, round(self.detail(name)))

    @property
    def ring1_token_radius(self) -> float:
        return self.detail("ring1_token_radius")

    @property
    def ring2_token_radius(self) -> float:
        return self.detail("ring2_token_radius")

    @property
    def glyph_clip_radius(self) -> float:
        return self.detail("glyph_clip_radius")

    @property
    def glyph_box(self) -> int:
        return max(2, round(self.detail("glyph_box")))

    @property
    def gold_outer_edge(self) -> float:
        return self.gold_radius + self.gold_width / 2

    def ring_radius(self, ring: int) -> float:
        return {1: self.ring1_radius, 2: self.ring2_radius, 3: self.ring3_radius}[ring]

    def point(self, angle_degrees: float, radius: float) -> tuple[float, float]:
        return polar(self.cx, self.cy, radius, angle_degrees)

    def token_center(self, angle_degrees: float, ring: int) -> tuple[float, float]:
        return self.point(angle_degrees, self.ring_radius(ring))

    def fit(self, phrase: str) -> FittedText:
        """Run the text fitter on ring 3 with this output's font band."""
        return fit_text(
            phrase,
            self.ring3_radius,
            min_font=self.font_size("text_font_min"),
            max_font=self.font_size("text_font_max"),
        )

    def text_placements(self, fitted: FittedText) -> list[CharPlacement]:
        """Place each character on ring 3, starting at 12 o'clock, clockwise.

        Character i of N sits at ``TOP_ANGLE + i * 360 / N`` and is rotated
        so its baseline is perpendicular to the radius.
        """
        step = fitted.angle_step
        separator_size = max(1, round(fitted.font_size * SEPARATOR_SCALE))
        placements = []
        for i, char in enumerate(fitted.text):
            angle = TOP_ANGLE + i * step
            x, y = self.point(angle, self.ring3_radius)
            is_separator = char == SEPARATOR
            placements.append(CharPlacement(
                char=char,
                x=x,
                y=y,
                rotation=angle + 90,
                font_size=separator_size if is_separator else fitted.font_size,
                color=GOLD_RING_COLOR if is_separator else TEXT_COLOR,
            ))
        return placements

    def tick_points(self, rings: Iterable[int] = (1, 2, 3)) -> list[TickPoint]:
        """Markers for all 24 clock positions on the requested rings."""
        points = []
        for ring in rings:
            radius = self.ring_radius(ring)
            for label in CLOCK_LABELS:
                angle = DIRECTION_ANGLES[label]
                x, y = self.point(angle, radius)
                points.append(TickPoint(ring=ring, label=label, angle=angle, x=x, y=y))
        return points

    def grid_lines(self) -> list[float]:
        spacing = self.detail("grid_spacing")
        lines = []
        offset = spacing
        while offset < self.size:
            lines.append(offset)
            offset += spacing
        return lines


def _outer_extent(radii: dict, detail_scale: float) -> float:
    """Farthest reach of the composition from its center, in pixels."""
    return max(
        radii["ring3"] + (DETAILS["gold_offset"] + DETAILS["gold_width"] / 2) * detail_scale,
        radii["ring2"] + DETAILS["ring2_token_radius"] * detail_scale,
        radii["ring1"] + DETAILS["ring1_token_radius"] * detail_scale,
        radii["central"] + DETAILS["central_border"] * detail_scale,
    )


def compute_geometry(settings: RenderSettings, output_size: int) -> SealGeometry:
    """Scale settings to an output size, shrinking the seal if it would clip.

    When the composition (gold ring, tokens, central border) reaches past
    the canvas margin, every radius and detail size shrinks by one common
    factor so the seal keeps its proportions. A center offset that leaves
    less than MIN_ROOM_FRACTION of the canvas around it is pulled inward
    first.

    Args:
        settings: Geometry configuration in canvas_base_size units
        output_size: Square output edge in pixels

    Returns:
        SealGeometry for the render
    """
    if output_size <= 0:
        raise ValueError(f"output_size must be positive, got {output_size}")

    radius_scale = settings.scale_for(output_size)
    detail_scale = output_size / REFERENCE_SIZE
    margin = max(2.0, DETAILS["canvas_margin"] * detail_scale)

    cx = output_size / 2 + settings.center_x * radius_scale
    cy = output_size / 2 + settings.center_y * radius_scale

    min_room = output_size * MIN_ROOM_FRACTION
    low, high = margin + min_room, output_size - margin - min_room
    pulled_x, pulled_y = min(max(cx, low), high), min(max(cy, low), high)
    if (pulled_x, pulled_y) != (cx, cy):
        logger.warning(
            f"Seal center ({cx:.1f}, {cy:.1f}) too close to the {output_size}px canvas edge; "
            f"moved to ({pulled_x:.1f}, {pulled_y:.1f})"
        )
        cx, cy = pulled_x, pulled_y

    radii = {
        "central": settings.central_radius * radius_scale,
        "ring1": settings.ring1_radius * radius_scale,
        "ring2": settings.ring2_radius * radius_scale,
        "ring3": settings.ring3_radius * radius_scale,
    }
    room = min(cx, cy, output_size - cx, output_size - cy) - margin
    extent = _outer_extent(radii, detail_scale)
    clamped = extent > room
    if clamped:
        factor = room / extent
        logger.warning(
            f"Seal would leave the {output_size}px canvas; "
            f"shrinking radii and details by {factor:.3f}"
        )
        radii = {name: r * factor for name, r in radii.items()}
        radius_scale *= factor
        detail_scale *= factor

    gold_width = max(1, round(DETAILS["gold_width"] * detail_scale))
    gold_offset = DETAILS["gold_offset"] * detail_scale
    ring3 = radii["ring3"]
    if clamped:
        # whole-pixel gold width can overshoot the exact fit
        ring3 = max(0.0, min(ring3, room - gold_offset - gold_width / 2))
    gold_radius = ring3 + gold_offset

    return SealGeometry(
        size=output_size,
        cx=cx,
        cy=cy,
        radius_scale=radius_scale,
        detail_scale=detail_scale,
        central_radius=radii["central"],
        ring1_radius=radii["ring1"],
        ring2_radius=radii["ring2"],
        ring3_radius=ring3,
        gold_radius=gold_radius,
        gold_width=gold_width,
        inner_white_radius=max(1.0, gold_radius - gold_width / 2),
        clamped=clamped,
    )
