"""Geometric placeholders for central designs without a template image.

Each fallback is a generator registered under a design name. It returns
closed polylines (lists of points) inside a circle of the given radius,
and both backends stroke them the same way.
"""

import math
from typing import Callable, Optional

Point = tuple[float, float]
Polyline = list[Point]
FallbackGenerator = Callable[[float, float, float], list[Polyline]]

ELLIPSE_SEGMENTS = 72

FALLBACK_SHAPES: dict[str, FallbackGenerator] = {}


def register_fallback(name: str):
    """Decorator registering a fallback generator for a design name."""
    def decorator(func: FallbackGenerator) -> FallbackGenerator:
        FALLBACK_SHAPES[name] = func
        return func
    return decorator


def fallback_for(design: str) -> Optional[FallbackGenerator]:
    return FALLBACK_SHAPES.get(design)


def ellipse(cx: float, cy: float, rx: float, ry: float, rotation: float = 0.0) -> Polyline:
    """Sampled ellipse rotated by ``rotation`` degrees about its center."""
    cos_r, sin_r = math.cos(math.radians(rotation)), math.sin(math.radians(rotation))
    points = []
    for i in range(ELLIPSE_SEGMENTS):
        t = 2 * math.pi * i / ELLIPSE_SEGMENTS
        ex, ey = rx * math.cos(t), ry * math.sin(t)
        points.append((cx + ex * cos_r - ey * sin_r, cy + ex * sin_r + ey * cos_r))
    return points


def circle(cx: float, cy: float, r: float) -> Polyline:
    return ellipse(cx, cy, r, r)


@register_fallback("torus")
def torus(cx: float, cy: float, radius: float) -> list[Polyline]:
    # 12 ellipses swept around the center
    rx, ry = radius * 0.9, radius * 0.45
    return [ellipse(cx, cy, rx, ry, rotation=i * 30) for i in range(12)]


@register_fallback("flower_of_life")
def flower_of_life(cx: float, cy: float, radius: float) -> list[Polyline]:
    r = radius / 3
    shapes = [circle(cx, cy, r)]
    for i in range(6):
        theta = math.radians(i * 60)
        shapes.append(circle(cx + r * math.cos(theta), cy + r * math.sin(theta), r))
    return shapes


@register_fallback("sri_yantra")
def sri_yantra(cx: float, cy: float, radius: float) -> list[Polyline]:
    shapes = []
    # 5 upward triangles
    for i in range(5):
        size = radius * (0.9 - i * 0.15)
        shapes.append([
            (cx, cy - size),
            (cx - size * 0.866, cy + size * 0.5),
            (cx + size * 0.866, cy + size * 0.5),
        ])
    # 4 downward triangles
    for i in range(4):
        size = radius * (0.8 - i * 0.15)
        shapes.append([
            (cx, cy + size),
            (cx - size * 0.866, cy - size * 0.5),
            (cx + size * 0.866, cy - size * 0.5),
        ])
    return shapes
