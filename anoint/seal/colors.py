"""Symbolic color names used by seal tokens.

Upstream token generation draws from a closed set of uppercase names.
Anything outside the table resolves to white so a render never aborts
on a color it does not know.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#FFFFFF"

# Seal decoration colors
GOLD_RING_COLOR = "#D4AF37"
RING_STROKE_COLOR = "#000000"
BACKGROUND_COLOR = "#FFFFFF"

COLOR_HEX = {
    "WHITE": "#FFFFFF",
    "GOLD": "#FFD700",
    "SILVER": "#C0C0C0",
    "RED": "#FF0000",
    "ORANGE": "#FFA500",
    "YELLOW": "#FFFF00",
    "GREEN": "#00FF00",
    "BLUE": "#0000FF",
    "INDIGO": "#4B0082",
    "VIOLET": "#8B00FF",
    "PURPLE": "#800080",
    "PINK": "#FFC0CB",
    "BROWN": "#A52A2A",
    "GRAY": "#808080",
    "GREY": "#808080",
    "TURQUOISE": "#40E0D0",
    "TEAL": "#008080",
    "CYAN": "#00FFFF",
    "AQUA": "#06B6D4",
    "MAGENTA": "#FF00FF",
    "CRIMSON": "#DC143C",
    "SCARLET": "#FF2400",
    "AMBER": "#FFBF00",
    "CORAL": "#FF7F50",
    "PEACH": "#FFCBA4",
    "LAVENDER": "#E6E6FA",
    "MINT": "#98FB98",
    "JADE": "#00A86B",
    "EMERALD": "#50C878",
    "RUBY": "#E0115F",
    "SAPPHIRE": "#0F52BA",
    "AMETHYST": "#9966CC",
    "CITRINE": "#E4D00A",
    "ROSE": "#FF007F",
    "AZURE": "#007FFF",
    "OCHRE": "#CC7722",
    "IVORY": "#FFFFF0",
    "PEARL": "#EAE0C8",
    "PLATINUM": "#E5E4E2",
    "COPPER": "#B87333",
    "BRONZE": "#CD7F32",
    "STEEL": "#71797E",
}


def resolve_color(name: Optional[str]) -> str:
    """Map a symbolic color name to an uppercase ``#RRGGBB`` string.

    Args:
        name: Color name such as "RED" or "turquoise" (case-insensitive)

    Returns:
        Hex color, or white for missing/unknown names
    """
    if not name:
        return DEFAULT_COLOR
    key = str(name).strip().upper()
    hex_value = COLOR_HEX.get(key)
    if hex_value is None:
        logger.info(f"Unknown color {name!r}, using {DEFAULT_COLOR}")
        return DEFAULT_COLOR
    return hex_value


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse ``#RRGGBB`` (or ``RRGGBB``) into an RGB tuple."""
    value = hex_color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a 6-digit hex color, got {hex_color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def luminance(hex_color: str) -> float:
    """Perceptual luminance in 0..1 (ITU-R BT.601 weights)."""
    r, g, b = hex_to_rgb(hex_color)
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def contrasting_text_color(hex_color: str) -> str:
    """Black for light backgrounds, white for dark ones."""
    return "#000000" if luminance(hex_color) > 0.5 else "#FFFFFF"


def outline_color(text_color: str) -> str:
    """Opposite of a black/white text color, used for numeral outlines."""
    return "#FFFFFF" if text_color == "#000000" else "#000000"


def rgba(hex_color: str, alpha: float = 1.0) -> tuple[int, int, int, int]:
    """Hex color plus 0..1 alpha as a Pillow RGBA tuple."""
    r, g, b = hex_to_rgb(hex_color)
    return r, g, b, round(alpha * 255)
