"""Clock-position labels and their canvas angles.

There are 24 positions, 15 degrees apart, named like an analog clock face
("12:00", "12:30", "1:00", ... "11:30"). Angles use the canvas convention:
0 degrees points along +x, angles grow clockwise (y points down), so
"12:00" sits at -90 degrees and "3:00" at 0.
"""

import math
import re
from typing import Optional

STEP_DEGREES = 15
TOP_ANGLE = -90  # 12:00

_LABEL_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def _build_table() -> dict[str, int]:
    table = {}
    for index in range(24):
        hour = index // 2 or 12
        minute = "30" if index % 2 else "00"
        table[f"{hour}:{minute}"] = TOP_ANGLE + index * STEP_DEGREES
    return table


# Canonical (non-padded) labels in clockwise order from 12:00
DIRECTION_ANGLES = _build_table()
CLOCK_LABELS = tuple(DIRECTION_ANGLES)


def normalize_label(label: str) -> Optional[str]:
    """Canonical spelling of a clock label, or None if it is not one.

    "09:00" and "9:00" both normalize to "9:00".
    """
    if not isinstance(label, str):
        return None
    match = _LABEL_RE.match(label)
    if not match:
        return None
    hour, minute = int(match.group(1)), match.group(2)
    candidate = f"{hour}:{minute}"
    return candidate if candidate in DIRECTION_ANGLES else None


def angle_for(label: str) -> Optional[int]:
    """Canvas angle in degrees for a clock label, or None if unrecognized."""
    canonical = normalize_label(label)
    if canonical is None:
        return None
    return DIRECTION_ANGLES[canonical]


def clockwise_from_top(label: str) -> Optional[int]:
    """Degrees clockwise from 12 o'clock (0..345), the upstream ``angle`` field."""
    angle = angle_for(label)
    if angle is None:
        return None
    return (angle - TOP_ANGLE) % 360


def polar(cx: float, cy: float, radius: float, angle_degrees: float) -> tuple[float, float]:
    """Point at ``radius`` from (cx, cy) along a canvas angle."""
    theta = math.radians(angle_degrees)
    return cx + radius * math.cos(theta), cy + radius * math.sin(theta)
