"""Fit an affirmation around the outer ring.

Short phrases are repeated so the loop looks full, and the font size is
searched so the estimated text width just closes the circle.
"""

import math
import re
from dataclasses import dataclass

DEFAULT_PHRASE = "OM NAMAH SHIVAYA"
SEPARATOR = "•"  # bullet

# Average advance of a bold serif capital, as a fraction of font size
WIDTH_COEFFICIENT = 0.58

# Stop growing once the text covers this much of the circumference
FIT_RATIO = 0.995

# Font band at the 1200 px reference size
MIN_FONT_SIZE = 14
MAX_FONT_SIZE = 30

# Upstream marks some phrases with a "label:" prefix, e.g. "gayatri: OM BHUR..."
_LABEL_PREFIX_RE = re.compile(r"^\s*[A-Za-z][\w-]*\s*:\s*")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class FittedText:
    """Result of fitting a phrase to a circle."""

    phrase: str
    text: str
    font_size: int
    repetitions: int

    @property
    def angle_step(self) -> float:
        """Degrees between consecutive characters."""
        return 360.0 / len(self.text)


def normalize_phrase(phrase: str) -> str:
    """Trim, drop leading label prefixes, collapse whitespace, uppercase.

    Idempotent: ``normalize_phrase(normalize_phrase(p)) == normalize_phrase(p)``.
    """
    text = (phrase or "").strip()
    while True:
        stripped = _LABEL_PREFIX_RE.sub("", text, count=1)
        if stripped == text:
            break
        text = stripped
    return _WHITESPACE_RE.sub(" ", text).strip().upper()


def repetitions_for(phrase: str) -> int:
    words = len(phrase.split())
    if words <= 3:
        return 3
    if words <= 5:
        return 2
    return 1


def expand_phrase(phrase: str, repetitions: int) -> str:
    """Join repetitions with the separator; the trailing one closes the loop."""
    unit = f"{phrase} {SEPARATOR} "
    return unit * repetitions


def estimated_width(text: str, font_size: float) -> float:
    return len(text) * WIDTH_COEFFICIENT * font_size


def fit_text(
    phrase: str,
    radius: float,
    min_font: int = MIN_FONT_SIZE,
    max_font: int = MAX_FONT_SIZE,
) -> FittedText:
    """Choose display text and font size for circular text.

    Args:
        phrase: Raw affirmation (may be empty or carry a label prefix)
        radius: Circle radius in output pixels
        min_font: Smallest allowed font size
        max_font: Largest allowed font size

    Returns:
        FittedText with the repeated display string and the largest font
        size in [min_font, max_font] whose estimated width stays within
        the circumference
    """
    normalized = normalize_phrase(phrase) or DEFAULT_PHRASE
    repetitions = repetitions_for(normalized)
    text = expand_phrase(normalized, repetitions)

    min_font = max(1, int(min_font))
    max_font = max(min_font, int(max_font))
    limit = 2 * math.pi * radius * FIT_RATIO

    # Largest size in band that fits; min_font if none does
    lo, hi = min_font, max_font
    best = min_font
    while lo <= hi:
        mid = (lo + hi) // 2
        if estimated_width(text, mid) <= limit:
            best = mid
            lo = mid + 1
        else:
            hi = mid - 1

    return FittedText(phrase=normalized, text=text, font_size=best, repetitions=repetitions)
