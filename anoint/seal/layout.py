"""Seal layout model and validation.

A seal layout is produced upstream as JSON::

    {
      "centralDesign": "flower_of_life",
      "ring1Tokens": [{"position": "12:00", "angle": 0, "color": "BLUE",
                       "content": 7, "type": "number"}],
      "ring2Tokens": [{"position": "3:00", "angle": 90, "color": "RED",
                       "content": "lotus.png", "type": "glyph"}],
      "ring3Affirmation": "OM NAMAH SHIVAYA",
      "userConfig": {}
    }

Documents that do not match the schema are rejected before any drawing.
Within a valid document, tokens with unrecognized positions are skipped
and a repeated position on the same ring keeps only the first token.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from jsonschema import Draft7Validator

from anoint.seal.assets import safe_name
from anoint.seal.directions import angle_for, clockwise_from_top, normalize_label

logger = logging.getLogger(__name__)

LAYOUT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "SealLayout",
    "type": "object",
    "required": ["centralDesign"],
    "properties": {
        "centralDesign": {"type": "string", "minLength": 1},
        "ring1Tokens": {"type": "array", "items": {"$ref": "#/definitions/numberToken"}},
        "ring2Tokens": {"type": "array", "items": {"$ref": "#/definitions/glyphToken"}},
        "ring3Affirmation": {"type": ["string", "null"]},
        "userConfig": {"type": ["object", "null"]},
    },
    "definitions": {
        "numberToken": {
            "type": "object",
            "required": ["position", "content"],
            "properties": {
                "position": {"type": "string"},
                "angle": {"type": "number"},
                "color": {"type": ["string", "null"]},
                "content": {
                    "oneOf": [
                        {"type": "integer"},
                        {"type": "string", "pattern": r"^\s*-?\d+\s*$"},
                    ]
                },
                "type": {"const": "number"},
            },
        },
        "glyphToken": {
            "type": "object",
            "required": ["position", "content"],
            "properties": {
                "position": {"type": "string"},
                "angle": {"type": "number"},
                "color": {"type": ["string", "null"]},
                "content": {"type": "string", "minLength": 1},
                "type": {"const": "glyph"},
            },
        },
    },
}

_VALIDATOR = Draft7Validator(LAYOUT_SCHEMA)


class InvalidLayoutError(ValueError):
    """Seal layout document is not valid against the layout schema."""
    pass


@dataclass(frozen=True)
class NumberToken:
    """Ring-1 token: a numeral on a colored circle."""

    position: str
    angle_degrees: int
    color: str
    value: int
    kind: str = "number"


@dataclass(frozen=True)
class GlyphToken:
    """Ring-2 token: a glyph image on a colored circle."""

    position: str
    angle_degrees: int
    color: str
    glyph_ref: str
    kind: str = "glyph"


Token = Union[NumberToken, GlyphToken]


@dataclass(frozen=True)
class SealLayout:
    """One seal: central design, two token rings and the affirmation."""

    central_design: str
    ring1_tokens: tuple[NumberToken, ...] = ()
    ring2_tokens: tuple[GlyphToken, ...] = ()
    ring3_affirmation: str = ""
    user_config: dict = field(default_factory=dict, compare=False)

    def glyph_refs(self) -> list[str]:
        """Glyph filenames in token order (may repeat)."""
        return [token.glyph_ref for token in self.ring2_tokens]


def validate_layout(data: Any) -> None:
    """Check a layout document against the schema.

    Raises:
        InvalidLayoutError: Listing every schema violation found
    """
    errors = sorted(_VALIDATOR.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        details = "; ".join(
            f"{'/'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}"
            for e in errors
        )
        raise InvalidLayoutError(f"Invalid seal layout: {details}")


def _declared_angle_matches(entry: dict, canonical: str) -> bool:
    if "angle" not in entry:
        return True
    return (entry["angle"] - clockwise_from_top(canonical)) % 360 == 0


def _ring_entries(entries: list, ring: int):
    """Yield (canonical_position, angle, entry) for the usable entries of a ring."""
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        canonical = normalize_label(entry["position"])
        if canonical is None:
            logger.info(f"Ring {ring} token {index}: unknown position {entry['position']!r}, skipped")
            continue
        if canonical in seen:
            logger.warning(
                f"Ring {ring} token {index}: position {canonical} already taken, dropped"
            )
            continue
        seen.add(canonical)
        if not _declared_angle_matches(entry, canonical):
            logger.warning(
                f"Ring {ring} token {index}: angle {entry['angle']} disagrees with "
                f"position {canonical}, using position"
            )
        yield canonical, angle_for(canonical), entry


def parse_layout(data: Any) -> SealLayout:
    """Build a SealLayout from a decoded JSON document.

    Args:
        data: Decoded seal layout document

    Returns:
        Validated, de-duplicated SealLayout

    Raises:
        InvalidLayoutError: If the document fails schema validation
    """
    validate_layout(data)

    ring1 = tuple(
        NumberToken(
            position=position,
            angle_degrees=angle,
            color=entry.get("color") or "",
            value=int(entry["content"]),
        )
        for position, angle, entry in _ring_entries(data.get("ring1Tokens") or [], 1)
    )
    ring2 = tuple(
        GlyphToken(
            position=position,
            angle_degrees=angle,
            color=entry.get("color") or "",
            glyph_ref=entry["content"],
        )
        for position, angle, entry in _ring_entries(data.get("ring2Tokens") or [], 2)
    )

    return SealLayout(
        central_design=data["centralDesign"],
        ring1_tokens=ring1,
        ring2_tokens=ring2,
        ring3_affirmation=data.get("ring3Affirmation") or "",
        user_config=dict(data.get("userConfig") or {}),
    )


def load_layout(path: Path) -> SealLayout:
    """Load and validate a seal layout JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidLayoutError(f"{path}: not valid JSON ({e})") from e
    return parse_layout(data)


def load_seal_by_filename(seals_dir: Path, filename: str) -> SealLayout:
    """Load a generated seal stored in the seals directory.

    Raises:
        AssetPathError: If filename is not a bare file name
        FileNotFoundError: If the seal does not exist
    """
    safe_name(filename)
    path = Path(seals_dir) / filename
    if not path.is_file():
        raise FileNotFoundError(f"Seal not found: {path}")
    return load_layout(path)


def layout_to_dict(layout: SealLayout) -> dict:
    """Inverse of parse_layout, in the upstream JSON shape."""
    return {
        "centralDesign": layout.central_design,
        "ring1Tokens": [
            {
                "position": t.position,
                "angle": clockwise_from_top(t.position),
                "color": t.color,
                "content": t.value,
                "type": t.kind,
            }
            for t in layout.ring1_tokens
        ],
        "ring2Tokens": [
            {
                "position": t.position,
                "angle": clockwise_from_top(t.position),
                "color": t.color,
                "content": t.glyph_ref,
                "type": t.kind,
            }
            for t in layout.ring2_tokens
        ],
        "ring3Affirmation": layout.ring3_affirmation,
        "userConfig": dict(layout.user_config),
    }
