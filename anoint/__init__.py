"""ANOINT - sacred seal compositing engine.

Places numbered and glyph tokens on concentric rings around a central
template image, renders circular affirmation text, and exports the
composition as PNG through a Pillow or SVG backend.
"""

__version__ = "0.1.0"
