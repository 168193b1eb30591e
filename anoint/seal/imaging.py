"""Pillow helpers for seal compositing."""

import io
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from PIL import Image, ImageChops, ImageDraw, ImageFont, ImageOps, UnidentifiedImageError

from anoint.seal.assets import ResolvedAsset

logger = logging.getLogger(__name__)

# Bold faces tried in order; the first one found wins
FONT_FAMILIES = {
    "serif": [
        "DejaVuSerif-Bold",
        "LiberationSerif-Bold",
        "Times New Roman Bold",
        "timesbd",
        "Georgia Bold",
    ],
    "sans": [
        "DejaVuSans-Bold",
        "LiberationSans-Bold",
        "Arial Bold",
        "arialbd",
    ],
}

FONT_DIRS = [
    "/usr/share/fonts/truetype/dejavu",
    "/usr/share/fonts/truetype/liberation",
    "/usr/share/fonts/truetype",
    "/usr/share/fonts",
    "/Library/Fonts",
    "/System/Library/Fonts/Supplemental",
    "C:/Windows/Fonts",
    str(Path(__file__).resolve().parent.parent.parent / "fonts"),
]


@lru_cache(maxsize=64)
def load_font(family: str, size: int):
    """Load a bold font of the given family, falling back to Pillow's default."""
    for name in FONT_FAMILIES.get(family, FONT_FAMILIES["serif"]):
        for directory in FONT_DIRS:
            path = os.path.join(directory, f"{name}.ttf")
            if os.path.exists(path):
                try:
                    return ImageFont.truetype(path, size)
                except OSError:
                    continue
        # Try by name (system font lookup)
        try:
            return ImageFont.truetype(f"{name}.ttf", size)
        except OSError:
            continue

    logger.debug(f"No {family} font found, using Pillow default at {size}px")
    return ImageFont.load_default(size=size)


def decode_image(asset: ResolvedAsset, size_hint: Optional[int] = None) -> Optional[Image.Image]:
    """Decode asset bytes into an RGBA image.

    SVG assets are rasterized in-process with cairosvg at ``size_hint``.
    Undecodable data is logged and treated like a missing asset.
    """
    try:
        if asset.media_type == "image/svg+xml":
            import cairosvg

            png = cairosvg.svg2png(
                bytestring=asset.data,
                output_width=size_hint,
                output_height=size_hint,
            )
            image = Image.open(io.BytesIO(png))
        else:
            image = Image.open(io.BytesIO(asset.data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as e:
        logger.warning(f"Cannot decode {asset.name} ({asset.path}): {e}")
        return None
    return image.convert("RGBA")


def crop_to_fill(image: Image.Image, target_width: int, target_height: int) -> Image.Image:
    """Scale and center-crop image to fill target dimensions exactly.

    Scales up to cover the entire target area, then crops excess.
    """
    w, h = image.size

    # Scale to FILL (cover) the target - use max, not min
    scale = max(target_width / w, target_height / h)

    new_w = max(target_width, round(w * scale))
    new_h = max(target_height, round(h * scale))
    resized = image.resize((new_w, new_h), Image.Resampling.LANCZOS)

    left = (new_w - target_width) // 2
    top = (new_h - target_height) // 2
    return resized.crop((left, top, left + target_width, top + target_height))


def fit_into_box(image: Image.Image, box: int) -> Image.Image:
    """Letterbox image into a transparent ``box`` x ``box`` square."""
    contained = ImageOps.contain(image, (box, box), Image.Resampling.LANCZOS)
    tile = Image.new("RGBA", (box, box), (0, 0, 0, 0))
    tile.paste(contained, ((box - contained.width) // 2, (box - contained.height) // 2))
    return tile


def circle_mask(size: int, radius: Optional[float] = None) -> Image.Image:
    """L-mode mask with a filled circle centered in a ``size`` square."""
    mask = Image.new("L", (size, size), 0)
    r = size / 2 if radius is None else radius
    c = size / 2
    ImageDraw.Draw(mask).ellipse((c - r, c - r, c + r - 1, c + r - 1), fill=255)
    return mask


def clip_to_circle(tile: Image.Image, radius: Optional[float] = None) -> Image.Image:
    """Multiply a square RGBA tile's alpha by a centered circle mask."""
    clipped = tile.copy()
    mask = circle_mask(tile.width, radius)
    clipped.putalpha(ImageChops.multiply(tile.getchannel("A"), mask))
    return clipped


def paste_over(base: Image.Image, layer: Image.Image, x: int, y: int) -> None:
    """Alpha-composite layer onto base with its top-left at (x, y), clipped to base."""
    left, top = max(0, x), max(0, y)
    right = min(base.width, x + layer.width)
    bottom = min(base.height, y + layer.height)
    if right <= left or bottom <= top:
        return
    region = layer.crop((left - x, top - y, right - x, bottom - y))
    base.alpha_composite(region, dest=(left, top))


def rotated_char(char: str, font, font_size: int, fill, rotation: float) -> Image.Image:
    """Render one character on a transparent tile rotated clockwise by ``rotation`` degrees."""
    tile_size = int(font_size * 2) + 4
    tile = Image.new("RGBA", (tile_size, tile_size), (0, 0, 0, 0))
    ImageDraw.Draw(tile).text(
        (tile_size / 2, tile_size / 2), char, font=font, fill=fill, anchor="mm"
    )
    # Pillow rotates counter-clockwise for positive angles
    return tile.rotate(-rotation, resample=Image.Resampling.BICUBIC)


def png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
