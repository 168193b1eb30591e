"""Seal export pipeline.

Resolve every asset a layout references once, run a backend, and return
PNG bytes:

* ``raster``: Pillow draws the bitmap directly.
* ``svg``: the SVG backend assembles a document with embedded images and
  an external rasterizer converts it to PNG (crisper text at print sizes).

Both backends take the same geometry, so they differ only in fidelity.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from anoint.seal.assets import AssetResolver, ResolvedAssets, resolve_assets, safe_name
from anoint.seal.compositor import RenderMode, RenderOptions
from anoint.seal.imaging import png_bytes
from anoint.seal.layout import SealLayout, layout_to_dict
from anoint.seal.raster import render_raster
from anoint.seal.rasterize import DEFAULT_TIMEOUT, rasterize_svg
from anoint.seal.settings import RenderSettings
from anoint.seal.svg import render_svg

logger = logging.getLogger(__name__)

BACKENDS = ("raster", "svg")
MIN_EXPORT_SIZE = 600
MAX_EXPORT_SIZE = 2400
DEFAULT_EXPORT_SIZE = 1200
PREVIEW_SIZE = 1200


def clamp_output_size(size: int) -> int:
    """Limit export sizes to MIN_EXPORT_SIZE..MAX_EXPORT_SIZE."""
    clamped = max(MIN_EXPORT_SIZE, min(MAX_EXPORT_SIZE, int(size)))
    if clamped != size:
        logger.warning(f"Output size {size} clamped to {clamped}")
    return clamped


def collect_assets(layout: SealLayout, resolver: Optional[AssetResolver]) -> ResolvedAssets:
    """Batch-resolve the template and each distinct glyph of a layout."""
    if resolver is None:
        return ResolvedAssets()
    return resolve_assets(resolver, layout.central_design, layout.glyph_refs())


def build_svg(
    layout: SealLayout,
    settings: RenderSettings,
    output_size: int,
    resolver: Optional[AssetResolver] = None,
    mode: RenderMode = RenderMode.EXPORT,
    options: Optional[RenderOptions] = None,
) -> str:
    """SVG document for a seal, with images embedded."""
    assets = collect_assets(layout, resolver)
    return render_svg(layout, settings, output_size, assets, mode, options)


def export_seal(
    layout: SealLayout,
    settings: RenderSettings,
    output_size: int = DEFAULT_EXPORT_SIZE,
    backend: str = "raster",
    resolver: Optional[AssetResolver] = None,
    timeout: float = DEFAULT_TIMEOUT,
    rasterizer: Optional[Sequence[str]] = None,
) -> bytes:
    """Render a seal for download or print.

    Args:
        layout: Seal layout
        settings: Render settings (radii in canvas_base_size units)
        output_size: Square output edge, clamped to 600..2400
        backend: "raster" (Pillow) or "svg" (external rasterizer)
        resolver: Asset resolver; None renders without images
        timeout: External rasterizer timeout in seconds (svg backend)
        rasterizer: Rasterizer command prefix (svg backend)

    Returns:
        PNG bytes, transparent outside the gold ring

    Raises:
        ValueError: On an unknown backend
        RenderError: If the svg backend's rasterizer fails or times out
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend {backend!r}; expected one of {BACKENDS}")
    size = clamp_output_size(output_size)
    assets = collect_assets(layout, resolver)

    logger.info(f"Exporting seal '{layout.central_design}' at {size}px via {backend}")
    if backend == "svg":
        svg = render_svg(layout, settings, size, assets, RenderMode.EXPORT)
        return rasterize_svg(svg, size, timeout=timeout, command=rasterizer)

    image = render_raster(layout, settings, size, assets, RenderMode.EXPORT)
    return png_bytes(image)


def preview_seal(
    layout: SealLayout,
    settings: RenderSettings,
    resolver: Optional[AssetResolver] = None,
    debug_rings: Sequence[int] = (),
    tick_labels: bool = False,
) -> bytes:
    """Render the on-screen preview at the fixed working size.

    Opaque white background, ring-3 stroke, fallback shapes and any
    overlays enabled in settings, plus optional debug ticks.
    """
    assets = collect_assets(layout, resolver)
    options = RenderOptions(debug_rings=tuple(debug_rings), tick_labels=tick_labels)
    image = render_raster(layout, settings, PREVIEW_SIZE, assets, RenderMode.PREVIEW, options)
    return png_bytes(image.convert("RGB"))


def save_artifact(png: bytes, directory: Path, stem: str, layout: Optional[SealLayout] = None) -> Path:
    """Write PNG bytes as ``<directory>/<stem>.png`` and return the path.

    When ``layout`` is given and ``<stem>.json`` is not already in the
    directory, the layout is written there too so the PNG sits next to
    its seal JSON.
    """
    safe_name(stem)
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{stem}.png"
    path.write_bytes(png)
    seal_path = directory / f"{stem}.json"
    if layout is not None and not seal_path.exists():
        seal_path.write_text(json.dumps(layout_to_dict(layout), indent=2), encoding="utf-8")
        logger.info(f"Saved {seal_path}")
    logger.info(f"Saved {path} ({len(png)} bytes)")
    return path
