"""Rasterize SVG documents with an external process.

The rasterizer runs as a child process (cairosvg's CLI by default) that
reads SVG on stdin and writes PNG on stdout. It is bounded by a timeout:
on expiry the child is killed and the call fails. No partial output is
ever returned.
"""

import logging
import subprocess
import sys
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_COMMAND = (sys.executable, "-m", "cairosvg")
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class RenderError(RuntimeError):
    """Seal could not be rendered to an image."""
    pass


class RasterizerTimeout(RenderError):
    """External rasterizer did not finish in time and was killed."""
    pass


def rasterizer_args(output_size: int) -> list[str]:
    """cairosvg CLI arguments: SVG on stdin, PNG on stdout at a square size."""
    return [
        "-",
        "--format", "png",
        "--output", "-",
        "--output-width", str(output_size),
        "--output-height", str(output_size),
    ]


def rasterize_svg(
    svg: str,
    output_size: int,
    timeout: float = DEFAULT_TIMEOUT,
    command: Optional[Sequence[str]] = None,
) -> bytes:
    """Convert an SVG document to PNG bytes.

    Args:
        svg: SVG document text
        output_size: Square output edge in pixels
        timeout: Seconds before the rasterizer is killed
        command: Rasterizer command prefix (default: python -m cairosvg)

    Returns:
        PNG bytes

    Raises:
        RasterizerTimeout: If the process exceeds the timeout
        RenderError: If the process fails or produces something other than PNG
    """
    cmd = list(command or DEFAULT_COMMAND) + rasterizer_args(output_size)
    logger.debug(f"Rasterizing {len(svg)} chars of SVG at {output_size}px: {cmd[0]}")

    try:
        # subprocess.run kills the child when the timeout expires
        proc = subprocess.run(
            cmd,
            input=svg.encode("utf-8"),
            capture_output=True,
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise RasterizerTimeout(
            f"SVG rasterizer timed out after {timeout:g}s at {output_size}px"
        ) from e
    except OSError as e:
        raise RenderError(f"Failed to run SVG rasterizer {cmd[0]!r}: {e}") from e

    if proc.returncode != 0:
        detail = proc.stderr.decode("utf-8", errors="replace").strip()
        if len(detail) > 240:
            detail = detail[:240] + "..."
        raise RenderError(
            f"SVG rasterizer exited with {proc.returncode}: {detail or 'unknown error'}"
        )

    if not proc.stdout.startswith(PNG_SIGNATURE):
        raise RenderError("SVG rasterizer did not produce a PNG")

    return proc.stdout
