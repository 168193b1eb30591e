"""Asset store lookups for central templates and glyph images.

Each asset is probed through an ordered list of candidate locations and
the first existing file wins. Missing assets are never an error here;
callers degrade the single layer that needed the image.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

# Candidate locations relative to the asset root, in priority order.
# "{name}" is the centralDesign identifier.
TEMPLATE_CANDIDATES = (
    "data/ai-resources/templates/{name}.png",
    "public/templates/{name}-template.png",
    "app/public/templates/{name}-template.png",
)

GLYPH_DIRS = (
    "public/glyphs",
    "app/public/glyphs",
    "data/ai-resources/glyphs",
    "uploads/glyphs",
)

MEDIA_TYPES = {
    ".svg": "image/svg+xml",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}

DEFAULT_WORKERS = 4


class AssetPathError(ValueError):
    """A requested asset name tries to escape its directory."""
    pass


@dataclass(frozen=True)
class ResolvedAsset:
    """Bytes of a located asset plus where they came from."""

    name: str
    path: Path
    data: bytes
    media_type: str


@dataclass
class ResolvedAssets:
    """Everything a layout references, resolved once before drawing."""

    template: Optional[ResolvedAsset] = None
    glyphs: dict[str, Optional[ResolvedAsset]] = field(default_factory=dict)

    def glyph(self, filename: str) -> Optional[ResolvedAsset]:
        return self.glyphs.get(filename)


def media_type_for(path: Path) -> str:
    return MEDIA_TYPES.get(path.suffix.lower(), "image/png")


def safe_name(name: str) -> str:
    """Validate a bare filename-like identifier.

    Raises:
        AssetPathError: If the name is empty, absolute or has path parts
    """
    if not name or not name.strip():
        raise AssetPathError("Asset name is empty")
    if "/" in name or "\\" in name or name in (".", "..") or "\x00" in name:
        raise AssetPathError(f"Invalid asset name: {name!r}")
    return name


class AssetResolver:
    """Resolve template and glyph names against an asset root directory."""

    def __init__(
        self,
        root: Path,
        template_candidates: Iterable[str] = TEMPLATE_CANDIDATES,
        glyph_dirs: Iterable[str] = GLYPH_DIRS,
    ):
        """Initialize resolver.

        Args:
            root: Asset store root (the application's working directory)
            template_candidates: Path patterns for templates, in priority order
            glyph_dirs: Glyph directories, in priority order
        """
        self.root = Path(root)
        self.template_candidates = tuple(template_candidates)
        self.glyph_dirs = tuple(glyph_dirs)

    def template_paths(self, name: str) -> list[Path]:
        return [self.root / pattern.format(name=name) for pattern in self.template_candidates]

    def glyph_paths(self, filename: str) -> list[Path]:
        return [self.root / directory / filename for directory in self.glyph_dirs]

    def _first_existing(self, name: str, candidates: list[Path]) -> Optional[ResolvedAsset]:
        # Sequential on purpose: first match in priority order wins.
        for path in candidates:
            if path.is_file():
                logger.debug(f"Resolved {name} -> {path}")
                return ResolvedAsset(
                    name=name,
                    path=path,
                    data=path.read_bytes(),
                    media_type=media_type_for(path),
                )
        return None

    def resolve_template(self, name: str) -> Optional[ResolvedAsset]:
        """Locate the central template image for a design name.

        Returns:
            The resolved asset, or None if no candidate exists
        """
        try:
            safe_name(name)
        except AssetPathError as e:
            logger.warning(f"Template not resolvable: {e}")
            return None
        asset = self._first_existing(name, self.template_paths(name))
        if asset is None:
            logger.warning(f"Template not found: {name}")
        return asset

    def resolve_glyph(self, filename: str) -> Optional[ResolvedAsset]:
        """Locate a glyph image by exact filename.

        Returns:
            The resolved asset, or None if no candidate exists
        """
        try:
            safe_name(filename)
        except AssetPathError as e:
            logger.warning(f"Glyph not resolvable: {e}")
            return None
        asset = self._first_existing(filename, self.glyph_paths(filename))
        if asset is None:
            logger.warning(f"Glyph not found: {filename}")
        return asset


def resolve_assets(
    resolver: AssetResolver,
    template_name: str,
    glyph_names: Iterable[str],
    max_workers: int = DEFAULT_WORKERS,
) -> ResolvedAssets:
    """Resolve a template and every distinct glyph up front.

    Distinct glyphs are looked up in parallel; each name is looked up
    exactly once no matter how many tokens share it.

    Args:
        resolver: Asset resolver to probe with
        template_name: centralDesign identifier
        glyph_names: Glyph filenames, duplicates allowed
        max_workers: Thread pool size for glyph lookups

    Returns:
        ResolvedAssets keyed by glyph filename
    """
    distinct = list(dict.fromkeys(glyph_names))
    template = resolver.resolve_template(template_name)

    if not distinct:
        return ResolvedAssets(template=template)

    workers = max(1, min(max_workers, len(distinct)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(resolver.resolve_glyph, distinct))

    glyphs = dict(zip(distinct, results))
    found = sum(1 for asset in results if asset is not None)
    logger.info(f"Resolved {found}/{len(distinct)} glyphs, template={'yes' if template else 'no'}")
    return ResolvedAssets(template=template, glyphs=glyphs)
