"""Geometric render settings shared by both backends.

Settings live in a small JSON (or YAML) artifact, usually
``generator-data/generator-config.json``::

    {"settings": {"centerX": 0, "centerY": 0, "centralRadius": 80,
                  "innerRadius": 140, "middleRadius": 200,
                  "outerRadius": 260, "canvasSize": 600}}

All radii are in units of ``canvasSize``; renderers scale them to the
requested output size.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Artifact key -> (dataclass field, default)
SETTING_KEYS = {
    "centerX": ("center_x", 0),
    "centerY": ("center_y", 0),
    "centralRadius": ("central_radius", 80),
    "innerRadius": ("ring1_radius", 140),
    "middleRadius": ("ring2_radius", 200),
    "outerRadius": ("ring3_radius", 260),
    "canvasSize": ("canvas_base_size", 600),
}

FLAG_KEYS = {
    "showGrid": ("show_grid", False),
    "showWatermark": ("show_watermark", False),
}

POSITIVE_FIELDS = {
    "central_radius",
    "ring1_radius",
    "ring2_radius",
    "ring3_radius",
    "canvas_base_size",
}

# Radii must grow outward in this order
RING_ORDER = ("centralRadius", "innerRadius", "middleRadius", "outerRadius")


class SettingsError(ValueError):
    """Settings artifact is unreadable or holds invalid values."""
    pass


@dataclass(frozen=True)
class RenderSettings:
    """Read-only geometry configuration for one render."""

    center_x: float = 0
    center_y: float = 0
    central_radius: float = 80
    ring1_radius: float = 140
    ring2_radius: float = 200
    ring3_radius: float = 260
    canvas_base_size: float = 600
    show_grid: bool = False
    show_watermark: bool = False

    def scale_for(self, output_size: int) -> float:
        """Radius scale factor for an output resolution."""
        return output_size / self.canvas_base_size


def settings_from_dict(data: Optional[dict]) -> RenderSettings:
    """Build RenderSettings from an artifact mapping.

    Accepts either the full artifact (with a ``settings`` key) or the
    inner mapping. Missing keys take their defaults.

    Raises:
        SettingsError: On non-numeric or non-positive values, or radii
            that do not increase from the center outward
    """
    if not data:
        return RenderSettings()
    if not isinstance(data, dict):
        raise SettingsError(f"Settings must be a mapping, got {type(data).__name__}")
    values: dict[str, Any] = data.get("settings", data)
    if not isinstance(values, dict):
        raise SettingsError("'settings' must be a mapping")

    kwargs: dict[str, Any] = {}
    for key, (name, default) in SETTING_KEYS.items():
        raw = values.get(key, default)
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise SettingsError(f"{key} must be a number, got {raw!r}")
        if name in POSITIVE_FIELDS and raw <= 0:
            raise SettingsError(f"{key} must be positive, got {raw!r}")
        kwargs[name] = raw
    radii = [kwargs[SETTING_KEYS[key][0]] for key in RING_ORDER]
    for i in range(len(RING_ORDER) - 1):
        if radii[i] >= radii[i + 1]:
            raise SettingsError(
                f"{RING_ORDER[i]} ({radii[i]}) must be smaller than "
                f"{RING_ORDER[i + 1]} ({radii[i + 1]})"
            )
    for key, (name, default) in FLAG_KEYS.items():
        kwargs[name] = bool(values.get(key, default))

    return RenderSettings(**kwargs)


def settings_to_dict(settings: RenderSettings) -> dict:
    """Artifact form of settings (inverse of settings_from_dict)."""
    out = {key: getattr(settings, name) for key, (name, _) in SETTING_KEYS.items()}
    out.update({key: getattr(settings, name) for key, (name, _) in FLAG_KEYS.items()})
    return {"settings": out}


def load_settings(path: Optional[Path] = None) -> RenderSettings:
    """Load settings from a JSON or YAML artifact.

    Args:
        path: Settings file; None or a missing file yields defaults

    Returns:
        RenderSettings
    """
    if path is None:
        return RenderSettings()
    path = Path(path)
    if not path.exists():
        logger.info(f"No settings at {path}, using defaults")
        return RenderSettings()

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yml", ".yaml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SettingsError(f"Cannot parse settings {path}: {e}") from e

    settings = settings_from_dict(data)
    logger.debug(f"Loaded settings from {path}: {settings}")
    return settings
