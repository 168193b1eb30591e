"""Seal compositing engine.

Exports are lazily loaded to avoid import conflicts when running
submodules directly with `python -m anoint.seal.<module>`.
"""

__all__ = [
    # colors.py
    "resolve_color",
    "contrasting_text_color",
    # directions.py
    "angle_for",
    "CLOCK_LABELS",
    # assets.py
    "AssetResolver",
    "resolve_assets",
    # layout.py
    "SealLayout",
    "InvalidLayoutError",
    "parse_layout",
    "load_layout",
    # settings.py
    "RenderSettings",
    "load_settings",
    # textfit.py
    "fit_text",
    # rasterize.py
    "RenderError",
    "RasterizerTimeout",
    # export.py
    "export_seal",
    "preview_seal",
]

_EXPORTS = {
    "resolve_color": "colors",
    "contrasting_text_color": "colors",
    "angle_for": "directions",
    "CLOCK_LABELS": "directions",
    "AssetResolver": "assets",
    "resolve_assets": "assets",
    "SealLayout": "layout",
    "InvalidLayoutError": "layout",
    "parse_layout": "layout",
    "load_layout": "layout",
    "RenderSettings": "settings",
    "load_settings": "settings",
    "fit_text": "textfit",
    "RenderError": "rasterize",
    "RasterizerTimeout": "rasterize",
    "export_seal": "export",
    "preview_seal": "export",
}


def __getattr__(name: str):
    """Lazy import for module exports."""
    if name in _EXPORTS:
        from importlib import import_module

        module = import_module(f"anoint.seal.{_EXPORTS[name]}")
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
