#!/usr/bin/env python3
"""ANOINT CLI - sacred seal compositing engine."""

import logging
from pathlib import Path

import click
import yaml

from anoint import __version__
from anoint.config import ConfigError, load_config
from anoint.seal.assets import AssetPathError, AssetResolver
from anoint.seal.directions import CLOCK_LABELS, DIRECTION_ANGLES, clockwise_from_top
from anoint.seal.export import (
    BACKENDS,
    DEFAULT_EXPORT_SIZE,
    build_svg,
    clamp_output_size,
    export_seal,
    preview_seal,
    save_artifact,
)
from anoint.seal.layout import InvalidLayoutError, load_layout, load_seal_by_filename
from anoint.seal.rasterize import RenderError
from anoint.seal.settings import SettingsError, load_settings, settings_to_dict
from anoint.seal.textfit import fit_text


def seal_source(func):
    """Shared --seal / --filename / --settings options."""
    func = click.option("--settings", "settings_path", type=click.Path(dir_okay=False, path_type=Path),
                        help="Settings artifact (default: ANOINT_SETTINGS_PATH)")(func)
    func = click.option("--filename", help="Seal JSON inside the generated-seals directory")(func)
    func = click.option("--seal", "seal_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                        help="Path to a seal layout JSON file")(func)
    return func


def _load_inputs(ctx, seal_path, filename, settings_path):
    """Return (layout, settings, resolver, stem) or fail with a ClickException."""
    config = ctx.obj["config"]
    if bool(seal_path) == bool(filename):
        raise click.UsageError("Pass exactly one of --seal or --filename")
    try:
        if seal_path:
            layout = load_layout(seal_path)
            stem = seal_path.stem
        else:
            layout = load_seal_by_filename(config.seals_dir, filename)
            stem = Path(filename).stem
        settings = load_settings(settings_path or config.settings_path)
    except (InvalidLayoutError, SettingsError, AssetPathError, FileNotFoundError) as e:
        raise click.ClickException(str(e))
    return layout, settings, AssetResolver(config.asset_root), stem


def _write(data: bytes, out_path, default_name: str):
    path = Path(out_path) if out_path else Path(default_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    click.echo(f"Wrote {path} ({len(data)} bytes)")


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, verbose):
    """ANOINT - sacred seal compositing engine.

    Render seal previews and print-ready exports from seal layout JSON.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        ctx.obj = {"config": load_config()}
    except ConfigError as e:
        raise click.ClickException(str(e))


@cli.command()
@seal_source
@click.option("--out", "out_path", type=click.Path(dir_okay=False), help="Output PNG path")
@click.option("--size", type=int, default=DEFAULT_EXPORT_SIZE, show_default=True, help="Square output size (600-2400)")
@click.option("--backend", type=click.Choice(BACKENDS), default="raster", show_default=True)
@click.option("--save", is_flag=True, help="Also save <stem>.png in the generated-seals directory")
@click.pass_context
def export(ctx, seal_path, filename, settings_path, out_path, size, backend, save):
    """Export a seal as PNG (transparent outside the gold ring)."""
    config = ctx.obj["config"]
    layout, settings, resolver, stem = _load_inputs(ctx, seal_path, filename, settings_path)
    try:
        png = export_seal(
            layout,
            settings,
            size,
            backend=backend,
            resolver=resolver,
            timeout=config.raster_timeout,
            rasterizer=config.rasterizer_command,
        )
    except RenderError as e:
        raise click.ClickException(f"Export failed: {e}")

    _write(png, out_path, f"{stem}-{clamp_output_size(size)}.png")
    if save:
        path = save_artifact(png, config.seals_dir, stem, layout)
        click.echo(f"Saved artifact {path}")


@cli.command()
@seal_source
@click.option("--out", "out_path", type=click.Path(dir_okay=False), help="Output PNG path")
@click.option("--ticks", default="", help="Rings to mark with debug ticks, e.g. 1,2,3")
@click.option("--tick-labels", is_flag=True, help="Label debug ticks with their clock position")
@click.pass_context
def preview(ctx, seal_path, filename, settings_path, out_path, ticks, tick_labels):
    """Render the 1200px on-screen preview."""
    layout, settings, resolver, stem = _load_inputs(ctx, seal_path, filename, settings_path)
    try:
        rings = tuple(int(r) for r in ticks.split(",") if r.strip())
    except ValueError:
        raise click.BadParameter("--ticks must be a comma-separated list of 1, 2, 3")
    if any(r not in (1, 2, 3) for r in rings):
        raise click.BadParameter("--ticks must be a comma-separated list of 1, 2, 3")

    png = preview_seal(layout, settings, resolver, debug_rings=rings, tick_labels=tick_labels)
    _write(png, out_path, f"{stem}-preview.png")


@cli.command()
@seal_source
@click.option("--out", "out_path", type=click.Path(dir_okay=False), help="Output SVG path")
@click.option("--size", type=int, default=DEFAULT_EXPORT_SIZE, show_default=True)
@click.pass_context
def svg(ctx, seal_path, filename, settings_path, out_path, size):
    """Write the high-fidelity SVG document without rasterizing it."""
    layout, settings, resolver, stem = _load_inputs(ctx, seal_path, filename, settings_path)
    document = build_svg(layout, settings, clamp_output_size(size), resolver)
    _write(document.encode("utf-8"), out_path, f"{stem}.svg")


@cli.command("fit-text")
@click.argument("phrase", default="")
@click.option("--radius", type=float, default=520.0, show_default=True, help="Ring radius in pixels")
def fit_text_command(phrase, radius):
    """Show how an affirmation is fitted around the outer ring."""
    fitted = fit_text(phrase, radius)
    click.echo(f"Phrase:      {fitted.phrase}")
    click.echo(f"Repetitions: {fitted.repetitions}")
    click.echo(f"Font size:   {fitted.font_size}")
    click.echo(f"Text:        {fitted.text}")


@cli.command("settings")
@click.option("--settings", "settings_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Settings artifact (default: ANOINT_SETTINGS_PATH)")
@click.pass_context
def settings_command(ctx, settings_path):
    """Print the effective render settings as YAML."""
    try:
        settings = load_settings(settings_path or ctx.obj["config"].settings_path)
    except SettingsError as e:
        raise click.ClickException(str(e))
    click.echo(yaml.safe_dump(settings_to_dict(settings), sort_keys=False), nl=False)


@cli.command()
def angles():
    """Print the clock-position table."""
    for label in CLOCK_LABELS:
        click.echo(f"{label:>5}  canvas {DIRECTION_ANGLES[label]:>4}  clockwise {clockwise_from_top(label):>3}")


if __name__ == "__main__":
    cli()
