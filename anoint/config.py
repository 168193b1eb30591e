"""Runtime configuration from environment variables.

A ``.env`` file in the working directory is loaded first when present.

Variables:
    ANOINT_ASSET_ROOT: Asset store root (default: current directory)
    ANOINT_SETTINGS_PATH: Settings artifact (default: <root>/generator-data/generator-config.json)
    ANOINT_SEALS_DIR: Generated seals (default: <root>/data/generated-seals)
    ANOINT_RASTER_TIMEOUT: External rasterizer timeout in seconds (default: 30)
    ANOINT_SVG_RASTERIZER: Rasterizer command line (default: python -m cairosvg)
"""

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from anoint.seal.rasterize import DEFAULT_COMMAND, DEFAULT_TIMEOUT

SETTINGS_RELPATH = Path("generator-data") / "generator-config.json"
SEALS_RELPATH = Path("data") / "generated-seals"


class ConfigError(ValueError):
    """Environment configuration is invalid."""
    pass


@dataclass(frozen=True)
class RuntimeConfig:
    asset_root: Path
    settings_path: Path
    seals_dir: Path
    raster_timeout: float = DEFAULT_TIMEOUT
    rasterizer_command: tuple[str, ...] = DEFAULT_COMMAND


def load_config(env_file: Optional[Path] = None) -> RuntimeConfig:
    """Build RuntimeConfig from the environment.

    Args:
        env_file: .env file to load (default: ./.env if it exists)

    Raises:
        ConfigError: If ANOINT_RASTER_TIMEOUT is not a positive number
    """
    env_path = Path(env_file) if env_file else Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    root = Path(os.environ.get("ANOINT_ASSET_ROOT") or Path.cwd())
    settings_path = Path(os.environ.get("ANOINT_SETTINGS_PATH") or root / SETTINGS_RELPATH)
    seals_dir = Path(os.environ.get("ANOINT_SEALS_DIR") or root / SEALS_RELPATH)

    raw_timeout = os.environ.get("ANOINT_RASTER_TIMEOUT")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigError(f"ANOINT_RASTER_TIMEOUT must be a number, got {raw_timeout!r}") from e
        if timeout <= 0:
            raise ConfigError(f"ANOINT_RASTER_TIMEOUT must be positive, got {raw_timeout!r}")

    raw_command = os.environ.get("ANOINT_SVG_RASTERIZER")
    command = tuple(shlex.split(raw_command)) if raw_command else DEFAULT_COMMAND

    return RuntimeConfig(
        asset_root=root,
        settings_path=settings_path,
        seals_dir=seals_dir,
        raster_timeout=timeout,
        rasterizer_command=command,
    )
