"""Allow running the ANOINT CLI as ``python -m anoint``."""

from anoint.cli import cli

if __name__ == "__main__":
    cli()
