"""
Shared CLI helpers.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

import typer

from figtokens._version import get_version
from figtokens.config import ProjectConfig, load_config
from figtokens.core.errors import ConfigError

LOG_LEVEL_ENV = "FIGTOKENS_LOG_LEVEL"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"figtokens {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger from --verbose or FIGTOKENS_LOG_LEVEL."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def resolve_config(config_path: Path) -> ProjectConfig:
    """Load figtokens.toml or exit with code 1."""
    try:
        return load_config(config_path.resolve())
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        typer.echo("Run 'figtokens init' to create figtokens.toml", err=True)
        raise typer.Exit(code=1)
