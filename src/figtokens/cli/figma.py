"""
Figma CLI commands.

Commands:
- fetch-styles: Download the styles listing of the configured Figma file
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import typer

from figtokens.cli.utils import configure_logging, resolve_config
from figtokens.config import CONFIG_FILE, FigmaConfig
from figtokens.core.errors import ConfigError, FigmaApiError


async def _fetch_styles(figma: FigmaConfig, token: str) -> dict[str, Any]:
    from figtokens.figma import FigmaApi

    async with FigmaApi(token, figma.file_id, base_url=figma.base_url) as api:
        return await api.get_styles()


def fetch_styles_command(
    output: Path = typer.Option(..., "--output", "-o", help="File to write the JSON response to"),
    config_path: Path = typer.Option(Path(CONFIG_FILE), "--config", "-c", help="Path to figtokens.toml"),
) -> None:
    """Fetch the styles of the configured Figma file."""
    configure_logging()
    config = resolve_config(config_path)

    if not config.figma.file_id:
        typer.echo("Error: [figma] file_id is not set in figtokens.toml", err=True)
        raise typer.Exit(code=1)

    try:
        token = config.figma.api_token()
        styles = asyncio.run(_fetch_styles(config.figma, token))
    except (ConfigError, FigmaApiError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(styles, indent=2), encoding="utf-8")
    typer.echo(f"Wrote {output}")
