"""
Token CLI commands.

Commands:
- init: Create a starter figtokens.toml
- generate: Load tokens and run every configured output
- inspect: Print one resolved token as JSON
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console

from figtokens.cli.utils import configure_logging, resolve_config
from figtokens.config import CONFIG_FILE, STARTER_CONFIG, ProjectConfig
from figtokens.core.errors import FigTokensError, ManifestError
from figtokens.core.token_manager import TokenManager

console = Console()


def _load_manager(config: ProjectConfig) -> TokenManager:
    manager = TokenManager(config.tokens_dir, options=config.tokens.resolution_options())
    try:
        asyncio.run(manager.load())
    except ManifestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    return manager


def init_command(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite existing figtokens.toml"),
) -> None:
    """Create a starter figtokens.toml."""
    project_dir = project_dir.resolve()
    config_path = project_dir / CONFIG_FILE

    if config_path.exists() and not overwrite:
        typer.echo(f"{CONFIG_FILE} already exists. Use --overwrite to replace.")
        raise typer.Exit(code=1)

    project_dir.mkdir(parents=True, exist_ok=True)
    config_path.write_text(STARTER_CONFIG.format(name=project_dir.name), encoding="utf-8")
    typer.echo(f"Created {config_path}")
    typer.echo("Edit figtokens.toml then run: figtokens generate")


def generate_command(
    config_path: Path = typer.Option(Path(CONFIG_FILE), "--config", "-c", help="Path to figtokens.toml"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Load tokens and run every configured output."""
    from figtokens.generators import build_generator

    configure_logging(verbose)
    config = resolve_config(config_path)

    if not config.outputs:
        typer.echo("No [[outputs]] configured in figtokens.toml", err=True)
        raise typer.Exit(code=1)

    manager = _load_manager(config)

    failures = 0
    for output in config.outputs:
        try:
            result = build_generator(output, config).run(manager)
        except FigTokensError as e:
            failures += 1
            console.print(f"[red]✗ {output.kind}:[/red] {e}")
            continue

        if result.files:
            console.print(f"[green]✓ {result.name}:[/green] {result.token_count} tokens")
            for path in result.files:
                console.print(f"    {path}")
        else:
            console.print(f"[yellow]- {result.name}:[/yellow] nothing to write")

    if failures:
        typer.echo(f"{failures} output(s) failed", err=True)
        raise typer.Exit(code=1)


def inspect_command(
    path: str = typer.Argument(..., help="Dotted token path, e.g. colors.primary or styles.color.brand"),
    config_path: Path = typer.Option(Path(CONFIG_FILE), "--config", "-c", help="Path to figtokens.toml"),
) -> None:
    """Print one resolved token (or group) as JSON."""
    configure_logging()
    config = resolve_config(config_path)
    manager = _load_manager(config)

    node = manager.get_token(path)
    if node is None:
        typer.echo(f"Token not found: {path}", err=True)
        raise typer.Exit(code=1)

    console.print_json(json.dumps(node.to_dict()))
