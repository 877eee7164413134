"""
figtokens command line application.
"""

from __future__ import annotations

import typer

from figtokens.cli.figma import fetch_styles_command
from figtokens.cli.tokens import generate_command, init_command, inspect_command
from figtokens.cli.utils import version_callback

app = typer.Typer(
    help="figtokens - design tokens from Figma exports to CSS, SCSS and JSON.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """figtokens CLI main callback for global options."""
    pass


app.command(name="init")(init_command)
app.command(name="generate")(generate_command)
app.command(name="inspect")(inspect_command)
app.command(name="fetch-styles")(fetch_styles_command)


def main() -> None:
    app()
