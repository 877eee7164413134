"""
figtokens CLI package.

- app.py: typer application and command registration
- tokens.py: init, generate and inspect commands
- figma.py: Figma API commands
- utils.py: shared helpers
"""

from figtokens.cli.app import app, main
from figtokens.cli.utils import configure_logging, version_callback

__all__ = ["app", "main", "configure_logging", "version_callback"]
