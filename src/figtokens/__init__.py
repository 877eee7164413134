"""
figtokens - design tokens from Figma exports to CSS, SCSS and JSON.

Loads a tokens directory (manifest.json plus per-mode variable files and
style files), merges and resolves it, and renders stylesheet artifacts.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import FigTokensError, ManifestError, TokensNotLoadedError
from .core.token_manager import TokenManager, TokenResolutionOptions

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "FigTokensError",
    "ManifestError",
    "TokensNotLoadedError",
    "TokenManager",
    "TokenResolutionOptions",
]
