"""
Token IR package.

Re-exports the manifest and token models so callers can write
`from figtokens.core.ir import DesignToken, TokenManifest`.
"""

from .tokens import (
    CollectionSpec,
    DesignToken,
    GradientStop,
    GradientValue,
    GridLayout,
    ShadowLayer,
    StyleCategory,
    TokenManifest,
    TokenType,
)

__all__ = [
    "CollectionSpec",
    "DesignToken",
    "GradientStop",
    "GradientValue",
    "GridLayout",
    "ShadowLayer",
    "StyleCategory",
    "TokenManifest",
    "TokenType",
]
