"""Core figtokens functionality: manifest, token trees, normalization, resolution, token manager."""

from . import ir
from .errors import (
    ConfigError,
    ErrorContext,
    FigmaApiError,
    FigTokensError,
    GeneratorError,
    ManifestError,
    TokenFileError,
    TokensNotLoadedError,
)
from .manifest import load_manifest
from .normalize import normalize_identifier, normalize_key, to_camel_case
from .resolver import UNRESOLVED, ReferenceResolver, is_reference
from .styles import StyleTreeBuilder, StyleTrees
from .token_manager import ManagerState, TokenManager, TokenResolutionOptions
from .tree import ModalToken, TokenGroup, TokenLeaf, TokenNode, merge_nodes
from .variables import VariableTreeBuilder

__all__ = [
    "ir",
    "FigTokensError",
    "ManifestError",
    "TokenFileError",
    "TokensNotLoadedError",
    "GeneratorError",
    "ConfigError",
    "FigmaApiError",
    "ErrorContext",
    "load_manifest",
    "normalize_key",
    "normalize_identifier",
    "to_camel_case",
    "UNRESOLVED",
    "ReferenceResolver",
    "is_reference",
    "StyleTreeBuilder",
    "StyleTrees",
    "VariableTreeBuilder",
    "ManagerState",
    "TokenManager",
    "TokenResolutionOptions",
    "ModalToken",
    "TokenGroup",
    "TokenLeaf",
    "TokenNode",
    "merge_nodes",
]
