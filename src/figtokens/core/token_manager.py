"""
Token manager.

Orchestrates manifest loading, the variable and style tree builders and
reference resolution, then exposes the resolved trees read-only:

    manager = TokenManager(Path("tokens"))
    await manager.load()
    manager.get_token("colors.primary")
    manager.get_token("styles.color.brand")

Every query raises TokensNotLoadedError until load() has completed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from .errors import TokensNotLoadedError
from .ir import StyleCategory, TokenManifest
from .manifest import load_manifest
from .normalize import normalize_identifier, normalize_key
from .resolver import UNRESOLVED, ReferenceResolver
from .styles import StyleTreeBuilder, StyleTrees
from .tree import TokenGroup, TokenNode, collapse_single_mode
from .variables import VariableTreeBuilder

logger = logging.getLogger(__name__)

STYLES_PREFIX = "styles"


class ManagerState(StrEnum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True)
class TokenResolutionOptions:
    """
    Knobs for building the variable tree.

    Attributes:
        default_mode: Mode used when a referenced token lacks the current mode
        include_modes: Only these modes are loaded (all modes when empty)
        collapse_single_mode: Store single-mode tokens as plain leaves
    """

    default_mode: str | None = "Mode 1"
    include_modes: tuple[str, ...] = ()
    collapse_single_mode: bool = True


class TokenManager:
    """Loads a tokens directory and answers queries over the resolved trees."""

    def __init__(self, tokens_dir: Path, *, options: TokenResolutionOptions | None = None):
        self.tokens_dir = Path(tokens_dir)
        self.options = options or TokenResolutionOptions()
        self._state = ManagerState.UNLOADED
        self._manifest: TokenManifest | None = None
        self._raw_variables = TokenGroup()
        self._variables = TokenGroup()
        self._styles: StyleTrees = {}
        self._resolver: ReferenceResolver | None = None

    @property
    def state(self) -> ManagerState:
        return self._state

    @property
    def manifest(self) -> TokenManifest:
        self._ensure_loaded()
        assert self._manifest is not None
        return self._manifest

    def is_loaded(self) -> bool:
        return self._state is ManagerState.LOADED

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def load(self) -> None:
        """
        Load, merge and resolve every file listed in the manifest.

        Calling load() on a loaded manager is a no-op.

        Raises:
            ManifestError: If manifest.json is missing or invalid
        """
        if self._state is ManagerState.LOADED:
            return

        self._state = ManagerState.LOADING
        try:
            manifest = await asyncio.to_thread(load_manifest, self.tokens_dir)

            # Resolve before collapsing: a single-mode token resolves in its own mode.
            variable_builder = VariableTreeBuilder(
                self.tokens_dir,
                include_modes=self.options.include_modes,
                collapse_single_mode=False,
            )
            style_builder = StyleTreeBuilder(self.tokens_dir)
            raw_variables, raw_styles = await asyncio.gather(
                variable_builder.build(manifest.collections),
                style_builder.build(manifest.styles),
            )

            resolver = ReferenceResolver(raw_variables, default_mode=self.options.default_mode)
            variables = resolver.resolve_tree(raw_variables)
            styles = resolver.resolve_styles(raw_styles)
            if self.options.collapse_single_mode:
                raw_variables = collapse_single_mode(raw_variables)
                variables = collapse_single_mode(variables)
        except BaseException:
            self._state = ManagerState.UNLOADED
            raise

        self._manifest = manifest
        self._raw_variables = raw_variables
        self._variables = variables
        self._styles = styles
        self._resolver = resolver
        self._state = ManagerState.LOADED
        logger.info(
            f"Loaded tokens from {self.tokens_dir}: "
            f"{len(variables)} collections, {len(styles)} style categories"
        )

    def _ensure_loaded(self) -> None:
        if self._state is not ManagerState.LOADED:
            raise TokensNotLoadedError()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_variables(self) -> TokenGroup:
        """Resolved variable tree, keyed by collection."""
        self._ensure_loaded()
        return self._variables

    def get_raw_variables(self) -> TokenGroup:
        """Variable tree before reference resolution."""
        self._ensure_loaded()
        return self._raw_variables

    def get_styles(self) -> StyleTrees:
        """Resolved style trees, keyed by category."""
        self._ensure_loaded()
        return dict(self._styles)

    def get_text_styles(self) -> TokenGroup | None:
        return self._get_style(StyleCategory.TEXT)

    def get_effect_styles(self) -> TokenGroup | None:
        return self._get_style(StyleCategory.EFFECT)

    def get_color_styles(self) -> TokenGroup | None:
        return self._get_style(StyleCategory.COLOR)

    def get_grid_styles(self) -> TokenGroup | None:
        return self._get_style(StyleCategory.GRID)

    def _get_style(self, category: StyleCategory) -> TokenGroup | None:
        self._ensure_loaded()
        return self._styles.get(category)

    def get_subgroup(self, key: str) -> TokenNode | None:
        """Top-level collection group by raw or normalized name."""
        self._ensure_loaded()
        node = self._variables.get(key)
        if node is None:
            node = self._variables.get(normalize_identifier(key))
        return node

    def get_variable(self, subgroup: str, key: str) -> TokenNode | None:
        """One child of a collection; key is tried normalized, then raw."""
        group = self.get_subgroup(subgroup)
        if not isinstance(group, TokenGroup):
            return None
        node = group.get(normalize_key(key))
        if node is None:
            node = group.get(key)
        return node

    def get_token(self, path: str) -> TokenNode | None:
        """
        Look up a node by dotted path.

        "colors.primary" addresses the variables; "styles.color.brand"
        addresses the style trees. Missing paths return None.
        """
        self._ensure_loaded()
        segments = path.strip().split(".")
        if not all(segments):
            return None

        if segments[0] == STYLES_PREFIX and len(segments) > 1:
            try:
                category = StyleCategory(segments[1])
            except ValueError:
                category = None
            if category is not None:
                tree = self._styles.get(category)
                return tree.find(segments[2:]) if tree is not None else None

        node = self._variables.find(segments)
        if node is None:
            first = normalize_identifier(segments[0])
            if first != segments[0]:
                node = self._variables.find([first, *segments[1:]])
        return node

    def resolve(self, value: Any, mode: str | None = None) -> Any:
        """Resolve references inside an arbitrary value; None when unresolvable."""
        self._ensure_loaded()
        assert self._resolver is not None
        resolved = self._resolver.resolve_value(
            value, normalize_identifier(mode) if mode else None
        )
        if resolved is UNRESOLVED:
            return None
        return resolved

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible export of the resolved trees."""
        self._ensure_loaded()
        return {
            "variables": self._variables.to_dict(),
            "styles": {category.value: tree.to_dict() for category, tree in self._styles.items()},
        }
