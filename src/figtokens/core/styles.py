"""
Style tree builder.

Style categories (text, effect, color, grid) are flat, mode-less token
files. Each category's files are merged into one tree; categories never
mix.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path

from .ir import StyleCategory
from .token_files import load_tree_or_empty
from .tree import TokenGroup, merge_trees

logger = logging.getLogger(__name__)

StyleTrees = dict[StyleCategory, TokenGroup]


class StyleTreeBuilder:
    """Builds one TokenGroup per declared style category."""

    def __init__(self, tokens_dir: Path):
        self.tokens_dir = tokens_dir

    async def build(self, styles: Mapping[StyleCategory, list[str]]) -> StyleTrees:
        work = [
            (category, file_name)
            for category, file_names in styles.items()
            for file_name in file_names
        ]
        trees = await asyncio.gather(
            *(load_tree_or_empty(self.tokens_dir / file_name) for _, file_name in work)
        )

        per_category: dict[StyleCategory, list[TokenGroup]] = {category: [] for category in styles}
        for (category, _), tree in zip(work, trees, strict=True):
            per_category[category].append(tree)

        result = {category: merge_trees(parts) for category, parts in per_category.items()}
        logger.debug(f"Built style trees: {[c.value for c in result]}")
        return result
