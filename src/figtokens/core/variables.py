"""
Variable tree builder.

Merges every file of every collection/mode listed in the manifest into one
tree keyed by collection name. Each token read from a mode file is tagged
with that mode, so a token defined in both the Light and the Dark file ends
up as a single ModalToken carrying both values.

Files are read concurrently but merged in manifest declaration order
(collection, then mode, then file), so the later declaration always wins.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from .ir import CollectionSpec
from .normalize import normalize_identifier
from .token_files import load_tree_or_empty
from .tree import TokenGroup, collapse_single_mode, merge_trees, tag_mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariableFile:
    """One unit of work: a file contributing to a collection in a mode."""

    collection: str
    mode: str
    file_name: str


class VariableTreeBuilder:
    """Builds the merged variable tree for all collections of a manifest."""

    def __init__(
        self,
        tokens_dir: Path,
        *,
        include_modes: Iterable[str] = (),
        collapse_single_mode: bool = True,
    ):
        self.tokens_dir = tokens_dir
        self.include_modes = frozenset(normalize_identifier(m) for m in include_modes)
        self.collapse_single_mode = collapse_single_mode

    def plan(self, collections: Mapping[str, CollectionSpec]) -> list[VariableFile]:
        """Flatten collections into the ordered list of files to merge."""
        work: list[VariableFile] = []
        for collection_name, collection in collections.items():
            collection_key = normalize_identifier(collection_name)
            for mode_name, file_names in collection.modes.items():
                mode_key = normalize_identifier(mode_name)
                if self.include_modes and mode_key not in self.include_modes:
                    logger.debug(f"Skipping mode '{mode_name}' of collection '{collection_name}'")
                    continue
                work.extend(VariableFile(collection_key, mode_key, name) for name in file_names)
        return work

    async def build(self, collections: Mapping[str, CollectionSpec]) -> TokenGroup:
        """Load, tag, merge and (optionally) collapse all variable files."""
        work = self.plan(collections)
        contributions = await asyncio.gather(*(self._load(item) for item in work))

        merged = merge_trees(list(contributions))
        if self.collapse_single_mode:
            merged = collapse_single_mode(merged)

        logger.debug(f"Built variable tree from {len(work)} files: {list(merged)}")
        return merged

    async def _load(self, item: VariableFile) -> TokenGroup:
        tree = await load_tree_or_empty(self.tokens_dir / item.file_name)
        if not tree.children:
            return TokenGroup({item.collection: TokenGroup()})
        return TokenGroup({item.collection: tag_mode(tree, item.mode)})
