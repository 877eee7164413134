"""JSON export of the resolved token trees."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from figtokens.core.token_manager import TokenManager
from figtokens.core.tree import iter_leaves

from .base import GeneratorResult, ensure_loaded, write_output

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonExportGenerator:
    """Writes manager.to_dict() as one JSON document."""

    json_dir: Path
    json_file_name: str = "tokens.json"

    name = "json"

    def run(self, manager: TokenManager) -> GeneratorResult:
        ensure_loaded(manager, self.name)

        data = manager.to_dict()
        count = sum(1 for _ in iter_leaves(manager.get_variables()))
        count += sum(sum(1 for _ in iter_leaves(tree)) for tree in manager.get_styles().values())

        path = write_output(self.json_dir / self.json_file_name, json.dumps(data, indent=2))
        logger.info(f"[{self.name}] Exported {count} tokens to {path}")
        return GeneratorResult(self.name, [path], count)
