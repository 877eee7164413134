"""
Shadows generator.

Effect styles and/or variable collections holding shadow tokens become
`--sh-<name>` custom properties. A shadow value is a list of layers, each
rendered as `offsetX offsetY blur spread color`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from figtokens.core.ir import ShadowLayer, StyleCategory, TokenType
from figtokens.core.token_manager import TokenManager

from .base import (
    GeneratorResult,
    TokenValue,
    build_css_content,
    build_css_variables,
    collect_groups,
    ensure_loaded,
    flatten_tokens,
    format_dimension,
    write_output,
)

logger = logging.getLogger(__name__)

PREFIX = "sh-"


def layer_to_css(layer: ShadowLayer) -> str:
    css = " ".join(
        format_dimension(part)
        for part in (layer.offset_x, layer.offset_y, layer.blur, layer.spread)
    )
    css = f"{css} {layer.color}"
    return f"inset {css}" if layer.inset else css


def shadow_to_css(value: Any) -> str | None:
    """Render a resolved shadow value (one layer or a list of layers)."""
    if isinstance(value, str):
        return value
    layers = value if isinstance(value, list) else [value]
    try:
        return ", ".join(layer_to_css(ShadowLayer.model_validate(layer)) for layer in layers)
    except ValidationError as e:
        logger.warning(f"Skipping malformed shadow value: {e}")
        return None


@dataclass(frozen=True)
class ShadowsGenerator:
    """Shadow custom properties and JSON map."""

    json_dir: Path
    styles_dir: Path
    include_variables: list[str] = field(default_factory=list)
    include_styles: bool = True
    json_file_name: str = "shadows.json"
    css_file_name: str = "shadows.css"

    name = "shadows"

    def collect(self, manager: TokenManager) -> dict[str, TokenValue]:
        groups = collect_groups(
            manager,
            self.name,
            category=StyleCategory.EFFECT,
            include_styles=self.include_styles,
            include_variables=self.include_variables,
        )
        tokens: dict[str, TokenValue] = {}
        for group in groups:
            for name, value in flatten_tokens(group, shadow_to_css, token_type=TokenType.SHADOW).items():
                tokens[PREFIX + name] = value
        return tokens

    def run(self, manager: TokenManager) -> GeneratorResult:
        ensure_loaded(manager, self.name)
        logger.info(f"[{self.name}] Generating shadows from TokenManager...")

        tokens = self.collect(manager)
        if not tokens:
            logger.warning(f"[{self.name}] No shadow tokens generated")
            return GeneratorResult(self.name)

        css = build_css_content(build_css_variables(tokens))
        files = [
            write_output(self.json_dir / self.json_file_name, json.dumps(tokens, indent=2)),
            write_output(self.styles_dir / self.css_file_name, css),
        ]
        logger.info(f"[{self.name}] Generated {len(tokens)} shadow tokens")
        return GeneratorResult(self.name, files, len(tokens))
