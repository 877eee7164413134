"""
Colors generator.

Writes every color token of the `color` style category and/or the
requested variable collections as `--cl-<name>` custom properties plus a
JSON map. Gradient values render as CSS gradient functions.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from figtokens.core.ir import GradientValue, StyleCategory, TokenType
from figtokens.core.token_manager import TokenManager

from .base import (
    GeneratorResult,
    TokenValue,
    build_css_content,
    build_css_variables,
    collect_groups,
    ensure_loaded,
    flatten_tokens,
    format_number,
    write_output,
)

logger = logging.getLogger(__name__)

PREFIX = "cl-"


def gradient_to_css(gradient: GradientValue) -> str | None:
    """Render a gradient value; unknown gradient types yield None."""
    stops = ", ".join(_format_stop(stop.color, stop.position) for stop in gradient.stops)
    angle = format_number(gradient.angle)

    match gradient.type:
        case "linear" | "diamond":
            return f"linear-gradient({angle}deg, {stops})"
        case "radial":
            return f"radial-gradient(circle, {stops})"
        case "conic":
            return f"conic-gradient(from {angle}deg, {stops})"
        case _:
            return None


def _format_stop(color: str, position: float) -> str:
    percent = round(position * 100, 1)
    if 0 < percent < 100:
        return f"{color} {format_number(percent)}%"
    return color


def color_to_css(value: Any) -> str | None:
    """Render a resolved color value (plain string or gradient mapping)."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        try:
            return gradient_to_css(GradientValue.model_validate(value))
        except ValidationError as e:
            logger.warning(f"Skipping malformed gradient value: {e}")
    return None


@dataclass(frozen=True)
class ColorsGenerator:
    """Color custom properties and JSON map."""

    json_dir: Path
    styles_dir: Path
    include_variables: list[str] = field(default_factory=list)
    include_styles: bool = True
    json_file_name: str = "colors.json"
    css_file_name: str = "colors.css"

    name = "colors"

    def collect(self, manager: TokenManager) -> dict[str, TokenValue]:
        groups = collect_groups(
            manager,
            self.name,
            category=StyleCategory.COLOR,
            include_styles=self.include_styles,
            include_variables=self.include_variables,
        )
        tokens: dict[str, TokenValue] = {}
        for group in groups:
            for name, value in flatten_tokens(group, color_to_css, token_type=TokenType.COLOR).items():
                tokens[PREFIX + name] = value
        return tokens

    def run(self, manager: TokenManager) -> GeneratorResult:
        ensure_loaded(manager, self.name)
        logger.info(f"[{self.name}] Generating colors from TokenManager...")

        tokens = self.collect(manager)
        if not tokens:
            logger.warning(f"[{self.name}] No color tokens generated")
            return GeneratorResult(self.name)

        css = build_css_content(build_css_variables(tokens))
        files = [
            write_output(self.json_dir / self.json_file_name, json.dumps(tokens, indent=2)),
            write_output(self.styles_dir / self.css_file_name, css),
        ]
        logger.info(f"[{self.name}] Generated {len(tokens)} color tokens")
        return GeneratorResult(self.name, files, len(tokens))
