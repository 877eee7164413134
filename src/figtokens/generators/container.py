"""
Container generator.

Derives responsive `.container` rules from column layout grids. A grid
aligned to the center gives a fixed-width, auto-margin container; a
stretched grid gives a full-width container padded by the grid offset.
Rules are emitted widest breakpoint first, narrower ones wrapped in
`@media (max-width: <breakpoint - 1>px)`, all inside one `@layer`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from figtokens.core.ir import GridLayout
from figtokens.core.token_manager import TokenManager
from figtokens.core.tree import ModalToken, TokenGroup, TokenLeaf

from .base import GeneratorResult, ensure_loaded, format_css_block, format_dimension, indent, write_output
from .breakpoints import require_grid_styles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerRule:
    """Container geometry at one breakpoint."""

    breakpoint: int
    alignment: str
    margin: str
    width: int | None = None

    def same_geometry(self, other: ContainerRule) -> bool:
        return (self.alignment, self.margin, self.width) == (other.alignment, other.margin, other.width)


def _grid_layouts(node: Any) -> list[GridLayout]:
    if isinstance(node, TokenLeaf):
        value = node.token.value
    elif isinstance(node, ModalToken) and len(node.modes) == 1:
        value = next(iter(node.modes.values())).value
    else:
        return []

    if not isinstance(value, list):
        return []

    layouts: list[GridLayout] = []
    for item in value:
        try:
            layouts.append(GridLayout.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed grid layout: {e}")
    return layouts


def extract_container_rules(grid: TokenGroup, manager: TokenManager, width: int) -> list[ContainerRule]:
    """Container rules sorted widest first, consecutive repeats removed."""
    rules: list[ContainerRule] = []

    for key, node in grid.items():
        try:
            breakpoint = int(float(key))
        except ValueError:
            logger.debug(f"Skipping non-numeric grid key '{key}'")
            continue

        for layout in _grid_layouts(node):
            if layout.pattern != "columns":
                continue
            if layout.alignment == "center":
                rules.append(ContainerRule(breakpoint, "center", "auto", width))
            elif layout.alignment == "stretch":
                margin = manager.resolve(layout.offset) if layout.offset is not None else None
                if margin is None:
                    continue
                rules.append(ContainerRule(breakpoint, "stretch", format_dimension(margin)))

    rules.sort(key=lambda rule: rule.breakpoint, reverse=True)

    deduplicated: list[ContainerRule] = []
    for rule in rules:
        if deduplicated and deduplicated[-1].same_geometry(rule):
            continue
        deduplicated.append(rule)
    return deduplicated


def build_container_css(rules: list[ContainerRule], layer: str | None = None) -> str:
    blocks: list[str] = []
    previous: ContainerRule | None = None

    for index, rule in enumerate(rules):
        lines: list[str] = []
        if rule.alignment == "center":
            lines += [f"max-width: {rule.width}px;", "margin-left: auto;", "margin-right: auto;"]
            if previous is not None and previous.alignment != "center":
                lines += ["padding-left: 0;", "padding-right: 0;"]
        else:
            if previous is not None and previous.alignment != "stretch":
                lines += ["max-width: none;", "margin-left: 0;", "margin-right: 0;"]
            lines += [f"padding-left: {rule.margin};", f"padding-right: {rule.margin};"]

        block = format_css_block(".container", lines)
        if index == 0:
            blocks.append(block)
        else:
            blocks.append(f"@media (max-width: {rule.breakpoint - 1}px) {{\n{indent(block)}\n}}")
        previous = rule

    body = indent("\n\n".join(blocks))
    return f"@layer {layer or 'components'} {{\n{body}\n}}\n"


@dataclass(frozen=True)
class ContainerGenerator:
    """Responsive `.container` stylesheet from column grids."""

    styles_dir: Path
    container_width: int = 1440
    layer: str | None = None
    is_module: bool = True
    file_name: str = "container"

    name = "container"

    def run(self, manager: TokenManager) -> GeneratorResult:
        ensure_loaded(manager, self.name)
        grid = require_grid_styles(manager, self.name)
        rules = extract_container_rules(grid, manager, self.container_width)

        if not rules:
            logger.warning(f"[{self.name}] No container tokens found")
            return GeneratorResult(self.name)

        logger.info(
            f"[{self.name}] Found {len(rules)} container rules: "
            f"{', '.join(str(rule.breakpoint) for rule in rules)}"
        )
        suffix = ".module.css" if self.is_module else ".css"
        path = write_output(self.styles_dir / f"{self.file_name}{suffix}", build_container_css(rules, self.layer))
        return GeneratorResult(self.name, [path], len(rules))
