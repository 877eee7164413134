"""
Shared helpers for output generators.

Generators read the resolved trees of a loaded TokenManager and write CSS,
SCSS and JSON files. A token name is its path inside the source group
joined with "-"; a token value is either a single value or, for tokens
that still carry several modes, a mode -> value mapping.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from figtokens.core.errors import GeneratorError
from figtokens.core.ir import StyleCategory, TokenType
from figtokens.core.token_manager import TokenManager
from figtokens.core.tree import ModalToken, TokenGroup, TokenLeaf, iter_leaves

logger = logging.getLogger(__name__)

# A single rendered value, or mode name -> rendered value.
TokenValue = str | dict[str, str]


@dataclass(frozen=True)
class GeneratorResult:
    """What a generator run produced."""

    name: str
    files: list[Path] = field(default_factory=list)
    token_count: int = 0


def ensure_loaded(manager: TokenManager, name: str) -> None:
    """Raise GeneratorError unless the manager has finished loading."""
    if not manager.is_loaded():
        raise GeneratorError(
            f"[{name}] TokenManager is not loaded. Tokens must be loaded before running generators."
        )


# =============================================================================
# Token selection
# =============================================================================


def collect_groups(
    manager: TokenManager,
    name: str,
    *,
    category: StyleCategory,
    include_styles: bool,
    include_variables: Iterable[str],
) -> list[TokenGroup]:
    """
    Source groups for a generator: one style category and/or named collections.

    Raises:
        GeneratorError: If neither styles nor variables are requested
    """
    include_variables = list(include_variables)
    if not include_variables and not include_styles:
        raise GeneratorError(f"[{name}] Either include_variables or include_styles must be enabled")

    groups: list[TokenGroup] = []
    if include_styles:
        styles = manager.get_styles().get(category)
        if styles is not None:
            groups.append(styles)

    for key in include_variables:
        group = manager.get_subgroup(key)
        if isinstance(group, TokenGroup):
            groups.append(group)
        else:
            logger.warning(f"[{name}] Variable group '{key}' not found")
    return groups


def flatten_tokens(
    group: TokenGroup,
    render: Callable[[Any], str | None],
    *,
    token_type: TokenType | None = None,
) -> dict[str, TokenValue]:
    """
    Flatten a group to name -> rendered value.

    Single-mode tokens render like plain leaves, so collapsing single-mode
    tokens never changes the output. Values render() rejects (returns None
    for) are skipped.
    """
    result: dict[str, TokenValue] = {}
    for path, node in iter_leaves(group):
        if token_type is not None and node.type != token_type:
            continue
        name = "-".join(path)
        value = _render_node(node, render)
        if value is None:
            logger.debug(f"Skipping token '{name}': value cannot be rendered")
            continue
        result[name] = value
    return result


def _render_node(node: TokenLeaf | ModalToken, render: Callable[[Any], str | None]) -> TokenValue | None:
    if isinstance(node, TokenLeaf):
        return render(node.token.value)

    values = node.values()
    if len(values) == 1:
        return render(next(iter(values.values())))

    rendered: dict[str, str] = {}
    for mode, value in values.items():
        css = render(value)
        if css is not None:
            rendered[mode] = css
    return rendered or None


# =============================================================================
# Formatting
# =============================================================================


def format_number(value: float) -> str:
    """Render a number without a trailing ".0" (90.0 -> "90", 12.5 -> "12.5")."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_dimension(value: Any) -> str:
    """Bare numbers are pixels; strings are used as-is."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int | float):
        return f"{format_number(value)}px" if value else "0"
    return str(value)


def format_css_block(selector: str, lines: list[str]) -> str:
    """`selector { ... }` with 4-space indented lines; empty when there are no lines."""
    if not lines:
        return ""
    body = "\n".join(f"    {line}" for line in lines)
    return f"{selector} {{\n{body}\n}}"


def indent(text: str, width: int = 4) -> str:
    prefix = " " * width
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


def mode_class_name(mode: str) -> str:
    """CSS class selector for a mode ("High Contrast" -> ".high-contrast")."""
    return "." + re.sub(r"\s+", "-", mode).lower()


def build_css_variables(tokens: dict[str, TokenValue]) -> dict[str, list[str]]:
    """Group `--name: value;` declarations under "root" and under each mode."""
    blocks: dict[str, list[str]] = {"root": []}
    for name, value in tokens.items():
        if isinstance(value, dict):
            for mode, mode_value in value.items():
                blocks.setdefault(mode, []).append(f"--{name}: {mode_value};")
        else:
            blocks["root"].append(f"--{name}: {value};")
    return blocks


def build_css_content(blocks: dict[str, list[str]]) -> str:
    """`:root {}` followed by one block per mode class."""
    parts = [format_css_block(":root", blocks.get("root", []))]
    for mode, lines in blocks.items():
        if mode == "root":
            continue
        parts.append(format_css_block(mode_class_name(mode), lines))
    return "\n\n".join(part for part in parts if part) + "\n"


# =============================================================================
# Output
# =============================================================================


def write_output(path: Path, content: str) -> Path:
    """Replace path with content, creating parent directories."""
    path.unlink(missing_ok=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {path}")
    return path
