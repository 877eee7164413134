"""
Breakpoint generators.

Grid styles are keyed by viewport width ("320", "768", "1440"). Sorted
ascending, those widths are named from the end of the names list, so with
the default names the widest of three breakpoints is "xs" and the
narrowest "xxxs".
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from figtokens.config import BREAKPOINT_NAMES
from figtokens.core.errors import GeneratorError
from figtokens.core.token_manager import TokenManager
from figtokens.core.tree import TokenGroup

from .base import GeneratorResult, ensure_loaded, format_css_block, write_output

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Breakpoint:
    name: str
    value: int


def _parse_width(key: str) -> float | None:
    try:
        return float(key)
    except ValueError:
        return None


def require_grid_styles(manager: TokenManager, name: str) -> TokenGroup:
    grid = manager.get_grid_styles()
    if grid is None:
        raise GeneratorError(f"[{name}] No grid styles found. Grid tokens must be loaded.")
    return grid


def extract_breakpoints(grid: TokenGroup, names: list[str], *, strict: bool = True) -> list[Breakpoint]:
    """
    Name the numeric keys of a grid style group.

    Raises:
        GeneratorError: If there are more breakpoints than names, or (when
            strict) a key is not numeric
    """
    numeric = sorted(
        ((width, key) for key in grid if (width := _parse_width(key)) is not None),
        key=lambda item: item[0],
    )

    if len(numeric) > len(names):
        raise GeneratorError(
            f"Not enough breakpoint names provided. Found {len(numeric)} breakpoints, "
            f"but only {len(names)} names specified: {', '.join(names)}"
        )

    if strict:
        invalid = [key for key in grid if _parse_width(key) is None]
        if invalid:
            raise GeneratorError(
                f"Found non-numeric breakpoint keys in grid data: {', '.join(invalid)}. "
                "All breakpoint keys must be numeric values."
            )

    return [
        Breakpoint(name=names[len(names) - 1 - index], value=int(width))
        for index, (width, _) in enumerate(numeric)
    ]


@dataclass(frozen=True)
class BreakpointsGenerator:
    """Breakpoint JSON plus CSS custom properties and/or SCSS variables."""

    json_dir: Path
    styles_dir: Path
    extensions: list[str] = field(default_factory=lambda: ["css"])
    names: list[str] = field(default_factory=lambda: list(BREAKPOINT_NAMES))
    json_file_name: str = "breakpoints.json"
    styles_file_name: str = "breakpoints"

    name = "breakpoints"

    def run(self, manager: TokenManager) -> GeneratorResult:
        ensure_loaded(manager, self.name)
        grid = require_grid_styles(manager, self.name)
        breakpoints = extract_breakpoints(grid, self.names)

        if not breakpoints:
            logger.warning(f"[{self.name}] No breakpoints found in grid styles")
            return GeneratorResult(self.name)

        logger.info(f"[{self.name}] Found {len(breakpoints)} breakpoints: {', '.join(bp.name for bp in breakpoints)}")

        data = {bp.name: bp.value for bp in breakpoints}
        files = [write_output(self.json_dir / self.json_file_name, json.dumps(data, indent=2))]

        if "css" in self.extensions:
            css = format_css_block(":root", [f"--{bp.name}: {bp.value}px;" for bp in breakpoints])
            files.append(write_output(self.styles_dir / f"{self.styles_file_name}.css", css + "\n"))

        if "scss" in self.extensions:
            scss = "\n".join(f"${bp.name}: {bp.value}px;" for bp in breakpoints)
            files.append(write_output(self.styles_dir / f"{self.styles_file_name}.scss", scss + "\n"))

        return GeneratorResult(self.name, files, len(breakpoints))


def build_scss_map(breakpoints: list[Breakpoint]) -> str:
    entries = ",\n".join(f"    {bp.name}: {bp.value}" for bp in breakpoints)
    default = breakpoints[-1].name if breakpoints else BREAKPOINT_NAMES[0]
    return f"$breakpointList: (\n{entries}\n);\n$defaultBreakpoint: '{default}';\n"


@dataclass(frozen=True)
class BreakpointMapGenerator:
    """SCSS `$breakpointList` map and `$defaultBreakpoint` (the widest)."""

    styles_dir: Path
    names: list[str] = field(default_factory=lambda: list(BREAKPOINT_NAMES))
    scss_file_name: str = "breakpointList.scss"

    name = "breakpoint_map"

    def run(self, manager: TokenManager) -> GeneratorResult:
        ensure_loaded(manager, self.name)
        grid = require_grid_styles(manager, self.name)
        breakpoints = extract_breakpoints(grid, self.names, strict=False)

        if not breakpoints:
            logger.warning(f"[{self.name}] No breakpoints found in grid styles")
            return GeneratorResult(self.name)

        path = write_output(self.styles_dir / self.scss_file_name, build_scss_map(breakpoints))
        logger.info(f"[{self.name}] Wrote SCSS map with {len(breakpoints)} breakpoints")
        return GeneratorResult(self.name, [path], len(breakpoints))
