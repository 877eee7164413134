"""
Output generators.

Each generator is a small frozen dataclass with a `run(manager)` method
that reads a loaded TokenManager and writes its files. build_generator()
turns one [[outputs]] entry of figtokens.toml into a generator.
"""

from __future__ import annotations

from typing import Protocol

from figtokens.config import OutputConfig, ProjectConfig
from figtokens.core.errors import ConfigError
from figtokens.core.token_manager import TokenManager

from .base import GeneratorResult
from .breakpoints import BreakpointMapGenerator, BreakpointsGenerator
from .colors import ColorsGenerator
from .container import ContainerGenerator
from .export import JsonExportGenerator
from .shadows import ShadowsGenerator


class Generator(Protocol):
    name: str

    def run(self, manager: TokenManager) -> GeneratorResult: ...


def build_generator(output: OutputConfig, config: ProjectConfig) -> Generator:
    """Instantiate the generator for an output entry (paths relative to the config root)."""
    json_dir = config.resolve_path(output.json_dir)
    styles_dir = config.resolve_path(output.styles_dir)

    match output.kind:
        case "colors":
            return ColorsGenerator(
                json_dir=json_dir,
                styles_dir=styles_dir,
                include_variables=list(output.include_variables),
                include_styles=output.include_styles,
                json_file_name=output.json_file_name or "colors.json",
                css_file_name=output.styles_file_name or "colors.css",
            )
        case "shadows":
            return ShadowsGenerator(
                json_dir=json_dir,
                styles_dir=styles_dir,
                include_variables=list(output.include_variables),
                include_styles=output.include_styles,
                json_file_name=output.json_file_name or "shadows.json",
                css_file_name=output.styles_file_name or "shadows.css",
            )
        case "breakpoints":
            return BreakpointsGenerator(
                json_dir=json_dir,
                styles_dir=styles_dir,
                extensions=list(output.extensions),
                names=list(output.names),
                json_file_name=output.json_file_name or "breakpoints.json",
                styles_file_name=output.styles_file_name or "breakpoints",
            )
        case "breakpoint_map":
            return BreakpointMapGenerator(
                styles_dir=styles_dir,
                names=list(output.names),
                scss_file_name=output.styles_file_name or "breakpointList.scss",
            )
        case "container":
            return ContainerGenerator(
                styles_dir=styles_dir,
                container_width=output.container_width,
                layer=output.layer,
                is_module=output.is_module,
                file_name=output.styles_file_name or "container",
            )
        case "json":
            return JsonExportGenerator(
                json_dir=json_dir,
                json_file_name=output.json_file_name or "tokens.json",
            )
        case _:
            raise ConfigError(f"Unknown output kind '{output.kind}'")


__all__ = [
    "Generator",
    "GeneratorResult",
    "build_generator",
    "BreakpointMapGenerator",
    "BreakpointsGenerator",
    "ColorsGenerator",
    "ContainerGenerator",
    "JsonExportGenerator",
    "ShadowsGenerator",
]
