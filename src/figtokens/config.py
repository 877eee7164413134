"""
Project configuration (figtokens.toml).

    [project]
    name = "acme"

    [tokens]
    dir = "tokens"
    default_mode = "Mode 1"

    [figma]
    file_id = "abc123"
    token_env = "FIGMA_TOKEN"

    [[outputs]]
    kind = "colors"
    json_dir = "build/json"
    styles_dir = "build/css"

Relative directories are resolved against the directory holding the
config file.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .core.errors import ConfigError, ErrorContext
from .core.token_manager import TokenResolutionOptions

CONFIG_FILE = "figtokens.toml"

OUTPUT_KINDS = ("colors", "shadows", "breakpoints", "breakpoint_map", "container", "json")

BREAKPOINT_NAMES = ["xxxl", "xxl", "xl", "lg", "md", "sm", "xs", "xxs", "xxxs"]


# =============================================================================
# Sections
# =============================================================================


@dataclass
class TokensConfig:
    """Where tokens live and how they are resolved."""

    dir: str = "tokens"
    default_mode: str | None = "Mode 1"
    include_modes: list[str] = field(default_factory=list)
    collapse_single_mode: bool = True

    def resolution_options(self) -> TokenResolutionOptions:
        return TokenResolutionOptions(
            default_mode=self.default_mode,
            include_modes=tuple(self.include_modes),
            collapse_single_mode=self.collapse_single_mode,
        )


@dataclass
class FigmaConfig:
    """Figma file to talk to. The API token itself comes from the environment."""

    file_id: str = ""
    token_env: str = "FIGMA_TOKEN"
    base_url: str = "https://api.figma.com/v1"

    def api_token(self) -> str:
        token = os.environ.get(self.token_env, "")
        if not token:
            raise ConfigError(f"Environment variable {self.token_env} is not set")
        return token


@dataclass
class OutputConfig:
    """One [[outputs]] entry. Fields a kind does not use are ignored."""

    kind: str
    json_dir: str = "."
    styles_dir: str = "."
    json_file_name: str | None = None
    styles_file_name: str | None = None
    include_variables: list[str] = field(default_factory=list)
    include_styles: bool = True
    extensions: list[str] = field(default_factory=lambda: ["css"])
    names: list[str] = field(default_factory=lambda: list(BREAKPOINT_NAMES))
    container_width: int = 1440
    layer: str | None = None
    is_module: bool = True


@dataclass
class ProjectConfig:
    """Parsed figtokens.toml."""

    root: Path
    name: str = ""
    tokens: TokensConfig = field(default_factory=TokensConfig)
    figma: FigmaConfig = field(default_factory=FigmaConfig)
    outputs: list[OutputConfig] = field(default_factory=list)

    @property
    def tokens_dir(self) -> Path:
        return self.root / self.tokens.dir

    def resolve_path(self, path: str) -> Path:
        return self.root / path


# =============================================================================
# Loading
# =============================================================================


def load_config(path: Path) -> ProjectConfig:
    """
    Load figtokens.toml.

    Raises:
        ConfigError: If the file is missing, not valid TOML, or declares an
            unknown output kind
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(
            f"Config file not found: {path}", ErrorContext(file=path, stage="read")
        ) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=path, stage="parse")) from e

    project = data.get("project", {})
    tokens_data = data.get("tokens", {})
    figma_data = data.get("figma", {})

    tokens_config = TokensConfig(
        dir=tokens_data.get("dir", "tokens"),
        default_mode=tokens_data.get("default_mode", "Mode 1"),
        include_modes=tokens_data.get("include_modes", []),
        collapse_single_mode=tokens_data.get("collapse_single_mode", True),
    )

    figma_config = FigmaConfig(
        file_id=figma_data.get("file_id", ""),
        token_env=figma_data.get("token_env", "FIGMA_TOKEN"),
        base_url=figma_data.get("base_url", "https://api.figma.com/v1"),
    )

    outputs = [_parse_output(entry, path) for entry in data.get("outputs", [])]

    return ProjectConfig(
        root=path.parent,
        name=project.get("name", ""),
        tokens=tokens_config,
        figma=figma_config,
        outputs=outputs,
    )


def _parse_output(entry: dict, path: Path) -> OutputConfig:
    kind = entry.get("kind")
    if kind not in OUTPUT_KINDS:
        raise ConfigError(
            f"Unknown output kind '{kind}'. Expected one of: {', '.join(OUTPUT_KINDS)}",
            ErrorContext(file=path, stage="validate", detail="outputs"),
        )

    return OutputConfig(
        kind=kind,
        json_dir=entry.get("json_dir", "."),
        styles_dir=entry.get("styles_dir", "."),
        json_file_name=entry.get("json_file_name"),
        styles_file_name=entry.get("styles_file_name"),
        include_variables=entry.get("include_variables", []),
        include_styles=entry.get("include_styles", True),
        extensions=entry.get("extensions", ["css"]),
        names=entry.get("names", list(BREAKPOINT_NAMES)),
        container_width=entry.get("container_width", 1440),
        layer=entry.get("layer"),
        is_module=entry.get("is_module", True),
    )


STARTER_CONFIG = """\
[project]
name = "{name}"

[tokens]
dir = "tokens"
default_mode = "Mode 1"

[figma]
file_id = ""
token_env = "FIGMA_TOKEN"

[[outputs]]
kind = "colors"
json_dir = "build/json"
styles_dir = "build/css"

[[outputs]]
kind = "shadows"
json_dir = "build/json"
styles_dir = "build/css"

[[outputs]]
kind = "breakpoints"
json_dir = "build/json"
styles_dir = "build/css"
extensions = ["css", "scss"]
"""
