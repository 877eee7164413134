"""Shared pytest fixtures for figtokens tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

TokenDirWriter = Callable[[dict[str, Any], dict[str, Any]], Path]


@pytest.fixture
def write_tokens_dir(tmp_path: Path) -> TokenDirWriter:
    """Return a helper writing manifest.json plus token files into tmp_path/tokens."""

    def _write(manifest: dict[str, Any], files: dict[str, Any]) -> Path:
        tokens_dir = tmp_path / "tokens"
        tokens_dir.mkdir(exist_ok=True)
        (tokens_dir / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")
        for name, content in files.items():
            path = tokens_dir / name
            if isinstance(content, str):
                path.write_text(content, encoding="utf-8")
            else:
                path.write_text(json.dumps(content), encoding="utf-8")
        return tokens_dir

    return _write


def _token(type_: str, value: Any, **extra: Any) -> dict[str, Any]:
    """A raw `$type`/`$value` token mapping."""
    return {"$type": type_, "$value": value, **extra}


@pytest.fixture
def design_system(write_tokens_dir: TokenDirWriter) -> Path:
    """A small but complete tokens directory: two color modes, dimensions and all style categories."""
    manifest = {
        "name": "Design System",
        "collections": {
            "Colors": {"modes": {"Light": ["colors.light.json"], "Dark": ["colors.dark.json"]}},
            "Spacing": {"modes": {"Mode 1": ["spacing.json"]}},
        },
        "styles": {
            "color": ["color.styles.json"],
            "effect": ["effect.styles.json"],
            "text": ["text.styles.json"],
            "grid": ["grid.styles.json"],
        },
    }
    files = {
        "colors.light.json": {
            "primary": _token("color", "#ffffff"),
            "brand": {"accent": _token("color", "#ff0000")},
            "text": _token("color", "{colors.primary}"),
        },
        "colors.dark.json": {
            "primary": _token("color", "#000000"),
            "brand": {"accent": _token("color", "#aa0000")},
            "text": _token("color", "{colors.primary}"),
        },
        "spacing.json": {
            "space": {
                "sm": _token("dimension", "8px"),
                "md": _token("dimension", "16px"),
            },
        },
        "color.styles.json": {
            "surface": _token("color", "{colors.primary}"),
            "sunset": _token(
                "color",
                {
                    "type": "linear",
                    "angle": 90,
                    "stops": [
                        {"color": "#ff0000", "position": 0},
                        {"color": "#00ff00", "position": 0.5},
                        {"color": "#0000ff", "position": 1},
                    ],
                },
            ),
        },
        "effect.styles.json": {
            "elevation": {
                "low": _token(
                    "shadow",
                    [{"offsetX": "0px", "offsetY": "1px", "blur": "2px", "spread": "0px", "color": "#00000033"}],
                ),
            },
        },
        "text.styles.json": {
            "body": _token(
                "typography",
                {"font family": "Inter", "font size": "{Space.md}", "line-height": "1.5"},
            ),
        },
        "grid.styles.json": {
            "1440": _token("grid", [{"pattern": "columns", "alignment": "center", "count": 12}]),
            "768": _token("grid", [{"pattern": "columns", "alignment": "stretch", "offset": "{space.md}"}]),
            "320": _token("grid", [{"pattern": "columns", "alignment": "stretch", "offset": "{space.sm}"}]),
        },
    }
    return write_tokens_dir(manifest, files)
