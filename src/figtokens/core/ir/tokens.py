"""
Token IR types.

Defines the manifest that lists collections/modes/style files, the design
token leaf, and typed views over the structured token payloads
(shadow layers, grid layouts, gradients) that generators use.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Enums
# =============================================================================


class TokenType(StrEnum):
    """Declared `$type` of a design token."""

    COLOR = "color"
    DIMENSION = "dimension"
    TYPOGRAPHY = "typography"
    SHADOW = "shadow"
    GRID = "grid"
    STRING = "string"


class StyleCategory(StrEnum):
    """Fixed, mode-less style groupings."""

    TEXT = "text"
    EFFECT = "effect"
    COLOR = "color"
    GRID = "grid"


# =============================================================================
# Manifest
# =============================================================================


class CollectionSpec(BaseModel):
    """One collection: mode name -> ordered list of token files."""

    model_config = ConfigDict(frozen=True)

    modes: dict[str, list[str]] = Field(default_factory=dict)


class TokenManifest(BaseModel):
    """Contents of manifest.json in a tokens directory.

    Dict order is significant: collections, modes and files are merged in
    the order they are declared.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    collections: dict[str, CollectionSpec] = Field(default_factory=dict)
    styles: dict[StyleCategory, list[str]] = Field(default_factory=dict)

    @field_validator("styles", mode="before")
    @classmethod
    def _drop_null_categories(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {k: v for k, v in value.items() if v is not None}
        return value

    def referenced_files(self) -> list[str]:
        """All file names referenced by the manifest, in declaration order."""
        files: list[str] = []
        for collection in self.collections.values():
            for file_names in collection.modes.values():
                files.extend(file_names)
        for file_names in self.styles.values():
            files.extend(file_names)
        return files


# =============================================================================
# Tokens
# =============================================================================


class DesignToken(BaseModel):
    """A single design token leaf.

    Built from a source mapping carrying `$type` and `$value`; the value
    payload stays untyped here because its shape depends on `type`.
    """

    model_config = ConfigDict(frozen=True)

    type: TokenType
    value: Any
    description: str | None = None
    extensions: dict[str, Any] | None = None

    def with_value(self, value: Any) -> DesignToken:
        """Copy of this token carrying a different value."""
        return self.model_copy(update={"value": value})

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, "value": self.value}
        if self.description:
            data["description"] = self.description
        return data


# =============================================================================
# Structured payloads
# =============================================================================


# Dimensions arrive either as CSS strings ("4px") or bare numbers.
Dimension = str | int | float


class ShadowLayer(BaseModel):
    """One layer of a shadow token."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    offset_x: Dimension = Field(default="0", alias="offsetX")
    offset_y: Dimension = Field(default="0", alias="offsetY")
    blur: Dimension = "0"
    spread: Dimension = "0"
    color: str = "transparent"
    inset: bool = False


class GridLayout(BaseModel):
    """One layout grid of a grid style token."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pattern: str = "columns"
    visible: bool = True
    alignment: str = "stretch"
    color: str | None = None
    gutter_size: Dimension | None = Field(default=None, alias="gutterSize")
    count: int | None = None
    offset: Dimension | None = None


class GradientStop(BaseModel):
    """Color stop of a gradient color token."""

    model_config = ConfigDict(frozen=True)

    color: str
    position: float = 0.0


class GradientValue(BaseModel):
    """Gradient payload of a color token."""

    model_config = ConfigDict(frozen=True)

    type: str
    angle: float = 0.0
    stops: list[GradientStop] = Field(default_factory=list)
