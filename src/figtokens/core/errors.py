"""
Error types for figtokens manifest loading, token resolution and generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class FigTokensError(Exception):
    """Base exception for all figtokens errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ManifestError(FigTokensError):
    """
    Raised when the token manifest cannot be loaded.

    Fatal for TokenManager.load(). Examples:
    - manifest.json missing from the tokens directory
    - Invalid JSON
    - Unknown style category or malformed collection/mode layout
    """

    pass


class TokenFileError(FigTokensError):
    """
    Raised when a single token or style file cannot be read.

    The tree builders catch this, log it and treat the file as an empty
    contribution.
    """

    pass


class TokensNotLoadedError(FigTokensError):
    """Raised when the TokenManager is queried before load() has completed."""

    def __init__(self, message: str = "Tokens not loaded. Call load() first."):
        super().__init__(message)


class GeneratorError(FigTokensError):
    """
    Raised when an output generator receives input it cannot render.

    Examples:
    - Non-numeric breakpoint keys in grid styles
    - Fewer breakpoint names than breakpoints
    - Generator run against an unloaded TokenManager
    """

    pass


class ConfigError(FigTokensError):
    """Raised when figtokens.toml is missing, malformed or inconsistent."""

    pass


class FigmaApiError(FigTokensError):
    """Raised when the Figma REST API returns an error or a non-JSON body."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


@dataclass
class ErrorContext:
    """
    Where an error happened.

    Attributes:
        file: File being processed when the error occurred
        stage: Processing stage (e.g. "read", "parse", "validate")
        detail: Optional extra detail (collection, mode, category)
    """

    file: Path
    stage: str
    detail: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens/manifest.json [parse] (collection Colors)"
        """
        location = f"{self.file} [{self.stage}]"
        if self.detail:
            location += f" ({self.detail})"
        return location


def make_file_error(
    error_cls: type[FigTokensError],
    message: str,
    file: Path,
    stage: str,
    detail: str | None = None,
) -> FigTokensError:
    """
    Helper to create a file-scoped error with context.

    Args:
        error_cls: Concrete error type to build
        message: Error description
        file: Offending file
        stage: Stage that failed
        detail: Optional extra detail

    Returns:
        Error instance with attached ErrorContext
    """
    context = ErrorContext(file=file, stage=stage, detail=detail)
    return error_cls(message, context)
