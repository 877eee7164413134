"""Figma REST API access."""

from .client import FigmaApi, chunk_ids

__all__ = ["FigmaApi", "chunk_ids"]
