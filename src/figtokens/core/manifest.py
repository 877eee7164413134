"""
Token manifest loading.

Every tokens directory carries a manifest.json that lists the collections,
their modes and the files of each mode, plus optional style category files:

    {
      "name": "Design System",
      "collections": {
        "Colors": {"modes": {"Light": ["colors.light.json"], "Dark": ["colors.dark.json"]}}
      },
      "styles": {"color": ["color.styles.json"], "grid": ["grid.styles.json"]}
    }

A missing or broken manifest is fatal: nothing can be built without it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .errors import ManifestError, make_file_error
from .ir import TokenManifest

logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"


def get_manifest_path(tokens_dir: Path) -> Path:
    """Get the manifest.json path for a tokens directory."""
    return tokens_dir / MANIFEST_FILE


def load_manifest(tokens_dir: Path) -> TokenManifest:
    """Load and validate manifest.json.

    Args:
        tokens_dir: Directory holding manifest.json and the token files.

    Returns:
        Parsed TokenManifest.

    Raises:
        ManifestError: If the file is missing, not JSON or not a valid manifest.
    """
    manifest_path = get_manifest_path(tokens_dir)

    try:
        content = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise make_file_error(
            ManifestError, f"Failed to load manifest file from: {manifest_path}", manifest_path, "read"
        ) from e
    except OSError as e:
        raise make_file_error(ManifestError, str(e), manifest_path, "read") from e
    except UnicodeDecodeError as e:
        raise make_file_error(
            ManifestError, f"Manifest is not valid UTF-8: {e}", manifest_path, "parse"
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise make_file_error(ManifestError, f"Invalid JSON: {e}", manifest_path, "parse") from e

    if not isinstance(data, dict):
        raise make_file_error(
            ManifestError, "Manifest root must be a JSON object", manifest_path, "validate"
        )

    try:
        manifest = TokenManifest.model_validate(data)
    except ValidationError as e:
        raise make_file_error(
            ManifestError, f"Invalid manifest schema: {e}", manifest_path, "validate"
        ) from e

    logger.debug(
        f"Loaded manifest '{manifest.name}' from {manifest_path}: "
        f"{len(manifest.collections)} collections, {len(manifest.styles)} style categories"
    )
    return manifest


def find_missing_files(tokens_dir: Path, manifest: TokenManifest) -> list[str]:
    """List manifest-referenced files that do not exist under tokens_dir."""
    return [name for name in manifest.referenced_files() if not (tokens_dir / name).is_file()]
