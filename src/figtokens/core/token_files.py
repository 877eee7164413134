"""
Token file loading and parsing.

A token source file is a nested JSON object. A mapping carrying both
`$type` and `$value` is a token; every other mapping is a group:

    {
      "Font Size": {
        "body": {"$type": "dimension", "$value": "14px"},
        "heading": {"$type": "dimension", "$value": "{base.size}"}
      }
    }

parse_token_tree() turns that raw mapping into the typed TokenGroup tree,
normalizing keys and reference spellings on the way in.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import TokenFileError, make_file_error
from .ir import DesignToken, TokenType
from .normalize import normalize_key, normalize_references
from .tree import TokenGroup, TokenLeaf, TokenNode, merge_nodes

logger = logging.getLogger(__name__)

_TOKEN_TYPES = {t.value for t in TokenType}


def load_token_file(path: Path) -> dict[str, Any]:
    """Read one token file.

    Raises:
        TokenFileError: If the file is missing, not UTF-8 JSON, or not a JSON object.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise make_file_error(TokenFileError, f"File not found: {path}", path, "read") from e
    except OSError as e:
        raise make_file_error(TokenFileError, f"Failed to read file: {e}", path, "read") from e
    except UnicodeDecodeError as e:
        raise make_file_error(TokenFileError, f"File is not valid UTF-8: {e}", path, "parse") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise make_file_error(
            TokenFileError, f"Failed to parse JSON: {e}", path, "parse"
        ) from e

    if not isinstance(data, dict):
        raise make_file_error(
            TokenFileError, "Token file root must be a JSON object", path, "parse"
        )
    return data


async def load_token_file_async(path: Path) -> dict[str, Any]:
    """load_token_file() off the event loop thread."""
    return await asyncio.to_thread(load_token_file, path)


async def load_tree_or_empty(path: Path) -> TokenGroup:
    """Load and parse one file; a broken file is logged and yields an empty tree."""
    try:
        raw = await load_token_file_async(path)
    except TokenFileError as e:
        logger.warning(f"Failed to load token file: {e}")
        return TokenGroup()
    return parse_token_tree(raw, source=path)


def is_design_token(value: Any) -> bool:
    return isinstance(value, dict) and "$type" in value and "$value" in value


def parse_token_tree(raw: dict[str, Any], *, source: Path | None = None) -> TokenGroup:
    """Convert a raw token mapping into a normalized TokenGroup."""
    children: dict[str, TokenNode] = {}

    for original_key, value in raw.items():
        if not isinstance(value, dict):
            continue

        key = normalize_key(original_key)
        node: TokenNode | None
        if is_design_token(value):
            node = _parse_token(value, original_key, source)
        else:
            node = parse_token_tree(value, source=source)

        if node is None:
            continue
        # Two source keys can normalize to the same key ("font size", "fontSize").
        children[key] = merge_nodes(children.get(key), node)

    return TokenGroup(children)


def _parse_token(value: dict[str, Any], key: str, source: Path | None) -> TokenLeaf | None:
    token_type = value["$type"]
    if not isinstance(token_type, str) or token_type not in _TOKEN_TYPES:
        logger.warning(f"Skipping token '{key}' with unsupported type '{token_type}' in {source}")
        return None

    payload = value["$value"]
    if token_type == TokenType.TYPOGRAPHY and isinstance(payload, dict):
        payload = normalize_style_value(payload)
    else:
        payload = normalize_value_references(payload)

    try:
        token = DesignToken(
            type=TokenType(token_type),
            value=payload,
            description=value.get("$description"),
            extensions=value.get("$extensions"),
        )
    except ValidationError as e:
        logger.warning(f"Skipping malformed token '{key}' in {source}: {e}")
        return None
    return TokenLeaf(token)


def normalize_style_value(value: dict[str, Any]) -> dict[str, Any]:
    """Normalize property names and references of a structured style value."""
    result: dict[str, Any] = {}
    for prop, prop_value in value.items():
        key = normalize_key(prop)
        if isinstance(prop_value, dict):
            result[key] = normalize_style_value(prop_value)
        else:
            result[key] = normalize_value_references(prop_value)
    return result


def normalize_value_references(value: Any) -> Any:
    """Normalize reference spellings in every string of a value."""
    if isinstance(value, str):
        return normalize_references(value)
    if isinstance(value, list):
        return [normalize_value_references(item) for item in value]
    if isinstance(value, dict):
        return {k: normalize_value_references(v) for k, v in value.items()}
    return value
