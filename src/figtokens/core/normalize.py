"""
Key normalization for design-token trees.

Source files exported from Figma spell group and token names freely
("font size", "Line-Height", "text_sizes"). Every key that enters the
token tree goes through normalize_key() so generators and references
address tokens with one canonical camelCase spelling.

Examples:
    "font size"   -> "fontSize"
    "font-size"   -> "fontSize"
    "font_size"   -> "fontSize"
    "fontSize"    -> "fontSize"   (no separators: unchanged)
    "Text_sizes"  -> "fontSize"   (override table)
"""

from __future__ import annotations

import re

# Checked before the generic algorithm.
GROUP_NAME_OVERRIDES: dict[str, str] = {
    "Text_sizes": "fontSize",
    "Line_heights": "lineHeights",
}

_SEPARATORS = re.compile(r"[-_\s]+")
_REFERENCE = re.compile(r"\{([^}]+)\}")


def to_camel_case(text: str) -> str:
    """Convert a separated string to camelCase, preserving existing camel/PascalCase.

    The first segment is lowercased entirely; later segments get an uppercase
    first character and keep the rest of their spelling.
    """
    text = text.strip()
    if not text:
        return ""

    if not _SEPARATORS.search(text):
        return text

    words = [word for word in _SEPARATORS.split(text) if word]
    if not words:
        return ""

    head, *rest = words
    return head.lower() + "".join(word[0].upper() + word[1:] for word in rest)


def normalize_key(key: str) -> str:
    """Normalize a group or token key to its canonical form."""
    stripped = key.strip()
    override = GROUP_NAME_OVERRIDES.get(stripped)
    if override is not None:
        return override
    return to_camel_case(stripped)


def normalize_identifier(name: str) -> str:
    """Normalize a collection or mode name ("Colors" -> "colors", "Mode 1" -> "mode1")."""
    key = normalize_key(name)
    if not key:
        return key
    return key[0].lower() + key[1:]


def normalize_reference(reference: str) -> str:
    """Normalize a single "{path}" reference; other strings are returned as-is."""
    if reference.startswith("{") and reference.endswith("}"):
        return "{" + to_camel_case(reference[1:-1]) + "}"
    return reference


def normalize_references(text: str) -> str:
    """Rewrite every {reference} inside text to its normalized spelling."""
    return _REFERENCE.sub(lambda match: normalize_reference(match.group(0)), text)
