"""
Reference resolution.

Token values may point at other tokens with `{path.to.token}`. A value that
is exactly one reference is replaced by the referenced token's value (which
may be structured, e.g. a whole typography mapping); references embedded in
a longer string ("{space.sm} {space.md}") are substituted textually.

Lookup is two-phase: the dotted path from the root of the variable tree
first, then the same path under each top-level collection. The second phase
is a linear scan over collections, O(number of collections) per miss.

Resolution is mode-aware. Resolving the "dark" value of a token only ever
reads the "dark" value of a referenced mode-keyed token when that mode
exists there.

Chains of whole-value references ({a} -> {b} -> {c}) are followed
iteratively and each (token, mode) result is cached, so long alias chains
cost no stack depth. References nested inside structured values or
embedded in strings recurse once per nesting level, which bounds that
nesting by the interpreter's recursion limit.

References that cannot be resolved (missing target, cycle) make the
containing token disappear from the resolved tree. Partial design files are
normal while a design is in progress, so this is logged, not raised.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Final

from .ir import DesignToken, StyleCategory
from .normalize import normalize_identifier
from .tree import ModalToken, TokenGroup, TokenLeaf, TokenNode

logger = logging.getLogger(__name__)

_WHOLE_REFERENCE = re.compile(r"^\{([^{}]+)\}$")
_EMBEDDED_REFERENCE = re.compile(r"\{([^{}]+)\}")


class _Unresolved:
    def __repr__(self) -> str:
        return "UNRESOLVED"

    def __bool__(self) -> bool:
        return False


UNRESOLVED: Final = _Unresolved()

# Active references on the current resolution chain: (node id, path).
_Stack = tuple[tuple[int, str], ...]


def is_reference(value: Any) -> bool:
    """True when value is a string consisting of exactly one {reference}."""
    return isinstance(value, str) and _WHOLE_REFERENCE.match(value.strip()) is not None


def reference_path(value: str) -> str | None:
    """The inner path of a whole-value reference, or None."""
    match = _WHOLE_REFERENCE.match(value.strip())
    return match.group(1).strip() if match else None


class ReferenceResolver:
    """Resolves references against a variable tree."""

    def __init__(self, variables: TokenGroup, *, default_mode: str | None = None):
        self.variables = variables
        self.default_mode = normalize_identifier(default_mode) if default_mode else None
        # (node id, mode) -> resolved value; the variable tree is never mutated.
        self._cache: dict[tuple[int, str | None], Any] = {}

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def lookup(self, path: str) -> TokenLeaf | ModalToken | None:
        """Find the token a dotted path points at."""
        segments = path.strip().split(".")
        if not segments or not all(segments):
            return None

        candidates = [segments]
        first = normalize_identifier(segments[0])
        if first != segments[0]:
            candidates.append([first, *segments[1:]])

        for candidate in candidates:
            node = self.variables.find(candidate)
            if isinstance(node, (TokenLeaf, ModalToken)):
                return node

        for child in self.variables.children.values():
            if not isinstance(child, TokenGroup):
                continue
            for candidate in candidates:
                node = child.find(candidate)
                if isinstance(node, (TokenLeaf, ModalToken)):
                    return node

        return None

    def select_token(self, node: TokenLeaf | ModalToken, mode: str | None) -> DesignToken | None:
        """Pick the token of node that applies in mode."""
        if isinstance(node, TokenLeaf):
            return node.token

        modes = node.modes
        if mode is not None and mode in modes:
            return modes[mode]
        if len(modes) == 1:
            return next(iter(modes.values()))
        if self.default_mode is not None and self.default_mode in modes:
            return modes[self.default_mode]
        if mode is None and modes:
            return next(iter(modes.values()))
        return None

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def resolve_value(self, value: Any, mode: str | None = None) -> Any:
        """Resolve every reference inside value.

        Returns:
            The resolved value, or UNRESOLVED if any reference dangles or cycles.
        """
        return self._resolve(value, mode, ())

    def _resolve(self, value: Any, mode: str | None, stack: _Stack) -> Any:
        if isinstance(value, str):
            return self._resolve_string(value, mode, stack)

        if isinstance(value, list):
            items = []
            for item in value:
                resolved = self._resolve(item, mode, stack)
                if resolved is UNRESOLVED:
                    return UNRESOLVED
                items.append(resolved)
            return items

        if isinstance(value, dict):
            mapping = {}
            for key, item in value.items():
                resolved = self._resolve(item, mode, stack)
                if resolved is UNRESOLVED:
                    return UNRESOLVED
                mapping[key] = resolved
            return mapping

        return value

    def _resolve_string(self, text: str, mode: str | None, stack: _Stack) -> Any:
        path = reference_path(text)
        if path is not None:
            return self._dereference(path, mode, stack)

        if "{" not in text:
            return text

        failed = False

        def _substitute(match: re.Match[str]) -> str:
            nonlocal failed
            resolved = self._dereference(match.group(1).strip(), mode, stack)
            if resolved is UNRESOLVED or isinstance(resolved, (dict, list)):
                failed = True
                return match.group(0)
            return _format_scalar(resolved)

        result = _EMBEDDED_REFERENCE.sub(_substitute, text)
        return UNRESOLVED if failed else result

    def _dereference(self, path: str, mode: str | None, stack: _Stack) -> Any:
        # Chains of whole-value references are followed in a loop; every
        # node on the chain shares the final result.
        visited: list[tuple[int, str | None]] = []
        result: Any = UNRESOLVED

        while True:
            node = self.lookup(path)
            if node is None:
                logger.debug(f"Reference '{{{path}}}' not found")
                break

            key = (id(node), mode)
            if key in self._cache:
                result = self._cache[key]
                break

            if any(node_id == id(node) for node_id, _ in stack):
                chain = " -> ".join([*(p for _, p in stack), path])
                logger.warning(f"Reference cycle detected: {chain}")
                break

            token = self.select_token(node, mode)
            if token is None:
                logger.debug(f"Reference '{{{path}}}' has no value for mode '{mode}'")
                break

            visited.append(key)
            stack = (*stack, (id(node), path))
            next_path = reference_path(token.value) if isinstance(token.value, str) else None
            if next_path is None:
                result = self._resolve(token.value, mode, stack)
                break
            path = next_path

        for key in visited:
            self._cache[key] = result
        return result

    # -------------------------------------------------------------------------
    # Trees
    # -------------------------------------------------------------------------

    def resolve_tree(self, group: TokenGroup) -> TokenGroup:
        """Resolve every token of group; unresolvable tokens are dropped."""
        return self._resolve_group(group, ())

    def resolve_styles(self, styles: Mapping[StyleCategory, TokenGroup]) -> dict[StyleCategory, TokenGroup]:
        """Resolve each style category (no mode context)."""
        return {
            category: self._resolve_group(tree, (category.value,))
            for category, tree in styles.items()
        }

    def _resolve_group(self, group: TokenGroup, prefix: tuple[str, ...]) -> TokenGroup:
        children: dict[str, TokenNode] = {}
        for key, child in group.children.items():
            path = (*prefix, key)
            resolved: TokenNode | None
            if isinstance(child, TokenGroup):
                resolved = self._resolve_group(child, path)
                if child.children and not resolved.children:
                    resolved = None
            elif isinstance(child, TokenLeaf):
                resolved = self._resolve_leaf(child, path)
            else:
                resolved = self._resolve_modal(child, path)

            if resolved is not None:
                children[key] = resolved
        return TokenGroup(children)

    def _resolve_leaf(self, leaf: TokenLeaf, path: tuple[str, ...]) -> TokenLeaf | None:
        value = self._resolve(leaf.token.value, None, ((id(leaf), ".".join(path)),))
        if value is UNRESOLVED:
            logger.warning(f"Dropping token '{'.'.join(path)}': unresolved reference in {leaf.token.value!r}")
            return None
        return TokenLeaf(leaf.token.with_value(value))

    def _resolve_modal(self, modal: ModalToken, path: tuple[str, ...]) -> ModalToken | None:
        dotted = ".".join(path)
        modes: dict[str, DesignToken] = {}
        for mode, token in modal.modes.items():
            value = self._resolve(token.value, mode, ((id(modal), dotted),))
            if value is UNRESOLVED:
                logger.warning(
                    f"Dropping mode '{mode}' of token '{dotted}': unresolved reference in {token.value!r}"
                )
                continue
            modes[mode] = token.with_value(value)

        if not modes:
            return None
        return ModalToken(modes)


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
