"""
Token tree nodes and merging.

A token tree is a recursive sum type:

- TokenGroup: named children, further nesting
- TokenLeaf: one design token
- ModalToken: one design token per mode (a token whose value varies by mode)

Nodes are never mutated once built; merge_nodes() and the other helpers
return new nodes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .ir import DesignToken, TokenType


@dataclass(frozen=True)
class TokenLeaf:
    """A single token without a mode dimension."""

    token: DesignToken

    @property
    def type(self) -> TokenType:
        return self.token.type

    def to_dict(self) -> dict[str, Any]:
        return self.token.to_dict()


@dataclass(frozen=True)
class ModalToken:
    """A token whose value is kept per mode (mode name -> token)."""

    modes: dict[str, DesignToken] = field(default_factory=dict)

    @property
    def type(self) -> TokenType:
        return next(iter(self.modes.values())).type

    @property
    def description(self) -> str | None:
        for token in self.modes.values():
            if token.description:
                return token.description
        return None

    def values(self) -> dict[str, Any]:
        """Mode name -> token value."""
        return {mode: token.value for mode, token in self.modes.items()}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, "value": self.values()}
        if self.description:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class TokenGroup:
    """A named group of nodes."""

    children: dict[str, TokenNode] = field(default_factory=dict)

    def __contains__(self, key: object) -> bool:
        return key in self.children

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def get(self, key: str) -> TokenNode | None:
        return self.children.get(key)

    def items(self):
        return self.children.items()

    def find(self, path: list[str]) -> TokenNode | None:
        """Walk a list of keys down the tree; None when any step is missing."""
        node: TokenNode = self
        for key in path:
            if not isinstance(node, TokenGroup):
                return None
            child = node.children.get(key)
            if child is None:
                return None
            node = child
        return node

    def to_dict(self) -> dict[str, Any]:
        return {key: child.to_dict() for key, child in self.children.items()}


TokenNode = TokenGroup | TokenLeaf | ModalToken


# =============================================================================
# Merge
# =============================================================================


def merge_nodes(existing: TokenNode | None, incoming: TokenNode) -> TokenNode:
    """Merge incoming over existing.

    - group + group: recursive key union
    - modal + modal: mode maps merged key-wise, incoming wins per mode
    - anything else: incoming replaces existing
    """
    match existing, incoming:
        case TokenGroup(), TokenGroup():
            return merge_groups(existing, incoming)
        case ModalToken(modes=left), ModalToken(modes=right):
            return ModalToken({**left, **right})
        case _:
            return incoming


def merge_groups(left: TokenGroup, right: TokenGroup) -> TokenGroup:
    """Key union of two groups, merging shared keys with merge_nodes()."""
    merged = dict(left.children)
    for key, child in right.children.items():
        merged[key] = merge_nodes(merged.get(key), child)
    return TokenGroup(merged)


def merge_trees(trees: list[TokenGroup]) -> TokenGroup:
    """Fold trees left to right; later trees win on conflicts."""
    result = TokenGroup()
    for tree in trees:
        result = merge_groups(result, tree)
    return result


# =============================================================================
# Transforms
# =============================================================================


def map_leaves(
    group: TokenGroup,
    fn: Callable[[TokenLeaf | ModalToken], TokenNode | None],
    *,
    prune_empty: bool = False,
) -> TokenGroup:
    """Rebuild a group applying fn to every leaf; fn returning None drops the leaf."""
    children: dict[str, TokenNode] = {}
    for key, child in group.children.items():
        if isinstance(child, TokenGroup):
            mapped_group = map_leaves(child, fn, prune_empty=prune_empty)
            if prune_empty and not mapped_group.children and child.children:
                continue
            children[key] = mapped_group
            continue
        mapped = fn(child)
        if mapped is not None:
            children[key] = mapped
    return TokenGroup(children)


def tag_mode(group: TokenGroup, mode: str) -> TokenGroup:
    """Wrap every leaf of a freshly parsed tree as ModalToken({mode: token})."""

    def _wrap(node: TokenLeaf | ModalToken) -> TokenNode:
        if isinstance(node, TokenLeaf):
            return ModalToken({mode: node.token})
        return node

    return map_leaves(group, _wrap)


def collapse_single_mode(group: TokenGroup) -> TokenGroup:
    """Replace every single-mode ModalToken with a plain TokenLeaf."""

    def _collapse(node: TokenLeaf | ModalToken) -> TokenNode:
        if isinstance(node, ModalToken) and len(node.modes) == 1:
            return TokenLeaf(next(iter(node.modes.values())))
        return node

    return map_leaves(group, _collapse)


def iter_leaves(
    group: TokenGroup, prefix: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], TokenLeaf | ModalToken]]:
    """Yield (path, leaf) pairs depth-first in declaration order."""
    for key, child in group.children.items():
        path = (*prefix, key)
        if isinstance(child, TokenGroup):
            yield from iter_leaves(child, path)
        else:
            yield path, child
