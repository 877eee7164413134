"""Tests for the token tree sum type and merging."""

from __future__ import annotations


def _color(value: str):
    from figtokens.core.ir import DesignToken, TokenType

    return DesignToken(type=TokenType.COLOR, value=value)


class TestMergeNodes:
    """Test pattern-matched merge."""

    def test_disjoint_groups_union(self):
        from figtokens.core.tree import TokenGroup, TokenLeaf, merge_nodes

        left = TokenGroup({"a": TokenLeaf(_color("#111"))})
        right = TokenGroup({"b": TokenLeaf(_color("#222"))})

        merged = merge_nodes(left, right)
        assert isinstance(merged, TokenGroup)
        assert list(merged) == ["a", "b"]

    def test_disjoint_union_is_order_independent(self):
        from figtokens.core.tree import TokenGroup, TokenLeaf, merge_groups

        left = TokenGroup({"a": TokenLeaf(_color("#111"))})
        right = TokenGroup({"b": TokenLeaf(_color("#222"))})

        assert set(merge_groups(left, right)) == set(merge_groups(right, left)) == {"a", "b"}

    def test_nested_groups_merge_recursively(self):
        from figtokens.core.tree import TokenGroup, TokenLeaf, merge_nodes

        left = TokenGroup({"brand": TokenGroup({"primary": TokenLeaf(_color("#111"))})})
        right = TokenGroup({"brand": TokenGroup({"secondary": TokenLeaf(_color("#222"))})})

        merged = merge_nodes(left, right)
        assert merged.find(["brand", "primary"]) is not None
        assert merged.find(["brand", "secondary"]) is not None

    def test_modal_tokens_merge_per_mode(self):
        from figtokens.core.tree import ModalToken, merge_nodes

        left = ModalToken({"light": _color("#fff"), "dark": _color("#000")})
        right = ModalToken({"dark": _color("#111")})

        merged = merge_nodes(left, right)
        assert isinstance(merged, ModalToken)
        assert merged.values() == {"light": "#fff", "dark": "#111"}

    def test_mixed_kinds_last_writer_wins(self):
        from figtokens.core.tree import TokenGroup, TokenLeaf, merge_nodes

        group = TokenGroup({"x": TokenLeaf(_color("#111"))})
        leaf = TokenLeaf(_color("#222"))

        assert merge_nodes(group, leaf) is leaf
        assert merge_nodes(leaf, group) is group

    def test_missing_existing_returns_incoming(self):
        from figtokens.core.tree import TokenLeaf, merge_nodes

        leaf = TokenLeaf(_color("#222"))
        assert merge_nodes(None, leaf) is leaf

    def test_merge_trees_folds_left_to_right(self):
        from figtokens.core.tree import TokenGroup, TokenLeaf, merge_trees

        trees = [
            TokenGroup({"a": TokenLeaf(_color("#1"))}),
            TokenGroup({"a": TokenLeaf(_color("#2"))}),
            TokenGroup({"a": TokenLeaf(_color("#3"))}),
        ]
        assert merge_trees(trees).get("a").token.value == "#3"

    def test_merge_does_not_mutate_inputs(self):
        from figtokens.core.tree import TokenGroup, TokenLeaf, merge_groups

        left = TokenGroup({"a": TokenLeaf(_color("#1"))})
        right = TokenGroup({"b": TokenLeaf(_color("#2"))})
        merge_groups(left, right)

        assert list(left) == ["a"]
        assert list(right) == ["b"]


class TestTransforms:
    """Test mode tagging, collapsing and iteration."""

    def test_tag_mode_wraps_leaves(self):
        from figtokens.core.tree import ModalToken, TokenGroup, TokenLeaf, tag_mode

        tree = TokenGroup({"g": TokenGroup({"a": TokenLeaf(_color("#1"))})})
        tagged = tag_mode(tree, "light")

        node = tagged.find(["g", "a"])
        assert isinstance(node, ModalToken)
        assert node.values() == {"light": "#1"}

    def test_collapse_single_mode(self):
        from figtokens.core.tree import ModalToken, TokenGroup, TokenLeaf, collapse_single_mode

        tree = TokenGroup(
            {
                "one": ModalToken({"light": _color("#1")}),
                "two": ModalToken({"light": _color("#1"), "dark": _color("#2")}),
            }
        )
        collapsed = collapse_single_mode(tree)

        assert isinstance(collapsed.get("one"), TokenLeaf)
        assert isinstance(collapsed.get("two"), ModalToken)

    def test_iter_leaves_declaration_order(self):
        from figtokens.core.tree import TokenGroup, TokenLeaf, iter_leaves

        tree = TokenGroup(
            {
                "b": TokenLeaf(_color("#1")),
                "a": TokenGroup({"z": TokenLeaf(_color("#2")), "y": TokenLeaf(_color("#3"))}),
            }
        )
        assert [path for path, _ in iter_leaves(tree)] == [("b",), ("a", "z"), ("a", "y")]


class TestToDict:
    """Test plain JSON rendering of nodes."""

    def test_modal_token_renders_mode_map(self):
        from figtokens.core.tree import ModalToken

        node = ModalToken({"light": _color("#fff"), "dark": _color("#000")})
        assert node.to_dict() == {"type": "color", "value": {"light": "#fff", "dark": "#000"}}

    def test_leaf_includes_description(self):
        from figtokens.core.ir import DesignToken, TokenType
        from figtokens.core.tree import TokenLeaf

        leaf = TokenLeaf(DesignToken(type=TokenType.STRING, value="x", description="hint"))
        assert leaf.to_dict() == {"type": "string", "value": "x", "description": "hint"}

    def test_group_nests(self):
        from figtokens.core.tree import TokenGroup, TokenLeaf

        tree = TokenGroup({"g": TokenGroup({"a": TokenLeaf(_color("#1"))})})
        assert tree.to_dict() == {"g": {"a": {"type": "color", "value": "#1"}}}
