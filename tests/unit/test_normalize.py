"""Tests for key and reference normalization."""

from __future__ import annotations

import pytest


class TestNormalizeKey:
    """Test normalize_key() canonical spellings."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("font size", "fontSize"),
            ("font-size", "fontSize"),
            ("font_size", "fontSize"),
            ("line-height value", "lineHeightValue"),
            ("Font Size", "fontSize"),
            ("font  --  size", "fontSize"),
        ],
    )
    def test_separated_keys(self, key, expected):
        from figtokens.core.normalize import normalize_key

        assert normalize_key(key) == expected

    def test_override_table_wins(self):
        from figtokens.core.normalize import normalize_key

        assert normalize_key("Text_sizes") == "fontSize"
        assert normalize_key("Line_heights") == "lineHeights"

    def test_override_checked_on_trimmed_key(self):
        from figtokens.core.normalize import normalize_key

        assert normalize_key("  Text_sizes ") == "fontSize"

    def test_no_separator_unchanged(self):
        from figtokens.core.normalize import normalize_key

        assert normalize_key("fontSize") == "fontSize"
        assert normalize_key("PascalCase") == "PascalCase"
        assert normalize_key("1440") == "1440"

    def test_later_segments_keep_their_tail(self):
        from figtokens.core.normalize import normalize_key

        assert normalize_key("brand HEX value") == "brandHEXValue"

    def test_empty_and_whitespace(self):
        from figtokens.core.normalize import normalize_key

        assert normalize_key("") == ""
        assert normalize_key("   ") == ""
        assert normalize_key("---") == ""

    @pytest.mark.parametrize("key", ["font size", "Text_sizes", "line-height value", "A b_c-d", "x"])
    def test_idempotent(self, key):
        from figtokens.core.normalize import normalize_key

        once = normalize_key(key)
        assert normalize_key(once) == once


class TestNormalizeIdentifier:
    """Test collection / mode name normalization."""

    def test_lowercases_first_character(self):
        from figtokens.core.normalize import normalize_identifier

        assert normalize_identifier("Colors") == "colors"
        assert normalize_identifier("Light") == "light"
        assert normalize_identifier("Mode 1") == "mode1"
        assert normalize_identifier("High Contrast") == "highContrast"

    def test_idempotent(self):
        from figtokens.core.normalize import normalize_identifier

        assert normalize_identifier(normalize_identifier("Dark Mode")) == "darkMode"

    def test_empty(self):
        from figtokens.core.normalize import normalize_identifier

        assert normalize_identifier(" ") == ""


class TestNormalizeReferences:
    """Test reference rewriting inside strings."""

    def test_whole_reference(self):
        from figtokens.core.normalize import normalize_references

        assert normalize_references("{Font Size.body}") == "{fontSize.body}"

    def test_embedded_references(self):
        from figtokens.core.normalize import normalize_references

        result = normalize_references("{space-sm} solid {Brand Color.primary}")
        assert result == "{spaceSm} solid {brandColor.primary}"

    def test_references_skip_override_table(self):
        from figtokens.core.normalize import normalize_references

        # The whole inner text is camel-cased; the group override table does not apply.
        assert normalize_references("{Text_sizes.body}") == "{textSizes.body}"

    def test_plain_strings_untouched(self):
        from figtokens.core.normalize import normalize_references

        assert normalize_references("#ffffff") == "#ffffff"
        assert normalize_references("no braces here") == "no braces here"
