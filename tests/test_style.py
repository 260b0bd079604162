"""
Tests for the USERMARK style decoder.
"""

import pytest

from dsd_pipeline.parse.style import StyleMark, decode_style_mark


class TestDecodeStyleMark:
    """Tests for decode_style_mark()."""

    def test_bold_and_font_size(self):
        """Test bold token combined with an F- size token."""
        assert decode_style_mark("B F-10").as_dict() == {"bold": True, "size": 10}

    def test_bold_off_and_color(self):
        """Test !B together with a hex color."""
        assert decode_style_mark("!B 0xFF0000").as_dict() == {"bold": False, "color": "FF0000"}

    def test_unknown_token_ignored(self):
        """Test that unknown tokens yield an empty record."""
        assert decode_style_mark("XYZ").as_dict() == {}

    @pytest.mark.parametrize("mark", ["", "   ", None])
    def test_empty_mark(self, mark):
        """Test that empty or absent marks decode to an empty record."""
        assert decode_style_mark(mark) == StyleMark()

    def test_last_token_wins(self):
        """Test that later tokens override earlier ones per field."""
        mark = decode_style_mark("B F-10 !B F-12 0x000000 0xABCDEF")
        assert mark.bold is False
        assert mark.size == 12
        assert mark.color == "ABCDEF"

    def test_size_suffix_stripped(self):
        """Test that the BT suffix is removed before parsing the size."""
        assert decode_style_mark("F-11BT").size == 11

    def test_reserved_font_token_is_not_a_size(self):
        """Test that F-GL is not treated as a font size."""
        assert decode_style_mark("F-GL").size is None

    def test_point_size_marker(self):
        """Test P<digits> point-size tokens."""
        assert decode_style_mark("P9").size == 9
        assert decode_style_mark("PX9").size is None

    def test_color_requires_six_hex_digits(self):
        """Test that short or non-hex colors are ignored."""
        assert decode_style_mark("0xFFF").color is None
        assert decode_style_mark("0xGGGGGG").color is None
        assert decode_style_mark("0Xff00aa").color == "FF00AA"

    def test_non_numeric_size_ignored(self):
        """Test that an F- token without digits leaves size unset."""
        assert decode_style_mark("F-AB").size is None
