"""Tests for plain-text parsing and HTML detection."""

import pytest

from docpress.models import BlockKind
from docpress.parser.text_parser import looks_like_html, normalize_newlines, text_to_blocks


class TestTextToBlocks:
    """Test suite for text_to_blocks."""

    def test_paragraphs_split_on_blank_lines(self):
        """Blank lines separate paragraphs; single newlines are kept."""
        blocks = text_to_blocks("First para\nsecond line\n\nSecond para")

        assert [block.text for block in blocks] == ["First para\nsecond line", "Second para"]
        assert all(block.kind == BlockKind.PARAGRAPH for block in blocks)

    def test_style_left_unset(self):
        """Font size and color are left for the document defaults."""
        block = text_to_blocks("text")[0]
        assert block.font_size is None
        assert block.color is None

    def test_windows_newlines(self):
        """CRLF and CR are treated like LF."""
        assert [block.text for block in text_to_blocks("a\r\n\r\nb\rc")] == ["a", "b\nc"]

    def test_whitespace_only_blank_lines(self):
        """Lines containing only spaces still separate paragraphs."""
        assert len(text_to_blocks("a\n   \nb")) == 2

    def test_trailing_spaces_trimmed(self):
        """Trailing spaces on each line are removed."""
        assert text_to_blocks("a   \nb  ")[0].text == "a\nb"

    def test_empty_text(self):
        """Blank input has no paragraphs."""
        assert text_to_blocks("") == []
        assert text_to_blocks("\n\n  \n") == []

    def test_format_numbers(self):
        """Number grouping is applied only on request."""
        assert text_to_blocks("Paid 1000000")[0].text == "Paid 1000000"
        assert text_to_blocks("Paid 1000000", format_numbers=True)[0].text == "Paid 1,000,000"

    def test_normalize_newlines(self):
        assert normalize_newlines("a\r\nb\rc") == "a\nb\nc"


class TestLooksLikeHtml:
    """Test suite for HTML auto-detection."""

    @pytest.mark.parametrize("content", [
        "<p>x</p>",
        "<h2>Title</h2>",
        "<DIV class='x'>y</DIV>",
        "line<br/>break",
        "<html><body>x</body></html>",
        "text <span>inline</span>",
        "before <hr> after",
    ])
    def test_html(self, content):
        """Supported tags are detected."""
        assert looks_like_html(content)

    @pytest.mark.parametrize("content", [
        "a < b and c > d",
        "plain text",
        "<para>not html</para>",
        "<pre>code</pre>",
        "",
        None,
    ])
    def test_not_html(self, content):
        """Text without supported tags is plain text."""
        assert not looks_like_html(content)
