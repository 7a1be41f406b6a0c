"""Tests for the HTML block extractor."""

import pytest

from docpress.models import DEFAULT_TEXT_COLOR, BlockKind
from docpress.parser.html_parser import HTMLBlockParser, extract_blocks, parse_length, parse_style


class TestExtractBlocks:
    """Test suite for extract_blocks."""

    def test_basic_document(self):
        """Headings, paragraphs and rules come out in document order."""
        blocks = extract_blocks("<h1>Title</h1><p>Body text</p><hr><p>End</p>")

        assert [block.kind for block in blocks] == [
            BlockKind.HEADING,
            BlockKind.PARAGRAPH,
            BlockKind.RULE,
            BlockKind.PARAGRAPH,
        ]
        assert [block.text for block in blocks] == ["Title", "Body text", "", "End"]

    def test_defaults(self):
        """Default sizes are 18px headings and 16px paragraphs scaled by 0.85."""
        heading, paragraph, rule = extract_blocks("<h2>H</h2><p>P</p><hr>")

        assert heading.font_size == 15.0
        assert (heading.margin_top, heading.margin_bottom) == (18.0, 12.0)
        assert paragraph.font_size == 14.0
        assert (paragraph.margin_top, paragraph.margin_bottom) == (0.0, 4.0)
        assert (rule.margin_top, rule.margin_bottom) == (12.0, 12.0)
        assert heading.color == paragraph.color == DEFAULT_TEXT_COLOR

    def test_inline_style(self):
        """font-size, color and margins are read from the style attribute."""
        block = extract_blocks('<p style="font-size: 20px; color: #f00; margin-top: 20px">x</p>')[0]

        assert block.font_size == 17.0
        assert block.color == "#ff0000"
        assert block.margin_top == 17.0
        assert block.margin_bottom == 4.0

    def test_point_sizes_not_scaled(self):
        """Sizes given in points are used as is."""
        assert extract_blocks('<p style="font-size:12pt">x</p>')[0].font_size == 12.0

    def test_named_and_invalid_colors(self):
        """Named colors resolve; invalid ones fall back to the default."""
        named, invalid = extract_blocks(
            '<p style="color: teal">a</p><p style="color: rgb(1, 2, 3)">b</p>'
        )
        assert named.color == "#008080"
        assert invalid.color == DEFAULT_TEXT_COLOR

    def test_rule_margins(self):
        """Rules honour their own margin styles."""
        rule = extract_blocks('<hr style="margin-top: 0px; margin-bottom: 40px"/>')[0]
        assert (rule.margin_top, rule.margin_bottom) == (0.0, 34.0)

    @pytest.mark.parametrize("html", [
        '<div hidden><p>secret</p></div><p>shown</p>',
        '<p style="display:none">secret</p><p>shown</p>',
        '<div style="display: none"><h2>secret <b>bold</b></h2></div><p>shown</p>',
        '<section style="visibility: hidden"><p>secret</p></section><p>shown</p>',
    ])
    def test_hidden_elements_skipped(self, html):
        """Hidden elements are dropped together with everything inside them."""
        assert [block.text for block in extract_blocks(html)] == ["shown"]

    def test_hidden_inline_inside_paragraph(self):
        """Hidden inline content is removed from the surrounding paragraph."""
        blocks = extract_blocks('<p>a <span style="display:none">b</span> c</p>')
        assert blocks[0].text == "a c"

    def test_non_content_tags_ignored(self):
        """head, title, style and script content never becomes text."""
        html = (
            "<html><head><title>T</title><style>p { color: red }</style></head>"
            '<body><p>a</p><script>var x = "<p>no</p>";</script></body></html>'
        )
        assert [block.text for block in extract_blocks(html)] == ["a"]

    def test_inline_tags_flattened(self):
        """Nested inline markup is reduced to its text."""
        block = extract_blocks("<p>Hello <b>bold</b> and <i>it</i>alic</p>")[0]
        assert block.text == "Hello bold and italic"

    def test_entities_decoded(self):
        """Character references are decoded."""
        assert extract_blocks("<p>Fish &amp; Chips &lt;3 &#169;</p>")[0].text == "Fish & Chips <3 ©"

    def test_whitespace_collapsed(self):
        """Runs of whitespace collapse to one space and the ends are trimmed."""
        assert extract_blocks("<p>  a\n   b\t </p>")[0].text == "a b"

    def test_line_break_becomes_space(self):
        """<br> separates words inside a block."""
        assert extract_blocks("<p>a<br>b</p>")[0].text == "a b"

    def test_empty_blocks_dropped(self):
        """Headings and paragraphs without text are dropped."""
        assert extract_blocks("<p> </p><h2></h2><p><b></b></p>") == []

    def test_unclosed_paragraphs(self):
        """An opening block tag ends the previous unclosed block."""
        assert [block.text for block in extract_blocks("<p>one<p>two")] == ["one", "two"]

    def test_uppercase_tags(self):
        """Tag names are case-insensitive."""
        assert extract_blocks("<H3>Loud</H3>")[0].kind == BlockKind.HEADING

    def test_format_numbers_opt_in(self):
        """Large numbers are grouped only on request."""
        html = "<p>Total 1234567</p>"

        assert extract_blocks(html)[0].text == "Total 1234567"
        assert extract_blocks(html, format_numbers=True)[0].text == "Total 1,234,567"

    def test_empty_input(self):
        """Empty or missing markup yields no blocks."""
        assert extract_blocks("") == []
        assert extract_blocks(None) == []

    def test_parser_reusable_state(self):
        """A parser collects blocks across feed calls."""
        parser = HTMLBlockParser()
        parser.feed("<p>one</p>")
        parser.feed("<p>two")
        parser.close()
        assert [block.text for block in parser.blocks] == ["one", "two"]


class TestStyleHelpers:
    """Test suite for style parsing helpers."""

    def test_parse_style(self):
        """Declarations are split and names lower-cased."""
        assert parse_style("Color: Red; FONT-SIZE:12px;;bad") == {"color": "Red", "font-size": "12px"}

    def test_parse_style_empty(self):
        assert parse_style(None) == {}

    @pytest.mark.parametrize("value,expected", [
        ("20px", 17.0),
        ("12pt", 12.0),
        ("0", 0.0),
        ("1.5em", None),
        ("", None),
        ("auto", None),
    ])
    def test_parse_length(self, value, expected):
        """px values are scaled to points; unsupported units are ignored."""
        assert parse_length(value) == expected
