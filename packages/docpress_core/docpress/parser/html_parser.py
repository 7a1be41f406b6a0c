"""
HTML Parser - extracts layout blocks from a restricted subset of HTML.

Supports:
- h1-h6 headings, p paragraphs and hr rules
- inline styles: font-size, color, margin-top, margin-bottom, display
- hidden elements (``hidden`` attribute, ``display: none``) are skipped with their content
- nested inline tags are flattened to plain text
"""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser
from typing import Any, Dict, List, Optional, Tuple

from ..engine.pdfcompiler.utils import normalize_hex_color
from ..models import DEFAULT_TEXT_COLOR, BlockKind, LayoutBlock
from ..utils.number_format import NumberFormatPolicy, format_large_numbers

logger = logging.getLogger(__name__)

# CSS pixel values are scaled by this factor to obtain points
PX_SCALE = 0.85

HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
IGNORED_TAGS = {"head", "script", "style", "title", "template", "noscript"}
VOID_TAGS = {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"}

DEFAULTS: Dict[BlockKind, Dict[str, float]] = {
    BlockKind.HEADING: {"font_size_px": 18, "margin_top": 18, "margin_bottom": 12},
    BlockKind.PARAGRAPH: {"font_size_px": 16, "margin_top": 0, "margin_bottom": 4},
    BlockKind.RULE: {"margin_top": 12, "margin_bottom": 12},
}

_LENGTH = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(px|pt)?\s*$", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def parse_style(style: Optional[str]) -> Dict[str, str]:
    """Parse an inline ``style`` attribute into a lower-cased property dict."""
    result: Dict[str, str] = {}
    if not style:
        return result
    for declaration in style.split(";"):
        if ":" not in declaration:
            continue
        name, value = declaration.split(":", 1)
        name = name.strip().lower()
        value = value.strip()
        if name and value:
            result[name] = value
    return result


def parse_length(value: Optional[str]) -> Optional[float]:
    """Convert a CSS length (``16px``, ``12pt``, ``0``) to points; None if unsupported."""
    if not value:
        return None
    match = _LENGTH.match(value)
    if not match:
        return None
    number = float(match.group(1))
    unit = (match.group(2) or "px").lower()
    if unit == "pt":
        return number
    return number * PX_SCALE


class HTMLBlockParser(HTMLParser):
    """Collects headings, paragraphs and rules as :class:`LayoutBlock` values."""

    def __init__(self, number_policy: Optional[NumberFormatPolicy] = None):
        super().__init__(convert_charrefs=True)
        self.blocks: List[LayoutBlock] = []
        self.number_policy = number_policy
        self._current: Optional[Dict[str, Any]] = None
        self._skip_depth = 0

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        tag = tag.lower()
        attributes = {name.lower(): value for name, value in attrs}
        style = parse_style(attributes.get("style"))

        if self._skip_depth:
            if tag not in VOID_TAGS:
                self._skip_depth += 1
            return

        if tag in IGNORED_TAGS or self._is_hidden(attributes, style):
            if tag not in VOID_TAGS:
                self._skip_depth = 1
            logger.debug(f"Skipping hidden or non-content element <{tag}>")
            return

        if tag == "hr":
            self._finish_current()
            self.blocks.append(self._rule_block(style))
        elif tag in HEADING_TAGS or tag == "p":
            self._finish_current()
            kind = BlockKind.HEADING if tag in HEADING_TAGS else BlockKind.PARAGRAPH
            self._current = {"tag": tag, "kind": kind, "style": style, "parts": []}
        elif tag == "br" and self._current is not None:
            self._current["parts"].append(" ")

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.handle_starttag(tag, attrs)
        if tag.lower() not in VOID_TAGS:
            self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        if self._skip_depth:
            if tag not in VOID_TAGS:
                self._skip_depth -= 1
            return
        if self._current is not None and tag == self._current["tag"]:
            self._finish_current()

    def handle_data(self, data: str) -> None:
        if self._skip_depth or self._current is None:
            return
        self._current["parts"].append(data)

    def close(self) -> None:
        super().close()
        self._finish_current()

    def _finish_current(self) -> None:
        current, self._current = self._current, None
        if current is None:
            return

        text = _WHITESPACE.sub(" ", "".join(current["parts"])).strip()
        if not text:
            logger.debug(f"Dropping empty <{current['tag']}>")
            return
        if self.number_policy is not None:
            text = format_large_numbers(text, self.number_policy)

        kind: BlockKind = current["kind"]
        style: Dict[str, str] = current["style"]
        defaults = DEFAULTS[kind]

        font_size = parse_length(style.get("font-size"))
        if font_size is None:
            font_size = defaults["font_size_px"] * PX_SCALE
        color = normalize_hex_color(style.get("color", "")) or DEFAULT_TEXT_COLOR

        block = LayoutBlock(
            text=text,
            kind=kind,
            font_size=float(round(font_size)),
            color=color,
            margin_top=self._margin(style, "margin-top", defaults["margin_top"]),
            margin_bottom=self._margin(style, "margin-bottom", defaults["margin_bottom"]),
        )
        logger.debug(f"Extracted {kind.value}: {text[:60]!r} ({block.font_size}pt, {color})")
        self.blocks.append(block)

    def _rule_block(self, style: Dict[str, str]) -> LayoutBlock:
        defaults = DEFAULTS[BlockKind.RULE]
        return LayoutBlock.rule(
            margin_top=self._margin(style, "margin-top", defaults["margin_top"]),
            margin_bottom=self._margin(style, "margin-bottom", defaults["margin_bottom"]),
        )

    @staticmethod
    def _margin(style: Dict[str, str], name: str, default: float) -> float:
        value = parse_length(style.get(name))
        if value is None:
            return float(default)
        return float(max(0, round(value)))

    @staticmethod
    def _is_hidden(attributes: Dict[str, Optional[str]], style: Dict[str, str]) -> bool:
        if "hidden" in attributes:
            return True
        if style.get("display", "").lower() == "none":
            return True
        return style.get("visibility", "").lower() == "hidden"


def extract_blocks(
    html: str,
    format_numbers: bool = False,
    number_policy: Optional[NumberFormatPolicy] = None,
) -> List[LayoutBlock]:
    """Extract layout blocks from HTML.

    Args:
        html: Markup to parse
        format_numbers: Group large numbers with thousands separators
        number_policy: Rules for number grouping (implies ``format_numbers``)

    Returns:
        Blocks in document order
    """
    if number_policy is None and format_numbers:
        number_policy = NumberFormatPolicy()
    parser = HTMLBlockParser(number_policy=number_policy)
    parser.feed(html or "")
    parser.close()
    logger.debug(f"Extracted {len(parser.blocks)} content elements")
    return parser.blocks
