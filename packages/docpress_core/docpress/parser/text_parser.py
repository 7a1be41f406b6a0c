"""Plain-text input: paragraph splitting and HTML detection."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..models import LayoutBlock
from ..utils.number_format import NumberFormatPolicy, format_large_numbers

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n+")
_HTML_HINT = re.compile(r"<\s*/?\s*(html|body|h[1-6]|p|div|hr|br|span)\b[^>]*>", re.IGNORECASE)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def looks_like_html(content: Optional[str]) -> bool:
    """True if ``content`` contains any of the supported block or container tags."""
    if not content:
        return False
    return _HTML_HINT.search(content) is not None


def text_to_blocks(
    text: str,
    format_numbers: bool = False,
    number_policy: Optional[NumberFormatPolicy] = None,
) -> List[LayoutBlock]:
    """Split plain text into paragraph blocks.

    Blank lines separate paragraphs; single newlines inside a paragraph are
    kept and act as hard line breaks during layout. Font size and color are
    left unset so the document typography applies.

    Args:
        text: Input text
        format_numbers: Group large numbers with thousands separators
        number_policy: Rules for number grouping (implies ``format_numbers``)

    Returns:
        One paragraph block per non-empty paragraph
    """
    if number_policy is None and format_numbers:
        number_policy = NumberFormatPolicy()

    blocks: List[LayoutBlock] = []
    for chunk in _PARAGRAPH_BREAK.split(normalize_newlines(text or "")):
        lines = [line.rstrip() for line in chunk.split("\n")]
        paragraph = "\n".join(lines).strip("\n")
        if not paragraph.strip():
            continue
        if number_policy is not None:
            paragraph = format_large_numbers(paragraph, number_policy)
        blocks.append(LayoutBlock.paragraph(paragraph))

    logger.debug(f"Split text into {len(blocks)} paragraphs")
    return blocks
