"""Paragraph line breaking based on an average glyph width approximation."""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from ..models import BlockKind, LayoutBlock, LayoutLine
from .geometry import PageGeometry

logger = logging.getLogger(__name__)

# Approximate Helvetica average glyph width as a fraction of the font size.
# This is not real font metrics: lines are bounded by character count only.
AVERAGE_CHAR_WIDTH_FACTOR = 0.6


def max_chars_per_line(geometry: PageGeometry, font_size: float, factor: float = AVERAGE_CHAR_WIDTH_FACTOR) -> int:
    """Number of characters that fit between the left and right margins (at least 1)."""
    if font_size <= 0 or factor <= 0:
        return 1
    return max(1, math.floor(geometry.content_width / (font_size * factor)))


class LineBreaker:
    """Simple greedy line breaker working on character counts."""

    def __init__(self, max_chars: int) -> None:
        self.max_chars = max(1, int(max_chars))

    def break_text(self, text: str) -> List[str]:
        """Wrap ``text`` into lines of at most ``max_chars`` characters.

        Newlines are hard breaks. Words are packed greedily; a word longer
        than the limit is split at the character level.
        """
        if not text:
            return [""]

        lines: List[str] = []
        for segment in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
            lines.extend(self._break_segment(segment))
        return lines

    def _break_segment(self, segment: str) -> List[str]:
        words = segment.split()
        if not words:
            return [""]

        lines: List[str] = []
        current_line = ""

        for word in words:
            candidate = f"{current_line} {word}" if current_line else word
            if len(candidate) <= self.max_chars:
                current_line = candidate
                continue

            if current_line:
                lines.append(current_line)
                current_line = ""

            if len(word) <= self.max_chars:
                current_line = word
                continue

            # Word is too long for any line - hard split it
            chunks = self.split_word(word)
            logger.debug(f"Hard split of {len(word)}-character word into {len(chunks)} pieces")
            lines.extend(chunks[:-1])
            current_line = chunks[-1]

        if current_line:
            lines.append(current_line)

        return lines

    def split_word(self, word: str) -> List[str]:
        return [word[i:i + self.max_chars] for i in range(0, len(word), self.max_chars)]


def wrap_text(text: str, max_chars: int) -> List[str]:
    """Wrap text with a :class:`LineBreaker` bounded by ``max_chars``."""
    return LineBreaker(max_chars).break_text(text)


def break_blocks(
    blocks: Sequence[LayoutBlock],
    geometry: PageGeometry,
    blank_line_between_blocks: bool = True,
) -> List[LayoutLine]:
    """Turn resolved blocks into the flat line sequence of the paginated variant.

    Each text block is wrapped with a limit derived from its own font size.
    A blank line separates consecutive text blocks; rules become a single
    rule line that keeps the rule margins. Blocks without text are skipped.
    """
    lines: List[LayoutLine] = []
    previous_was_text = False

    for index, block in enumerate(blocks):
        if block.is_rule:
            lines.append(
                LayoutLine(
                    text="",
                    kind=BlockKind.RULE,
                    font_size=0.0,
                    color="",
                    block_index=index,
                    margin_top=block.margin_top or 0.0,
                    margin_bottom=block.margin_bottom or 0.0,
                )
            )
            previous_was_text = False
            continue

        if not block.has_text:
            logger.debug(f"Skipping block {index} with no text: kind={block.kind.value}")
            continue

        if blank_line_between_blocks and previous_was_text:
            lines.append(
                LayoutLine(
                    text="",
                    kind=block.kind,
                    font_size=block.font_size,
                    color=block.color,
                    block_index=index,
                    blank=True,
                )
            )

        limit = max_chars_per_line(geometry, block.font_size)
        for text in LineBreaker(limit).break_text(block.text):
            lines.append(
                LayoutLine(
                    text=text,
                    kind=block.kind,
                    font_size=block.font_size,
                    color=block.color,
                    block_index=index,
                )
            )
        previous_was_text = True

    return lines
