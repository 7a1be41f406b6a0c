"""Text renderer for PDF - turns laid-out lines and blocks into content streams."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models import BlockKind, LayoutLine, LayoutPage, PlacedBlock
from ..geometry import PageGeometry
from ..pagination_manager import line_slots, lines_per_page
from .objects import PdfStream
from .resources import PdfFontRegistry
from .utils import hex_to_rgb

logger = logging.getLogger(__name__)

# Float slack when comparing accumulated positions with the bottom margin
POSITION_TOLERANCE = 1e-6


class PdfTextRenderer:
    """Emits content-stream operators for one page at a time.

    Paginated pages keep one text object per block run: the first line is
    positioned absolutely and the following lines with ``0 -<line height> Td``.
    Rules take whole line slots, with their top margin above the stroke.
    Single-stream items are positioned absolutely, one text object each.
    """

    def __init__(self, font_registry: PdfFontRegistry, geometry: PageGeometry):
        """Initialize text renderer.

        Args:
            font_registry: Font registry for font management
            geometry: Page geometry shared by every page of the document
        """
        self.font_registry = font_registry
        self.geometry = geometry

    def render_page(self, page: LayoutPage, line_height: float) -> PdfStream:
        """Render a paginated page.

        Control whitespace inside line text is kept as ``\\r``/``\\n``/``\\t``
        escapes in this mode.

        Args:
            page: Lines assigned to the page
            line_height: Fixed vertical advance per line

        Returns:
            Content stream for the page
        """
        stream = PdfStream()
        x = self.geometry.margin.left
        x_end = self.geometry.width - self.geometry.margin.right
        y = self.geometry.top
        bottom = self.geometry.margin.bottom
        max_slots = lines_per_page(self.geometry, line_height)
        open_run: Optional[tuple] = None

        for line in page.lines:
            if line.kind == BlockKind.RULE:
                extent = line_slots(line, line_height, max_slots) * line_height
                if y - extent < bottom - POSITION_TOLERANCE:
                    logger.warning(f"Page {page.number}: rule below bottom margin at y={y:.2f}, stopping")
                    break
                open_run = self._close_run(stream, open_run)
                # margin_top above the stroke, margin_bottom fills the rest of the slots
                rule_y = y - min(line.margin_top, extent - line_height) - line_height / 2
                stream.add_line(x, rule_y, x_end, rule_y)
                y -= extent
                continue

            y -= line_height
            if y < bottom - POSITION_TOLERANCE:
                logger.warning(f"Page {page.number}: line below bottom margin at y={y:.2f}, stopping")
                break

            if line.blank:
                open_run = self._close_run(stream, open_run)
                continue

            run_key = (line.block_index, line.font_size, line.color)
            if open_run == run_key:
                stream.move_text(0, -line_height)
            else:
                self._close_run(stream, open_run)
                font = self.font_registry.font_for(line.kind)
                stream.begin_text()
                stream.set_font(font.alias, line.font_size)
                stream.set_fill_color(hex_to_rgb(line.color))
                stream.move_text(x, y)
                open_run = run_key

            if line.text:
                stream.show_text(line.text)

        self._close_run(stream, open_run)
        logger.debug(f"Page {page.number}: {len(page.lines)} lines, {len(stream.commands)} operators")
        return stream

    def render_placements(self, placements: Sequence[PlacedBlock]) -> PdfStream:
        """Render single-stream items, each at its own absolute position.

        CR/LF/TAB inside the text collapse to single spaces in this mode.
        """
        stream = PdfStream()
        x = self.geometry.margin.left
        x_end = self.geometry.width - self.geometry.margin.right

        for index, placed in enumerate(placements):
            block = placed.block
            if block.is_rule:
                stream.add_line(x, placed.y, x_end, placed.y)
                logger.debug(f"Item {index}: rule at y={placed.y:.2f}")
                continue

            font = self.font_registry.font_for(block.kind)
            stream.add_text(
                font.alias,
                block.font_size,
                x,
                placed.y,
                block.text,
                color=hex_to_rgb(block.color),
                collapse_whitespace=True,
            )
            logger.debug(f"Item {index}: {block.kind.value} {block.text[:40]!r} at x={x}, y={placed.y:.2f}")

        return stream

    @staticmethod
    def _close_run(stream: PdfStream, open_run: Optional[tuple]) -> None:
        if open_run is not None:
            stream.end_text()
        return None
