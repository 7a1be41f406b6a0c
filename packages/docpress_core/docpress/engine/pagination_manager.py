"""

Pagination for the two generation variants.

Handles:
- splitting wrapped lines into pages bounded by lines-per-page (paginated variant)
- tracking a vertical cursor and truncating at the bottom margin (single-stream variant)

"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..models import BlockKind, LayoutBlock, LayoutLine, LayoutPage, PlacedBlock
from .geometry import PageGeometry

logger = logging.getLogger(__name__)

LINE_HEIGHT_MULTIPLIER = 1.5
DEFAULT_RULE_MARGIN = 8.0


def lines_per_page(geometry: PageGeometry, line_height: float) -> int:
    """Number of fixed-height lines between the top and bottom margins (at least 1)."""
    if line_height <= 0:
        return 1
    return max(1, math.floor(geometry.content_height / line_height))


def line_slots(line: LayoutLine, line_height: float, max_slots: Optional[int] = None) -> int:
    """Number of fixed-height slots a line occupies.

    Text and blank lines take one slot. A rule takes one slot for the stroke
    plus enough slots to hold its top and bottom margins, capped at
    ``max_slots`` so a rule always fits on an empty page.
    """
    if line.kind != BlockKind.RULE or line_height <= 0:
        return 1
    slots = 1 + math.ceil((line.margin_top + line.margin_bottom) / line_height)
    if max_slots is not None:
        slots = min(slots, max(1, max_slots))
    return slots


class PaginationManager:
    """Splits a flat line sequence into pages."""

    def __init__(self, geometry: PageGeometry, line_height: float):
        self.geometry = geometry
        self.line_height = line_height
        self.lines_per_page = lines_per_page(geometry, line_height)

    def paginate(self, lines: Sequence[LayoutLine]) -> List[LayoutPage]:
        """Assign lines to pages in order.

        Capacity is counted in slots (see :func:`line_slots`). Blank
        separator lines are not carried to the top of a new page. At least
        one page is always returned, even for empty input.
        """
        pages: List[LayoutPage] = [LayoutPage(number=1)]
        used = 0

        for line in lines:
            page = pages[-1]
            slots = line_slots(line, self.line_height, self.lines_per_page)
            if used + slots > self.lines_per_page:
                page = LayoutPage(number=len(pages) + 1)
                pages.append(page)
                used = 0
            if line.blank and page.is_empty:
                continue
            page.add_line(line)
            used += slots

        logger.debug(
            f"Paginated {len(lines)} lines into {len(pages)} pages "
            f"({self.lines_per_page} lines per page, line height {self.line_height})"
        )
        return pages


@dataclass
class PlacementResult:
    """Blocks positioned on the single page, plus what did not fit."""

    placed: List[PlacedBlock] = field(default_factory=list)
    truncated: int = 0

    @property
    def is_truncated(self) -> bool:
        return self.truncated > 0


class BlockPlacer:
    """Tracks the vertical cursor of the single-stream variant.

    The cursor starts at ``height - margin.top`` and moves down by
    ``margin_top + font_size * 1.5 + margin_bottom`` per text block. The
    first block that would cross the bottom margin stops placement; it and
    everything after it is dropped.
    """

    def __init__(self, geometry: PageGeometry, line_height_multiplier: float = LINE_HEIGHT_MULTIPLIER):
        self.geometry = geometry
        self.line_height_multiplier = line_height_multiplier

    def place(self, blocks: Sequence[LayoutBlock]) -> PlacementResult:
        result = PlacementResult()
        bottom = self.geometry.margin.bottom
        cursor = self.geometry.top

        for index, block in enumerate(blocks):
            if block.is_rule:
                cursor -= DEFAULT_RULE_MARGIN if block.margin_top is None else block.margin_top
                if cursor < bottom:
                    result.truncated = len(blocks) - index
                    break
                result.placed.append(PlacedBlock(block=block, y=cursor))
                cursor -= DEFAULT_RULE_MARGIN if block.margin_bottom is None else block.margin_bottom
                continue

            if not block.has_text:
                logger.debug(f"Skipping item {index} with no text: kind={block.kind.value}")
                continue

            cursor -= block.margin_top or 0.0
            line_height = block.font_size * self.line_height_multiplier
            if cursor - line_height < bottom:
                result.truncated = len(blocks) - index
                break

            result.placed.append(PlacedBlock(block=block, y=cursor - block.font_size))
            cursor -= line_height
            cursor -= block.margin_bottom or 0.0

        if result.is_truncated:
            logger.warning(
                f"Content would go off page, stopping at bottom margin: "
                f"{len(result.placed)} items placed, {result.truncated} dropped"
            )
        return result
