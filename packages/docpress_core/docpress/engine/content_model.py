"""Content model builder - resolves layout blocks into layout-ready items."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..exceptions import LayoutError
from ..models import DEFAULT_TEXT_COLOR, BlockKind, LayoutBlock
from .geometry import MAX_FONT_SIZE, MIN_FONT_SIZE, Typography, clamp

logger = logging.getLogger(__name__)


# (margin_top, margin_bottom) per kind, in points
DEFAULT_MARGINS: Dict[BlockKind, tuple] = {
    BlockKind.HEADING: (18.0, 12.0),
    BlockKind.PARAGRAPH: (0.0, 4.0),
    BlockKind.RULE: (12.0, 12.0),
}
HEADING_SCALE = 1.5


class ContentModelBuilder:
    """Fills in kind-specific defaults and clamps typography.

    Pure transform: the input blocks are never modified, a new list of
    resolved blocks is returned. Missing values fall back to defaults
    silently. Only a block of unknown kind raises :class:`LayoutError`.
    """

    def __init__(self, typography: Optional[Typography] = None, default_color: str = DEFAULT_TEXT_COLOR):
        self.typography = typography or Typography()
        self.default_color = default_color

    def build(self, blocks: Iterable[LayoutBlock]) -> List[LayoutBlock]:
        resolved = [self.resolve(block) for block in blocks or []]
        logger.debug(f"Content model built: {len(resolved)} blocks")
        return resolved

    def resolve(self, block: LayoutBlock) -> LayoutBlock:
        kind = self.resolve_kind(block.kind)
        default_top, default_bottom = DEFAULT_MARGINS[kind]
        margin_top = default_top if block.margin_top is None else max(0.0, float(block.margin_top))
        margin_bottom = default_bottom if block.margin_bottom is None else max(0.0, float(block.margin_bottom))

        if kind == BlockKind.RULE:
            return LayoutBlock(
                text="",
                kind=kind,
                font_size=None,
                color=None,
                margin_top=margin_top,
                margin_bottom=margin_bottom,
            )

        font_size = block.font_size
        if font_size is None:
            font_size = self.default_font_size(kind)
        font_size = clamp(float(font_size), MIN_FONT_SIZE, MAX_FONT_SIZE, "block font size")

        return replace(
            block,
            text=block.text or "",
            kind=kind,
            font_size=font_size,
            color=block.color or self.default_color,
            margin_top=margin_top,
            margin_bottom=margin_bottom,
        )

    @staticmethod
    def resolve_kind(kind) -> BlockKind:
        if isinstance(kind, BlockKind):
            return kind
        try:
            return BlockKind(kind)
        except ValueError as e:
            raise LayoutError("Unknown block kind", repr(kind)) from e

    def default_font_size(self, kind: BlockKind) -> float:
        if kind == BlockKind.HEADING:
            return round(self.typography.font_size * HEADING_SCALE)
        return self.typography.font_size


def build_content_model(blocks: Iterable[LayoutBlock], typography: Optional[Typography] = None) -> List[LayoutBlock]:
    """Convenience wrapper around :class:`ContentModelBuilder`."""
    return ContentModelBuilder(typography).build(blocks)
