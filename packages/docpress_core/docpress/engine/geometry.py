"""Geometry primitives and helpers for layout calculations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple, Union

logger = logging.getLogger(__name__)


MIN_PAGE_DIMENSION = 200.0
MAX_PAGE_DIMENSION = 3000.0
MIN_FONT_SIZE = 8.0
MAX_FONT_SIZE = 24.0
MIN_LINE_HEIGHT = 1.0
MAX_LINE_HEIGHT = 200.0
DEFAULT_MARGIN = 72.0

# Page formats in points (1/72 inch)
PAGE_FORMATS: Dict[str, Tuple[float, float]] = {
    "A3": (841.89, 1190.55),
    "A4": (595.28, 841.89),
    "LETTER": (612.0, 792.0),
    "LEGAL": (612.0, 1008.0),
    "TABLOID": (792.0, 1224.0),
}
DEFAULT_PAGE_FORMAT = "LETTER"


def clamp(value: float, low: float, high: float, label: str = "value") -> float:
    """Clamp ``value`` into ``[low, high]``, noting any adjustment at DEBUG level."""
    clamped = max(low, min(high, value))
    if clamped != value:
        logger.debug(f"{label}={value} out of range [{low}, {high}], clamped to {clamped}")
    return clamped


@dataclass(frozen=True, slots=True)
class Margins:
    top: float = DEFAULT_MARGIN
    right: float = DEFAULT_MARGIN
    bottom: float = DEFAULT_MARGIN
    left: float = DEFAULT_MARGIN

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)

    @classmethod
    def coerce(cls, value: Union["Margins", Dict[str, float], Iterable[float], float, None]) -> "Margins":
        """Build margins from a number, a dict or a (top, right, bottom, left) sequence."""
        if value is None:
            return cls()
        if isinstance(value, Margins):
            return value
        if isinstance(value, (int, float)):
            return cls.uniform(float(value))
        if isinstance(value, dict):
            default = cls()
            return cls(
                top=float(value.get("top", default.top)),
                right=float(value.get("right", default.right)),
                bottom=float(value.get("bottom", default.bottom)),
                left=float(value.get("left", default.left)),
            )
        top, right, bottom, left = value
        return cls(float(top), float(right), float(bottom), float(left))


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Page size and margins for one generation call."""

    width: float = PAGE_FORMATS[DEFAULT_PAGE_FORMAT][0]
    height: float = PAGE_FORMATS[DEFAULT_PAGE_FORMAT][1]
    margin: Margins = field(default_factory=Margins)

    @classmethod
    def create(
        cls,
        width: float,
        height: float,
        margin: Union[Margins, Dict[str, float], Iterable[float], float, None] = None,
    ) -> "PageGeometry":
        """Create geometry with every value clamped to a usable range.

        Width and height are bounded to 200-3000pt; each margin is kept
        non-negative and below half of the dimension it eats into.
        """
        width = clamp(float(width), MIN_PAGE_DIMENSION, MAX_PAGE_DIMENSION, "page width")
        height = clamp(float(height), MIN_PAGE_DIMENSION, MAX_PAGE_DIMENSION, "page height")
        margins = Margins.coerce(margin)
        max_horizontal = width / 2 - 1
        max_vertical = height / 2 - 1
        margins = Margins(
            top=clamp(margins.top, 0.0, max_vertical, "margin top"),
            right=clamp(margins.right, 0.0, max_horizontal, "margin right"),
            bottom=clamp(margins.bottom, 0.0, max_vertical, "margin bottom"),
            left=clamp(margins.left, 0.0, max_horizontal, "margin left"),
        )
        return cls(width=width, height=height, margin=margins)

    @classmethod
    def from_format(
        cls,
        page_format: str = DEFAULT_PAGE_FORMAT,
        margin: Union[Margins, Dict[str, float], Iterable[float], float, None] = None,
        landscape: bool = False,
    ) -> "PageGeometry":
        key = (page_format or DEFAULT_PAGE_FORMAT).upper()
        if key not in PAGE_FORMATS:
            logger.debug(f"Unknown page format {page_format!r}, using {DEFAULT_PAGE_FORMAT}")
            key = DEFAULT_PAGE_FORMAT
        width, height = PAGE_FORMATS[key]
        if landscape:
            width, height = height, width
        return cls.create(width, height, margin)

    @property
    def content_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def content_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    @property
    def top(self) -> float:
        """Y coordinate where content starts (PDF origin is bottom-left)."""
        return self.height - self.margin.top


@dataclass(frozen=True, slots=True)
class Typography:
    """Default body font size and the fixed line advance of the paginated variant."""

    font_size: float = 12.0
    line_height: Optional[float] = None

    @classmethod
    def create(cls, font_size: float = 12.0, line_height: Optional[float] = None) -> "Typography":
        font_size = clamp(float(font_size), MIN_FONT_SIZE, MAX_FONT_SIZE, "font size")
        if line_height is not None:
            line_height = clamp(float(line_height), MIN_LINE_HEIGHT, MAX_LINE_HEIGHT, "line height")
        return cls(font_size=font_size, line_height=line_height)

    @property
    def effective_line_height(self) -> float:
        if self.line_height is None:
            return round(self.font_size * 1.2, 2)
        return self.line_height
