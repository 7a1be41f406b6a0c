"""
Layout engine for docpress.

Content model building, line breaking, pagination and PDF compilation.
"""

from .content_model import ContentModelBuilder, build_content_model
from .geometry import PAGE_FORMATS, Margins, PageGeometry, Typography
from .line_breaker import AVERAGE_CHAR_WIDTH_FACTOR, LineBreaker, max_chars_per_line, wrap_text
from .pagination_manager import BlockPlacer, PaginationManager, lines_per_page

__all__ = [
    "ContentModelBuilder",
    "build_content_model",
    "PAGE_FORMATS",
    "Margins",
    "PageGeometry",
    "Typography",
    "AVERAGE_CHAR_WIDTH_FACTOR",
    "LineBreaker",
    "max_chars_per_line",
    "wrap_text",
    "BlockPlacer",
    "PaginationManager",
    "lines_per_page",
]
