"""
Input parsers for docpress.

Turn plain text or restricted HTML into ordered layout blocks.
"""

from .html_parser import HTMLBlockParser, extract_blocks, parse_length, parse_style
from .text_parser import looks_like_html, normalize_newlines, text_to_blocks

__all__ = [
    "HTMLBlockParser",
    "extract_blocks",
    "parse_style",
    "parse_length",
    "looks_like_html",
    "normalize_newlines",
    "text_to_blocks",
]
