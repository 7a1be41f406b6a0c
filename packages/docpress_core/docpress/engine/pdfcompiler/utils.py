"""Utility functions for PDF generation."""

from __future__ import annotations

from datetime import datetime
from typing import Tuple

# Byte encoding for every object body and content stream. Matches the
# /WinAnsiEncoding declared on the standard fonts.
PDF_ENCODING = "cp1252"

NAMED_COLORS = {
    "black": "#000000",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "gray": "#808080",
    "grey": "#808080",
    "silver": "#c0c0c0",
    "maroon": "#800000",
    "navy": "#000080",
    "orange": "#ffa500",
    "purple": "#800080",
    "teal": "#008080",
}


def normalize_hex_color(color: str) -> str | None:
    """Return ``#rrggbb`` for a 6-digit, 3-digit or named color, else None."""
    if not color or not isinstance(color, str):
        return None
    value = color.strip().lower()
    value = NAMED_COLORS.get(value, value)
    value = value.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) != 6:
        return None
    try:
        int(value, 16)
    except ValueError:
        return None
    return f"#{value}"


def hex_to_rgb(hex_color: str, default: Tuple[float, float, float] = (0.0, 0.0, 0.0)) -> Tuple[float, float, float]:
    """Convert a HEX color to an RGB tuple on a 0-1 scale.

    Short ``#rgb`` colors are expanded to ``#rrggbb`` first and every channel
    is rounded to 3 decimals.

    Args:
        hex_color: Color in HEX format (e.g., "#FF0000", "F00") or a basic CSS name
        default: Default color to return if conversion fails

    Returns:
        Tuple of (r, g, b) values in 0-1 scale
    """
    normalized = normalize_hex_color(hex_color)
    if normalized is None:
        return default

    return (
        round(int(normalized[1:3], 16) / 255.0, 3),
        round(int(normalized[3:5], 16) / 255.0, 3),
        round(int(normalized[5:7], 16) / 255.0, 3),
    )


def escape_pdf_string(text: str, collapse_whitespace: bool = False) -> str:
    """Escape special characters for a PDF literal string.

    Backslash and parentheses are always backslash-escaped. CR, LF and TAB
    become ``\\r``, ``\\n`` and ``\\t`` escapes, or a single space each when
    ``collapse_whitespace`` is set.

    Args:
        text: Input string (will be converted to str if not already)
        collapse_whitespace: Replace control whitespace with spaces instead of escaping it

    Returns:
        Escaped string for PDF
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)

    replacements = {
        "\\": "\\\\",
        "(": "\\(",
        ")": "\\)",
    }
    if collapse_whitespace:
        replacements.update({"\r": " ", "\n": " ", "\t": " "})
    else:
        replacements.update({"\n": "\\n", "\r": "\\r", "\t": "\\t"})

    return "".join(replacements.get(char, char) for char in text)


def unescape_pdf_string(text: str) -> str:
    """Reverse :func:`escape_pdf_string` (escaped mode)."""
    escapes = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "(": "(", ")": ")"}
    result = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            result.append(escapes.get(text[i + 1], text[i + 1]))
            i += 2
            continue
        result.append(char)
        i += 1
    return "".join(result)


def encode_pdf_text(text: str) -> bytes:
    """Encode text the way it is written into the file."""
    return text.encode(PDF_ENCODING, errors="replace")


def format_pdf_number(value: float) -> str:
    """Format number for PDF (limit decimal places).

    Args:
        value: Numeric value

    Returns:
        Formatted string
    """
    formatted = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if formatted in ("-0", "") else formatted


def format_pdf_color(rgb: Tuple[float, float, float]) -> str:
    """Format an RGB triple with fixed 3-decimal precision."""
    return f"{rgb[0]:.3f} {rgb[1]:.3f} {rgb[2]:.3f}"


def format_pdf_date(moment: datetime) -> str:
    """Format a timestamp as a PDF date string body (``D:YYYYMMDDHHmmSS``)."""
    return moment.strftime("D:%Y%m%d%H%M%S")
