"""
Utils module for docpress.

Logging setup, file helpers and optional text transforms.
"""

from .file_utils import ensure_directory, sanitize_filename, save_pdf
from .number_format import NumberFormatPolicy, format_large_numbers
from .rich_logger import render_table, set_debug, setup_logging

__all__ = [
    "ensure_directory",
    "sanitize_filename",
    "save_pdf",
    "NumberFormatPolicy",
    "format_large_numbers",
    "render_table",
    "set_debug",
    "setup_logging",
]
