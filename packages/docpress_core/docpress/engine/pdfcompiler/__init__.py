"""PDF Compiler - assembles layout into PDF objects and serializes them."""

from .compiler import PDFCompiler, render, render_single_stream
from .validator import PdfInfo, check_structure, get_pdf_info, is_well_formed
from .writer import PdfWriter

__all__ = [
    "PDFCompiler",
    "PdfWriter",
    "PdfInfo",
    "render",
    "render_single_stream",
    "is_well_formed",
    "check_structure",
    "get_pdf_info",
]
