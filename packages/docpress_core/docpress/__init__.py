"""
docpress - plain text and HTML to PDF without an external rendering engine.

Features:
- Multi-page paragraph flow for plain text
- Single-page positioned layout for a subset of HTML (h1-h6, p, hr)
- Hand-assembled PDF objects with a verified cross-reference table
- Built-in Helvetica / Helvetica-Bold fonts, no font embedding

Quick Start:
    from docpress import PdfGenerator

    generator = PdfGenerator(page_format="A4")
    result = generator.generate_from_text("Hello\\n\\nWorld")
    generator.save_pdf(result, "hello.pdf")
"""

from .version import __version__, __version_info__

from .exceptions import (
    AssemblyError,
    DocPressError,
    InvalidInputError,
    LayoutError,
    OutputError,
)
from .models import (
    BlockKind,
    DocumentMeta,
    GenerationResult,
    LayoutBlock,
    LayoutMode,
)
from .engine.geometry import PAGE_FORMATS, Margins, PageGeometry, Typography
from .engine.pdfcompiler import (
    PDFCompiler,
    PdfInfo,
    check_structure,
    get_pdf_info,
    is_well_formed,
    render,
    render_single_stream,
)
from .config import GeneratorOptions
from .api import PdfGenerator, generate_from_html, generate_from_text
from .utils.file_utils import save_pdf

__all__ = [
    "__version__",
    "__version_info__",
    "DocPressError",
    "InvalidInputError",
    "LayoutError",
    "AssemblyError",
    "OutputError",
    "BlockKind",
    "DocumentMeta",
    "GenerationResult",
    "LayoutBlock",
    "LayoutMode",
    "PAGE_FORMATS",
    "Margins",
    "PageGeometry",
    "Typography",
    "PDFCompiler",
    "PdfInfo",
    "check_structure",
    "get_pdf_info",
    "is_well_formed",
    "render",
    "render_single_stream",
    "GeneratorOptions",
    "PdfGenerator",
    "generate_from_html",
    "generate_from_text",
    "save_pdf",
]
