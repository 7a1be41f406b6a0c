"""
Simple high-level API for docpress.

Usage example:
>>> from docpress import PdfGenerator
>>>
>>> generator = PdfGenerator(page_format="A4", title="Report")
>>>
>>> # Plain text, flowed over as many pages as needed
>>> result = generator.generate_from_text("Hello\\n\\nWorld")
>>>
>>> # HTML subset, single page, truncated at the bottom margin
>>> result = generator.generate_from_html("<h1>Title</h1><p>Body</p>")
>>>
>>> generator.save_pdf(result, "out.pdf")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from .config import GeneratorOptions
from .engine.pdfcompiler import PDFCompiler, PdfInfo, get_pdf_info
from .exceptions import InvalidInputError
from .models import GenerationResult, LayoutBlock, LayoutMode
from .parser import extract_blocks, looks_like_html, text_to_blocks
from .utils.file_utils import save_pdf

logger = logging.getLogger(__name__)

__all__ = [
    "PdfGenerator",
    "generate_from_text",
    "generate_from_html",
]


class PdfGenerator:
    """
    Converts plain text or restricted HTML to PDF bytes.

    The generator holds only its options; each call builds its own layout
    and object graph, so one instance may be used concurrently.

    Examples:
    >>> generator = PdfGenerator()
    >>> result = generator.generate("<p>Hello</p>")
    >>> result.page_count
    1
    """

    def __init__(self, options: Optional[GeneratorOptions] = None, **kwargs: Any):
        """
        Initialize generator.

        Args:
            options: Base options (defaults when omitted)
            **kwargs: Option overrides (see :class:`GeneratorOptions`)
        """
        base = options or GeneratorOptions()
        self.options = base.merged(**kwargs) if kwargs else base

    def generate_from_text(self, text: Optional[str], **overrides: Any) -> GenerationResult:
        """
        Generate a multi-page PDF from plain text.

        Args:
            text: Input text; blank lines separate paragraphs
            **overrides: Option overrides for this call only

        Returns:
            GenerationResult with the PDF buffer

        Raises:
            InvalidInputError: If text is None, empty or too large
        """
        options = self._options_for(overrides)
        self._validate_content(text, options)
        blocks = text_to_blocks(text, format_numbers=options.format_numbers)
        return self._compile(blocks, LayoutMode.PAGINATED, options)

    def generate_from_html(
        self, html: Optional[str], paginate: bool = False, **overrides: Any
    ) -> GenerationResult:
        """
        Generate a PDF from HTML headings, paragraphs and rules.

        Args:
            html: HTML content
            paginate: Flow blocks over several pages instead of truncating on one
            **overrides: Option overrides for this call only

        Returns:
            GenerationResult with the PDF buffer

        Raises:
            InvalidInputError: If html is None, empty or too large
        """
        options = self._options_for(overrides)
        self._validate_content(html, options)
        blocks = extract_blocks(html, format_numbers=options.format_numbers)
        if not blocks:
            logger.warning("No headings, paragraphs or rules found in HTML; producing an empty page")
        mode = LayoutMode.PAGINATED if paginate else LayoutMode.SINGLE_STREAM
        return self._compile(blocks, mode, options)

    def generate(self, content: Optional[str], paginate: bool = False, **overrides: Any) -> GenerationResult:
        """Detect HTML or plain text and dispatch to the matching entry point."""
        self._validate_content(content, self._options_for(overrides))
        if looks_like_html(content):
            logger.debug("Content detected as HTML")
            return self.generate_from_html(content, paginate=paginate, **overrides)
        logger.debug("Content detected as plain text")
        return self.generate_from_text(content, **overrides)

    def generate_from_blocks(
        self,
        blocks: Sequence[LayoutBlock],
        mode: Union[LayoutMode, str] = LayoutMode.PAGINATED,
        **overrides: Any,
    ) -> GenerationResult:
        """Compile prepared layout blocks without parsing."""
        return self._compile(list(blocks), LayoutMode(mode), self._options_for(overrides))

    @staticmethod
    def save_pdf(data: Union[bytes, GenerationResult], path: Union[str, Path]) -> Path:
        """Write a buffer (or a result's buffer) to ``path``."""
        if isinstance(data, GenerationResult):
            data = data.data
        return save_pdf(data, path)

    @staticmethod
    def get_pdf_info(data: Union[bytes, GenerationResult]) -> PdfInfo:
        """Size, version, page count and validity of a buffer."""
        if isinstance(data, GenerationResult):
            data = data.data
        return get_pdf_info(data)

    def _options_for(self, overrides: dict) -> GeneratorOptions:
        if not overrides:
            return self.options
        return self.options.merged(**overrides)

    @staticmethod
    def _validate_content(content: Optional[str], options: GeneratorOptions) -> None:
        if content is None:
            raise InvalidInputError("Content cannot be null")
        if not isinstance(content, str):
            raise InvalidInputError("Content must be a string", type(content).__name__)
        if not content.strip():
            raise InvalidInputError("Content cannot be empty")
        size = len(content.encode("utf-8"))
        if size > options.max_input_bytes:
            raise InvalidInputError(
                "Content exceeds maximum size",
                f"{size} bytes > {options.max_input_bytes} bytes",
            )

    @staticmethod
    def _compile(blocks: List[LayoutBlock], mode: LayoutMode, options: GeneratorOptions) -> GenerationResult:
        compiler = PDFCompiler(
            geometry=options.resolve_geometry(),
            typography=options.resolve_typography(),
            pdf_version=options.resolve_version(),
        )
        return compiler.compile(blocks, mode, options.meta())


def generate_from_text(text: str, **options: Any) -> bytes:
    """Convenience wrapper returning only the PDF bytes."""
    return PdfGenerator(**options).generate_from_text(text).data


def generate_from_html(html: str, paginate: bool = False, **options: Any) -> bytes:
    """Convenience wrapper returning only the PDF bytes."""
    return PdfGenerator(**options).generate_from_html(html, paginate=paginate).data
