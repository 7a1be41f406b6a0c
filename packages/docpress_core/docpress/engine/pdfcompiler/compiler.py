"""Main PDF compiler - converts layout blocks to a PDF byte buffer."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ...models import DocumentMeta, GenerationResult, LayoutBlock, LayoutMode
from ..content_model import ContentModelBuilder
from ..geometry import PageGeometry, Typography
from ..line_breaker import break_blocks
from ..pagination_manager import BlockPlacer, PaginationManager
from .objects import PdfDocument, PdfPage, PdfStream, PdfString
from .resources import PdfFontRegistry
from .text_renderer import PdfTextRenderer
from .utils import format_pdf_date
from .writer import DEFAULT_PDF_VERSION, PdfWriter

logger = logging.getLogger(__name__)


class PDFCompiler:
    """Compiles layout blocks into a complete PDF document.

    Two named variants share this interface:

    - ``LayoutMode.PAGINATED``: text is wrapped into fixed-height lines and
      flowed over as many pages as needed.
    - ``LayoutMode.SINGLE_STREAM``: one page, each block positioned by a
      running cursor; content past the bottom margin is truncated.

    Every call to :meth:`compile` owns its own font registry, object graph
    and cursor, so one compiler can be shared between threads.
    """

    def __init__(
        self,
        geometry: Optional[PageGeometry] = None,
        typography: Optional[Typography] = None,
        pdf_version: str = DEFAULT_PDF_VERSION,
    ):
        """Initialize PDF compiler.

        Args:
            geometry: Page size and margins (defaults to US Letter, 72pt margins)
            typography: Default font size and line height for the paginated variant
            pdf_version: Version written into the ``%PDF-`` header
        """
        self.geometry = geometry or PageGeometry()
        self.typography = typography or Typography()
        self.pdf_version = pdf_version

    def compile(
        self,
        blocks: Sequence[LayoutBlock],
        mode: LayoutMode = LayoutMode.PAGINATED,
        meta: Optional[DocumentMeta] = None,
    ) -> GenerationResult:
        """Compile blocks to PDF bytes.

        Args:
            blocks: Layout blocks (unset values fall back to defaults)
            mode: Generation variant
            meta: Optional metadata; an Info object is written when given

        Returns:
            GenerationResult with the finished buffer

        Raises:
            AssemblyError: If an internal invariant is broken (never for well-formed input)
        """
        started = time.perf_counter()
        mode = LayoutMode(mode)
        resolved = ContentModelBuilder(self.typography).build(blocks)
        fonts = PdfFontRegistry()
        fonts.register_font(bold=False)
        renderer = PdfTextRenderer(fonts, self.geometry)
        warnings: List[str] = []

        if mode == LayoutMode.PAGINATED:
            streams, rendered = self._layout_paginated(resolved, renderer)
            truncated = False
        else:
            streams, rendered, dropped = self._layout_single_stream(resolved, renderer)
            truncated = dropped > 0
            if truncated:
                warnings.append(
                    f"Content truncated at bottom margin: {dropped} of {len(resolved)} blocks not rendered"
                )

        document = self._assemble(streams, fonts, meta)
        data = PdfWriter(self.pdf_version).write(document)

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            f"PDF generated ({mode.value}): {len(streams)} pages, "
            f"{document.get_object_count()} objects, {len(data)} bytes in {elapsed_ms:.1f}ms"
        )
        return GenerationResult(
            data=data,
            mode=mode,
            page_count=len(streams),
            object_count=document.get_object_count(),
            blocks_supplied=len(resolved),
            blocks_rendered=rendered,
            truncated=truncated,
            elapsed_ms=elapsed_ms,
            warnings=tuple(warnings),
        )

    def line_height_for(self, blocks: Sequence[LayoutBlock]) -> float:
        """Fixed advance of the paginated variant, never smaller than the largest glyph size."""
        sizes = [block.font_size for block in blocks if block.has_text and block.font_size]
        return max([self.typography.effective_line_height] + sizes)

    def _layout_paginated(
        self, blocks: Sequence[LayoutBlock], renderer: PdfTextRenderer
    ) -> Tuple[List[PdfStream], int]:
        line_height = self.line_height_for(blocks)
        lines = break_blocks(blocks, self.geometry)
        pages = PaginationManager(self.geometry, line_height).paginate(lines)
        streams = [renderer.render_page(page, line_height) for page in pages]
        rendered = len({line.block_index for page in pages for line in page.lines if not line.blank})
        return streams, rendered

    def _layout_single_stream(
        self, blocks: Sequence[LayoutBlock], renderer: PdfTextRenderer
    ) -> Tuple[List[PdfStream], int, int]:
        placement = BlockPlacer(self.geometry).place(blocks)
        stream = renderer.render_placements(placement.placed)
        return [stream], len(placement.placed), placement.truncated

    def _assemble(
        self,
        streams: Sequence[PdfStream],
        fonts: PdfFontRegistry,
        meta: Optional[DocumentMeta],
    ) -> PdfDocument:
        """Build the object graph.

        Numbers are planned before any object is written: catalog 1, pages
        tree 2, then a (page, content) pair per page, the fonts and finally
        the Info dictionary.
        """
        document = PdfDocument()
        document.catalog_obj_num = document.reserve()
        document.pages_obj_num = document.reserve()

        page_plan: List[Tuple[int, int]] = []
        for _ in streams:
            page_obj_num = document.reserve()
            stream_obj_num = document.reserve()
            page_plan.append((page_obj_num, stream_obj_num))

        for font in fonts.get_all_fonts():
            font.obj_num = document.reserve()

        if meta is not None:
            document.info_obj_num = document.reserve()

        document.add_object(document.catalog_obj_num, document.get_catalog_dict(document.pages_obj_num))
        document.add_object(
            document.pages_obj_num,
            document.get_pages_tree_dict([page_obj_num for page_obj_num, _ in page_plan]),
        )

        resources = {"Font": fonts.get_resources_dict()}
        for number, (stream, (page_obj_num, stream_obj_num)) in enumerate(zip(streams, page_plan), start=1):
            page = PdfPage(
                page_number=number,
                width=self.geometry.width,
                height=self.geometry.height,
                stream=stream,
                resources=resources,
            )
            document.add_object(page_obj_num, page.get_page_dict(document.pages_obj_num, stream_obj_num))
            stream_bytes = stream.to_bytes()
            document.add_object(stream_obj_num, {"Length": len(stream_bytes)}, stream=stream_bytes)

        for font in fonts.get_all_fonts():
            document.add_object(font.obj_num, font.get_font_dict())

        if meta is not None:
            document.add_object(document.info_obj_num, self._info_dict(meta))

        return document

    @staticmethod
    def _info_dict(meta: DocumentMeta) -> Dict[str, Any]:
        moment = meta.creation_date or datetime.now()
        date = PdfString(format_pdf_date(moment))
        return {
            "Title": PdfString(meta.title or ""),
            "Producer": PdfString(meta.producer or ""),
            "Creator": PdfString(meta.creator or ""),
            "CreationDate": date,
            "ModDate": date,
        }


def render(
    blocks: Sequence[LayoutBlock],
    geometry: Optional[PageGeometry] = None,
    typography: Optional[Typography] = None,
    meta: Optional[DocumentMeta] = None,
    pdf_version: str = DEFAULT_PDF_VERSION,
) -> bytes:
    """Multi-page, paragraph-flow variant. Returns the PDF bytes."""
    compiler = PDFCompiler(geometry, typography, pdf_version)
    return compiler.compile(blocks, LayoutMode.PAGINATED, meta or DocumentMeta()).data


def render_single_stream(
    blocks: Sequence[LayoutBlock],
    geometry: Optional[PageGeometry] = None,
    meta: Optional[DocumentMeta] = None,
    pdf_version: str = DEFAULT_PDF_VERSION,
) -> bytes:
    """Single-page, truncate-at-bottom variant. Returns the PDF bytes."""
    compiler = PDFCompiler(geometry, pdf_version=pdf_version)
    return compiler.compile(blocks, LayoutMode.SINGLE_STREAM, meta).data
