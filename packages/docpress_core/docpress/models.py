"""Layout data model shared by the layout engine and the PDF compiler."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple


DEFAULT_TEXT_COLOR = "#2e2e2e"


class BlockKind(str, Enum):
    """Semantic kind of a layout block."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    RULE = "rule"


class LayoutMode(str, Enum):
    """Generation strategy used by the compiler."""

    PAGINATED = "paginated"
    SINGLE_STREAM = "single_stream"


@dataclass(frozen=True)
class LayoutBlock:
    """One semantic unit of content (heading, paragraph or horizontal rule).

    ``font_size``, ``color`` and the margins may be left as ``None``; the
    content model builder resolves them to kind-specific defaults before
    layout. A rule carries no text, font or color.
    """

    text: str = ""
    kind: BlockKind = BlockKind.PARAGRAPH
    font_size: Optional[float] = None
    color: Optional[str] = None
    margin_top: Optional[float] = None
    margin_bottom: Optional[float] = None

    @classmethod
    def heading(cls, text: str, **kwargs) -> "LayoutBlock":
        return cls(text=text, kind=BlockKind.HEADING, **kwargs)

    @classmethod
    def paragraph(cls, text: str, **kwargs) -> "LayoutBlock":
        return cls(text=text, kind=BlockKind.PARAGRAPH, **kwargs)

    @classmethod
    def rule(cls, margin_top: Optional[float] = None, margin_bottom: Optional[float] = None) -> "LayoutBlock":
        return cls(text="", kind=BlockKind.RULE, margin_top=margin_top, margin_bottom=margin_bottom)

    @property
    def is_rule(self) -> bool:
        return self.kind == BlockKind.RULE

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())


@dataclass(frozen=True)
class LayoutLine:
    """A wrapped line of text produced by the line breaker.

    Blank lines (paragraph separators) have ``blank=True`` and rules are
    represented by a line of kind ``RULE`` carrying the rule margins.
    """

    text: str
    kind: BlockKind
    font_size: float
    color: str
    block_index: int
    blank: bool = False
    margin_top: float = 0.0
    margin_bottom: float = 0.0


@dataclass
class LayoutPage:
    """Lines assigned to one page in the paginated variant."""

    number: int
    lines: List[LayoutLine] = field(default_factory=list)

    def add_line(self, line: LayoutLine) -> None:
        self.lines.append(line)

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class PlacedBlock:
    """A block positioned by the single-stream cursor.

    ``y`` is the cursor value at which the block is drawn: the baseline for
    text blocks and the stroke position for rules.
    """

    block: LayoutBlock
    y: float


@dataclass(frozen=True)
class DocumentMeta:
    """Metadata written to the document Info dictionary."""

    title: str = "Document"
    producer: str = "docpress PDF Compiler"
    creator: str = "docpress"
    creation_date: Optional[datetime] = None


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a single generation call."""

    data: bytes
    mode: LayoutMode
    page_count: int
    object_count: int
    blocks_supplied: int
    blocks_rendered: int
    truncated: bool = False
    elapsed_ms: float = 0.0
    warnings: Tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return len(self.data)
