"""PDF objects and data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ...exceptions import AssemblyError
from .utils import encode_pdf_text, escape_pdf_string, format_pdf_color, format_pdf_number

RULE_GRAY = 0.7


class PdfString(str):
    """A literal string value, written in parentheses even if it starts with a slash."""


@dataclass
class PdfStream:
    """Represents a PDF content stream (instructions for drawing)."""

    commands: List[str] = field(default_factory=list)

    def write(self, command: str) -> None:
        """Append a raw PDF command to the stream."""
        if command is None:
            return
        self.commands.append(str(command))

    def begin_text(self) -> None:
        self.commands.append("BT")

    def end_text(self) -> None:
        self.commands.append("ET")

    def set_font(self, font_alias: str, font_size: float) -> None:
        self.commands.append(f"{font_alias} {format_pdf_number(font_size)} Tf")

    def set_fill_color(self, color: Tuple[float, float, float]) -> None:
        self.commands.append(f"{format_pdf_color(color)} rg")

    def move_text(self, x: float, y: float) -> None:
        """Position the text cursor (absolute inside a fresh BT, relative afterwards)."""
        self.commands.append(f"{format_pdf_number(x)} {format_pdf_number(y)} Td")

    def show_text(self, text: str, collapse_whitespace: bool = False) -> None:
        self.commands.append(f"({escape_pdf_string(text, collapse_whitespace)}) Tj")

    def add_text(
        self,
        font_alias: str,
        font_size: float,
        x: float,
        y: float,
        text: str,
        color: Optional[Tuple[float, float, float]] = None,
        collapse_whitespace: bool = False,
    ) -> None:
        """Add a self-contained, absolutely positioned text object.

        Args:
            font_alias: Font alias (e.g., "/F1")
            font_size: Font size in points
            x: X position
            y: Y position (baseline)
            text: Text content
            color: Optional RGB tuple (0-1 scale) for text color
            collapse_whitespace: Escape mode for CR/LF/TAB
        """
        self.begin_text()
        self.set_font(font_alias, font_size)
        if color is not None:
            self.set_fill_color(color)
        self.move_text(x, y)
        self.show_text(text, collapse_whitespace)
        self.end_text()

    def add_line(self, x1: float, y1: float, x2: float, y2: float, width: float = 1.0, gray: float = RULE_GRAY) -> None:
        """Add a stroked gray line inside its own graphics state.

        Args:
            x1: Start X
            y1: Start Y
            x2: End X
            y2: End Y
            width: Line width
            gray: Stroke gray level applied to all three RGB channels
        """
        level = format_pdf_number(gray)
        self.commands.append("q")
        self.commands.append(f"{level} {level} {level} RG")
        self.commands.append(f"{format_pdf_number(width)} w")
        self.commands.append(f"{format_pdf_number(x1)} {format_pdf_number(y1)} m")
        self.commands.append(f"{format_pdf_number(x2)} {format_pdf_number(y2)} l")
        self.commands.append("S")
        self.commands.append("Q")

    def get_content(self) -> str:
        """Get stream content as string."""
        return "\n".join(self.commands)

    def to_bytes(self) -> bytes:
        """Stream body in the file encoding."""
        return encode_pdf_text(self.get_content())

    def get_length(self) -> int:
        """Get stream length in bytes, measured in the file encoding."""
        return len(self.to_bytes())


@dataclass
class PdfObject:
    """An indirect object: a dictionary body and an optional stream payload."""

    obj_num: int
    content: Dict[str, Any]
    stream: Optional[bytes] = None

    @property
    def is_stream(self) -> bool:
        return self.stream is not None


@dataclass
class PdfPage:
    """Represents a single PDF page."""

    page_number: int
    width: float
    height: float
    stream: PdfStream = field(default_factory=PdfStream)
    resources: Dict[str, Any] = field(default_factory=dict)

    def get_page_dict(self, parent_obj_num: int, stream_obj_num: int) -> Dict[str, Any]:
        """Generate page dictionary for PDF.

        Args:
            parent_obj_num: Object number of the pages tree
            stream_obj_num: Object number for content stream

        Returns:
            Page dictionary
        """
        page_dict: Dict[str, Any] = {
            "Type": "/Page",
            "Parent": [parent_obj_num, 0],
            "MediaBox": [0, 0, self.width, self.height],
        }
        if self.resources:
            resources = dict(self.resources)
            resources.setdefault("ProcSet", ["/PDF", "/Text"])
            page_dict["Resources"] = resources
        page_dict["Contents"] = [stream_obj_num, 0]
        return page_dict


@dataclass
class PdfDocument:
    """Object graph for one document.

    Object numbers are handed out by :meth:`reserve` in creation order and
    objects must be added in exactly that order, so a number can be used in
    a reference before its object exists.
    """

    objects: List[PdfObject] = field(default_factory=list)
    catalog_obj_num: Optional[int] = None
    pages_obj_num: Optional[int] = None
    info_obj_num: Optional[int] = None
    _next_obj_num: int = 1

    def reserve(self) -> int:
        """Plan the next object number."""
        obj_num = self._next_obj_num
        self._next_obj_num += 1
        return obj_num

    def add_object(self, obj_num: int, content: Dict[str, Any], stream: Optional[bytes] = None) -> PdfObject:
        expected = len(self.objects) + 1
        if obj_num != expected:
            raise AssemblyError(
                "Object appended out of order",
                f"got object {obj_num}, expected {expected}",
            )
        if obj_num >= self._next_obj_num:
            raise AssemblyError("Object number was never reserved", str(obj_num))
        if stream is not None and content.get("Length") != len(stream):
            raise AssemblyError(
                "Stream /Length does not match stream bytes",
                f"object {obj_num}: /Length {content.get('Length')} vs {len(stream)} bytes",
            )
        obj = PdfObject(obj_num=obj_num, content=content, stream=stream)
        self.objects.append(obj)
        return obj

    def get_object_count(self) -> int:
        return len(self.objects)

    @property
    def reserved_count(self) -> int:
        return self._next_obj_num - 1

    def get_catalog_dict(self, pages_obj_num: int) -> Dict[str, Any]:
        return {
            "Type": "/Catalog",
            "Pages": [pages_obj_num, 0],
        }

    def get_pages_tree_dict(self, page_obj_nums: List[int]) -> Dict[str, Any]:
        kids = [[num, 0] for num in page_obj_nums]
        return {
            "Type": "/Pages",
            "Kids": kids,
            "Count": len(kids),
        }
