"""PDF file writer - generates xref, trailer, and final PDF structure."""

from __future__ import annotations

import io
import logging
from typing import Any, Dict, List, Optional, Tuple

from ...exceptions import AssemblyError
from .objects import PdfDocument, PdfObject, PdfString
from .utils import encode_pdf_text, escape_pdf_string, format_pdf_number

logger = logging.getLogger(__name__)

DEFAULT_PDF_VERSION = "1.4"


class PdfWriter:
    """Serializes a :class:`PdfDocument` into a complete PDF byte buffer."""

    def __init__(self, version: str = DEFAULT_PDF_VERSION):
        self.version = version
        self.xref_table: List[Tuple[int, int]] = []  # (offset, generation)

    def write(self, document: PdfDocument) -> bytes:
        """Render the document to bytes.

        Offsets are taken from the buffer position while writing, so every
        xref entry is measured in bytes of the final file.

        Raises:
            ValueError: If document is None
            AssemblyError: If the document is incomplete or an offset check fails
        """
        if document is None:
            raise ValueError("document cannot be None")
        if document.catalog_obj_num is None:
            raise AssemblyError("Document has no catalog object")
        if document.get_object_count() != document.reserved_count:
            raise AssemblyError(
                "Reserved objects were never written",
                f"{document.reserved_count} reserved, {document.get_object_count()} written",
            )

        self.xref_table = []
        buffer = io.BytesIO()
        buffer.write(f"%PDF-{self.version}\n".encode("ascii"))

        for obj in document.objects:
            self._write_object(buffer, obj)

        xref_offset = buffer.tell()
        self._write_xref(buffer)
        self._write_trailer(buffer, xref_offset, document.catalog_obj_num, document.info_obj_num)

        data = buffer.getvalue()
        self._verify_offsets(data, xref_offset)
        logger.debug(f"Wrote {len(self.xref_table)} objects, xref at {xref_offset}, {len(data)} bytes")
        return data

    def _write_object(self, buffer: io.BytesIO, obj: PdfObject) -> None:
        """Write one indirect object and record its offset."""
        offset = buffer.tell()
        self.xref_table.append((offset, 0))  # Generation 0

        buffer.write(f"{obj.obj_num} 0 obj\n".encode("ascii"))
        buffer.write(encode_pdf_text(self._dict_to_pdf(obj.content)))
        if obj.is_stream:
            if obj.content.get("Length") != len(obj.stream):
                raise AssemblyError(
                    "Stream /Length does not match stream bytes",
                    f"object {obj.obj_num}: /Length {obj.content.get('Length')} vs {len(obj.stream)} bytes",
                )
            buffer.write(b"\nstream\n")
            buffer.write(obj.stream)
            buffer.write(b"\nendstream")
        buffer.write(b"\nendobj\n")

    def _write_xref(self, buffer: io.BytesIO) -> None:
        """Write xref table: free-list head plus one 20-byte entry per object."""
        buffer.write(b"xref\n")
        buffer.write(f"0 {len(self.xref_table) + 1}\n".encode("ascii"))
        buffer.write(b"0000000000 65535 f \n")  # Free object

        for offset, generation in self.xref_table:
            buffer.write(f"{offset:010d} {generation:05d} n \n".encode("ascii"))

    def _write_trailer(
        self,
        buffer: io.BytesIO,
        xref_offset: int,
        root_obj_num: int,
        info_obj_num: Optional[int] = None,
    ) -> None:
        """Write trailer.

        Args:
            buffer: Output buffer
            xref_offset: Offset to xref table
            root_obj_num: Root object number (catalog)
            info_obj_num: Optional Info object number for metadata
        """
        buffer.write(b"trailer\n")
        trailer_dict: Dict[str, Any] = {
            "Size": len(self.xref_table) + 1,
            "Root": [root_obj_num, 0],
        }
        if info_obj_num is not None:
            trailer_dict["Info"] = [info_obj_num, 0]
        buffer.write(encode_pdf_text(self._dict_to_pdf(trailer_dict)))
        buffer.write(b"\nstartxref\n")
        buffer.write(f"{xref_offset}\n".encode("ascii"))
        buffer.write(b"%%EOF")

    def _verify_offsets(self, data: bytes, xref_offset: int) -> None:
        """Check that every xref entry points at its ``N 0 obj`` token."""
        for index, (offset, _generation) in enumerate(self.xref_table, start=1):
            token = f"{index} 0 obj".encode("ascii")
            if data[offset:offset + len(token)] != token:
                raise AssemblyError("Cross-reference offset mismatch", f"object {index} at {offset}")
        if not data.startswith(b"xref", xref_offset):
            raise AssemblyError("startxref does not point at the xref keyword", str(xref_offset))

    def _dict_to_pdf(self, d: Dict[str, Any]) -> str:
        """Convert dictionary to PDF format.

        Values follow a small convention: ``"/Name"`` strings are names,
        other strings are literal strings, ``[num, 0]`` is an indirect
        reference and nested dicts are written inline.

        Args:
            d: Dictionary to convert

        Returns:
            PDF-formatted string
        """
        parts = ["<<"]
        for key, value in d.items():
            clean_key = key.lstrip("/")
            parts.append(f"/{clean_key} {self._value_to_pdf(value)}")
        parts.append(">>")
        return " ".join(parts)

    def _value_to_pdf(self, value: Any) -> str:
        if isinstance(value, dict):
            return self._dict_to_pdf(value)
        if isinstance(value, list):
            if self._is_reference(value):
                return f"{value[0]} {value[1]} R"
            return "[" + " ".join(self._value_to_pdf(item) for item in value) + "]"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return format_pdf_number(value)
        if isinstance(value, PdfString):
            return f"({escape_pdf_string(value)})"
        if isinstance(value, str):
            if value.startswith("/"):
                return value
            return f"({escape_pdf_string(value)})"
        if value is None:
            return "null"
        raise AssemblyError("Unsupported PDF value", repr(value))

    @staticmethod
    def _is_reference(value: List[Any]) -> bool:
        return (
            len(value) == 2
            and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
            and value[1] == 0
            and value[0] > 0
        )
