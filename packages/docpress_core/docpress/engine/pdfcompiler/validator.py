"""Structural checks for generated PDF buffers."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

_PAGE_TYPE = re.compile(rb"/Type\s*/Page(?![A-Za-z])")
_VERSION = re.compile(rb"^%PDF-(\d\.\d)")
_XREF_ENTRY = re.compile(rb"(\d{10}) (\d{5}) ([nf]) ?\r?\n")


def is_well_formed(data: bytes) -> bool:
    """Quick sanity check of a PDF buffer.

    Checks the header and ``%%EOF`` markers, the presence of the Catalog,
    Pages and Page objects, and that ``xref`` precedes ``trailer`` which
    precedes ``startxref``. Offsets are not verified (see :func:`check_structure`).
    """
    if not isinstance(data, (bytes, bytearray)) or not data:
        return False
    if not data.startswith(b"%PDF-"):
        return False
    if not data.rstrip().endswith(b"%%EOF"):
        return False
    for marker in (b"/Type /Catalog", b"/Type /Pages"):
        if marker not in data:
            return False
    if not _PAGE_TYPE.search(data):
        return False

    xref = data.rfind(b"\nxref")
    trailer = data.rfind(b"trailer")
    startxref = data.rfind(b"startxref")
    if min(xref, trailer, startxref) < 0:
        return False
    return xref < trailer < startxref


def check_structure(data: bytes) -> List[str]:
    """Detailed check of the cross-reference data.

    Returns:
        List of problems found; empty when every xref offset points at its
        ``N 0 obj`` token and ``startxref`` points at the ``xref`` keyword.
    """
    problems: List[str] = []
    if not is_well_formed(data):
        return ["buffer is not a well-formed PDF"]

    startxref = data.rfind(b"startxref")
    tail = data[startxref + len(b"startxref"):].split()
    try:
        xref_offset = int(tail[0])
    except (IndexError, ValueError):
        return ["startxref value missing"]
    if not data.startswith(b"xref", xref_offset):
        problems.append(f"startxref {xref_offset} does not point at xref")
        return problems

    header_end = data.index(b"\n", xref_offset + 5)
    subsection = data[xref_offset + 5:header_end].split()
    first, count = int(subsection[0]), int(subsection[1])
    entries = _XREF_ENTRY.findall(data, header_end + 1)[:count]
    if len(entries) != count:
        problems.append(f"xref declares {count} entries, found {len(entries)}")

    for index, (offset, generation, kind) in enumerate(entries):
        obj_num = first + index
        if kind == b"f":
            continue
        token = f"{obj_num} {int(generation)} obj".encode("ascii")
        if not data.startswith(token, int(offset)):
            problems.append(f"object {obj_num} not found at offset {int(offset)}")

    size = re.search(rb"/Size (\d+)", data[data.rfind(b"trailer"):])
    if size is None or int(size.group(1)) != count:
        problems.append("trailer /Size does not match xref entry count")

    return problems


@dataclass(frozen=True)
class PdfInfo:
    """Summary of a PDF buffer."""

    size: int
    size_formatted: str
    is_valid: bool
    version: Optional[str] = None
    page_count: int = 0


def get_pdf_info(data: bytes) -> PdfInfo:
    """Size, version, page count and validity of a buffer."""
    data = bytes(data or b"")
    version_match = _VERSION.match(data)
    return PdfInfo(
        size=len(data),
        size_formatted=f"{len(data) / 1024:.2f} KB",
        is_valid=is_well_formed(data),
        version=version_match.group(1).decode("ascii") if version_match else None,
        page_count=len(_PAGE_TYPE.findall(data)),
    )
