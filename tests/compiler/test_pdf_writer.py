"""Tests for the PDF object graph and file writer."""

import pytest

from docpress.engine.pdfcompiler.objects import PdfDocument, PdfPage, PdfStream, PdfString
from docpress.engine.pdfcompiler.resources import PdfFontRegistry
from docpress.engine.pdfcompiler.writer import PdfWriter
from docpress.exceptions import AssemblyError
from docpress.models import BlockKind


def _minimal_document():
    document = PdfDocument()
    document.catalog_obj_num = document.reserve()
    document.pages_obj_num = document.reserve()
    document.add_object(document.catalog_obj_num, document.get_catalog_dict(document.pages_obj_num))
    document.add_object(document.pages_obj_num, document.get_pages_tree_dict([]))
    return document


class TestPdfStream:
    """Test suite for PdfStream."""

    def test_add_text(self):
        """A text object is bracketed by BT/ET."""
        stream = PdfStream()
        stream.add_text("/F1", 12, 72, 700, "Hi", color=(1.0, 0.0, 0.0))

        assert stream.commands == [
            "BT",
            "/F1 12 Tf",
            "1.000 0.000 0.000 rg",
            "72 700 Td",
            "(Hi) Tj",
            "ET",
        ]

    def test_add_line(self):
        """Lines are drawn inside their own graphics state."""
        stream = PdfStream()
        stream.add_line(10, 20, 30, 20)

        assert stream.get_content() == "q\n0.7 0.7 0.7 RG\n1 w\n10 20 m\n30 20 l\nS\nQ"

    def test_length_measured_in_bytes(self):
        """Length counts encoded bytes, not characters."""
        stream = PdfStream()
        stream.show_text("é€")

        assert stream.get_length() == len("(é€) Tj")
        assert stream.to_bytes() == b"(\xe9\x80) Tj"

    def test_write_ignores_none(self):
        """Writing None adds nothing."""
        stream = PdfStream()
        stream.write(None)
        stream.write("0 g")
        assert stream.commands == ["0 g"]


class TestPdfDocument:
    """Test suite for PdfDocument."""

    def test_reserve_is_sequential(self):
        """Object numbers are planned in order starting at 1."""
        document = PdfDocument()
        assert [document.reserve() for _ in range(3)] == [1, 2, 3]
        assert document.reserved_count == 3

    def test_out_of_order_rejected(self):
        """Objects must be added in their planned order."""
        document = PdfDocument()
        document.reserve()
        second = document.reserve()

        with pytest.raises(AssemblyError, match="out of order"):
            document.add_object(second, {})

    def test_unreserved_rejected(self):
        """Objects need a planned number."""
        with pytest.raises(AssemblyError, match="never reserved"):
            PdfDocument().add_object(1, {})

    def test_length_mismatch_rejected(self):
        """A stream whose /Length does not match its bytes is refused."""
        document = PdfDocument()
        number = document.reserve()

        with pytest.raises(AssemblyError, match="/Length"):
            document.add_object(number, {"Length": 99}, stream=b"abc")

    def test_page_dict(self):
        """Page dictionaries reference their parent and content stream."""
        page = PdfPage(page_number=1, width=612, height=792, resources={"Font": {"F1": [5, 0]}})
        page_dict = page.get_page_dict(2, 4)

        assert page_dict["Parent"] == [2, 0]
        assert page_dict["Contents"] == [4, 0]
        assert page_dict["Resources"]["ProcSet"] == ["/PDF", "/Text"]


class TestPdfFontRegistry:
    """Test suite for PdfFontRegistry."""

    def test_aliases_in_registration_order(self):
        """Aliases are handed out as /F1, /F2."""
        registry = PdfFontRegistry()
        regular = registry.register_font(bold=False)
        bold = registry.font_for(BlockKind.HEADING)

        assert (regular.alias, bold.alias) == ("/F1", "/F2")
        assert bold.get_variant_name() == "Helvetica-Bold"
        assert registry.uses_bold

    def test_registration_is_idempotent(self):
        """Registering the same variant twice returns the same font."""
        registry = PdfFontRegistry()
        assert registry.register_font() is registry.font_for(BlockKind.PARAGRAPH)
        assert len(registry.get_all_fonts()) == 1

    def test_resources_need_object_numbers(self):
        """The resource dictionary cannot be built before fonts are numbered."""
        registry = PdfFontRegistry()
        registry.register_font()

        with pytest.raises(ValueError):
            registry.get_resources_dict()

        registry.get_font().obj_num = 5
        assert registry.get_resources_dict() == {"F1": [5, 0]}


class TestPdfWriter:
    """Test suite for PdfWriter."""

    def test_xref_entries_are_20_bytes(self):
        """Each xref line, including the free head, is exactly 20 bytes."""
        data = PdfWriter().write(_minimal_document())
        start = data.index(b"xref\n") + len(b"xref\n0 3\n")
        entries = data[start:data.index(b"trailer")]

        assert entries.startswith(b"0000000000 65535 f \n")
        assert len(entries) == 3 * 20

    def test_offsets_point_at_objects(self):
        """Recorded offsets are byte positions of each object token."""
        writer = PdfWriter()
        data = writer.write(_minimal_document())

        for number, (offset, _generation) in enumerate(writer.xref_table, start=1):
            assert data[offset:].startswith(f"{number} 0 obj".encode())

    def test_startxref(self):
        """startxref gives the offset of the xref keyword."""
        data = PdfWriter().write(_minimal_document())
        offset = int(data.split(b"startxref\n")[1].split(b"\n")[0])
        assert data[offset:offset + 4] == b"xref"

    def test_unwritten_reservations_rejected(self):
        """A planned object that was never added aborts writing."""
        document = _minimal_document()
        document.reserve()

        with pytest.raises(AssemblyError, match="never written"):
            PdfWriter().write(document)

    def test_missing_catalog_rejected(self):
        """A document without a catalog cannot be written."""
        with pytest.raises(AssemblyError):
            PdfWriter().write(PdfDocument())

    def test_value_conventions(self):
        """Names, literal strings, references, arrays and nested dicts."""
        writer = PdfWriter()
        rendered = writer._dict_to_pdf({
            "Name": "/Page",
            "Text": "plain (text)",
            "Slash": PdfString("/not a name"),
            "Ref": [3, 0],
            "Array": [0, 0, 612.5, 792],
            "Flag": True,
            "Nested": {"Key": None},
        })

        assert rendered == (
            "<< /Name /Page /Text (plain \\(text\\)) /Slash (/not a name) /Ref 3 0 R "
            "/Array [0 0 612.5 792] /Flag true /Nested << /Key null >> >>"
        )

    def test_unsupported_value(self):
        """Values outside the convention are an assembly error."""
        with pytest.raises(AssemblyError):
            PdfWriter()._value_to_pdf(object())
