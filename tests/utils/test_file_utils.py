"""Tests for file helpers."""

from unittest.mock import patch

import pytest

from docpress.exceptions import OutputError
from docpress.utils.file_utils import ensure_directory, sanitize_filename, save_pdf


class TestSavePdf:
    """Test suite for save_pdf."""

    def test_writes_bytes(self, tmp_path):
        """The buffer is written unchanged."""
        path = save_pdf(b"%PDF-1.4\n%%EOF", tmp_path / "out.pdf")

        assert path == tmp_path / "out.pdf"
        assert path.read_bytes() == b"%PDF-1.4\n%%EOF"

    def test_creates_parent_directories(self, tmp_path):
        """Missing parent directories are created."""
        path = save_pdf(b"data", tmp_path / "a" / "b" / "out.pdf")
        assert path.exists()

    def test_none_data(self, tmp_path):
        """Missing data is refused."""
        with pytest.raises(OutputError, match="cannot be null"):
            save_pdf(None, tmp_path / "out.pdf")

    @pytest.mark.parametrize("path", ["", "   ", None])
    def test_empty_path(self, path):
        """An empty path is refused."""
        with pytest.raises(OutputError, match="cannot be empty"):
            save_pdf(b"data", path)

    def test_os_error_chained(self, tmp_path):
        """Write failures surface as OutputError with the cause attached."""
        with patch("pathlib.Path.write_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(OutputError) as excinfo:
                save_pdf(b"data", tmp_path / "out.pdf")

        assert isinstance(excinfo.value.__cause__, PermissionError)
        assert "denied" in str(excinfo.value)

    def test_directory_as_target(self, tmp_path):
        """Writing onto an existing directory fails loudly."""
        with pytest.raises(OutputError):
            save_pdf(b"data", tmp_path)


class TestFileHelpers:
    """Test suite for filename and directory helpers."""

    def test_sanitize_filename(self):
        """Path separators and reserved characters are replaced."""
        assert sanitize_filename('re:port/2024?.pdf') == "re_port_2024_.pdf"

    def test_sanitize_empty(self):
        """Empty names fall back to the default."""
        assert sanitize_filename("  ..  ") == "document"
        assert sanitize_filename("", default="out") == "out"

    def test_ensure_directory(self, tmp_path):
        """Nested directories are created and returned."""
        target = ensure_directory(tmp_path / "x" / "y")
        assert target.is_dir()

    def test_ensure_directory_failure(self, tmp_path):
        """A file in the way is reported as an OutputError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(OutputError):
            ensure_directory(blocker / "sub")
