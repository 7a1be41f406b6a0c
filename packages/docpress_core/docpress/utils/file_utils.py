"""File-system helpers for writing finished documents."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Union

from ..exceptions import OutputError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]+')


def sanitize_filename(name: str, default: str = "document") -> str:
    """Make ``name`` safe to use as a single file name component."""
    cleaned = _UNSAFE_CHARS.sub("_", name or "").strip(" ._")
    return cleaned or default


def ensure_directory(path: Union[str, Path]) -> Path:
    """Create ``path`` (and parents) if it does not exist."""
    directory = Path(path)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Failed to create directory {directory}", str(e)) from e
    return directory


def save_pdf(data: bytes, path: Union[str, Path]) -> Path:
    """Write a finished PDF buffer to ``path``.

    Parent directories are created as needed. Nothing is retried.

    Raises:
        OutputError: If the buffer or path is missing, or the write fails
    """
    if data is None:
        raise OutputError("PDF data cannot be null")
    if not path or not str(path).strip():
        raise OutputError("Output path cannot be empty")

    output_path = Path(path)
    ensure_directory(output_path.parent)
    try:
        output_path.write_bytes(bytes(data))
    except OSError as e:
        logger.error(f"Failed to save PDF to {output_path}: {e}")
        raise OutputError(f"Failed to save PDF to {output_path}", str(e)) from e

    logger.info(f"PDF saved to: {output_path} ({len(data)} bytes)")
    return output_path
