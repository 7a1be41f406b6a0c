"""Generator options: defaults, dict/JSON loading and range clamping."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .engine.geometry import DEFAULT_PAGE_FORMAT, PAGE_FORMATS, Margins, PageGeometry, Typography
from .exceptions import InvalidInputError
from .models import DocumentMeta

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_BYTES = 10 * 1024 * 1024
SUPPORTED_PDF_VERSIONS = ("1.3", "1.4", "1.5", "1.6", "1.7")
DEFAULT_PDF_VERSION = "1.4"

MarginsLike = Union[Margins, Dict[str, float], tuple, list, float, int, None]


@dataclass
class GeneratorOptions:
    """Options for one generator instance.

    ``page_width``/``page_height`` override ``page_format`` when both are
    given. Out-of-range values are kept as supplied and clamped by the
    ``resolve_*`` methods.
    """

    page_format: str = DEFAULT_PAGE_FORMAT
    page_width: Optional[float] = None
    page_height: Optional[float] = None
    margins: MarginsLike = None
    font_size: float = 12.0
    line_height: Optional[float] = None
    pdf_version: str = DEFAULT_PDF_VERSION
    title: str = "Document"
    producer: str = "docpress PDF Compiler"
    creator: str = "docpress"
    max_input_bytes: int = DEFAULT_MAX_INPUT_BYTES
    format_numbers: bool = False
    debug: bool = False
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GeneratorOptions":
        """Create options from a mapping; unknown keys are ignored."""
        known = {f.name for f in fields(cls) if f.name != "extra"}
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key in known:
                values[key] = value
            else:
                logger.debug(f"Ignoring unknown option {key!r}")
                extra[key] = value
        return cls(extra=extra, **values)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GeneratorOptions":
        """Load options from a JSON file.

        Raises:
            InvalidInputError: If the file cannot be read or is not a JSON object
        """
        config_path = Path(path)
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise InvalidInputError(f"Cannot read config file {config_path}", str(e)) from e
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Invalid JSON in config file {config_path}", str(e)) from e
        if not isinstance(data, dict):
            raise InvalidInputError(f"Config file {config_path} must contain a JSON object")
        logger.debug(f"Loaded options from {config_path}")
        return cls.from_dict(data)

    def merged(self, **overrides: Any) -> "GeneratorOptions":
        """Copy with ``overrides`` applied; ``None`` values are skipped."""
        known = {f.name for f in fields(self)}
        changes = {key: value for key, value in overrides.items() if value is not None and key in known}
        for key in overrides:
            if key not in known:
                logger.debug(f"Ignoring unknown option {key!r}")
        return replace(self, **changes)

    def resolve_geometry(self) -> PageGeometry:
        if self.page_width is not None and self.page_height is not None:
            return PageGeometry.create(self.page_width, self.page_height, self.margins)
        page_format = (self.page_format or DEFAULT_PAGE_FORMAT).upper()
        if page_format not in PAGE_FORMATS:
            logger.debug(f"Unknown page format {self.page_format!r}, using {DEFAULT_PAGE_FORMAT}")
        geometry = PageGeometry.from_format(page_format, self.margins)
        if self.page_width is not None or self.page_height is not None:
            width = self.page_width if self.page_width is not None else geometry.width
            height = self.page_height if self.page_height is not None else geometry.height
            return PageGeometry.create(width, height, self.margins)
        return geometry

    def resolve_typography(self) -> Typography:
        return Typography.create(self.font_size, self.line_height)

    def resolve_version(self) -> str:
        version = str(self.pdf_version or "").strip()
        if version not in SUPPORTED_PDF_VERSIONS:
            logger.debug(f"Unsupported PDF version {self.pdf_version!r}, using {DEFAULT_PDF_VERSION}")
            return DEFAULT_PDF_VERSION
        return version

    def meta(self) -> DocumentMeta:
        return DocumentMeta(title=self.title, producer=self.producer, creator=self.creator)
