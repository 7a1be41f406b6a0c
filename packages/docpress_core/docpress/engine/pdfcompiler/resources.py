"""Font resources for PDF (standard Type1 fonts only)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from ...models import BlockKind

BASE_FONT = "Helvetica"


@dataclass
class PdfFont:
    """Represents a PDF font resource."""

    name: str  # Base family (e.g., "Helvetica")
    alias: str  # PDF alias (e.g., "/F1")
    bold: bool = False
    obj_num: Optional[int] = None

    def get_variant_name(self) -> str:
        """Get font name with variant suffix."""
        return f"{self.name}-Bold" if self.bold else self.name

    def get_font_dict(self) -> Dict[str, str]:
        return {
            "Type": "/Font",
            "Subtype": "/Type1",
            "BaseFont": f"/{self.get_variant_name()}",
            "Encoding": "/WinAnsiEncoding",
        }


class PdfFontRegistry:
    """Registry for the fonts used by one document.

    Aliases are assigned in registration order (``/F1``, ``/F2``); the
    registry belongs to a single generation call.
    """

    def __init__(self, base_font: str = BASE_FONT):
        self.base_font = base_font
        self._fonts: Dict[str, PdfFont] = {}
        self._next_alias_num = 1

    def register_font(self, bold: bool = False) -> PdfFont:
        key = f"{self.base_font}:{bold}"
        if key not in self._fonts:
            alias = f"/F{self._next_alias_num}"
            self._next_alias_num += 1
            self._fonts[key] = PdfFont(name=self.base_font, alias=alias, bold=bold)
        return self._fonts[key]

    def font_for(self, kind: BlockKind) -> PdfFont:
        """Bold for headings, regular for everything else."""
        return self.register_font(bold=kind == BlockKind.HEADING)

    def get_font(self, bold: bool = False) -> Optional[PdfFont]:
        return self._fonts.get(f"{self.base_font}:{bold}")

    def get_all_fonts(self) -> List[PdfFont]:
        return list(self._fonts.values())

    @property
    def uses_bold(self) -> bool:
        return self.get_font(bold=True) is not None

    def get_resources_dict(self) -> Dict[str, List[int]]:
        """Generate the /Font subdictionary referencing the font objects.

        Raises:
            ValueError: If a font has not been given an object number yet
        """
        resources = {}
        for font in self._fonts.values():
            if font.obj_num is None:
                raise ValueError(f"Font {font.alias} has no object number")
            resources[font.alias[1:]] = [font.obj_num, 0]
        return resources
