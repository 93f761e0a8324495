"""
SystemWidthSource - Rasterizer-Backed Widths
============================================
Measures glyph advances with Pillow's FreeType binding.

This is the authoritative source the width index is built from. It
needs Pillow with FreeType support and the reference font installed,
which headless deployments often lack; create() reports that case by
returning None instead of raising.

Usage:
    source = SystemWidthSource.create(FontMetricsConfig())
    if source is not None:
        source.width_of(ord("A"))
        source.width_of_text("Hello World!")
"""

import logging

from ..config import FONT_FILE, FONT_SIZE
from .base import WidthSource

log = logging.getLogger(__name__)

MAX_CODE_POINT = 0x10FFFF
MAX_WIDTH = 127


def _is_encodable(cp: int) -> bool:
    return 0 <= cp <= MAX_CODE_POINT and not (0xD800 <= cp <= 0xDFFF)


class SystemWidthSource(WidthSource):
    """
    Width source backed by a FreeType font.

    Args:
        font: Loaded font object exposing getlength(). If None, loads
            font_file at font_size with PIL.ImageFont.truetype.
        font_file: Font file name or path (searched in system font
            directories by Pillow)
        font_size: Size in pixels

    Raises:
        OSError: If the font file cannot be opened
        ImportError: If Pillow or its FreeType support is missing
    """

    name = "system"

    def __init__(self, font=None, font_file: str = FONT_FILE, font_size: int = FONT_SIZE):
        if font is None:
            from PIL import ImageFont
            font = ImageFont.truetype(font_file, font_size)
        self._font = font
        self.font_file = font_file
        self.font_size = font_size

    @classmethod
    def create(cls, config) -> "SystemWidthSource | None":
        """
        Load the configured font, or return None if the rasterizer is
        not available in this environment.
        """
        try:
            return cls(font_file=config.font_file, font_size=config.font_size)
        except (OSError, ImportError) as e:
            log.warning("SystemWidthSource not available: %s", e)
            return None

    def __repr__(self) -> str:
        return f"SystemWidthSource({self.font_file!r}, {self.font_size})"

    def width_of(self, cp: int) -> int:
        """
        Advance width of a code point, clamped to [0, 127].

        Surrogates and values outside the Unicode range have no glyph
        and measure 0.
        """
        if not _is_encodable(cp):
            return 0
        advance = round(self._font.getlength(chr(cp)))
        return min(max(advance, 0), MAX_WIDTH)

    def width_of_text(self, text: str) -> int:
        """Rasterizer string width (includes any kerning the font applies)."""
        if not text:
            return 0
        return round(self._font.getlength(text))
