"""
BdfWidthSource - Widths from a BDF Bitmap Font
==============================================
Reads glyph advances from a BDF font with bdflib. Useful for building a
width index from a bitmap font when no TrueType rasterizer is wanted.
"""

import logging
from pathlib import Path
from typing import Dict, Union

from ..config import FONT_SIZE
from .base import WidthSource

log = logging.getLogger(__name__)


class BdfWidthSource(WidthSource):
    """
    Width source over a codepoint -> advance mapping.

    Args:
        advances: {codepoint: advance width in pixels}
        default_width: Width for code points the font has no glyph for
    """

    name = "bdf"

    def __init__(self, advances: Dict[int, int], default_width: int = FONT_SIZE):
        self._advances = dict(advances)
        self.default_width = default_width

    @classmethod
    def from_font(cls, font, default_width: int = FONT_SIZE) -> "BdfWidthSource":
        """Build from a parsed bdflib font."""
        advances = {}
        for glyph in font.glyphs:
            if glyph.codepoint is None or glyph.codepoint < 0:
                continue
            advances[glyph.codepoint] = glyph.advance
        return cls(advances, default_width=default_width)

    @classmethod
    def from_path(cls, path: Union[str, Path], default_width: int = FONT_SIZE) -> "BdfWidthSource":
        """
        Load a BDF font file.

        Raises:
            ImportError: If bdflib is not installed
            OSError: If the file cannot be read
        """
        from bdflib import reader

        with open(path, "rb") as f:
            font = reader.read_bdf(f)
        source = cls.from_font(font, default_width=default_width)
        log.info("Loaded %d glyph advances from %s", len(source), path)
        return source

    def __len__(self) -> int:
        return len(self._advances)

    def width_of(self, cp: int) -> int:
        return self._advances.get(cp, self.default_width)
