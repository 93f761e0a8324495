"""
WidthIndex - Table-Backed Width Lookup
======================================
Answers width queries from a decoded range table and flat width buffer,
with no dependency on the rasterizer that produced the data.

Lookup rules:
- Code points below 32 are always 0 wide.
- A covered code point reads its byte from the segment of the range that
  contains it (bounds inclusive on both ends).
- Anything else, including positions past the end of a short width
  buffer, resolves to the fallback width (the reference font size).

Instances are immutable once built and safe to share between threads.
"""

from bisect import bisect_right

from ..config import FONT_SIZE
from ..ranges.table import RangeTable
from ..sources.base import WidthSource

CONTROL_LIMIT = 32


class WidthIndex(WidthSource):
    """
    Immutable width table.

    Args:
        ranges: Range table in segment order
        widths: Flat width buffer, one signed byte per covered code point
        fallback_width: Width reported for code points with no entry
    """

    name = "index"

    def __init__(self, ranges, widths: bytes, fallback_width: int = FONT_SIZE):
        if not isinstance(ranges, RangeTable):
            ranges = RangeTable(ranges, sort=False)
        self._ranges = ranges
        self._widths = memoryview(bytes(widths)).cast("b")
        self.fallback_width = fallback_width

    def __repr__(self) -> str:
        return f"WidthIndex({len(self._ranges)} ranges, {len(self._widths)} widths)"

    def __len__(self) -> int:
        return len(self._widths)

    @property
    def ranges(self) -> RangeTable:
        return self._ranges

    @property
    def widths(self) -> bytes:
        """Raw width buffer as stored."""
        return self._widths.tobytes()

    @property
    def range_count(self) -> int:
        return len(self._ranges)

    @property
    def width_count(self) -> int:
        return len(self._widths)

    # =========================================================================
    # Lookup
    # =========================================================================

    def find_offset(self, cp: int) -> int:
        """
        Locate a code point in the width buffer.

        Uses a binary search over range lower bounds when the ranges are
        sorted and disjoint. Otherwise scans ranges in stored order and
        the first containing range wins.

        Returns:
            Position in the width buffer, or -1 if no range contains cp
        """
        ranges = self._ranges
        if not ranges.is_disjoint:
            return self._find_offset_by_scan(cp)

        i = bisect_right(ranges.lowers, cp) - 1
        if i < 0:
            return -1
        r = ranges[i]
        if cp > r.upper:
            return -1
        return ranges.offsets[i] + (cp - r.lower)

    def _find_offset_by_scan(self, cp: int) -> int:
        offset = 0
        for r in self._ranges:
            if r.lower <= cp <= r.upper:
                return offset + (cp - r.lower)
            offset += r.upper - r.lower + 1
        return -1

    def covers(self, cp: int) -> bool:
        """True if the table holds a width byte for cp."""
        pos = self.find_offset(cp)
        return 0 <= pos < len(self._widths)

    def width_of(self, cp: int) -> int:
        """
        Width of a single code point in pixels.

        Args:
            cp: Unicode code point

        Returns:
            0 for control code points, the stored width if covered,
            otherwise the fallback width
        """
        if cp < CONTROL_LIMIT:
            return 0
        pos = self.find_offset(cp)
        if pos < 0 or pos >= len(self._widths):
            return self.fallback_width
        return self._widths[pos]

    def width_of_text(self, text: str) -> int:
        """Sum of code point widths over text."""
        width_of = self.width_of
        return sum(width_of(ord(ch)) for ch in text)
