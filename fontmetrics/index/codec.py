"""
Width Index Binary Format
=========================
Encodes a RangeTable plus per-code-point widths into a compact blob, and
decodes such a blob back into a queryable WidthIndex.

The format keeps only the covered ranges, one byte per covered code
point. It is written and read sequentially with no further compression.

Format Layout (big-endian, signed):
    [range_count: int32]
    [range_count x (lower: int32, upper: int32)]
    [width_count: int32]
    [width_count x width: int8]

    Total size = 4 + 8 * range_count + 4 + width_count

Widths are clamped to [0, 127] when encoding. Code points below 32 are
always written as 0 without consulting the width source. Decoding does
not clamp, so a foreign blob may yield negative widths.
"""

import logging
import struct
from pathlib import Path
from typing import Callable, Union

from ..errors import IndexFormatError, TruncatedDataError, WidthCountMismatchError
from ..ranges.table import CodePointRange, RangeTable
from .width_index import WidthIndex

log = logging.getLogger(__name__)

_COUNT = struct.Struct(">i")
_RANGE = struct.Struct(">ii")

MAX_WIDTH = 127
CONTROL_LIMIT = 32


def _width_function(source) -> Callable[[int], int]:
    """Accept a WidthSource-like object or a plain callable."""
    width_of = getattr(source, "width_of", None)
    if callable(width_of):
        return width_of
    if callable(source):
        return source
    raise TypeError(f"Not a width source: {source!r}")


def clamp_width(width: int) -> int:
    return min(max(int(width), 0), MAX_WIDTH)


# =============================================================================
# Encoder
# =============================================================================

def compute_widths(ranges: RangeTable, source) -> bytes:
    """
    Compute the flat width buffer for a range table.

    Args:
        ranges: Ranges to cover, in segment order
        source: WidthSource or callable ``cp -> width``

    Returns:
        One byte per covered code point, in range order
    """
    width_of = _width_function(source)
    widths = bytearray(ranges.total_width_count())
    offset = 0
    for r in ranges:
        for cp in range(r.lower, r.upper + 1):
            if cp >= CONTROL_LIMIT:
                widths[offset + cp - r.lower] = clamp_width(width_of(cp))
        offset += len(r)
    return bytes(widths)


def encode(ranges: RangeTable, source) -> bytes:
    """
    Build a width index blob.

    Args:
        ranges: Sorted, non-overlapping range table
        source: WidthSource or callable ``cp -> width``

    Returns:
        Serialized index bytes
    """
    if not isinstance(ranges, RangeTable):
        ranges = RangeTable(ranges)
    widths = compute_widths(ranges, source)

    out = bytearray()
    out += _COUNT.pack(len(ranges))
    for r in ranges:
        out += _RANGE.pack(r.lower, r.upper)
    out += _COUNT.pack(len(widths))
    out += widths
    return bytes(out)


def export_file(path: Union[str, Path], ranges: RangeTable, source) -> int:
    """
    Encode an index and write it to a file.

    Returns:
        Number of bytes written

    Raises:
        OSError: If the file cannot be written
    """
    data = encode(ranges, source)
    with open(path, "wb") as f:
        f.write(data)
    log.info("Wrote width index %s (%d ranges, %d bytes)", path, len(ranges), len(data))
    return len(data)


# =============================================================================
# Decoder
# =============================================================================

def _read_count(data: bytes, pos: int, what: str) -> int:
    if pos + _COUNT.size > len(data):
        raise TruncatedDataError(f"Missing {what} at byte {pos} (size {len(data)})")
    (count,) = _COUNT.unpack_from(data, pos)
    if count < 0:
        raise IndexFormatError(f"Negative {what}: {count}")
    return count


def decode(data: bytes, strict: bool = False) -> WidthIndex:
    """
    Parse a width index blob.

    Args:
        data: Complete serialized index
        strict: Reject blobs whose width count differs from the sum of
            range lengths. Lenient mode keeps them and lets lookups fall
            back for positions past the end of the buffer.

    Returns:
        WidthIndex owning copies of the decoded ranges and widths

    Raises:
        TruncatedDataError: If the data is shorter than a declared count
        IndexFormatError: If a count is negative or a range is invalid
        WidthCountMismatchError: In strict mode, on a width count mismatch
    """
    data = bytes(data)
    pos = 0

    range_count = _read_count(data, pos, "range count")
    pos += _COUNT.size

    end = pos + range_count * _RANGE.size
    if end > len(data):
        have = (len(data) - pos) // _RANGE.size
        raise TruncatedDataError(
            f"Declared {range_count} ranges but data holds only {have}"
        )
    ranges = []
    for lower, upper in _RANGE.iter_unpack(data[pos:end]):
        try:
            ranges.append(CodePointRange(lower, upper))
        except ValueError as e:
            raise IndexFormatError(str(e)) from e
    pos = end

    width_count = _read_count(data, pos, "width count")
    pos += _COUNT.size
    if pos + width_count > len(data):
        raise TruncatedDataError(
            f"Declared {width_count} widths but data holds only {len(data) - pos}"
        )
    widths = data[pos:pos + width_count]
    pos += width_count

    if pos < len(data):
        log.debug("Ignoring %d trailing bytes after width data", len(data) - pos)

    table = RangeTable(ranges, sort=False)
    expected = table.total_width_count()
    if expected != width_count:
        if strict:
            raise WidthCountMismatchError(
                f"Ranges cover {expected} code points but {width_count} widths stored"
            )
        log.warning("Width count %d does not match ranges (%d)", width_count, expected)

    return WidthIndex(table, widths)


def import_file(path: Union[str, Path], strict: bool = False) -> WidthIndex:
    """Read and decode a width index file."""
    with open(path, "rb") as f:
        data = f.read()
    index = decode(data, strict=strict)
    log.debug("Loaded width index %s: %r", path, index)
    return index
