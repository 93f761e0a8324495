"""
Range Definition Loader
=======================
Parses the text range definition format into a sorted RangeTable.

Format (UTF-8, one range per line):
    <hex-lower> <sep> <hex-upper>   [description]

    - token, space, one separator character, space, token, three spaces
    - anything after the three spaces (usually the block name) is ignored
    - blank lines and lines starting with '#' are skipped

Example:
    # Basic blocks
    0000 . 007F   Basic Latin
    0080 . 00FF   Latin-1 Supplement

Any other line aborts the whole load with FormatError.
"""

import logging
import re
from importlib import resources
from pathlib import Path
from typing import Union

from ..errors import FormatError
from .table import CodePointRange, RangeTable

log = logging.getLogger(__name__)

_RANGE_LINE = re.compile(r"^([^ ]+) \S ([^ ]+) {3}")
_HEX = re.compile(r"[0-9A-Fa-f]+")


def parse_ranges(text: str) -> RangeTable:
    """
    Parse range definition text.

    Args:
        text: Full contents of a range definition file

    Returns:
        RangeTable sorted ascending by lower bound

    Raises:
        FormatError: On the first line that does not match the format
    """
    ranges = []
    for line_no, raw in enumerate(text.split("\n"), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue

        line = raw.lstrip().rstrip("\r")
        m = _RANGE_LINE.match(line)
        if not m:
            raise FormatError(line_no, stripped)

        lower_tok, upper_tok = m.group(1), m.group(2)
        if not (_HEX.fullmatch(lower_tok) and _HEX.fullmatch(upper_tok)):
            raise FormatError(line_no, stripped, "invalid hex bound")

        try:
            ranges.append(CodePointRange(int(lower_tok, 16), int(upper_tok, 16)))
        except ValueError as e:
            raise FormatError(line_no, stripped, str(e)) from e

    table = RangeTable(ranges)
    for a, b in table.overlaps():
        log.warning("Overlapping ranges %s and %s", a, b)
    log.debug("Parsed %d ranges covering %d code points",
              len(table), table.total_width_count())
    return table


def load_ranges_file(path: Union[str, Path]) -> RangeTable:
    """Load a range definition file from disk."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_ranges(f.read())


def load_ranges(name: str) -> RangeTable:
    """
    Load a packaged range definition by name.

    Args:
        name: Resource name, e.g. "short" for data/ranges.short.txt

    Raises:
        FileNotFoundError: If no such packaged definition exists
    """
    resource = resources.files("fontmetrics") / "data" / f"ranges.{name}.txt"
    if not resource.is_file():
        raise FileNotFoundError(f"No packaged range definition named {name!r}")
    return parse_ranges(resource.read_text(encoding="utf-8"))
