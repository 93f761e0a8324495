"""Shared fixtures: fake width sources and blob builders."""
from __future__ import annotations

import struct
from pathlib import Path

import pytest

from fontmetrics.ranges import RangeTable
from fontmetrics.sources import WidthSource


class RecordingSource(WidthSource):
    """Width source that returns a fixed function and records every query."""

    name = "fake"

    def __init__(self, func):
        self._func = func
        self.calls: list[int] = []

    def width_of(self, cp: int) -> int:
        self.calls.append(cp)
        return self._func(cp)


def make_blob(ranges: list[tuple[int, int]], widths: bytes, width_count: int | None = None) -> bytes:
    """Serialize an index by hand, optionally lying about the width count."""
    out = struct.pack(">i", len(ranges))
    for lower, upper in ranges:
        out += struct.pack(">ii", lower, upper)
    out += struct.pack(">i", len(widths) if width_count is None else width_count)
    return out + bytes(widths)


@pytest.fixture()
def ascii_table() -> RangeTable:
    return RangeTable([(0, 127)])


@pytest.fixture()
def constant_source() -> RecordingSource:
    return RecordingSource(lambda cp: 70)


@pytest.fixture()
def index_file(tmp_path: Path) -> Path:
    """Index over [0, 127] where every printable code point is 70 wide."""
    widths = bytes(0 if cp < 32 else 70 for cp in range(128))
    path = tmp_path / "fontmetrics.bin"
    path.write_bytes(make_blob([(0, 127)], widths))
    return path
