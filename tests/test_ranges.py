"""Tests for fontmetrics.ranges: range table and text definition loader."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fontmetrics.errors import FormatError
from fontmetrics.ranges import (
    CodePointRange,
    RangeTable,
    load_ranges,
    load_ranges_file,
    parse_ranges,
)


# ───────────────────── CodePointRange ────────────────────────────────


def test_range_is_inclusive() -> None:
    r = CodePointRange(0x41, 0x5A)
    assert len(r) == 26
    assert 0x41 in r
    assert 0x5A in r
    assert 0x40 not in r
    assert 0x5B not in r


def test_single_code_point_range() -> None:
    r = CodePointRange(0x20, 0x20)
    assert len(r) == 1
    assert str(r) == "U+0020..U+0020"


@pytest.mark.parametrize("lower,upper", [(5, 4), (-1, 3), (0, 0x80000000)])
def test_invalid_range_rejected(lower: int, upper: int) -> None:
    with pytest.raises(ValueError):
        CodePointRange(lower, upper)


# ───────────────────── RangeTable ────────────────────────────────────


def test_table_sorts_by_lower_bound() -> None:
    table = RangeTable([(0x100, 0x17F), (0x0, 0x7F), (0x80, 0xFF)])
    assert [r.lower for r in table] == [0x0, 0x80, 0x100]
    assert table.is_sorted
    assert table.is_disjoint


def test_table_keeps_order_when_unsorted_requested() -> None:
    table = RangeTable([(0x61, 0x62), (0x41, 0x42)], sort=False)
    assert [r.lower for r in table] == [0x61, 0x41]
    assert not table.is_sorted
    assert not table.is_disjoint


def test_segment_offsets_accumulate_range_lengths() -> None:
    table = RangeTable([(0x20, 0x2F), (0x41, 0x5A), (0x100, 0x100)])
    assert table.offsets == (0, 16, 42)
    assert table.total_width_count() == 16 + 26 + 1


def test_adjacent_ranges_are_legal() -> None:
    table = RangeTable([(0x00, 0x7F), (0x80, 0xFF)])
    assert table.overlaps() == []
    assert table.is_disjoint
    assert table.total_width_count() == 256


def test_overlaps_reported() -> None:
    table = RangeTable([(0x00, 0x7F), (0x70, 0x90), (0x100, 0x110)])
    pairs = table.overlaps()
    assert pairs == [(CodePointRange(0x00, 0x7F), CodePointRange(0x70, 0x90))]
    assert table.is_sorted
    assert not table.is_disjoint


def test_code_points_follow_segment_order() -> None:
    table = RangeTable([(0x41, 0x42), (0x30, 0x30)])
    assert list(table.code_points()) == [0x30, 0x41, 0x42]


def test_empty_table() -> None:
    table = RangeTable()
    assert len(table) == 0
    assert table.total_width_count() == 0
    assert not table.covers(0x41)


# ───────────────────── Loader ────────────────────────────────────────


def test_parse_ranges_with_block_names() -> None:
    text = (
        "# comment\n"
        "\n"
        "0080 . 00FF   Latin-1 Supplement\n"
        "0000 . 007F   Basic Latin\n"
    )
    table = parse_ranges(text)
    assert list(table) == [CodePointRange(0x00, 0x7F), CodePointRange(0x80, 0xFF)]


def test_parse_ranges_accepts_bare_trailing_spaces() -> None:
    table = parse_ranges("0041 . 005A   \r\n")
    assert list(table) == [CodePointRange(0x41, 0x5A)]


def test_parse_ranges_accepts_other_separator_and_lowercase() -> None:
    table = parse_ranges("1e00 - 1eff   Latin Extended Additional")
    assert list(table) == [CodePointRange(0x1E00, 0x1EFF)]


def test_parse_ranges_skips_indented_comments() -> None:
    assert len(parse_ranges("   # indented\n\t\n")) == 0


@pytest.mark.parametrize(
    "line",
    [
        "0041 . 005A",          # no trailing spaces
        "0041 . 005A  x",       # only two spaces
        "0041 005A   ",         # missing separator
        "0041 .. 005A   ",      # separator too long
        "garbage",
    ],
)
def test_malformed_line_raises_format_error(line: str) -> None:
    with pytest.raises(FormatError):
        parse_ranges("0000 . 001F   ok\n" + line + "\n")


def test_format_error_reports_line_number() -> None:
    with pytest.raises(FormatError) as excinfo:
        parse_ranges("# header\n0000 . 007F   ok\nbroken line\n")
    assert excinfo.value.line_no == 3
    assert excinfo.value.line == "broken line"
    assert "line 3" in str(excinfo.value)


def test_non_hex_bound_raises_format_error() -> None:
    with pytest.raises(FormatError, match="invalid hex"):
        parse_ranges("00G1 . 005A   bad\n")


def test_inverted_bounds_raise_format_error() -> None:
    with pytest.raises(FormatError, match="Inverted"):
        parse_ranges("005A . 0041   backwards\n")


def test_format_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_ranges("nope\n")


def test_overlap_is_logged_not_rejected(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="fontmetrics.ranges.loader"):
        table = parse_ranges("0000 . 007F   a\n0070 . 0090   b\n")
    assert len(table) == 2
    assert "Overlapping ranges" in caplog.text


def test_load_ranges_file(tmp_path: Path) -> None:
    path = tmp_path / "ranges.txt"
    path.write_text("0020 . 007E   Printable ASCII\n", encoding="utf-8")
    assert list(load_ranges_file(path)) == [CodePointRange(0x20, 0x7E)]


def test_load_packaged_short_ranges() -> None:
    table = load_ranges("short")
    assert table[0] == CodePointRange(0x0000, 0x007F)
    assert CodePointRange(0x1E00, 0x1EFF) in list(table)
    assert table.is_disjoint


def test_load_packaged_full_ranges_is_superset_of_short() -> None:
    short = set(load_ranges("short"))
    full = set(load_ranges("full"))
    assert short <= full
    assert load_ranges("full").is_disjoint


def test_load_unknown_packaged_ranges() -> None:
    with pytest.raises(FileNotFoundError):
        load_ranges("does-not-exist")
