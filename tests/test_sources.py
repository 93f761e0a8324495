"""Tests for fontmetrics.sources: rasterizer and BDF width sources."""
from __future__ import annotations

from types import SimpleNamespace

import pytest

from fontmetrics.config import FontMetricsConfig
from fontmetrics.index import decode, encode
from fontmetrics.ranges import RangeTable
from fontmetrics.sources import BdfWidthSource, SystemWidthSource, WidthSource


class FakeFont:
    """Stands in for a FreeType font: advance is 10.4px per character."""

    def __init__(self, advance: float = 10.4):
        self.advance = advance
        self.queries: list[str] = []

    def getlength(self, text: str) -> float:
        self.queries.append(text)
        return len(text) * self.advance


# ───────────────────── WidthSource ───────────────────────────────────


def test_base_width_of_is_abstract() -> None:
    with pytest.raises(NotImplementedError):
        WidthSource().width_of(0x41)


def test_base_text_width_sums_code_points() -> None:
    class Doubling(WidthSource):
        def width_of(self, cp: int) -> int:
            return 2

    with Doubling() as source:
        assert source.width_of_text("abc\U0001F600") == 8


# ───────────────────── SystemWidthSource ─────────────────────────────


def test_system_width_rounds_advance() -> None:
    source = SystemWidthSource(font=FakeFont(10.4))
    assert source.width_of(ord("A")) == 10
    source = SystemWidthSource(font=FakeFont(10.6))
    assert source.width_of(ord("A")) == 11


@pytest.mark.parametrize("advance,expected", [(500.0, 127), (-3.0, 0)])
def test_system_width_clamped(advance: float, expected: int) -> None:
    assert SystemWidthSource(font=FakeFont(advance)).width_of(ord("W")) == expected


@pytest.mark.parametrize("cp", [0xD800, 0xDFFF, 0x110000, -1])
def test_system_width_of_unencodable_is_zero(cp: int) -> None:
    font = FakeFont()
    assert SystemWidthSource(font=font).width_of(cp) == 0
    assert font.queries == []


def test_system_text_width_measures_whole_string() -> None:
    font = FakeFont(10.4)
    source = SystemWidthSource(font=font)
    assert source.width_of_text("Hello") == 52
    assert font.queries == ["Hello"]
    assert source.width_of_text("") == 0


def test_system_source_feeds_encoder() -> None:
    source = SystemWidthSource(font=FakeFont(60.2))
    index = decode(encode(RangeTable([(0, 127)]), source))
    assert index.width_of(ord("A")) == 60
    assert index.width_of(ord("\t")) == 0


def test_create_returns_none_when_font_missing() -> None:
    config = FontMetricsConfig(font_file="no-such-font-anywhere.ttf")
    assert SystemWidthSource.create(config) is None


def test_system_source_name() -> None:
    assert SystemWidthSource(font=FakeFont()).name == "system"


# ───────────────────── BdfWidthSource ────────────────────────────────


def _glyph(codepoint, advance):
    return SimpleNamespace(codepoint=codepoint, advance=advance)


def test_bdf_source_from_font() -> None:
    font = SimpleNamespace(glyphs=[_glyph(0x41, 8), _glyph(0x20, 4), _glyph(None, 9), _glyph(-1, 9)])
    source = BdfWidthSource.from_font(font, default_width=16)
    assert len(source) == 2
    assert source.width_of(0x41) == 8
    assert source.width_of(0x20) == 4
    assert source.width_of(0x42) == 16


def test_bdf_source_default_width_is_font_size() -> None:
    assert BdfWidthSource({}).width_of(0x41) == 110


def test_bdf_source_round_trips_through_index() -> None:
    source = BdfWidthSource({cp: 6 for cp in range(0x20, 0x7F)}, default_width=200)
    index = decode(encode(RangeTable([(0, 127)]), source))
    assert index.width_of_text("abc") == 18
    # Missing glyph (DEL) stores the clamped default
    assert index.width_of(0x7F) == 127
