"""
fontmetrics
===========
Pixel widths of text in a fixed reference font (Verdana, 110px) without
a rendering engine at query time.

Architecture
------------
The library is organized into layers:

    FontMetrics         Strategy selection + query interface
       │
       ├── WidthSource       Width provider protocol
       │      ├── SystemWidthSource  Pillow/FreeType rasterizer
       │      ├── BdfWidthSource     BDF bitmap font advances
       │      └── WidthIndex         Precomputed width table
       │
       ├── codec             Binary index encode/decode
       │
       └── RangeTable        Covered code point ranges + text loader

Quick Start
-----------
    from fontmetrics import FontMetrics

    metrics = FontMetrics.from_config()
    metrics.width_of_text("Hello World!")
    metrics.width_of(ord("A"))

Building an Index
-----------------
    from fontmetrics import SystemWidthSource, export_file, load_ranges

    with SystemWidthSource() as source:
        export_file("fontmetrics.bin", load_ranges("short"), source)

Module Structure
----------------
    fontmetrics/
    ├── metrics.py           High-level interface
    ├── config.py            Settings and reference font constants
    ├── errors.py            Exception hierarchy
    ├── cli.py               Command line tool
    ├── ranges/
    │   ├── table.py         CodePointRange, RangeTable
    │   └── loader.py        Range definition text parser
    ├── index/
    │   ├── width_index.py   Table-backed lookup
    │   └── codec.py         Binary format
    └── sources/
        ├── base.py          WidthSource protocol
        ├── system.py        Rasterizer source
        └── bdf.py           BDF font source
"""

from .config import FONT_NAME, FONT_SIZE, FontMetricsConfig
from .errors import (
    FontMetricsError,
    FormatError,
    IndexFormatError,
    SourceUnavailableError,
    TruncatedDataError,
    WidthCountMismatchError,
)
from .ranges import CodePointRange, RangeTable, load_ranges, load_ranges_file, parse_ranges
from .sources import BdfWidthSource, SystemWidthSource, WidthSource
from .index import WidthIndex, compute_widths, decode, encode, export_file, import_file
from .metrics import FontMetrics, resolve_width_source

__all__ = [
    # High-level
    "FontMetrics",
    "FontMetricsConfig",
    "resolve_width_source",
    "FONT_NAME",
    "FONT_SIZE",
    # Ranges
    "CodePointRange",
    "RangeTable",
    "load_ranges",
    "load_ranges_file",
    "parse_ranges",
    # Sources
    "WidthSource",
    "SystemWidthSource",
    "BdfWidthSource",
    "WidthIndex",
    # Codec
    "compute_widths",
    "decode",
    "encode",
    "export_file",
    "import_file",
    # Errors
    "FontMetricsError",
    "FormatError",
    "IndexFormatError",
    "TruncatedDataError",
    "WidthCountMismatchError",
    "SourceUnavailableError",
]

__version__ = "1.0.0"
