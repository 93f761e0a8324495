#!/usr/bin/env python3
"""
Font Metrics Tool
=================
Builds, inspects and queries width index files.

Commands:
    export    Rasterize every code point of a range definition into an index
    measure   Print the pixel width of a text
    inspect   Summarize an index file
    compare   Rasterizer vs index widths for sample code points
    bench     Time text width queries against an index

Requirements:
    pip install Pillow bdflib

Usage:
    # Build the default index from the installed Verdana
    fontmetrics export short fontmetrics.bin

    # Build from a BDF bitmap font instead
    fontmetrics export ranges.txt out.bin --bdf spleen-8x16.bdf

    # Query with whatever source is available
    fontmetrics measure "Hello World!"

    # Query a specific index
    fontmetrics measure "Hello World!" --index fontmetrics.bin
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from .config import FONT_FILE, FONT_SIZE, STRATEGIES, FontMetricsConfig
from .errors import FontMetricsError
from .index.codec import export_file, import_file
from .metrics import FontMetrics
from .ranges.loader import load_ranges, load_ranges_file
from .sources.bdf import BdfWidthSource
from .sources.system import SystemWidthSource

# Code points shown by `compare`
SAMPLE_CODE_POINTS = [
    ("<LF>", 0x0A),
    ("<SPACE>", 0x20),
    ("A", 0x41),
    ("~", 0x7E),
    ("<127>", 0x7F),
    ("<128>", 0x80),
    ("<NBSP>", 0xA0),
    ("<SHY>", 0xAD),
    ("<255>", 0xFF),
    ("<7680>", 0x1E00),
    ("<7821>", 0x1E8D),
    ("<7935>", 0x1EFF),
]
SAMPLE_TEXT = "Hello World!"


# =============================================================================
# Output helpers
# =============================================================================

def print_header(title: str) -> None:
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)


def print_metric(name: str, value, unit: str = "") -> None:
    """Print a metric in consistent format."""
    if isinstance(value, float):
        print(f"  {name:<30} {value:>12.4f} {unit}")
    else:
        print(f"  {name:<30} {value:>12} {unit}")


def avg_timed(func, iterations: int, *args) -> float:
    """Run function N times and return average time in microseconds."""
    start = time.perf_counter_ns()
    for _ in range(iterations):
        func(*args)
    return (time.perf_counter_ns() - start) / iterations / 1000


# =============================================================================
# Commands
# =============================================================================

def _load_range_table(name_or_path: str):
    path = Path(name_or_path)
    if path.is_file():
        return load_ranges_file(path)
    return load_ranges(name_or_path)


def cmd_export(args) -> int:
    ranges = _load_range_table(args.ranges)
    print(f"Loaded {len(ranges)} ranges, {ranges.total_width_count()} code points")

    if args.bdf:
        print(f"Reading glyph advances: {args.bdf}")
        source = BdfWidthSource.from_path(args.bdf, default_width=args.size)
    else:
        print(f"Rasterizing {args.font} at {args.size}px")
        source = SystemWidthSource(font_file=args.font, font_size=args.size)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    start = time.perf_counter()
    with source:
        size = export_file(args.output, ranges, source)
    elapsed = time.perf_counter() - start

    print(f"Created: {args.output} ({size / 1024:.1f} KB, {elapsed:.2f}s)")
    return 0


def cmd_measure(args) -> int:
    config = args.config
    if args.index:
        config = replace(config, index_path=str(args.index), strategy="index")
    if args.strategy:
        config = replace(config, strategy=args.strategy)

    with FontMetrics.from_config(config) as metrics:
        width = metrics.width_of_text(args.text)
        if args.verbose:
            print(f"source: {metrics.strategy}")
            for ch in args.text:
                print(f"  U+{ord(ch):04X} {ch!r}: {metrics.width_of(ord(ch))}")
    print(width)
    return 0


def cmd_inspect(args) -> int:
    index = import_file(args.index, strict=args.strict)
    ranges = index.ranges
    widths = index.widths

    print_header(f"Width index: {args.index}")
    print_metric("Ranges", index.range_count)
    print_metric("Widths stored", index.width_count)
    print_metric("Widths expected", ranges.total_width_count())
    print_metric("Size", args.index.stat().st_size, "bytes")
    print_metric("Sorted", "yes" if ranges.is_sorted else "no")

    print()
    for r, offset in zip(ranges, ranges.offsets):
        segment = _segment(widths, offset, len(r))
        if segment:
            span = f"{min(segment)}..{max(segment)}"
        else:
            span = "missing"
        print(f"  {str(r):<22} {len(r):>6} cps  widths {span}")
    return 0


def _segment(widths: bytes, offset: int, length: int) -> list:
    """Signed widths of one range segment (may be short for bad files)."""
    return [w - 256 if w > 127 else w for w in widths[offset:offset + length]]


def cmd_compare(args) -> int:
    index = import_file(args.index)
    system = SystemWidthSource(font_file=args.font, font_size=args.size)

    print_header(f"{args.font} rasterizer vs {args.index}")
    with system:
        for label, cp in SAMPLE_CODE_POINTS:
            sys_w = system.width_of(cp)
            idx_w = index.width_of(cp)
            mark = "" if sys_w == idx_w else "  *"
            print(f"  {label:<10} ==> {sys_w:>4} => {idx_w:>4}{mark}")
        print(f"  {SAMPLE_TEXT} ==> {system.width_of_text(SAMPLE_TEXT)} => "
              f"{index.width_of_text(SAMPLE_TEXT)}")
    return 0


def cmd_bench(args) -> int:
    index = import_file(args.index)
    print_header(f"Benchmark: {args.iterations} iterations")
    us = avg_timed(index.width_of_text, args.iterations, args.text)
    print_metric(f"width_of_text({args.text!r})", us, "us")
    us = avg_timed(index.width_of, args.iterations, ord("A"))
    print_metric("width_of('A')", us, "us")
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fontmetrics",
        description="Build and query pixel width indexes for a reference font",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fontmetrics export short fontmetrics.bin
  fontmetrics export full big.bin --font DejaVuSans.ttf --size 110
  fontmetrics inspect fontmetrics.bin
  fontmetrics measure "Hello World!" --index fontmetrics.bin
  fontmetrics compare fontmetrics.bin

Packaged range definitions: short, full
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging and per-character output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("export", help="Build a width index")
    p.add_argument("ranges", help="Packaged range name or range definition file")
    p.add_argument("output", type=Path, help="Output index file")
    p.add_argument("--font", "-f", default=FONT_FILE,
                   help=f"Font file for the rasterizer (default: {FONT_FILE})")
    p.add_argument("--size", "-s", type=int, default=FONT_SIZE,
                   help=f"Font size in pixels (default: {FONT_SIZE})")
    p.add_argument("--bdf", type=Path, help="Take widths from a BDF font instead")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("measure", help="Print the pixel width of a text")
    p.add_argument("text")
    p.add_argument("--index", "-i", type=Path, help="Width index file (implies --strategy index)")
    p.add_argument("--strategy", choices=STRATEGIES, help="Override the configured strategy")
    p.set_defaults(func=cmd_measure)

    p = sub.add_parser("inspect", help="Summarize an index file")
    p.add_argument("index", type=Path)
    p.add_argument("--strict", action="store_true",
                   help="Fail if the width count does not match the ranges")
    p.set_defaults(func=cmd_inspect)

    p = sub.add_parser("compare", help="Rasterizer vs index for sample code points")
    p.add_argument("index", type=Path)
    p.add_argument("--font", "-f", default=FONT_FILE)
    p.add_argument("--size", "-s", type=int, default=FONT_SIZE)
    p.set_defaults(func=cmd_compare)

    p = sub.add_parser("bench", help="Time width queries against an index")
    p.add_argument("index", type=Path)
    p.add_argument("--iterations", "-n", type=int, default=100_000)
    p.add_argument("--text", default=SAMPLE_TEXT)
    p.set_defaults(func=cmd_bench)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        args.config = FontMetricsConfig.from_env()
        return args.func(args)
    except (FontMetricsError, OSError, ValueError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
