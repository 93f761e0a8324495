"""
Range table subsystem.

Modules:
    table: CodePointRange and the ordered RangeTable
    loader: Parser for the text range definition format
"""
from .table import CodePointRange, RangeTable
from .loader import load_ranges, load_ranges_file, parse_ranges

__all__ = [
    "CodePointRange",
    "RangeTable",
    "load_ranges",
    "load_ranges_file",
    "parse_ranges",
]
