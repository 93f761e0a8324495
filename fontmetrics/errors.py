"""
Exception hierarchy for the fontmetrics package.

Construction-time failures (loading range text, decoding an index) raise.
Query-time misses never raise: unknown code points resolve to the
fallback width.
"""


class FontMetricsError(Exception):
    """Base class for all fontmetrics errors."""


class FormatError(FontMetricsError, ValueError):
    """A range definition line does not have the expected shape."""

    def __init__(self, line_no: int, line: str, reason: str = "invalid range line"):
        self.line_no = line_no
        self.line = line
        super().__init__(f"{reason} at line {line_no}: {line!r}")


class IndexFormatError(FontMetricsError, ValueError):
    """A binary width index is structurally invalid."""


class TruncatedDataError(IndexFormatError):
    """The index data ends before one of its declared counts is satisfied."""


class WidthCountMismatchError(IndexFormatError):
    """Declared width count disagrees with the ranges (strict decode only)."""


class SourceUnavailableError(FontMetricsError):
    """No width source could be resolved for the configured strategy."""
