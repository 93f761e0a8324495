"""
WidthSource - Abstract Base for Width Providers
===============================================
Defines the interface shared by everything that can report the pixel
width of a code point in the reference font: the rasterizer, bitmap
font readers, and the precomputed WidthIndex.

FontMetrics and the index encoder only rely on this interface, so any
source can be injected in place of another.

Note: Using duck typing instead of ABC; plain callables are accepted by
the encoder as well.
"""


class WidthSource:
    """
    Abstract base class for width providers.

    Subclasses must implement width_of(). width_of_text() defaults to
    summing per-code-point widths.

    Properties:
        name: Short label used in logs and CLI output
    """

    name = "abstract"

    def width_of(self, cp: int) -> int:
        """
        Width of a single code point in pixels.

        Args:
            cp: Unicode code point

        Returns:
            Width in pixels
        """
        raise NotImplementedError

    def width_of_text(self, text: str) -> int:
        """
        Width of a string in pixels.

        Args:
            text: Text to measure, iterated per code point

        Returns:
            Total width in pixels
        """
        return sum(self.width_of(ord(ch)) for ch in text)

    def close(self):
        """Release any resources held by the source."""

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False
