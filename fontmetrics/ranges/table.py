"""
Code Point Range Table
======================
Ordered set of inclusive code point intervals that a width index has
data for.

Each range owns a contiguous segment of the flat width buffer, in table
order. Segment ``i`` starts at the sum of the lengths of ranges ``0..i-1``,
so the table precomputes those offsets once.

Ranges may be adjacent. Overlap is not rejected here; use ``overlaps()``
to report it.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union

INT32_MAX = 0x7FFFFFFF


@dataclass(frozen=True, order=True)
class CodePointRange:
    """
    Inclusive code point interval ``[lower, upper]``.

    Attributes:
        lower: First code point covered
        upper: Last code point covered (inclusive)
    """

    lower: int
    upper: int

    def __post_init__(self):
        if self.lower < 0 or self.upper > INT32_MAX:
            raise ValueError(
                f"Range bounds must fit a non-negative int32: {self.lower:#x}..{self.upper:#x}"
            )
        if self.lower > self.upper:
            raise ValueError(f"Inverted range: {self.lower:#x} > {self.upper:#x}")

    def __len__(self) -> int:
        return self.upper - self.lower + 1

    def __contains__(self, cp: int) -> bool:
        return self.lower <= cp <= self.upper

    def __str__(self) -> str:
        return f"U+{self.lower:04X}..U+{self.upper:04X}"


RangeLike = Union[CodePointRange, Tuple[int, int]]


def _coerce(r: RangeLike) -> CodePointRange:
    if isinstance(r, CodePointRange):
        return r
    lower, upper = r
    return CodePointRange(int(lower), int(upper))


class RangeTable:
    """
    Immutable sequence of CodePointRange with precomputed segment offsets.

    Args:
        ranges: Ranges as CodePointRange or ``(lower, upper)`` pairs
        sort: Sort ascending by ``lower`` (stable). Decoded tables pass
            False to keep the stored order.
    """

    def __init__(self, ranges: Iterable[RangeLike] = (), sort: bool = True):
        items = [_coerce(r) for r in ranges]
        if sort:
            items.sort(key=lambda r: r.lower)
        self._ranges: Tuple[CodePointRange, ...] = tuple(items)

        offsets = []
        total = 0
        for r in self._ranges:
            offsets.append(total)
            total += len(r)
        self._offsets: Tuple[int, ...] = tuple(offsets)
        self._lowers: Tuple[int, ...] = tuple(r.lower for r in self._ranges)
        self._total = total
        pairs = list(zip(self._ranges, self._ranges[1:]))
        self._sorted = all(a.lower <= b.lower for a, b in pairs)
        self._disjoint = all(a.upper < b.lower for a, b in pairs)

    # =========================================================================
    # Sequence protocol
    # =========================================================================

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[CodePointRange]:
        return iter(self._ranges)

    def __getitem__(self, i: int) -> CodePointRange:
        return self._ranges[i]

    def __eq__(self, other) -> bool:
        if isinstance(other, RangeTable):
            return self._ranges == other._ranges
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._ranges)

    def __repr__(self) -> str:
        return f"RangeTable({len(self._ranges)} ranges, {self._total} code points)"

    # =========================================================================
    # Layout
    # =========================================================================

    @property
    def offsets(self) -> Tuple[int, ...]:
        """Start offset of each range's segment in the width buffer."""
        return self._offsets

    @property
    def lowers(self) -> Tuple[int, ...]:
        return self._lowers

    @property
    def is_sorted(self) -> bool:
        """True if ranges are ascending by lower bound."""
        return self._sorted

    @property
    def is_disjoint(self) -> bool:
        """True if ranges are ascending and share no code points."""
        return self._disjoint

    def total_width_count(self) -> int:
        """Number of width bytes the ranges require (sum of range lengths)."""
        return self._total

    def covers(self, cp: int) -> bool:
        return any(cp in r for r in self._ranges)

    def code_points(self) -> Iterator[int]:
        """Yield every covered code point in segment order."""
        for r in self._ranges:
            yield from range(r.lower, r.upper + 1)

    def overlaps(self) -> List[Tuple[CodePointRange, CodePointRange]]:
        """
        Find overlapping ranges.

        Only meaningful on a sorted table: each range is compared against
        the furthest-reaching range seen before it.

        Returns:
            List of ``(earlier, later)`` pairs that share code points
        """
        found = []
        reach = None
        for r in sorted(self._ranges, key=lambda r: r.lower):
            if reach is not None and r.lower <= reach.upper:
                found.append((reach, r))
            if reach is None or r.upper > reach.upper:
                reach = r
        return found
