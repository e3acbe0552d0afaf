"""
RowVirtualizer - Windowing math for variable-height rows.

Rows have individually known heights. Start offsets are prefix sums, so
the visible range for a scroll position is two binary searches.
"""
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from itertools import accumulate
from typing import Sequence

DEFAULT_OVERSCAN = 3


@dataclass(frozen=True)
class VirtualRow:
    index: int
    start: int
    size: int

    @property
    def end(self) -> int:
        return self.start + self.size


@dataclass(frozen=True)
class VirtualWindow:
    """
    Rows to materialize.

    Attributes:
        start: First row index (inclusive), -1 when empty
        end: Last row index (inclusive), -1 when empty
        offset: Pixel offset of the first materialized row; the rows
            layer is translated by this amount
        items: Materialized rows in order
    """
    start: int = -1
    end: int = -1
    offset: int = 0
    items: tuple[VirtualRow, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def indexes(self) -> range:
        if self.is_empty:
            return range(0)
        return range(self.start, self.end + 1)


class RowVirtualizer:
    """
    Computes which rows intersect a viewport, plus overscan.

    Example:
        virtualizer = RowVirtualizer(overscan=3)
        virtualizer.set_sizes([row.height for row in rows])
        container.setFixedHeight(virtualizer.total_size)
        window = virtualizer.get_window(scroll_y, viewport_height)
    """

    def __init__(self, overscan: int = DEFAULT_OVERSCAN):
        self._overscan = overscan
        self._sizes: list[int] = []
        self._starts: list[int] = []
        self._ends: list[int] = []

    @property
    def overscan(self) -> int:
        return self._overscan

    @property
    def count(self) -> int:
        return len(self._sizes)

    @property
    def total_size(self) -> int:
        return self._ends[-1] if self._ends else 0

    def set_sizes(self, sizes: Sequence[int]):
        """Replace all row sizes."""
        self._sizes = list(sizes)
        self._ends = list(accumulate(self._sizes))
        self._starts = [end - size for end, size in zip(self._ends, self._sizes)]

    def row_start(self, index: int) -> int:
        return self._starts[index]

    def get_window(self, scroll_offset: int, viewport_height: int) -> VirtualWindow:
        """
        Rows visible in ``[scroll_offset, scroll_offset + viewport_height)``
        widened by ``overscan`` rows on each side.
        """
        if not self._sizes:
            return VirtualWindow()

        scroll_offset = max(0, scroll_offset)
        viewport_end = scroll_offset + max(0, viewport_height)

        first = min(bisect_right(self._ends, scroll_offset), self.count - 1)
        last = max(first, bisect_left(self._starts, viewport_end) - 1)

        start = max(0, first - self._overscan)
        end = min(self.count - 1, last + self._overscan)
        items = tuple(
            VirtualRow(index=i, start=self._starts[i], size=self._sizes[i])
            for i in range(start, end + 1)
        )
        return VirtualWindow(start=start, end=end, offset=self._starts[start], items=items)
