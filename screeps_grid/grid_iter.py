"""
grid_iter: enumerate the positions of an axis-aligned rectangle.

GridIter walks the closed rectangle [top_left, bottom_right] with the chosen
major axis varying slowest. It is double-ended (next / next_back may be
interleaved), knows its exact remaining length, and offers fold / rfold that
sweep whole major slices at a time instead of stepping the cursor state
machine once per cell.

Iteration state (a = major axis, b = minor axis):
  forward  = (a, b) of the next cell from the front
  backward = (a, b) of the next cell from the back
  b_min, b_max = fixed minor-axis bounds
  done     = exhausted flag

While not done, forward <= backward lexicographically. The cursors move one
cell at a time, so they always meet exactly; the cell where they meet is
yielded once and the iterator is then exhausted on both ends, forever.
"""

from enum import Enum
from functools import reduce
from itertools import chain, repeat
import operator
from typing import Any, Callable, Iterable, Iterator, Tuple

from .constants import ROOM_SIZE
from .coordinate import RoomXY


class Order(Enum):
    COLUMN_MAJOR = "column_major"  # x varies slowest
    ROW_MAJOR = "row_major"        # y varies slowest


class GridIter:
    """
    Double-ended, exact-length, fused iterator over a rectangle of RoomXY.

    An inverted rectangle (bottom_right left of or above top_left) is simply
    empty.
    """

    def __init__(self, top_left: RoomXY, bottom_right: RoomXY, order: Order = Order.COLUMN_MAJOR):
        top, bottom = top_left.y, bottom_right.y
        left, right = top_left.x, bottom_right.x

        if order is Order.COLUMN_MAJOR:
            a_min, a_max, b_min, b_max = left, right, top, bottom
        else:
            a_min, a_max, b_min, b_max = top, bottom, left, right

        self._order = order
        self._b_min = b_min
        self._b_max = b_max
        self._forward: Tuple[int, int] = (a_min, b_min)
        self._backward: Tuple[int, int] = (a_max, b_max)
        self._done = top > bottom or left > right

    @property
    def order(self) -> Order:
        return self._order

    def __repr__(self) -> str:
        return (
            f"GridIter(order={self._order.name}, forward={self._forward}, "
            f"backward={self._backward}, b=({self._b_min}, {self._b_max}), done={self._done})"
        )

    # ========== Cursor stepping ==========

    def _xy(self, a: int, b: int) -> RoomXY:
        # a, b always come from the cursors or the bounds, which come from
        # the two RoomXY corners passed to __init__
        if self._order is Order.COLUMN_MAJOR:
            return RoomXY._unchecked(a, b)
        return RoomXY._unchecked(b, a)

    def __iter__(self) -> "GridIter":
        return self

    def __next__(self) -> RoomXY:
        if self._done:
            raise StopIteration

        a, b = self._forward
        res = self._xy(a, b)

        if self._forward == self._backward:
            self._done = True
        elif b == self._b_max:
            self._forward = (a + 1, self._b_min)
        else:
            self._forward = (a, b + 1)

        return res

    def next_back(self) -> RoomXY:
        """Yield the greatest remaining position; StopIteration once exhausted."""
        if self._done:
            raise StopIteration

        a, b = self._backward
        res = self._xy(a, b)

        if self._backward == self._forward:
            self._done = True
        elif b == self._b_min:
            self._backward = (a - 1, self._b_max)
        else:
            self._backward = (a, b - 1)

        return res

    def __reversed__(self) -> Iterator[RoomXY]:
        while True:
            try:
                yield self.next_back()
            except StopIteration:
                return

    def __len__(self) -> int:
        if self._done:
            return 0

        fa, fb = self._forward
        ba, bb = self._backward

        if fa == ba:
            return bb - fb + 1

        full_slices = ba - fa - 1
        return (
            full_slices * (self._b_max - self._b_min + 1)
            + (self._b_max - fb + 1)
            + (bb - self._b_min + 1)
        )

    # ========== Bulk consumption ==========

    def _slice(self, a: int, b_lo: int, b_hi: int, backwards: bool = False) -> Iterator[RoomXY]:
        """Positions of major slice a with minor values b_lo..b_hi."""
        bs = range(b_lo, b_hi + 1)
        if backwards:
            bs = reversed(bs)
        if self._order is Order.COLUMN_MAJOR:
            return map(RoomXY._unchecked, repeat(a), bs)
        return map(RoomXY._unchecked, bs, repeat(a))

    def _take_slices(self, backwards: bool) -> Iterable[Iterator[RoomXY]]:
        """
        Consume the iterator, returning its remaining cells as whole slices:
        the partial slice at one cursor, every full slice in between, and the
        partial slice at the other cursor.
        """
        if self._done:
            return []
        self._done = True

        fa, fb = self._forward
        ba, bb = self._backward
        b_min, b_max = self._b_min, self._b_max

        if fa == ba:
            return [self._slice(fa, fb, bb, backwards)]

        if backwards:
            return chain(
                [self._slice(ba, b_min, bb, True)],
                (self._slice(a, b_min, b_max, True) for a in range(ba - 1, fa, -1)),
                [self._slice(fa, fb, b_max, True)],
            )
        return chain(
            [self._slice(fa, fb, b_max)],
            (self._slice(a, b_min, b_max) for a in range(fa + 1, ba)),
            [self._slice(ba, b_min, bb)],
        )

    def fold(self, init: Any, f: Callable[[Any, RoomXY], Any]) -> Any:
        """
        Left fold over every remaining position in forward order.

        Same result as folding over repeated next() calls. Consumes the iterator.
        """
        return reduce(f, chain.from_iterable(self._take_slices(backwards=False)), init)

    def rfold(self, init: Any, f: Callable[[Any, RoomXY], Any]) -> Any:
        """Like fold, but from the back (same order as repeated next_back())."""
        return reduce(f, chain.from_iterable(self._take_slices(backwards=True)), init)

    def for_each(self, f: Callable[[RoomXY], Any]) -> None:
        for positions in self._take_slices(backwards=False):
            for xy in positions:
                f(xy)


def grid_iter(top_left: RoomXY, bottom_right: RoomXY, order: Order = Order.COLUMN_MAJOR) -> GridIter:
    return GridIter(top_left, bottom_right, order)


def chebyshev_range_iter(centre: RoomXY, radius: int) -> GridIter:
    """
    Positions within Chebyshev distance `radius` of centre, clipped to the room.

    Order is unspecified.
    """
    radius = operator.index(radius)
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    r = min(radius, ROOM_SIZE)
    return GridIter(centre.saturating_add((-r, -r)), centre.saturating_add((r, r)), Order.COLUMN_MAJOR)


def manhattan_range_iter(centre: RoomXY, radius: int) -> Iterator[RoomXY]:
    """
    Positions within Manhattan distance `radius` of centre, clipped to the room.

    Each column of the diamond is a GridIter whose y-span shrinks by one per
    step of |dx|. Order is unspecified.
    """
    radius = operator.index(radius)
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    r = min(radius, 2 * ROOM_SIZE)

    def columns() -> Iterator[GridIter]:
        for dx in range(-r, r + 1):
            x = centre.x + dx
            if not 0 <= x < ROOM_SIZE:
                continue
            span = r - abs(dx)
            column = RoomXY._unchecked(x, centre.y)
            yield GridIter(column.saturating_add((0, -span)), column.saturating_add((0, span)), Order.COLUMN_MAJOR)

    return chain.from_iterable(columns())
