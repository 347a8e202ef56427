"""
coordinate: validated room coordinates and the 8-neighborhood.

Types:
  - RoomCoordinate: one axis value in [0, ROOM_SIZE-1]
  - RoomXY:         an (x, y) pair of axis values
  - Direction:      the 8 unit offsets, numbered clockwise from TOP

Construction from untrusted input goes through RoomXY.new / RoomCoordinate.new
(return None when out of range) or the plain constructors (raise ValueError).
RoomXY._unchecked / RoomCoordinate._unchecked skip validation and are only for
code in this package that has already established the bound, e.g. values
taken from an already-valid range.

Coordinates carry no ordering: iteration order is chosen by grid_iter.Order.
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from .constants import ROOM_SIZE


def _in_room(v: int) -> bool:
    return 0 <= v < ROOM_SIZE


def _clamp(v: int) -> int:
    return min(max(v, 0), ROOM_SIZE - 1)


@dataclass(frozen=True)
class RoomCoordinate:
    """A single axis value in [0, ROOM_SIZE-1]."""

    value: int

    def __post_init__(self):
        object.__setattr__(self, "value", operator.index(self.value))
        if not _in_room(self.value):
            raise ValueError(
                f"Room coordinate out of range: {self.value!r} (must be 0..{ROOM_SIZE - 1})"
            )

    @classmethod
    def new(cls, value: int) -> Optional["RoomCoordinate"]:
        """None when value is outside the room; TypeError when it is not an integer."""
        value = operator.index(value)
        if not _in_room(value):
            return None
        return cls._unchecked(value)

    @classmethod
    def _unchecked(cls, value: int) -> "RoomCoordinate":
        assert _in_room(value), f"unchecked RoomCoordinate out of range: {value}"
        coord = object.__new__(cls)
        object.__setattr__(coord, "value", value)
        return coord

    def checked_add(self, offset: int) -> Optional["RoomCoordinate"]:
        return RoomCoordinate.new(self.value + offset)

    def saturating_add(self, offset: int) -> "RoomCoordinate":
        return RoomCoordinate._unchecked(_clamp(self.value + offset))

    def __int__(self) -> int:
        return self.value


class Direction(Enum):
    """
    The 8 neighbor directions, numbered as in the game API.

    TOP points at y - 1; numbering runs clockwise.
    """

    TOP = 1
    TOP_RIGHT = 2
    RIGHT = 3
    BOTTOM_RIGHT = 4
    BOTTOM = 5
    BOTTOM_LEFT = 6
    LEFT = 7
    TOP_LEFT = 8

    @property
    def offset(self) -> Tuple[int, int]:
        return _DIRECTION_OFFSETS[self]

    @property
    def is_diagonal(self) -> bool:
        dx, dy = _DIRECTION_OFFSETS[self]
        return dx != 0 and dy != 0


_DIRECTION_OFFSETS = {
    Direction.TOP: (0, -1),
    Direction.TOP_RIGHT: (1, -1),
    Direction.RIGHT: (1, 0),
    Direction.BOTTOM_RIGHT: (1, 1),
    Direction.BOTTOM: (0, 1),
    Direction.BOTTOM_LEFT: (-1, 1),
    Direction.LEFT: (-1, 0),
    Direction.TOP_LEFT: (-1, -1),
}


@dataclass(frozen=True)
class RoomXY:
    """
    A position inside a room.

    Invariant: 0 <= x, y < ROOM_SIZE. Equality and hashing are by value;
    positions have no ordering.
    """

    x: int
    y: int

    def __post_init__(self):
        object.__setattr__(self, "x", operator.index(self.x))
        object.__setattr__(self, "y", operator.index(self.y))
        if not (_in_room(self.x) and _in_room(self.y)):
            raise ValueError(
                f"RoomXY out of range: ({self.x}, {self.y}) (must be 0..{ROOM_SIZE - 1})"
            )

    @classmethod
    def new(cls, x: int, y: int) -> Optional["RoomXY"]:
        """
        Fallible construction: None when either coordinate is outside the room.

        Raises:
          TypeError: x or y is not an integer (same as the plain constructor)
        """
        x, y = operator.index(x), operator.index(y)
        if not (_in_room(x) and _in_room(y)):
            return None
        return cls._unchecked(x, y)

    @classmethod
    def _unchecked(cls, x: int, y: int) -> "RoomXY":
        # Caller must already know 0 <= x, y < ROOM_SIZE
        assert _in_room(x) and _in_room(y), f"unchecked RoomXY out of range: ({x}, {y})"
        xy = object.__new__(cls)
        object.__setattr__(xy, "x", x)
        object.__setattr__(xy, "y", y)
        return xy

    @classmethod
    def from_coordinates(cls, x: RoomCoordinate, y: RoomCoordinate) -> "RoomXY":
        return cls._unchecked(x.value, y.value)

    @property
    def x_coord(self) -> RoomCoordinate:
        return RoomCoordinate._unchecked(self.x)

    @property
    def y_coord(self) -> RoomCoordinate:
        return RoomCoordinate._unchecked(self.y)

    def checked_add(self, offset: Tuple[int, int]) -> Optional["RoomXY"]:
        dx, dy = offset
        return RoomXY.new(self.x + dx, self.y + dy)

    def checked_add_direction(self, direction: Direction) -> Optional["RoomXY"]:
        dx, dy = _DIRECTION_OFFSETS[direction]
        return RoomXY.new(self.x + dx, self.y + dy)

    def saturating_add(self, offset: Tuple[int, int]) -> "RoomXY":
        """Add an offset, clamping each axis to the room edge instead of failing."""
        dx, dy = offset
        return RoomXY._unchecked(_clamp(self.x + dx), _clamp(self.y + dy))

    def neighbors(self) -> Iterator["RoomXY"]:
        """In-room 8-neighbors, in Direction order."""
        for direction in Direction:
            neighbor = self.checked_add_direction(direction)
            if neighbor is not None:
                yield neighbor

    def get_range_to(self, other: "RoomXY") -> int:
        """Chebyshev distance."""
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def get_manhattan_range_to(self, other: "RoomXY") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __iter__(self):
        # Allows `x, y = xy`
        yield self.x
        yield self.y


def xy_to_linear_index(xy: RoomXY) -> int:
    """Index of xy in an x-major flattened room (x * ROOM_SIZE + y)."""
    return xy.x * ROOM_SIZE + xy.y


def linear_index_to_xy(idx: int) -> RoomXY:
    if not 0 <= idx < ROOM_SIZE * ROOM_SIZE:
        raise ValueError(f"Linear index out of range: {idx}")
    x, y = divmod(idx, ROOM_SIZE)
    return RoomXY._unchecked(x, y)


class _CoordinateRange:
    """Reversible run of RoomCoordinates over raw values [start, stop)."""

    def __init__(self, start: int, stop: int):
        self._values = range(start, stop)

    def __iter__(self) -> Iterator[RoomCoordinate]:
        return map(RoomCoordinate._unchecked, self._values)

    def __reversed__(self) -> Iterator[RoomCoordinate]:
        return map(RoomCoordinate._unchecked, reversed(self._values))

    def __len__(self) -> int:
        return len(self._values)


def range_inclusive(a: RoomCoordinate, b: RoomCoordinate) -> _CoordinateRange:
    """
    Coordinates from a to b, both endpoints included.

    Empty (not an error) when a > b.
    """
    return _CoordinateRange(a.value, b.value + 1)


def range_exclusive(a: RoomCoordinate, b: RoomCoordinate) -> _CoordinateRange:
    """
    Coordinates strictly between a and b.

    Empty (not an error) when a >= b - 1.
    """
    return _CoordinateRange(a.value + 1, b.value)
