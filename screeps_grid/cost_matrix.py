"""
cost_matrix: per-cell value stores for one room.

  - LocalCostMatrix:  dense uint8 store (costs, distances, masks)
  - LargeCostMatrix:  dense uint16 store (hop counts)
  - SparseCostMatrix: dict store, unset cells read as 0

Dense stores keep a (ROOM_SIZE, ROOM_SIZE) numpy array indexed [x, y], so
bits.ravel() is in linear-index order (x * ROOM_SIZE + y). get_bits() returns
that array itself: writing to it is the bulk-initialization path.
"""

import operator
from typing import Dict, Iterator, Optional, Tuple, Union

import numpy as np

from .constants import ROOM_SIZE, U8_MAX, U16_MAX
from .coordinate import RoomXY, linear_index_to_xy


def _is_integer_dtype(dtype: np.dtype) -> bool:
    # bool masks count as 0/1
    return np.issubdtype(dtype, np.integer) or dtype == np.bool_


class _DenseCostMatrix:
    dtype = np.uint8
    max_value = U8_MAX

    def __init__(self, default: int = 0):
        if not 0 <= default <= self.max_value:
            raise ValueError(
                f"{type(self).__name__} default out of range: {default} (must be 0..{self.max_value})"
            )
        self._bits = np.full((ROOM_SIZE, ROOM_SIZE), default, dtype=self.dtype)

    @classmethod
    def new_with_default(cls, default: int):
        return cls(default)

    @classmethod
    def from_bits(cls, bits: Union[np.ndarray, list]):
        """
        Wrap a copy of an [x, y] indexed array (or a flat ROOM_AREA sequence
        in linear-index order).

        Raises:
          ValueError: wrong shape, non-integer dtype, or values outside the
            element type's range
        """
        arr = np.asarray(bits)
        if arr.shape == (ROOM_SIZE * ROOM_SIZE,):
            arr = arr.reshape(ROOM_SIZE, ROOM_SIZE)
        if arr.shape != (ROOM_SIZE, ROOM_SIZE):
            raise ValueError(
                f"{cls.__name__} bits must have shape ({ROOM_SIZE}, {ROOM_SIZE}), got {arr.shape}"
            )
        if not _is_integer_dtype(arr.dtype):
            raise ValueError(f"{cls.__name__} bits must be integers, got dtype {arr.dtype}")
        if arr.size and (arr.min() < 0 or arr.max() > cls.max_value):
            raise ValueError(
                f"{cls.__name__} values out of range: min={arr.min()}, max={arr.max()} "
                f"(must be 0..{cls.max_value})"
            )
        cm = cls()
        cm._bits[...] = arr
        return cm

    def get(self, xy: RoomXY) -> int:
        return int(self._bits[xy.x, xy.y])

    def set(self, xy: RoomXY, value: int) -> None:
        """Raises ValueError when value is outside the element type's range."""
        value = operator.index(value)
        if not 0 <= value <= self.max_value:
            raise ValueError(
                f"{type(self).__name__} value out of range: {value} (must be 0..{self.max_value})"
            )
        self._bits[xy.x, xy.y] = value

    def __getitem__(self, xy: RoomXY) -> int:
        return int(self._bits[xy.x, xy.y])

    def __setitem__(self, xy: RoomXY, value: int) -> None:
        self.set(xy, value)

    def get_bits(self) -> np.ndarray:
        return self._bits

    def iter(self) -> Iterator[Tuple[RoomXY, int]]:
        """(position, value) pairs in linear-index order."""
        for idx, value in enumerate(self._bits.ravel().tolist()):
            yield linear_index_to_xy(idx), value

    def copy(self):
        cm = type(self)()
        cm._bits[...] = self._bits
        return cm

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._bits, other._bits))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(min={int(self._bits.min())}, max={int(self._bits.max())})"


class LocalCostMatrix(_DenseCostMatrix):
    """Dense per-cell uint8 store."""

    dtype = np.uint8
    max_value = U8_MAX


class LargeCostMatrix(_DenseCostMatrix):
    """Dense per-cell uint16 store, for values that do not fit in a byte."""

    dtype = np.uint16
    max_value = U16_MAX


class SparseCostMatrix:
    """Default-zero store keeping only the cells that were set."""

    def __init__(self, values: Optional[Dict[RoomXY, int]] = None):
        self._inner: Dict[RoomXY, int] = dict(values) if values else {}

    def get(self, xy: RoomXY) -> int:
        return self._inner.get(xy, 0)

    def set(self, xy: RoomXY, value: int) -> None:
        if not 0 <= value <= U8_MAX:
            raise ValueError(f"SparseCostMatrix value out of range: {value} (must be 0..{U8_MAX})")
        self._inner[xy] = value

    __getitem__ = get
    __setitem__ = set

    def iter(self) -> Iterator[Tuple[RoomXY, int]]:
        return iter(self._inner.items())

    def __len__(self) -> int:
        return len(self._inner)

    def merge_from_dense(self, src: LocalCostMatrix) -> None:
        """Copy every non-zero cell of src in, overwriting existing entries."""
        bits = src.get_bits()
        xs, ys = np.nonzero(bits)
        for x, y, value in zip(xs.tolist(), ys.tolist(), bits[xs, ys].tolist()):
            self._inner[RoomXY._unchecked(x, y)] = value

    def merge_from_sparse(self, src: "SparseCostMatrix") -> None:
        self._inner.update(src._inner)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SparseCostMatrix):
            return NotImplemented
        return self._inner == other._inner

    __hash__ = None
