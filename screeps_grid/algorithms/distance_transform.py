"""
distance_transform: per-cell distance to the nearest seed cell.

Seeds are the cells holding 0 in the initial cost matrix; every other cell
should hold 255 (U8_MAX). The result holds, for every cell, the length of the
shortest metric-adjacent walk to a seed:
  - Chebyshev: 8-neighborhood steps (king moves)
  - Manhattan: 4-neighborhood steps
Cells that no seed can reach keep 255; every +1 saturates at 255.

Two monotone passes over the room:
  Pass 1, x ascending then y ascending, relaxes each cell against the
    neighbors already visited: TOP, TOP_LEFT, LEFT, BOTTOM_LEFT (Chebyshev)
    or TOP, LEFT (Manhattan).
  Pass 2, the exact reverse order, relaxes against BOTTOM, RIGHT,
    BOTTOM_RIGHT, TOP_RIGHT (Chebyshev) or BOTTOM, RIGHT (Manhattan).

Each pass is run column by column. Within a column:
  Phase A: relax the whole column against the neighboring column, which the
    pass has already finished, in one vector operation.
  Phase B: resolve the in-column chain (TOP in pass 1, BOTTOM in pass 2),
    d[y] = min(d[y], d[y-1] + 1), with a running minimum.
This reproduces the cell-by-cell sweep exactly: when the cell-by-cell sweep
reaches (x, y), its neighbors in the previous column are final and the only
same-column input is the cell just before it, which is what phase A and
phase B compute in that order.
"""

from enum import Enum
import logging

import numpy as np

from ..constants import ROOM_SIZE, U8_MAX
from ..cost_matrix import LocalCostMatrix
from ..terrain import LocalRoomTerrain


class Metric(Enum):
    CHEBYSHEV = "chebyshev"
    MANHATTAN = "manhattan"


_OFFSETS = np.arange(ROOM_SIZE, dtype=np.int32)


def _saturating_increment(values: np.ndarray) -> np.ndarray:
    return np.minimum(values + 1, U8_MAX)


def _relax_from_column(col: np.ndarray, neighbor_col: np.ndarray, metric: Metric) -> None:
    """
    Phase A: col[y] = min(col[y], sat(1 + min of the neighbor column cells
    adjacent to y)). Adjacent is y only for Manhattan, y-1..y+1 for Chebyshev.
    """
    best = neighbor_col.copy()
    if metric is Metric.CHEBYSHEV:
        np.minimum(best[1:], neighbor_col[:-1], out=best[1:])
        np.minimum(best[:-1], neighbor_col[1:], out=best[:-1])
    np.minimum(col, _saturating_increment(best), out=col)


def _relax_along_column(col: np.ndarray) -> None:
    """
    Phase B: col[y] = min(col[y], col[y-1] + 1) for y ascending.

    Closed form: col[y] = y + min over k <= y of (col[k] - k). The result
    never exceeds the cell's own value, so it stays within 0..U8_MAX.
    """
    col[:] = np.minimum.accumulate(col - _OFFSETS) + _OFFSETS


def _two_pass(bits: np.ndarray, metric: Metric) -> np.ndarray:
    # Signed working copy: the running minimum goes negative before re-offsetting
    d = bits.astype(np.int32)

    # ========== Pass 1: x ascending, y ascending ==========
    for x in range(ROOM_SIZE):
        col = d[x]
        if x > 0:
            _relax_from_column(col, d[x - 1], metric)
        _relax_along_column(col)

    # ========== Pass 2: x descending, y descending ==========
    for x in range(ROOM_SIZE - 1, -1, -1):
        col = d[x]
        if x < ROOM_SIZE - 1:
            _relax_from_column(col, d[x + 1], metric)
        # Reversed view: y descending becomes the ascending chain
        _relax_along_column(col[::-1])

    return d.astype(np.uint8)


def distance_transform_from_cost_matrix(
    initial_cm: LocalCostMatrix, metric: Metric, trace: bool = False
) -> LocalCostMatrix:
    """
    Distance from every cell to the nearest 0-valued cell of initial_cm.

    Input:
      initial_cm: seeds = 0, everything else = 255 (not modified)
      metric: Metric.CHEBYSHEV or Metric.MANHATTAN
      trace: log seed count and output stats if True

    Output:
      new LocalCostMatrix of distances, 255 where no seed is reachable
    """
    bits = initial_cm.get_bits()

    if trace:
        logging.info(
            f"[distance_transform] {metric.value}: seeds={int((bits == 0).sum())}"
        )

    out = LocalCostMatrix.from_bits(_two_pass(bits, metric))

    if trace:
        out_bits = out.get_bits()
        logging.info(
            f"[distance_transform] {metric.value}: max={int(out_bits.max())}, "
            f"unreached={int((out_bits == U8_MAX).sum())}, sum={int(out_bits.sum())}"
        )

    return out


def chebyshev_distance_transform_from_cost_matrix(
    initial_cm: LocalCostMatrix, trace: bool = False
) -> LocalCostMatrix:
    """Chebyshev (king-move) distance to the nearest 0-valued cell."""
    return distance_transform_from_cost_matrix(initial_cm, Metric.CHEBYSHEV, trace=trace)


def manhattan_distance_transform_from_cost_matrix(
    initial_cm: LocalCostMatrix, trace: bool = False
) -> LocalCostMatrix:
    """Manhattan (4-neighborhood) distance to the nearest 0-valued cell."""
    return distance_transform_from_cost_matrix(initial_cm, Metric.MANHATTAN, trace=trace)


def initial_cost_matrix_from_terrain(terrain: LocalRoomTerrain) -> LocalCostMatrix:
    """Seed matrix for the transforms: walls = 0, everything else = 255."""
    return LocalCostMatrix.from_bits(np.where(terrain.walls(), 0, U8_MAX))


def chebyshev_distance_transform_from_terrain(
    terrain: LocalRoomTerrain, trace: bool = False
) -> LocalCostMatrix:
    """
    Chebyshev distance from every cell to the nearest terrain wall.

    Only natural terrain walls count, not constructed ones.
    """
    return chebyshev_distance_transform_from_cost_matrix(
        initial_cost_matrix_from_terrain(terrain), trace=trace
    )


def manhattan_distance_transform_from_terrain(
    terrain: LocalRoomTerrain, trace: bool = False
) -> LocalCostMatrix:
    return manhattan_distance_transform_from_cost_matrix(
        initial_cost_matrix_from_terrain(terrain), trace=trace
    )
