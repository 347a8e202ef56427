"""
floodfill: multi-source breadth-first search over a room.

Obstacle matrices hold a non-zero value (255 by convention) on impassable
cells and 0 elsewhere. Movement is to any of the 8 neighbors.

numerical_floodfill gives hop counts from the nearest origin (U16_MAX where
unreached); reachability_floodfill turns an unbounded run into a 0/1 mask.
"""

from collections import deque
from typing import Deque, Iterable
import logging

import numpy as np

from ..constants import U8_MAX, U16_MAX
from ..coordinate import Direction, RoomXY
from ..cost_matrix import LargeCostMatrix, LocalCostMatrix
from ..terrain import LocalRoomTerrain


def get_obstacles_lcm_from_terrain(room_terrain: LocalRoomTerrain) -> LocalCostMatrix:
    """Obstacle matrix from terrain: walls = 255, everything else = 0."""
    return LocalCostMatrix.from_bits(np.where(room_terrain.walls(), U8_MAX, 0))


def numerical_floodfill(
    origins: Iterable[RoomXY],
    obstacles: LocalCostMatrix,
    max_distance: int = U16_MAX,
    trace: bool = False,
) -> LargeCostMatrix:
    """
    Hop count from the nearest origin to every cell reachable within max_distance.

    Input:
      origins: start positions; each gets distance 0, even if it is an obstacle
      obstacles: non-zero = impassable
      max_distance: cells further than this many hops stay unreached
      trace: log origin count, reached cells and queue high-water mark if True

    Output:
      LargeCostMatrix of hop counts, U16_MAX where unreached

    Cells are marked seen when they are queued, so each cell is queued at
    most once and the queue never holds more than ROOM_AREA entries.
    """
    origins = list(origins)
    max_distance = min(max_distance, U16_MAX)

    if trace:
        logging.info(
            f"[floodfill] numerical_floodfill() called: origins={len(origins)}, "
            f"max_distance={max_distance}"
        )

    output_cm = LargeCostMatrix.new_with_default(U16_MAX)
    out = output_cm.get_bits()
    blocked = obstacles.get_bits() != 0
    seen = np.zeros(blocked.shape, dtype=bool)

    queue: Deque[RoomXY] = deque()
    directions = list(Direction)

    # ========== Seed the queue from the origins ==========
    for origin in origins:
        out[origin.x, origin.y] = 0
        seen[origin.x, origin.y] = True

        if max_distance < 1:
            continue

        for direction in directions:
            position = origin.checked_add_direction(direction)
            if position is None:
                continue
            x, y = position.x, position.y
            if blocked[x, y] or seen[x, y]:
                continue
            queue.append(position)
            seen[x, y] = True
            out[x, y] = 1

    # ========== Breadth-first expansion ==========
    max_queue_length = len(queue)
    while queue:
        current = queue.popleft()
        neighbor_distance = int(out[current.x, current.y]) + 1
        if neighbor_distance > max_distance:
            continue

        for direction in directions:
            position = current.checked_add_direction(direction)
            if position is None:
                continue
            x, y = position.x, position.y
            if blocked[x, y] or seen[x, y]:
                continue
            queue.append(position)
            seen[x, y] = True
            # FIFO order makes the first recorded distance the minimum
            if out[x, y] == U16_MAX:
                out[x, y] = neighbor_distance

        max_queue_length = max(max_queue_length, len(queue))

    if trace:
        reached = int((out != U16_MAX).sum())
        logging.info(
            f"[floodfill] reached={reached}, max_queue_length={max_queue_length}"
        )

    return output_cm


def reachability_floodfill(
    origins: Iterable[RoomXY],
    obstacles: LocalCostMatrix,
    trace: bool = False,
) -> LocalCostMatrix:
    """
    1 on every cell reachable from some origin without crossing an obstacle,
    0 everywhere else.
    """
    hops = numerical_floodfill(origins, obstacles, U16_MAX, trace=trace)
    return LocalCostMatrix.from_bits((hops.get_bits() != U16_MAX).astype(np.uint8))
