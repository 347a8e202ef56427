#!/usr/bin/env python3
"""
Time the grid iterators and distance transforms on an all-plain room.

Compares per-cell stepping of GridIter with fold / rfold over the same
rectangles, and times both distance transforms and an unbounded flood-fill.

Usage:
  python scripts/bench_grid.py
  python scripts/bench_grid.py --repeat 50
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to sys.path so screeps_grid can be found
sys.path.insert(0, str(Path(__file__).parent.parent))

from screeps_grid.algorithms.distance_transform import (
    chebyshev_distance_transform_from_terrain,
    manhattan_distance_transform_from_terrain,
)
from screeps_grid.algorithms.floodfill import get_obstacles_lcm_from_terrain, numerical_floodfill
from screeps_grid.constants import ROOM_SIZE
from screeps_grid.coordinate import RoomXY
from screeps_grid.grid_iter import GridIter, Order, chebyshev_range_iter, manhattan_range_iter
from screeps_grid.terrain import LocalRoomTerrain


def _timed(label: str, fn, repeat: int) -> float:
    start = time.perf_counter()
    for _ in range(repeat):
        fn()
    per_call_ms = (time.perf_counter() - start) * 1000.0 / repeat
    print(f"  {label:<44} {per_call_ms:9.3f} ms")
    return per_call_ms


def _sum_xy(acc: int, xy: RoomXY) -> int:
    return acc + xy.x + xy.y


def bench_iterators(repeat: int) -> None:
    print("GridIter (full room)")
    top_left = RoomXY(0, 0)
    bottom_right = RoomXY(ROOM_SIZE - 1, ROOM_SIZE - 1)

    for order in Order:
        def step():
            acc = 0
            for xy in GridIter(top_left, bottom_right, order):
                acc = _sum_xy(acc, xy)
            return acc

        def step_back():
            acc = 0
            for xy in reversed(GridIter(top_left, bottom_right, order)):
                acc = _sum_xy(acc, xy)
            return acc

        _timed(f"{order.name} next()", step, repeat)
        _timed(f"{order.name} fold()", lambda: GridIter(top_left, bottom_right, order).fold(0, _sum_xy), repeat)
        _timed(f"{order.name} next_back()", step_back, repeat)
        _timed(f"{order.name} rfold()", lambda: GridIter(top_left, bottom_right, order).rfold(0, _sum_xy), repeat)

    print("Neighborhoods (centre 25,25, radius 10)")
    centre = RoomXY(25, 25)
    _timed("chebyshev_range_iter", lambda: sum(1 for _ in chebyshev_range_iter(centre, 10)), repeat)
    _timed("manhattan_range_iter", lambda: sum(1 for _ in manhattan_range_iter(centre, 10)), repeat)


def bench_algorithms(repeat: int) -> None:
    print("Algorithms (all-plain room)")
    terrain = LocalRoomTerrain.new_plain()
    _timed("chebyshev_distance_transform_from_terrain", lambda: chebyshev_distance_transform_from_terrain(terrain), repeat)
    _timed("manhattan_distance_transform_from_terrain", lambda: manhattan_distance_transform_from_terrain(terrain), repeat)

    obstacles = get_obstacles_lcm_from_terrain(terrain)
    origins = [RoomXY(25, 25)]
    _timed("numerical_floodfill (unbounded)", lambda: numerical_floodfill(origins, obstacles), repeat)


def main():
    parser = argparse.ArgumentParser(description="Benchmark screeps_grid iterators and transforms")
    parser.add_argument("--repeat", type=int, default=20, help="Calls per measurement (default: 20)")
    args = parser.parse_args()

    bench_iterators(args.repeat)
    bench_algorithms(args.repeat)


if __name__ == "__main__":
    main()
