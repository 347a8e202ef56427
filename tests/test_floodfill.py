#!/usr/bin/env python3
"""
Tests for screeps_grid.algorithms.floodfill

Validates:
  - Corner origin with radius 1
  - Hop counts == plain multi-source BFS on random obstacle fields
  - Radius cap: nothing beyond max_distance is reached
  - Origins on obstacles still get 0 and still expand
  - No origins: everything unreached
  - Reachability mask == 8-connected components containing an origin
"""

import logging
import sys
from collections import deque
from pathlib import Path

import numpy as np
from scipy import ndimage

# Add project root to sys.path so screeps_grid can be found
sys.path.insert(0, str(Path(__file__).parent.parent))

from screeps_grid.algorithms.floodfill import (
    get_obstacles_lcm_from_terrain,
    numerical_floodfill,
    reachability_floodfill,
)
from screeps_grid.constants import ROOM_SIZE, U8_MAX, U16_MAX
from screeps_grid.coordinate import RoomXY
from screeps_grid.cost_matrix import LocalCostMatrix
from screeps_grid.terrain import LocalRoomTerrain


def _reference_bfs(origins, blocked: np.ndarray, max_distance: int = U16_MAX) -> np.ndarray:
    """Multi-source BFS over a dict; origins are 0 even when blocked."""
    dist = {}
    queue = deque()
    for origin in origins:
        key = (origin.x, origin.y)
        if key not in dist:
            dist[key] = 0
            queue.append(key)

    while queue:
        x, y = queue.popleft()
        d = dist[(x, y)]
        if d >= max_distance:
            continue
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                nx, ny = x + dx, y + dy
                if (dx, dy) == (0, 0) or not (0 <= nx < ROOM_SIZE and 0 <= ny < ROOM_SIZE):
                    continue
                if blocked[nx, ny] or (nx, ny) in dist:
                    continue
                dist[(nx, ny)] = d + 1
                queue.append((nx, ny))

    out = np.full((ROOM_SIZE, ROOM_SIZE), U16_MAX, dtype=np.uint16)
    for (x, y), d in dist.items():
        out[x, y] = d
    return out


def _random_obstacles(rng, p: float) -> LocalCostMatrix:
    return LocalCostMatrix.from_bits(np.where(rng.random((ROOM_SIZE, ROOM_SIZE)) < p, U8_MAX, 0))


def _random_origins(rng, count: int):
    coords = rng.integers(0, ROOM_SIZE, size=(count, 2)).tolist()
    return [RoomXY(x, y) for x, y in coords]


def test_corner_origin_radius_one():
    """Origin (0,0), radius 1: the 3 neighbors get 1, (2,2) stays unreached."""
    print("\n" + "=" * 60)
    print("TEST: corner origin, radius 1")
    print("=" * 60)

    obstacles = LocalCostMatrix.new_with_default(0)
    out = numerical_floodfill([RoomXY(0, 0)], obstacles, max_distance=1)

    assert out.get(RoomXY(0, 0)) == 0
    assert out.get(RoomXY(0, 1)) == 1
    assert out.get(RoomXY(1, 0)) == 1
    assert out.get(RoomXY(1, 1)) == 1
    assert out.get(RoomXY(2, 2)) == U16_MAX
    assert int((out.get_bits() != U16_MAX).sum()) == 4

    print("✅ PASS: only the origin and its neighbors are reached")


def test_open_room_is_chebyshev_distance():
    centre = RoomXY(20, 30)
    out = numerical_floodfill([centre], LocalCostMatrix.new_with_default(0)).get_bits()

    xs = np.arange(ROOM_SIZE)[:, None]
    ys = np.arange(ROOM_SIZE)[None, :]
    expected = np.maximum(np.abs(xs - centre.x), np.abs(ys - centre.y))
    assert np.array_equal(out, expected), "open-room hop counts != Chebyshev distance"

    print("✅ PASS: 8-way hops in an open room")


def test_matches_reference_bfs():
    """Random obstacle fields and origin sets, with and without a radius cap."""
    print("\n" + "=" * 60)
    print("TEST: numerical_floodfill vs reference BFS")
    print("=" * 60)

    rng = np.random.default_rng(3)
    cases = 0
    for p in (0.0, 0.1, 0.3, 0.45):
        for origin_count in (1, 3, 10):
            obstacles = _random_obstacles(rng, p)
            blocked = obstacles.get_bits() != 0
            origins = _random_origins(rng, origin_count)
            for max_distance in (U16_MAX, 0, 1, 5, 17):
                got = numerical_floodfill(origins, obstacles, max_distance).get_bits()
                expected = _reference_bfs(origins, blocked, max_distance)
                assert np.array_equal(got, expected), \
                    f"p={p}, origins={origins}, max_distance={max_distance}: mismatch"
                cases += 1

    print(f"✅ PASS: {cases} flood-fills match")


def test_radius_cap_bounds_every_value():
    rng = np.random.default_rng(4)
    obstacles = _random_obstacles(rng, 0.2)
    out = numerical_floodfill(_random_origins(rng, 4), obstacles, max_distance=6).get_bits()

    reached = out[out != U16_MAX]
    assert reached.size > 0
    assert int(reached.max()) <= 6

    print("✅ PASS: no value exceeds the cap")


def test_origins_and_obstacles():
    """Origins on obstacles are 0; obstacles elsewhere are never entered."""
    print("\n" + "=" * 60)
    print("TEST: origins on obstacles / walled-in regions")
    print("=" * 60)

    bits = np.zeros((ROOM_SIZE, ROOM_SIZE), dtype=np.uint8)
    bits[10, 10] = U8_MAX
    # Wall off column x = 30 completely
    bits[30, :] = U8_MAX
    obstacles = LocalCostMatrix.from_bits(bits)

    out = numerical_floodfill([RoomXY(10, 10)], obstacles)
    assert out.get(RoomXY(10, 10)) == 0
    assert out.get(RoomXY(11, 11)) == 1
    assert out.get(RoomXY(29, 10)) == 19
    assert out.get(RoomXY(30, 10)) == U16_MAX, "obstacle was entered"
    assert out.get(RoomXY(31, 10)) == U16_MAX, "crossed the wall"

    # Nearest of several origins wins; duplicates are harmless
    out = numerical_floodfill([RoomXY(0, 0), RoomXY(40, 0), RoomXY(0, 0)], obstacles)
    assert out.get(RoomXY(35, 0)) == 5
    assert out.get(RoomXY(5, 0)) == 5
    assert out.get(RoomXY(40, 0)) == 0

    # Adjacent origins both stay 0
    out = numerical_floodfill([RoomXY(5, 5), RoomXY(5, 6)], obstacles)
    assert out.get(RoomXY(5, 5)) == 0
    assert out.get(RoomXY(5, 6)) == 0
    assert out.get(RoomXY(5, 8)) == 2

    print("✅ PASS: obstacles block, origins always 0")


def test_no_origins():
    out = numerical_floodfill([], LocalCostMatrix.new_with_default(0))
    assert np.all(out.get_bits() == U16_MAX)

    mask = reachability_floodfill([], LocalCostMatrix.new_with_default(0))
    assert np.all(mask.get_bits() == 0)

    print("✅ PASS: no origins -> nothing reached")


def test_reachability_matches_connected_components():
    """Mask == union of 8-connected open components holding an origin."""
    print("\n" + "=" * 60)
    print("TEST: reachability_floodfill vs scipy.ndimage.label")
    print("=" * 60)

    rng = np.random.default_rng(9)
    for p in (0.3, 0.45, 0.55):
        obstacles = _random_obstacles(rng, p)
        blocked = obstacles.get_bits() != 0
        origins = [xy for xy in _random_origins(rng, 6) if not blocked[xy.x, xy.y]]

        labels, _ = ndimage.label(~blocked, structure=np.ones((3, 3), dtype=int))
        origin_labels = {int(labels[xy.x, xy.y]) for xy in origins}
        expected = np.isin(labels, list(origin_labels)).astype(np.uint8)

        mask = reachability_floodfill(origins, obstacles).get_bits()
        assert set(np.unique(mask).tolist()) <= {0, 1}
        assert np.array_equal(mask, expected), f"p={p}: reachability mask mismatch"

    print("✅ PASS: reachability = origin components")


def test_obstacles_from_terrain():
    bits = np.zeros((ROOM_SIZE, ROOM_SIZE), dtype=np.uint8)
    bits[3, 4] = 1
    bits[5, 6] = 2
    bits[7, 8] = 3
    obstacles = get_obstacles_lcm_from_terrain(LocalRoomTerrain.from_bits(bits))

    assert obstacles.get(RoomXY(3, 4)) == U8_MAX
    assert obstacles.get(RoomXY(7, 8)) == U8_MAX
    assert obstacles.get(RoomXY(5, 6)) == 0, "swamp is not an obstacle"
    assert int((obstacles.get_bits() != 0).sum()) == 2


def test_trace_logging(caplog):
    caplog.set_level(logging.INFO)
    numerical_floodfill([RoomXY(0, 0)], LocalCostMatrix.new_with_default(0), max_distance=1, trace=True)
    messages = [r.getMessage() for r in caplog.records]
    assert any("[floodfill] reached=4" in m for m in messages), messages


if __name__ == "__main__":
    test_corner_origin_radius_one()
    test_open_room_is_chebyshev_distance()
    test_matches_reference_bfs()
    test_radius_cap_bounds_every_value()
    test_origins_and_obstacles()
    test_no_origins()
    test_reachability_matches_connected_components()
    test_obstacles_from_terrain()

    print("\n" + "=" * 60)
    print("🎉 ALL FLOODFILL TESTS PASSED!")
    print("=" * 60)
