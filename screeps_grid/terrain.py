"""
terrain: read-only terrain classification for one room.

The game encodes a room's terrain as a ROOM_AREA-character string of digits,
row-major (index y * ROOM_SIZE + x). Each digit is a bitmask: 1 = wall,
2 = swamp. A cell with the wall bit is a wall whatever else is set.
"""

from enum import Enum

import numpy as np

from .constants import ROOM_AREA, ROOM_SIZE
from .coordinate import RoomXY

TERRAIN_MASK_WALL = 1
TERRAIN_MASK_SWAMP = 2


class Terrain(Enum):
    PLAIN = 0
    WALL = 1
    SWAMP = 2


class LocalRoomTerrain:
    """Terrain bitmasks of one room, stored as a uint8 array indexed [x, y]."""

    def __init__(self, bits: np.ndarray):
        arr = np.asarray(bits)
        if arr.shape != (ROOM_SIZE, ROOM_SIZE):
            raise ValueError(
                f"Terrain bits must have shape ({ROOM_SIZE}, {ROOM_SIZE}), got {arr.shape}"
            )
        if not (np.issubdtype(arr.dtype, np.integer) or arr.dtype == np.bool_):
            raise ValueError(f"Terrain bits must be integers, got dtype {arr.dtype}")
        if arr.size and (arr.min() < 0 or arr.max() > 3):
            raise ValueError(
                f"Terrain values out of range: min={arr.min()}, max={arr.max()} (must be 0..3)"
            )
        self._bits = arr.astype(np.uint8, copy=True)

    @classmethod
    def from_bits(cls, bits: np.ndarray) -> "LocalRoomTerrain":
        return cls(bits)

    @classmethod
    def new_plain(cls) -> "LocalRoomTerrain":
        return cls(np.zeros((ROOM_SIZE, ROOM_SIZE), dtype=np.uint8))

    @classmethod
    def from_terrain_string(cls, terrain: str) -> "LocalRoomTerrain":
        """
        Parse the game's encoded terrain string.

        Raises:
          ValueError: wrong length, or characters other than '0'..'3'
        """
        terrain = terrain.strip()
        if len(terrain) != ROOM_AREA:
            raise ValueError(f"Terrain string must have {ROOM_AREA} characters, got {len(terrain)}")

        bad = set(terrain) - set("0123")
        if bad:
            raise ValueError(f"Terrain string has invalid characters: {sorted(bad)}")

        raw = np.frombuffer(terrain.encode("ascii"), dtype=np.uint8) - ord("0")
        # String is row-major [y, x]; stores are [x, y]
        return cls(raw.reshape(ROOM_SIZE, ROOM_SIZE).T)

    def get_xy(self, xy: RoomXY) -> Terrain:
        mask = int(self._bits[xy.x, xy.y])
        if mask & TERRAIN_MASK_WALL:
            return Terrain.WALL
        if mask & TERRAIN_MASK_SWAMP:
            return Terrain.SWAMP
        return Terrain.PLAIN

    def walls(self) -> np.ndarray:
        """Boolean [x, y] mask, True on wall cells."""
        return (self._bits & TERRAIN_MASK_WALL) != 0

    def get_bits(self) -> np.ndarray:
        return self._bits
