"""
screeps_grid: room-grid traversal, distance transforms and flood-fill.

Modules:
  - coordinate:  RoomCoordinate, RoomXY, Direction, coordinate ranges
  - grid_iter:   GridIter and the Chebyshev / Manhattan neighborhood iterators
  - cost_matrix: dense (u8 / u16) and sparse per-cell stores
  - terrain:     per-room terrain classification
  - algorithms:  distance_transform, floodfill
"""

__version__ = "0.1.0"
