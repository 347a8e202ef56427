"""
algorithms: whole-room computations over cost matrices.

  - distance_transform: Chebyshev / Manhattan distance to the nearest seed
  - floodfill:          multi-source BFS hop counts and reachability
"""
