#!/usr/bin/env python3
"""
run.py: command-line front end for screeps_grid.

Loads one room's terrain and prints either its distance transform (distance
to the nearest terrain wall) or a flood-fill from the given origins.

Terrain input is the game's encoded terrain string: either a plain text
file holding just the string, a JSON object with a "terrain" key, or a shard
export {"rooms": [{"room": "W1N1", "terrain": "..."}, ...]} with --room.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

import numpy as np

from screeps_grid.algorithms.distance_transform import (
    Metric,
    distance_transform_from_cost_matrix,
    initial_cost_matrix_from_terrain,
)
from screeps_grid.algorithms.floodfill import (
    get_obstacles_lcm_from_terrain,
    numerical_floodfill,
    reachability_floodfill,
)
from screeps_grid.constants import U8_MAX, U16_MAX
from screeps_grid.coordinate import RoomXY
from screeps_grid.terrain import LocalRoomTerrain


def load_terrain(path: str, room: Optional[str] = None, trace: bool = False) -> LocalRoomTerrain:
    """
    Read a room's terrain from disk.

    Raises:
        FileNotFoundError: if path does not exist
        KeyError: if the JSON has no terrain for the requested room
        ValueError: if the terrain string is malformed
    """
    terrain_file = Path(path)
    if not terrain_file.exists():
        raise FileNotFoundError(f"Terrain file not found: {path}")

    text = terrain_file.read_text()

    if terrain_file.suffix != ".json":
        if trace:
            logging.info(f"[run] read raw terrain string from {path}")
        return LocalRoomTerrain.from_terrain_string(text)

    data = json.loads(text)

    if "rooms" in data:
        if room is None:
            raise KeyError(f"{path} is a shard export; pass --room to pick a room")
        entries = {entry["room"]: entry for entry in data["rooms"]}
        if room not in entries:
            raise KeyError(f"Room '{room}' not found in {path}")
        data = entries[room]

    if "terrain" not in data:
        raise KeyError(f"No 'terrain' key in {path}")

    if trace:
        logging.info(f"[run] read terrain for room={data.get('room', room)} from {path}")

    return LocalRoomTerrain.from_terrain_string(data["terrain"])


def parse_origin(text: str) -> RoomXY:
    """Parse 'X,Y' into a RoomXY (argparse type)."""
    try:
        x_str, y_str = text.split(",")
        return RoomXY(int(x_str), int(y_str))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid origin '{text}': {e}")


def format_grid(bits: np.ndarray, unreached: Optional[int] = None) -> str:
    """One line per y, x left to right; unreached cells shown as '.'."""
    reached = [v for v in bits.ravel().tolist() if v != unreached]
    width = max((len(str(v)) for v in reached), default=1)
    rows = []
    for y in range(bits.shape[1]):
        cells = [
            ".".rjust(width) if v == unreached else str(v).rjust(width)
            for v in bits[:, y].tolist()
        ]
        rows.append(" ".join(cells))
    return "\n".join(rows)


def run(args) -> str:
    terrain = load_terrain(args.terrain, room=args.room, trace=args.trace)

    if args.origin:
        obstacles = get_obstacles_lcm_from_terrain(terrain)
        if args.reachability:
            result = reachability_floodfill(args.origin, obstacles, trace=args.trace)
            return format_grid(result.get_bits())
        result = numerical_floodfill(args.origin, obstacles, args.max_distance, trace=args.trace)
        return format_grid(result.get_bits(), unreached=U16_MAX)

    metric = Metric(args.metric)
    initial = initial_cost_matrix_from_terrain(terrain)
    result = distance_transform_from_cost_matrix(initial, metric, trace=args.trace)
    return format_grid(result.get_bits(), unreached=U8_MAX)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Room distance transforms and flood-fills",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py --terrain W1N1.txt
  python run.py --terrain W1N1.json --metric manhattan --trace
  python run.py --terrain shard0.json --room W1N1 --origin 25,25 --max-distance 10
  python run.py --terrain W1N1.txt --origin 10,10 --origin 40,40 --reachability
        """,
    )

    parser.add_argument(
        "--terrain",
        required=True,
        help="Terrain file: raw terrain string, room JSON, or shard export JSON",
    )

    parser.add_argument(
        "--room",
        default=None,
        help="Room name to select from a shard export",
    )

    parser.add_argument(
        "--metric",
        choices=[m.value for m in Metric],
        default=Metric.CHEBYSHEV.value,
        help="Distance transform metric (default: chebyshev)",
    )

    parser.add_argument(
        "--origin",
        action="append",
        type=parse_origin,
        default=[],
        help="Flood-fill origin as X,Y (repeatable); switches to flood-fill mode",
    )

    parser.add_argument(
        "--max-distance",
        type=int,
        default=U16_MAX,
        help="Flood-fill radius cap in hops (default: unbounded)",
    )

    parser.add_argument(
        "--reachability",
        action="store_true",
        help="Print a 0/1 reachability mask instead of hop counts",
    )

    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable info logging",
    )

    args = parser.parse_args()

    # Configure logging
    if args.trace:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
        )

    try:
        print(run(args))
    except (FileNotFoundError, KeyError, ValueError) as e:
        logging.error(f"Input error: {e}")
        raise


if __name__ == "__main__":
    main()
