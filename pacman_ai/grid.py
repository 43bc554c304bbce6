"""
Grid and movement model.

Cells are integer (x, y) tuples with y growing downward. Positions are pixel
coordinates used by sprites that are between cells; they snap to a cell by
dividing by the grid pitch.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import GRID_PITCH, MAP_WIDTH, TUNNEL_ROW

Cell = Tuple[int, int]
Position = Tuple[float, float]


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


# Enumeration order matters: ties everywhere resolve in this order
MOVES = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

DIR_TO_VEC = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.NONE: (0, 0),
}

REVERSE_DIR = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.NONE: Direction.NONE,
}


@dataclass(frozen=True)
class ThreatState:
    """Per-ghost threat flags. A respawning ghost is neither."""
    is_edible: bool = False
    is_dangerous: bool = True


def opposite(direction: Direction) -> Direction:
    return REVERSE_DIR[direction]


def to_cell(position: Position, pitch: float = GRID_PITCH) -> Cell:
    """Snap a pixel position to its cell, rounding halves up."""
    return (int(math.floor(position[0] / pitch + 0.5)),
            int(math.floor(position[1] / pitch + 0.5)))


def to_position(cell: Cell, pitch: float = GRID_PITCH) -> Position:
    return (cell[0] * pitch, cell[1] * pitch)


def step(cell: Cell, direction: Direction) -> Cell:
    dx, dy = DIR_TO_VEC[direction]
    return (cell[0] + dx, cell[1] + dy)


def valid_moves(maze, cell: Cell) -> List[Direction]:
    """Directions whose neighbour cell is floor, in UP, DOWN, LEFT, RIGHT order."""
    return [d for d in MOVES if maze.is_floor(step(cell, d))]


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def tunnel_aware_distance(a: Cell, b: Cell,
                          tunnel_row: Optional[int] = TUNNEL_ROW,
                          map_width: int = MAP_WIDTH) -> int:
    """
    Manhattan distance that may shortcut through the wraparound tunnel.

    Never larger than plain Manhattan, so it stays admissible for A* on a
    maze whose two tunnel mouths are adjacent.
    """
    direct = manhattan(a, b)
    if tunnel_row is None:
        return direct

    left_mouth = (0, tunnel_row)
    right_mouth = (map_width - 1, tunnel_row)

    # Go in one mouth, come out the other (one step for the crossing)
    through = min(
        manhattan(a, left_mouth) + 1 + manhattan(right_mouth, b),
        manhattan(a, right_mouth) + 1 + manhattan(left_mouth, b),
    )
    return min(direct, through)


def is_tunnel_edge(start: Cell, nxt: Cell,
                   tunnel_row: Optional[int] = TUNNEL_ROW,
                   map_width: int = MAP_WIDTH) -> bool:
    """True when the two cells are the opposite mouths of the tunnel."""
    if tunnel_row is None or start[1] != tunnel_row or nxt[1] != tunnel_row:
        return False
    return {start[0], nxt[0]} == {0, map_width - 1}


def direction_between(start: Cell, nxt: Cell,
                      tunnel_row: Optional[int] = TUNNEL_ROW,
                      map_width: int = MAP_WIDTH) -> Direction:
    """Direction of a single edge, decoding the tunnel wrap as LEFT/RIGHT."""
    if is_tunnel_edge(start, nxt, tunnel_row, map_width):
        return Direction.LEFT if start[0] == 0 else Direction.RIGHT

    dx = nxt[0] - start[0]
    dy = nxt[1] - start[1]
    if dx > 0:
        return Direction.RIGHT
    if dx < 0:
        return Direction.LEFT
    if dy > 0:
        return Direction.DOWN
    if dy < 0:
        return Direction.UP
    return Direction.NONE
