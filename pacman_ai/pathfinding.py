"""
Tunnel-aware A* over the maze graph.

Only the first step of the path is returned: callers re-plan every decision.
"""

import heapq
from itertools import count
from typing import Callable, Dict, List, NamedTuple, Optional

from .config import ASTAR_MAX_NODES
from .grid import Cell, Direction, direction_between, tunnel_aware_distance
from .maze import Maze

# +x, -x, +y, -y; the tunnel edge (if any) comes last
NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class PathResult(NamedTuple):
    direction: Direction
    nodes: int


def neighbors(maze: Maze, cell: Cell) -> List[Cell]:
    """Walkable neighbours of a cell, including the tunnel wrap on the tunnel row."""
    x, y = cell
    result = [(x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS]

    if maze.tunnel_row is not None and y == maze.tunnel_row:
        if x == 0:
            result.append((maze.width - 1, y))
        elif x == maze.width - 1:
            result.append((0, y))

    return [n for n in result if maze.is_floor(n)]


def find_path(maze: Maze, start: Cell, goal: Cell,
              step_cost: Optional[Callable[[Cell], float]] = None,
              max_nodes: int = ASTAR_MAX_NODES) -> PathResult:
    """
    A* from start to goal, returning the first move and the nodes expanded.

    Args:
        maze: Maze to search
        start: Start cell
        goal: Goal cell
        step_cost: Optional extra non-negative cost of entering a cell, added
            to the unit step cost
        max_nodes: Expansion cap; hitting it counts as "no path"

    Returns:
        PathResult with Direction.NONE when the goal is the start, is
        unreachable, or the cap was hit
    """
    def h(cell: Cell) -> int:
        return tunnel_aware_distance(cell, goal, maze.tunnel_row, maze.width)

    # Ties on f go to whichever node entered the open set first
    seq = count()
    entry_seq: Dict[Cell, int] = {start: next(seq)}
    g_score: Dict[Cell, float] = {start: 0}
    came_from: Dict[Cell, Cell] = {}
    open_heap = [(h(start), entry_seq[start], start)]
    in_open = {start: h(start)}

    nodes = 0
    while open_heap:
        f, _, current = heapq.heappop(open_heap)
        if in_open.get(current) != f:
            continue  # stale entry
        del in_open[current]

        if nodes >= max_nodes:
            return PathResult(Direction.NONE, max_nodes)
        nodes += 1

        if current == goal:
            return PathResult(_first_step(maze, start, current, came_from), nodes)

        for nxt in neighbors(maze, current):
            cost = 1 if step_cost is None else 1 + step_cost(nxt)
            tentative = g_score[current] + cost
            if tentative < g_score.get(nxt, float('inf')):
                came_from[nxt] = current
                g_score[nxt] = tentative
                f_nxt = tentative + h(nxt)
                if nxt not in in_open:
                    entry_seq[nxt] = next(seq)
                in_open[nxt] = f_nxt
                heapq.heappush(open_heap, (f_nxt, entry_seq[nxt], nxt))

    return PathResult(Direction.NONE, nodes)


def _first_step(maze: Maze, start: Cell, goal: Cell, came_from: Dict[Cell, Cell]) -> Direction:
    if goal == start:
        return Direction.NONE

    current = goal
    while came_from[current] != start:
        current = came_from[current]
    return direction_between(start, current, maze.tunnel_row, maze.width)
