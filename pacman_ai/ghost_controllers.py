"""
Ghost controllers: the 1980s personalities plus random, A* and minimax ghosts.

These drive the opponents in a headless game; the learned model in
ghost_model.py only ever observes their moves.
"""

import random as _random
from typing import Optional, Sequence

from .config import CLYDE_CORNER, CLYDE_SHY_DIST, GHOST_DEPTH, PINKY_LOOKAHEAD
from .grid import DIR_TO_VEC, Cell, Direction, ThreatState, manhattan, step, valid_moves
from .maze import Maze
from .minimax import NodeCounter, minimax
from .pathfinding import find_path

BLINKY, PINKY, INKY, CLYDE = range(4)


def move_toward(maze: Maze, ghost: Cell, target: Cell) -> Direction:
    """
    Arcade-style steering with no pathfinding.

    Tries the dominant axis first, then the other axis, then backing off.
    """
    moves = valid_moves(maze, ghost)
    if not moves:
        return Direction.NONE

    dx = target[0] - ghost[0]
    dy = target[1] - ghost[1]
    vertical = Direction.DOWN if dy > 0 else Direction.UP
    horizontal = Direction.RIGHT if dx > 0 else Direction.LEFT

    if abs(dx) > abs(dy):
        preferred = [horizontal, vertical,
                     Direction.LEFT if dx > 0 else Direction.RIGHT]
    else:
        preferred = [vertical, horizontal,
                     Direction.UP if dy > 0 else Direction.DOWN]

    for move in preferred:
        if move in moves:
            return move
    return moves[0]


def classic(maze: Maze, ghost_idx: int, ghost: Cell, pacman: Cell,
            pacman_dir: Direction = Direction.NONE,
            blinky: Optional[Cell] = None) -> Direction:
    if ghost_idx == PINKY:
        dx, dy = DIR_TO_VEC[pacman_dir]
        target = (pacman[0] + dx * PINKY_LOOKAHEAD, pacman[1] + dy * PINKY_LOOKAHEAD)
        return move_toward(maze, ghost, target)

    if ghost_idx == INKY:
        # Reflect Blinky through Pac-Man
        anchor = blinky if blinky is not None else pacman
        target = (2 * pacman[0] - anchor[0], 2 * pacman[1] - anchor[1])
        return move_toward(maze, ghost, target)

    if ghost_idx == CLYDE:
        if manhattan(ghost, pacman) > CLYDE_SHY_DIST:
            return move_toward(maze, ghost, pacman)
        return move_toward(maze, ghost, CLYDE_CORNER)

    return move_toward(maze, ghost, pacman)


def random_move(maze: Maze, ghost: Cell, rng=_random) -> Direction:
    moves = valid_moves(maze, ghost)
    if not moves:
        return Direction.NONE
    return rng.choice(moves)


def astar(maze: Maze, ghost: Cell, pacman: Cell) -> Direction:
    return find_path(maze, ghost, pacman).direction


def flee(maze: Maze, ghost: Cell, pacman: Cell) -> Direction:
    """Step that maximises distance from Pac-Man; first move wins ties."""
    moves = valid_moves(maze, ghost)
    if not moves:
        return Direction.NONE
    return max(moves, key=lambda m: manhattan(step(ghost, m), pacman))


def minimax_move(maze: Maze, ghost_idx: int, pacman: Cell, ghosts: Sequence[Cell],
                 ghost_states: Sequence[ThreatState], depth: int = GHOST_DEPTH) -> Direction:
    """
    Move this ghost to minimise Pac-Man's minimax value.

    Edible ghosts just run away.
    """
    ghost = ghosts[ghost_idx]
    if ghost_states[ghost_idx].is_edible:
        return flee(maze, ghost, pacman)

    moves = valid_moves(maze, ghost)
    if not moves:
        return Direction.NONE

    counter = NodeCounter()
    best = moves[0]
    best_score = float('inf')
    for move in moves:
        moved = list(ghosts)
        moved[ghost_idx] = step(ghost, move)
        score = minimax(maze, pacman, moved, ghost_states, depth - 1, True,
                        float('-inf'), float('inf'), counter)
        if score < best_score:
            best, best_score = move, score
    return best
