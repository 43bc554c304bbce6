"""
Depth-limited minimax with alpha-beta pruning.

Pac-Man is the maximising player. The ghosts share one "turn" in which each
of them takes a single deterministic step, so the minimising ply has exactly
one child.
"""

from typing import List, Optional, Sequence, Tuple

from .evaluator import evaluate
from .grid import Cell, Direction, ThreatState, step, valid_moves
from .maze import Maze


class NodeCounter:
    """Mutable node tally threaded through a search."""

    def __init__(self):
        self.count = 0


def advance_ghosts(maze: Maze, pacman: Cell, ghosts: Sequence[Cell],
                   ghost_states: Sequence[ThreatState]) -> List[Cell]:
    """
    Move every ghost one cell along its dominant axis to Pac-Man.

    Edible ghosts step away instead of toward. A blocked step leaves the
    ghost where it is; the other axis is not tried.
    """
    moved = []
    for ghost, state in zip(ghosts, ghost_states):
        dx = pacman[0] - ghost[0]
        dy = pacman[1] - ghost[1]
        sign = -1 if state.is_edible else 1

        if abs(dx) > abs(dy):
            target = (ghost[0] + sign * (1 if dx > 0 else -1), ghost[1])
        elif dy != 0:
            target = (ghost[0], ghost[1] + sign * (1 if dy > 0 else -1))
        else:
            target = ghost

        moved.append(target if maze.is_floor(target) else ghost)
    return moved


def minimax(maze: Maze, pacman: Cell, ghosts: Sequence[Cell], ghost_states: Sequence[ThreatState],
            depth: int, maximizing: bool, alpha: float, beta: float,
            counter: NodeCounter, prune: bool = True) -> float:
    counter.count += 1

    if depth == 0:
        return evaluate(maze, pacman, ghosts, ghost_states)

    moves = valid_moves(maze, pacman)
    if not moves:
        return evaluate(maze, pacman, ghosts, ghost_states)

    if maximizing:
        best = float('-inf')
        for move in moves:
            value = minimax(maze, step(pacman, move), ghosts, ghost_states,
                            depth - 1, False, alpha, beta, counter, prune)
            best = max(best, value)
            alpha = max(alpha, value)
            if prune and beta <= alpha:
                break
        return best

    # Single deterministic ghost reply: nothing to minimise over
    next_ghosts = advance_ghosts(maze, pacman, ghosts, ghost_states)
    return minimax(maze, pacman, next_ghosts, ghost_states,
                   depth - 1, True, alpha, beta, counter, prune)


def best_move(maze: Maze, pacman: Cell, ghosts: Sequence[Cell], ghost_states: Sequence[ThreatState],
              depth: int, tracker=None, last_move: Direction = Direction.NONE,
              prune: bool = True) -> Tuple[Direction, float, int]:
    """
    Pick Pac-Man's root move.

    Each candidate is searched with a full window, then the tracker's
    oscillation penalty is subtracted. Ties keep the earliest move.

    Returns:
        (move, score, nodes evaluated); move is NONE when boxed in
    """
    depth = max(1, depth)
    moves = valid_moves(maze, pacman)
    counter = NodeCounter()
    if not moves:
        return Direction.NONE, evaluate(maze, pacman, ghosts, ghost_states), 0

    chosen: Optional[Direction] = None
    best_score = float('-inf')
    for move in moves:
        score = minimax(maze, step(pacman, move), ghosts, ghost_states, depth - 1,
                        False, float('-inf'), float('inf'), counter, prune)
        if tracker is not None:
            score -= tracker.penalty(pacman, move, last_move)
        if chosen is None or score > best_score:
            chosen, best_score = move, score

    return chosen, best_score, counter.count
