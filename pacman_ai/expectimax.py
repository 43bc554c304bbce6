"""
Depth-limited expectimax against the learned ghost model.

The chance ply branches on ghost 0's learned move distribution only; the
other ghosts take their single most likely move. Branches below PROB_PRUNE
are dropped without renormalising the rest.
"""

from typing import List, Optional, Sequence, Tuple

from .config import PROB_PRUNE
from .evaluator import evaluate
from .ghost_model import GhostModel
from .grid import MOVES, Cell, Direction, ThreatState, step, valid_moves
from .maze import Maze
from .minimax import NodeCounter


def _move_or_stay(maze: Maze, ghost: Cell, direction: Direction) -> Cell:
    target = step(ghost, direction)
    return target if maze.is_floor(target) else ghost


def predict_ghosts(maze: Maze, model: GhostModel, pacman: Cell, ghosts: Sequence[Cell],
                   lead_move: Direction) -> List[Cell]:
    """Ghost 0 takes lead_move, every other ghost its most likely move."""
    moved = []
    for idx, ghost in enumerate(ghosts):
        move = lead_move if idx == 0 else model.most_likely_move(idx, ghost, pacman)
        moved.append(_move_or_stay(maze, ghost, move))
    return moved


def expectimax(maze: Maze, model: GhostModel, pacman: Cell, ghosts: Sequence[Cell],
               ghost_states: Sequence[ThreatState], depth: int, maximizing: bool,
               counter: NodeCounter) -> float:
    counter.count += 1

    if depth == 0:
        return evaluate(maze, pacman, ghosts, ghost_states)

    moves = valid_moves(maze, pacman)
    if not moves:
        return evaluate(maze, pacman, ghosts, ghost_states)

    if maximizing:
        best = float('-inf')
        for move in moves:
            value = expectimax(maze, model, step(pacman, move), ghosts, ghost_states,
                               depth - 1, False, counter)
            best = max(best, value)
        return best

    if not ghosts:
        return expectimax(maze, model, pacman, ghosts, ghost_states, depth - 1, True, counter)

    probs = model.move_probabilities(0, ghosts[0], pacman)
    expected = 0.0
    for direction in MOVES:
        prob = probs[direction]
        if prob < PROB_PRUNE:
            continue
        next_ghosts = predict_ghosts(maze, model, pacman, ghosts, direction)
        expected += prob * expectimax(maze, model, pacman, next_ghosts, ghost_states,
                                      depth - 1, True, counter)
    return expected


def best_move(maze: Maze, model: GhostModel, pacman: Cell, ghosts: Sequence[Cell],
              ghost_states: Sequence[ThreatState], depth: int, tracker=None,
              last_move: Direction = Direction.NONE) -> Tuple[Direction, float, int]:
    """Root move by expected value minus oscillation penalty. Returns (move, score, nodes)."""
    depth = max(1, depth)
    moves = valid_moves(maze, pacman)
    counter = NodeCounter()
    if not moves:
        return Direction.NONE, evaluate(maze, pacman, ghosts, ghost_states), 0

    chosen: Optional[Direction] = None
    best_score = float('-inf')
    for move in moves:
        score = expectimax(maze, model, step(pacman, move), ghosts, ghost_states,
                           depth - 1, False, counter)
        if tracker is not None:
            score -= tracker.penalty(pacman, move, last_move)
        if chosen is None or score > best_score:
            chosen, best_score = move, score

    return chosen, best_score, counter.count
