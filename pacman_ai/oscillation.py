from collections import Counter, deque

from .config import HISTORY_LENGTH, PENALTY
from .grid import Cell, Direction, opposite, step


class OscillationTracker:
    """
    Penalises moves that reverse direction or lead back to recent cells.

    History holds the last HISTORY_LENGTH cells Pac-Man decided from; visit
    counts cover the whole game. Both are cleared by reset() on a new game.
    """

    def __init__(self, history_length: int = HISTORY_LENGTH):
        self.history = deque(maxlen=history_length)
        self.visits = Counter()

    def reset(self):
        self.history.clear()
        self.visits.clear()

    def record_position(self, cell: Cell):
        self.history.append(cell)
        self.visits[cell] += 1

    def penalty(self, cell: Cell, move: Direction, last_move: Direction = Direction.NONE) -> float:
        """Non-negative cost of taking `move` from `cell` after `last_move`."""
        penalty = 0.0

        if last_move is not None and last_move != Direction.NONE and move == opposite(last_move):
            penalty += PENALTY['reverse']

        target = step(cell, move)

        # Newer entries sit at the right end and weigh up to twice the base
        n = len(self.history)
        for i, seen in enumerate(self.history):
            if seen == target:
                penalty += PENALTY['revisit'] * (1 + (i + 1) / n)

        extra = self.visits[target] - PENALTY['free_visits']
        if extra > 0:
            penalty += PENALTY['visit_scale'] * extra ** 2

        return penalty
