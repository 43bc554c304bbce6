"""
Bayesian ghost behaviour model.

Counts how each ghost moved in each coarse situation (where Pac-Man is
relative to it, and how far) and turns the counts into Laplace-smoothed
move probabilities. The table survives across games through a store; only
reset() forgets it.
"""

import os
import pickle
from enum import IntEnum
from typing import Dict, NamedTuple, Optional, Sequence

import numpy as np

from .config import SAVE_EVERY, SITUATION, SMOOTHING
from .grid import MOVES, Cell, Direction, direction_between, is_tunnel_edge, manhattan

MOVE_INDEX = {d: i for i, d in enumerate(MOVES)}


class Horizontal(IntEnum):
    RIGHT = 0
    LEFT = 1
    ALIGNED = 2


class Vertical(IntEnum):
    DOWN = 0
    UP = 1
    ALIGNED = 2


class DistanceBand(IntEnum):
    NEAR = 0
    MID = 1
    FAR = 2


class Situation(NamedTuple):
    horizontal: Horizontal
    vertical: Vertical
    distance: DistanceBand


TABLE_SHAPE = (len(Horizontal), len(Vertical), len(DistanceBand), len(MOVES))


def situation_key(ghost: Cell, pacman: Cell) -> Situation:
    """Bucket where Pac-Man is as seen from the ghost."""
    dx = pacman[0] - ghost[0]
    dy = pacman[1] - ghost[1]
    slack = SITUATION['axis_slack']

    if dx > slack:
        horizontal = Horizontal.RIGHT
    elif dx < -slack:
        horizontal = Horizontal.LEFT
    else:
        horizontal = Horizontal.ALIGNED

    if dy > slack:
        vertical = Vertical.DOWN
    elif dy < -slack:
        vertical = Vertical.UP
    else:
        vertical = Vertical.ALIGNED

    dist = abs(dx) + abs(dy)
    if dist < SITUATION['near']:
        band = DistanceBand.NEAR
    elif dist < SITUATION['mid']:
        band = DistanceBand.MID
    else:
        band = DistanceBand.FAR

    return Situation(horizontal, vertical, band)


class PickleModelStore:
    """Keeps a model snapshot in a pickle file."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Optional[dict]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, 'rb') as f:
                return pickle.load(f)
        except Exception as e:
            # Any unpickling failure counts as no model; the next save overwrites the file
            print(f"[LOAD] Ignoring unreadable model {self.path}: {e}")
            return None

    def save(self, snapshot: dict):
        tmp_path = self.path + ".tmp"
        with open(tmp_path, 'wb') as f:
            pickle.dump(snapshot, f)
        os.replace(tmp_path, self.path)


class GhostModel:
    """
    Per-ghost move frequency tables.

    Each ghost gets a (3, 3, 3, 4) count array indexed by the situation
    triple and the move (UP, DOWN, LEFT, RIGHT).

    Args:
        store: Optional persistence store with load()/save(snapshot)
        save_every: Flush to the store every N recorded moves
    """

    def __init__(self, store=None, save_every: int = SAVE_EVERY):
        self.store = store
        self.save_every = save_every
        self.observations: Dict[int, np.ndarray] = {}
        self.total = 0

    @classmethod
    def load(cls, store, save_every: int = SAVE_EVERY) -> "GhostModel":
        """Build a model from a store, starting empty if it holds nothing usable."""
        model = cls(store=store, save_every=save_every)
        snapshot = store.load() if store is not None else None
        if snapshot is not None:
            model.restore(snapshot)
            print(f"[LOAD] {model.total} ghost observations, confidence {model.confidence()}%")
        return model

    def _table(self, ghost_idx: int) -> np.ndarray:
        table = self.observations.get(ghost_idx)
        if table is None:
            table = np.zeros(TABLE_SHAPE, dtype=np.int64)
            self.observations[ghost_idx] = table
        return table

    def record_move(self, ghost_idx: int, ghost: Cell, pacman: Cell, direction: Direction):
        if direction == Direction.NONE:
            return

        situation = situation_key(ghost, pacman)
        self._table(ghost_idx)[tuple(situation) + (MOVE_INDEX[direction],)] += 1
        self.total += 1

        if self.store is not None and self.total % self.save_every == 0:
            self.save()

    def counts(self, ghost_idx: int, ghost: Cell, pacman: Cell) -> np.ndarray:
        table = self.observations.get(ghost_idx)
        if table is None:
            return np.zeros(len(MOVES), dtype=np.int64)
        return table[tuple(situation_key(ghost, pacman))]

    def move_probabilities(self, ghost_idx: int, ghost: Cell, pacman: Cell) -> Dict[Direction, float]:
        """
        Probability of each move for this ghost in its current situation.

        Unseen situations are uniform; seen ones are smoothed so no move ever
        gets exactly 0 or 1.
        """
        counts = self.counts(ghost_idx, ghost, pacman)
        observed = int(counts.sum())
        if observed == 0:
            return {d: 1.0 / len(MOVES) for d in MOVES}

        probs = (counts + SMOOTHING) / (observed + SMOOTHING * len(MOVES))
        return {d: float(probs[i]) for i, d in enumerate(MOVES)}

    def most_likely_move(self, ghost_idx: int, ghost: Cell, pacman: Cell) -> Direction:
        """Most probable move; ties go to the earliest of UP, DOWN, LEFT, RIGHT."""
        probs = self.move_probabilities(ghost_idx, ghost, pacman)
        best = MOVES[0]
        for d in MOVES:
            if probs[d] > probs[best]:
                best = d
        return best

    def confidence(self) -> int:
        return min(100, (self.total + 1) // 2)

    def stats(self) -> dict:
        return {'total_observations': self.total, 'confidence': self.confidence()}

    # === Persistence ===

    def snapshot(self) -> dict:
        return {
            'observations': {idx: table.copy() for idx, table in self.observations.items()},
            'total': self.total,
        }

    def restore(self, snapshot) -> bool:
        """Replace the table with a snapshot. A malformed snapshot leaves the model empty."""
        self.observations = {}
        self.total = 0
        try:
            restored = {}
            for idx, table in dict(snapshot['observations']).items():
                table = np.asarray(table, dtype=np.int64)
                if table.shape != TABLE_SHAPE or (table < 0).any():
                    raise ValueError(f"bad table for ghost {idx}: shape {table.shape}")
                restored[int(idx)] = table.copy()
            total = int(snapshot.get('total', 0))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            print(f"[LOAD] Discarding corrupt ghost model: {e}")
            return False

        self.observations = restored
        self.total = total
        return True

    def save(self) -> bool:
        if self.store is None:
            return False
        try:
            self.store.save(self.snapshot())
        except Exception as e:
            print(f"[SAVE] Ghost model not saved: {e}")
            return False
        return True

    def reset(self):
        """Forget everything learned, including the stored copy."""
        self.observations = {}
        self.total = 0
        self.save()
        print("[RESET] Ghost model cleared")


def observe_ghost_moves(model: GhostModel, previous: Sequence[Cell], current: Sequence[Cell],
                        pacman: Cell, maze=None) -> int:
    """
    Record the move each ghost made between two consecutive snapshots.

    Returns the number of moves recorded. Ghosts that did not change cell
    are skipped, and so are jumps of more than one cell (a respawn) other
    than the tunnel wrap.
    """
    tunnel_row = maze.tunnel_row if maze is not None else None
    width = maze.width if maze is not None else 0

    recorded = 0
    for idx, (old, new) in enumerate(zip(previous, current)):
        if manhattan(old, new) > 1 and not is_tunnel_edge(old, new, tunnel_row, width):
            continue
        move = direction_between(old, new, tunnel_row, width)
        if move != Direction.NONE:
            model.record_move(idx, old, pacman, move)
            recorded += 1
    return recorded
