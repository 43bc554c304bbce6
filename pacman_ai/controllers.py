"""
Pac-Man controllers and the algorithm dispatch.

Every controller takes the same inputs (maze, Pac-Man position, ghost
positions, ghost threat states, optional depth, last move), returns a single
Direction, and records telemetry and Pac-Man's cell with the shared tracker.
NONE means "hold position": Pac-Man is boxed in.
"""

import random
import time
from typing import Callable, List, Optional, Sequence

from . import expectimax as expectimax_search
from . import minimax as minimax_search
from .config import ASTAR_PANIC_DIST, DANGER_COST, DEFAULT_DEPTH
from .evaluator import split_ghosts
from .ghost_model import GhostModel
from .grid import Cell, Direction, Position, ThreatState, manhattan, step, to_cell, valid_moves
from .maze import Maze, nearest_of
from .oscillation import OscillationTracker
from .pathfinding import find_path
from .stats import DecisionStats

ALGORITHMS = ('random', 'greedy', 'astar', 'minimax', 'expectimax')
ALIASES = {'adaptive': 'expectimax'}


def danger_cost(cell: Cell, dangerous: Sequence[Cell]) -> float:
    """Extra step cost for walking near dangerous ghosts."""
    cost = 0
    for ghost in dangerous:
        d = manhattan(cell, ghost)
        for limit, extra in DANGER_COST:
            if d < limit:
                cost += extra
                break
    return cost


def choose_goal(maze: Maze, pacman: Cell, ghost_cells: Sequence[Cell],
                ghost_states: Sequence[ThreatState]):
    """
    Goal cell for the A* controller, and whether it is a ghost hunt.

    1. Edible ghosts around -> hunt the nearest one
    2. A dangerous ghost within ASTAR_PANIC_DIST -> nearest power pellet
    3. Otherwise -> nearest pellet
    """
    dangerous, edible = split_ghosts(ghost_cells, ghost_states)
    if edible:
        return nearest_of(pacman, edible), True

    closest_danger = min((manhattan(pacman, g) for g in dangerous), default=None)
    if closest_danger is not None and closest_danger < ASTAR_PANIC_DIST:
        goal = maze.nearest_power_pellet(pacman) or maze.nearest_pellet(pacman)
    else:
        goal = maze.nearest_pellet(pacman) or maze.nearest_power_pellet(pacman)
    return goal, False


class PacmanController:
    """
    Owns the per-game tracker and telemetry and shares the ghost model.

    Args:
        ghost_model: Learned ghost model used by expectimax
        tracker: Anti-oscillation tracker (a fresh one by default)
        stats: Telemetry sink (a fresh one by default)
        rng: Random source for the random controller
        default_depth: Search depth when a call passes none
    """

    def __init__(self, ghost_model: Optional[GhostModel] = None,
                 tracker: Optional[OscillationTracker] = None,
                 stats: Optional[DecisionStats] = None,
                 rng: Optional[random.Random] = None,
                 default_depth: int = DEFAULT_DEPTH):
        self.ghost_model = ghost_model if ghost_model is not None else GhostModel()
        self.tracker = tracker if tracker is not None else OscillationTracker()
        self.stats = stats if stats is not None else DecisionStats()
        self.rng = rng if rng is not None else random.Random()
        self.default_depth = default_depth

    def new_game(self):
        """Clear per-game state. Learned ghost behaviour is kept."""
        self.stats.reset()
        self.tracker.reset()

    def full_reset(self):
        self.new_game()
        self.ghost_model.reset()

    def stats_report(self) -> dict:
        report = self.stats.as_dict()
        report.update(self.ghost_model.stats())
        return report

    def decide(self, algorithm: str, maze: Maze, pacman_pos: Position,
               ghost_positions: Sequence[Position], ghost_states: Sequence[ThreatState],
               depth: Optional[int] = None, last_move: Direction = Direction.NONE) -> Direction:
        name = ALIASES.get(algorithm, algorithm)
        if name not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {algorithm!r}, expected one of {ALGORITHMS}")
        controller: Callable = getattr(self, name)
        return controller(maze, pacman_pos, ghost_positions, ghost_states, depth, last_move)

    # === Helpers ===

    def _finish(self, pacman: Cell, started: float, nodes: int, move: Direction) -> Direction:
        self.stats.record((time.perf_counter() - started) * 1000.0, nodes)
        self.tracker.record_position(pacman)
        return move

    def _pick(self, pacman: Cell, moves: List[Direction], last_move: Direction,
              score: Callable[[Direction], float]) -> Direction:
        """Best move by score minus oscillation penalty; first move wins ties."""
        best = moves[0]
        best_score = float('-inf')
        for move in moves:
            value = score(move) - self.tracker.penalty(pacman, move, last_move)
            if value > best_score:
                best, best_score = move, value
        return best

    # === Controllers ===

    def random(self, maze: Maze, pacman_pos: Position, ghost_positions=(), ghost_states=(),
               depth: Optional[int] = None, last_move: Direction = Direction.NONE) -> Direction:
        """Random wandering that still shies away from reversals and revisits."""
        started = time.perf_counter()
        pacman = to_cell(pacman_pos)
        moves = valid_moves(maze, pacman)
        if not moves:
            return Direction.NONE

        move = self._pick(pacman, moves, last_move, lambda m: self.rng.random() * 10)
        return self._finish(pacman, started, len(moves), move)

    def greedy(self, maze: Maze, pacman_pos: Position, ghost_positions=(), ghost_states=(),
               depth: Optional[int] = None, last_move: Direction = Direction.NONE) -> Direction:
        """Head for the nearest pellet or pill, ignoring ghosts."""
        started = time.perf_counter()
        pacman = to_cell(pacman_pos)
        moves = valid_moves(maze, pacman)
        if not moves:
            return Direction.NONE

        target = maze.nearest_collectible(pacman)
        if target is None:
            return self._finish(pacman, started, len(moves), moves[0])

        move = self._pick(pacman, moves, last_move,
                          lambda m: -manhattan(step(pacman, m), target))
        return self._finish(pacman, started, len(moves), move)

    def astar(self, maze: Maze, pacman_pos: Position, ghost_positions: Sequence[Position],
              ghost_states: Sequence[ThreatState], depth: Optional[int] = None,
              last_move: Direction = Direction.NONE) -> Direction:
        """A* toward a goal picked by threat level, routing around dangerous ghosts."""
        started = time.perf_counter()
        pacman = to_cell(pacman_pos)
        moves = valid_moves(maze, pacman)
        if not moves:
            return Direction.NONE

        ghost_cells = [to_cell(p) for p in ghost_positions]
        goal, hunting = choose_goal(maze, pacman, ghost_cells, ghost_states)
        if goal is None:
            return self._finish(pacman, started, 0, moves[0])

        dangerous, _ = split_ghosts(ghost_cells, ghost_states)
        if hunting:
            cost = None
        else:
            def cost(cell):
                return danger_cost(cell, dangerous)

        result = find_path(maze, pacman, goal, step_cost=cost)
        if result.direction != Direction.NONE:
            return self._finish(pacman, started, result.nodes, result.direction)

        # No path (or cap hit): step toward the goal greedily
        def toward(move):
            nxt = step(pacman, move)
            return -manhattan(nxt, goal) - (0 if hunting else danger_cost(nxt, dangerous))

        move = self._pick(pacman, moves, last_move, toward)
        return self._finish(pacman, started, result.nodes, move)

    def minimax(self, maze: Maze, pacman_pos: Position, ghost_positions: Sequence[Position],
                ghost_states: Sequence[ThreatState], depth: Optional[int] = None,
                last_move: Direction = Direction.NONE) -> Direction:
        started = time.perf_counter()
        pacman = to_cell(pacman_pos)
        ghost_cells = [to_cell(p) for p in ghost_positions]
        move, _, nodes = minimax_search.best_move(
            maze, pacman, ghost_cells, ghost_states, depth or self.default_depth,
            tracker=self.tracker, last_move=last_move)
        if move == Direction.NONE:
            return move
        return self._finish(pacman, started, nodes, move)

    def expectimax(self, maze: Maze, pacman_pos: Position, ghost_positions: Sequence[Position],
                   ghost_states: Sequence[ThreatState], depth: Optional[int] = None,
                   last_move: Direction = Direction.NONE) -> Direction:
        """Expectimax over the learned ghost model (the "adaptive" controller)."""
        started = time.perf_counter()
        pacman = to_cell(pacman_pos)
        ghost_cells = [to_cell(p) for p in ghost_positions]
        move, _, nodes = expectimax_search.best_move(
            maze, self.ghost_model, pacman, ghost_cells, ghost_states,
            depth or self.default_depth, tracker=self.tracker, last_move=last_move)
        if move == Direction.NONE:
            return move
        return self._finish(pacman, started, nodes, move)
