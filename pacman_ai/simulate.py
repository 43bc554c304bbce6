"""
Minimal headless Pac-Man game for running controllers without a server.

One cell per tick for everyone, a single life, pills make every ghost edible
for a while. It exposes the same reset()/step() surface as PacmanEnv so the
driver in play.py can use either.
"""

import random
from typing import List, Optional

from . import ghost_controllers
from .grid import Cell, Direction, ThreatState, step, to_position
from .maze import CellKind, Maze
from .pacman_env import GameSnapshot

PACMAN_START = (9, 16)
GHOST_STARTS = [(9, 8), (7, 8), (11, 8), (9, 12)]
EDIBLE_TICKS = 30

SCORES = {
    CellKind.PELLET: 10,
    CellKind.POWER_PELLET: 50,
    'ghost': 200,
}

GHOST_AIS = ('classic', 'random', 'astar', 'minimax')


def wrap_step(maze: Maze, cell: Cell, direction: Direction) -> Cell:
    """Step one cell, wrapping through the tunnel; blocked moves stay put."""
    target = step(cell, direction)
    if maze.tunnel_row is not None and cell[1] == maze.tunnel_row:
        if target[0] < 0:
            target = (maze.width - 1, cell[1])
        elif target[0] >= maze.width:
            target = (0, cell[1])
    return target if maze.is_floor(target) else cell


class LocalGame:
    def __init__(self, layout: Optional[Maze] = None, ghost_ai: str = 'classic',
                 rng: Optional[random.Random] = None):
        if ghost_ai not in GHOST_AIS:
            raise ValueError(f"unknown ghost AI {ghost_ai!r}, expected one of {GHOST_AIS}")
        self.layout = layout if layout is not None else Maze.classic()
        self.ghost_ai = ghost_ai
        self.rng = rng if rng is not None else random.Random()
        self.reset()

    def reset(self) -> GameSnapshot:
        self.maze = self.layout.copy()
        self.pacman = PACMAN_START
        self.pacman_dir = Direction.NONE
        self.ghosts: List[Cell] = list(GHOST_STARTS)
        self.edible = [0] * len(self.ghosts)
        self.score = 0
        self.dead = False
        self.tick = 0
        self.ghosts_eaten = 0
        self.maze.eat(self.pacman)
        return self.snapshot()

    def ghost_states(self) -> List[ThreatState]:
        return [ThreatState(is_edible=t > 0, is_dangerous=t == 0) for t in self.edible]

    def snapshot(self) -> GameSnapshot:
        left = self.maze.collectibles_left()
        return GameSnapshot(
            maze=self.maze,
            pacman=to_position(self.pacman),
            pacman_dir=self.pacman_dir,
            ghosts=[to_position(g) for g in self.ghosts],
            ghost_states=self.ghost_states(),
            status={
                'score': self.score,
                'dots_remaining': left,
                'round_won': left == 0,
                'game_over': self.dead,
                'just_died': self.dead,
                'ghosts_eaten': self.ghosts_eaten,
            },
        )

    def _ghost_move(self, idx: int) -> Direction:
        ghost = self.ghosts[idx]
        if self.edible[idx] > 0:
            return ghost_controllers.flee(self.maze, ghost, self.pacman)
        if self.ghost_ai == 'random':
            return ghost_controllers.random_move(self.maze, ghost, self.rng)
        if self.ghost_ai == 'astar':
            return ghost_controllers.astar(self.maze, ghost, self.pacman)
        if self.ghost_ai == 'minimax':
            return ghost_controllers.minimax_move(self.maze, idx, self.pacman, self.ghosts,
                                                  self.ghost_states())
        return ghost_controllers.classic(self.maze, idx, ghost, self.pacman,
                                         self.pacman_dir, blinky=self.ghosts[0])

    def _collide(self, before: List[Cell]):
        for idx, ghost in enumerate(self.ghosts):
            # Pac-Man walked into the ghost's old cell, or the ghost walked into Pac-Man's
            if ghost != self.pacman and before[idx] != self.pacman:
                continue
            if self.edible[idx] > 0:
                self.score += SCORES['ghost']
                self.ghosts_eaten += 1
                self.ghosts[idx] = GHOST_STARTS[idx % len(GHOST_STARTS)]
                self.edible[idx] = 0
            else:
                self.dead = True

    def step(self, direction: Direction) -> GameSnapshot:
        if self.dead:
            return self.snapshot()
        self.tick += 1

        if direction != Direction.NONE:
            self.pacman_dir = direction
        self.pacman = wrap_step(self.maze, self.pacman, self.pacman_dir)

        eaten = self.maze.eat(self.pacman)
        if eaten in SCORES:
            self.score += SCORES[eaten]
        if eaten == CellKind.POWER_PELLET:
            self.edible = [EDIBLE_TICKS] * len(self.ghosts)

        before = list(self.ghosts)
        moves = [self._ghost_move(i) for i in range(len(self.ghosts))]
        self.ghosts = [wrap_step(self.maze, g, m) for g, m in zip(self.ghosts, moves)]
        self.edible = [max(0, t - 1) for t in self.edible]

        self._collide(before)
        return self.snapshot()
