from typing import Sequence

from .config import EVAL
from .grid import Cell, ThreatState, manhattan
from .maze import CellKind, Maze


def split_ghosts(ghost_cells: Sequence[Cell], ghost_states: Sequence[ThreatState]):
    """Return (dangerous, edible) ghost cells. Respawning ghosts land in neither."""
    dangerous = []
    edible = []
    for cell, state in zip(ghost_cells, ghost_states):
        if state.is_edible:
            edible.append(cell)
        elif state.is_dangerous:
            dangerous.append(cell)
    return dangerous, edible


def evaluate(maze: Maze, pacman: Cell, ghost_cells: Sequence[Cell],
             ghost_states: Sequence[ThreatState]) -> float:
    """
    Hand-tuned static score of a position, higher is better for Pac-Man.

    Scores are only comparable between positions on the same maze.
    """
    score = 0.0
    dangerous, edible = split_ghosts(ghost_cells, ghost_states)

    # === Dangerous ghosts ===
    danger_dists = [manhattan(pacman, g) for g in dangerous]
    for d in danger_dists:
        if d < EVAL['capture_dist']:
            score += EVAL['capture']
        elif d < EVAL['danger_dist']:
            score += EVAL['danger_scale'] / d
        elif d < EVAL['aware_dist']:
            score += EVAL['aware_scale'] / d

    # === Edible ghosts ===
    for g in edible:
        d = manhattan(pacman, g)
        if d == 0:
            score += EVAL['eat_ghost']
        elif d < EVAL['chase_dist']:
            score += EVAL['chase_scale'] / d
        elif d < EVAL['pursue_dist']:
            score += EVAL['pursue_scale'] / d

    nearest_danger = min(danger_dists) if danger_dists else None

    # === Pellet underfoot ===
    kind = maze.cell_kind(pacman)
    if kind == CellKind.PELLET:
        score += EVAL['pellet']
    elif kind == CellKind.POWER_PELLET:
        pill_value = EVAL['pill']
        if dangerous and not edible and nearest_danger < EVAL['pill_threat_dist']:
            pill_value = EVAL['pill_under_threat']
        score += pill_value

    # === Progress when nothing is chasing ===
    if not edible and (nearest_danger is None or nearest_danger > EVAL['safe_dist']):
        target = maze.nearest_collectible(pacman)
        if target is not None:
            score += EVAL['seek_base'] - manhattan(pacman, target)

    return score
