"""Search and learning controllers for Pac-Man."""

from .controllers import PacmanController
from .ghost_model import GhostModel, PickleModelStore
from .grid import Direction, ThreatState
from .maze import CellKind, Maze

__all__ = [
    "CellKind",
    "Direction",
    "GhostModel",
    "Maze",
    "PacmanController",
    "PickleModelStore",
    "ThreatState",
]
