"""
Maze layout and cell queries.

The maze is a numpy grid of tile codes (see config.TILES), indexed [y, x].
Search code only talks to it through is_floor / cell_kind / nearest.
"""

from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import TILES, TUNNEL_ROW
from .grid import Cell, manhattan

CLASSIC_LAYOUT = [
    "###################",
    "#........#........#",
    "#.##.###.#.###.##.#",
    "#o##.###.#.###.##o#",
    "#.................#",
    "#.##.#.#####.#.##.#",
    "#....#...#...#....#",
    "####.### # ###.####",
    "   #.#       #.#   ",
    "####.# ##-## #.####",
    "    .  #   #  .    ",
    "####.# ##### #.####",
    "   #.#       #.#   ",
    "####.# ##### #.####",
    "#........#........#",
    "#.##.###.#.###.##.#",
    "#o.#...........#.o#",
    "##.#.#.#####.#.#.##",
    "#....#...#...#....#",
    "#.######.#.######.#",
    "#.................#",
    "###################",
]

CHAR_TO_TILE = {
    '#': TILES['wall'],
    '.': TILES['biscuit'],
    ' ': TILES['empty'],
    '-': TILES['block'],
    'o': TILES['pill'],
}

FLOOR_TILES = (TILES['empty'], TILES['biscuit'], TILES['pill'])


class CellKind(Enum):
    WALL = "wall"
    FLOOR = "floor"
    PELLET = "pellet"
    POWER_PELLET = "power-pellet"


TILE_TO_KIND = {
    TILES['wall']: CellKind.WALL,
    TILES['block']: CellKind.WALL,
    TILES['empty']: CellKind.FLOOR,
    TILES['biscuit']: CellKind.PELLET,
    TILES['pill']: CellKind.POWER_PELLET,
}

KIND_TO_TILE = {
    CellKind.PELLET: TILES['biscuit'],
    CellKind.POWER_PELLET: TILES['pill'],
}


class Maze:
    """
    Static maze with a mutable pellet layer.

    Args:
        tiles: 2-D array-like of tile codes, rows first
        tunnel_row: Row whose boundary columns wrap around, or None
    """

    def __init__(self, tiles, tunnel_row: Optional[int] = None):
        self.tiles = np.array(tiles, dtype=np.int8)
        if self.tiles.ndim != 2:
            raise ValueError(f"maze tiles must be 2-D, got shape {self.tiles.shape}")
        self.height, self.width = self.tiles.shape
        unknown = ~np.isin(self.tiles, list(TILE_TO_KIND))
        if unknown.any():
            raise ValueError(f"unknown tile codes {sorted(set(self.tiles[unknown].tolist()))}")
        if tunnel_row is not None and not 0 <= tunnel_row < self.height:
            raise ValueError(f"tunnel row {tunnel_row} outside maze of height {self.height}")
        self.tunnel_row = tunnel_row

    @classmethod
    def from_strings(cls, rows: Sequence[str], tunnel_row: Optional[int] = None) -> "Maze":
        width = max(len(r) for r in rows)
        tiles = [[CHAR_TO_TILE[c] for c in row.ljust(width)] for row in rows]
        return cls(tiles, tunnel_row=tunnel_row)

    @classmethod
    def classic(cls) -> "Maze":
        return cls.from_strings(CLASSIC_LAYOUT, tunnel_row=TUNNEL_ROW)

    def copy(self) -> "Maze":
        return Maze(self.tiles.copy(), tunnel_row=self.tunnel_row)

    def dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self.width and 0 <= cell[1] < self.height

    def is_floor(self, cell: Cell) -> bool:
        if not self.in_bounds(cell):
            return False
        return int(self.tiles[cell[1], cell[0]]) in FLOOR_TILES

    def cell_kind(self, cell: Cell) -> CellKind:
        if not self.in_bounds(cell):
            return CellKind.WALL
        return TILE_TO_KIND[int(self.tiles[cell[1], cell[0]])]

    def eat(self, cell: Cell) -> CellKind:
        """Clear a pellet or pill from a cell, returning what was there."""
        kind = self.cell_kind(cell)
        if kind in KIND_TO_TILE:
            self.tiles[cell[1], cell[0]] = TILES['empty']
        return kind

    def cells_of(self, kinds: Iterable[CellKind]) -> np.ndarray:
        """(N, 2) array of (x, y) cells holding any of the kinds, row-major order."""
        codes = [KIND_TO_TILE[k] for k in kinds]
        ys, xs = np.nonzero(np.isin(self.tiles, codes))
        return np.stack([xs, ys], axis=1)

    def nearest(self, cell: Cell, kinds: Iterable[CellKind]) -> Optional[Cell]:
        """Nearest cell of the given kinds by Manhattan distance; first in row-major order on ties."""
        candidates = self.cells_of(kinds)
        if len(candidates) == 0:
            return None
        dists = np.abs(candidates[:, 0] - cell[0]) + np.abs(candidates[:, 1] - cell[1])
        x, y = candidates[int(np.argmin(dists))]
        return (int(x), int(y))

    def nearest_collectible(self, cell: Cell) -> Optional[Cell]:
        return self.nearest(cell, (CellKind.PELLET, CellKind.POWER_PELLET))

    def nearest_pellet(self, cell: Cell) -> Optional[Cell]:
        return self.nearest(cell, (CellKind.PELLET,))

    def nearest_power_pellet(self, cell: Cell) -> Optional[Cell]:
        return self.nearest(cell, (CellKind.POWER_PELLET,))

    def collectibles_left(self) -> int:
        return len(self.cells_of((CellKind.PELLET, CellKind.POWER_PELLET)))


def nearest_of(cell: Cell, cells: List[Cell]) -> Optional[Cell]:
    """First cell in the list with minimal Manhattan distance to `cell`."""
    best = None
    best_dist = None
    for c in cells:
        d = manhattan(cell, c)
        if best_dist is None or d < best_dist:
            best, best_dist = c, d
    return best
