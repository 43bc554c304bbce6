"""Tests for pacman_ai.maze."""

import pytest

from pacman_ai.config import TILES
from pacman_ai.maze import CellKind, Maze, nearest_of


class TestCellKind:
    def test_kinds(self):
        maze = Maze.from_strings(["#.o -"])
        assert maze.cell_kind((0, 0)) == CellKind.WALL
        assert maze.cell_kind((1, 0)) == CellKind.PELLET
        assert maze.cell_kind((2, 0)) == CellKind.POWER_PELLET
        assert maze.cell_kind((3, 0)) == CellKind.FLOOR
        assert maze.cell_kind((4, 0)) == CellKind.WALL
        assert maze.cell_kind((9, 9)) == CellKind.WALL

    def test_floor(self):
        maze = Maze.from_strings(["#.o -"])
        assert [maze.is_floor((x, 0)) for x in range(5)] == [False, True, True, True, False]


class TestNearest:
    def test_row_major_tie_break(self):
        maze = Maze.from_strings([
            "  .  ",
            ".   .",
            "  .  ",
        ])
        # (2, 0) and (2, 2) are both one step from (2, 1)
        assert maze.nearest_collectible((2, 1)) == (2, 0)

    def test_kind_filters(self):
        maze = Maze.from_strings([".   o"])
        assert maze.nearest_pellet((4, 0)) == (0, 0)
        assert maze.nearest_power_pellet((0, 0)) == (4, 0)
        assert maze.nearest_collectible((3, 0)) == (4, 0)

    def test_none_left(self, open_maze):
        assert open_maze.nearest_collectible((0, 0)) is None
        assert open_maze.collectibles_left() == 0

    def test_nearest_of_keeps_first_on_ties(self):
        assert nearest_of((0, 0), [(1, 1), (2, 0), (0, 2)]) == (1, 1)
        assert nearest_of((0, 0), []) is None


class TestMutation:
    def test_eat_clears_pellet(self):
        maze = Maze.from_strings([".o"])
        assert maze.eat((0, 0)) == CellKind.PELLET
        assert maze.cell_kind((0, 0)) == CellKind.FLOOR
        assert maze.collectibles_left() == 1

    def test_copy_is_independent(self):
        maze = Maze.from_strings([".o"])
        clone = maze.copy()
        clone.eat((1, 0))
        assert maze.cell_kind((1, 0)) == CellKind.POWER_PELLET


class TestValidation:
    def test_rejects_unknown_tiles(self):
        with pytest.raises(ValueError):
            Maze([[TILES['wall'], 99]])

    def test_rejects_tunnel_outside_maze(self):
        with pytest.raises(ValueError):
            Maze.from_strings(["   "], tunnel_row=3)
