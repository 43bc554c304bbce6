"""Tests for pacman_ai.grid."""

import itertools

import pytest

from pacman_ai.grid import (
    MOVES,
    Direction,
    direction_between,
    is_tunnel_edge,
    manhattan,
    opposite,
    step,
    to_cell,
    to_position,
    tunnel_aware_distance,
    valid_moves,
)
from pacman_ai.maze import Maze


class TestCells:
    def test_to_cell_rounds_to_nearest(self):
        assert to_cell((15, 24)) == (2, 2)
        assert to_cell((14.9, 25)) == (1, 3)

    def test_to_cell_round_trips_cell_positions(self):
        for cell in [(0, 0), (3, 7), (18, 10)]:
            assert to_cell(to_position(cell)) == cell

    def test_opposite_is_an_involution(self):
        for d in MOVES:
            assert opposite(d) != d
            assert opposite(opposite(d)) == d
        assert opposite(Direction.NONE) == Direction.NONE

    def test_step(self):
        assert step((2, 2), Direction.UP) == (2, 1)
        assert step((2, 2), Direction.RIGHT) == (3, 2)
        assert step((2, 2), Direction.NONE) == (2, 2)


class TestValidMoves:
    def test_enumeration_order(self, open_maze):
        assert valid_moves(open_maze, (2, 2)) == [
            Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]

    def test_corner_is_bounded(self, open_maze):
        assert valid_moves(open_maze, (0, 0)) == [Direction.DOWN, Direction.RIGHT]

    def test_walls_block(self, boxed_maze):
        assert valid_moves(boxed_maze, (1, 1)) == []


class TestDistances:
    def test_manhattan(self):
        assert manhattan((0, 0), (3, 4)) == 7

    def test_tunnel_shortcut(self):
        assert tunnel_aware_distance((0, 10), (18, 10), 10, 19) == 1
        assert tunnel_aware_distance((1, 10), (17, 10), 10, 19) == 3

    def test_no_tunnel_is_manhattan(self):
        assert tunnel_aware_distance((0, 10), (18, 10), None, 19) == 18

    def test_never_exceeds_manhattan(self):
        cells = list(itertools.product(range(0, 19, 3), range(0, 22, 3)))
        for a, b in itertools.product(cells, repeat=2):
            assert tunnel_aware_distance(a, b, 10, 19) <= manhattan(a, b)


class TestDirectionBetween:
    @pytest.mark.parametrize("start,nxt,expected", [
        ((2, 2), (3, 2), Direction.RIGHT),
        ((2, 2), (1, 2), Direction.LEFT),
        ((2, 2), (2, 3), Direction.DOWN),
        ((2, 2), (2, 1), Direction.UP),
        ((2, 2), (2, 2), Direction.NONE),
    ])
    def test_plain_edges(self, start, nxt, expected):
        assert direction_between(start, nxt, 10, 19) == expected

    def test_tunnel_edges(self):
        assert direction_between((0, 10), (18, 10), 10, 19) == Direction.LEFT
        assert direction_between((18, 10), (0, 10), 10, 19) == Direction.RIGHT

    def test_boundary_jump_off_tunnel_row_is_plain(self):
        assert direction_between((0, 3), (18, 3), 10, 19) == Direction.RIGHT

    def test_tunnel_edge_detection(self):
        assert is_tunnel_edge((0, 10), (18, 10), 10, 19)
        assert is_tunnel_edge((18, 10), (0, 10), 10, 19)
        assert not is_tunnel_edge((0, 3), (18, 3), 10, 19)
        assert not is_tunnel_edge((0, 10), (18, 10), None, 19)


class TestMaze:
    def test_classic_layout(self):
        maze = Maze.classic()
        assert maze.dimensions() == (19, 22)
        assert maze.tunnel_row == 10
        assert maze.is_floor((0, 10))
        assert maze.is_floor((18, 10))
        assert not maze.is_floor((9, 9))  # ghost-house door
        assert not maze.is_floor((-1, 10))
