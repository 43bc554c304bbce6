"""Tests for pacman_ai.evaluator."""

import pytest

from pacman_ai.evaluator import evaluate, split_ghosts
from pacman_ai.grid import ThreatState
from pacman_ai.maze import Maze

DANGEROUS = ThreatState(is_edible=False, is_dangerous=True)
EDIBLE = ThreatState(is_edible=True, is_dangerous=False)
RESPAWNING = ThreatState(is_edible=False, is_dangerous=False)


@pytest.fixture
def row():
    """Twelve cells of bare floor in a line."""
    return Maze.from_strings([" " * 12])


class TestGhostTerms:
    def test_adjacent_dangerous_ghost(self, open_maze):
        assert evaluate(open_maze, (2, 2), [(2, 3)], [DANGEROUS]) == -2000

    def test_capture_dominates_with_pellets_around(self, pellet_maze):
        score = evaluate(pellet_maze, (1, 2), [(1, 3)], [DANGEROUS])
        assert score <= -2000

    @pytest.mark.parametrize("d,expected", [
        (0, -2000),
        (1, -2000),
        (2, -250),
        (3, -500 / 3),
        (4, -12.5),
        (7, -50 / 7),
    ])
    def test_danger_bands(self, row, d, expected):
        assert evaluate(row, (0, 0), [(d, 0)], [DANGEROUS]) == pytest.approx(expected)

    def test_far_dangerous_ghost_is_ignored(self, row):
        assert evaluate(row, (0, 0), [(8, 0)], [DANGEROUS]) == 0

    @pytest.mark.parametrize("d,expected", [
        (0, 1000),
        (1, 400),
        (4, 100),
        (5, 20),
        (9, 100 / 9),
        (10, 0),
    ])
    def test_edible_bands(self, row, d, expected):
        assert evaluate(row, (0, 0), [(d, 0)], [EDIBLE]) == pytest.approx(expected)

    def test_respawning_ghost_is_harmless(self, row):
        assert evaluate(row, (0, 0), [(1, 0)], [RESPAWNING]) == 0

    def test_split_ghosts(self):
        dangerous, edible = split_ghosts(
            [(0, 0), (1, 1), (2, 2)], [DANGEROUS, EDIBLE, RESPAWNING])
        assert dangerous == [(0, 0)]
        assert edible == [(1, 1)]


class TestPelletTerms:
    def test_pellet_underfoot(self):
        maze = Maze.from_strings([".   "])
        # 50 for the pellet, plus 30 - 0 for standing on the nearest one
        assert evaluate(maze, (0, 0), [], []) == 80

    def test_power_pellet_alone(self):
        maze = Maze.from_strings(["o   "])
        assert evaluate(maze, (0, 0), [], []) == 180

    def test_power_pellet_under_threat(self):
        maze = Maze.from_strings(["o" + " " * 11])
        assert evaluate(maze, (0, 0), [(9, 0)], [DANGEROUS]) == 530

    def test_power_pellet_with_edible_ghost(self):
        maze = Maze.from_strings(["o" + " " * 11])
        assert evaluate(maze, (0, 0), [(1, 0)], [EDIBLE]) == pytest.approx(550)

    def test_seek_nearest_collectible(self):
        maze = Maze.from_strings(["    ."])
        assert evaluate(maze, (0, 0), [], []) == 26

    def test_no_seeking_when_danger_is_close(self):
        maze = Maze.from_strings(["    ." + " " * 7])
        # Ghost at 8 is not "farther than 8"
        assert evaluate(maze, (0, 0), [(8, 0)], [DANGEROUS]) == 0
        assert evaluate(maze, (0, 0), [(9, 0)], [DANGEROUS]) == 26
