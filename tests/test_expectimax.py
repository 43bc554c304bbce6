"""Tests for pacman_ai.expectimax."""

import pytest

from pacman_ai.expectimax import best_move, expectimax, predict_ghosts
from pacman_ai.ghost_model import GhostModel
from pacman_ai.grid import Direction, ThreatState
from pacman_ai.maze import Maze
from pacman_ai.minimax import NodeCounter

DANGEROUS = ThreatState(is_edible=False, is_dangerous=True)


class TestPredictGhosts:
    def test_lead_and_followers(self, open_maze):
        model = GhostModel()
        moved = predict_ghosts(open_maze, model, (4, 4), [(0, 0), (2, 2)], Direction.RIGHT)
        # Follower has no data, so its most likely move is UP
        assert moved == [(1, 0), (2, 1)]

    def test_blocked_follower_stays(self, corridor):
        model = GhostModel()
        assert predict_ghosts(corridor, model, (0, 0), [(4, 0), (2, 0)], Direction.LEFT) == [(3, 0), (2, 0)]


class TestExpectimax:
    def test_uniform_model_averages(self, corridor):
        move, score, _ = best_move(corridor, GhostModel(), (2, 0), [(4, 0)], [DANGEROUS], depth=2)
        assert move == Direction.LEFT
        assert score == pytest.approx(-187.5)

    def test_unlikely_branches_are_dropped(self, corridor):
        model = GhostModel()
        for _ in range(200):
            model.record_move(0, (4, 0), (1, 0), Direction.LEFT)

        value = expectimax(corridor, model, (1, 0), [(4, 0)], [DANGEROUS], 1, False, NodeCounter())
        # Only LEFT survives; its weight is not renormalised to 1
        assert value == pytest.approx(201 / 204 * -250)

    def test_no_ghosts(self):
        maze = Maze.from_strings([".    "])
        value = expectimax(maze, GhostModel(), (2, 0), [], [], 1, False, NodeCounter())
        assert value == 28

    def test_boxed_in(self, boxed_maze):
        assert best_move(boxed_maze, GhostModel(), (1, 1), [], [], depth=2) == (Direction.NONE, 0, 0)

    def test_learned_chaser_is_avoided(self):
        maze = Maze.from_strings(["       "])
        model = GhostModel()
        # This ghost always closes in from the right
        for _ in range(50):
            model.record_move(0, (5, 0), (2, 0), Direction.LEFT)
            model.record_move(0, (5, 0), (3, 0), Direction.LEFT)
        move, _, nodes = best_move(maze, model, (3, 0), [(5, 0)], [DANGEROUS], depth=2)
        assert move == Direction.LEFT
        assert nodes > 0
