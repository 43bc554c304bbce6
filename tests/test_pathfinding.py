"""Tests for pacman_ai.pathfinding."""

from pacman_ai.grid import Direction, manhattan, step
from pacman_ai.maze import Maze
from pacman_ai.pathfinding import find_path, neighbors


class TestNeighbors:
    def test_corner(self, open_maze):
        assert neighbors(open_maze, (0, 0)) == [(1, 0), (0, 1)]

    def test_tunnel_edge_comes_last(self, tunnel_maze):
        assert neighbors(tunnel_maze, (0, 2)) == [(1, 2), (18, 2)]
        assert neighbors(tunnel_maze, (18, 2)) == [(17, 2), (0, 2)]

    def test_no_wrap_off_tunnel_row(self, tunnel_maze):
        assert (18, 1) not in neighbors(tunnel_maze, (1, 1))


class TestFindPath:
    def test_first_step(self, open_maze):
        assert find_path(open_maze, (0, 0), (2, 2)).direction == Direction.RIGHT

    def test_first_step_gets_closer(self, open_maze):
        for start in [(0, 0), (4, 0), (0, 4), (4, 4), (2, 0)]:
            move = find_path(open_maze, start, (2, 3)).direction
            assert manhattan(step(start, move), (2, 3)) < manhattan(start, (2, 3))

    def test_start_is_goal(self, open_maze):
        result = find_path(open_maze, (2, 2), (2, 2))
        assert result.direction == Direction.NONE
        assert result.nodes == 1

    def test_walls_force_a_detour(self):
        maze = Maze.from_strings([
            "   ",
            " # ",
            "   ",
        ])
        assert find_path(maze, (1, 2), (1, 0)).direction in (Direction.LEFT, Direction.RIGHT)

    def test_unreachable_goal_exhausts_component(self):
        maze = Maze.from_strings(["  #  "] * 5)
        result = find_path(maze, (0, 0), (4, 4))
        assert result.direction == Direction.NONE
        assert result.nodes == 10

    def test_expansion_cap(self):
        rows = [" " * 30] * 29 + [" " * 29 + "#"]
        maze = Maze.from_strings(rows)
        result = find_path(maze, (0, 0), (29, 29))
        assert result == (Direction.NONE, 500)

    def test_custom_cap(self, open_maze):
        assert find_path(open_maze, (0, 0), (4, 4), max_nodes=3) == (Direction.NONE, 3)

    def test_tunnel_is_shorter(self, tunnel_maze):
        assert find_path(tunnel_maze, (0, 2), (17, 2)).direction == Direction.LEFT
        assert find_path(tunnel_maze, (18, 2), (1, 2)).direction == Direction.RIGHT

    def test_first_step_is_a_valid_move(self):
        maze = Maze.classic()
        for goal in [(1, 1), (17, 20), (0, 10), (8, 14)]:
            result = find_path(maze, (9, 16), goal)
            assert result.direction != Direction.NONE
            assert result.nodes <= 500

    def test_step_cost_avoids_expensive_cells(self, open_maze):
        expensive = {(1, 2), (2, 2), (3, 2)}

        def cost(cell):
            return 100 if cell in expensive else 0

        assert find_path(open_maze, (0, 2), (4, 2)).direction == Direction.RIGHT
        detour = find_path(open_maze, (0, 2), (4, 2), step_cost=cost).direction
        assert detour in (Direction.UP, Direction.DOWN)
