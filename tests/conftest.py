import pytest

from pacman_ai.maze import Maze


@pytest.fixture
def open_maze() -> Maze:
    return Maze.from_strings(["     "] * 5)


@pytest.fixture
def pellet_maze() -> Maze:
    """5x5 open floor with one pellet two cells east of (1, 2)."""
    rows = ["     "] * 5
    rows[2] = "   . "
    return Maze.from_strings(rows)


@pytest.fixture
def corridor() -> Maze:
    """Single-row corridor of bare floor."""
    return Maze.from_strings(["     "])


@pytest.fixture
def tunnel_maze() -> Maze:
    return Maze.from_strings([
        "###################",
        "#                 #",
        "                   ",
        "#                 #",
        "###################",
    ], tunnel_row=2)


@pytest.fixture
def boxed_maze() -> Maze:
    return Maze.from_strings(["###", "# #", "###"])
