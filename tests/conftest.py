import os
import random
import sys
import pytest

# Add project root to sys.path (so tests can import netscramble.*)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(PROJECT_ROOT)

from gridutils.directions import Direction
from netscramble.board import Board
from netscramble.config import ScreenSize, Skill
from netscramble.game import NetGame


@pytest.fixture
def rng():
    """Seeded random source so every run sees the same boards."""
    return random.Random(1234)


@pytest.fixture
def make_board():
    """
    Returns a function that builds a board from a {(x, y): dirs} layout.
    The whole grid is active; cells missing from the layout stay FREE.
    """
    def _make(width, height, layout, root, wrap=False):
        board = Board(width, height)
        board.reset(width, height, wrap)
        for (x, y), dirs in layout.items():
            board.cell(x, y).generated_dirs = Direction(dirs)
        board.set_root(*root)
        return board
    return _make


@pytest.fixture
def cross_board(make_board):
    """3x3 board: four-way server in the middle, a terminal on each arm."""
    U, R, D, L = Direction.U, Direction.R, Direction.D, Direction.L
    layout = {
        (1, 1): U | R | D | L,
        (1, 0): D,
        (2, 1): L,
        (1, 2): U,
        (0, 1): R,
    }
    return make_board(3, 3, layout, (1, 1))


@pytest.fixture
def new_game():
    """Returns a function that starts a seeded game."""
    def _new(skill=Skill.NOVICE, screen=ScreenSize.MEDIUM, landscape=False, seed=7):
        game = NetGame(screen, landscape=landscape, rng=random.Random(seed))
        game.new_game(skill)
        return game
    return _new
