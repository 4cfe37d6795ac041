# tests/conftest.py
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "apps", "engine" and "types_sudoku" import in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from engine.config import GameConfig  # noqa: E402
from engine.game import SudokuGame  # noqa: E402

# A valid, complete grid (standard textbook solution)
KNOWN_SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

KNOWN_PUZZLE = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def solution():
    return [row[:] for row in KNOWN_SOLUTION]


@pytest.fixture
def puzzle():
    return [row[:] for row in KNOWN_PUZZLE]


@pytest.fixture
def known_game(rng):
    game = SudokuGame(GameConfig(), rng=rng)
    game.load(KNOWN_SOLUTION, KNOWN_PUZZLE, "medium")
    return game
