# types_sudoku.py
from __future__ import annotations

from enum import Enum
from typing import NamedTuple, TypedDict

Grid = list[list[int]]
"""A 9x9 Sudoku grid as rows of integers (0 = empty)."""

Position = tuple[int, int]
"""(row, col), both 0-based in [0, 8]."""


class Difficulty(str, Enum):
    """Puzzle difficulty; only decides how many cells are removed from the solution."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Difficulty | str) -> Difficulty:
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r} (expected one of: {names})") from None


class GameState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SOLVED = "solved"


class CheckResult(TypedDict):
    """Outcome of a completeness check. `correct` is only trustworthy when `complete`."""

    complete: bool
    correct: bool


class GameGrids(TypedDict):
    solution: Grid
    initial_grid: Grid
    working_grid: Grid


class CellUpdate(NamedTuple):
    """Result of writing one value into the working grid."""

    row: int
    col: int
    value: int  # value now in the cell (unchanged if not accepted)
    accepted: bool  # False when the target is a fixed (given) cell
    conflict: bool  # value clashes with its row, column or box at entry time


class Hint(NamedTuple):
    row: int
    col: int
    value: int
