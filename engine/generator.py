"""Puzzle generation: randomized backtracking fill of a full solution grid, and puzzle derivation by removing a difficulty-dependent number of cells."""

# generator.py
# - fill_grid: row-major recursive backtracking, candidates reshuffled at every cell visit
# - generate_complete_solution: fill of an empty grid
# - derive_puzzle: Fisher-Yates shuffle of the 81 positions, blank the first N
# Derived puzzles are NOT checked for a unique solution.
from __future__ import annotations

import logging
import random

from types_sudoku import Difficulty, Grid

from .grid_core import SIZE, check_grid_shape, clone_grid, empty_grid, index_to_rc, is_valid
from .sudoku_tools import conflict_positions

logger = logging.getLogger(__name__)

REMOVAL_COUNTS: dict[Difficulty, int] = {
    Difficulty.EASY: 35,
    Difficulty.MEDIUM: 45,
    Difficulty.HARD: 55,
}
MAX_FILL_STEPS = 2_000_000


class GenerationError(RuntimeError):
    """The backtracking fill failed or ran past its step bound."""


def removal_count(difficulty: Difficulty | str, counts: dict | None = None) -> int:
    d = Difficulty.parse(difficulty)
    table = REMOVAL_COUNTS if counts is None else counts
    n = table.get(d, table.get(d.value))
    if n is None:
        raise ValueError(f"No removal count configured for difficulty {d.value!r}")
    if not 0 <= n <= SIZE * SIZE:
        raise ValueError(f"Removal count must be within 0..81, got {n}")
    return n


def _shuffled_digits(rng) -> list[int]:
    nums = list(range(1, SIZE + 1))
    rng.shuffle(nums)
    return nums


def fill_grid(grid: Grid, rng=None, max_steps: int = MAX_FILL_STEPS, strict: bool = True) -> bool:
    """Complete `grid` in place. Non-zero cells are kept as givens.

    Returns True on success. On failure the grid is left as it was passed in and
    GenerationError is raised (strict) or False returned.
    """
    check_grid_shape(grid)
    clashes = conflict_positions(grid)
    if clashes:
        logger.debug("fill_grid: givens clash at %s", sorted(clashes))
        if strict:
            raise GenerationError(f"Givens clash at {sorted(clashes)}")
        return False
    rng = rng or random
    steps = 0

    def fill(row: int, col: int) -> bool:
        nonlocal steps
        if row == SIZE:
            return True
        if col == SIZE:
            return fill(row + 1, 0)
        if grid[row][col] != 0:
            return fill(row, col + 1)
        for num in _shuffled_digits(rng):
            if is_valid(grid, row, col, num):
                steps += 1
                if steps > max_steps:
                    raise GenerationError(f"Fill exceeded {max_steps} placements")
                grid[row][col] = num
                if fill(row, col + 1):
                    return True
                grid[row][col] = 0
        return False

    snapshot = clone_grid(grid)
    try:
        ok = fill(0, 0)
    except GenerationError:
        grid[:] = snapshot
        raise
    logger.debug("fill_grid: ok=%s after %d placements", ok, steps)
    if not ok:
        grid[:] = snapshot
        if strict:
            raise GenerationError("Grid cannot be completed from its givens")
    return ok


def generate_complete_solution(rng=None, max_steps: int = MAX_FILL_STEPS) -> Grid:
    grid = empty_grid()
    fill_grid(grid, rng=rng, max_steps=max_steps, strict=True)
    return grid


def shuffled_positions(rng=None) -> list[int]:
    """Fisher-Yates permutation of the linear positions 0..80."""
    rng = rng or random
    positions = list(range(SIZE * SIZE))
    for i in range(len(positions) - 1, 0, -1):
        j = rng.randint(0, i)
        positions[i], positions[j] = positions[j], positions[i]
    return positions


def derive_puzzle(
    solution: Grid,
    difficulty: Difficulty | str = Difficulty.MEDIUM,
    rng=None,
    counts: dict | None = None,
) -> tuple[Grid, Grid]:
    """Return (puzzle_grid, initial_grid): two independent copies of `solution` with the
    same `removal_count(difficulty)` cells blanked."""
    cells_to_remove = removal_count(difficulty, counts)
    puzzle = clone_grid(solution)
    initial = clone_grid(solution)
    for pos in shuffled_positions(rng)[:cells_to_remove]:
        r, c = index_to_rc(pos)
        puzzle[r][c] = 0
        initial[r][c] = 0
    return puzzle, initial
