"""Core grid utilities: index math, unit iterators, cell keys, and the placement validator used by the generator and the game session."""

# grid_core.py
# Grid is a 9x9 list of lists of ints (0..9). 0 = blank.
# Positions are 0-based (row, col); human-facing keys are 1-based ('r1c1' == (0, 0)).
from __future__ import annotations

from types_sudoku import Grid, Position

SIZE = 9
BOX = 3
DIGITS = range(1, SIZE + 1)


def in_bounds(r: int, c: int) -> bool:
    return 0 <= r < SIZE and 0 <= c < SIZE


def rc_to_key(r: int, c: int) -> str:
    return f"r{r + 1}c{c + 1}"


def key_to_rc(key: str) -> Position:
    r = int(key.split("c")[0][1:])
    c = int(key.split("c")[1])
    return (r - 1, c - 1)


def index_to_rc(index: int) -> Position:
    return divmod(index, SIZE)


def empty_grid() -> Grid:
    return [[0] * SIZE for _ in range(SIZE)]


def clone_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def box_origin(r: int, c: int) -> Position:
    return (r // BOX) * BOX, (c // BOX) * BOX


def which_box(r: int, c: int) -> int:
    """Box number 0..8, left->right, top->bottom."""
    return BOX * (r // BOX) + (c // BOX)


def unit_cells_row(r: int) -> list[Position]:
    return [(r, c) for c in range(SIZE)]


def unit_cells_col(c: int) -> list[Position]:
    return [(r, c) for r in range(SIZE)]


def unit_cells_box(b: int) -> list[Position]:
    r0 = BOX * (b // BOX)
    c0 = BOX * (b % BOX)
    return [(r0 + i, c0 + j) for i in range(BOX) for j in range(BOX)]


def iter_units():
    """Yield (label, cells) for the 27 units: rows r1..r9, cols c1..c9, boxes b1..b9."""
    for r in range(SIZE):
        yield f"r{r + 1}", unit_cells_row(r)
    for c in range(SIZE):
        yield f"c{c + 1}", unit_cells_col(c)
    for b in range(SIZE):
        yield f"b{b + 1}", unit_cells_box(b)


def is_valid(grid: Grid, row: int, col: int, num: int) -> bool:
    """True unless `num` already sits in the row, the column or the 3x3 box of (row, col).

    The target cell is scanned too, so it must hold 0 (or be re-checked against its
    previous value) or the digit reports a clash with itself.
    """
    for x in range(SIZE):
        if grid[row][x] == num:
            return False
    for x in range(SIZE):
        if grid[x][col] == num:
            return False
    r0, c0 = box_origin(row, col)
    for i in range(BOX):
        for j in range(BOX):
            if grid[r0 + i][c0 + j] == num:
                return False
    return True


def is_valid_ignoring_cell(grid: Grid, row: int, col: int, num: int) -> bool:
    """Validator run with the target cell blanked; the grid is restored before returning."""
    prev = grid[row][col]
    grid[row][col] = 0
    try:
        return is_valid(grid, row, col, num)
    finally:
        grid[row][col] = prev


def count_filled(grid: Grid) -> int:
    return sum(1 for row in grid for v in row if v != 0)


def is_complete_solution(grid: Grid) -> bool:
    """Every row, column and box holds each digit 1..9 exactly once."""
    if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        return False
    full = set(DIGITS)
    for _, cells in iter_units():
        vals = [grid[r][c] for r, c in cells]
        if len(vals) != SIZE or set(vals) != full:
            return False
    return True


def check_grid_shape(grid: Grid) -> None:
    if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        raise ValueError("Grid must be 9x9.")
    for row in grid:
        for v in row:
            if not isinstance(v, int) or not 0 <= v <= SIZE:
                raise ValueError(f"Grid values must be ints in 0..9, got {v!r}.")
