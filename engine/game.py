"""Single-player game session: owns the solution, the initial puzzle and the working grid, and exposes the moves a front-end needs (enter values, check, hint, clear, reset)."""

# game.py
from __future__ import annotations

import logging
import random

from types_sudoku import CellUpdate, CheckResult, Difficulty, GameGrids, GameState, Grid, Hint, Position

from .config import GameConfig
from .generator import derive_puzzle, generate_complete_solution
from .grid_core import SIZE, check_grid_shape, clone_grid, count_filled, in_bounds, is_valid, is_valid_ignoring_cell
from .sudoku_tools import conflict_positions

logger = logging.getLogger(__name__)


class SudokuGame:
    """One game at a time; `new_game` replaces all three grids.

    Caller contract: rows/cols in 0..8 and values in 0..9, otherwise ValueError is raised
    before anything is touched. Writes to given cells are ignored (reported with
    accepted=False). Not thread-safe; one caller drives a session.
    """

    def __init__(self, config: GameConfig | None = None, rng: random.Random | None = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.difficulty = Difficulty.parse(self.config.default_difficulty)
        self.solution: Grid | None = None
        self.initial_grid: Grid | None = None
        self.working_grid: Grid | None = None
        self.hints: set[Position] = set()

    # ----------------------------------------------------------------- lifecycle

    def new_game(self, difficulty: Difficulty | str | None = None) -> GameGrids:
        if difficulty is not None:
            self.difficulty = Difficulty.parse(difficulty)
        solution = generate_complete_solution(self.rng, max_steps=self.config.max_fill_steps)
        working, initial = derive_puzzle(
            solution, self.difficulty, self.rng, counts=self.config.removal_counts
        )
        self.solution, self.initial_grid, self.working_grid = solution, initial, working
        self.hints = set()
        logger.info("New %s game: %d givens", self.difficulty.value, count_filled(initial))
        return self.grids()

    def load(self, solution: Grid, initial_grid: Grid, difficulty: Difficulty | str | None = None) -> GameGrids:
        """Start a game from known grids (replays, tests)."""
        check_grid_shape(solution)
        check_grid_shape(initial_grid)
        for r in range(SIZE):
            for c in range(SIZE):
                if initial_grid[r][c] not in (0, solution[r][c]):
                    raise ValueError(f"Given at ({r}, {c}) does not match the solution")
        if difficulty is not None:
            self.difficulty = Difficulty.parse(difficulty)
        self.solution = clone_grid(solution)
        self.initial_grid = clone_grid(initial_grid)
        self.working_grid = clone_grid(initial_grid)
        self.hints = set()
        return self.grids()

    @property
    def started(self) -> bool:
        return self.working_grid is not None

    @property
    def state(self) -> GameState:
        if not self.started:
            return GameState.NOT_STARTED
        result = self.check_complete()
        if result["complete"] and result["correct"]:
            return GameState.SOLVED
        return GameState.IN_PROGRESS

    def grids(self) -> GameGrids:
        self._require_started()
        return {
            "solution": clone_grid(self.solution),
            "initial_grid": clone_grid(self.initial_grid),
            "working_grid": clone_grid(self.working_grid),
        }

    # -------------------------------------------------------------------- moves

    def is_fixed(self, row: int, col: int) -> bool:
        self._require_started()
        self._check_position(row, col)
        return self.initial_grid[row][col] != 0

    def fixed_cells(self) -> set[Position]:
        self._require_started()
        return {(r, c) for r in range(SIZE) for c in range(SIZE) if self.initial_grid[r][c] != 0}

    def set_cell(self, row: int, col: int, value: int) -> CellUpdate:
        self._require_started()
        self._check_position(row, col)
        if not isinstance(value, int) or not 0 <= value <= SIZE:
            raise ValueError(f"Cell value must be an int in 0..9, got {value!r}")
        if self.initial_grid[row][col] != 0:
            logger.debug("Ignored write to given cell (%d, %d)", row, col)
            return CellUpdate(row, col, self.working_grid[row][col], False, False)
        conflict = value != 0 and not is_valid_ignoring_cell(self.working_grid, row, col, value)
        self.working_grid[row][col] = value
        self.hints.discard((row, col))
        return CellUpdate(row, col, value, True, conflict)

    def is_valid_placement(self, row: int, col: int, num: int) -> bool:
        self._require_started()
        self._check_position(row, col)
        return is_valid(self.working_grid, row, col, num)

    def conflicts(self) -> set[Position]:
        """Non-given cells whose current digit repeats within a row, column or box."""
        self._require_started()
        return conflict_positions(self.working_grid, self.initial_grid)

    def check_complete(self) -> CheckResult:
        self._require_started()
        complete = all(v != 0 for row in self.working_grid for v in row)
        correct = self.working_grid == self.solution
        return {"complete": complete, "correct": correct}

    def incorrect_cells(self) -> set[Position]:
        """Filled non-given cells that differ from the solution."""
        self._require_started()
        return {
            (r, c)
            for r in range(SIZE)
            for c in range(SIZE)
            if self.initial_grid[r][c] == 0
            and self.working_grid[r][c] != 0
            and self.working_grid[r][c] != self.solution[r][c]
        }

    def get_hint_cell(self) -> Position | None:
        self._require_started()
        candidates = [
            (r, c)
            for r in range(SIZE)
            for c in range(SIZE)
            if self.initial_grid[r][c] == 0 and self.working_grid[r][c] != self.solution[r][c]
        ]
        if not candidates:
            return None
        return candidates[self.rng.randrange(len(candidates))]

    def give_hint(self) -> Hint | None:
        pos = self.get_hint_cell()
        if pos is None:
            return None
        r, c = pos
        self.working_grid[r][c] = self.solution[r][c]
        self.hints.add(pos)
        logger.debug("Hint at (%d, %d) = %d", r, c, self.solution[r][c])
        return Hint(r, c, self.solution[r][c])

    def clear_user_inputs(self) -> None:
        self._require_started()
        for r in range(SIZE):
            for c in range(SIZE):
                if self.initial_grid[r][c] == 0:
                    self.working_grid[r][c] = 0
        self.hints = set()

    def reset_to_initial(self) -> None:
        self._require_started()
        self.working_grid = clone_grid(self.initial_grid)
        self.hints = set()
        logger.info("Game reset to its initial puzzle")

    def snapshot(self, include_solution: bool = True) -> dict:
        """JSON-friendly view for front-ends."""
        grids = self.grids()
        if not include_solution:
            grids.pop("solution")
        return {
            "difficulty": self.difficulty.value,
            "state": self.state.value,
            **grids,
            "hints": sorted([list(p) for p in self.hints]),
            "conflicts": sorted([list(p) for p in self.conflicts()]),
        }

    # ------------------------------------------------------------------ helpers

    def _require_started(self) -> None:
        if self.working_grid is None:
            raise RuntimeError("No game in progress; call new_game() first")

    @staticmethod
    def _check_position(row: int, col: int) -> None:
        if not (isinstance(row, int) and isinstance(col, int) and in_bounds(row, col)):
            raise ValueError(f"Position out of range: ({row!r}, {col!r})")
