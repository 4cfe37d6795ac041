"""Transient status messages shown by the play surfaces (text, severity, auto-dismiss delay)."""

# status.py
from __future__ import annotations

from dataclasses import asdict, dataclass

from types_sudoku import CheckResult, Hint

INFO = "info"
SUCCESS = "success"
ERROR = "error"

DEFAULT_TIMEOUT_S = 3.0


@dataclass(frozen=True)
class StatusMessage:
    text: str
    severity: str = INFO
    dismiss_after_s: float = DEFAULT_TIMEOUT_S

    def to_dict(self) -> dict:
        return asdict(self)


def new_game_message(timeout_s: float = DEFAULT_TIMEOUT_S) -> StatusMessage:
    return StatusMessage("New game started! Good luck!", INFO, timeout_s)


def check_message(result: CheckResult, timeout_s: float = DEFAULT_TIMEOUT_S) -> StatusMessage:
    if not result["complete"]:
        return StatusMessage("Puzzle is not complete yet!", INFO, timeout_s)
    if result["correct"]:
        return StatusMessage("Congratulations! You solved the puzzle correctly!", SUCCESS, timeout_s)
    return StatusMessage("Some cells are incorrect. Keep trying!", ERROR, timeout_s)


def hint_message(hint: Hint | None, timeout_s: float = DEFAULT_TIMEOUT_S) -> StatusMessage:
    if hint is None:
        return StatusMessage(
            "No hints available! Puzzle is complete or all filled cells are correct.", INFO, timeout_s
        )
    return StatusMessage("Hint provided! Check the highlighted cell.", INFO, timeout_s)


def clear_message(timeout_s: float = DEFAULT_TIMEOUT_S) -> StatusMessage:
    return StatusMessage("All user inputs cleared!", INFO, timeout_s)


def reset_message(timeout_s: float = DEFAULT_TIMEOUT_S) -> StatusMessage:
    return StatusMessage("Game reset!", INFO, timeout_s)
