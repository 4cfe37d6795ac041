"""Terminal front-end: play a generated Sudoku with typed commands, a running timer and optional PNG snapshots of the board."""

# play_cli.py
# Usage:
#   python -m apps.cli.play_cli --difficulty easy --seed 123
#   python -m apps.cli.play_cli --config config/sudoku_game.yaml --png demo_export/board.png
#
# Commands (rows/cols are 1-based):
#   set R C V     enter V (1-9) at row R, column C      clear R C   empty a cell
#   check         check the board                      hint        fill one cell from the solution
#   clearall      remove every user entry              reset       back to the initial puzzle
#   new [LEVEL]   new game (easy|medium|hard)          show        print the board
#   png PATH      save a PNG of the board              quit        leave
from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Callable, Iterable

from engine.config import load_config
from engine.game import SudokuGame
from types_sudoku import Difficulty, GameState

from apps import status
from .board_renderer import save_board_png
from .game_timer import GameTimer, format_elapsed

HELP = """commands: set R C V | clear R C | check | hint | clearall | reset | new [easy|medium|hard] | show | png PATH | quit"""


def format_board(game: SudokuGame) -> str:
    """ASCII board; empty cells are '.' and a trailing '*' marks a conflicting entry."""
    conflicts = game.conflicts()
    divider = "  +-------+-------+-------+"
    lines = ["    1 2 3   4 5 6   7 8 9"]
    for r in range(9):
        if r % 3 == 0:
            lines.append(divider)
        groups = []
        for c0 in (0, 3, 6):
            cells = []
            for c in range(c0, c0 + 3):
                v = game.working_grid[r][c]
                cells.append((str(v) if v else ".") + ("*" if (r, c) in conflicts else " "))
            groups.append(" " + "".join(cells))
        lines.append(f"{r + 1} |" + "|".join(groups) + "|")
    lines.append(divider)
    return "\n".join(lines)


def _say(echo: Callable[[str], None], msg: status.StatusMessage) -> None:
    echo(f"[{msg.severity}] {msg.text}")


def _parse_ints(tokens, n):
    if len(tokens) != n:
        raise ValueError(f"expected {n} numbers")
    return [int(t) for t in tokens]


def play(
    game: SudokuGame,
    commands: Iterable[str],
    timer: GameTimer | None = None,
    echo: Callable[[str], None] = print,
    png_size: int = 900,
) -> SudokuGame:
    """Drive a started game from command lines; returns the game when input ends or on quit."""
    timeout = game.config.message_timeout_s
    for raw in commands:
        tokens = raw.strip().split()
        if not tokens:
            continue
        cmd, args = tokens[0].lower(), tokens[1:]
        try:
            if cmd in ("quit", "exit", "q"):
                break
            elif cmd == "help":
                echo(HELP)
            elif cmd == "show":
                elapsed = timer.display() if timer else format_elapsed(0)
                echo(f"[{game.difficulty.value}] {elapsed}")
                echo(format_board(game))
            elif cmd == "set":
                r, c, v = _parse_ints(args, 3)
                if not 1 <= v <= 9:
                    raise ValueError("value must be 1..9")
                upd = game.set_cell(r - 1, c - 1, v)
                if not upd.accepted:
                    echo(f"[error] r{r}c{c} is a given and cannot be changed")
                elif upd.conflict:
                    echo(f"[error] r{r}c{c}={v} clashes with its row, column or box")
                else:
                    echo(f"[ok] r{r}c{c}={v}")
            elif cmd == "clear":
                r, c = _parse_ints(args, 2)
                upd = game.set_cell(r - 1, c - 1, 0)
                if not upd.accepted:
                    echo(f"[error] r{r}c{c} is a given and cannot be changed")
                else:
                    echo(f"[ok] r{r}c{c} cleared")
            elif cmd == "check":
                result = game.check_complete()
                if result["complete"] and result["correct"] and timer:
                    timer.stop()
                _say(echo, status.check_message(result, timeout))
                if result["complete"] and not result["correct"]:
                    wrong = ", ".join(f"r{r + 1}c{c + 1}" for r, c in sorted(game.incorrect_cells()))
                    echo(f"[error] incorrect: {wrong}")
            elif cmd == "hint":
                hint = game.give_hint()
                _say(echo, status.hint_message(hint, timeout))
                if hint is not None:
                    echo(f"[ok] r{hint.row + 1}c{hint.col + 1}={hint.value}")
            elif cmd == "clearall":
                game.clear_user_inputs()
                _say(echo, status.clear_message(timeout))
            elif cmd == "reset":
                game.reset_to_initial()
                if timer:
                    timer.restart()
                _say(echo, status.reset_message(timeout))
            elif cmd == "new":
                level = Difficulty.parse(args[0]) if args else None
                game.new_game(level)
                if timer:
                    timer.restart()
                _say(echo, status.new_game_message(timeout))
            elif cmd == "png":
                if len(args) != 1:
                    raise ValueError("usage: png PATH")
                out = save_board_png(args[0], game.working_grid, game.initial_grid,
                                     game.hints, game.conflicts(), size=png_size)
                echo(f"[ok] Board image written to {out}")
            else:
                echo(f"[error] unknown command {cmd!r}; {HELP}")
        except ValueError as e:
            echo(f"[error] {e}")
    return game


def main(args=None) -> None:
    if args is None:
        ap = argparse.ArgumentParser(description="Play Sudoku in the terminal")
        ap.add_argument("--difficulty", type=str, default=None, choices=[d.value for d in Difficulty])
        ap.add_argument("--seed", type=int, default=None)
        ap.add_argument("--config", type=str, default=None, help="Path to a YAML game config")
        ap.add_argument("--png", type=str, default=None, help="Write the final board PNG here")
        ap.add_argument("--verbose", action="store_true")
        args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config, seed=args.seed)
    game = SudokuGame(cfg, rng=random.Random(cfg.seed))
    game.new_game(args.difficulty)
    timer = GameTimer(interval_s=cfg.timer_interval_s)
    timer.start()
    _say(print, status.new_game_message(cfg.message_timeout_s))
    print(HELP)
    print(format_board(game))
    try:
        play(game, sys.stdin, timer=timer, png_size=cfg.board_png_size)
    finally:
        timer.stop()

    if args.png:
        out = save_board_png(args.png, game.working_grid, game.initial_grid,
                             game.hints, game.conflicts(), size=cfg.board_png_size)
        print(f"[ok] Board image written to {out}")
    done = "solved" if game.state is GameState.SOLVED else "unsolved"
    print(f"[ok] Finished ({done}) in {timer.display()}")


if __name__ == "__main__":
    main()
