# sudoku_game_api.py
# FastAPI service behind the browser front-end. One in-memory game per id.
# Run with: uvicorn apps.api.sudoku_game_api:app --reload
# Config: $SUDOKU_GAME_CONFIG (YAML), else config/sudoku_game.yaml.
from __future__ import annotations

import logging
import random
import time
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Literal

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, Field

from apps import status
from apps.cli.board_renderer import board_png_bytes
from apps.cli.game_timer import GameTimer
from engine.config import load_config
from engine.game import SudokuGame
from engine.grid_core import check_grid_shape, is_valid
from engine.sudoku_tools import sanity_check
from types_sudoku import GameState

logger = logging.getLogger(__name__)

config = load_config()

DifficultyName = Literal["easy", "medium", "hard"]


@dataclass
class GameSession:
    game: SudokuGame
    timer: GameTimer
    last_seen: float = field(default_factory=time.monotonic)


SESSIONS: dict[str, GameSession] = {}


def _drop_session(game_id: str, reason: str) -> None:
    sess = SESSIONS.pop(game_id, None)
    if sess is not None:
        sess.timer.stop()
        logger.info("Game %s dropped (%s)", game_id, reason)


def evict_sessions(now: float | None = None) -> None:
    """Drop games idle past session_ttl_s, then the least recently used ones until a new
    game fits under max_sessions. Dropped games have their timers stopped."""
    now = time.monotonic() if now is None else now
    for game_id, sess in list(SESSIONS.items()):
        if now - sess.last_seen > config.session_ttl_s:
            _drop_session(game_id, "expired")
    while len(SESSIONS) >= config.max_sessions:
        oldest = min(SESSIONS, key=lambda k: SESSIONS[k].last_seen)
        _drop_session(oldest, "evicted")


def close_all_sessions() -> None:
    for game_id in list(SESSIONS):
        _drop_session(game_id, "shutdown")


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_all_sessions()


app = FastAPI(title="Sudoku Game API", lifespan=lifespan)


class NewGameRequest(BaseModel):
    difficulty: DifficultyName | None = None
    seed: int | None = None


class CellRequest(BaseModel):
    row: int = Field(ge=0, le=8)
    col: int = Field(ge=0, le=8)
    value: int = Field(ge=0, le=9)


class ValidateRequest(BaseModel):
    grid: list[list[int]]
    row: int = Field(ge=0, le=8)
    col: int = Field(ge=0, le=8)
    num: int = Field(ge=1, le=9)


class SanityRequest(BaseModel):
    original: list[list[int]]
    current: list[list[int]]


def _session(game_id: str) -> GameSession:
    sess = SESSIONS.get(game_id)
    if sess is None:
        raise HTTPException(status_code=404, detail=f"Unknown game {game_id}")
    now = time.monotonic()
    if now - sess.last_seen > config.session_ttl_s:
        _drop_session(game_id, "expired")
        raise HTTPException(status_code=404, detail=f"Game {game_id} expired")
    sess.last_seen = now
    return sess


def _view(game_id: str, sess: GameSession, message: status.StatusMessage | None = None) -> dict:
    game = sess.game
    solved = game.state is GameState.SOLVED
    out = {
        "game_id": game_id,
        **game.snapshot(include_solution=solved),
        "elapsed_s": sess.timer.elapsed,
        "timer": sess.timer.display(),
        "timer_running": sess.timer.running,
    }
    if message is not None:
        out["message"] = message.to_dict()
    return out


def _check_grid(grid: list[list[int]]) -> None:
    try:
        check_grid_shape(grid)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@app.post("/games")
def api_new_game(req: NewGameRequest):
    evict_sessions()
    seed = req.seed if req.seed is not None else config.seed
    game = SudokuGame(config, rng=random.Random(seed))
    game.new_game(req.difficulty)
    sess = GameSession(game, GameTimer(interval_s=config.timer_interval_s))
    game_id = uuid.uuid4().hex
    SESSIONS[game_id] = sess
    sess.timer.start()
    logger.info("Game %s started (%s)", game_id, game.difficulty.value)
    return _view(game_id, sess, status.new_game_message(config.message_timeout_s))


@app.get("/games/{game_id}")
def api_get_game(game_id: str):
    return _view(game_id, _session(game_id))


@app.delete("/games/{game_id}")
def api_delete_game(game_id: str):
    _session(game_id)
    _drop_session(game_id, "deleted")
    return {"game_id": game_id, "deleted": True}


@app.put("/games/{game_id}/cells")
def api_set_cell(game_id: str, req: CellRequest):
    sess = _session(game_id)
    upd = sess.game.set_cell(req.row, req.col, req.value)
    if not upd.accepted:
        raise HTTPException(status_code=409, detail=f"Cell ({req.row}, {req.col}) is a given")
    return {"cell": upd._asdict(), **_view(game_id, sess)}


@app.post("/games/{game_id}/check")
def api_check(game_id: str):
    sess = _session(game_id)
    result = sess.game.check_complete()
    if result["complete"] and result["correct"]:
        sess.timer.stop()
    incorrect = sorted([list(p) for p in sess.game.incorrect_cells()]) if result["complete"] else []
    return {
        **result,
        "incorrect": incorrect,
        **_view(game_id, sess, status.check_message(result, config.message_timeout_s)),
    }


@app.post("/games/{game_id}/hint")
def api_hint(game_id: str):
    sess = _session(game_id)
    hint = sess.game.give_hint()
    return {
        "hint": hint._asdict() if hint is not None else None,
        **_view(game_id, sess, status.hint_message(hint, config.message_timeout_s)),
    }


@app.post("/games/{game_id}/clear")
def api_clear(game_id: str):
    sess = _session(game_id)
    sess.game.clear_user_inputs()
    return _view(game_id, sess, status.clear_message(config.message_timeout_s))


@app.post("/games/{game_id}/reset")
def api_reset(game_id: str):
    sess = _session(game_id)
    sess.game.reset_to_initial()
    sess.timer.restart()
    return _view(game_id, sess, status.reset_message(config.message_timeout_s))


@app.get("/games/{game_id}/board.png")
def api_board_png(game_id: str):
    game = _session(game_id).game
    png = board_png_bytes(game.working_grid, game.initial_grid, game.hints, game.conflicts(),
                          size=config.board_png_size)
    return Response(content=png, media_type="image/png")


@app.post("/validate")
def api_validate(req: ValidateRequest):
    _check_grid(req.grid)
    return {"valid": is_valid(req.grid, req.row, req.col, req.num)}


@app.post("/sanity_check")
def api_sanity(req: SanityRequest):
    _check_grid(req.original)
    _check_grid(req.current)
    return sanity_check(req.original, req.current)
