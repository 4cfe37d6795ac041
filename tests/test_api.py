# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from apps.api import sudoku_game_api
from apps.api.sudoku_game_api import SESSIONS, app
from engine.config import GameConfig
from engine.game import SudokuGame


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    assert SESSIONS == {}


@pytest.fixture
def known_id(client, known_game):
    r = client.post("/games", json={"difficulty": "easy", "seed": 1})
    game_id = r.json()["game_id"]
    SESSIONS[game_id].game = known_game
    return game_id


def test_new_game_hides_solution(client):
    r = client.post("/games", json={"difficulty": "easy", "seed": 42})
    assert r.status_code == 200
    body = r.json()
    assert "solution" not in body
    assert sum(1 for row in body["initial_grid"] for v in row if v) == 46
    assert body["state"] == "in_progress"
    assert body["message"]["text"] == "New game started! Good luck!"
    assert body["timer"].startswith("00:")
    assert isinstance(SESSIONS[body["game_id"]].game, SudokuGame)


def test_bad_difficulty_is_422(client):
    assert client.post("/games", json={"difficulty": "expert"}).status_code == 422


def test_unknown_game_is_404(client):
    assert client.get("/games/nope").status_code == 404


def test_set_cell_flow(client, known_id):
    r = client.put(f"/games/{known_id}/cells", json={"row": 0, "col": 2, "value": 4})
    assert r.status_code == 200
    assert r.json()["cell"] == {"row": 0, "col": 2, "value": 4, "accepted": True, "conflict": False}
    assert r.json()["working_grid"][0][2] == 4
    assert client.put(f"/games/{known_id}/cells", json={"row": 0, "col": 0, "value": 4}).status_code == 409
    assert client.put(f"/games/{known_id}/cells", json={"row": 9, "col": 0, "value": 4}).status_code == 422
    r = client.put(f"/games/{known_id}/cells", json={"row": 0, "col": 3, "value": 7})
    assert r.json()["cell"]["conflict"] is True
    assert [0, 3] in r.json()["conflicts"]


def test_hint_check_and_solve(client, known_id):
    r = client.post(f"/games/{known_id}/check")
    assert r.json()["complete"] is False
    assert r.json()["message"]["severity"] == "info"
    for _ in range(51):
        assert client.post(f"/games/{known_id}/hint").json()["hint"] is not None
    r = client.post(f"/games/{known_id}/hint")
    assert r.json()["hint"] is None
    r = client.post(f"/games/{known_id}/check")
    body = r.json()
    assert body["complete"] and body["correct"]
    assert body["state"] == "solved"
    assert body["message"]["severity"] == "success"
    assert "solution" in body
    assert body["timer_running"] is False


def test_clear_reset_and_delete(client, known_id, puzzle):
    client.put(f"/games/{known_id}/cells", json={"row": 0, "col": 2, "value": 4})
    r = client.post(f"/games/{known_id}/clear")
    assert r.json()["working_grid"] == puzzle
    client.put(f"/games/{known_id}/cells", json={"row": 0, "col": 2, "value": 4})
    r = client.post(f"/games/{known_id}/reset")
    assert r.json()["working_grid"] == puzzle
    assert r.json()["message"]["text"] == "Game reset!"
    assert r.json()["timer_running"] is True
    assert client.delete(f"/games/{known_id}").json()["deleted"] is True
    assert client.get(f"/games/{known_id}").status_code == 404


def test_board_png(client, known_id):
    r = client.get(f"/games/{known_id}/board.png")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content[:4] == b"\x89PNG"


def test_validate_and_sanity(client, puzzle):
    r = client.post("/validate", json={"grid": puzzle, "row": 0, "col": 2, "num": 4})
    assert r.json() == {"valid": True}
    r = client.post("/validate", json={"grid": puzzle, "row": 0, "col": 2, "num": 7})
    assert r.json() == {"valid": False}
    assert client.post("/validate", json={"grid": [[0]], "row": 0, "col": 0, "num": 1}).status_code == 422
    r = client.post("/sanity_check", json={"original": puzzle, "current": puzzle})
    assert r.json()["ok"] is True


def test_module_config_is_loaded():
    assert sudoku_game_api.config.removal_counts["easy"] == 35


def test_session_cap_evicts_least_recent_and_stops_timers(client, monkeypatch):
    monkeypatch.setattr(sudoku_game_api, "config", GameConfig(max_sessions=3))
    ids = [client.post("/games", json={"seed": i}).json()["game_id"] for i in range(3)]
    client.get(f"/games/{ids[0]}")  # touch: ids[1] is now the least recently used
    evicted = SESSIONS[ids[1]]
    for i in range(3, 20):
        client.post("/games", json={"seed": i})
    assert len(SESSIONS) == 3
    assert not evicted.timer.running
    assert client.get(f"/games/{ids[1]}").status_code == 404
    running = [s for s in SESSIONS.values() if s.timer.running]
    assert len(running) == 3
    assert ids[0] not in SESSIONS


def test_idle_sessions_expire(client, monkeypatch):
    monkeypatch.setattr(sudoku_game_api, "config", GameConfig(session_ttl_s=60))
    stale = client.post("/games", json={"seed": 1}).json()["game_id"]
    idle = client.post("/games", json={"seed": 2}).json()["game_id"]
    SESSIONS[stale].last_seen -= 3600
    SESSIONS[idle].last_seen -= 3600
    stale_sess = SESSIONS[stale]
    assert client.get(f"/games/{stale}").status_code == 404
    assert not stale_sess.timer.running
    idle_sess = SESSIONS[idle]
    fresh = client.post("/games", json={"seed": 3}).json()["game_id"]
    assert set(SESSIONS) == {fresh}
    assert not idle_sess.timer.running


def test_shutdown_stops_every_timer():
    with TestClient(app) as c:
        c.post("/games", json={"seed": 5})
        sessions = list(SESSIONS.values())
    assert SESSIONS == {}
    assert not any(s.timer.running for s in sessions)
