# tests/test_play_cli.py
from apps.cli.play_cli import format_board, play


def run(game, *commands):
    out = []
    play(game, commands, echo=out.append)
    return out


def test_set_conflict_and_given(known_game):
    out = run(known_game, "set 1 3 4", "set 1 4 7", "set 1 1 9", "set 1 3 x")
    assert out[0] == "[ok] r1c3=4"
    assert out[1].startswith("[error] r1c4=7 clashes")
    assert out[2] == "[error] r1c1 is a given and cannot be changed"
    assert out[3].startswith("[error]")
    assert known_game.working_grid[0][2] == 4
    assert known_game.working_grid[0][0] == 5


def test_check_hint_clearall_reset(known_game, puzzle):
    out = run(known_game, "check", "hint", "clearall", "set 1 3 4", "reset")
    assert out[0] == "[info] Puzzle is not complete yet!"
    assert out[1] == "[info] Hint provided! Check the highlighted cell."
    assert out[2].startswith("[ok] r")
    assert out[3] == "[info] All user inputs cleared!"
    assert out[-1] == "[info] Game reset!"
    assert known_game.working_grid == puzzle


def test_solve_via_hints_then_check(known_game):
    out = run(known_game, *(["hint"] * 51), "hint", "check", "quit", "show")
    assert "No hints available!" in out[-2]
    assert out[-1] == "[success] Congratulations! You solved the puzzle correctly!"


def test_new_game_and_png(known_game, tmp_path):
    target = tmp_path / "board.png"
    out = run(known_game, "new easy", f"png {target}", "new expert", "bogus")
    assert out[0] == "[info] New game started! Good luck!"
    assert known_game.difficulty.value == "easy"
    assert target.exists()
    assert out[2].startswith("[error] Unknown difficulty")
    assert out[3].startswith("[error] unknown command")


def test_format_board_marks_conflicts(known_game):
    known_game.set_cell(0, 2, 5)
    lines = format_board(known_game).splitlines()
    assert lines[0] == "    1 2 3   4 5 6   7 8 9"
    assert lines[2] == "1 | 5 3 5*| . 7 . | . . . |"
    assert len(lines) == 14
