# tests/test_sudoku_tools.py
from engine.sudoku_tools import conflict_positions, sanity_check


def test_clean_board_is_ok(puzzle, solution):
    assert sanity_check(puzzle, puzzle) == {"ok": True, "issues": []}
    assert sanity_check(puzzle, solution)["ok"]


def test_duplicates_and_overwritten_givens(puzzle):
    current = [row[:] for row in puzzle]
    current[0][2] = 5  # duplicate of r1c1 in row 1 and box 1
    current[0][1] = 4  # given 3 overwritten
    report = sanity_check(puzzle, current)
    assert not report["ok"]
    kinds = {(i["type"], i.get("unit", i.get("cell"))) for i in report["issues"]}
    assert ("given_overwritten", "r1c2") in kinds
    assert ("duplicate", "r1") in kinds
    assert ("duplicate", "b1") in kinds
    row_issue = next(i for i in report["issues"] if i.get("unit") == "r1")
    assert row_issue["digits"] == [5]
    assert row_issue["cells"] == ["r1c1", "r1c3"]


def test_conflict_positions_skip_givens(puzzle):
    current = [row[:] for row in puzzle]
    current[0][2] = 5
    assert conflict_positions(current) == {(0, 0), (0, 2)}
    assert conflict_positions(current, puzzle) == {(0, 2)}
