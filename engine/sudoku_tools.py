from __future__ import annotations

"""Board consistency reporting: duplicate digits per unit and overwritten givens. Used to flag provisional errors in the working grid and exposed through the API."""

# sudoku_tools.py
from types_sudoku import Grid, Position

from .grid_core import SIZE, iter_units, rc_to_key


def _duplicates_in_unit(vals):
    seen = set()
    dups = set()
    for v in vals:
        if v == 0:
            continue
        if v in seen:
            dups.add(v)
        seen.add(v)
    return dups


def sanity_check(original: Grid, current: Grid) -> dict:
    """Report givens that were overwritten and digits repeated inside a row, column or box.

    Returns {'ok': bool, 'issues': [...]} with 1-based 'r#c#' cell keys and unit labels.
    """
    issues = []
    for r in range(SIZE):
        for c in range(SIZE):
            if original[r][c] != 0 and current[r][c] not in (0, original[r][c]):
                issues.append({"type": "given_overwritten", "cell": rc_to_key(r, c),
                               "given": original[r][c], "found": current[r][c]})
    for unit, cells in iter_units():
        vals = [current[r][c] for r, c in cells]
        dups = _duplicates_in_unit(vals)
        if dups:
            bad = [rc_to_key(r, c) for r, c in cells if current[r][c] in dups]
            issues.append({"type": "duplicate", "unit": unit, "digits": sorted(dups), "cells": bad})
    return {"ok": len(issues) == 0, "issues": issues}


def conflict_positions(current: Grid, fixed: Grid | None = None) -> set[Position]:
    """Positions holding a digit that is repeated in one of its units.

    With `fixed`, given cells are left out: they are never the ones in error.
    """
    out: set[Position] = set()
    for _, cells in iter_units():
        dups = _duplicates_in_unit([current[r][c] for r, c in cells])
        if not dups:
            continue
        for r, c in cells:
            if current[r][c] in dups and (fixed is None or fixed[r][c] == 0):
                out.add((r, c))
    return out
