from __future__ import annotations

from types_sudoku import Grid, Position

"""Rendering utilities to draw the current board (givens, user entries, hints, conflicts) onto a square PNG. Used by the CLI `png` command and the API board endpoint."""


# board_renderer.py
# Render a 9x9 working grid as a board image, default 900x900 (100 px per cell).
import io
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

DEFAULT_SIZE = 900

FIXED_INK = (0, 0, 0, 255)
USER_INK = (30, 80, 200, 255)
HINT_INK = (0, 128, 0, 255)
ERROR_INK = (200, 0, 0, 255)
ERROR_FILL = (255, 200, 200, 255)
HINT_FILL = (200, 240, 200, 255)
FIXED_FILL = (235, 235, 235, 255)


def load_font(size):
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default(size=size)


def cell_rect(r, c, cell, pad=2):
    # r, c are 0-based here
    x0 = c * cell + pad
    y0 = r * cell + pad
    x1 = (c + 1) * cell - pad
    y1 = (r + 1) * cell - pad
    return (x0, y0, x1, y1)


def render_board(
    working: Grid,
    initial: Grid,
    hints: set[Position] | None = None,
    conflicts: set[Position] | None = None,
    size: int = DEFAULT_SIZE,
) -> Image.Image:
    """Draw the board. Givens are shaded grey in black ink, user entries blue, hints green,
    conflicting entries red on a pink cell."""
    hints = hints or set()
    conflicts = conflicts or set()
    cell = size // 9
    side = cell * 9
    im = Image.new("RGBA", (side, side), (255, 255, 255, 255))
    d = ImageDraw.Draw(im)
    font = load_font(int(cell * 0.6))

    for r in range(9):
        for c in range(9):
            fill = None
            if initial[r][c] != 0:
                fill = FIXED_FILL
            elif (r, c) in conflicts:
                fill = ERROR_FILL
            elif (r, c) in hints:
                fill = HINT_FILL
            if fill is not None:
                d.rectangle(cell_rect(r, c, cell, pad=0), fill=fill)

    # thin lines every cell, heavy lines every box
    for i in range(10):
        width = 5 if i % 3 == 0 else 1
        p = min(i * cell, side - 1)
        d.line([(p, 0), (p, side)], fill=(0, 0, 0, 255), width=width)
        d.line([(0, p), (side, p)], fill=(0, 0, 0, 255), width=width)

    for r in range(9):
        for c in range(9):
            v = working[r][c]
            if v == 0:
                continue
            if initial[r][c] != 0:
                ink = FIXED_INK
            elif (r, c) in conflicts:
                ink = ERROR_INK
            elif (r, c) in hints:
                ink = HINT_INK
            else:
                ink = USER_INK
            x0, y0, x1, y1 = cell_rect(r, c, cell)
            d.text(((x0 + x1) // 2, (y0 + y1) // 2), str(v), fill=ink, font=font, anchor="mm")

    return im.convert("RGB")


def board_png_bytes(working: Grid, initial: Grid, hints=None, conflicts=None, size: int = DEFAULT_SIZE) -> bytes:
    buf = io.BytesIO()
    render_board(working, initial, hints, conflicts, size).save(buf, format="PNG")
    return buf.getvalue()


def save_board_png(out_path: str | Path, working: Grid, initial: Grid, hints=None, conflicts=None,
                   size: int = DEFAULT_SIZE) -> str:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    render_board(working, initial, hints, conflicts, size).save(out_path, format="PNG")
    return str(out_path)
