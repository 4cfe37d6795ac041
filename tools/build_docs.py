# tools/build_docs.py
"""
HTML reference for the game core and its front-ends, rendered with pdoc.
- Requires: pip install -e .[docs]
- Usage: python tools/build_docs.py [--out docs/site] [--modules engine apps]
"""
import argparse
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
MODULES = ["types_sudoku", "engine", "apps"]


def pdoc_command(out: Path, modules=None) -> list:
    mods = list(modules or MODULES)
    unknown = [m for m in mods if m not in MODULES]
    if unknown:
        raise ValueError(f"Not a project module: {unknown}")
    return [sys.executable, "-m", "pdoc", "--docformat", "google", "-o", str(out), *mods]


def main(args=None) -> int:
    ap = argparse.ArgumentParser(description="Render the sudoku-game API reference.")
    ap.add_argument("--out", default=str(ROOT / "docs" / "site"))
    ap.add_argument("--modules", nargs="+", choices=MODULES, default=MODULES)
    a = ap.parse_args(args)

    out = Path(a.out)
    out.mkdir(parents=True, exist_ok=True)
    cmd = pdoc_command(out, a.modules)
    print("[docs]", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=ROOT)
    print(f"[ok] {out / 'index.html'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
