from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml

from types_sudoku import Difficulty

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "sudoku_game.yaml"
CONFIG_ENV = "SUDOKU_GAME_CONFIG"


def load_yaml(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg


def _default_counts() -> dict[str, int]:
    return {"easy": 35, "medium": 45, "hard": 55}


@dataclass
class GameConfig:
    default_difficulty: str = "medium"
    removal_counts: dict[str, int] = field(default_factory=_default_counts)
    max_fill_steps: int = 2_000_000
    seed: int | None = None
    timer_interval_s: float = 1.0
    message_timeout_s: float = 3.0
    board_png_size: int = 900
    max_sessions: int = 100
    session_ttl_s: float = 3600.0

    def __post_init__(self):
        self.default_difficulty = Difficulty.parse(self.default_difficulty).value
        counts = _default_counts()
        for k, v in (self.removal_counts or {}).items():
            counts[Difficulty.parse(k).value] = int(v)
        for k, v in counts.items():
            if not 0 <= v <= 81:
                raise ValueError(f"removal_counts[{k}] must be within 0..81, got {v}")
        self.removal_counts = counts
        if self.max_fill_steps <= 0:
            raise ValueError("max_fill_steps must be positive")
        if self.timer_interval_s <= 0:
            raise ValueError("timer_interval_s must be positive")
        if self.max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        if self.session_ttl_s <= 0:
            raise ValueError("session_ttl_s must be positive")

    def to_dict(self) -> dict:
        return asdict(self)


def load_config(path: str | Path | None = None, **overrides) -> GameConfig:
    """Defaults <- YAML file (explicit path, $SUDOKU_GAME_CONFIG, or the bundled file) <- overrides."""
    if path is None:
        path = os.environ.get(CONFIG_ENV) or (DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None)
    cfg: Dict[str, Any] = load_yaml(path) if path else {}
    known = {f.name for f in fields(GameConfig)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")
    merge_overrides(cfg, **overrides)
    return GameConfig(**cfg)
