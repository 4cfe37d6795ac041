"""Cancellable once-per-interval game timer and MM:SS formatting."""

# game_timer.py
# The timer runs a daemon thread per start(). Tick delivery and stop() share one
# re-entrant lock and a run counter: once stop() returns, no tick of that run fires.
from __future__ import annotations

import threading
from typing import Callable, Optional


def format_elapsed(seconds: int) -> str:
    """Zero-padded MM:SS; minutes keep counting past 59."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


class GameTimer:
    def __init__(self, on_tick: Optional[Callable[[int], None]] = None, interval_s: float = 1.0):
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self.on_tick = on_tick
        self.interval_s = interval_s
        self._lock = threading.RLock()
        self._run_id = 0
        self._running = False
        self._elapsed = 0
        self._stop_event: Optional[threading.Event] = None

    @property
    def elapsed(self) -> int:
        with self._lock:
            return self._elapsed

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def display(self) -> str:
        return format_elapsed(self.elapsed)

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._run_id += 1
            self._running = True
            stop_event = threading.Event()
            self._stop_event = stop_event
            run_id = self._run_id
        t = threading.Thread(target=self._loop, args=(run_id, stop_event), daemon=True)
        t.start()

    def stop(self) -> None:
        with self._lock:
            self._running = False
            self._run_id += 1
            if self._stop_event is not None:
                self._stop_event.set()
                self._stop_event = None

    def restart(self) -> None:
        """Stop, zero the counter, start again (new game / reset)."""
        with self._lock:
            self.stop()
            self._elapsed = 0
            self.start()

    def reset(self) -> None:
        with self._lock:
            self.stop()
            self._elapsed = 0

    def _loop(self, run_id: int, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval_s):
            with self._lock:
                if run_id != self._run_id:
                    return
                self._elapsed += 1
                elapsed = self._elapsed
                if self.on_tick is not None:
                    self.on_tick(elapsed)
