# src/mgons/progress.py
"""One-line sweep progress on stderr, so rows on stdout stay clean."""

from __future__ import annotations

import sys
import time


class Progress:
    BAR = 24
    REDRAW_EVERY = 0.05  # seconds

    def __init__(self, total: int, *, enabled: bool = True, stream=None):
        self.total = max(1, total)
        self.enabled = enabled
        self.stream = stream if stream is not None else sys.stderr
        self.started = time.perf_counter()
        self._drawn_at = 0.0
        self._width = 0

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def update(self, done: int, n: int) -> None:
        """Redraw after perimeter n, the done-th row of the sweep."""
        if not self.enabled:
            return
        now = time.perf_counter()
        if done < self.total and now - self._drawn_at < self.REDRAW_EVERY:
            return
        self._drawn_at = now
        filled = self.BAR * min(done, self.total) // self.total
        bar = "#" * filled + "." * (self.BAR - filled)
        line = f"\r[{bar}] {done}/{self.total}  n={n}  {self.elapsed:.1f}s"
        self._width = max(self._width, len(line))
        self.stream.write(line)
        self.stream.flush()

    def clear(self) -> None:
        if not (self.enabled and self._width):
            return
        self.stream.write("\r" + " " * self._width + "\r")
        self.stream.flush()
