"""An in-memory character canvas shared between green threads."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from greencanvas.mutex import Mutex, MutexError
from greencanvas.scheduler import Scheduler

WIDTH = 40
HEIGHT = 15
HOME = "\033[H"


def _check_char(char: str) -> None:
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")


class Canvas:
    """A WIDTH x HEIGHT grid of characters guarded by a green-thread mutex."""

    def __init__(self, scheduler: Optional[Scheduler] = None):
        self._scheduler = scheduler if scheduler is not None else Scheduler()
        self._lock = Mutex(self._scheduler)
        self._grid = [[" "] * WIDTH for _ in range(HEIGHT)]

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.trylock():
            raise MutexError("canvas is held by another thread")
        try:
            yield
        finally:
            self._lock.unlock()

    def clear(self) -> None:
        """Blank every cell."""
        for row in self._grid:
            row[:] = [" "] * WIDTH

    def draw(self, x: int, y: int, char: str) -> None:
        """Put ``char`` at column ``x``, row ``y``; positions off the grid are ignored."""
        _check_char(char)
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            return
        with self._locked():
            self._grid[y][x] = char

    def rows(self) -> list[str]:
        """The grid as one string per row, top to bottom."""
        return ["".join(row) for row in self._grid]

    def _write(self, out: Optional[TextIO]) -> None:
        stream = out if out is not None else sys.stdout
        stream.write(HOME)
        stream.writelines(row + "\n" for row in self.rows())
        stream.flush()

    def render(self, out: Optional[TextIO] = None) -> None:
        """Move the cursor home and print the whole grid."""
        with self._locked():
            self._write(out)

    def draw_and_render(
        self, x: int, y: int, char: str, out: Optional[TextIO] = None
    ) -> None:
        """Draw one cell and print the grid under a single lock."""
        _check_char(char)
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            return
        with self._locked():
            self._grid[y][x] = char
            self._write(out)