"""A character canvas kept in a text file so that processes can share it."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

WIDTH = 40
HEIGHT = 15
FILENAME = "canvas.txt"
HOME = "\033[H"


class FileCanvas:
    """A WIDTH x HEIGHT grid stored as HEIGHT lines of WIDTH bytes each."""

    def __init__(self, path=FILENAME):
        self.path = Path(path)
        self.clear()

    def clear(self) -> None:
        """Rewrite the file as a blank grid."""
        self.path.write_bytes((b" " * WIDTH + b"\n") * HEIGHT)

    def draw(self, x: int, y: int, char: str) -> None:
        """Overwrite one cell in place; off-grid positions or a missing file are ignored."""
        data = char.encode("latin-1")
        if len(data) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            return
        try:
            f = self.path.open("r+b")
        except OSError:
            return
        with f:
            f.seek(y * (WIDTH + 1) + x)
            f.write(data)

    def render(self, out: Optional[TextIO] = None) -> None:
        """Move the cursor home and print the file; a missing file prints nothing."""
        try:
            text = self.path.read_bytes().decode("latin-1")
        except OSError:
            return
        stream = out if out is not None else sys.stdout
        stream.write(HOME)
        stream.write(text)
        stream.flush()