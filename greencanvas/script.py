"""Reading command scripts."""

from __future__ import annotations

from itertools import islice
from typing import Iterator

MAX_LINES = 100
MAX_LINE_LENGTH = 128


def _physical_lines(text: str) -> Iterator[str]:
    parts = text.split("\n")
    for part in parts[:-1]:
        yield part + "\n"
    if parts[-1]:
        yield parts[-1]


def _records(text: str) -> Iterator[str]:
    width = MAX_LINE_LENGTH - 1
    for line in _physical_lines(text):
        for start in range(0, len(line), width):
            yield line[start:start + width]


def read_script(filename) -> list[str]:
    """Return the script's lines without newlines.

    At most MAX_LINES records are kept; a line longer than MAX_LINE_LENGTH - 1
    characters is split into several records.
    """
    with open(filename, encoding="utf-8", errors="surrogateescape", newline="") as f:
        text = f.read()
    return [record.split("\n", 1)[0] for record in islice(_records(text), MAX_LINES)]