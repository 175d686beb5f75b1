"""Monitors that play a drawing script on a shared canvas."""

from __future__ import annotations

import re
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Generator, Optional, TextIO

from greencanvas.canvas import Canvas

_INT = r"\s*([+-]?\d+)"
_DRAW = re.compile(rf"draw\s*x={_INT}\s*y={_INT}\s*char=(.)", re.DOTALL)
_MOVE = re.compile(
    rf"move\s*x={_INT}\s*y={_INT}\s*dx={_INT}\s*dy={_INT}\s*steps={_INT}\s*char=(.)",
    re.DOTALL,
)
STEP_DELAY = 0.3


def _parse(pattern: re.Pattern, line: str) -> tuple:
    match = pattern.match(line)
    if match is None:
        raise ValueError(f"malformed command: {line!r}")
    return match.groups()


@dataclass
class Monitor:
    """A script of ``draw`` and ``move`` commands bound to a canvas."""

    id: int
    script: list[str] = field(default_factory=list)
    canvas: Canvas = field(default_factory=Canvas)

    def run(
        self,
        sleep: Optional[Callable[[float], object]] = None,
        out: Optional[TextIO] = None,
    ) -> Generator[None, None, None]:
        """Thread body: play the script, yielding after every move step."""
        pause = sleep if sleep is not None else time.sleep
        stream = out if out is not None else sys.stdout
        for line in self.script:
            if line.startswith("draw"):
                x, y, char = _parse(_DRAW, line)
                self.canvas.draw(int(x), int(y), char)
            elif line.startswith("move"):
                *numbers, char = _parse(_MOVE, line)
                x, y, dx, dy, steps = map(int, numbers)
                for step in range(steps):
                    stream.write(f"[MONITOR {self.id}] Paso {step}: x={x} y={y}\n")
                    self.canvas.draw(x, y, " ")
                    x += dx
                    y += dy
                    self.canvas.draw_and_render(x, y, char, stream)
                    pause(STEP_DELAY)
                    yield