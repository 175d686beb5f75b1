"""A monitor that runs as its own process, drawing on a file canvas.

Monitors in separate processes take turns through handoff files: a
``handoff <id>`` command creates ``handoff_<id>`` and a ``wait <id>`` command
blocks until that file appears.
"""

from __future__ import annotations

import re
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TextIO

from greencanvas.canvas_file import FileCanvas
from greencanvas.script import read_script

HANDOFF_PREFIX = "handoff_"
POLL_INTERVAL = 0.1
STEP_DELAY = 0.3
USAGE = "Uso: {prog} <archivo.script> <letra> <y_min> <y_max> <monitor_id> [--clean]"

_INT = r"\s*([+-]?\d+)"
_DRAW = re.compile(rf"draw\s*x={_INT}\s*y={_INT}")
_MOVE = re.compile(
    rf"move\s*x={_INT}\s*y={_INT}\s*dx={_INT}\s*dy={_INT}\s*steps={_INT}"
)
_HANDOFF = re.compile(r"handoff\s*(\S+)")
_WAIT = re.compile(r"wait\s*(\S+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Region:
    """The band of rows a monitor may draw in, bounds included."""

    id: int
    y_min: int
    y_max: int


def handoff_path(target_id: str, directory=".") -> Path:
    """Path of the handoff file that passes control to ``target_id``."""
    return Path(directory) / f"{HANDOFF_PREFIX}{target_id}"


def wait_for_handoff(
    target_id: str,
    directory=".",
    poll: Optional[Callable[[float], object]] = None,
    out: Optional[TextIO] = None,
) -> None:
    """Block until the handoff file for ``target_id`` exists."""
    pause = poll if poll is not None else time.sleep
    path = handoff_path(target_id, directory)
    while not path.exists():
        pause(POLL_INTERVAL)
    stream = out if out is not None else sys.stdout
    stream.write(f"[HANDOFF] Recibido control: {path}\n")


def signal_handoff(target_id: str, directory=".", out: Optional[TextIO] = None) -> bool:
    """Create the handoff file for ``target_id``; return whether it was written."""
    path = handoff_path(target_id, directory)
    try:
        path.write_text("start")
    except OSError:
        return False
    stream = out if out is not None else sys.stdout
    stream.write(f"[HANDOFF] Pasado control a: {path}\n")
    return True


def _numbers(pattern: re.Pattern, line: str) -> list[int]:
    match = pattern.match(line)
    if match is None:
        raise ValueError(f"malformed command: {line!r}")
    return [int(group) for group in match.groups()]


def run_script(
    lines,
    letter: str,
    region: Region,
    canvas: FileCanvas,
    directory=".",
    sleep: Optional[Callable[[float], object]] = None,
    out: Optional[TextIO] = None,
) -> None:
    """Execute script lines, drawing ``letter`` only inside ``region``'s rows."""
    pause = sleep if sleep is not None else time.sleep
    stream = out if out is not None else sys.stdout

    def inside(y: int) -> bool:
        return region.y_min <= y <= region.y_max

    for line in lines:
        stream.write(f"[MONITOR {letter}] Ejecutando: {line}\n")
        if line.startswith("draw"):
            x, y = _numbers(_DRAW, line)
            if inside(y):
                canvas.draw(x, y, letter)
        elif line.startswith("move"):
            x, y, dx, dy, steps = _numbers(_MOVE, line)
            for _ in range(steps):
                if inside(y):
                    canvas.draw(x, y, " ")
                x += dx
                y += dy
                if inside(y):
                    canvas.draw(x, y, letter)
                pause(STEP_DELAY)
        elif line.startswith("handoff"):
            match = _HANDOFF.match(line)
            if match:
                signal_handoff(match.group(1), directory, stream)
        elif line.startswith("wait"):
            match = _WAIT.match(line)
            if match:
                wait_for_handoff(match.group(1), directory, out=stream)


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def main(argv=None) -> int:
    """Run one monitor process: script, letter, y_min, y_max, id, optional --clean."""
    args = sys.argv[1:] if argv is None else list(argv)
    canvas = FileCanvas()

    if len(args) not in (5, 6):
        print(USAGE.format(prog="monitor_process"))
        return 1

    script_file, letter_arg, y_min_arg, y_max_arg, id_arg = args[:5]
    letter = letter_arg[:1] or "\0"
    monitor_id = _atoi(id_arg)

    if len(args) == 6 and args[5] == "--clean":
        cleanup = handoff_path(f"monitor{monitor_id}")
        cleanup.unlink(missing_ok=True)
        print(f"[CLEANUP] Eliminado: {cleanup}")

    region = Region(monitor_id, _atoi(y_min_arg), _atoi(y_max_arg))

    try:
        lines = read_script(script_file)
    except OSError:
        print("No se pudo leer el script")
        return 1

    run_script(lines, letter, region, canvas)
    return 0


if __name__ == "__main__":
    sys.exit(main())