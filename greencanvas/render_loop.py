"""Repeatedly print the file canvas so that monitor processes can be watched."""

from __future__ import annotations

import argparse
import itertools
import sys
import time
from typing import Optional, TextIO

from greencanvas.canvas_file import FileCanvas

REFRESH_INTERVAL = 0.1


def render_forever(
    canvas: FileCanvas,
    interval: float = REFRESH_INTERVAL,
    out: Optional[TextIO] = None,
    frames: Optional[int] = None,
) -> None:
    """Render ``canvas`` every ``interval`` seconds, ``frames`` times or without end."""
    counter = itertools.count() if frames is None else range(frames)
    for _ in counter:
        canvas.render(out)
        time.sleep(interval)


def main(argv=None) -> int:
    """Clear the canvas file and keep rendering it."""
    parser = argparse.ArgumentParser(prog="render_loop")
    parser.add_argument("--interval", type=float, default=REFRESH_INTERVAL)
    parser.add_argument("--frames", type=int, default=None)
    args = parser.parse_args(argv)
    canvas = FileCanvas()
    render_forever(canvas, args.interval, frames=args.frames)
    return 0


if __name__ == "__main__":
    sys.exit(main())