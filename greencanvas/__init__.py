"""Cooperative green threads, a mutex, and shared text canvases drawn by scripts."""

__version__ = "0.1.0"

__all__ = [
    "canvas",
    "canvas_file",
    "monitor",
    "monitor_process",
    "mutex",
    "render_loop",
    "scheduler",
    "script",
]