[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "greencanvas"
version = "0.1.0"
description = "Cooperative green threads with round-robin, lottery and real-time scheduling, a mutex, and shared text canvases drawn by scripted monitors"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "green threads",
    "cooperative multitasking",
    "scheduler",
    "round robin",
    "lottery scheduling",
    "mutex",
    "canvas",
    "terminal",
    "animation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
greencanvas-monitor = "greencanvas.monitor_process:main"
greencanvas-render = "greencanvas.render_loop:main"

[tool.hatch.build.targets.wheel]
packages = ["greencanvas"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
