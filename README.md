# greencanvas

Cooperative green threads, a mutex for them, and 40×15 character canvases
that scripted monitors draw on — either in memory, shared between green
threads, or in a text file shared between processes.

| Module | What it holds |
| --- | --- |
| `greencanvas.scheduler` | `Scheduler`, `Thread`, `ThreadState`, `SchedulerType`, `ThreadError` |
| `greencanvas.mutex` | `Mutex`, `MutexError` |
| `greencanvas.canvas` | `Canvas`, an in-memory grid guarded by a `Mutex` |
| `greencanvas.monitor` | `Monitor`, which plays a drawing script on a `Canvas` |
| `greencanvas.script` | `read_script` |
| `greencanvas.canvas_file` | `FileCanvas`, a grid kept in a text file |
| `greencanvas.monitor_process` | `Region`, `run_script`, handoff helpers and the `greencanvas-monitor` command |
| `greencanvas.render_loop` | `render_forever` and the `greencanvas-render` command |

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Green threads

A thread body is a generator function taking one argument. Every bare
`yield` hands the processor back to the scheduler; the generator's return
value becomes the thread's result. A plain function that is not a generator
runs to completion in one slice.

```python
from greencanvas.scheduler import Scheduler

def worker(n):
    for i in range(3):
        print(f"thread {n}, iteration {i}")
        yield
    return n * 10

sched = Scheduler()
t1 = sched.create(worker, 1)
t2 = sched.create(worker, 2)
print(sched.join(t1))   # 10
sched.detach(t2)
sched.run()             # finish whatever is left
```

- `Scheduler.create(routine, arg=None, sched=SchedulerType.RR)` makes a ready
  `Thread`.
- `Scheduler.step()` runs one slice and returns `False` when nothing can run;
  `Scheduler.run()` steps until then.
- `Scheduler.join(thread)` drives the scheduler until the thread ends and
  returns its result. It raises `ThreadError` for a detached thread, a thread
  already joined, or one that can never finish.
- `Scheduler.detach(thread)` marks a thread as not joinable (`ThreadError` if
  it already is); `Scheduler.chsched(thread, sched)` moves it to another policy.
- `Scheduler.next_thread()` picks the next thread: a lottery thread first
  (drawn by tickets with the scheduler's `rng`, which must offer
  `randrange(n)`), otherwise the ready real-time thread with the smallest
  `deadline`, otherwise the next ready round-robin thread in ring order.

```python
import random
from greencanvas.scheduler import Scheduler, SchedulerType

sched = Scheduler(rng=random.Random(0))
heavy = sched.create(worker, 2, SchedulerType.LOTTERY)
heavy.tickets = 10
urgent = sched.create(worker, 4, SchedulerType.REALTIME)
urgent.deadline = 2
```

If the running thread is blocked and no other thread can run, `step` raises
`ThreadError` for the deadlock.

## Mutex

```python
from greencanvas.mutex import Mutex

mutex = Mutex(sched)

def body(n):
    for i in range(2):
        yield from mutex.lock()
        print(f"thread {n} in critical section ({i})")
        mutex.unlock()
        yield
```

`lock()` blocks the calling thread and queues it while the mutex is held;
`unlock()` wakes the oldest waiter. `trylock()` returns whether it got the
mutex. `unlock()` raises `MutexError` when the mutex is free or held by
another thread, and `destroy()` raises it when the mutex is still locked.

## Canvases and monitors

`Canvas(scheduler=None)` is a 40×15 grid. `draw(x, y, char)` ignores
positions off the grid, `rows()` returns the grid as strings, `render(out)`
writes a cursor-home escape (`\033[H`) followed by the grid, and
`draw_and_render` does both under one lock. `clear()` blanks it. A character
argument that is not exactly one character raises `ValueError`.

A `Monitor(id, script, canvas)` plays `draw` and `move` commands; its `run`
method is a thread body that yields after every move step and pauses 0.3 s
per step (pass `sleep` to change that). A malformed command raises
`ValueError`.

```python
from greencanvas.canvas import Canvas
from greencanvas.monitor import Monitor

canvas = Canvas(sched)
monitor = Monitor(1, ["draw x=5 y=3 char=A",
                      "move x=5 y=3 dx=1 dy=0 steps=5 char=A"], canvas)
sched.create(monitor.run, lambda seconds: None)   # no delay between steps
sched.run()
```

`read_script(filename)` returns a script file's lines without newlines; it
keeps at most 100 records and splits lines longer than 127 characters.

## Scripts for monitor processes

```
draw x=5 y=3 char=A
move x=5 y=3 dx=1 dy=0 steps=5 char=A
handoff monitor2
wait monitor1
```

`draw` and `move` draw the monitor's own letter (the `char=` value is not
used) and only in rows inside its `Region`. `move` erases the previous cell
at each step and pauses 0.3 s. `handoff <id>` creates a `handoff_<id>` file;
`wait <id>` polls every 0.1 s until that file exists. Other lines are only
echoed.

## Commands

Both commands use `canvas.txt` in the working directory and clear it when
they start.

Show the canvas, refreshing every 100 ms until interrupted:

```
greencanvas-render [--interval SECONDS] [--frames N]
```

Run a script as one monitor, drawing its letter only in rows `y_min`..`y_max`:

```
greencanvas-monitor <file.script> <letter> <y_min> <y_max> <monitor_id> [--clean]
```

With `--clean`, a `handoff_monitor<monitor_id>` file left from an earlier run
is removed first. It exits with status 1 on wrong arguments or an unreadable
script.

## What it does not do

Threads are cooperative only: a thread keeps the processor until it yields,
and nothing pre-empts it. The file canvas has no locking between processes;
concurrent writers simply overwrite single cells in place.