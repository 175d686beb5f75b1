"""Cooperative user-space threads with round-robin, lottery and real-time policies.

A thread body is a generator function taking one argument. Each bare
``yield`` inside the body hands the processor back to the scheduler, and the
generator's return value becomes the thread's result.
"""

from __future__ import annotations

import enum
import inspect
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Generator, Optional


class ThreadState(enum.Enum):
    """Life-cycle states of a green thread."""

    READY = "ready"
    RUNNING = "running"
    BLOCKED = "blocked"
    TERMINATED = "terminated"


class SchedulerType(enum.Enum):
    """Scheduling policy a thread belongs to."""

    RR = "rr"
    LOTTERY = "lottery"
    REALTIME = "realtime"


class ThreadError(Exception):
    """Raised for invalid thread operations and deadlocks."""


@dataclass(eq=False)
class Thread:
    """A green thread managed by a :class:`Scheduler`."""

    id: int
    routine: Callable[[Any], Any]
    arg: Any = None
    sched_type: SchedulerType = SchedulerType.RR
    state: ThreadState = ThreadState.READY
    retval: Any = None
    detached: bool = False
    joined: bool = False
    tickets: int = 1
    deadline: int = 0
    _body: Optional[Generator[Any, Any, Any]] = field(default=None, repr=False)


class Scheduler:
    """Runs green threads one slice at a time.

    Lottery threads take precedence, then the real-time thread with the
    earliest deadline, then round-robin threads in creation order.
    ``rng`` must offer ``randrange(n)``; it draws the lottery winner.
    """

    def __init__(self, rng=None):
        self._rng = rng if rng is not None else random.Random()
        self._ring: list[Thread] = []
        self._current: Optional[Thread] = None
        self._resume_at = 0
        self._next_id = 1

    @property
    def current(self) -> Optional[Thread]:
        """The thread currently holding the processor, if any."""
        return self._current

    @property
    def threads(self) -> tuple[Thread, ...]:
        """Threads known to the scheduler, in ring order."""
        return tuple(self._ring)

    def add_thread(self, thread: Thread) -> None:
        """Mark ``thread`` ready and put it in the ring if it is not there yet."""
        thread.state = ThreadState.READY
        if thread not in self._ring:
            self._ring.append(thread)

    def remove_thread(self, thread: Thread) -> None:
        """Take ``thread`` out of the ring; unknown threads are ignored."""
        try:
            index = self._ring.index(thread)
        except ValueError:
            return
        del self._ring[index]
        if thread is self._current:
            self._resume_at = index

    def next_thread(self) -> Optional[Thread]:
        """Choose the thread that should run next, or None if none is eligible."""
        return (
            self._select_lottery()
            or self._select_realtime()
            or self._select_round_robin()
        )

    def _ready(self, sched: SchedulerType) -> list[Thread]:
        return [
            t for t in self._ring
            if t.state is ThreadState.READY and t.sched_type is sched
        ]

    def _select_lottery(self) -> Optional[Thread]:
        candidates = self._ready(SchedulerType.LOTTERY)
        total = sum(t.tickets for t in candidates)
        if total <= 0:
            return None
        winner = self._rng.randrange(total)
        for thread in candidates:
            if winner < thread.tickets:
                return thread
            winner -= thread.tickets
        return None

    def _select_realtime(self) -> Optional[Thread]:
        candidates = self._ready(SchedulerType.REALTIME)
        if not candidates:
            return None
        return min(candidates, key=lambda t: t.deadline)

    def _select_round_robin(self) -> Optional[Thread]:
        ring = self._ring
        if not ring:
            return None
        current = self._current
        if current is None:
            order = ring
        elif current in ring:
            if len(ring) == 1:
                order = ring
            else:
                index = ring.index(current)
                order = ring[index + 1:] + ring[:index]
        else:
            index = self._resume_at % len(ring)
            order = ring[index:] + ring[:index]
        return next(
            (t for t in order
             if t.state is ThreadState.READY and t.sched_type is SchedulerType.RR),
            None,
        )

    def create(self, routine, arg=None, sched=SchedulerType.RR) -> Thread:
        """Create a ready thread that will run ``routine(arg)``."""
        thread = Thread(id=self._next_id, routine=routine, arg=arg, sched_type=sched)
        self._next_id += 1
        self.add_thread(thread)
        return thread

    def step(self) -> bool:
        """Run one slice of the current thread. Return False when nothing can run."""
        thread = self._current
        if thread is None:
            thread = self.next_thread()
            if thread is None:
                return False
            self._current = thread
        finished, value = self._advance(thread)
        if finished:
            self._finish(thread, value)
            return self._current is not None
        self._switch(thread)
        return True

    def run(self) -> None:
        """Run threads until none is left to run."""
        while self.step():
            pass

    def _advance(self, thread: Thread) -> tuple[bool, Any]:
        if thread._body is None:
            result = thread.routine(thread.arg)
            if not inspect.isgenerator(result):
                return True, result
            thread._body = result
        try:
            next(thread._body)
        except StopIteration as stop:
            return True, stop.value
        return False, None

    def _finish(self, thread: Thread, value: Any) -> None:
        thread.retval = value
        thread.state = ThreadState.TERMINATED
        thread._body = None
        self.remove_thread(thread)
        self._current = self.next_thread()

    def _switch(self, previous: Thread) -> None:
        chosen = self.next_thread()
        if chosen is None or chosen is previous:
            if previous.state is not ThreadState.READY:
                raise ThreadError(
                    f"deadlock: thread {previous.id} is {previous.state.value} "
                    "and no other thread can run"
                )
            return
        self._current = chosen

    def join(self, thread: Thread) -> Any:
        """Drive the scheduler until ``thread`` ends and return its result."""
        if thread.detached:
            raise ThreadError(f"thread {thread.id} is detached")
        if thread.joined:
            raise ThreadError(f"thread {thread.id} was already joined")
        thread.joined = True
        while thread.state is not ThreadState.TERMINATED:
            if not self.step():
                raise ThreadError(f"thread {thread.id} can never finish")
        return thread.retval

    def detach(self, thread: Thread) -> None:
        """Mark ``thread`` as detached so it can no longer be joined."""
        if thread.detached:
            raise ThreadError(f"thread {thread.id} is already detached")
        thread.detached = True

    def chsched(self, thread: Thread, sched: SchedulerType) -> None:
        """Move ``thread`` to another scheduling policy."""
        thread.sched_type = sched