"""A mutex for green threads run by :class:`greencanvas.scheduler.Scheduler`."""

from __future__ import annotations

from collections import deque
from typing import Generator, Optional

from greencanvas.scheduler import Scheduler, Thread, ThreadState


class MutexError(Exception):
    """Raised for invalid mutex operations."""


class Mutex:
    """Mutual exclusion between green threads.

    Inside a thread body acquire it with ``yield from mutex.lock()``; a thread
    that finds it held is blocked and queued until an unlock wakes it.
    """

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._locked = False
        self._owner: Optional[Thread] = None
        self._waiters: deque[Thread] = deque()

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def owner(self) -> Optional[Thread]:
        return self._owner

    @property
    def waiting(self) -> tuple[Thread, ...]:
        """Threads queued for the mutex, oldest first."""
        return tuple(self._waiters)

    def _take(self) -> None:
        self._locked = True
        self._owner = self._scheduler.current

    def lock(self) -> Generator[None, None, None]:
        """Acquire the mutex, yielding the processor while it is held."""
        while self._locked:
            thread = self._scheduler.current
            if thread is None:
                raise MutexError("cannot wait for a mutex outside a thread")
            thread.state = ThreadState.BLOCKED
            if thread not in self._waiters:
                self._waiters.append(thread)
            yield
        self._take()

    def trylock(self) -> bool:
        """Acquire the mutex if it is free; return whether it was acquired."""
        if self._locked:
            return False
        self._take()
        return True

    def unlock(self) -> None:
        """Release the mutex and wake the oldest waiting thread."""
        if not self._locked:
            raise MutexError("mutex is not locked")
        if self._owner is not self._scheduler.current:
            raise MutexError("mutex is held by another thread")
        self._locked = False
        self._owner = None
        if self._waiters:
            waiter = self._waiters.popleft()
            waiter.state = ThreadState.READY
            self._scheduler.add_thread(waiter)

    def destroy(self) -> None:
        """Check that the mutex may be discarded; a held mutex may not."""
        if self._locked:
            raise MutexError("cannot destroy a locked mutex")