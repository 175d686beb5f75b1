import pytest

from greencanvas.mutex import Mutex, MutexError
from greencanvas.scheduler import Scheduler, ThreadError


def make_demo_worker(mutex, log):
    def func(ident):
        for i in range(2):
            yield from mutex.lock()
            log.append(("enter", ident, i))
            log.append(("exit", ident, i))
            mutex.unlock()
            yield

    return func


def make_contended_worker(mutex, log):
    def func(ident):
        for _ in range(2):
            yield from mutex.lock()
            log.append(("enter", ident))
            yield
            log.append(("exit", ident))
            mutex.unlock()
            yield

    return func


def make_fifo_worker(mutex, acquired):
    def func(ident):
        yield from mutex.lock()
        acquired.append(ident)
        yield
        mutex.unlock()

    return func


def make_holder(mutex):
    def holder(_):
        yield from mutex.lock()
        yield
        yield
        mutex.unlock()

    return holder


def make_waiter(mutex):
    def waiter(_):
        yield from mutex.lock()
        mutex.unlock()

    return waiter


def make_owner(mutex):
    def owner(_):
        yield from mutex.lock()
        yield
        mutex.unlock()

    return owner


def make_intruder(mutex):
    def intruder(_):
        mutex.unlock()
        yield

    return intruder


def make_ordered_locker(first_mutex, second_mutex):
    def locker(_):
        yield from first_mutex.lock()
        yield
        yield from second_mutex.lock()

    return locker


def test_mutex_demo_order():
    sched = Scheduler()
    mutex = Mutex(sched)
    log = []
    func = make_demo_worker(mutex, log)
    for ident in range(1, 5):
        sched.create(func, ident)
    sched.run()
    order = [(ident, i) for kind, ident, i in log if kind == "enter"]
    assert order == [(1, 0), (2, 0), (3, 0), (4, 0), (1, 1), (2, 1), (3, 1), (4, 1)]
    assert not mutex.locked
    mutex.destroy()


def test_critical_sections_never_overlap_under_contention():
    sched = Scheduler()
    mutex = Mutex(sched)
    log = []
    func = make_contended_worker(mutex, log)
    for ident in range(1, 5):
        sched.create(func, ident)
    sched.run()
    assert len(log) == 16
    for enter, leave in zip(log[::2], log[1::2]):
        assert enter[0] == "enter"
        assert leave == ("exit", enter[1])
    entries = [ident for kind, ident in log if kind == "enter"]
    assert sorted(entries) == [1, 1, 2, 2, 3, 3, 4, 4]


def test_waiters_acquire_in_fifo_order():
    sched = Scheduler()
    mutex = Mutex(sched)
    acquired = []
    func = make_fifo_worker(mutex, acquired)
    for ident in (1, 2, 3):
        sched.create(func, ident)
    sched.run()
    assert acquired == [1, 2, 3]
    assert mutex.waiting == ()


def test_blocked_thread_is_queued():
    sched = Scheduler()
    mutex = Mutex(sched)
    first = sched.create(make_holder(mutex))
    second = sched.create(make_waiter(mutex))
    sched.step()
    sched.step()
    assert mutex.owner is first
    assert mutex.waiting == (second,)
    sched.run()
    assert not mutex.locked


def test_trylock_outside_threads():
    sched = Scheduler()
    mutex = Mutex(sched)
    assert mutex.trylock() is True
    assert mutex.trylock() is False
    assert mutex.locked
    mutex.unlock()
    assert mutex.locked is False


def test_unlock_unlocked_raises():
    mutex = Mutex(Scheduler())
    with pytest.raises(MutexError):
        mutex.unlock()


def test_destroy_locked_raises():
    mutex = Mutex(Scheduler())
    assert mutex.trylock()
    with pytest.raises(MutexError):
        mutex.destroy()


def test_lock_outside_thread_when_held_raises():
    mutex = Mutex(Scheduler())
    assert mutex.trylock()
    with pytest.raises(MutexError):
        list(mutex.lock())


def test_unlock_by_non_owner_raises():
    sched = Scheduler()
    mutex = Mutex(sched)
    sched.create(make_owner(mutex))
    sched.create(make_intruder(mutex))
    with pytest.raises(MutexError):
        sched.run()


def test_lock_order_inversion_is_a_deadlock():
    sched = Scheduler()
    a = Mutex(sched)
    b = Mutex(sched)
    sched.create(make_ordered_locker(a, b))
    sched.create(make_ordered_locker(b, a))
    with pytest.raises(ThreadError):
        sched.run()