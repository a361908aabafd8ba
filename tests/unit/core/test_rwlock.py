"""Unit tests for the reader-writer lock behind WormCell."""

from __future__ import annotations

import threading

import pytest

from outcomes import IllegalStateError
from outcomes.core._rwlock import ReadWriteLock

pytestmark = pytest.mark.unit

_TIMEOUT_S = 5.0


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=_TIMEOUT_S)
    errors: list[BaseException] = []

    def reader() -> None:
        try:
            with lock.read_locked():
                both_inside.wait()
        except BaseException as e:  # noqa: BLE001
            errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(_TIMEOUT_S)

    assert errors == []
    assert lock.readers == 0


def test_writer_excludes_readers() -> None:
    lock = ReadWriteLock()
    entered = threading.Event()

    lock.acquire_write()
    reader = threading.Thread(
        target=lambda: (lock.acquire_read(), entered.set(), lock.release_read())
    )
    reader.start()
    assert not entered.wait(0.1)

    lock.release_write()
    assert entered.wait(_TIMEOUT_S)
    reader.join(_TIMEOUT_S)


def test_writer_waits_for_active_reader() -> None:
    lock = ReadWriteLock()
    wrote = threading.Event()

    lock.acquire_read()
    writer = threading.Thread(
        target=lambda: (lock.acquire_write(), wrote.set(), lock.release_write())
    )
    writer.start()
    assert not wrote.wait(0.1)

    lock.release_read()
    assert wrote.wait(_TIMEOUT_S)
    writer.join(_TIMEOUT_S)
    assert not lock.is_write_locked


def test_write_lock_released_when_block_raises() -> None:
    lock = ReadWriteLock()
    with pytest.raises(ValueError), lock.write_locked():
        raise ValueError("boom")
    assert not lock.is_write_locked
    with lock.read_locked():
        assert lock.readers == 1


def test_unbalanced_release_is_illegal_state() -> None:
    lock = ReadWriteLock()
    with pytest.raises(IllegalStateError):
        lock.release_read()
    with pytest.raises(IllegalStateError):
        lock.release_write()


class _InterruptedCondition(threading.Condition):
    """Condition whose wait() is interrupted, recording wake-ups."""

    def __init__(self) -> None:
        super().__init__(threading.Lock())
        self.notified = 0

    def wait(self, timeout=None):
        raise KeyboardInterrupt

    def notify_all(self) -> None:
        self.notified += 1
        super().notify_all()


def test_interrupted_writer_wakes_parked_readers() -> None:
    lock = ReadWriteLock()
    cond = _InterruptedCondition()
    lock._cond = cond

    lock.acquire_read()
    with pytest.raises(KeyboardInterrupt):
        lock.acquire_write()

    assert lock._waiting_writers == 0
    assert cond.notified == 1
    assert not lock.is_write_locked
    # No writer is pending any more, so a new reader enters without waiting.
    lock.acquire_read()
    assert lock.readers == 2
