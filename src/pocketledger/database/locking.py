"""Single-writer / multiple-reader lock guarding the ledger store."""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional


class ReadWriteLock:
    """Readers share the lock, a writer holds it exclusively.

    A thread that holds the write lock may also take read locks, and read
    locks nest freely, so composite reads can wrap individual store reads.
    New readers do not queue behind waiting writers; otherwise a nested
    read inside an open read block could deadlock.

    A read lock cannot be upgraded. A thread that holds only read locks and
    asks for the write lock gets a ``RuntimeError``, since it would wait on
    its own readers forever. Take the write lock first when a block both
    reads and writes.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer: Optional[int] = None
        self._write_depth = 0
        self._local = threading.local()

    def _read_depth(self) -> int:
        return getattr(self._local, "read_depth", 0)

    def acquire_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            while self._writer is not None and self._writer != me:
                self._cond.wait()
            self._readers += 1
        self._local.read_depth = self._read_depth() + 1

    def release_read(self) -> None:
        self._local.read_depth = self._read_depth() - 1
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Take the write lock, waiting for other readers and writers.

        Raises:
            RuntimeError: If the calling thread holds a read lock but not the write lock
        """
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                self._write_depth += 1
                return
            if self._read_depth() > 0:
                raise RuntimeError("Cannot upgrade a read lock to a write lock")
            while self._writer is not None or self._readers > 0:
                self._cond.wait()
            self._writer = me
            self._write_depth = 1

    def release_write(self) -> None:
        with self._cond:
            self._write_depth -= 1
            if self._write_depth == 0:
                self._writer = None
                self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
