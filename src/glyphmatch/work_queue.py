from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class QueueClosed(Exception):
    """Raised when pushing onto a closed queue."""


class WorkQueue(Generic[T]):
    """Blocking FIFO with close semantics and a completion barrier.

    An item counts as outstanding from ``push`` until a consumer calls
    ``done`` for it, so ``wait_empty`` also waits for items that have been
    popped but are still being processed.
    """

    def __init__(self, maxsize: int = 0):
        self.maxsize = maxsize
        self._items: deque[T] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)
        self._all_done = threading.Condition(self._lock)
        self._outstanding = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def push(self, item: T) -> None:
        with self._not_full:
            while self.maxsize > 0 and len(self._items) >= self.maxsize and not self._closed:
                self._not_full.wait()
            if self._closed:
                raise QueueClosed("push on a closed queue")
            self._items.append(item)
            self._outstanding += 1
            self._not_empty.notify()

    def wait_pop(self) -> T | None:
        """Block for the next item; ``None`` once the queue is closed and drained."""
        with self._not_empty:
            while not self._items and not self._closed:
                self._not_empty.wait()
            if not self._items:
                return None
            item = self._items.popleft()
            self._not_full.notify()
            return item

    def done(self) -> None:
        with self._all_done:
            if self._outstanding <= 0:
                raise ValueError("done() called more times than items were pushed")
            self._outstanding -= 1
            if self._outstanding == 0:
                self._all_done.notify_all()

    def wait_empty(self) -> None:
        with self._all_done:
            while self._outstanding:
                self._all_done.wait()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._not_empty.notify_all()
            self._not_full.notify_all()
