"""Thread-safe FIFO queue with an optional per-item destructor."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Iterator, Optional


class TSQueue:
    """A FIFO queue guarded by a mutex.

    ``data_destructor``, when given, is called on every item as it leaves
    the queue, whether by dequeueing or by :meth:`destroy`.

    The ``*_nolock`` methods and the inspection helpers expect the caller
    to hold :attr:`mutex` when other threads may touch the queue.
    """

    def __init__(self, data_destructor: Optional[Callable[[Any], None]] = None) -> None:
        self._items: deque[Any] = deque()
        self.data_destructor: Optional[Callable[[Any], None]] = data_destructor
        self.mutex = threading.Lock()

    def _release(self, item: Any) -> None:
        if self.data_destructor is not None:
            self.data_destructor(item)

    def enqueue_nolock(self, item: Any) -> None:
        """Append ``item`` at the tail without taking the lock."""
        self._items.append(item)

    def enqueue(self, item: Any) -> None:
        """Append ``item`` at the tail."""
        with self.mutex:
            self.enqueue_nolock(item)

    def dequeue_nolock(self) -> Any:
        """Remove the head item without taking the lock.

        The destructor is run on the item, which is then returned.
        An empty queue is left as it is and ``None`` is returned.
        """
        if not self._items:
            return None
        item = self._items.popleft()
        self._release(item)
        return item

    def dequeue(self) -> Any:
        """Remove and return the head item, or ``None`` if the queue is empty."""
        with self.mutex:
            return self.dequeue_nolock()

    def is_empty(self) -> bool:
        """Return whether the queue holds no items."""
        return not self._items

    def head(self) -> Any:
        """Return the item at the front of the queue."""
        if not self._items:
            raise IndexError("head of an empty queue")
        return self._items[0]

    def tail(self) -> Any:
        """Return the item at the back of the queue."""
        if not self._items:
            raise IndexError("tail of an empty queue")
        return self._items[-1]

    def destroy(self) -> None:
        """Run the destructor on every item, front to back, and empty the queue."""
        with self.mutex:
            while self._items:
                self._release(self._items.popleft())

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))