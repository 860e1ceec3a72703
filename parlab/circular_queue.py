"""Fixed-capacity FIFO queue backed by a ring buffer."""

from __future__ import annotations

from typing import Any, List


class QueueFullError(Exception):
    """Raised when enqueuing into a full queue."""


class QueueEmptyError(Exception):
    """Raised when dequeuing from an empty queue."""


class CircularQueue:
    """Bounded FIFO queue with a fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("Capacity of the queue cannot be less than 1")
        self._slots: List[Any] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._size

    def is_full(self) -> bool:
        return self._size == len(self._slots)

    def is_empty(self) -> bool:
        return self._size == 0

    def enqueue(self, value: Any) -> None:
        """Append a value; raise QueueFullError when there is no room."""
        if self.is_full():
            raise QueueFullError("queue is full")
        self._slots[self._tail] = value
        self._tail = (self._tail + 1) % len(self._slots)
        self._size += 1

    def dequeue(self) -> Any:
        """Remove and return the oldest value; raise QueueEmptyError if none."""
        if self.is_empty():
            raise QueueEmptyError("queue is empty")
        value = self._slots[self._head]
        self._slots[self._head] = None
        self._head = (self._head + 1) % len(self._slots)
        self._size -= 1
        return value