"""Reusable thread barrier built on a condition variable."""

from __future__ import annotations

import threading


class Barrier:
    """Blocks callers until ``num_workers`` threads have arrived."""

    def __init__(self, num_workers: int) -> None:
        if num_workers < 1:
            raise ValueError("a barrier needs at least one worker")
        self.num_workers = num_workers
        self._waiting = 0
        self._generation = 0
        self._condition = threading.Condition()

    def wait(self) -> int:
        """Wait for the rest of the workers; return the round just completed."""
        with self._condition:
            generation = self._generation
            self._waiting += 1
            if self._waiting == self.num_workers:
                self._waiting = 0
                self._generation += 1
                self._condition.notify_all()
                return generation
            self._condition.wait_for(lambda: generation != self._generation)
            return generation