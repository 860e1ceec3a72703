"""Wall-clock stopwatch with weighted totals and simple reporting."""

from __future__ import annotations

import time
from typing import Callable, Optional


class Timer:
    """Accumulating stopwatch driven by a wall clock."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self.total_time = 0.0
        self.total_weight = 0.0
        self.last_time = 0.0
        self.running = False

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Start (or restart) the current measurement."""
        self.running = True
        self.last_time = self._clock()

    def stop(self, weight: Optional[float] = None) -> float:
        """Stop the measurement and return the elapsed seconds.

        With a weight, the elapsed time is added to the total scaled by it
        and the weight is accumulated.
        """
        self.running = False
        elapsed = self._clock() - self.last_time
        if weight is None:
            self.total_time += elapsed
        else:
            self.total_weight += weight
            self.total_time += weight * elapsed
        return elapsed

    def total(self) -> float:
        """Accumulated time, including a measurement still running."""
        if self.running:
            return self.total_time + self._clock() - self.last_time
        return self.total_time

    def next(self) -> float:
        """Return the time since the last mark and set a new mark."""
        if not self.running:
            return 0.0
        now = self._clock()
        elapsed = now - self.last_time
        self.total_time += elapsed
        self.last_time = now
        return elapsed

    def report_time(self, seconds: float) -> None:
        """Print a duration with three significant digits and a blank line."""
        print(f"{seconds:.3g}\n")

    def report_stop(self, weight: float, label: str) -> None:
        """Stop with a weight and print the elapsed time under a label."""
        print(f"{label} :{weight:g}: ", end="")
        self.report_time(self.stop(weight))

    def report_total(self, label: Optional[str] = None) -> None:
        """Print the (weighted) total and reset the accumulators."""
        if label is not None:
            print(f"{label} : ", end="")
        accumulated = self.total()
        if self.total_weight > 0.0:
            accumulated /= self.total_weight
        self.report_time(accumulated)
        self.total_time = 0.0
        self.total_weight = 0.0

    def report_next(self, label: Optional[str] = None) -> None:
        """Print the time since the last mark."""
        if label is not None:
            print(f"{label} : ", end="")
        self.report_time(self.next())