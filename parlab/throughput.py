"""Producer/consumer throughput benchmark for a shared queue."""

from __future__ import annotations

import sys
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .circular_queue import QueueEmptyError
from .cliopts import Options
from .optvalues import ValueKind, value
from .timer import Timer

MOD_VALUE = 10000


class LockedQueue:
    """Unbounded FIFO queue guarded by a single lock."""

    def __init__(self) -> None:
        self._items: deque = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def enqueue(self, value: Any) -> None:
        """Append a value."""
        with self._lock:
            self._items.append(value)

    def dequeue(self) -> Any:
        """Remove and return the oldest value; raise QueueEmptyError if none."""
        with self._lock:
            if not self._items:
                raise QueueEmptyError("queue is empty")
            return self._items.popleft()


@dataclass
class Producer:
    """Enqueues values until told to stop."""

    thread_id: int
    queue: Any
    stop_signal: threading.Event
    produced: int = 0
    total_time: float = 0.0

    def run(self) -> None:
        timer = Timer()
        timer.start()
        produced = 0
        current = self.thread_id
        while not self.stop_signal.is_set():
            current = (current + self.thread_id) % MOD_VALUE
            self.queue.enqueue(current)
            produced += 1
        self.produced = produced
        self.total_time = timer.stop()

    def __str__(self) -> str:
        return f"{self.thread_id}, {self.produced}, {self.total_time:g}"


@dataclass
class Consumer:
    """Dequeues values until told to stop, counting misses on an empty queue."""

    thread_id: int
    queue: Any
    stop_signal: threading.Event
    consumed: int = 0
    failed_dequeues: int = 0
    total_time: float = 0.0

    def run(self) -> None:
        timer = Timer()
        timer.start()
        consumed = 0
        failed = 0
        while not self.stop_signal.is_set():
            try:
                self.queue.dequeue()
            except QueueEmptyError:
                failed += 1
            else:
                consumed += 1
        self.consumed = consumed
        self.failed_dequeues = failed
        self.total_time = timer.stop()

    def __str__(self) -> str:
        return (
            f"{self.thread_id}, {self.consumed}, {self.failed_dequeues}, "
            f"{self.total_time:g}"
        )


@dataclass
class ThroughputReport:
    """Per-thread results and their totals for one benchmark run."""

    seconds: float
    producers: List[Producer] = field(default_factory=list)
    consumers: List[Consumer] = field(default_factory=list)

    @property
    def total_produced(self) -> int:
        return sum(p.produced for p in self.producers)

    @property
    def total_consumed(self) -> int:
        return sum(c.consumed for c in self.consumers)

    @property
    def total_failed(self) -> int:
        return sum(c.failed_dequeues for c in self.consumers)

    @property
    def throughput(self) -> int:
        """Operations (enqueues plus dequeues) per second, rounded down."""
        return int((self.total_produced + self.total_consumed) // self.seconds)


def run_throughput(
    queue: Any, n_producers: int, n_consumers: int, seconds: float
) -> ThroughputReport:
    """Run producers and consumers against ``queue`` for ``seconds``."""
    if seconds <= 0:
        raise ValueError("the run must last a positive number of seconds")
    if n_producers < 0 or n_consumers < 0:
        raise ValueError("thread counts cannot be negative")
    stop_signal = threading.Event()
    producers = [Producer(i, queue, stop_signal) for i in range(n_producers)]
    consumers = [Consumer(i, queue, stop_signal) for i in range(n_consumers)]
    threads = [threading.Thread(target=p.run) for p in producers]
    threads += [threading.Thread(target=c.run) for c in consumers]
    for thread in threads:
        thread.start()
    time.sleep(seconds)
    stop_signal.set()
    for thread in threads:
        thread.join()
    return ThroughputReport(seconds, producers, consumers)


def _build_options() -> Options:
    options = Options("Queue", "Test")
    options.add_options(
        "custom",
        [
            ("n_producers", "Number of producers",
             value(ValueKind.UINT32).default_value("2")),
            ("n_consumers", "Number of consumers",
             value(ValueKind.UINT32).default_value("2")),
            ("init_allocator", "Number of nodes to pre-allocate",
             value(ValueKind.INT64).default_value("100000000")),
            ("seconds", "Number of seconds to run the experiment",
             value(ValueKind.UINT32).default_value("5")),
        ],
    )
    return options


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    args = sys.argv[1:] if argv is None else list(argv)
    parsed = _build_options().parse(args)
    n_producers = parsed["n_producers"].value()
    n_consumers = parsed["n_consumers"].value()
    seconds = parsed["seconds"].value()
    init_allocator = parsed["init_allocator"].value()

    print(f"Pre-allocate with {init_allocator} elements")
    queue = LockedQueue()
    print(f"n_producers = {n_producers}")
    print(f"n_consumers = {n_consumers}")

    report = run_throughput(queue, n_producers, n_consumers, seconds)

    print("Producer data")
    print("thread_id, produced, total_time")
    for producer in report.producers:
        print(producer)
    print("Consumer data")
    print("thread_id, consumed, failed, total_time")
    for consumer in report.consumers:
        print(consumer)

    print(f"Total produced = {report.total_produced}")
    print(f"Total consumed = {report.total_consumed}")
    print(f"Total failed = {report.total_failed}")
    print(f"Total throughput = {report.throughput}")
    return 0