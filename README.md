# parlab

Graph kernels and small concurrency tools: push-based PageRank and triangle
counting over graphs stored in compressed sparse row/column form, an
edge-balanced partitioner used to simulate a multi-rank run inside one
process, a producer/consumer queue throughput benchmark, a bounded circular
queue, a reusable thread barrier, a stopwatch, an in-place quicksort, and a
command-line option parser with formatted help.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Graph input

A graph stored under the name `PATH` lives in two files of native 32-bit
integers:

- `PATH.csr`: vertex count `n`, edge count `m`, `n` out-edge offsets, `m` out-neighbours
- `PATH.csc`: the same layout for in-edges

Neighbour lists are sorted as they are loaded. A file too short for its
header, or with offsets out of range, raises `ValueError`.

```python
from parlab.graph import Graph

g = Graph.from_edges(4, [(0, 1), (1, 2), (2, 0), (2, 3)])
g.save_binary("/tmp/small")           # writes /tmp/small.csr and /tmp/small.csc
same = Graph.read_binary("/tmp/small")
same.write_edge_lists("/tmp/edges_")  # writes /tmp/edges_1 (out) and /tmp/edges_2 (in)
```

`Graph` has `n`, `m` and `vertices`; each `Vertex` has `out_neighbors`,
`in_neighbors`, `out_degree` and `in_degree`. `write_edge_lists` prints a
short summary and writes one `vertex neighbour` line per edge, neighbours in
descending order.

## PageRank

```python
from parlab.pagerank import page_rank_serial, page_rank_parallel, partition_by_edges

result = page_rank_serial(g, 20, False)      # 32-bit float ranks, damping 0.85
int_result = page_rank_serial(g, 20, True)   # integer ranks: start 100000, 15000 + 5x/6
split = page_rank_parallel(g, 20, 4, False)  # four simulated ranks
parts = partition_by_edges(g, 4)             # list of Partition(start, end)
```

A `PageRankResult` holds `sum_of_page_ranks`, `time_taken`, `ranks` and, for
the parallel run, `stats`: one `RankStats(rank, num_edges, communication_time)`
per rank. `partition_by_edges` grows each range until it holds at least
`m // parts` out-edges; the last range always ends at the final vertex.

From the shell:

```
parlab-pagerank --nIterations 20 --strategy 1 --inputFile /tmp/small
parlab-pagerank --inputFile /tmp/small --worldSize 4 --useInt
```

Options: `--nIterations` (default 20), `--strategy` (default 1, only
printed), `--inputFile` (default `/scratch/input_graphs/roadNet-CA`),
`--worldSize` (default 1; above 1 runs the simulated ranks and prints a
per-rank table) and the flag `--useInt`. It prints the number type, the
strategy, the iteration count, the sum of all page ranks and the time taken.

## Triangle counting

```python
from parlab.triangles import count_common, triangle_count_serial, triangle_count_parallel

total = triangle_count_serial(g)
split = triangle_count_parallel(g, 4)
print(total.triangle_count, total.unique_triangles)
```

For each edge `u -> v` the in-neighbours of `u` are intersected with the
out-neighbours of `v` by `count_common`, which ignores `u` and `v` themselves
and returns 0 for a self-loop. Each triangle is therefore found three times;
`unique_triangles` is the count divided by three. The parallel result carries
one `TriangleStats(rank, edges, triangles, communication_time)` per rank.

```
parlab-triangles --strategy 1 --inputFile /tmp/small
parlab-triangles --inputFile /tmp/small --worldSize 4
```

## Queue throughput

`parlab-throughput` starts producer and consumer threads against a shared
`LockedQueue` for a number of seconds, then prints per-thread counts, the
totals and the operations (enqueues plus dequeues) per second:

```
parlab-throughput --n_producers 2 --n_consumers 2 --seconds 1
```

Defaults are 2 producers, 2 consumers and 5 seconds. `--init_allocator` is
read and printed but does not change the queue, which grows as needed.

From Python, any object with `enqueue(value)` and a `dequeue()` that raises
`QueueEmptyError` when empty can be measured:

```python
from parlab.throughput import LockedQueue, run_throughput

report = run_throughput(LockedQueue(), 2, 2, 1)
print(report.total_produced, report.total_consumed, report.total_failed, report.throughput)
```

## Building blocks

- `parlab.circular_queue.CircularQueue(capacity)`: fixed-capacity FIFO with
  `len()`, `capacity`, `is_full()` and `is_empty()`; `enqueue` raises
  `QueueFullError` when full and `dequeue` raises `QueueEmptyError` when
  empty. A capacity below 1 raises `ValueError`.
- `parlab.barrier.Barrier(num_workers)`: a reusable barrier; `wait()` blocks
  until all workers arrive and returns the number of the round completed.
- `parlab.timer.Timer`: `start`, `stop` (optionally weighted), `total`,
  `next`, printing reports, and use as a context manager.
- `parlab.sorting`: `insertion_sort`, `median` and `quick_sort`, each taking
  an optional `less` predicate; the sorts work in place.
- `parlab.cliopts.Options`: declare options in groups, parse an argument
  list, read typed values, and render help text. Value types come from
  `parlab.optvalues.value` and `parlab.optvalues.list_value` with a
  `ValueKind` (`INT8` to `UINT64`, `BOOL`, `STRING`, `FLOAT`, `DOUBLE`);
  errors derive from `parlab.optvalues.OptionError`.

```python
from parlab.cliopts import Options
from parlab.optvalues import ValueKind, value

opts = Options("demo", "A demonstration")
opts.add_option("", "n,count", "How many", value(ValueKind.INT32).default_value("3"), "")
result = opts.parse(["--count", "5"])   # arguments without the program name
print(result["count"].value())          # 5
print(opts.help())
```

## What it does not do

The "parallel" PageRank and triangle counts run every rank one after another
in a single process; nothing is spread over several processes or machines,
and the reported communication times cover only the in-process combining
steps. The throughput benchmark ships only the single-lock `LockedQueue`.