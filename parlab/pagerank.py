"""Push-based PageRank, serial and with simulated edge-balanced ranks."""

from __future__ import annotations

import struct
import sys
from array import array
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from .cliopts import Options
from .graph import Graph
from .optvalues import ValueKind, value
from .timer import Timer

INIT_PAGE_RANK_FLOAT = 1.0
INIT_PAGE_RANK_INT = 100000
DAMPING = 0.85

Number = Union[int, float]


@dataclass(frozen=True)
class Partition:
    """A contiguous range of vertices ``[start, end)`` owned by one rank."""

    start: int
    end: int


@dataclass
class RankStats:
    """Per-rank statistics: edges processed and time spent communicating."""

    rank: int
    num_edges: int
    communication_time: float


@dataclass
class PageRankResult:
    """Final ranks, their sum, the wall time and per-rank statistics."""

    sum_of_page_ranks: Number
    time_taken: float
    ranks: List[Number]
    stats: List[RankStats] = field(default_factory=list)


def _f32(x: float) -> float:
    return struct.unpack("f", struct.pack("f", x))[0]


def _filled(n: int, fill: Number, use_int: bool) -> array:
    return array("q" if use_int else "f", [fill]) * n


def _damp(x: Number, use_int: bool) -> Number:
    if use_int:
        return 15000 + (5 * x) // 6
    return 1 - DAMPING + DAMPING * x


def _push(graph: Graph, curr: array, nxt: array, part: Partition, use_int: bool) -> int:
    """Push the ranks of the vertices in ``part`` to their out-neighbours."""
    edges = 0
    for u in range(part.start, part.end):
        neighbors = graph.vertices[u].out_neighbors
        degree = len(neighbors)
        edges += degree
        if not degree:
            continue
        share = curr[u] // degree if use_int else curr[u] / degree
        for v in neighbors:
            nxt[v] += share
    return edges


def _damped(nxt: array, use_int: bool) -> array:
    return array(nxt.typecode, (_damp(x, use_int) for x in nxt))


def _local_sum(ranks: array, part: Partition, use_int: bool) -> Number:
    if use_int:
        return sum(ranks[part.start:part.end])
    total = 0.0
    for x in ranks[part.start:part.end]:
        total = _f32(total + x)
    return total


def _initial(graph: Graph, use_int: bool) -> array:
    init = INIT_PAGE_RANK_INT if use_int else INIT_PAGE_RANK_FLOAT
    return _filled(graph.n, init, use_int)


def partition_by_edges(graph: Graph, parts: int) -> List[Partition]:
    """Split the vertices into ``parts`` ranges of roughly equal out-edge count.

    Each range grows until it holds at least ``m // parts`` edges; the last
    range always ends at the final vertex.
    """
    if parts < 1:
        raise ValueError("the number of partitions must be at least 1")
    max_edges = graph.m // parts
    partitions: List[Partition] = []
    end = 0
    for _ in range(parts):
        start = end
        count = 0
        while count < max_edges and end < graph.n:
            count += graph.vertices[end].out_degree
            end += 1
        partitions.append(Partition(start, end))
    partitions[-1] = Partition(partitions[-1].start, graph.n)
    return partitions


def page_rank_serial(graph: Graph, max_iters: int, use_int: bool = False) -> PageRankResult:
    """Run ``max_iters`` push-based PageRank iterations on one worker."""
    timer = Timer()
    timer.start()
    whole = Partition(0, graph.n)
    curr = _initial(graph, use_int)
    for _ in range(max_iters):
        nxt = _filled(graph.n, 0, use_int)
        _push(graph, curr, nxt, whole, use_int)
        curr = _damped(nxt, use_int)
    total = _local_sum(curr, whole, use_int)
    return PageRankResult(total, timer.stop(), list(curr))


def page_rank_parallel(
    graph: Graph, max_iters: int, world_size: int, use_int: bool = False
) -> PageRankResult:
    """Run PageRank as ``world_size`` ranks over edge-balanced partitions.

    Each rank pushes its own vertices into a private buffer; rank 0 adds the
    buffers of ranks 1, 2, ... to its own, and every rank then applies the
    damping step to the combined values. The final sum is rank 0's local sum
    plus the local sums of the other ranks, in rank order.
    """
    timer = Timer()
    timer.start()
    parts = partition_by_edges(graph, world_size)
    edges = [0] * world_size
    root_comm = 0.0
    curr = _initial(graph, use_int)

    for _ in range(max_iters):
        buffers = []
        for rank, part in enumerate(parts):
            buffer = _filled(graph.n, 0, use_int)
            edges[rank] += _push(graph, curr, buffer, part, use_int)
            buffers.append(buffer)

        sync = Timer()
        sync.start()
        combined = buffers[0]
        for buffer in buffers[1:]:
            for j, x in enumerate(buffer):
                combined[j] += x
        root_comm += sync.stop()

        curr = _damped(combined, use_int)

    total = _local_sum(curr, parts[0], use_int)
    gather = Timer()
    gather.start()
    for part in parts[1:]:
        sub_sum = _local_sum(curr, part, use_int)
        total = total + sub_sum if use_int else _f32(total + sub_sum)
    root_comm += gather.stop()

    stats = [RankStats(0, edges[0], root_comm)]
    stats.extend(RankStats(rank, edges[rank], 0.0) for rank in range(1, world_size))
    return PageRankResult(total, timer.stop(), list(curr), stats)


def _build_options() -> Options:
    options = Options(
        "page_rank_push", "Calculate page_rank using serial and parallel execution"
    )
    options.add_options(
        "",
        [
            ("nIterations", "Maximum number of iterations",
             value(ValueKind.UINT32).default_value("20")),
            ("strategy", "Strategy to be used",
             value(ValueKind.UINT32).default_value("1")),
            ("inputFile", "Input graph file path",
             value(ValueKind.STRING).default_value("/scratch/input_graphs/roadNet-CA")),
            ("worldSize", "Number of ranks to run (1 runs serially)",
             value(ValueKind.UINT32).default_value("1")),
            ("useInt", "Use integer page ranks", value(ValueKind.BOOL)),
        ],
    )
    return options


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    args = sys.argv[1:] if argv is None else list(argv)
    parsed = _build_options().parse(args)
    strategy = parsed["strategy"].value()
    max_iterations = parsed["nIterations"].value()
    input_file = parsed["inputFile"].value()
    world_size = parsed["worldSize"].value()
    use_int = parsed["useInt"].value()

    print("Using INT" if use_int else "Using FLOAT")
    print(f"Communication strategy : {strategy}")
    print(f"Iterations : {max_iterations}")

    graph = Graph.read_binary(input_file)

    if world_size > 1:
        print("rank, num_edges, communication_time")
        result = page_rank_parallel(graph, max_iterations, world_size, use_int)
        for stat in result.stats:
            print(f"{stat.rank}, {stat.num_edges}, {stat.communication_time:f}")
    else:
        result = page_rank_serial(graph, max_iterations, use_int)

    if use_int:
        print(f"Sum of page rank : {result.sum_of_page_ranks}")
    else:
        print(f"Sum of page rank : {result.sum_of_page_ranks:f}")
    print(f"Time taken (in seconds) : {result.time_taken:f}")
    return 0