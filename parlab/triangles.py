"""Triangle counting over a directed graph, serial and with simulated ranks."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .cliopts import Options
from .graph import Graph
from .optvalues import ValueKind, value
from .pagerank import Partition, partition_by_edges
from .timer import Timer


@dataclass
class TriangleStats:
    """Per-rank statistics: edges scanned, triangles found, communication time."""

    rank: int
    edges: int
    triangles: int
    communication_time: float


@dataclass
class TriangleResult:
    """Total triangle count, wall time and per-rank statistics."""

    triangle_count: int
    time_taken: float
    stats: List[TriangleStats] = field(default_factory=list)

    @property
    def unique_triangles(self) -> int:
        """Each triangle is found three times; this is the count divided by 3."""
        return self.triangle_count // 3


def count_common(
    array1: Sequence[int], array2: Sequence[int], u: int, v: int
) -> int:
    """Count values shared by two sorted sequences, ignoring ``u`` and ``v``.

    Returns 0 for a self-loop (``u == v``).
    """
    if u == v:
        return 0
    count = 0
    i = j = 0
    len1, len2 = len(array1), len(array2)
    while i < len1 and j < len2:
        a, b = array1[i], array2[j]
        if a == b:
            if a != u and a != v:
                count += 1
            i += 1
            j += 1
        elif a < b:
            i += 1
        else:
            j += 1
    return count


def _count_range(graph: Graph, part: Partition) -> tuple:
    """Return (edges scanned, triangles found) for the vertices in ``part``."""
    edges = 0
    triangles = 0
    vertices = graph.vertices
    for u in range(part.start, part.end):
        vertex = vertices[u]
        edges += vertex.out_degree
        for v in vertex.out_neighbors:
            triangles += count_common(
                vertex.in_neighbors, vertices[v].out_neighbors, u, v
            )
    return edges, triangles


def triangle_count_serial(graph: Graph) -> TriangleResult:
    """Count triangles over all vertices on one worker."""
    timer = Timer()
    timer.start()
    _, triangles = _count_range(graph, Partition(0, graph.n))
    return TriangleResult(triangles, timer.stop())


def triangle_count_parallel(graph: Graph, world_size: int) -> TriangleResult:
    """Count triangles as ``world_size`` ranks over edge-balanced partitions.

    Rank 0 gathers the counts of the other ranks and adds them up; its
    communication time covers that gathering.
    """
    timer = Timer()
    timer.start()
    parts = partition_by_edges(graph, world_size)
    counted = [_count_range(graph, part) for part in parts]

    gather = Timer()
    gather.start()
    total = sum(triangles for _, triangles in counted)
    root_comm = gather.stop()

    stats = [
        TriangleStats(rank, edges, triangles, root_comm if rank == 0 else 0.0)
        for rank, (edges, triangles) in enumerate(counted)
    ]
    return TriangleResult(total, timer.stop(), stats)


def _build_options() -> Options:
    options = Options(
        "triangle_counting_serial",
        "Count the number of triangles using serial and parallel execution",
    )
    options.add_options(
        "custom",
        [
            ("strategy", "Strategy to be used",
             value(ValueKind.UINT32).default_value("1")),
            ("inputFile", "Input graph file path",
             value(ValueKind.STRING).default_value("/scratch/input_graphs/roadNet-CA")),
            ("worldSize", "Number of ranks to run (1 runs serially)",
             value(ValueKind.UINT32).default_value("1")),
        ],
    )
    return options


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    args = sys.argv[1:] if argv is None else list(argv)
    parsed = _build_options().parse(args)
    strategy = parsed["strategy"].value()
    input_file = parsed["inputFile"].value()
    world_size = parsed["worldSize"].value()

    if world_size > 1:
        print(f"World size : {world_size}")
    print(f"Communication strategy : {strategy}")

    graph = Graph.read_binary(input_file)

    if world_size > 1:
        print("rank, edges, triangle_count, communication_time")
        result = triangle_count_parallel(graph, world_size)
        for stat in result.stats:
            print(
                f"{stat.rank}, {stat.edges}, {stat.triangles}, "
                f"{stat.communication_time:f}"
            )
    else:
        result = triangle_count_serial(graph)

    print(f"Number of triangles : {result.triangle_count}")
    print(f"Number of unique triangles : {result.unique_triangles}")
    print(f"Time taken (in seconds) : {result.time_taken:f}")
    return 0