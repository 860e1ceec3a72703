"""Directed graph in compressed sparse row/column form."""

from __future__ import annotations

from array import array
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

PathLike = Union[str, Path]


@dataclass
class Vertex:
    """Sorted out- and in-neighbour lists of one vertex."""

    out_neighbors: List[int] = field(default_factory=list)
    in_neighbors: List[int] = field(default_factory=list)

    @property
    def out_degree(self) -> int:
        return len(self.out_neighbors)

    @property
    def in_degree(self) -> int:
        return len(self.in_neighbors)


def _read_ints(path: Path) -> array:
    data = array("i")
    raw = path.read_bytes()
    usable = len(raw) - len(raw) % data.itemsize
    data.frombytes(raw[:usable])
    return data


def _split_adjacency(
    contents: array, n: int, m: int, path: Path
) -> List[List[int]]:
    if len(contents) < n + m + 2:
        raise ValueError(f"{path} is too short for {n} vertices and {m} edges")
    offsets = contents[2:n + 2]
    edges = contents[n + 2:n + 2 + m]
    lists = []
    for i, start in enumerate(offsets):
        end = m if i == n - 1 else offsets[i + 1]
        if start < 0 or end < start or end > m:
            raise ValueError(f"{path} has invalid offsets at vertex {i}")
        lists.append(sorted(edges[start:end]))
    return lists


def _offsets(adjacency: Sequence[List[int]]) -> List[int]:
    offsets = []
    position = 0
    for neighbors in adjacency:
        offsets.append(position)
        position += len(neighbors)
    return offsets


class Graph:
    """Directed graph with sorted adjacency lists in both directions."""

    def __init__(self, vertices: List[Vertex], m: int) -> None:
        self.vertices = vertices
        self.n = len(vertices)
        self.m = m

    def __repr__(self) -> str:
        return f"Graph(n={self.n}, m={self.m})"

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int]]) -> "Graph":
        """Build a graph of ``n`` vertices from (source, target) pairs."""
        vertices = [Vertex() for _ in range(n)]
        m = 0
        for u, v in edges:
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"edge ({u}, {v}) is outside 0..{n - 1}")
            vertices[u].out_neighbors.append(v)
            vertices[v].in_neighbors.append(u)
            m += 1
        for vertex in vertices:
            vertex.out_neighbors.sort()
            vertex.in_neighbors.sort()
        return cls(vertices, m)

    @classmethod
    def read_binary(cls, path: PathLike) -> "Graph":
        """Read ``path.csr`` and ``path.csc`` (32-bit: n, m, offsets, edges)."""
        csr_path = Path(f"{path}.csr")
        csc_path = Path(f"{path}.csc")
        csr = _read_ints(csr_path)
        csc = _read_ints(csc_path)
        if len(csr) < 2:
            raise ValueError(f"{csr_path} has no header")
        n, m = csr[0], csr[1]
        if n < 0 or m < 0:
            raise ValueError(f"{csr_path} has a negative size in its header")
        outs = _split_adjacency(csr, n, m, csr_path)
        ins = _split_adjacency(csc, n, m, csc_path)
        vertices = [Vertex(out, inn) for out, inn in zip(outs, ins)]
        return cls(vertices, m)

    def save_binary(self, path: PathLike) -> None:
        """Write the graph as ``path.csr`` and ``path.csc``."""
        for suffix, adjacency in (
            ("csr", [v.out_neighbors for v in self.vertices]),
            ("csc", [v.in_neighbors for v in self.vertices]),
        ):
            data = array("i", [self.n, self.m])
            data.extend(_offsets(adjacency))
            for neighbors in adjacency:
                data.extend(neighbors)
            Path(f"{path}.{suffix}").write_bytes(data.tobytes())

    def write_edge_lists(self, output_prefix: PathLike = "/tmp/output/a") -> None:
        """Write out-edges to ``<prefix>1`` and in-edges to ``<prefix>2``.

        Each line is ``vertex neighbour``, neighbours in descending order.
        """
        print("Graph :")
        print(f"n : {self.n}")
        print(f"m : {self.m}")
        print("Parsing outEdges")
        self._write_lists(Path(f"{output_prefix}1"), lambda v: v.out_neighbors)
        print("Parsing inEdges")
        self._write_lists(Path(f"{output_prefix}2"), lambda v: v.in_neighbors)

    def _write_lists(self, path: Path, neighbors_of) -> None:
        with path.open("w") as handle:
            for i, vertex in enumerate(self.vertices):
                for neighbor in sorted(neighbors_of(vertex), reverse=True):
                    handle.write(f"{i} {neighbor}\n")