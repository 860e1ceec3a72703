from array import array

import pytest

from parlab.graph import Graph, Vertex

EDGES = [(0, 2), (0, 1), (1, 2), (2, 0), (3, 0)]


def _graph():
    return Graph.from_edges(4, EDGES)


def test_from_edges_sizes():
    g = _graph()
    assert g.n == 4
    assert g.m == len(EDGES)


def test_from_edges_sorted_neighbors():
    g = _graph()
    assert g.vertices[0].out_neighbors == [1, 2]
    assert g.vertices[0].in_neighbors == [2, 3]
    assert g.vertices[2].in_neighbors == [0, 1]


def test_degrees_sum_to_edge_count():
    g = _graph()
    assert sum(v.out_degree for v in g.vertices) == g.m
    assert sum(v.in_degree for v in g.vertices) == g.m


def test_from_edges_rejects_out_of_range():
    with pytest.raises(ValueError):
        Graph.from_edges(2, [(0, 5)])


def test_vertex_degree_properties():
    v = Vertex([4, 5], [1])
    assert (v.out_degree, v.in_degree) == (2, 1)


def test_binary_round_trip(tmp_path):
    g = _graph()
    base = tmp_path / "g"
    g.save_binary(base)
    loaded = Graph.read_binary(base)
    assert loaded.n == g.n and loaded.m == g.m
    assert [v.out_neighbors for v in loaded.vertices] == [
        v.out_neighbors for v in g.vertices
    ]
    assert [v.in_neighbors for v in loaded.vertices] == [
        v.in_neighbors for v in g.vertices
    ]


def test_read_binary_sorts_unsorted_lists(tmp_path):
    base = tmp_path / "h"
    # n=3, m=3: vertex 0 -> 2, 1 ; vertex 1 -> none ; vertex 2 -> 0
    (tmp_path / "h.csr").write_bytes(array("i", [3, 3, 0, 2, 2, 2, 1, 0]).tobytes())
    (tmp_path / "h.csc").write_bytes(array("i", [3, 3, 0, 1, 2, 2, 0, 0]).tobytes())
    g = Graph.read_binary(base)
    assert g.vertices[0].out_neighbors == [1, 2]
    assert g.vertices[1].out_neighbors == []
    assert g.vertices[2].out_neighbors == [0]
    assert g.vertices[1].in_neighbors == [0]


def test_read_binary_truncated(tmp_path):
    base = tmp_path / "t"
    (tmp_path / "t.csr").write_bytes(array("i", [3, 5, 0]).tobytes())
    (tmp_path / "t.csc").write_bytes(array("i", [3, 5, 0]).tobytes())
    with pytest.raises(ValueError):
        Graph.read_binary(base)


def test_read_binary_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Graph.read_binary(tmp_path / "absent")


def test_write_edge_lists(tmp_path, capsys):
    g = _graph()
    prefix = tmp_path / "out"
    g.write_edge_lists(prefix)
    out_lines = (tmp_path / "out1").read_text().splitlines()
    in_lines = (tmp_path / "out2").read_text().splitlines()
    assert out_lines[:2] == ["0 2", "0 1"]
    assert len(out_lines) == g.m
    assert len(in_lines) == g.m
    assert sorted(tuple(map(int, l.split())) for l in out_lines) == sorted(EDGES)
    printed = capsys.readouterr().out
    assert "n : 4" in printed and "Parsing inEdges" in printed
    assert g.vertices[0].out_neighbors == [1, 2]