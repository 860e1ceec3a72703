import random

import pytest

from parlab.graph import Graph
from parlab.triangles import (
    TriangleResult,
    count_common,
    main,
    triangle_count_parallel,
    triangle_count_serial,
)


def _cycle():
    return Graph.from_edges(3, [(0, 1), (1, 2), (2, 0)])


def _random_graph(seed, n=30, m=150):
    rng = random.Random(seed)
    edges = [(rng.randrange(n), rng.randrange(n)) for _ in range(m)]
    return Graph.from_edges(n, edges)


def test_count_common_self_loop_is_zero():
    assert count_common([1, 2, 3], [1, 2, 3], 4, 4) == 0


def test_count_common_ignores_endpoints():
    shared = [1, 2, 3]
    assert count_common(shared, shared, 1, 2) == count_common(shared, shared, 8, 9) - 2


def test_count_common_disjoint():
    assert count_common([1, 3, 5], [2, 4, 6], 0, 9) == 0


def test_count_common_empty_inputs():
    assert count_common([], [1, 2], 0, 5) == 0
    assert count_common([1, 2], [], 0, 5) == 0


def test_count_common_symmetric():
    a = [0, 2, 4, 6, 8, 10]
    b = [1, 2, 3, 4, 5, 6]
    assert count_common(a, b, 20, 21) == count_common(b, a, 20, 21)


def test_directed_cycle_worked_example():
    result = triangle_count_serial(_cycle())
    assert result.triangle_count == 3
    assert result.unique_triangles == 1


def test_graph_without_edges_has_no_triangles():
    result = triangle_count_serial(Graph.from_edges(4, []))
    assert result.triangle_count == 0
    assert result.time_taken >= 0.0


def test_unique_is_count_divided_by_three():
    result = TriangleResult(triangle_count=10, time_taken=0.0)
    assert result.unique_triangles == 10 // 3


@pytest.mark.parametrize("world_size", [1, 2, 3, 5])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_parallel_matches_serial(world_size, seed):
    graph = _random_graph(seed)
    serial = triangle_count_serial(graph)
    parallel = triangle_count_parallel(graph, world_size)
    assert parallel.triangle_count == serial.triangle_count
    assert len(parallel.stats) == world_size


@pytest.mark.parametrize("world_size", [1, 2, 4])
def test_parallel_stats_cover_all_edges(world_size):
    graph = _random_graph(7)
    result = triangle_count_parallel(graph, world_size)
    assert sum(s.edges for s in result.stats) == graph.m
    assert sum(s.triangles for s in result.stats) == result.triangle_count
    assert [s.rank for s in result.stats] == list(range(world_size))


def test_parallel_rejects_zero_ranks():
    with pytest.raises(ValueError):
        triangle_count_parallel(_cycle(), 0)


def test_main_serial(tmp_path, capsys):
    base = tmp_path / "g"
    _cycle().save_binary(base)
    assert main(["--inputFile", str(base)]) == 0
    out = capsys.readouterr().out
    assert "Communication strategy : 1" in out
    assert "Number of triangles : 3" in out
    assert "Number of unique triangles : 1" in out


def test_main_parallel_matches_serial(tmp_path, capsys):
    base = tmp_path / "g"
    graph = _random_graph(3)
    graph.save_binary(base)
    expected = triangle_count_serial(graph).triangle_count
    main(["--inputFile", str(base), "--worldSize", "3"])
    out = capsys.readouterr().out
    assert "World size : 3" in out
    assert "rank, edges, triangle_count, communication_time" in out
    assert f"Number of triangles : {expected}" in out