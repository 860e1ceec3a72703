import pytest

from parlab.graph import Graph
from parlab.pagerank import (
    Partition,
    main,
    page_rank_parallel,
    page_rank_serial,
    partition_by_edges,
)


def _cycle(n):
    return Graph.from_edges(n, [(i, (i + 1) % n) for i in range(n)])


def _mixed():
    edges = [
        (0, 1), (0, 2), (0, 3), (1, 2), (2, 0), (2, 3), (3, 4),
        (4, 0), (4, 1), (4, 5), (5, 6), (6, 7), (7, 5), (7, 0),
    ]
    return Graph.from_edges(8, edges)


def test_partition_of_uniform_graph():
    parts = partition_by_edges(_cycle(4), 2)
    assert parts == [Partition(0, 2), Partition(2, 4)]


def test_partition_covers_all_vertices_contiguously():
    graph = _mixed()
    for count in range(1, 6):
        parts = partition_by_edges(graph, count)
        assert len(parts) == count
        assert parts[0].start == 0
        assert parts[-1].end == graph.n
        for left, right in zip(parts, parts[1:]):
            assert left.end == right.start


def test_partition_rejects_zero_parts():
    with pytest.raises(ValueError):
        partition_by_edges(_mixed(), 0)


def test_zero_iterations_keeps_initial_ranks():
    graph = _mixed()
    result = page_rank_serial(graph, 0, use_int=True)
    assert result.ranks == [100000] * graph.n
    assert result.sum_of_page_ranks == 100000 * graph.n
    float_result = page_rank_serial(graph, 0)
    assert float_result.sum_of_page_ranks == pytest.approx(float(graph.n))


def test_cycle_ranks_stay_equal():
    graph = _cycle(5)
    result = page_rank_serial(graph, 10)
    assert result.ranks == pytest.approx([1.0] * 5)
    int_result = page_rank_serial(graph, 4, use_int=True)
    assert len(set(int_result.ranks)) == 1


@pytest.mark.parametrize("world_size", [1, 2, 3, 4])
def test_parallel_matches_serial_in_int_mode(world_size):
    graph = _mixed()
    serial = page_rank_serial(graph, 7, use_int=True)
    parallel = page_rank_parallel(graph, 7, world_size, use_int=True)
    assert parallel.ranks == serial.ranks
    assert parallel.sum_of_page_ranks == serial.sum_of_page_ranks


@pytest.mark.parametrize("world_size", [1, 2, 3])
def test_parallel_close_to_serial_in_float_mode(world_size):
    graph = _mixed()
    serial = page_rank_serial(graph, 10)
    parallel = page_rank_parallel(graph, 10, world_size)
    assert parallel.ranks == pytest.approx(serial.ranks, rel=1e-5)
    assert parallel.sum_of_page_ranks == pytest.approx(
        serial.sum_of_page_ranks, rel=1e-5
    )


def test_parallel_with_one_rank_equals_serial_exactly():
    graph = _mixed()
    serial = page_rank_serial(graph, 6)
    parallel = page_rank_parallel(graph, 6, 1)
    assert parallel.ranks == serial.ranks
    assert parallel.sum_of_page_ranks == serial.sum_of_page_ranks


def test_parallel_stats_count_every_edge_each_iteration():
    graph = _mixed()
    result = page_rank_parallel(graph, 3, 3)
    assert [s.rank for s in result.stats] == [0, 1, 2]
    assert sum(s.num_edges for s in result.stats) == graph.m * 3
    assert result.stats[0].communication_time >= 0.0


def test_ranks_are_positive_and_sum_is_consistent():
    graph = _mixed()
    result = page_rank_serial(graph, 5, use_int=True)
    assert len(result.ranks) == graph.n
    assert all(r > 0 for r in result.ranks)
    assert sum(result.ranks) == result.sum_of_page_ranks


def test_main_serial_float(tmp_path, capsys):
    base = tmp_path / "g"
    _mixed().save_binary(base)
    assert main(["--inputFile", str(base), "--nIterations", "3"]) == 0
    out = capsys.readouterr().out
    assert "Using FLOAT" in out
    assert "Communication strategy : 1" in out
    assert "Iterations : 3" in out
    assert "Sum of page rank : " in out


def test_main_parallel_int(tmp_path, capsys):
    base = tmp_path / "g"
    graph = _mixed()
    graph.save_binary(base)
    args = ["--inputFile", str(base), "--nIterations", "2", "--worldSize", "2", "--useInt"]
    assert main(args) == 0
    out = capsys.readouterr().out
    assert "Using INT" in out
    assert "rank, num_edges, communication_time" in out
    expected = page_rank_serial(graph, 2, use_int=True).sum_of_page_ranks
    assert f"Sum of page rank : {expected}" in out