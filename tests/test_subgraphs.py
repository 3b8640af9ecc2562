import math
import random

import pytest

from tricolor.common import Edge, Graph, SubGraph
from tricolor.subgraphs import (
    edge_indexer,
    from_vertices,
    list_almost_cliques,
    list_cliques,
    list_quads,
    list_subgraphs,
    unite,
)


def make_graph(n, triples):
    graph = Graph(n, edge_list=[Edge(u, v, w) for u, v, w in triples])
    graph.from_edge_list()
    return graph


def complete(n, weight=None, skip=()):
    triples = []
    for u in range(n):
        for v in range(u + 1, n):
            if (u, v) in skip:
                continue
            triples.append((u, v, weight if weight is not None else 1.0 + len(triples)))
    return make_graph(n, triples)


def weights_of(graph, sub):
    return [graph.edge_list[i].w for i in sub.e]


def test_edge_indexer_both_directions():
    graph = make_graph(3, [(0, 1, 0.5), (1, 2, 1.5)])
    indexer = edge_indexer(graph)
    assert indexer[(0, 1)] == (0, 0.5)
    assert indexer[(1, 0)] == (0, 0.5)
    assert indexer[(2, 1)] == (1, 1.5)
    assert len(indexer) == 4


def test_edge_indexer_duplicate_raises():
    graph = make_graph(2, [(0, 1, 0.5), (0, 1, 0.7)])
    with pytest.raises(ValueError):
        edge_indexer(graph)


def test_list_quads_on_k4():
    graph = complete(4)
    quads = list_quads(graph, edge_indexer(graph))
    assert len(quads) == 1
    assert sorted(quads[0].e) == list(range(math.comb(4, 2)))
    assert quads[0].min_cost == min(e.w for e in graph.edge_list)


def test_list_quads_on_k5_count():
    graph = complete(5)
    assert len(list_quads(graph, edge_indexer(graph))) == math.comb(5, 4)


def test_from_vertices_triangle_costs_nothing():
    graph = complete(3)
    sub = from_vertices([0, 1, 2], edge_indexer(graph))
    assert sub.min_cost == 0.0
    assert sorted(sub.e) == [0, 1, 2]


def test_from_vertices_k4_cost_is_lightest_edge():
    graph = complete(4)
    sub = from_vertices([0, 1, 2, 3], edge_indexer(graph))
    assert sub.min_cost == pytest.approx(min(weights_of(graph, sub)))


def test_from_vertices_k5_unit_weights():
    graph = complete(5, weight=1.0)
    sub = from_vertices(list(range(5)), edge_indexer(graph))
    assert sub.min_cost == pytest.approx(2.0)


def test_from_vertices_skips_missing_pairs():
    graph = make_graph(3, [(0, 1, 0.5)])
    sub = from_vertices([0, 1, 2], edge_indexer(graph))
    assert sub.e == [0]


def test_list_cliques_counts_on_k5():
    graph = complete(5)
    indexer = edge_indexer(graph)
    fours = list_cliques(graph, indexer, 4)
    assert len(fours) == math.comb(5, 4)
    assert len(list_cliques(graph, indexer, 5)) == 1
    assert list_cliques(graph, indexer, 6) == []
    for sub in fours:
        assert len(sub.e) == math.comb(4, 2)
        assert sub.min_cost == pytest.approx(min(weights_of(graph, sub)))


def test_list_cliques_none_in_path():
    graph = make_graph(4, [(0, 1, 1.0), (1, 2, 1.0), (2, 3, 1.0)])
    assert list_cliques(graph, edge_indexer(graph), 3) == []


def test_almost_cliques_match_cliques_on_k5():
    graph = complete(5)
    indexer = edge_indexer(graph)
    almost = list_almost_cliques(graph, indexer, 4, random.Random(4))
    exact = list_cliques(graph, indexer, 4)
    assert sorted(sorted(s.e) for s in almost) == sorted(sorted(s.e) for s in exact)


def test_almost_cliques_missing_edge():
    graph = complete(5, skip={(0, 1)})
    assert list_almost_cliques(graph, edge_indexer(graph), 5, random.Random(4)) == []


def test_unite_concatenates():
    a, b, c = SubGraph([0], 1.0), SubGraph([1], 2.0), SubGraph([2], 3.0)
    assert unite([[a], [b, c], []]) == [a, b, c]


def test_list_subgraphs_on_k5(capsys):
    graph = complete(5)
    subgraphs, max_edge = list_subgraphs(graph)
    assert len(subgraphs) == math.comb(5, 4) + 1
    assert max_edge == 2 * len(graph.edge_list)
    assert f"size = {len(subgraphs)}" in capsys.readouterr().err