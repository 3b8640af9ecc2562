"""Enumeration of small dense subgraphs and their minimum colouring cost."""

from __future__ import annotations

import random
import sys
from itertools import chain, combinations
from typing import Iterable, Sequence

from .common import INF, Graph, SubGraph

EdgeIndexer = dict[tuple[int, int], tuple[int, float]]


def edge_indexer(graph: Graph) -> EdgeIndexer:
    """Map each vertex pair, in both directions, to (edge index, weight)."""
    indexer: EdgeIndexer = {}
    for index, e in enumerate(graph.edge_list):
        if (e.u, e.v) in indexer:
            raise ValueError(f"duplicate edge ({e.u}, {e.v})")
        indexer[(e.u, e.v)] = (index, e.w)
        indexer[(e.v, e.u)] = (index, e.w)
    return indexer


def _forward_adjacency(graph: Graph, order: Sequence[int]) -> list[list[int]]:
    """Keep only neighbours that come no earlier than the vertex in ``order``."""
    pos = [0] * graph.n
    for rank, v in enumerate(order):
        pos[v] = rank
    return [
        [e.v for e in adjacency if pos[e.v] >= pos[u]]
        for u, adjacency in enumerate(graph.edges)
    ]


def _degree_order(graph: Graph) -> list[int]:
    return sorted(range(graph.n), key=lambda v: len(graph[v]))


def list_quads(graph: Graph, indexer: EdgeIndexer) -> list[SubGraph]:
    """List all 4-cliques; the cost of each is its lightest edge."""
    g = _forward_adjacency(graph, _degree_order(graph))
    count = [0] * graph.n
    result: list[SubGraph] = []

    for i in range(graph.n):
        for j in g[i]:
            count[j] += 1
        for j in g[i]:
            for k in g[j]:
                count[k] += 1
            for k in g[j]:
                if count[k] < 2:
                    continue
                for l in g[k]:
                    if count[l] != 2:
                        continue
                    sub = SubGraph([], 1e9)
                    for a, b in combinations((i, j, k, l), 2):
                        index, weight = indexer[(a, b)]
                        sub.e.append(index)
                        sub.min_cost = min(sub.min_cost, weight)
                    result.append(sub)
            for k in g[j]:
                count[k] -= 1
        for j in g[i]:
            count[j] -= 1
    return result


def from_vertices(vertices: Sequence[int], indexer: EdgeIndexer) -> SubGraph:
    """Build the induced subgraph and find its cheapest three-colouring."""
    size = len(vertices)
    cost = [[0.0] * size for _ in range(size)]
    edges: list[int] = []
    for (i, a), (j, b) in combinations(enumerate(vertices), 2):
        if (a, b) not in indexer:
            continue
        index, weight = indexer[(a, b)]
        edges.append(index)
        cost[i][j] = cost[j][i] = weight

    coloring = [0] * size

    def search(u: int, max_color: int, current: float) -> float:
        if u == size:
            return current
        best = INF
        for color in range(max_color + 1):
            coloring[u] = color
            extra = sum(cost[u][v] for v in range(u) if coloring[v] == color)
            best = min(best, search(u + 1, min(2, max(max_color, color + 1)), current + extra))
        return best

    return SubGraph(edges, search(0, 0, 0.0))


def _enumerate(g: list[list[int]], size: int, slack_cap: int) -> Iterable[list[int]]:
    """Yield vertex stacks of ``size`` along forward edges with enough shared neighbours."""
    count = [0] * len(g)
    stack: list[int] = []

    def rec(u: int):
        stack.append(u)
        if len(stack) == size:
            yield list(stack)
        else:
            for i in g[u]:
                count[i] += 1
            for i in g[u]:
                if count[i] < min(len(stack), slack_cap):
                    continue
                yield from rec(i)
            for i in g[u]:
                count[i] -= 1
        stack.pop()

    for u in range(len(g)):
        yield from rec(u)


def list_cliques(graph: Graph, indexer: EdgeIndexer, size: int) -> list[SubGraph]:
    """List every clique of ``size`` vertices."""
    g = _forward_adjacency(graph, _degree_order(graph))
    return [from_vertices(stack, indexer) for stack in _enumerate(g, size, size)]


def list_almost_cliques(
    graph: Graph, indexer: EdgeIndexer, size: int, rng: random.Random
) -> list[SubGraph]:
    """List vertex sets found over three random orders, deduplicated and sorted."""
    found: set[tuple[int, ...]] = set()
    for _ in range(3):
        order = list(range(graph.n))
        rng.shuffle(order)
        g = _forward_adjacency(graph, order)
        found.update(tuple(sorted(stack)) for stack in _enumerate(g, size, size - 1))
    return [from_vertices(list(v), indexer) for v in sorted(found)]


def unite(groups: Iterable[Iterable[SubGraph]]) -> list[SubGraph]:
    """Concatenate several subgraph lists."""
    return list(chain.from_iterable(groups))


def list_subgraphs(graph: Graph) -> tuple[list[SubGraph], int]:
    """List the 4-, 5- and 6-cliques and the size of the edge index space."""
    indexer = edge_indexer(graph)
    result = unite(list_cliques(graph, indexer, size) for size in (4, 5, 6))
    print(f"size = {len(result)}", file=sys.stderr)
    return result, len(indexer)