"""Random geometric graph generation."""

from __future__ import annotations

import heapq
import math
import random

from .common import Edge, Graph, Point, dist2, uniform

DEFAULT_N = 20000
DEFAULT_MAX_NEIGHBORS = 60
DEFAULT_P_CONNECTION = 0.5
DEFAULT_SEED = 43


def generate(n: int, max_neighbors: int, p_connection: float, rng: random.Random) -> Graph:
    """Place ``n`` points in the unit square and connect each to near neighbours."""
    graph = Graph(n)
    if n == 0:
        return graph
    graph.vertex_info = [Point(uniform(rng), uniform(rng)) for _ in range(n)]

    buckets = math.isqrt(n)

    def cell(coord: float) -> int:
        return min(int(coord * buckets), buckets - 1)

    table: list[list[list[int]]] = [[[] for _ in range(buckets)] for _ in range(buckets)]
    for i, p in enumerate(graph.vertex_info):
        table[cell(p.x)][cell(p.y)].append(i)

    slack = math.sqrt(2) / buckets
    offsets = sorted(
        (max(0.0, math.hypot(i / buckets, j / buckets) - slack) ** 2, (i, j))
        for i in range(-buckets, buckets + 1)
        for j in range(-buckets, buckets + 1)
    )

    proposals: list[Edge] = []
    for i, p in enumerate(graph.vertex_info):
        mx, my = cell(p.x), cell(p.y)
        candidates: list[tuple[float, int]] = []
        stop_if = 1e9
        for d, (dx, dy) in offsets:
            if d > stop_if:
                break
            x1, y1 = mx + dx, my + dy
            if not (0 <= x1 < buckets and 0 <= y1 < buckets):
                continue
            was_size = len(candidates)
            candidates.extend((dist2(p, graph.vertex_info[j]), j) for j in table[x1][y1])
            if len(candidates) > max_neighbors >= was_size:
                stop_if = heapq.nsmallest(max_neighbors + 1, candidates)[-1][0]

        for _, j in heapq.nsmallest(max_neighbors + 1, candidates):
            if j == i:
                continue
            if uniform(rng) > p_connection:
                continue
            proposals.append(Edge.random(i, j, rng))

    for e in proposals:
        if e.u > e.v:
            e.u, e.v = e.v, e.u
    proposals.sort(key=lambda e: (e.u, e.v))

    merged: list[Edge] = []
    for e in proposals:
        if merged and e.v == merged[-1].v:
            merged[-1].w += e.w
        else:
            merged.append(e)
    # The final group is not kept.
    merged = merged[:-1]

    graph.edge_list = merged
    graph.from_edge_list()
    return graph


def load_or_generate(path=None) -> Graph:
    """Read the graph at ``path``, or generate the default instance when it is None."""
    if path is None:
        return generate(
            DEFAULT_N,
            DEFAULT_MAX_NEIGHBORS,
            DEFAULT_P_CONNECTION,
            random.Random(DEFAULT_SEED),
        )
    return Graph.read(path)