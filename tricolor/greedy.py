"""Greedy packings of edge-disjoint subgraphs giving lower bounds on colouring error."""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from .common import SubGraph

DYNAMIC_POOL_LIMIT = 500000


def _ratio(numerator: float, denominator: float) -> float:
    """Divide, mapping division by zero to a signed infinity (or zero for 0/0)."""
    if denominator:
        return numerator / denominator
    if numerator > 0:
        return math.inf
    if numerator < 0:
        return -math.inf
    return 0.0


def _take_greedily(
    subgraphs: Sequence[SubGraph],
    order: Iterable[int],
    taken: list[int],
    edge_taken: list[bool],
) -> float:
    """Take every subgraph in ``order`` whose edges are all free; return the added cost."""
    added = 0.0
    for i in order:
        sub = subgraphs[i]
        if any(edge_taken[ei] for ei in sub.e):
            continue
        taken[i] = 1
        for ei in sub.e:
            edge_taken[ei] = True
        added += sub.min_cost
    return added


def _greedy_in_order(
    subgraphs: Sequence[SubGraph], max_edge: int, order: Iterable[int]
) -> tuple[float, list[int]]:
    taken = [0] * len(subgraphs)
    edge_taken = [False] * max_edge
    total = _take_greedily(subgraphs, order, taken, edge_taken)
    return total, taken


def simple_baseline(subgraphs: Sequence[SubGraph], max_edge: int) -> tuple[float, list[int]]:
    """Take subgraphs in order of decreasing cost while their edges are free."""
    order = sorted(range(len(subgraphs)), key=lambda i: subgraphs[i].min_cost, reverse=True)
    return _greedy_in_order(subgraphs, max_edge, order)


def iterate_priority(
    subgraphs: Sequence[SubGraph], max_edge: int, priority: Sequence[float]
) -> list[float]:
    """Divide each priority by the summed priority of subgraphs sharing its edges."""
    by_edge = [0.0] * max_edge
    for sub, p in zip(subgraphs, priority):
        for ei in sub.e:
            by_edge[ei] += p
    return [
        _ratio(p, sum(by_edge[ei] - p for ei in sub.e))
        for sub, p in zip(subgraphs, priority)
    ]


@dataclass
class TwoMax:
    """The two largest values seen, and the index of the largest."""

    first_max: float = 0.0
    first_index: int = 0
    second_max: float = 0.0

    def update(self, value: float, index: int) -> None:
        if value > self.first_max:
            self.second_max = self.first_max
            self.first_max = value
            self.first_index = index
        elif value > self.second_max:
            self.second_max = value

    def other(self, index: int) -> float:
        """The largest value not owned by ``index``."""
        return self.second_max if index == self.first_index else self.first_max


def iterate_priority_by_max(
    subgraphs: Sequence[SubGraph], max_edge: int, priority: Sequence[float]
) -> list[float]:
    """Divide each priority by the summed strongest competitor on each of its edges."""
    by_edge = [TwoMax() for _ in range(max_edge)]
    for i, (sub, p) in enumerate(zip(subgraphs, priority)):
        for ei in sub.e:
            by_edge[ei].update(p, i)
    return [
        _ratio(p, sum(by_edge[ei].other(i) for ei in sub.e))
        for i, (sub, p) in enumerate(zip(subgraphs, priority))
    ]


def priority_sort(
    subgraphs: Sequence[SubGraph], max_edge: int, iterations: int = 1
) -> list[int]:
    """Subgraph indexes ordered by decreasing neighbourhood-adjusted priority."""
    priority = [sub.min_cost / math.sqrt(len(sub.e) + 2) for sub in subgraphs]
    for _ in range(iterations):
        priority = iterate_priority(subgraphs, max_edge, priority)
    return sorted(range(len(subgraphs)), key=priority.__getitem__, reverse=True)


def priority_sort_by_max(
    subgraphs: Sequence[SubGraph], max_edge: int, iterations: int = 1
) -> list[int]:
    """Subgraph indexes ordered by decreasing priority against the strongest rivals."""
    priority = [sub.min_cost for sub in subgraphs]
    for _ in range(iterations):
        priority = iterate_priority_by_max(subgraphs, max_edge, priority)
    return sorted(range(len(subgraphs)), key=priority.__getitem__, reverse=True)


def greedy_static(subgraphs: Sequence[SubGraph], max_edge: int) -> tuple[float, list[int]]:
    """Greedy packing in the order given by :func:`priority_sort`."""
    return _greedy_in_order(subgraphs, max_edge, priority_sort(subgraphs, max_edge, 1))


def greedy_static_by_max(
    subgraphs: Sequence[SubGraph], max_edge: int
) -> tuple[float, list[int]]:
    """Greedy packing in the order given by :func:`priority_sort_by_max`."""
    return _greedy_in_order(subgraphs, max_edge, priority_sort_by_max(subgraphs, max_edge, 1))


def greedy_static_retry(
    subgraphs: Sequence[SubGraph], max_edge: int
) -> tuple[float, list[int]]:
    """Greedy packing over three passes that evicts rivals worth no more than the newcomer."""
    order = priority_sort(subgraphs, max_edge, 1)
    taken = [0] * len(subgraphs)
    owner = [-1] * max_edge
    total = 0.0

    for _ in range(3):
        for i in order:
            if taken[i]:
                continue
            sub = subgraphs[i]
            rivals = list(dict.fromkeys(owner[ei] for ei in sub.e if owner[ei] != -1))
            displaced = sum(subgraphs[j].min_cost for j in rivals)
            if displaced > sub.min_cost:
                continue
            for j in rivals:
                for ei in subgraphs[j].e:
                    owner[ei] = -1
                taken[j] = 0
            total -= displaced
            for ei in sub.e:
                owner[ei] = i
            taken[i] = 1
            total += sub.min_cost
    return total, taken


def greedy_dynamic(subgraphs: Sequence[SubGraph], max_edge: int) -> tuple[float, list[int]]:
    """Repeatedly take the subgraph with the least competing weight per unit cost."""
    n = len(subgraphs)
    order = priority_sort(subgraphs, max_edge)
    pool = order[:DYNAMIC_POOL_LIMIT]

    by_edge: list[list[int]] = [[] for _ in range(max_edge)]
    for i in pool:
        for ei in subgraphs[i].e:
            by_edge[ei].append(i)

    weight_by_edge = [0.0] * max_edge
    for sub in subgraphs:
        for ei in sub.e:
            weight_by_edge[ei] += sub.min_cost

    approx = [0.0] * n
    priorities = [0.0] * n
    version = [0] * n
    for i in pool:
        cost = subgraphs[i].min_cost
        approx[i] = sum(weight_by_edge[ei] - cost for ei in subgraphs[i].e)
        priorities[i] = _ratio(approx[i], cost)
    heap = [(priorities[i], i, 0) for i in pool]
    heapq.heapify(heap)

    in_pool = [True] * n
    taken = [0] * n
    edge_taken = [False] * max_edge
    pending = [0.0] * max_edge
    total = 0.0

    while heap:
        _, chosen, ver = heapq.heappop(heap)
        if not in_pool[chosen] or ver != version[chosen]:
            continue
        in_pool[chosen] = False

        sub = subgraphs[chosen]
        taken[chosen] = 1
        for ei in sub.e:
            edge_taken[ei] = True
        total += sub.min_cost

        erased: list[int] = []
        for ei in sub.e:
            for si in by_edge[ei]:
                if in_pool[si]:
                    in_pool[si] = False
                    erased.append(si)

        touched: dict[int, None] = {}
        for si in erased:
            cost = subgraphs[si].min_cost
            for ei in subgraphs[si].e:
                pending[ei] -= cost
                touched[ei] = None

        affected: dict[int, None] = {}
        for ei in touched:
            for si in by_edge[ei]:
                if in_pool[si]:
                    affected[si] = None

        for ei in touched:
            delta = pending[ei]
            for si in by_edge[ei]:
                approx[si] += delta
            pending[ei] = 0.0

        for si in affected:
            priorities[si] = _ratio(approx[si], subgraphs[si].min_cost)
            version[si] += 1
            heapq.heappush(heap, (priorities[si], si, version[si]))

    total += _take_greedily(subgraphs, order[len(pool):], taken, edge_taken)
    return total, taken