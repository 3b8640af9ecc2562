"""Core data types for weighted graph three-colouring: points, edges, graphs, scoring."""

from __future__ import annotations

import math
import random
import sys
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Sequence

INF = 1e9 + 7
_RNG_MAX = 0xFFFFFFFF


def uniform(rng: random.Random) -> float:
    """Return a uniform value in [0, 1] drawn from 32 random bits."""
    return rng.getrandbits(32) / _RNG_MAX


def normal(rng: random.Random) -> float:
    """Return a standard normal value (Box-Muller)."""
    u = uniform(rng) or sys.float_info.min
    return math.sqrt(-2 * math.log(u)) * math.cos(2 * math.pi * uniform(rng))


def lognormal(rng: random.Random) -> float:
    """Return exp of a standard normal value."""
    return math.exp(normal(rng))


@dataclass
class Point:
    x: float = -1.0
    y: float = -1.0

    def len2(self) -> float:
        return self.x * self.x + self.y + self.y

    def len(self) -> float:
        return math.sqrt(self.len2())

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)


def dist2(p1: Point, p2: Point) -> float:
    return (p1 - p2).len2()


def dist(p1: Point, p2: Point) -> float:
    return (p1 - p2).len()


@dataclass
class Edge:
    u: int = -1
    v: int = -1
    w: float = 0.0

    @classmethod
    def random(cls, u: int, v: int, rng: random.Random) -> Edge:
        """Create an edge with a log-normally distributed weight."""
        return cls(u, v, lognormal(rng))


@dataclass
class Graph:
    n: int = 0
    vertex_info: list[Point] = field(default_factory=list)
    edges: list[list[Edge]] = field(default_factory=list)
    edge_list: list[Edge] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.vertex_info.extend(Point() for _ in range(self.n - len(self.vertex_info)))
        self.edges.extend([] for _ in range(self.n - len(self.edges)))

    def __getitem__(self, u: int) -> list[Edge]:
        return self.edges[u]

    def from_edge_list(self) -> None:
        """Fill the adjacency lists from ``edge_list``, adding each edge both ways."""
        self.edges.extend([] for _ in range(self.n - len(self.edges)))
        for e in self.edge_list:
            self.edges[e.u].append(replace(e))
            self.edges[e.v].append(Edge(e.v, e.u, e.w))

    @classmethod
    def read(cls, filename) -> Graph:
        """Read a graph: vertex count, then ``u v w`` triples."""
        with open(filename, encoding="utf-8") as handle:
            tokens = handle.read().split()
        if not tokens:
            raise ValueError(f"{filename}: empty graph file")
        n = int(tokens[0])
        rest = tokens[1:]
        if len(rest) % 3:
            raise ValueError(f"{filename}: incomplete edge record")
        edge_list = [
            Edge(int(u), int(v), float(w))
            for u, v, w in zip(rest[0::3], rest[1::3], rest[2::3])
        ]
        graph = cls(n, edge_list=edge_list)
        graph.from_edge_list()
        return graph


@dataclass
class SubGraph:
    e: list[int] = field(default_factory=list)
    min_cost: float = 0.0


def evaluate(graph: Graph, coloring: Sequence[int], print_score: bool = False) -> float:
    """Return the total weight of monochromatic edges under ``coloring``."""
    if graph.n != len(coloring):
        raise ValueError(
            f"graph size ({graph.n}) and coloring size ({len(coloring)}) do not match"
        )
    if coloring:
        used = max(coloring) - min(coloring) + 1
        if used > 3:
            raise ValueError(f"{used} > 3 colors are used")

    score = sum(
        e.w
        for adjacency in graph.edges
        for e in adjacency
        if coloring[e.u] == coloring[e.v]
    )
    score /= 2  # every edge is seen from both ends

    if print_score:
        print(f"score: {score}")
        print(f"score: {score}", file=sys.stderr)
    return score


def slow_timer() -> float:
    """Processor time of this process in seconds."""
    return time.process_time()


class FastTimer:
    """A cheap clock that only re-reads the real clock every ``period`` calls."""

    def __init__(self, clock: Callable[[], float] = slow_timer, period: int = 5000):
        self._clock = clock
        self._period = period
        self._count = 0
        self.last_time = 0.0

    def __call__(self) -> float:
        self._count += 1
        if self._count == self._period:
            self._count = 0
            self.last_time = self._clock()
        return self.last_time