"""Simulated annealing over edge-disjoint subgraph packings for a colouring lower bound."""

from __future__ import annotations

import argparse
import math
import random
import sys
from typing import Sequence

from .common import FastTimer, SubGraph, slow_timer
from .generate import DEFAULT_SEED, load_or_generate
from .greedy import greedy_static
from .subgraphs import list_subgraphs


class IndependentSet:
    """A set of pairwise edge-disjoint subgraphs with incremental neighbour sums."""

    def __init__(self, subgraphs: Sequence[SubGraph], max_edge: int, baseline: Sequence[int]):
        if len(baseline) != len(subgraphs):
            raise ValueError(
                f"baseline size ({len(baseline)}) and subgraph count ({len(subgraphs)}) differ"
            )
        self.subgraphs = list(subgraphs)
        self.taken = list(baseline)
        self.subgraphs_by_edge: list[list[int]] = [[] for _ in range(max_edge)]
        for i, sub in enumerate(self.subgraphs):
            for ei in sub.e:
                self.subgraphs_by_edge[ei].append(i)
        self.edge_owner = [-1] * max_edge
        self.sum_taken_neighbors = [0.0] * len(self.subgraphs)
        self.cur_sum = 0.0
        for i, sub in enumerate(self.subgraphs):
            if not self.taken[i]:
                continue
            self.cur_sum += sub.min_cost
            for ei in sub.e:
                self.edge_owner[ei] = i
            self.switch_taken(i)

    def gen_step(self, rng: random.Random) -> int:
        """Pick a random subgraph that is not taken."""
        if all(self.taken):
            raise ValueError("every subgraph is already taken")
        while True:
            i = rng.randrange(len(self.subgraphs))
            if not self.taken[i]:
                return i

    def value_if_taken(self, i: int) -> float:
        """The packing value after taking ``i`` and evicting its rivals."""
        return self.cur_sum + self.subgraphs[i].min_cost - self.sum_taken_neighbors[i]

    def switch_taken(self, i: int) -> None:
        """Propagate the taken state of ``i`` to the neighbour sums of its rivals."""
        delta = self.subgraphs[i].min_cost if self.taken[i] else -self.subgraphs[i].min_cost
        seen = {i}
        for ei in self.subgraphs[i].e:
            for j in self.subgraphs_by_edge[ei]:
                if j in seen:
                    continue
                seen.add(j)
                self.sum_taken_neighbors[j] += delta

    def change(self, i: int, new_sum: float) -> int:
        """Take ``i``, evicting overlapping subgraphs; return the number of edges released."""
        self.cur_sum = new_sum
        released = 0
        for ei in self.subgraphs[i].e:
            other = self.edge_owner[ei]
            if other == -1:
                continue
            for oe in self.subgraphs[other].e:
                released += 1
                self.edge_owner[oe] = -1
            self.taken[other] = 0
            self.switch_taken(other)
        for ei in self.subgraphs[i].e:
            self.edge_owner[ei] = i
        self.taken[i] = 1
        self.switch_taken(i)
        return released

    def step(self, temperature: float, rng: random.Random) -> int:
        """Try one annealing move; return the work done (0 when rejected)."""
        i = self.gen_step(rng)
        new_sum = self.value_if_taken(i)
        if new_sum > self.cur_sum or (
            temperature != 0
            and rng.random() < math.exp(min(0.0, (new_sum - self.cur_sum) / temperature))
        ):
            return self.change(i, new_sum)
        return 0

    def reset(self) -> None:
        """Recompute the neighbour sums and the current value from scratch."""
        self.sum_taken_neighbors = [0.0] * len(self.subgraphs)
        self.cur_sum = 0.0
        for i, sub in enumerate(self.subgraphs):
            if not self.taken[i]:
                continue
            self.cur_sum += sub.min_cost
            self.switch_taken(i)


def anneal_lower_bound(
    subgraphs: Sequence[SubGraph],
    max_edge: int,
    time_limit: float = 900.0,
    log_every: float = 60.0,
    rng: random.Random | None = None,
) -> float:
    """Anneal from the static greedy packing and return the best value found."""
    rng = rng or random.Random()
    _, taken = greedy_static(subgraphs, max_edge)
    count = sum(taken)
    if not count:
        raise ValueError("no subgraph to start annealing from")
    state = IndependentSet(subgraphs, max_edge, taken)
    if count == len(subgraphs):
        return state.cur_sum

    start_tmp = state.cur_sum / count / 3
    end_tmp = start_tmp / 40
    k = math.log(end_tmp / start_tmp) / time_limit if start_tmp > 0 and time_limit > 0 else 0.0

    print(f"start temperature = {start_tmp}", file=sys.stderr)
    print(f"start sum = {state.cur_sum}", file=sys.stderr)

    timer = FastTimer()
    start_time = timer()
    last_time = timer()
    ops = ticks = total_steps = times_upd_best = 0
    best_sum = state.cur_sum

    while timer() - start_time < time_limit:
        total_steps += 1
        ops += 1
        tmp = start_tmp * math.exp(k * (timer() - start_time))
        ticks += state.step(tmp, rng)

        if state.cur_sum > best_sum:
            times_upd_best += 1
            best_sum = state.cur_sum

        if timer() > last_time + log_every:
            last_time = timer()
            rate = log_every or 1.0
            print(
                f"cur sum = {state.cur_sum} cur_t = {tmp}; "
                f"operations/sec = {ops / rate};  ticks/sec = {ticks / rate}",
                file=sys.stderr,
            )
            ops = ticks = 0
            state.reset()

    print(f"end temperature = {end_tmp}", file=sys.stderr)
    print(f"total time: {slow_timer()}", file=sys.stderr)
    print(f"Total steps = {total_steps}", file=sys.stderr)
    print(f"times_upd_best = {times_upd_best}", file=sys.stderr)
    return best_sum


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="tricolor-lower-annealing",
        description="Lower bound on three-colouring error by annealed subgraph packing.",
    )
    parser.add_argument("graph", nargs="?", help="graph file; a random graph is generated if omitted")
    parser.add_argument("--time-limit", type=float, default=900.0, help="seconds of processor time")
    parser.add_argument("--log-every", type=float, default=60.0, help="seconds between progress logs")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="seed for the annealing moves")
    args = parser.parse_args(argv)

    graph = load_or_generate(args.graph)
    subgraphs, max_edge = list_subgraphs(graph)
    best = anneal_lower_bound(
        subgraphs, max_edge, args.time_limit, args.log_every, random.Random(args.seed)
    )
    print(f"time = {slow_timer()}", file=sys.stderr)
    print(f"lower_bound = {best}")
    return 0