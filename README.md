# tricolor

Tools for bounding from below the cost of colouring a weighted graph with
three colours. The cost of a colouring is the total weight of edges whose two
ends share a colour.

A lower bound comes from a set of small dense subgraphs (4-, 5- and 6-cliques)
that share no edges. Any 3-colouring must pay at least the cheapest colouring
cost of each of them, so the sum of those costs bounds the whole graph's cost.
The package lists the cliques, chooses an edge-disjoint set greedily, and can
improve that choice by simulated annealing.

Graphs are read from a text file, or, when no file is given, generated as a
random geometric graph: 20000 points in the unit square (seed 43), each joined
to a random half of its 60 nearest neighbours, with log-normal edge weights.

## Graph file format

```
<number of vertices>
<u> <v> <weight>
<u> <v> <weight>
...
```

Vertices are numbered from 0. Tokens may be separated by any whitespace. An
empty file or a trailing incomplete edge record raises `ValueError`.

## Installation

```
pip install .
```

## Command

```
tricolor-lower-annealing [graph.txt] [--time-limit SECONDS] [--log-every SECONDS] [--seed N]
```

It lists the 4-, 5- and 6-cliques, starts from the packing chosen by
`greedy_static`, anneals it for `--time-limit` seconds of processor time
(default 900), and prints `lower_bound = ...` to standard output. Progress is
written to standard error every `--log-every` seconds (default 60); `--seed`
(default 43) seeds the annealing moves.

## Library

- `tricolor.common`: `Point`, `Edge`, `Graph` (with `Graph.read`),
  `SubGraph`, `evaluate(graph, coloring, print_score)` which returns the
  weight of monochromatic edges and raises `ValueError` when the colouring has
  the wrong length or uses more than three colours, and the timers
  `slow_timer` and `FastTimer`.
- `tricolor.generate`: `generate(n, max_neighbors, p_connection, rng)` and
  `load_or_generate(path)`.
- `tricolor.subgraphs`: `edge_indexer`, `list_quads`, `list_cliques`,
  `list_almost_cliques`, `from_vertices` (exact cheapest 3-colouring of a small
  vertex set), `unite` and `list_subgraphs`, which returns the 4-, 5- and
  6-cliques together with the size of the edge index space.
- `tricolor.greedy`: the packings `simple_baseline`, `greedy_static`,
  `greedy_static_by_max`, `greedy_static_retry` and `greedy_dynamic`, each
  returning `(total, taken)`, and the orderings they use (`priority_sort`,
  `priority_sort_by_max`, `iterate_priority`, `iterate_priority_by_max`,
  `TwoMax`).
- `tricolor.lower_annealing`: `IndependentSet` and
  `anneal_lower_bound(subgraphs, max_edge, time_limit, log_every, rng)`.

```python
import random

from tricolor.generate import generate
from tricolor.greedy import greedy_dynamic, greedy_static, simple_baseline
from tricolor.subgraphs import list_subgraphs

graph = generate(2000, 20, 0.5, random.Random(43))
subgraphs, max_edge = list_subgraphs(graph)

for method in (simple_baseline, greedy_static, greedy_dynamic):
    total, taken = method(subgraphs, max_edge)
    print(method.__name__, total, sum(taken))
```

## What it does not do

The package does not search for good colourings, so it gives no upper bounds:
`evaluate` only scores a colouring that you supply. The greedy packings in
`tricolor.greedy` have no command of their own; call them from Python as
shown above.

## Running the tests

```
pip install .[test]
pytest
```