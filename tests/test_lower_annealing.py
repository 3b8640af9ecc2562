import random

import pytest

from tricolor.common import SubGraph, evaluate
from tricolor.generate import generate
from tricolor.greedy import greedy_static
from tricolor.lower_annealing import IndependentSet, anneal_lower_bound, main
from tricolor.subgraphs import list_subgraphs


@pytest.fixture
def pair():
    return [SubGraph([0], 1.0), SubGraph([0], 5.0)]


@pytest.fixture(scope="module")
def instance():
    graph = generate(150, 8, 1.0, random.Random(5))
    subgraphs, max_edge = list_subgraphs(graph)
    return graph, subgraphs, max_edge


def _assert_consistent(state):
    used = set()
    for sub, flag in zip(state.subgraphs, state.taken):
        if flag:
            assert not used & set(sub.e)
            used.update(sub.e)
    expected = sum(s.min_cost for s, f in zip(state.subgraphs, state.taken) if f)
    assert state.cur_sum == pytest.approx(expected)


def test_initial_sum_and_value_if_taken(pair):
    state = IndependentSet(pair, 1, [1, 0])
    assert state.cur_sum == 1.0
    assert state.value_if_taken(1) == pytest.approx(5.0)


def test_change_evicts_rival(pair):
    state = IndependentSet(pair, 1, [1, 0])
    released = state.change(1, state.value_if_taken(1))
    assert released == len(pair[0].e)
    assert state.taken == [0, 1]
    assert state.cur_sum == pytest.approx(5.0)
    assert state.sum_taken_neighbors[0] == pytest.approx(5.0)
    assert state.edge_owner == [1]


def test_gen_step_picks_untaken(pair):
    state = IndependentSet(pair, 1, [1, 0])
    rng = random.Random(3)
    assert {state.gen_step(rng) for _ in range(20)} == {1}


def test_gen_step_all_taken_raises():
    state = IndependentSet([SubGraph([0], 1.0)], 1, [1])
    with pytest.raises(ValueError):
        state.gen_step(random.Random(0))


def test_baseline_size_mismatch_raises(pair):
    with pytest.raises(ValueError):
        IndependentSet(pair, 1, [1])


def test_step_accepts_improvement_at_zero_temperature(pair):
    state = IndependentSet(pair, 1, [1, 0])
    state.step(0, random.Random(1))
    assert state.taken == [0, 1]
    assert state.cur_sum == pytest.approx(5.0)


def test_step_rejects_worsening_at_zero_temperature(pair):
    state = IndependentSet(pair, 1, [0, 1])
    assert state.step(0, random.Random(1)) == 0
    assert state.taken == [0, 1]
    assert state.cur_sum == pytest.approx(5.0)


def test_random_walk_keeps_invariants(instance):
    _, subgraphs, max_edge = instance
    _, taken = greedy_static(subgraphs, max_edge)
    state = IndependentSet(subgraphs, max_edge, taken)
    rng = random.Random(7)
    for _ in range(500):
        state.step(10.0, rng)
    _assert_consistent(state)
    before = state.cur_sum
    state.reset()
    assert state.cur_sum == pytest.approx(before)
    _assert_consistent(state)


def test_anneal_is_between_greedy_and_any_coloring(instance):
    graph, subgraphs, max_edge = instance
    greedy_sum, _ = greedy_static(subgraphs, max_edge)
    best = anneal_lower_bound(subgraphs, max_edge, 1e-6, 60.0, random.Random(2))
    assert best >= greedy_sum - 1e-9
    rng = random.Random(4)
    coloring = [rng.randrange(3) for _ in range(graph.n)]
    assert best <= evaluate(graph, coloring) + 1e-6


def test_anneal_without_subgraphs_raises():
    with pytest.raises(ValueError):
        anneal_lower_bound([], 0, 1.0, 1.0, random.Random(0))


def test_main_on_k4_file(tmp_path, capsys):
    path = tmp_path / "k4.txt"
    path.write_text("4\n0 1 1.5\n0 2 2.0\n0 3 2.5\n1 2 3.0\n1 3 3.5\n2 3 4.0\n")
    assert main([str(path), "--time-limit", "0"]) == 0
    assert "lower_bound = 1.5" in capsys.readouterr().out