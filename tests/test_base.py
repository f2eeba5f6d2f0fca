import random

import pytest

from abc_tsp.errors import InvariantViolation
from abc_tsp.solvers.base import SolveResult, calc_path_length, initialize_solution, is_permutation


@pytest.mark.parametrize("n", [2, 3, 10, 57])
def test_initialize_is_permutation(n, rng):
    for _ in range(20):
        tour = initialize_solution(n, rng)
        assert sorted(tour) == list(range(n))


def test_initialize_degenerate(rng):
    assert initialize_solution(0, rng) == []
    assert initialize_solution(1, rng) == [0]
    with pytest.raises(InvariantViolation):
        initialize_solution(-1, rng)


def test_initialize_covers_orderings():
    rng = random.Random(3)
    seen = {tuple(initialize_solution(3, rng)) for _ in range(300)}
    assert len(seen) == 6


def test_square_perimeter(square):
    assert calc_path_length([0, 1, 2, 3], square) == pytest.approx(4.0)
    assert calc_path_length([0, 2, 1, 3], square) == pytest.approx(2 + 2 * 2 ** 0.5)


def test_length_includes_wrap_edge(ring, rng):
    tour = initialize_solution(12, rng)
    expected = sum(ring[tour[i], tour[i + 1]] for i in range(11)) + ring[tour[-1], tour[0]]
    assert calc_path_length(tour, ring) == pytest.approx(expected)
    assert calc_path_length(tour, ring) >= 0


def test_length_invariants(square):
    with pytest.raises(InvariantViolation):
        calc_path_length([], square)
    with pytest.raises(InvariantViolation):
        calc_path_length([0, 1, 2], square)


def test_is_permutation():
    assert is_permutation([2, 0, 1], 3)
    assert not is_permutation([0, 0, 1], 3)
    assert not is_permutation([0, 1], 3)


def test_gap():
    assert SolveResult(tour=[0], length=110.0, optimum=100.0).gap == pytest.approx(0.1)
    assert SolveResult(tour=[0], length=1.0).gap == float("inf")
