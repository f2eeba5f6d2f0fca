import random
from typing import Callable, Dict, List, Sequence, Tuple

from ..config import GenerationMethod
from ..errors import InvariantViolation
from .base import Tour


def _distinct_positions(n: int, rng: random.Random) -> Tuple[int, int]:
    if n < 2:
        raise InvariantViolation(f"Neighbour moves need at least 2 cities, got {n}.")
    while True:
        i = rng.randrange(n)
        j = rng.randrange(n)
        if i != j:
            return i, j


def _ordered_positions(n: int, rng: random.Random) -> Tuple[int, int]:
    i, j = _distinct_positions(n, rng)
    return (i, j) if i < j else (j, i)


def swap(tour: Sequence[int], rng: random.Random) -> Tour:
    neighbor = list(tour)
    i, j = _distinct_positions(len(neighbor), rng)
    neighbor[i], neighbor[j] = neighbor[j], neighbor[i]
    return neighbor


def insert(tour: Sequence[int], rng: random.Random) -> Tour:
    # Move the later city to just after the earlier one.
    neighbor = list(tour)
    i, j = _ordered_positions(len(neighbor), rng)
    moved = neighbor.pop(j)
    neighbor.insert(i + 1, moved)
    return neighbor


def reverse(tour: Sequence[int], rng: random.Random) -> Tour:
    neighbor = list(tour)
    i, j = _ordered_positions(len(neighbor), rng)
    neighbor[i : j + 1] = neighbor[i : j + 1][::-1]
    return neighbor


def partial_shuffle(tour: Sequence[int], rng: random.Random) -> Tour:
    neighbor = list(tour)
    i, j = _ordered_positions(len(neighbor), rng)
    segment = neighbor[i : j + 1]
    rng.shuffle(segment)
    neighbor[i : j + 1] = segment
    return neighbor


OPERATORS: Dict[GenerationMethod, Callable[[Sequence[int], random.Random], Tour]] = {
    GenerationMethod.SWAP: swap,
    GenerationMethod.INSERT: insert,
    GenerationMethod.REVERSE: reverse,
    GenerationMethod.PARTIAL_SHUFFLE: partial_shuffle,
}


def generate_neighbor(method: GenerationMethod, tour: Sequence[int], rng: random.Random) -> Tour:
    try:
        op = OPERATORS[GenerationMethod.parse(method)]
    except KeyError:
        raise InvariantViolation(f"No operator registered for {method!r}.") from None
    return op(tour, rng)


def generate_candidates(
    method: GenerationMethod, tour: Sequence[int], amount: int, rng: random.Random
) -> List[Tour]:
    return [generate_neighbor(method, tour, rng) for _ in range(amount)]
