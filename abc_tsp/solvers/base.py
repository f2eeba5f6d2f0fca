import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from ..errors import InvariantViolation


Tour = List[int]


def initialize_solution(city_amount: int, rng: random.Random) -> Tour:
    if city_amount < 0:
        raise InvariantViolation(f"Cannot build a tour over {city_amount} cities.")
    tour = list(range(city_amount))
    rng.shuffle(tour)
    return tour


def calc_path_length(tour: Sequence[int], dist: np.ndarray) -> float:
    n = len(tour)
    if n < 1:
        raise InvariantViolation("Cannot measure an empty tour.")
    if n != dist.shape[0]:
        raise InvariantViolation(f"Tour visits {n} cities but the distance matrix has {dist.shape[0]}.")
    idx = np.asarray(tour, dtype=np.intp)
    return float(dist[idx, np.roll(idx, -1)].sum())


def is_permutation(tour: Sequence[int], city_amount: int) -> bool:
    return len(tour) == city_amount and sorted(tour) == list(range(city_amount))


@dataclass
class SolveResult:
    tour: Tour
    length: float
    optimum: Optional[float] = None

    @property
    def gap(self) -> float:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return float("inf")
        return (self.length - self.optimum) / self.optimum
