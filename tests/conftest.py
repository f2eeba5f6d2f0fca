import math
import random

import pytest

from abc_tsp.distance import build_distance_matrix


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def square():
    return build_distance_matrix([[0, 0], [0, 1], [1, 1], [1, 0]])


@pytest.fixture
def ring():
    # Twelve cities on a unit circle; visiting them in angular order is optimal.
    cities = [[math.cos(2 * math.pi * k / 12), math.sin(2 * math.pi * k / 12)] for k in range(12)]
    return build_distance_matrix(cities)
