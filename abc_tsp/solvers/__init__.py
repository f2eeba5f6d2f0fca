from .base import SolveResult, Tour, calc_path_length, initialize_solution, is_permutation
from .neighborhood import (
    OPERATORS,
    generate_candidates,
    generate_neighbor,
    insert,
    partial_shuffle,
    reverse,
    swap,
)
from .selection import tournament_select

__all__ = [
    "SolveResult",
    "Tour",
    "calc_path_length",
    "initialize_solution",
    "is_permutation",
    "OPERATORS",
    "generate_candidates",
    "generate_neighbor",
    "insert",
    "partial_shuffle",
    "reverse",
    "swap",
    "tournament_select",
]
