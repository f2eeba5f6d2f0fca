import random
from typing import List, Optional, Sequence

from ..errors import InvariantViolation


def tournament_select(lengths: Sequence[float], rng: random.Random, rounds: Optional[int] = None) -> int:
    """
    Onlooker-bee selection over a member's candidate neighbours.

    Runs ``rounds`` binary tournaments (one per candidate by default). Each
    round draws two distinct candidates and credits a win to the shorter one
    (the first drawn on a tie). The index with the most wins is returned,
    lowest index first on equal tallies. Shorter tours win more often without
    any explicit fitness-proportional probabilities.
    """
    amount = len(lengths)
    if amount == 0:
        raise InvariantViolation("Tournament needs at least one candidate.")
    if amount == 1:
        return 0
    if rounds is None:
        rounds = amount
    wins: List[int] = [0] * amount
    for _ in range(rounds):
        while True:
            a = rng.randrange(amount)
            b = rng.randrange(amount)
            if a != b:
                break
        winner = b if lengths[b] < lengths[a] else a
        wins[winner] += 1
    return wins.index(max(wins))
