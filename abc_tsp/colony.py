import logging
import math
import random
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .config import ColonyConfig
from .errors import InputError, InvariantViolation
from .executor import ParallelExecutor
from .solvers.base import SolveResult, Tour, calc_path_length, initialize_solution
from .solvers.neighborhood import generate_candidates
from .solvers.selection import tournament_select

logger = logging.getLogger(__name__)


class ColonyState(Enum):
    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


@dataclass
class ColonyContext:
    tours: List[Tour]
    lengths: List[float]
    stagnation: List[int]
    best_tour: Tour
    best_length: float
    iteration: int = 0
    state: ColonyState = ColonyState.INITIALIZED
    history: List[float] = field(default_factory=list)

    def check(self) -> None:
        size = len(self.tours)
        if size == 0 or len(self.lengths) != size or len(self.stagnation) != size:
            raise InvariantViolation(
                f"Colony arrays out of step: {size} tours, {len(self.lengths)} lengths, "
                f"{len(self.stagnation)} counters."
            )

    @property
    def finished(self) -> bool:
        return self.state in (ColonyState.CONVERGED, ColonyState.EXHAUSTED)


@dataclass
class ColonyResult(SolveResult):
    iterations: int = 0
    state: ColonyState = ColonyState.EXHAUSTED
    elapsed: float = 0.0
    history: List[float] = field(default_factory=list)


class ArtificialBeeColony:
    """
    Artificial Bee Colony search over symmetric TSP tours.

    Each iteration every employed bee proposes ``candidate_amount`` neighbours
    of its tour, an onlooker tournament picks one, and the pick replaces the
    tour only if it is strictly shorter. Bees that fail to improve for more
    than ``max_unimproved`` iterations turn scout and restart from a random
    tour. The run stops when an improvement of the best tour is relatively
    smaller than ``improvement_threshold`` or after ``max_iterations``.
    """

    def __init__(
        self,
        config: ColonyConfig,
        dist: np.ndarray,
        rng: random.Random = None,
        executor: ParallelExecutor = None,
    ):
        dist = np.asarray(dist, dtype=float)
        if dist.ndim != 2 or dist.shape[0] != dist.shape[1]:
            raise InputError(f"Distance matrix must be square, got shape {dist.shape}.")
        if dist.shape[0] < 2:
            raise InputError(f"At least 2 cities are required, got {dist.shape[0]}.")
        self.cfg = config
        self.dist = dist
        self.city_amount = dist.shape[0]
        self.rng = rng or random.Random(config.random_seed)
        self.executor = executor

    def _spawn(self, count: int) -> List[random.Random]:
        # Child seeds are drawn here, on the calling thread, so a seeded run
        # does not depend on worker scheduling.
        return [random.Random(self.rng.getrandbits(64)) for _ in range(count)]

    def _map(self, fn, items) -> list:
        if self.executor is None:
            raise InvariantViolation("Colony used outside of a worker pool; call run() or pass an executor.")
        return self.executor.map(fn, items)

    def initialize(self) -> ColonyContext:
        size = self.cfg.population_size
        tours = self._map(lambda r: initialize_solution(self.city_amount, r), self._spawn(size))
        lengths = self._map(lambda t: calc_path_length(t, self.dist), tours)
        ctx = ColonyContext(
            tours=tours,
            lengths=lengths,
            stagnation=[0] * size,
            best_tour=list(tours[0]),
            best_length=lengths[0],
        )
        ctx.check()
        logger.debug("initialized %d bees, seed best length %.4f", size, ctx.best_length)
        return ctx

    def _employ(self, job: Tuple[Tour, random.Random]) -> Tuple[Tour, float]:
        tour, rng = job
        candidates = generate_candidates(self.cfg.generation_method, tour, self.cfg.candidate_amount, rng)
        lengths = [calc_path_length(c, self.dist) for c in candidates]
        pick = tournament_select(lengths, rng)
        return candidates[pick], lengths[pick]

    def employed_phase(self, ctx: ColonyContext) -> List[Tuple[Tour, float]]:
        jobs = list(zip(ctx.tours, self._spawn(len(ctx.tours))))
        return self._map(self._employ, jobs)

    def greedy_replace(self, ctx: ColonyContext, trials: List[Tuple[Tour, float]]) -> int:
        if len(trials) != len(ctx.tours):
            raise InvariantViolation(f"Got {len(trials)} trial tours for {len(ctx.tours)} bees.")
        improved = 0
        for idx, (tour, length) in enumerate(trials):
            if length < ctx.lengths[idx]:
                ctx.tours[idx] = tour
                ctx.lengths[idx] = length
                ctx.stagnation[idx] = 0
                improved += 1
            else:
                ctx.stagnation[idx] += 1
        return improved

    def scout_phase(self, ctx: ColonyContext) -> List[int]:
        scouts = [idx for idx, count in enumerate(ctx.stagnation) if count > self.cfg.max_unimproved]
        for idx in scouts:
            ctx.tours[idx] = initialize_solution(self.city_amount, self.rng)
            ctx.lengths[idx] = calc_path_length(ctx.tours[idx], self.dist)
            ctx.stagnation[idx] = 0
        return scouts

    def update_best(self, ctx: ColonyContext) -> bool:
        """Adopt the shortest bee if it beats the best tour. Returns True on convergence."""
        best_idx = min(range(len(ctx.lengths)), key=ctx.lengths.__getitem__)
        new_length = ctx.lengths[best_idx]
        if not new_length < ctx.best_length:
            return False
        if math.isclose(ctx.best_length, 0.0):
            improvement = 0.0
        else:
            improvement = (ctx.best_length - new_length) / ctx.best_length
        logger.info(
            "iteration %d: best length %.4f -> %.4f (improvement %.4g)",
            ctx.iteration,
            ctx.best_length,
            new_length,
            improvement,
        )
        ctx.best_tour = list(ctx.tours[best_idx])
        ctx.best_length = new_length
        return improvement < self.cfg.improvement_threshold

    def step(self, ctx: ColonyContext) -> ColonyContext:
        if ctx.finished:
            raise InvariantViolation(f"Colony already {ctx.state.value}.")
        ctx.state = ColonyState.ITERATING
        ctx.iteration += 1
        trials = self.employed_phase(ctx)
        improved = self.greedy_replace(ctx, trials)
        scouts = self.scout_phase(ctx)
        converged = self.update_best(ctx)
        ctx.check()
        ctx.history.append(ctx.best_length)
        logger.debug(
            "iteration %d: best=%.4f improved=%d scouts=%d",
            ctx.iteration,
            ctx.best_length,
            improved,
            len(scouts),
        )
        if converged:
            ctx.state = ColonyState.CONVERGED
        elif ctx.iteration >= self.cfg.max_iterations:
            ctx.state = ColonyState.EXHAUSTED
        return ctx

    @contextmanager
    def _pool(self) -> Iterator[ParallelExecutor]:
        if self.executor is not None:
            yield self.executor
            return
        self.executor = ParallelExecutor(self.cfg.concurrent_count)
        try:
            yield self.executor
        finally:
            self.executor.shutdown()
            self.executor = None

    def run(self, optimum: Optional[float] = None) -> ColonyResult:
        start = time.perf_counter()
        with self._pool():
            ctx = self.initialize()
            while not ctx.finished:
                self.step(ctx)
        elapsed = time.perf_counter() - start
        logger.info(
            "colony %s after %d iterations: best length %.4f in %.2fs",
            ctx.state.value,
            ctx.iteration,
            ctx.best_length,
            elapsed,
        )
        return ColonyResult(
            tour=ctx.best_tour,
            length=ctx.best_length,
            optimum=optimum,
            iterations=ctx.iteration,
            state=ctx.state,
            elapsed=elapsed,
            history=ctx.history,
        )


def solve(
    dist: np.ndarray,
    config: ColonyConfig,
    rng: random.Random = None,
    optimum: Optional[float] = None,
) -> ColonyResult:
    return ArtificialBeeColony(config, dist, rng=rng).run(optimum=optimum)
