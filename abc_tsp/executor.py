import concurrent.futures
from typing import Callable, Iterable, List, Optional, TypeVar

from .errors import InvariantViolation

T = TypeVar("T")
R = TypeVar("R")


class ParallelExecutor:
    """
    Fixed-size worker pool for order-preserving maps over the colony.
    Created once per run and shared by initialisation and every iteration.
    """

    def __init__(self, workers: int):
        if workers < 1:
            raise InvariantViolation(f"Worker pool needs at least one worker, got {workers}.")
        self.workers = workers
        self._pool: Optional[concurrent.futures.ThreadPoolExecutor] = concurrent.futures.ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="abc-worker"
        )

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> List[R]:
        if self._pool is None:
            raise InvariantViolation("Worker pool used after shutdown.")
        return list(self._pool.map(fn, items))

    def shutdown(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    @property
    def closed(self) -> bool:
        return self._pool is None

    def __enter__(self) -> "ParallelExecutor":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
