import threading

import pytest

from abc_tsp.errors import InvariantViolation
from abc_tsp.executor import ParallelExecutor


def test_map_preserves_order():
    with ParallelExecutor(4) as pool:
        assert pool.map(lambda x: x * x, range(100)) == [x * x for x in range(100)]


def test_pool_is_reused_across_maps():
    names = set()

    def record(_):
        names.add(threading.current_thread().name)
        return None

    with ParallelExecutor(2) as pool:
        for _ in range(10):
            pool.map(record, range(8))
    assert len(names) <= 2
    assert all(name.startswith("abc-worker") for name in names)


def test_closed_after_context():
    with ParallelExecutor(1) as pool:
        pass
    assert pool.closed
    with pytest.raises(InvariantViolation):
        pool.map(str, [1])


def test_rejects_zero_workers():
    with pytest.raises(InvariantViolation):
        ParallelExecutor(0)


def test_worker_errors_propagate():
    def boom(x):
        raise KeyError(x)

    with ParallelExecutor(2) as pool:
        with pytest.raises(KeyError):
            pool.map(boom, [1, 2])
