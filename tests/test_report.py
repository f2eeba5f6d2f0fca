import json

import pytest

from abc_tsp.colony import ColonyResult, ColonyState
from abc_tsp.report import format_result, write_result


@pytest.fixture
def result():
    return ColonyResult(
        tour=[0, 3, 2, 1],
        length=4.0,
        iterations=17,
        state=ColonyState.CONVERGED,
        elapsed=0.25,
        history=[4.5, 4.0],
    )


def test_format(result):
    lines = format_result(result).splitlines()
    assert lines[0] == "Best solution:0 3 2 1"
    assert lines[1] == "Best solution length:4.0"
    assert lines[2] == "Cost time:0.250000s"
    assert "Iterations:17" in lines
    assert "Stop reason:converged" in lines
    assert not any(line.startswith("Gap:") for line in lines)


def test_format_with_optimum(result):
    result.optimum = 3.2
    assert "Gap:0.250000" in format_result(result, elapsed=1.5).splitlines()


def test_write_text(tmp_path, result):
    path = tmp_path / "out" / "result.txt"
    write_result(path, result, elapsed=2.0)
    text = path.read_text()
    assert text.startswith("Best solution:0 3 2 1\n")
    assert "Cost time:2.000000s" in text


def test_write_json(tmp_path, result):
    path = tmp_path / "result.json"
    write_result(path, result)
    data = json.loads(path.read_text())
    assert data["tour"] == [0, 3, 2, 1]
    assert data["length"] == 4.0
    assert data["state"] == "converged"
    assert "gap" not in data
