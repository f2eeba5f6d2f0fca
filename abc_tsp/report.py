import json
from pathlib import Path
from typing import Dict, Optional

from .colony import ColonyResult


def result_fields(result: ColonyResult, elapsed: Optional[float] = None) -> Dict:
    data = {
        "tour": [int(c) for c in result.tour],
        "length": float(result.length),
        "elapsed": float(result.elapsed if elapsed is None else elapsed),
        "iterations": result.iterations,
        "state": result.state.value,
    }
    if result.optimum is not None:
        data["optimum"] = float(result.optimum)
        data["gap"] = result.gap
    return data


def format_result(result: ColonyResult, elapsed: Optional[float] = None) -> str:
    data = result_fields(result, elapsed)
    lines = [
        f"Best solution:{' '.join(str(c) for c in data['tour'])}",
        f"Best solution length:{data['length']}",
        f"Cost time:{data['elapsed']:.6f}s",
        f"Iterations:{data['iterations']}",
        f"Stop reason:{data['state']}",
    ]
    if "gap" in data:
        lines.append(f"Gap:{data['gap']:.6f}")
    return "\n".join(lines) + "\n"


def write_result(path: Path, result: ColonyResult, elapsed: Optional[float] = None) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(result_fields(result, elapsed), indent=2))
    else:
        path.write_text(format_result(result, elapsed))
