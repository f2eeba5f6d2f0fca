import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import networkx as nx
import numpy as np
import pandas as pd
import tsplib95

from .distance import build_distance_matrix, validate_distance_matrix
from .errors import InputError
from .solvers.base import calc_path_length, is_permutation

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xlsm")


@dataclass
class Instance:
    name: str
    path: Path
    dist: np.ndarray
    coords: Optional[np.ndarray] = None
    optimum: Optional[float] = None

    @property
    def city_amount(self) -> int:
        return self.dist.shape[0]


def _frame_to_coords(frame: pd.DataFrame, path: Path) -> np.ndarray:
    if frame.empty:
        raise InputError(f"No city rows found in {path}.")
    if frame.isna().to_numpy().any():
        rows = sorted({int(r) for r in np.nonzero(frame.isna().to_numpy())[0]})
        raise InputError(f"Ragged or empty cells in {path} (rows {rows[:5]}).")
    try:
        numeric = frame.apply(pd.to_numeric, errors="raise")
    except (ValueError, TypeError) as exc:
        raise InputError(f"Invalid value in data sheet {path}: {exc}") from exc
    return numeric.to_numpy(dtype=float)


def read_table(path: Path, sheet=0) -> np.ndarray:
    """Read a headerless city table (one row per city, one column per dimension)."""
    path = Path(path)
    if not path.exists():
        raise InputError(f"Cannot open file {path}.")
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        try:
            frame = pd.read_excel(path, sheet_name=sheet, header=None)
        except (ValueError, KeyError, IndexError) as exc:
            # Missing sheet or a corrupt workbook.
            raise InputError(f"No data sheet found in {path}: {exc}") from exc
    elif suffix == ".csv":
        try:
            frame = pd.read_csv(path, header=None)
        except pd.errors.EmptyDataError as exc:
            raise InputError(f"No city rows found in {path}.") from exc
        except pd.errors.ParserError as exc:
            raise InputError(f"Ragged rows in {path}: {exc}") from exc
    else:
        raise InputError(f"Unsupported table format {suffix!r} for {path}.")
    return _frame_to_coords(frame, path)


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(path: Path, node_map: dict, dist: np.ndarray) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.load(candidate)
            nodes = list(tour_file.tours[0])
        except Exception as exc:
            logger.warning("skipping unreadable tour file %s: %s", candidate, exc)
            continue
        tour = [node_map.get(n, -1) for n in nodes]
        if not is_permutation(tour, dist.shape[0]):
            logger.warning("skipping %s: tour does not visit every city once", candidate)
            continue
        return calc_path_length(tour, dist)
    return None


def read_tsplib(path: Path) -> Instance:
    path = Path(path)
    try:
        problem = tsplib95.load(path)
    except OSError as exc:
        raise InputError(f"Cannot open file {path}.") from exc
    except Exception as exc:
        raise InputError(f"Invalid TSPLIB file {path}: {exc}") from exc
    nodes = list(problem.get_nodes())
    if not nodes:
        raise InputError(f"No cities found in {path}.")
    node_map = {n: i for i, n in enumerate(nodes)}
    coords = None
    if problem.node_coords:
        coords = np.array([problem.node_coords[n] for n in nodes], dtype=float)
        dist = build_distance_matrix(coords)
    else:
        graph = problem.get_graph()
        dist = validate_distance_matrix(nx.to_numpy_array(graph, nodelist=nodes, weight="weight"))
    optimum = _load_optimum(path, node_map, dist)
    return Instance(name=problem.name or path.stem, path=path, dist=dist, coords=coords, optimum=optimum)


def load_instance(path: Path) -> Instance:
    path = Path(path)
    if path.suffix.lower() == ".tsp":
        instance = read_tsplib(path)
    else:
        coords = read_table(path)
        instance = Instance(name=path.stem, path=path, dist=build_distance_matrix(coords), coords=coords)
    logger.debug("loaded %s: %d cities from %s", instance.name, instance.city_amount, path)
    return instance
