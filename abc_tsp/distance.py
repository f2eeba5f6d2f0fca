from typing import Sequence

import numpy as np

from .errors import DimensionMismatch, InputError


def build_distance_matrix(cities: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Pairwise Euclidean distances between city coordinate rows.
    Each row's distances to the later cities are computed once and mirrored,
    so the result is exactly symmetric with a zero diagonal. The returned
    array is read-only.
    """
    rows = [np.asarray(city, dtype=float) for city in cities]
    n = len(rows)
    if n and any(row.ndim != 1 for row in rows):
        raise InputError("Each city must be a flat vector of coordinates.")
    for idx, row in enumerate(rows[1:], start=1):
        if row.shape != rows[0].shape:
            raise DimensionMismatch(
                f"City {idx} has {row.shape[0]} coordinates, expected {rows[0].shape[0]}."
            )
    coords = np.vstack(rows) if n else np.zeros((0, 0))
    if not np.all(np.isfinite(coords)):
        bad = sorted({int(r) for r in np.nonzero(~np.isfinite(coords))[0]})
        raise InputError(f"Non-finite coordinates for cities {bad[:5]}.")
    mat = np.zeros((n, n), dtype=float)
    for i in range(n - 1):
        d = np.linalg.norm(coords[i + 1 :] - coords[i], axis=1)
        mat[i, i + 1 :] = d
        mat[i + 1 :, i] = d
    mat.flags.writeable = False
    return mat


def validate_distance_matrix(matrix, atol: float = 1e-9) -> np.ndarray:
    """Check a precomputed matrix and return a read-only copy with a zeroed diagonal."""
    mat = np.array(matrix, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise InputError(f"Distance matrix must be square, got shape {mat.shape}.")
    if not np.all(np.isfinite(mat)):
        raise InputError("Distance matrix contains non-finite values.")
    if np.any(mat < 0):
        raise InputError("Distance matrix contains negative distances.")
    if not np.allclose(mat, mat.T, atol=atol):
        raise InputError("Distance matrix is not symmetric; only symmetric TSP is supported.")
    np.fill_diagonal(mat, 0.0)
    mat.flags.writeable = False
    return mat
