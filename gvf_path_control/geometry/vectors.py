import numpy as np

from .errors import DegenerateGeometryError, DimensionMismatchError


def as_vector(values, dimension: int | None = None, what: str = "vector") -> np.ndarray:
    vec = np.array(values, dtype=float, copy=True)
    if vec.ndim != 1:
        raise ValueError(f"{what} must be one-dimensional; received shape {vec.shape}")
    if dimension is not None and vec.shape != (dimension,):
        raise DimensionMismatchError((dimension,), vec.shape, what)
    return vec


def as_matrix(data, what: str = "Matrix") -> np.ndarray:
    """Deep-copy ``data`` into a dense 2-D float array, rejecting jagged rows."""

    if isinstance(data, np.ndarray):
        arr = np.array(data, dtype=float)
    else:
        rows = [list(row) for row in data]
        if not rows or not rows[0]:
            raise ValueError(f"{what} data cannot be empty.")
        if any(len(row) != len(rows[0]) for row in rows):
            raise ValueError(f"All rows in the {what.lower()} must have the same length.")
        arr = np.array(rows, dtype=float)
    if arr.ndim != 2 or arr.size == 0:
        raise ValueError(f"{what} data must be a non-empty 2-D array; received shape {arr.shape}")
    return arr


def require_same_dimension(a: np.ndarray, b: np.ndarray, what: str = "operand") -> None:
    # numpy would broadcast a (1,) against a (3,) without complaint.
    if np.shape(a) != np.shape(b):
        raise DimensionMismatchError(np.shape(a), np.shape(b), what)


def normalize_vector(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    norm = float(np.linalg.norm(v))
    if norm <= eps:
        raise DegenerateGeometryError("Cannot normalise a zero-length vector.")
    return np.asarray(v, dtype=float) / norm


def divide(v: np.ndarray, scalar: float) -> np.ndarray:
    if scalar == 0.0:
        raise DegenerateGeometryError("Division of a vector by zero.")
    return np.asarray(v, dtype=float) / scalar


def project_onto(v: np.ndarray, onto: np.ndarray) -> np.ndarray:
    """Component of ``v`` along ``onto``."""

    require_same_dimension(v, onto)
    denom = float(np.dot(onto, onto))
    if denom == 0.0:
        raise DegenerateGeometryError("Cannot project onto a zero-length vector.")
    return (float(np.dot(v, onto)) / denom) * np.asarray(onto, dtype=float)


def distance(a: np.ndarray, b: np.ndarray) -> float:
    require_same_dimension(a, b)
    return float(np.linalg.norm(np.asarray(b, dtype=float) - np.asarray(a, dtype=float)))
