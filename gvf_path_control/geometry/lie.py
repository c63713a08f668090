"""SO(n) rotations and so(n) skew-symmetric generators.

The logarithm and exponential are truncated power series:

    log(R) = (R - I) - (R - I)^2 / 2 + (R - I)^3 / 3 - ...
    exp(A) = I + A + A^2 / 2! + ...

Both stop early once an increment's Frobenius norm falls below
``SERIES_TOL``. The log series only converges for ``||R - I|| < 1``, so large
rotations are first pulled towards the identity by repeated principal square
roots (inverse scaling and squaring) and the result is scaled back up. Half
turns have no real principal square root and are read off the real Schur form
instead. The
exponential uses the matching scaling-and-squaring step for large generators.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

import numpy as np
from scipy.linalg import schur, sqrtm
from scipy.spatial.transform import Rotation

from .errors import DimensionMismatchError
from .vectors import as_matrix, as_vector, normalize_vector

SKEW_TOL = 1e-9
ORTHOGONALITY_TOL = 1e-6
SERIES_TOL = 1e-10
LOG_SERIES_TERMS = 50
EXP_SERIES_TERMS = 20

_LOG_RADIUS = 0.5
_EXP_RADIUS = 0.5
_MAX_SQUARE_ROOTS = 16
_HALF_TURN_TOL = 1e-6


def _frobenius(m: np.ndarray) -> float:
    return float(np.linalg.norm(m, "fro"))


def _require_square(arr: np.ndarray, what: str) -> None:
    if arr.shape[0] != arr.shape[1]:
        raise ValueError(f"{what} must be square; received shape {arr.shape}")


def _skew_part(m: np.ndarray) -> np.ndarray:
    return 0.5 * (m - m.T)


def _half_turn_log(r: np.ndarray) -> np.ndarray:
    """Logarithm of a rotation with an eigenvalue at -1.

    The series cannot reach these, since the principal square root is not
    real there. The real Schur form of an orthogonal matrix is block diagonal
    with 2x2 plane rotations and +/-1 entries; each plane block contributes
    its angle and the -1 entries are paired into half turns (there is an even
    number of them when the determinant is +1).
    """

    t, z = schur(r, output="real")
    n = r.shape[0]
    generator = np.zeros((n, n))
    negative = []
    i = 0
    while i < n:
        if i + 1 < n and t[i + 1, i] != 0.0:
            angle = math.atan2(0.5 * (t[i + 1, i] - t[i, i + 1]), 0.5 * (t[i, i] + t[i + 1, i + 1]))
            generator[i + 1, i] = angle
            generator[i, i + 1] = -angle
            i += 2
            continue
        if t[i, i] < 0.0:
            negative.append(i)
        i += 1

    for first, second in zip(negative[0::2], negative[1::2]):
        generator[second, first] = math.pi
        generator[first, second] = -math.pi

    return _skew_part(z @ generator @ z.T)


class SkewSymmetricMatrix:
    """Element of so(n); ``M[i, j] == -M[j, i]`` holds after every mutation."""

    __slots__ = ("_data",)

    def __init__(self, data: Sequence[Sequence[float]] | np.ndarray):
        arr = as_matrix(data, "Skew-symmetric matrix")
        _require_square(arr, "Skew-symmetric matrix")
        n = arr.shape[0]
        for i in range(n):
            if abs(arr[i, i]) > SKEW_TOL:
                raise ValueError("Diagonal of skew-symmetric matrix must be zero.")
            for j in range(i + 1, n):
                if abs(arr[i, j] + arr[j, i]) > SKEW_TOL:
                    raise ValueError(f"Matrix is not skew-symmetric at ({i}, {j}).")
        self._data = arr

    @classmethod
    def zeros(cls, dimension: int) -> SkewSymmetricMatrix:
        return cls(np.zeros((dimension, dimension), dtype=float))

    @classmethod
    def from_vector(cls, vec: Sequence[float] | np.ndarray) -> SkewSymmetricMatrix:
        """Hat map: a scalar rate (2-D) or a rotation vector (3-D)."""

        w = np.atleast_1d(np.asarray(vec, dtype=float))
        if w.shape == (1,):
            return cls([[0.0, -w[0]], [w[0], 0.0]])
        if w.shape == (3,):
            return cls(
                [
                    [0.0, -w[2], w[1]],
                    [w[2], 0.0, -w[0]],
                    [-w[1], w[0], 0.0],
                ]
            )
        raise ValueError(f"Hat map is defined for 1 or 3 components; received shape {w.shape}")

    def to_vector(self) -> np.ndarray:
        m = self._data
        if self.dimension == 2:
            return np.array([m[1, 0]], dtype=float)
        if self.dimension == 3:
            return np.array([m[2, 1], m[0, 2], m[1, 0]], dtype=float)
        raise ValueError(f"Vee map is defined for 2x2 and 3x3 matrices; dimension is {self.dimension}")

    @property
    def dimension(self) -> int:
        return self._data.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        return self._data.copy()

    def get(self, i: int, j: int) -> float:
        return float(self._data[i, j])

    def set(self, i: int, j: int, value: float) -> None:
        if i == j:
            if abs(value) > SKEW_TOL:
                raise ValueError("Diagonal entries of a skew-symmetric matrix must be zero.")
            return
        self._data[i, j] = value
        self._data[j, i] = -value

    def copy(self) -> SkewSymmetricMatrix:
        return SkewSymmetricMatrix(self._data)

    def scale(self, scalar: float) -> SkewSymmetricMatrix:
        return SkewSymmetricMatrix(self._data * float(scalar))

    def add(self, other: SkewSymmetricMatrix) -> SkewSymmetricMatrix:
        if other.dimension != self.dimension:
            raise DimensionMismatchError(self._data.shape, other._data.shape, "skew-symmetric operand")
        return SkewSymmetricMatrix(self._data + other._data)

    def transpose(self) -> SkewSymmetricMatrix:
        return SkewSymmetricMatrix(-self._data)

    def frobenius_norm(self) -> float:
        return _frobenius(self._data)

    def exp(self) -> RotationMatrix:
        n = self.dimension
        norm = self.frobenius_norm()
        squarings = 0
        while norm / (2.0**squarings) > _EXP_RADIUS:
            squarings += 1

        a = self._data / (2.0**squarings)
        term = np.eye(n)
        result = np.eye(n)
        for k in range(1, EXP_SERIES_TERMS):
            term = term @ a / k
            result = result + term
            if _frobenius(term) < SERIES_TOL:
                break

        for _ in range(squarings):
            result = result @ result
        return RotationMatrix.nearest(result)

    def __repr__(self) -> str:
        return f"SkewSymmetricMatrix({self._data.tolist()!r})"


class RotationMatrix:
    """Element of SO(n): orthogonal with determinant +1, checked on construction."""

    __slots__ = ("_data",)

    def __init__(
        self,
        data: Sequence[Sequence[float]] | np.ndarray,
        *,
        atol: float = ORTHOGONALITY_TOL,
    ):
        arr = as_matrix(data, "Rotation matrix")
        _require_square(arr, "Rotation matrix")
        n = arr.shape[0]
        if not np.allclose(arr.T @ arr, np.eye(n), atol=atol):
            raise ValueError("Rotation matrix must be orthogonal.")
        if abs(float(np.linalg.det(arr)) - 1.0) > atol:
            raise ValueError("Rotation matrix must have determinant +1.")
        arr.setflags(write=False)
        self._data = arr

    @classmethod
    def identity(cls, dimension: int) -> RotationMatrix:
        return cls(np.eye(dimension))

    @classmethod
    def nearest(cls, data: np.ndarray) -> RotationMatrix:
        """Project ``data`` onto SO(n) (polar decomposition via SVD)."""

        arr = as_matrix(data, "Rotation matrix")
        _require_square(arr, "Rotation matrix")
        u, _, vt = np.linalg.svd(arr)
        r = u @ vt
        if np.linalg.det(r) < 0.0:
            u[:, -1] *= -1.0
            r = u @ vt
        return cls(r)

    @classmethod
    def from_2d_angle(cls, angle_rad: float) -> RotationMatrix:
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        return cls([[c, -s], [s, c]])

    @classmethod
    def from_3d_rotation_x(cls, angle_rad: float) -> RotationMatrix:
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        return cls([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])

    @classmethod
    def from_3d_rotation_y(cls, angle_rad: float) -> RotationMatrix:
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        return cls([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])

    @classmethod
    def from_3d_rotation_z(cls, angle_rad: float) -> RotationMatrix:
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        return cls([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])

    @classmethod
    def from_axis_angle(cls, axis: Sequence[float] | np.ndarray, angle_rad: float) -> RotationMatrix:
        unit = normalize_vector(as_vector(axis, 3, "rotation axis"))
        return cls(Rotation.from_rotvec(unit * angle_rad).as_matrix())

    @property
    def dimension(self) -> int:
        return self._data.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        return self._data

    def compose(self, other: RotationMatrix) -> RotationMatrix:
        if other.dimension != self.dimension:
            raise DimensionMismatchError(self._data.shape, other._data.shape, "rotation operand")
        return RotationMatrix.nearest(self._data @ other._data)

    def transpose(self) -> RotationMatrix:
        return RotationMatrix(self._data.T)

    inverse = transpose

    def apply(self, vec: Sequence[float] | np.ndarray) -> np.ndarray:
        return self._data @ as_vector(vec, self.dimension)

    def __matmul__(self, other):
        if isinstance(other, RotationMatrix):
            return self.compose(other)
        return self.apply(other)

    def angle(self) -> float:
        """Heading angle of a planar rotation."""

        if self.dimension != 2:
            raise ValueError("angle() is only defined for 2-D rotations.")
        return math.atan2(self._data[1, 0], self._data[0, 0])

    def frobenius_norm(self) -> float:
        return _frobenius(self._data)

    def log(self) -> SkewSymmetricMatrix:
        n = self.dimension
        identity = np.eye(n)
        r = np.array(self._data)
        if np.any(np.abs(np.linalg.eigvals(r) + 1.0) < _HALF_TURN_TOL):
            return SkewSymmetricMatrix(_half_turn_log(r))

        square_roots = 0
        while np.linalg.norm(r - identity, 2) >= _LOG_RADIUS and square_roots < _MAX_SQUARE_ROOTS:
            r = np.real(sqrtm(r))
            square_roots += 1

        x = r - identity
        term = x.copy()
        result = x.copy()
        for k in range(2, LOG_SERIES_TERMS + 1):
            term = term @ x
            increment = term * ((1.0 if k % 2 else -1.0) / k)
            result = result + increment
            if _frobenius(increment) < SERIES_TOL:
                break

        result = result * (2.0**square_roots)
        return SkewSymmetricMatrix(_skew_part(result))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RotationMatrix):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"RotationMatrix({self._data.tolist()!r})"


def rotation_error(current: RotationMatrix, target: RotationMatrix) -> SkewSymmetricMatrix:
    """Rotation vector (as a generator) taking ``current`` onto ``target``."""

    return target.compose(current.transpose()).log()


def interpolate_rotation(
    start: RotationMatrix, end: RotationMatrix
) -> Callable[[float], RotationMatrix]:
    """Constant-angular-rate geodesic from ``start`` (c=0) to ``end`` (c=1)."""

    relative = start.transpose().compose(end)
    generator = relative.log()

    def at(c: float) -> RotationMatrix:
        return start.compose(generator.scale(c).exp())

    return at


def interpolate_position(
    start: Sequence[float] | np.ndarray, end: Sequence[float] | np.ndarray
) -> Callable[[float], np.ndarray]:
    """Straight line from ``start`` (c=0) to ``end`` (c=1)."""

    origin = as_vector(start)
    offset = as_vector(end, origin.shape[0]) - origin

    def at(c: float) -> np.ndarray:
        return origin + offset * c

    return at
