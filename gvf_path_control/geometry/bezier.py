"""Bezier curves in closed power-basis form.

The curve is stored as its characteristic matrix ``Phi = M @ P``: ``P`` stacks
the control points as rows and ``M`` converts the Bernstein basis to powers of
``t``. Row ``i`` of ``Phi`` holds the coefficient of ``t**(N - i)``, so the
curve and any derivative at ``t`` is a single product ``T(t) @ Phi`` with
``T(t) = [t**N, ..., t, 1]`` (or its k-th derivative).
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy.integrate import quad

from .errors import DegenerateGeometryError, DimensionMismatchError
from .polynomial import Polynomial
from .vectors import as_vector, normalize_vector

_ZERO_SPEED_TOL = 1e-12
_STRAIGHT_TOL = 1e-9


def binomial(n: int, k: int) -> int:
    return math.comb(n, k)


def falling_factorial(a: int, b: int) -> float:
    """``a * (a - 1) * ... * (a - b + 1)``; 1 when ``b == 0``."""

    result = 1.0
    for i in range(b):
        result *= a - i
    return result


class BezierCurve:
    def __init__(self, control_points: Sequence[Sequence[float] | np.ndarray]):
        points = [as_vector(p, what="control point") for p in control_points]
        if not points:
            raise ValueError("BezierCurve requires at least one control point.")
        dimension = points[0].shape[0]
        for p in points[1:]:
            if p.shape != (dimension,):
                raise DimensionMismatchError((dimension,), p.shape, "control point")

        self._degree = len(points) - 1
        self._dimension = dimension
        self._control_points = np.vstack(points)
        self._control_points.setflags(write=False)
        self._characteristic_matrix = self._build_basis_matrix() @ self._control_points
        self._characteristic_matrix.setflags(write=False)

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def control_points(self) -> np.ndarray:
        return self._control_points

    @property
    def characteristic_matrix(self) -> np.ndarray:
        return self._characteristic_matrix

    def _build_basis_matrix(self) -> np.ndarray:
        n = self._degree
        m = np.zeros((n + 1, n + 1), dtype=float)
        for i in range(n + 1):
            power = n - i
            for j in range(power + 1):
                m[i, j] = binomial(n, power) * binomial(power, j) * (-1.0) ** (power - j)
        return m

    def _t_vector(self, t: float, order: int = 0) -> np.ndarray:
        entries = np.zeros(self._degree + 1, dtype=float)
        for i in range(self._degree + 1):
            power = self._degree - i
            if power >= order:
                entries[i] = falling_factorial(power, order) * t ** (power - order)
        return entries

    def evaluate(self, t: float) -> np.ndarray:
        return self._t_vector(t) @ self._characteristic_matrix

    def derivative(self, t: float, order: int = 1) -> np.ndarray:
        if order < 0:
            raise ValueError("Derivative order must be non-negative.")
        return self._t_vector(t, order) @ self._characteristic_matrix

    def second_derivative(self, t: float) -> np.ndarray:
        return self.derivative(t, 2)

    def tangent_vector(self, t: float) -> np.ndarray:
        return self.derivative(t, 1)

    def principal_normal(self, t: float, strict: bool = True) -> np.ndarray:
        """Unit Frenet normal ``T'/|T'|`` at ``t``.

        Raises ``DegenerateGeometryError`` when ``r'(t)`` vanishes. Where the
        curve is locally straight ``T'`` is zero as well: ``strict`` raises in
        that case, otherwise the zero vector is returned.
        """

        r1 = self.derivative(t, 1)
        r2 = self.derivative(t, 2)
        speed = float(np.linalg.norm(r1))
        if speed <= _ZERO_SPEED_TOL:
            raise DegenerateGeometryError(f"Zero derivative magnitude at t = {t}")

        dot = float(np.dot(r1, r2))
        t_prime = (r2 * speed - r1 * (dot / speed)) / (speed * speed)
        if not strict and float(np.linalg.norm(t_prime)) <= _STRAIGHT_TOL:
            return np.zeros(self._dimension, dtype=float)
        return normalize_vector(t_prime)

    def coordinate_polynomials(self) -> list[Polynomial]:
        """``phi_i(t)`` for each coordinate, in ascending powers."""

        return [Polynomial(self._characteristic_matrix[::-1, dim]) for dim in range(self._dimension)]

    def distance_derivative_polynomial(self, point: Sequence[float] | np.ndarray) -> Polynomial:
        """``sum_i (phi_i(t) - p_i) * phi_i'(t)``, half the derivative of ``|r(t) - p|^2``."""

        p = as_vector(point, self._dimension, "query point")
        result = Polynomial([0.0])
        for phi, p_i in zip(self.coordinate_polynomials(), p):
            result = result.add(phi.add(-p_i).multiply(phi.derivative()))
        return result

    def arc_length(self, t_start: float = 0.0, t_end: float = 1.0) -> float:
        if self._degree == 0 or t_end <= t_start:
            return 0.0
        length, _ = quad(lambda s: float(np.linalg.norm(self.derivative(s))), t_start, t_end)
        return float(length)

    def distance_remaining(self, t: float) -> float:
        return self.arc_length(min(max(t, 0.0), 1.0), 1.0)
