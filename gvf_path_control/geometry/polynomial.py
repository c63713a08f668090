"""Power-basis polynomials and real-root isolation on [0, 1]."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

import numpy as np

logger = logging.getLogger(__name__)

ROOT_EPS = 1e-6
MAX_ROOT_DEPTH = 30
BISECTION_ITERATIONS = 50


class Polynomial:
    """Immutable polynomial; ``coeffs[i]`` is the coefficient of ``t**i``."""

    __slots__ = ("_coeffs",)

    def __init__(self, coeffs: Iterable[float]):
        arr = np.array(list(coeffs), dtype=float)
        if arr.ndim != 1 or arr.size == 0:
            raise ValueError("Polynomial needs at least one coefficient.")
        arr.setflags(write=False)
        self._coeffs = arr

    @property
    def coeffs(self) -> np.ndarray:
        return self._coeffs

    @property
    def degree(self) -> int:
        return self._coeffs.size - 1

    def evaluate(self, t: float) -> float:
        result = 0.0
        for c in self._coeffs[::-1]:
            result = result * t + c
        return float(result)

    __call__ = evaluate

    def derivative(self) -> Polynomial:
        if self._coeffs.size == 1:
            return Polynomial([0.0])
        powers = np.arange(1, self._coeffs.size, dtype=float)
        return Polynomial(self._coeffs[1:] * powers)

    def add(self, other: Polynomial | float) -> Polynomial:
        if not isinstance(other, Polynomial):
            shifted = self._coeffs.copy()
            shifted[0] += float(other)
            return Polynomial(shifted)
        size = max(self._coeffs.size, other._coeffs.size)
        total = np.zeros(size, dtype=float)
        total[: self._coeffs.size] += self._coeffs
        total[: other._coeffs.size] += other._coeffs
        return Polynomial(total)

    def scale(self, scalar: float) -> Polynomial:
        return Polynomial(self._coeffs * float(scalar))

    def multiply(self, other: Polynomial) -> Polynomial:
        return Polynomial(np.convolve(self._coeffs, other._coeffs))

    def reparametrize(self, t_min: float, t_max: float) -> Polynomial:
        """Substitute ``t = t_min + (t_max - t_min) * u`` and re-expand in ``u``."""

        t_scale = t_max - t_min
        result = Polynomial([0.0])
        for power, coeff in enumerate(self._coeffs):
            result = result.add(Polynomial.pow_affine(power, t_min, t_scale).scale(coeff))
        return result

    def bernstein_coefficients(self) -> np.ndarray:
        """Coefficients of this polynomial in the degree-n Bernstein basis on [0, 1]."""

        n = self.degree
        a = self._coeffs
        out = np.zeros(n + 1, dtype=float)
        for k in range(n + 1):
            out[k] = sum(math.comb(k, i) / math.comb(n, i) * a[i] for i in range(k + 1))
        return out

    @staticmethod
    def pow_affine(k: int, t_min: float, t_scale: float) -> Polynomial:
        """Return ``(t_min + t_scale * t) ** k``."""

        result = Polynomial([1.0])
        affine = Polynomial([t_min, t_scale])
        for _ in range(k):
            result = result.multiply(affine)
        return result

    @classmethod
    def from_roots(cls, roots: Iterable[float]) -> Polynomial:
        result = cls([1.0])
        for r in roots:
            result = result.multiply(cls([-float(r), 1.0]))
        return result

    def __add__(self, other: Polynomial | float) -> Polynomial:
        return self.add(other)

    __radd__ = __add__

    def __mul__(self, other: Polynomial | float) -> Polynomial:
        if isinstance(other, Polynomial):
            return self.multiply(other)
        return self.scale(other)

    __rmul__ = __mul__

    def __neg__(self) -> Polynomial:
        return self.scale(-1.0)

    def __repr__(self) -> str:
        return f"Polynomial({self._coeffs.tolist()!r})"

    def __str__(self) -> str:
        terms = []
        for power in range(self._coeffs.size - 1, -1, -1):
            c = self._coeffs[power]
            if abs(c) < 1e-10:
                continue
            term = f"{c:.4f}"
            if power > 0:
                term += "t"
            if power > 1:
                term += f"^{power}"
            terms.append(term)
        return " + ".join(terms) if terms else "0"


def count_sign_changes(values: Sequence[float], eps: float = ROOT_EPS) -> int:
    changes = 0
    prev = 0.0
    for v in values:
        if abs(v) < eps:
            continue
        if prev != 0.0 and v * prev < 0.0:
            changes += 1
        prev = v
    return changes


def find_roots_in_interval(poly: Polynomial) -> list[float]:
    """Best-effort real roots of ``poly`` on [0, 1], sorted ascending.

    Each node of the bisection tree counts sign changes of the Bernstein
    coefficients of the polynomial restricted to that node. Zero changes prunes
    the node, one change is refined by bisection, more changes split the node at
    its midpoint. Roots of even multiplicity, roots closer together than the
    depth limit resolves, and roots sitting exactly on a node boundary next to an
    interior root can be missed; such branches are dropped, never raised.
    """

    roots: list[float] = []
    _find_roots_recursive(poly, 0.0, 1.0, roots, 0)
    roots.sort()
    unique: list[float] = []
    for r in roots:
        if not unique or abs(r - unique[-1]) > ROOT_EPS:
            unique.append(r)
    return unique


def _find_roots_recursive(
    local: Polynomial, t_min: float, t_max: float, roots: list[float], depth: int
) -> None:
    # ``local`` is the polynomial already reparametrised onto [t_min, t_max].
    if depth > MAX_ROOT_DEPTH:
        logger.debug(
            "Root isolation abandoned on [%.9f, %.9f]: depth limit %d exceeded.",
            t_min,
            t_max,
            MAX_ROOT_DEPTH,
        )
        return

    sign_changes = count_sign_changes(local.bernstein_coefficients())
    if sign_changes == 0:
        return

    if sign_changes == 1:
        u = _bisection(local, 0.0, 1.0)
        if u is None:
            logger.debug(
                "Bisection endpoints do not bracket a root on [%.9f, %.9f].", t_min, t_max
            )
            return
        roots.append(t_min + (t_max - t_min) * u)
        return

    t_mid = 0.5 * (t_min + t_max)
    _find_roots_recursive(local.reparametrize(0.0, 0.5), t_min, t_mid, roots, depth + 1)
    _find_roots_recursive(local.reparametrize(0.5, 1.0), t_mid, t_max, roots, depth + 1)


def _bisection(poly: Polynomial, a: float, b: float) -> float | None:
    fa = poly.evaluate(a)
    fb = poly.evaluate(b)
    if abs(fa) < ROOT_EPS:
        return a
    if abs(fb) < ROOT_EPS:
        return b
    if fa * fb > 0.0:
        return None

    for _ in range(BISECTION_ITERATIONS):
        m = 0.5 * (a + b)
        fm = poly.evaluate(m)
        if abs(fm) < ROOT_EPS:
            return m
        if fa * fm < 0.0:
            b = m
        else:
            a = m
            fa = fm
    return 0.5 * (a + b)
