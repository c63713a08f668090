from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from gvf_path_control.geometry import (
    BezierCurve,
    Pose,
    RotationMatrix,
    as_vector,
    find_roots_in_interval,
    interpolate_rotation,
)


@dataclass(frozen=True)
class CurveContext:
    t: float
    curve: BezierCurve


HeadingInterpolation = Callable[[CurveContext], RotationMatrix]


class Path:
    """A Bezier curve plus the heading the body should hold along it."""

    def __init__(
        self,
        curve: BezierCurve | None = None,
        heading_interpolation: HeadingInterpolation | None = None,
    ):
        self._curve = curve
        self._heading_interpolation = heading_interpolation

    @classmethod
    def from_control_points(
        cls,
        control_points: Sequence[Sequence[float] | np.ndarray],
        heading_interpolation: HeadingInterpolation,
    ) -> Path:
        return cls(BezierCurve(control_points), heading_interpolation)

    @property
    def curve(self) -> BezierCurve:
        if self._curve is None:
            raise ValueError("Path has no curve; call set_curve() first.")
        return self._curve

    @property
    def heading_interpolation(self) -> HeadingInterpolation:
        if self._heading_interpolation is None:
            raise ValueError("Path has no heading interpolation; call set_heading_interpolation() first.")
        return self._heading_interpolation

    @property
    def dimension(self) -> int:
        return self.curve.dimension

    def set_curve(self, *control_points: Sequence[float] | np.ndarray) -> Path:
        self._curve = BezierCurve(control_points)
        return self

    def set_heading_interpolation(self, heading_interpolation: HeadingInterpolation) -> Path:
        self._heading_interpolation = heading_interpolation
        return self

    def get_pose(self, t: float) -> Pose:
        curve = self.curve
        return Pose(curve.evaluate(t), self.heading_interpolation(CurveContext(t, curve)))

    def closest_parameter(self, position: Sequence[float] | np.ndarray) -> float:
        """Curve parameter in [0, 1] of the point nearest ``position``.

        Candidates are the roots of ``(r(t) - p) . r'(t)`` found by the root
        isolator plus both endpoints, so a missed interior root degrades the
        projection but never fails it.
        """

        curve = self.curve
        p = as_vector(position, curve.dimension, "query position")
        candidates = find_roots_in_interval(curve.distance_derivative_polynomial(p))

        best_t = 0.0
        best_dist_sq = math.inf
        for t in [*candidates, 0.0, 1.0]:
            offset = curve.evaluate(t) - p
            dist_sq = float(np.dot(offset, offset))
            if dist_sq < best_dist_sq:
                best_dist_sq = dist_sq
                best_t = t
        return best_t

    def closest_point(self, position: Sequence[float] | np.ndarray) -> np.ndarray:
        return self.curve.evaluate(self.closest_parameter(position))


def constant_heading(orientation: RotationMatrix) -> HeadingInterpolation:
    def heading(_: CurveContext) -> RotationMatrix:
        return orientation

    return heading


def linear_heading_interpolation(start: RotationMatrix, end: RotationMatrix) -> HeadingInterpolation:
    """Geodesic heading from ``start`` at t=0 to ``end`` at t=1."""

    at = interpolate_rotation(start, end)

    def heading(context: CurveContext) -> RotationMatrix:
        return at(context.t)

    return heading


def tangent_heading(context: CurveContext) -> RotationMatrix:
    """Planar heading aligned with the curve tangent."""

    tangent = context.curve.tangent_vector(context.t)
    if tangent.shape != (2,):
        raise ValueError("tangent_heading is only defined for planar curves.")
    return RotationMatrix.from_2d_angle(math.atan2(tangent[1], tangent[0]))
