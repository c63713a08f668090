from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from gvf_path_control.geometry import RotationMatrix, interpolate_position
from gvf_path_control.path_follower import (
    HeadingInterpolation,
    Path,
    constant_heading,
    tangent_heading,
)


def line_path(
    start: Sequence[float] = (0.0, 0.0),
    end: Sequence[float] = (2.0, 0.0),
    heading: HeadingInterpolation | None = None,
) -> Path:
    """Straight segment as a quadratic Bezier with a collinear midpoint."""

    start_arr = np.asarray(start, dtype=float)
    end_arr = np.asarray(end, dtype=float)
    if start_arr.shape != end_arr.shape:
        raise ValueError("start and end must have the same dimension")
    if np.allclose(start_arr, end_arr):
        raise ValueError("line_path needs distinct endpoints")
    if heading is None:
        heading = constant_heading(RotationMatrix.identity(start_arr.shape[0]))
    midpoint = interpolate_position(start_arr, end_arr)(0.5)
    return Path.from_control_points([start_arr, midpoint, end_arr], heading)


def s_curve_path(
    length_m: float = 4.0,
    lateral_offset_m: float = 1.0,
    heading: HeadingInterpolation | None = None,
) -> Path:
    """Planar cubic S-bend from the origin, ending ``lateral_offset_m`` to the left."""

    if length_m <= 0.0:
        raise ValueError("length_m must be positive")
    third = length_m / 3.0
    control_points = [
        (0.0, 0.0),
        (third, 0.0),
        (2.0 * third, lateral_offset_m),
        (length_m, lateral_offset_m),
    ]
    return Path.from_control_points(control_points, heading or tangent_heading)


def quarter_turn_path(
    radius_m: float = 2.0,
    heading: HeadingInterpolation | None = None,
) -> Path:
    """Cubic approximation of a counter-clockwise quarter circle starting at (radius, 0)."""

    if radius_m <= 0.0:
        raise ValueError("radius_m must be positive")
    k = 4.0 / 3.0 * (math.sqrt(2.0) - 1.0) * radius_m
    control_points = [
        (radius_m, 0.0),
        (radius_m, k),
        (k, radius_m),
        (0.0, radius_m),
    ]
    return Path.from_control_points(control_points, heading or tangent_heading)
