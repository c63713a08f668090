"""Curves, polynomials and rotation-group primitives."""

from .bezier import BezierCurve, binomial, falling_factorial
from .errors import DegenerateGeometryError, DimensionMismatchError
from .lie import (
    RotationMatrix,
    SkewSymmetricMatrix,
    interpolate_position,
    interpolate_rotation,
    rotation_error,
)
from .polynomial import Polynomial, count_sign_changes, find_roots_in_interval
from .pose import Pose, TangentBundleCommand, Twist
from .vectors import (
    as_matrix,
    as_vector,
    distance,
    divide,
    normalize_vector,
    project_onto,
    require_same_dimension,
)

__all__ = [
    "BezierCurve",
    "DegenerateGeometryError",
    "DimensionMismatchError",
    "Polynomial",
    "Pose",
    "RotationMatrix",
    "SkewSymmetricMatrix",
    "TangentBundleCommand",
    "Twist",
    "as_matrix",
    "as_vector",
    "binomial",
    "count_sign_changes",
    "distance",
    "divide",
    "falling_factorial",
    "find_roots_in_interval",
    "interpolate_position",
    "interpolate_rotation",
    "normalize_vector",
    "project_onto",
    "require_same_dimension",
    "rotation_error",
]
