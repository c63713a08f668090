"""Guiding-vector-field path following on Bezier trajectories."""

from .config import FollowerConfig, PIDGains
from .fields import (
    CentripetalField,
    ComposedField,
    DriveField,
    EuclideanField,
    EuclideanFunctionField,
    GuidingVectorField,
    RotationalField,
    SumField,
    TranslationalField,
    compose,
)
from .follower import (
    Follower,
    FollowerError,
    FollowerException,
    FollowerState,
    HardwareAction,
    Localizer,
)
from .path import (
    CurveContext,
    HeadingInterpolation,
    Path,
    constant_heading,
    linear_heading_interpolation,
    tangent_heading,
)
from .pid import (
    Controller,
    PIDController,
    euclidean_distance_error,
    rotation_error_norm,
    signed_scalar_error,
)

__all__ = [
    "CentripetalField",
    "ComposedField",
    "Controller",
    "CurveContext",
    "DriveField",
    "EuclideanField",
    "EuclideanFunctionField",
    "Follower",
    "FollowerConfig",
    "FollowerError",
    "FollowerException",
    "FollowerState",
    "GuidingVectorField",
    "HardwareAction",
    "HeadingInterpolation",
    "Localizer",
    "PIDController",
    "PIDGains",
    "Path",
    "RotationalField",
    "SumField",
    "TranslationalField",
    "compose",
    "constant_heading",
    "euclidean_distance_error",
    "linear_heading_interpolation",
    "rotation_error_norm",
    "signed_scalar_error",
    "tangent_heading",
]
