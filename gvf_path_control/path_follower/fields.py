"""Guiding vector fields: functions of pose that produce velocity commands.

Euclidean fields return a velocity vector and add pointwise. A rotational
field returns an so(n) generator. ``compose`` pairs the two into a single
tangent-bundle command evaluated at one pose.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

import numpy as np

from gvf_path_control.geometry import (
    BezierCurve,
    Pose,
    RotationMatrix,
    SkewSymmetricMatrix,
    TangentBundleCommand,
    Twist,
    normalize_vector,
    require_same_dimension,
    rotation_error,
)

from .pid import Controller

V = TypeVar("V")

_ZERO_ERROR_TOL = 1e-12


class GuidingVectorField(ABC, Generic[V]):
    @abstractmethod
    def evaluate(self, pose: Pose) -> V: ...

    def __call__(self, pose: Pose) -> V:
        return self.evaluate(pose)


class EuclideanField(GuidingVectorField[np.ndarray]):
    def add(self, other: EuclideanField) -> SumField:
        return SumField((self, other))

    def __add__(self, other: EuclideanField) -> SumField:
        return self.add(other)


class SumField(EuclideanField):
    """Pointwise sum of Euclidean fields evaluated at the same pose."""

    def __init__(self, fields: Iterable[EuclideanField]):
        flat: list[EuclideanField] = []
        for f in fields:
            if isinstance(f, SumField):
                flat.extend(f.fields)
            else:
                flat.append(f)
        if not flat:
            raise ValueError("SumField needs at least one field.")
        self.fields = tuple(flat)

    def evaluate(self, pose: Pose) -> np.ndarray:
        total = np.asarray(self.fields[0].evaluate(pose), dtype=float)
        for f in self.fields[1:]:
            value = np.asarray(f.evaluate(pose), dtype=float)
            require_same_dimension(total, value, "field value")
            total = total + value
        return total


class EuclideanFunctionField(EuclideanField):
    def __init__(self, fn: Callable[[Pose], np.ndarray]):
        self._fn = fn

    def evaluate(self, pose: Pose) -> np.ndarray:
        return np.asarray(self._fn(pose), dtype=float)


class TranslationalField(EuclideanField):
    """Pulls the position towards ``target`` at the controller's output speed."""

    def __init__(self, target: np.ndarray, controller: Controller[np.ndarray]):
        self.target = np.asarray(target, dtype=float)
        self.controller = controller
        self.last_error: np.ndarray | None = None

    def evaluate(self, pose: Pose) -> np.ndarray:
        current = pose.position
        require_same_dimension(current, self.target, "pose position")
        error = self.target - current
        self.last_error = error.copy()
        output = self.controller.drive_to_state(current, self.target)
        return _unit_or_zero(error) * output


class DriveField(EuclideanField):
    """Velocity along the curve tangent with a constant-deceleration stop profile."""

    def __init__(
        self,
        curve: BezierCurve,
        t: float,
        velocity: np.ndarray,
        controller: Controller[float],
        maximum_deceleration: float,
        cruise_speed: float,
    ):
        self.curve = curve
        self.t = float(t)
        self.velocity = np.asarray(velocity, dtype=float)
        self.controller = controller
        self.maximum_deceleration = abs(float(maximum_deceleration))
        self.cruise_speed = float(cruise_speed)

    def evaluate(self, pose: Pose) -> np.ndarray:
        unit_tangent = normalize_vector(self.curve.tangent_vector(self.t))
        require_same_dimension(self.velocity, unit_tangent, "velocity")
        speed = float(np.dot(self.velocity, unit_tangent))

        braking_distance = speed * speed / (2.0 * self.maximum_deceleration)
        remaining = self.curve.distance_remaining(self.t)
        if remaining > braking_distance:
            return unit_tangent * self.cruise_speed

        target_speed = math.sqrt(2.0 * self.maximum_deceleration * remaining)
        output = self.controller.drive_to_state(speed, target_speed)
        return unit_tangent * output


class CentripetalField(EuclideanField):
    """Feed-forward ``gain * |v|^2 / |r'(t)|`` along the principal normal."""

    def __init__(self, curve: BezierCurve, t: float, velocity: np.ndarray, gain: float):
        self.curve = curve
        self.t = float(t)
        self.velocity = np.asarray(velocity, dtype=float)
        self.gain = float(gain)

    def evaluate(self, pose: Pose) -> np.ndarray:
        normal = self.curve.principal_normal(self.t, strict=False)
        require_same_dimension(self.velocity, normal, "velocity")
        speed_sq = float(np.dot(self.velocity, self.velocity))
        scalar = self.gain * speed_sq / float(np.linalg.norm(self.curve.derivative(self.t)))
        return normal * scalar


class RotationalField(GuidingVectorField[SkewSymmetricMatrix]):
    """Angular velocity towards ``target`` at the controller's output rate."""

    def __init__(self, target: RotationMatrix, controller: Controller[RotationMatrix]):
        self.target = target
        self.controller = controller
        self.last_error: SkewSymmetricMatrix | None = None

    def evaluate(self, pose: Pose) -> SkewSymmetricMatrix:
        current = pose.orientation
        error = rotation_error(current, self.target)
        self.last_error = error.copy()
        output = self.controller.drive_to_state(current, self.target)
        norm = error.frobenius_norm()
        if norm <= _ZERO_ERROR_TOL:
            return SkewSymmetricMatrix.zeros(error.dimension)
        return error.scale(output / norm)


class ComposedField(GuidingVectorField[TangentBundleCommand]):
    def __init__(
        self,
        euclidean: GuidingVectorField[np.ndarray],
        rotational: GuidingVectorField[SkewSymmetricMatrix],
        orientation: RotationMatrix,
    ):
        self.euclidean = euclidean
        self.rotational = rotational
        self.orientation = orientation

    def evaluate(self, pose: Pose) -> TangentBundleCommand:
        twist = Twist(self.euclidean.evaluate(pose), self.rotational.evaluate(pose))
        return TangentBundleCommand(twist, self.orientation)


def compose(
    euclidean: GuidingVectorField[np.ndarray],
    rotational: GuidingVectorField[SkewSymmetricMatrix],
    orientation: RotationMatrix,
) -> ComposedField:
    return ComposedField(euclidean, rotational, orientation)


def _unit_or_zero(v: np.ndarray) -> np.ndarray:
    if float(np.linalg.norm(v)) <= _ZERO_ERROR_TOL:
        return np.zeros_like(v, dtype=float)
    return normalize_vector(v)
