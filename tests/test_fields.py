"""Tests for the Euclidean and rotational guiding vector fields."""

from __future__ import annotations

import math
from pathlib import Path
import sys

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from gvf_path_control.geometry import (
    BezierCurve,
    DimensionMismatchError,
    Pose,
    RotationMatrix,
    SkewSymmetricMatrix,
    TangentBundleCommand,
)
from gvf_path_control.path_follower import (
    CentripetalField,
    DriveField,
    EuclideanFunctionField,
    PIDController,
    RotationalField,
    SumField,
    TranslationalField,
    compose,
    euclidean_distance_error,
    rotation_error_norm,
    signed_scalar_error,
)

LINE = BezierCurve([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)])


def _frozen_clock() -> float:
    return 0.0


def _p(kp: float, error_fn) -> PIDController:
    return PIDController(kp, 0.0, 0.0, error_fn, clock=_frozen_clock)


def _pose(position, angle_rad: float = 0.0) -> Pose:
    return Pose(np.asarray(position, dtype=float), RotationMatrix.from_2d_angle(angle_rad))


def test_function_fields_add_pointwise() -> None:
    a = EuclideanFunctionField(lambda pose: pose.position)
    b = EuclideanFunctionField(lambda pose: np.array([1.0, -1.0]))
    c = EuclideanFunctionField(lambda pose: np.array([0.5, 0.5]))

    total = (a + b) + c
    assert isinstance(total, SumField)
    assert len(total.fields) == 3
    assert np.allclose(total(_pose([2.0, 3.0])), [3.5, 2.5])
    assert np.allclose(a.add(b).evaluate(_pose([0.0, 0.0])), [1.0, -1.0])


def test_sum_field_rejects_mismatched_dimensions() -> None:
    a = EuclideanFunctionField(lambda pose: np.zeros(2))
    b = EuclideanFunctionField(lambda pose: np.zeros(3))
    with pytest.raises(DimensionMismatchError):
        (a + b).evaluate(_pose([0.0, 0.0]))


def test_translational_field_points_at_target() -> None:
    field = TranslationalField(np.array([3.0, 4.0]), _p(2.0, euclidean_distance_error))

    value = field(_pose([0.0, 0.0]))
    assert np.allclose(value, [6.0, 8.0])
    assert np.allclose(field.last_error, [3.0, 4.0])


def test_translational_field_vanishes_at_target() -> None:
    field = TranslationalField(np.array([1.0, 1.0]), _p(2.0, euclidean_distance_error))
    assert np.allclose(field(_pose([1.0, 1.0])), [0.0, 0.0])


def test_drive_field_cruises_far_from_the_end() -> None:
    field = DriveField(
        LINE,
        t=0.0,
        velocity=np.array([0.0, 0.0]),
        controller=_p(0.5, signed_scalar_error),
        maximum_deceleration=1.0,
        cruise_speed=1.5,
    )
    assert np.allclose(field(_pose([0.0, 0.0])), [1.5, 0.0])


def test_drive_field_brakes_near_the_end() -> None:
    field = DriveField(
        LINE,
        t=0.9,
        velocity=np.array([1.0, 0.0]),
        controller=_p(0.5, signed_scalar_error),
        maximum_deceleration=-1.0,
        cruise_speed=1.0,
    )
    remaining = LINE.distance_remaining(0.9)
    assert remaining == pytest.approx(0.2)

    target_speed = math.sqrt(2.0 * 1.0 * remaining)
    expected = 0.5 * (target_speed - 1.0)
    assert expected < 0.0
    assert np.allclose(field(_pose([1.8, 0.0])), [expected, 0.0])


def test_drive_field_braking_output_is_the_controller_correction_alone() -> None:
    field = DriveField(
        LINE,
        t=0.9,
        velocity=np.array([1.0, 0.0]),
        controller=_p(0.5, signed_scalar_error),
        maximum_deceleration=1.0,
        cruise_speed=0.5,
    )
    target_speed = math.sqrt(2.0 * LINE.distance_remaining(0.9))
    assert target_speed > 0.5
    assert np.allclose(field(_pose([1.8, 0.0])), [0.5 * (target_speed - 1.0), 0.0])


def test_drive_field_commands_stop_at_the_end() -> None:
    field = DriveField(
        LINE,
        t=1.0,
        velocity=np.array([1.0, 0.0]),
        controller=_p(0.5, signed_scalar_error),
        maximum_deceleration=1.0,
        cruise_speed=1.0,
    )
    assert np.allclose(field(_pose([2.0, 0.0])), [-0.5, 0.0])


def test_centripetal_field() -> None:
    r = 2.0
    k = 4.0 / 3.0 * (math.sqrt(2.0) - 1.0) * r
    arc = BezierCurve([(r, 0.0), (r, k), (k, r), (0.0, r)])
    velocity = np.array([0.0, 1.0])

    value = CentripetalField(arc, 0.0, velocity, gain=2.0)(_pose([r, 0.0]))
    expected_magnitude = 2.0 * 1.0 / np.linalg.norm(arc.derivative(0.0))
    assert np.allclose(value, [-expected_magnitude, 0.0])

    straight = CentripetalField(LINE, 0.5, np.array([1.0, 0.0]), gain=2.0)
    assert np.allclose(straight(_pose([1.0, 0.0])), [0.0, 0.0])


def test_rotational_field_rate_scales_with_gain() -> None:
    field = RotationalField(RotationMatrix.from_2d_angle(0.4), _p(1.5, rotation_error_norm))

    value = field(_pose([0.0, 0.0], angle_rad=0.0))
    assert isinstance(value, SkewSymmetricMatrix)
    assert value.to_vector() == pytest.approx([0.6], abs=1e-8)
    assert field.last_error.to_vector() == pytest.approx([0.4], abs=1e-8)


def test_rotational_field_vanishes_at_target() -> None:
    field = RotationalField(RotationMatrix.from_2d_angle(0.4), _p(1.5, rotation_error_norm))
    value = field(_pose([0.0, 0.0], angle_rad=0.4))
    assert value.frobenius_norm() == pytest.approx(0.0, abs=1e-9)


def test_compose_builds_tangent_bundle_command() -> None:
    orientation = RotationMatrix.from_2d_angle(0.2)
    euclidean = EuclideanFunctionField(lambda pose: np.array([1.0, 2.0]))
    rotational = RotationalField(RotationMatrix.from_2d_angle(0.5), _p(1.0, rotation_error_norm))

    command = compose(euclidean, rotational, orientation)(_pose([0.0, 0.0], angle_rad=0.2))
    assert isinstance(command, TangentBundleCommand)
    assert np.allclose(command.translational_component, [1.0, 2.0])

    omega_hat = SkewSymmetricMatrix.from_vector([0.3]).matrix
    assert np.allclose(command.rotational_component, omega_hat @ orientation.matrix, atol=1e-8)
