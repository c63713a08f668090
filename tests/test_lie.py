"""Tests for SO(n) rotations, so(n) generators and the log/exp maps."""

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
    DimensionMismatchError,
    RotationMatrix,
    SkewSymmetricMatrix,
    interpolate_position,
    interpolate_rotation,
    rotation_error,
)


def _is_rotation(m: np.ndarray) -> bool:
    n = m.shape[0]
    return np.allclose(m.T @ m, np.eye(n), atol=1e-9) and math.isclose(np.linalg.det(m), 1.0, abs_tol=1e-9)


def test_skew_set_keeps_antisymmetry() -> None:
    s = SkewSymmetricMatrix.zeros(3)
    s.set(0, 1, 2.0)
    s.set(2, 0, -0.5)

    assert s.get(1, 0) == -2.0
    assert s.get(0, 2) == 0.5
    assert np.allclose(s.matrix, -s.matrix.T)


def test_skew_rejects_nonzero_diagonal() -> None:
    s = SkewSymmetricMatrix.zeros(2)
    with pytest.raises(ValueError):
        s.set(1, 1, 1.0)
    with pytest.raises(ValueError):
        SkewSymmetricMatrix([[1.0, 0.0], [0.0, 0.0]])
    with pytest.raises(ValueError):
        SkewSymmetricMatrix([[0.0, 1.0], [1.0, 0.0]])


def test_skew_matrix_accessor_returns_copy() -> None:
    s = SkewSymmetricMatrix.from_vector([0.3])
    m = s.matrix
    m[0, 1] = 99.0
    assert s.get(0, 1) == pytest.approx(-0.3)


def test_hat_map_matches_cross_product() -> None:
    w = np.array([0.2, -1.0, 0.7])
    v = np.array([1.5, 0.4, -2.0])
    hat = SkewSymmetricMatrix.from_vector(w)

    assert np.allclose(hat.matrix @ v, np.cross(w, v))
    assert np.allclose(hat.to_vector(), w)


def test_skew_arithmetic() -> None:
    a = SkewSymmetricMatrix.from_vector([1.0])
    b = SkewSymmetricMatrix.from_vector([0.5])

    assert a.add(b).to_vector() == pytest.approx([1.5])
    assert a.scale(-2.0).to_vector() == pytest.approx([-2.0])
    assert a.transpose().to_vector() == pytest.approx([-1.0])
    assert a.frobenius_norm() == pytest.approx(math.sqrt(2.0))
    with pytest.raises(DimensionMismatchError):
        a.add(SkewSymmetricMatrix.zeros(3))


def test_rotation_validation() -> None:
    with pytest.raises(ValueError):
        RotationMatrix([[1.0, 1.0], [0.0, 1.0]])
    with pytest.raises(ValueError):
        RotationMatrix([[1.0, 0.0], [0.0, -1.0]])
    with pytest.raises(ValueError):
        RotationMatrix([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])


def test_nearest_projects_onto_so_n() -> None:
    noisy = RotationMatrix.from_2d_angle(0.4).matrix + 1e-3 * np.array([[1.0, -2.0], [0.5, 1.0]])
    projected = RotationMatrix.nearest(noisy)
    assert _is_rotation(projected.matrix)
    assert projected.angle() == pytest.approx(0.4, abs=5e-3)


def test_axis_angle_matches_elementary_rotations() -> None:
    angle = 0.4
    assert np.allclose(
        RotationMatrix.from_axis_angle([0.0, 0.0, 2.0], angle).matrix,
        RotationMatrix.from_3d_rotation_z(angle).matrix,
    )
    assert np.allclose(
        RotationMatrix.from_axis_angle([1.0, 0.0, 0.0], angle).matrix,
        RotationMatrix.from_3d_rotation_x(angle).matrix,
    )
    assert np.allclose(
        RotationMatrix.from_axis_angle([0.0, 1.0, 0.0], angle).matrix,
        RotationMatrix.from_3d_rotation_y(angle).matrix,
    )


def test_compose_and_inverse() -> None:
    a = RotationMatrix.from_2d_angle(0.3)
    b = RotationMatrix.from_2d_angle(0.5)

    assert (a @ b).angle() == pytest.approx(0.8)
    assert np.allclose((a @ a.inverse()).matrix, np.eye(2))
    assert np.allclose(a @ [1.0, 0.0], [math.cos(0.3), math.sin(0.3)])
    with pytest.raises(DimensionMismatchError):
        a.compose(RotationMatrix.identity(3))


def test_log_of_planar_rotation() -> None:
    log = RotationMatrix.from_2d_angle(0.7).log()
    assert log.to_vector() == pytest.approx([0.7], abs=1e-9)


def test_log_of_identity_is_zero() -> None:
    assert RotationMatrix.identity(3).log().frobenius_norm() == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("angle", [0.1, 1.0, 2.5, -2.9])
def test_exp_log_round_trip_planar(angle: float) -> None:
    r = RotationMatrix.from_2d_angle(angle)
    back = r.log().exp()
    assert np.allclose(back.matrix, r.matrix, atol=1e-8)
    assert r.log().to_vector() == pytest.approx([angle], abs=1e-7)


@pytest.mark.parametrize("angle", [0.2, 1.3, 2.5])
def test_exp_log_round_trip_spatial(angle: float) -> None:
    axis = np.array([1.0, 2.0, 3.0]) / math.sqrt(14.0)
    r = RotationMatrix.from_axis_angle(axis, angle)

    log = r.log()
    assert np.allclose(log.to_vector(), axis * angle, atol=1e-7)
    assert np.allclose(log.exp().matrix, r.matrix, atol=1e-8)


def test_log_exp_round_trip_small_generator() -> None:
    a = SkewSymmetricMatrix.from_vector([0.1, -0.2, 0.05])
    assert np.allclose(a.exp().log().matrix, a.matrix, atol=1e-9)


def test_exp_of_zero_is_identity() -> None:
    assert np.allclose(SkewSymmetricMatrix.zeros(4).exp().matrix, np.eye(4))


def test_exp_is_a_rotation_for_large_generators() -> None:
    a = SkewSymmetricMatrix.from_vector([3.0, -4.0, 1.0])
    assert _is_rotation(a.exp().matrix)


def test_log_of_planar_half_turn_has_angle_pi() -> None:
    rotation = RotationMatrix.from_2d_angle(math.pi)
    generator = rotation.log()

    assert abs(generator.to_vector()[0]) == pytest.approx(math.pi, abs=1e-9)
    assert np.allclose(generator.exp().matrix, rotation.matrix, atol=1e-9)


def test_log_of_spatial_half_turn_keeps_the_axis() -> None:
    rotation = RotationMatrix.from_3d_rotation_x(math.pi)
    vec = rotation.log().to_vector()

    assert np.abs(vec) == pytest.approx([math.pi, 0.0, 0.0], abs=1e-9)
    assert np.allclose(rotation.log().exp().matrix, rotation.matrix, atol=1e-9)


def test_log_of_double_half_turn_in_four_dimensions() -> None:
    rotation = RotationMatrix(-np.eye(4))
    generator = rotation.log()

    assert np.allclose(generator.exp().matrix, -np.eye(4), atol=1e-9)


def test_log_just_short_of_half_turn_is_continuous() -> None:
    angle = math.pi - 1e-8
    generator = RotationMatrix.from_2d_angle(angle).log()

    assert generator.to_vector() == pytest.approx([angle], abs=1e-7)


def test_rotation_error_is_world_frame_difference() -> None:
    current = RotationMatrix.from_2d_angle(0.2)
    target = RotationMatrix.from_2d_angle(0.5)

    error = rotation_error(current, target)
    assert error.to_vector() == pytest.approx([0.3], abs=1e-9)
    assert np.allclose((error.exp() @ current).matrix, target.matrix, atol=1e-9)


def test_interpolate_rotation() -> None:
    start = RotationMatrix.from_3d_rotation_z(0.2)
    end = RotationMatrix.from_3d_rotation_z(1.4)
    at = interpolate_rotation(start, end)

    assert np.allclose(at(0.0).matrix, start.matrix)
    assert np.allclose(at(1.0).matrix, end.matrix, atol=1e-8)
    assert np.allclose(at(0.5).matrix, RotationMatrix.from_3d_rotation_z(0.8).matrix, atol=1e-8)


def test_equality() -> None:
    assert RotationMatrix.identity(2) == RotationMatrix.identity(2)
    assert RotationMatrix.identity(2) != RotationMatrix.identity(3)
    assert RotationMatrix.identity(2) != RotationMatrix.from_2d_angle(0.1)


def test_interpolate_position_is_a_straight_line() -> None:
    at = interpolate_position([1.0, 2.0, 3.0], [3.0, 2.0, -1.0])

    assert np.allclose(at(0.0), [1.0, 2.0, 3.0])
    assert np.allclose(at(0.25), [1.5, 2.0, 2.0])
    assert np.allclose(at(1.0), [3.0, 2.0, -1.0])
    with pytest.raises(DimensionMismatchError):
        interpolate_position([0.0, 0.0], [1.0, 1.0, 1.0])
