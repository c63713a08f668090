"""Scalar feedback controllers over arbitrary state types."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

import numpy as np

from gvf_path_control.geometry import RotationMatrix, distance, rotation_error

from .config import PIDGains

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

ErrorFn = Callable[[T, T], float]
Clock = Callable[[], float]


class Controller(Protocol[T_contra]):
    def drive_to_state(self, current: T_contra, target: T_contra) -> float: ...

    def reset(self) -> None: ...


class PIDController(Generic[T]):
    """PID law on a scalar error extracted from ``(current, target)``.

    Elapsed time comes from ``clock`` (seconds). The previous timestamp is
    taken at construction and on ``reset()``; a tick with non-positive elapsed
    time contributes neither integral nor derivative.

    ``prev_error`` also starts at zero after construction and ``reset()``, so
    the first tick with positive elapsed time ``dt`` carries a derivative term
    of ``kd * error / dt``. Leave ``kd`` at zero where that kick matters.
    """

    def __init__(
        self,
        kp: float,
        ki: float,
        kd: float,
        error_fn: ErrorFn[T],
        *,
        integrator_limit: float | None = None,
        clock: Clock = time.monotonic,
    ):
        self.kp = float(kp)
        self.ki = float(ki)
        self.kd = float(kd)
        self.integrator_limit = integrator_limit
        self._error_fn = error_fn
        self._clock = clock
        self.integrator = 0.0
        self.prev_error = 0.0
        self._prev_time = float(self._clock())

    @classmethod
    def from_gains(
        cls, gains: PIDGains, error_fn: ErrorFn[T], clock: Clock = time.monotonic
    ) -> PIDController[T]:
        return cls(
            gains.kp,
            gains.ki,
            gains.kd,
            error_fn,
            integrator_limit=gains.integrator_limit,
            clock=clock,
        )

    def update_constants(self, kp: float, ki: float, kd: float) -> None:
        self.kp = float(kp)
        self.ki = float(ki)
        self.kd = float(kd)

    def reset(self) -> None:
        self.integrator = 0.0
        self.prev_error = 0.0
        self._prev_time = float(self._clock())

    def drive_to_state(self, current: T, target: T) -> float:
        error = float(self._error_fn(current, target))
        now = float(self._clock())
        dt = now - self._prev_time

        derivative = 0.0
        if dt > 0.0:
            self.integrator += error * dt
            if self.integrator_limit is not None:
                self.integrator = float(
                    np.clip(self.integrator, -self.integrator_limit, self.integrator_limit)
                )
            derivative = (error - self.prev_error) / dt

        self._prev_time = now
        self.prev_error = error
        return self.kp * error + self.ki * self.integrator + self.kd * derivative


def euclidean_distance_error(current: np.ndarray, target: np.ndarray) -> float:
    return distance(current, target)


def signed_scalar_error(current: float, target: float) -> float:
    return float(target) - float(current)


def rotation_error_norm(current: RotationMatrix, target: RotationMatrix) -> float:
    return rotation_error(current, target).frobenius_norm()
