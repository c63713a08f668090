"""Control loop binding a localizer, a path and three scalar controllers."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import Protocol

import numpy as np

from gvf_path_control.geometry import (
    Pose,
    RotationMatrix,
    SkewSymmetricMatrix,
    TangentBundleCommand,
    Twist,
)

from .config import FollowerConfig
from .fields import (
    CentripetalField,
    DriveField,
    RotationalField,
    TranslationalField,
    compose,
)
from .path import Path
from .pid import (
    Clock,
    Controller,
    PIDController,
    euclidean_distance_error,
    rotation_error_norm,
    signed_scalar_error,
)

logger = logging.getLogger(__name__)

HardwareAction = Callable[[TangentBundleCommand], None]


class Localizer(Protocol):
    def get_pose(self) -> Pose: ...

    def get_twist(self) -> Twist: ...

    def get_velocity(self) -> np.ndarray: ...


class FollowerState(Enum):
    IDLE = "idle"
    FOLLOWING = "following"


class FollowerError(Enum):
    NO_PATH = "no_path"
    DIMENSION_MISMATCH = "dimension_mismatch"


class FollowerException(RuntimeError):
    def __init__(self, error: FollowerError, message: str):
        super().__init__(message)
        self.error = error


class Follower:
    """Issues one tangent-bundle command per ``update()`` while a path is bound.

    ``update()`` is meant to be called once per control tick by an external
    scheduler. Geometry errors raised while building the command propagate to
    the caller; nothing is sent to the hardware on such a tick. There is no
    built-in termination test: callers decide when the robot is close enough
    from the ``previous_*`` diagnostics.
    """

    def __init__(
        self,
        localizer: Localizer,
        hardware_action: HardwareAction,
        config: FollowerConfig | None = None,
        *,
        translational_controller: Controller[np.ndarray] | None = None,
        rotational_controller: Controller[RotationMatrix] | None = None,
        drive_controller: Controller[float] | None = None,
        clock: Clock = time.monotonic,
    ):
        self._config = config or FollowerConfig()
        self._localizer = localizer
        self._hardware_action = hardware_action
        self._translational_controller = translational_controller or PIDController.from_gains(
            self._config.translational, euclidean_distance_error, clock
        )
        self._rotational_controller = rotational_controller or PIDController.from_gains(
            self._config.rotational, rotation_error_norm, clock
        )
        self._drive_controller = drive_controller or PIDController.from_gains(
            self._config.drive, signed_scalar_error, clock
        )

        self._path: Path | None = None
        self._previous_pose: Pose | None = None
        self._previous_twist: Twist | None = None
        self._previous_translational_error: np.ndarray | None = None
        self._previous_rotational_error: SkewSymmetricMatrix | None = None
        self._previous_parameter: float | None = None
        self._previous_command: TangentBundleCommand | None = None

    @property
    def config(self) -> FollowerConfig:
        return self._config

    @property
    def state(self) -> FollowerState:
        return FollowerState.IDLE if self._path is None else FollowerState.FOLLOWING

    @property
    def is_following(self) -> bool:
        return self._path is not None

    @property
    def path(self) -> Path:
        if self._path is None:
            raise FollowerException(FollowerError.NO_PATH, "No path is being followed.")
        return self._path

    @property
    def previous_pose(self) -> Pose | None:
        return self._previous_pose

    @property
    def previous_twist(self) -> Twist | None:
        return self._previous_twist

    @property
    def previous_translational_error(self) -> np.ndarray | None:
        return self._previous_translational_error

    @property
    def previous_rotational_error(self) -> SkewSymmetricMatrix | None:
        return self._previous_rotational_error

    @property
    def previous_parameter(self) -> float | None:
        return self._previous_parameter

    @property
    def previous_command(self) -> TangentBundleCommand | None:
        return self._previous_command

    def follow(self, path: Path) -> None:
        self._path = path
        self.reset_controllers()
        logger.info(
            "Following degree-%d path in %d dimensions.", path.curve.degree, path.dimension
        )

    def break_following(self) -> None:
        self._path = None
        self.reset_controllers()
        logger.info("Stopped following path.")

    def reset_controllers(self) -> None:
        self._drive_controller.reset()
        self._translational_controller.reset()
        self._rotational_controller.reset()

    def update(self) -> None:
        path = self._path
        if path is None:
            return

        current_pose = self._localizer.get_pose()
        current_twist = self._localizer.get_twist()
        current_velocity = self._localizer.get_velocity()
        if current_pose.dimension != path.dimension:
            raise FollowerException(
                FollowerError.DIMENSION_MISMATCH,
                f"Localizer reports a {current_pose.dimension}-D position; "
                f"path is {path.dimension}-D.",
            )

        t = path.closest_parameter(current_pose.position)
        target_pose = path.get_pose(t)
        if target_pose.orientation.dimension != current_pose.orientation.dimension:
            raise FollowerException(
                FollowerError.DIMENSION_MISMATCH,
                "Path heading and localizer orientation have different dimensions.",
            )

        translational = TranslationalField(target_pose.position, self._translational_controller)
        drive = DriveField(
            path.curve,
            t,
            current_velocity,
            self._drive_controller,
            self._config.maximum_deceleration,
            self._config.cruise_speed,
        )
        centripetal = CentripetalField(
            path.curve, t, current_velocity, self._config.centripetal_feedforward_gain
        )
        rotational = RotationalField(target_pose.orientation, self._rotational_controller)

        field = compose(
            translational + drive + centripetal,
            rotational,
            current_pose.orientation,
        )
        command = field.evaluate(current_pose)

        self._previous_pose = current_pose
        self._previous_twist = current_twist
        self._previous_translational_error = translational.last_error
        self._previous_rotational_error = rotational.last_error
        self._previous_parameter = t
        self._previous_command = command

        logger.debug(
            "t=%.4f translational_error=%.4f rotational_error=%.4f",
            t,
            float(np.linalg.norm(translational.last_error)),
            rotational.last_error.frobenius_norm(),
        )

        self._hardware_action(command)
