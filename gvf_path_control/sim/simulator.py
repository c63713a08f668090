from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from gvf_path_control.geometry import (
    Pose,
    RotationMatrix,
    TangentBundleCommand,
    Twist,
    require_same_dimension,
)

from .config import SimulatorConfig

logger = logging.getLogger(__name__)


@dataclass
class SimulationStep:
    time_s: float
    pose: Pose
    twist: Twist


class KinematicSimulator:
    """Rigid body that executes the last commanded twist exactly.

    Acts as both ends of the follower loop: ``get_pose``/``get_twist`` make it
    a localizer and ``command`` is a hardware sink. Each ``step`` integrates
    the pending twist over ``dt``; the orientation moves along
    ``R <- exp(omega_hat * dt) @ R``.
    """

    def __init__(self, config: SimulatorConfig | None = None) -> None:
        self._config = config or SimulatorConfig()
        self.dt = float(self._config.dt)
        self.time_s = 0.0
        self._pose = self._initial_pose()
        self._twist = Twist.zero(self._pose.dimension)
        self._pending = self._twist

    def _initial_pose(self) -> Pose:
        position = np.array(self._config.initial_position, dtype=float)
        orientation = self._config.initial_orientation or RotationMatrix.identity(position.shape[0])
        return Pose(position, orientation)

    def reset(self, pose: Pose | None = None, time_s: float = 0.0) -> None:
        self._pose = pose if pose is not None else self._initial_pose()
        self.time_s = float(time_s)
        self._twist = Twist.zero(self._pose.dimension)
        self._pending = self._twist

    def get_pose(self) -> Pose:
        return self._pose

    def get_twist(self) -> Twist:
        return self._twist

    def get_velocity(self) -> np.ndarray:
        return self._twist.linear

    def command(self, command: TangentBundleCommand) -> None:
        twist = command.twist
        require_same_dimension(twist.linear, self._pose.position, "commanded linear velocity")
        self._pending = twist

    def step(self, dt: float | None = None) -> SimulationStep:
        dt = float(dt if dt is not None else self.dt)
        if dt <= 0.0:
            raise ValueError("dt must be positive")

        twist = self._pending
        position = self._pose.position + twist.linear * dt
        orientation = twist.angular.scale(dt).exp().compose(self._pose.orientation)
        self._pose = Pose(position, orientation)
        self._twist = twist
        self.time_s += dt

        logger.debug(
            "t=%.3f position=%s speed=%.4f",
            self.time_s,
            np.array2string(position, precision=4),
            float(np.linalg.norm(twist.linear)),
        )
        return SimulationStep(time_s=self.time_s, pose=self._pose, twist=self._twist)

    def run(
        self,
        final_time_s: float,
        tick: Callable[[], None],
        progress_callback: Callable[[SimulationStep], None] | None = None,
    ) -> list[SimulationStep]:
        """Call ``tick`` (typically ``Follower.update``) then step, until ``final_time_s``."""

        steps = int(np.ceil((final_time_s - self.time_s) / self.dt - 1e-9))
        history: list[SimulationStep] = []
        for _ in range(max(0, steps)):
            tick()
            step = self.step()
            history.append(step)
            if progress_callback is not None:
                progress_callback(step)
        return history
