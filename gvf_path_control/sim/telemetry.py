import csv
from pathlib import Path
from typing import Self

import numpy as np

from gvf_path_control.path_follower import Follower

from .simulator import SimulationStep

_AXES = "xyzw"


class TelemetryLogger:
    """CSV logger for follower diagnostics, one row per simulation step."""

    def __init__(self, path: Path, dimension: int = 2) -> None:
        if dimension < 1:
            raise ValueError("dimension must be positive")
        self.path = path
        self.dimension = dimension
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("w", newline="")
        self._writer = csv.writer(self._file)
        self._writer.writerow(self.headers())

    def headers(self) -> list[str]:
        axes = [_AXES[i] if i < len(_AXES) else str(i) for i in range(self.dimension)]
        return [
            "time_s",
            "path_t",
            *(f"veh_pos_{a}" for a in axes),
            *(f"ref_pos_{a}" for a in axes),
            *(f"cmd_vel_{a}" for a in axes),
            "translational_error",
            "rotational_error",
        ]

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def log(self, step: SimulationStep, follower: Follower) -> None:
        nan = np.full(self.dimension, np.nan)
        t = follower.previous_parameter
        command = follower.previous_command
        trans_err = follower.previous_translational_error
        rot_err = follower.previous_rotational_error

        reference = nan
        if t is not None and follower.is_following:
            reference = follower.path.curve.evaluate(t)

        row = [
            step.time_s,
            float("nan") if t is None else t,
            *step.pose.position.tolist(),
            *np.asarray(reference).tolist(),
            *(nan if command is None else command.translational_component).tolist(),
            float("nan") if trans_err is None else float(np.linalg.norm(trans_err)),
            float("nan") if rot_err is None else rot_err.frobenius_norm(),
        ]
        self._writer.writerow(row)
        self._file.flush()
