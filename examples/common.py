from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from pathlib import Path as FilePath

import numpy as np

from gvf_path_control.path_follower import Follower, FollowerConfig, Path
from gvf_path_control.sim import (
    KinematicSimulator,
    SimulationStep,
    SimulatorConfig,
    TelemetryLogger,
)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def analyze_history(history: Iterable[SimulationStep], path: Path) -> None:
    history = list(history)
    if not history:
        print("No simulation history recorded.")
        return

    lateral_errors: list[float] = []
    for step in history:
        closest = path.closest_point(step.pose.position)
        lateral_errors.append(float(np.linalg.norm(step.pose.position - closest)))

    rms_error = math.sqrt(float(np.mean(np.square(lateral_errors))))
    max_error = float(np.max(lateral_errors))
    final = history[-1]
    goal = path.curve.evaluate(1.0)

    print(f"Simulated {len(history)} steps over {final.time_s:.2f} s.")
    print(f"Final position: {np.array2string(final.pose.position, precision=3)}")
    print(f"Final velocity: {np.array2string(final.twist.linear, precision=3)}")
    print(f"Distance to goal: {float(np.linalg.norm(final.pose.position - goal)):.3f}")
    print(f"RMS distance to path: {rms_error:.3f}")
    print(f"Max distance to path: {max_error:.3f}")


def run_follower_example(
    path: Path,
    log_path: FilePath,
    final_time_s: float = 15.0,
    *,
    simulator_config: SimulatorConfig | None = None,
    follower_config: FollowerConfig | None = None,
) -> list[SimulationStep]:
    simulator = KinematicSimulator(simulator_config)
    follower = Follower(
        simulator,
        simulator.command,
        follower_config,
        clock=lambda: simulator.time_s,
    )
    follower.follow(path)

    history: list[SimulationStep]
    with TelemetryLogger(log_path, dimension=path.dimension) as telemetry:

        def log_step(step: SimulationStep) -> None:
            telemetry.log(step, follower)

        history = simulator.run(
            final_time_s=final_time_s,
            tick=follower.update,
            progress_callback=log_step,
        )

    analyze_history(history, path)
    print(f"Telemetry log written to: {log_path}")
    return history
