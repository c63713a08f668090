from pathlib import Path

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

from examples import run_follower_example, s_curve_path
from examples.common import configure_logging
from gvf_path_control.path_follower import FollowerConfig, PIDGains
from gvf_path_control.sim import SimulatorConfig

LOG_DIR = Path(__file__).resolve().parents[1] / "logs"
LOG_FILE = LOG_DIR / "sim_path_follower_s_curve.csv"
SIM_FINAL_TIME_S = 15.0


def main() -> None:
    configure_logging()
    path = s_curve_path(length_m=6.0, lateral_offset_m=2.0)

    run_follower_example(
        path=path,
        log_path=LOG_FILE,
        final_time_s=SIM_FINAL_TIME_S,
        simulator_config=SimulatorConfig(dt=0.02, initial_position=(0.0, -0.5)),
        follower_config=FollowerConfig(
            translational=PIDGains(kp=2.0, ki=0.1, integrator_limit=0.5),
            rotational=PIDGains(kp=3.0),
            drive=PIDGains(kp=0.8),
            centripetal_feedforward_gain=0.5,
            maximum_deceleration=1.5,
            cruise_speed=1.2,
        ),
    )


if __name__ == "__main__":
    main()
