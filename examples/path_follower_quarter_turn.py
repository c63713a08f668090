from pathlib import Path

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

from examples import quarter_turn_path, run_follower_example
from examples.common import configure_logging
from gvf_path_control.sim import SimulatorConfig

LOG_DIR = Path(__file__).resolve().parents[1] / "logs"
LOG_FILE = LOG_DIR / "sim_path_follower_quarter_turn.csv"
SIM_FINAL_TIME_S = 10.0


def main() -> None:
    configure_logging()
    path = quarter_turn_path(radius_m=3.0)

    run_follower_example(
        path=path,
        log_path=LOG_FILE,
        final_time_s=SIM_FINAL_TIME_S,
        simulator_config=SimulatorConfig(dt=0.05, initial_position=(3.5, 0.0)),
    )


if __name__ == "__main__":
    main()
