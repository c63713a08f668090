from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

REQUIRED_COLUMNS = ("time_s", "path_t", "veh_pos_x", "ref_pos_x", "translational_error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plot follower telemetry captured from the kinematic simulator."
    )
    parser.add_argument("logfile", type=Path, help="Path to a sim CSV log")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional path to save the figure instead of displaying it.",
    )
    return parser


def _axes_in(df: pd.DataFrame, prefix: str) -> list[str]:
    return [col[len(prefix):] for col in df.columns if col.startswith(prefix)]


def plot_sim_telemetry(df: pd.DataFrame, output: Path | None) -> None:
    time = df["time_s"].to_numpy()
    axes_names = _axes_in(df, "veh_pos_")

    fig, axes = plt.subplots(4, 1, figsize=(10, 12))

    if "veh_pos_y" in df.columns:
        axes[0].plot(df["ref_pos_x"], df["ref_pos_y"], linestyle="--", label="Reference")
        axes[0].plot(df["veh_pos_x"], df["veh_pos_y"], label="Vehicle")
        axes[0].set_aspect("equal", adjustable="datalim")
        axes[0].set_xlabel("x")
        axes[0].set_ylabel("y")
    else:
        axes[0].plot(time, df["veh_pos_x"], label="Vehicle")
        axes[0].plot(time, df["ref_pos_x"], linestyle="--", label="Reference")
        axes[0].set_xlabel("Time (s)")
    axes[0].legend(loc="upper right", fontsize="small")
    axes[0].grid(True, linestyle=":")

    for comp in axes_names:
        axes[1].plot(time, df[f"cmd_vel_{comp}"], label=f"{comp.upper()} command")
    axes[1].set_ylabel("Commanded velocity")
    axes[1].legend(loc="upper right", fontsize="small")
    axes[1].grid(True, linestyle=":")

    axes[2].plot(time, df["translational_error"], label="Translational")
    axes[2].plot(time, df["rotational_error"], label="Rotational (Frobenius)")
    axes[2].set_ylabel("Error")
    axes[2].legend(loc="upper right", fontsize="small")
    axes[2].grid(True, linestyle=":")

    axes[3].plot(time, df["path_t"], label="Closest parameter")
    axes[3].set_ylim(-0.05, 1.05)
    axes[3].set_ylabel("t")
    axes[3].set_xlabel("Time (s)")
    axes[3].grid(True, linestyle=":")

    fig.tight_layout()

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=200)
        plt.close(fig)
    else:
        plt.show()


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if not args.logfile.exists():
        raise SystemExit(f"Telemetry log not found: {args.logfile}")

    df = pd.read_csv(args.logfile)
    missing = [col for col in REQUIRED_COLUMNS if col not in df]
    if missing:
        raise SystemExit(f"Log is missing expected columns: {missing}")

    plot_sim_telemetry(df, args.output)


if __name__ == "__main__":
    main()
