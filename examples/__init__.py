"""Example scripts driving the follower against the kinematic simulator."""

from gvf_path_control.common import line_path, quarter_turn_path, s_curve_path

from .common import analyze_history, run_follower_example

__all__ = [
    "analyze_history",
    "line_path",
    "quarter_turn_path",
    "run_follower_example",
    "s_curve_path",
]
