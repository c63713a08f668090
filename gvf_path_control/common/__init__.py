"""Ready-made paths for examples and tests."""

from .paths import line_path, quarter_turn_path, s_curve_path

__all__ = [
    "line_path",
    "quarter_turn_path",
    "s_curve_path",
]
