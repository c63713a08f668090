"""Guiding-vector-field path following for rigid bodies on Bezier trajectories.

Layers, leaf to root:

- ``geometry``: polynomials and root isolation, SO(n) log/exp, Bezier curves,
  pose and twist value types.
- ``path_follower``: paths with heading interpolation, guiding vector fields,
  PID controllers and the ``Follower`` control loop.
- ``sim``: a perfect-execution kinematic simulator and CSV telemetry.
- ``common``: sample paths.
"""

__version__ = "0.1.0"

from .geometry import BezierCurve, Polynomial, Pose, RotationMatrix, SkewSymmetricMatrix, Twist
from .path_follower import Follower, FollowerConfig, Path, PIDController, PIDGains

__all__ = [
    "BezierCurve",
    "Follower",
    "FollowerConfig",
    "PIDController",
    "PIDGains",
    "Path",
    "Polynomial",
    "Pose",
    "RotationMatrix",
    "SkewSymmetricMatrix",
    "Twist",
]
