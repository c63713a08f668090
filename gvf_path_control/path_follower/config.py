from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PIDGains:
    kp: float = 1.0
    ki: float = 0.0
    kd: float = 0.0
    integrator_limit: float | None = None

    def __post_init__(self) -> None:
        for name in ("kp", "ki", "kd"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite.")
        if self.integrator_limit is not None and self.integrator_limit <= 0.0:
            raise ValueError("integrator_limit must be positive when set.")


@dataclass(frozen=True)
class FollowerConfig:
    """Gains and limits for the guiding-vector-field follower.

    Speeds are in units of distance per second; ``maximum_deceleration`` is
    the magnitude used for the braking profile near the end of the path.
    """

    translational: PIDGains = field(default_factory=lambda: PIDGains(kp=1.0))
    rotational: PIDGains = field(default_factory=lambda: PIDGains(kp=1.0))
    drive: PIDGains = field(default_factory=lambda: PIDGains(kp=0.5))
    centripetal_feedforward_gain: float = 0.0
    maximum_deceleration: float = 1.0
    cruise_speed: float = 1.0

    def __post_init__(self) -> None:
        if self.centripetal_feedforward_gain < 0.0:
            raise ValueError("centripetal_feedforward_gain must be non-negative.")
        if self.maximum_deceleration == 0.0 or not math.isfinite(self.maximum_deceleration):
            raise ValueError("maximum_deceleration must be a nonzero finite magnitude.")
        if self.cruise_speed < 0.0:
            raise ValueError("cruise_speed must be non-negative.")
