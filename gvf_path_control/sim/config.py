from __future__ import annotations

from dataclasses import dataclass

from gvf_path_control.geometry import RotationMatrix


@dataclass(frozen=True)
class SimulatorConfig:
    """Configuration for the kinematic (perfect-execution) simulator."""

    dt: float = 0.05
    initial_position: tuple[float, ...] = (0.0, 0.0)
    initial_orientation: RotationMatrix | None = None

    def __post_init__(self) -> None:
        if self.dt <= 0.0:
            raise ValueError("dt must be positive.")
        if not self.initial_position:
            raise ValueError("initial_position must have at least one coordinate.")
        object.__setattr__(self, "initial_position", tuple(float(x) for x in self.initial_position))
        if (
            self.initial_orientation is not None
            and self.initial_orientation.dimension != len(self.initial_position)
        ):
            raise ValueError("initial_orientation dimension must match initial_position.")
