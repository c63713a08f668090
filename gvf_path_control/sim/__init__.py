from .config import SimulatorConfig
from .simulator import KinematicSimulator, SimulationStep
from .telemetry import TelemetryLogger

__all__ = [
    "KinematicSimulator",
    "SimulationStep",
    "SimulatorConfig",
    "TelemetryLogger",
]
