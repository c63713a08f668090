from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import DimensionMismatchError
from .lie import RotationMatrix, SkewSymmetricMatrix
from .vectors import as_vector


@dataclass(frozen=True)
class Pose:
    position: np.ndarray
    orientation: RotationMatrix

    def __post_init__(self) -> None:
        position = as_vector(self.position, what="Pose.position")
        position.setflags(write=False)
        object.__setattr__(self, "position", position)

    @property
    def dimension(self) -> int:
        return self.position.shape[0]


@dataclass(frozen=True)
class Twist:
    """Linear velocity plus angular velocity as an so(n) generator."""

    linear: np.ndarray
    angular: SkewSymmetricMatrix

    def __post_init__(self) -> None:
        linear = as_vector(self.linear, what="Twist.linear")
        linear.setflags(write=False)
        object.__setattr__(self, "linear", linear)
        object.__setattr__(self, "angular", self.angular.copy())

    @classmethod
    def zero(cls, dimension: int) -> Twist:
        return cls(np.zeros(dimension, dtype=float), SkewSymmetricMatrix.zeros(dimension))


@dataclass(frozen=True)
class TangentBundleCommand:
    """A twist attached to the orientation it was computed at (SE(n) tangent bundle)."""

    twist: Twist
    rotation: RotationMatrix

    def __post_init__(self) -> None:
        if self.twist.angular.dimension != self.rotation.dimension:
            raise DimensionMismatchError(
                (self.rotation.dimension, self.rotation.dimension),
                (self.twist.angular.dimension, self.twist.angular.dimension),
                "TangentBundleCommand.twist.angular",
            )

    @property
    def translational_component(self) -> np.ndarray:
        return self.twist.linear

    @property
    def rotational_component(self) -> np.ndarray:
        """Orientation rate ``dR/dt = omega_hat @ R`` for a world-frame ``omega_hat``."""

        return self.twist.angular.matrix @ self.rotation.matrix
