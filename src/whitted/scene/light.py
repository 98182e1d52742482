"""Point light sources."""

from dataclasses import dataclass

import numpy as np

from src.whitted.core.tuples import Color, Tuple4


@dataclass(eq=False)
class PointLight:
    """A light with no size that emits equally in every direction.

    Attributes:
        position: World-space position of the light (a point).
        intensity: RGB intensity of the emitted light.
    """

    position: Tuple4
    intensity: Color

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=np.float64)
        self.intensity = np.asarray(self.intensity, dtype=np.float64)
        if self.position.shape != (4,):
            raise ValueError(f"Light position must be a 4-tuple, got shape {self.position.shape}")
        if self.intensity.shape != (3,):
            raise ValueError(f"Light intensity must be RGB, got shape {self.intensity.shape}")
        if np.any(self.intensity < 0.0):
            raise ValueError("Light intensity must be non-negative")
