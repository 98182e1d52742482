"""Phong material with reflection and refraction parameters.

A material is a small value object attached to every shape. It carries the
surface color (or a pattern that overrides it), the four Phong coefficients,
and the optical parameters used by the recursive integrator.

Common refractive indices:
    - Vacuum / air: 1.0
    - Water: 1.333
    - Glass: 1.5
    - Diamond: 2.417

Example:
    >>> from src.whitted.materials.material import Material, glass
    >>> matte = Material(color=(1.0, 0.2, 1.0), specular=0.0)
    >>> shiny = matte.replace(reflective=0.5)
    >>> clear = glass()
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

import numpy as np

from src.whitted.core.tuples import WHITE, Color
from src.whitted.materials.patterns import Pattern


@dataclass(eq=False)
class Material:
    """Optical properties of a surface.

    Attributes:
        color: Base surface color (linear RGB). Ignored where a pattern is set.
        ambient: Ambient reflection coefficient, typically in [0, 1].
        diffuse: Diffuse reflection coefficient, typically in [0, 1].
        specular: Specular reflection coefficient, typically in [0, 1].
        shininess: Specular exponent; larger values give smaller highlights.
        reflective: Fraction of the reflected ray's color added, in [0, 1].
        transparency: Fraction of the refracted ray's color added, in [0, 1].
        refractive_index: Index of refraction, must be positive.
        pattern: Optional procedural pattern replacing ``color``.
    """

    color: Color = field(default_factory=WHITE.copy)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    pattern: Pattern | None = None

    def __post_init__(self) -> None:
        self.color = np.asarray(self.color, dtype=np.float64)
        if self.color.shape != (3,):
            raise ValueError(f"Material color must have 3 components, got {self.color.shape}")
        for name in ("ambient", "diffuse", "specular"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"Material {name} = {getattr(self, name)} is negative")
        if self.shininess <= 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive")
        if not 0.0 <= self.reflective <= 1.0:
            raise ValueError(f"Material reflective = {self.reflective} is outside [0, 1]")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"Material transparency = {self.transparency} is outside [0, 1]")
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"Material refractive_index = {self.refractive_index} must be positive"
            )

    def replace(self, **changes) -> Material:
        """Return a copy of this material with some fields changed."""
        return dataclasses.replace(self, **changes)


def glass(**changes) -> Material:
    """Create a clear glass material (transparency 1, index 1.5)."""
    base = Material(transparency=1.0, refractive_index=1.5)
    return base.replace(**changes) if changes else base
