"""Materials module for surface appearance.

Components:
    material: Phong material with reflection and refraction parameters
    patterns: Procedural color patterns evaluated in pattern space

A material's pattern, when present, replaces its flat color during shading.
Patterns are mapped through the shape's inverse transform (and any enclosing
groups) and then through the pattern's own inverse transform.
"""

from .material import Material, glass
from .patterns import (
    Paint,
    Pattern,
    PatternKind,
    blended_pattern,
    checkers_pattern,
    gradient_pattern,
    pattern_at,
    pattern_at_shape,
    ring_pattern,
    solid_pattern,
    stripe_pattern,
)

__all__ = [
    # Material
    "Material",
    "glass",
    # Patterns
    "Paint",
    "Pattern",
    "PatternKind",
    "solid_pattern",
    "stripe_pattern",
    "gradient_pattern",
    "ring_pattern",
    "checkers_pattern",
    "blended_pattern",
    "pattern_at",
    "pattern_at_shape",
]
