"""Procedural color patterns.

A pattern maps a point in its own space to a color. Patterns are evaluated in
two steps when shading a surface:

1. The world-space hit point is converted into the shape's object space
   (through every enclosing group).
2. The object-space point is converted into pattern space using the
   pattern's own inverse transform.

Supported kinds:
    - SOLID: a single color everywhere
    - STRIPE: alternates on floor(x)
    - GRADIENT: linear blend on the fractional part of x
    - RING: alternates on floor(sqrt(x^2 + z^2))
    - CHECKER: alternates on floor(x) + floor(y) + floor(z)
    - BLENDED: average of two sub-patterns, each in its own space

The two "paints" of stripe, gradient, ring and checker patterns may be either
colors or nested patterns. A nested pattern is evaluated in the parent
pattern's space, further transformed by its own transform.

All parity tests use ``math.floor`` so negative coordinates continue the
pattern instead of mirroring it around zero.

Example:
    >>> from src.whitted.core.matrix import scaling
    >>> from src.whitted.core.tuples import BLACK, WHITE, point
    >>> from src.whitted.materials.patterns import pattern_at, stripe_pattern
    >>> pattern = stripe_pattern(WHITE, BLACK, transform=scaling(0.5, 1, 1))
    >>> # pattern_at(pattern, point(...)) in pattern space
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import TYPE_CHECKING, Union

import numpy as np

from src.whitted.core.matrix import Matrix4, Transformable
from src.whitted.core.tuples import Color, Tuple4

if TYPE_CHECKING:
    from src.whitted.geometry.shape import Shape


class PatternKind(IntEnum):
    """Enumeration of supported pattern kinds."""

    SOLID = 0
    STRIPE = 1
    GRADIENT = 2
    RING = 3
    CHECKER = 4
    BLENDED = 5


class Pattern(Transformable):
    """A procedural pattern with its own transform.

    Attributes:
        kind: Which pattern function to evaluate.
        a: First paint (color or nested Pattern).
        b: Second paint (color or nested Pattern). Unused for SOLID.
        transform: Pattern-to-object transform.
    """

    def __init__(
        self,
        kind: PatternKind,
        a: Paint,
        b: Paint | None = None,
        transform: Matrix4 | None = None,
    ) -> None:
        super().__init__(transform)
        self.kind = kind
        self.a = _as_paint(a)
        self.b = None if b is None else _as_paint(b)
        if kind != PatternKind.SOLID and self.b is None:
            raise ValueError(f"{kind.name.lower()} pattern needs two paints")
        if kind == PatternKind.BLENDED and not (
            isinstance(self.a, Pattern) and isinstance(self.b, Pattern)
        ):
            raise ValueError("Blended pattern needs two sub-patterns")

    def __repr__(self) -> str:
        return f"Pattern(kind={self.kind.name}, a={self.a!r}, b={self.b!r})"


# A paint is either a plain color or a nested pattern
Paint = Union[Color, Pattern]


def _as_paint(value) -> Paint:
    if isinstance(value, Pattern):
        return value
    return np.asarray(value, dtype=np.float64)


# =============================================================================
# Pattern Constructors
# =============================================================================


def solid_pattern(c: Color, transform: Matrix4 | None = None) -> Pattern:
    """Create a pattern that returns the same color everywhere."""
    return Pattern(PatternKind.SOLID, c, transform=transform)


def stripe_pattern(a: Paint, b: Paint, transform: Matrix4 | None = None) -> Pattern:
    """Create a stripe pattern alternating along x."""
    return Pattern(PatternKind.STRIPE, a, b, transform)


def gradient_pattern(a: Paint, b: Paint, transform: Matrix4 | None = None) -> Pattern:
    """Create a gradient from ``a`` at x=0 toward ``b`` at x=1, repeating."""
    return Pattern(PatternKind.GRADIENT, a, b, transform)


def ring_pattern(a: Paint, b: Paint, transform: Matrix4 | None = None) -> Pattern:
    """Create concentric rings around the y axis."""
    return Pattern(PatternKind.RING, a, b, transform)


def checkers_pattern(a: Paint, b: Paint, transform: Matrix4 | None = None) -> Pattern:
    """Create a 3-D checkerboard of unit cubes."""
    return Pattern(PatternKind.CHECKER, a, b, transform)


def blended_pattern(
    a: Pattern, b: Pattern, transform: Matrix4 | None = None
) -> Pattern:
    """Create a pattern averaging two sub-patterns."""
    return Pattern(PatternKind.BLENDED, a, b, transform)


# =============================================================================
# Evaluation
# =============================================================================


def _paint_at(paint: Paint, pattern_point: Tuple4) -> Color:
    """Resolve a paint at a point expressed in the owning pattern's space."""
    if isinstance(paint, Pattern):
        return pattern_at(paint, paint.inverse @ pattern_point)
    return paint


def pattern_at(pattern: Pattern, pattern_point: Tuple4) -> Color:
    """Evaluate a pattern at a point already in pattern space.

    Args:
        pattern: The pattern to evaluate.
        pattern_point: Point in the pattern's local coordinates.

    Returns:
        The pattern color at that point.
    """
    kind = pattern.kind
    x, y, z = pattern_point[0], pattern_point[1], pattern_point[2]

    if kind == PatternKind.SOLID:
        return _paint_at(pattern.a, pattern_point)

    elif kind == PatternKind.STRIPE:
        paint = pattern.a if math.floor(x) % 2 == 0 else pattern.b
        return _paint_at(paint, pattern_point)

    elif kind == PatternKind.GRADIENT:
        color_a = _paint_at(pattern.a, pattern_point)
        color_b = _paint_at(pattern.b, pattern_point)
        fraction = x - math.floor(x)
        return color_a + (color_b - color_a) * fraction

    elif kind == PatternKind.RING:
        paint = pattern.a if math.floor(math.sqrt(x * x + z * z)) % 2 == 0 else pattern.b
        return _paint_at(paint, pattern_point)

    elif kind == PatternKind.CHECKER:
        parity = (math.floor(x) + math.floor(y) + math.floor(z)) % 2
        paint = pattern.a if parity == 0 else pattern.b
        return _paint_at(paint, pattern_point)

    elif kind == PatternKind.BLENDED:
        color_a = _paint_at(pattern.a, pattern_point)
        color_b = _paint_at(pattern.b, pattern_point)
        return (color_a + color_b) * 0.5

    raise ValueError(f"Unknown pattern kind: {kind}")


def pattern_at_shape(pattern: Pattern, shape: Shape, world_point: Tuple4) -> Color:
    """Evaluate a pattern on a shape at a world-space point.

    Args:
        pattern: The pattern attached to the shape's material.
        shape: The shape being shaded; its transform (and those of any
            enclosing groups) map the point into object space.
        world_point: The point in world coordinates.

    Returns:
        The pattern color at that point.
    """
    object_point = shape.world_to_object(world_point)
    pattern_point = pattern.inverse @ object_point
    return pattern_at(pattern, pattern_point)
