"""Ray data structure.

A ray is an origin point plus a direction vector. Rays are immutable; moving
a ray into another coordinate space produces a new ray.

Example:
    >>> from src.whitted.core.ray import Ray, position
    >>> from src.whitted.core.tuples import point, vector
    >>> ray = Ray(origin=point(2, 3, 4), direction=vector(1, 0, 0))
    >>> position(ray, 2.5)  # Point 2.5 units along the ray
    array([4.5, 3. , 4. , 1. ])
"""

from dataclasses import dataclass

from src.whitted.core.matrix import Matrix4
from src.whitted.core.tuples import Tuple4


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not normalized after a
            transform; intersection code must not assume unit length.
    """

    origin: Tuple4
    direction: Tuple4


def position(ray: Ray, t: float) -> Tuple4:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + ray.direction * t


def transform_ray(ray: Ray, m: Matrix4) -> Ray:
    """Return a new ray with origin and direction multiplied by ``m``."""
    return Ray(origin=m @ ray.origin, direction=m @ ray.direction)
