"""Infinite xz-plane primitive at y = 0."""

from src.whitted.core.ray import Ray
from src.whitted.core.tuples import EPSILON, Tuple4, vector


def intersect_plane(ray: Ray) -> list[float]:
    """Intersect an object-space ray with the plane y = 0.

    Rays parallel to the plane (including coplanar rays) miss.
    """
    dy = float(ray.direction[1])
    if abs(dy) < EPSILON:
        return []
    return [-float(ray.origin[1]) / dy]


def normal_plane(object_point: Tuple4) -> Tuple4:
    """The plane's normal is +y everywhere."""
    return vector(0.0, 1.0, 0.0)
