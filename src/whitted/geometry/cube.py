"""Axis-aligned cube primitive spanning [-1, 1] on every axis.

Intersection uses the slab method: for each axis compute the t values where
the ray crosses the two bounding planes, then keep the largest entering t and
the smallest exiting t. The ray hits the cube only if it enters all three
slabs before leaving any of them.
"""

import math

from src.whitted.core.ray import Ray
from src.whitted.core.tuples import EPSILON, Tuple4, vector


def _check_axis(origin: float, direction: float) -> tuple[float, float]:
    """Return the (entering, exiting) t values for one slab."""
    tmin_numerator = -1.0 - origin
    tmax_numerator = 1.0 - origin

    if abs(direction) >= EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        # Parallel to the slab: either always inside it or never
        tmin = math.copysign(math.inf, tmin_numerator)
        tmax = math.copysign(math.inf, tmax_numerator)

    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


def intersect_cube(ray: Ray) -> list[float]:
    """Intersect an object-space ray with the unit cube."""
    ox, oy, oz, _ = ray.origin.tolist()
    dx, dy, dz, _ = ray.direction.tolist()

    xtmin, xtmax = _check_axis(ox, dx)
    ytmin, ytmax = _check_axis(oy, dy)
    ztmin, ztmax = _check_axis(oz, dz)

    tmin = max(xtmin, ytmin, ztmin)
    tmax = min(xtmax, ytmax, ztmax)

    if tmin > tmax:
        return []
    return [tmin, tmax]


def normal_cube(object_point: Tuple4) -> Tuple4:
    """Normal of the face containing the point (largest absolute component)."""
    x, y, z, _ = object_point.tolist()
    maxc = max(abs(x), abs(y), abs(z))

    if maxc == abs(x):
        return vector(x, 0.0, 0.0)
    elif maxc == abs(y):
        return vector(0.0, y, 0.0)
    return vector(0.0, 0.0, z)
