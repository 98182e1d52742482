"""Unit sphere primitive with robust ray-sphere intersection.

The sphere is centered at the object-space origin with radius 1; placement
and size come entirely from the owning shape's transform.

The intersection uses the numerically stable quadratic formula from Ray
Tracing Gems (Chapter 7) in its half-b form:

    a = dot(direction, direction)
    h = dot(direction, origin - center)
    c = dot(oc, oc) - 1
    q = -(h + sign(h) * sqrt(h^2 - a*c))
    t0 = q / a,  t1 = c / q

A tangent ray has a zero discriminant and reports the same t twice; a
discriminant within EPSILON below zero counts as tangent.
"""

import math

from src.whitted.core.ray import Ray
from src.whitted.core.tuples import EPSILON, Tuple4, vector


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve a*t^2 + 2*h*t + c = 0 avoiding catastrophic cancellation.

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-12:
        # Fall back to the textbook formula when q vanishes
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


def intersect_sphere(ray: Ray) -> list[float]:
    """Intersect an object-space ray with the unit sphere.

    Args:
        ray: Ray in the sphere's object space.

    Returns:
        Both roots in ascending order, or an empty list on a miss. Roots
        behind the origin are included; callers choose the hit.
    """
    ox, oy, oz, _ = ray.origin.tolist()
    dx, dy, dz, _ = ray.direction.tolist()

    a = dx * dx + dy * dy + dz * dz
    h = dx * ox + dy * oy + dz * oz
    c = ox * ox + oy * oy + oz * oz - 1.0

    discriminant = h * h - a * c
    # Tiny negative discriminants are rounding noise on a tangent ray
    if -EPSILON < discriminant < 0.0:
        discriminant = 0.0
    if discriminant < 0.0:
        return []

    t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))
    return [t0, t1]


def normal_sphere(object_point: Tuple4) -> Tuple4:
    """Outward normal of the unit sphere at an object-space point."""
    return vector(object_point[0], object_point[1], object_point[2])
