"""Cylinder and double-napped cone primitives around the y axis.

Both shapes are described by the same three parameters:
    minimum, maximum: Open interval of y values the lateral surface covers.
        Defaults to (-inf, inf), i.e. an infinite surface.
    closed: Whether the ends are capped with disks.

The cylinder has radius 1. The cone's radius at height y is |y|, so a cap at
y = m is a disk of radius |m|.

Lateral intersections solve a quadratic in t and keep roots whose y lies
strictly between minimum and maximum; cap intersections test the ray against
the planes y = minimum and y = maximum and keep points inside the cap disk.
"""

import math

from src.whitted.core.ray import Ray
from src.whitted.core.tuples import EPSILON, Tuple4, vector


def _check_cap(
    ox: float, oz: float, dx: float, dz: float, t: float, radius: float
) -> bool:
    """Check whether the ray at t lies within a cap disk of the given radius."""
    x = ox + t * dx
    z = oz + t * dz
    return x * x + z * z <= radius * radius + EPSILON


def _intersect_caps(
    ray: Ray, minimum: float, maximum: float, closed: bool, cone: bool
) -> list[float]:
    ox, oy, oz, _ = ray.origin.tolist()
    dx, dy, dz, _ = ray.direction.tolist()

    if not closed or abs(dy) < EPSILON:
        return []

    xs = []
    t = (minimum - oy) / dy
    if _check_cap(ox, oz, dx, dz, t, abs(minimum) if cone else 1.0):
        xs.append(t)

    t = (maximum - oy) / dy
    if _check_cap(ox, oz, dx, dz, t, abs(maximum) if cone else 1.0):
        xs.append(t)
    return xs


def _within_bounds(oy: float, dy: float, t: float, minimum: float, maximum: float) -> bool:
    y = oy + t * dy
    return minimum < y < maximum


def intersect_cylinder(
    ray: Ray, minimum: float = -math.inf, maximum: float = math.inf, closed: bool = False
) -> list[float]:
    """Intersect an object-space ray with a unit-radius cylinder.

    Args:
        ray: Ray in the cylinder's object space.
        minimum: Lower y bound (exclusive) of the lateral surface.
        maximum: Upper y bound (exclusive) of the lateral surface.
        closed: Whether the ends are capped.

    Returns:
        Intersection t values in ascending order.
    """
    ox, oy, oz, _ = ray.origin.tolist()
    dx, dy, dz, _ = ray.direction.tolist()

    xs: list[float] = []
    a = dx * dx + dz * dz

    # Rays parallel to the y axis can only hit the caps
    if abs(a) >= EPSILON:
        b = 2.0 * ox * dx + 2.0 * oz * dz
        c = ox * ox + oz * oz - 1.0
        discriminant = b * b - 4.0 * a * c
        if -EPSILON < discriminant < 0.0:
            discriminant = 0.0
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > t1:
            t0, t1 = t1, t0

        if _within_bounds(oy, dy, t0, minimum, maximum):
            xs.append(t0)
        if _within_bounds(oy, dy, t1, minimum, maximum):
            xs.append(t1)

    xs.extend(_intersect_caps(ray, minimum, maximum, closed, cone=False))
    return sorted(xs)


def intersect_cone(
    ray: Ray, minimum: float = -math.inf, maximum: float = math.inf, closed: bool = False
) -> list[float]:
    """Intersect an object-space ray with a double-napped cone x^2 + z^2 = y^2.

    A ray parallel to one of the cone's halves (a == 0) still crosses the
    other half once, giving a single root.
    """
    ox, oy, oz, _ = ray.origin.tolist()
    dx, dy, dz, _ = ray.direction.tolist()

    xs: list[float] = []
    a = dx * dx - dy * dy + dz * dz
    b = 2.0 * ox * dx - 2.0 * oy * dy + 2.0 * oz * dz
    c = ox * ox - oy * oy + oz * oz

    if abs(a) < EPSILON:
        if abs(b) >= EPSILON:
            t = -c / (2.0 * b)
            if _within_bounds(oy, dy, t, minimum, maximum):
                xs.append(t)
    else:
        discriminant = b * b - 4.0 * a * c
        # Tiny negative discriminants are rounding noise on a tangent ray
        if -EPSILON < discriminant < 0.0:
            discriminant = 0.0
        if discriminant >= 0.0:
            sqrt_d = math.sqrt(discriminant)
            t0 = (-b - sqrt_d) / (2.0 * a)
            t1 = (-b + sqrt_d) / (2.0 * a)
            if t0 > t1:
                t0, t1 = t1, t0

            if _within_bounds(oy, dy, t0, minimum, maximum):
                xs.append(t0)
            if _within_bounds(oy, dy, t1, minimum, maximum):
                xs.append(t1)

    xs.extend(_intersect_caps(ray, minimum, maximum, closed, cone=True))
    return sorted(xs)


def normal_cylinder(object_point: Tuple4, minimum: float, maximum: float) -> Tuple4:
    """Normal on a cylinder: radial on the side, +/-y on the caps."""
    x, y, z, _ = object_point.tolist()
    dist = x * x + z * z

    if dist < 1.0 and y >= maximum - EPSILON:
        return vector(0.0, 1.0, 0.0)
    elif dist < 1.0 and y <= minimum + EPSILON:
        return vector(0.0, -1.0, 0.0)
    return vector(x, 0.0, z)


def normal_cone(object_point: Tuple4, minimum: float, maximum: float) -> Tuple4:
    """Normal on a cone: sloped on the side, +/-y on the caps."""
    x, y, z, _ = object_point.tolist()
    dist = x * x + z * z

    if dist < maximum * maximum and y >= maximum - EPSILON:
        return vector(0.0, 1.0, 0.0)
    elif dist < minimum * minimum and y <= minimum + EPSILON:
        return vector(0.0, -1.0, 0.0)

    ny = math.sqrt(dist)
    if y > 0.0:
        ny = -ny
    return vector(x, ny, z)
