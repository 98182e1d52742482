"""Intersection bookkeeping: collections, hit selection and prepared state.

Given every intersection of a ray with the world, this module picks the hit
and precomputes everything shading needs at that point:

    point        - world-space hit position
    eyev         - direction back toward the eye
    normalv      - surface normal, flipped to face the eye
    reflectv     - ray direction mirrored about the normal
    over_point   - point nudged along the normal (shadow and reflection rays)
    under_point  - point nudged against the normal (refraction rays)
    n1, n2       - refractive indices on the incoming and outgoing sides

n1 and n2 come from walking the sorted intersections up to the hit while
keeping a list of the shapes the ray is currently inside.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import point, vector
    >>> from src.whitted.geometry.shape import Intersection, sphere
    >>> from src.whitted.scene.intersection import hit, intersections
    >>> s = sphere()
    >>> xs = intersections(Intersection(1.0, s), Intersection(-1.0, s))
    >>> hit(xs).t
    1.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from src.whitted.core.ray import Ray, position
from src.whitted.core.tuples import EPSILON, Tuple4, dot, reflect
from src.whitted.geometry.shape import Intersection, Shape, normal_at

__all__ = [
    "Intersection",
    "Computations",
    "intersections",
    "hit",
    "prepare_computations",
]


@dataclass(frozen=True, eq=False)
class Computations:
    """Precomputed state of a ray-surface hit.

    Attributes:
        t: Ray parameter of the hit.
        shape: The primitive that was hit.
        point: World-space hit point.
        eyev: Unit vector from the hit toward the ray origin.
        normalv: Unit surface normal, facing the eye.
        reflectv: Reflection of the ray direction about the normal.
        inside: True if the ray started inside the shape.
        over_point: Hit point offset along the normal.
        under_point: Hit point offset against the normal.
        n1: Refractive index of the medium being exited.
        n2: Refractive index of the medium being entered.
    """

    t: float
    shape: Shape
    point: Tuple4
    eyev: Tuple4
    normalv: Tuple4
    reflectv: Tuple4
    inside: bool
    over_point: Tuple4
    under_point: Tuple4
    n1: float
    n2: float


def intersections(*xs: Intersection) -> list[Intersection]:
    """Collect intersections into a list sorted by ascending t."""
    return sorted(xs, key=lambda i: i.t)


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Select the visible intersection.

    Args:
        xs: Intersections in any order.

    Returns:
        The intersection with the smallest strictly positive t, or None if
        every intersection lies at or behind the ray origin.
    """
    best = None
    for i in xs:
        if i.t > 0.0 and (best is None or i.t < best.t):
            best = i
    return best


def _refractive_indices(hit_: Intersection, xs: Sequence[Intersection]) -> tuple[float, float]:
    """Find n1 and n2 at the hit using a containment list.

    Shapes are tracked by identity. When the hit is reached, n1 is the index
    of the innermost shape the ray was inside before the crossing and n2 the
    innermost one after it; both default to 1.0 (vacuum).
    """
    containers: list[Shape] = []
    n1 = n2 = 1.0

    for i in xs:
        if i is hit_:
            n1 = containers[-1].material.refractive_index if containers else 1.0

        for index, shape in enumerate(containers):
            if shape is i.shape:
                del containers[index]
                break
        else:
            containers.append(i.shape)

        if i is hit_:
            n2 = containers[-1].material.refractive_index if containers else 1.0
            break

    return n1, n2


def prepare_computations(
    hit_: Intersection,
    ray: Ray,
    xs: Sequence[Intersection] | None = None,
    epsilon: float = EPSILON,
) -> Computations:
    """Precompute shading state for a hit.

    Args:
        hit_: The intersection being shaded.
        ray: The ray that produced it.
        xs: All intersections of the ray, sorted by t. Needed for n1/n2;
            defaults to just the hit.
        epsilon: Offset used for over_point and under_point.

    Returns:
        The prepared computations.
    """
    point = position(ray, hit_.t)
    eyev = -ray.direction
    normalv = normal_at(hit_.shape, point)

    inside = dot(normalv, eyev) < 0.0
    if inside:
        normalv = -normalv

    reflectv = reflect(ray.direction, normalv)
    n1, n2 = _refractive_indices(hit_, [hit_] if xs is None else xs)

    return Computations(
        t=hit_.t,
        shape=hit_.shape,
        point=point,
        eyev=eyev,
        normalv=normalv,
        reflectv=reflectv,
        inside=inside,
        over_point=point + normalv * epsilon,
        under_point=point - normalv * epsilon,
        n1=n1,
        n2=n2,
    )
