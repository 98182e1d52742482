"""The world: every shape and light taking part in a render.

A World is plain data. It is built before rendering and only read while
rendering, so the same World can be shared by every worker of a render.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import point, vector
    >>> from src.whitted.scene.world import default_world, intersect_world
    >>> world = default_world()
    >>> xs = intersect_world(world, Ray(point(0, 0, -5), vector(0, 0, 1)))
    >>> [round(i.t, 2) for i in xs]
    [4.0, 4.5, 5.5, 6.0]
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.whitted.core.matrix import scaling
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import EPSILON, Tuple4, color, magnitude, normalize, point
from src.whitted.geometry.shape import Intersection, Shape, intersect, sphere
from src.whitted.materials.material import Material
from src.whitted.scene.intersection import hit
from src.whitted.scene.light import PointLight


@dataclass(eq=False)
class World:
    """A collection of shapes and point lights.

    Attributes:
        objects: Top-level shapes. Groups carry their own children.
        lights: Point lights. Each contributes independently to shading.
    """

    objects: list[Shape] = field(default_factory=list)
    lights: list[PointLight] = field(default_factory=list)

    def add(self, *shapes: Shape) -> None:
        """Add top-level shapes to the world."""
        self.objects.extend(shapes)

    def add_light(self, light: PointLight) -> None:
        """Add a point light to the world."""
        self.lights.append(light)

    def contains(self, shape: Shape) -> bool:
        """Check whether a shape is in the world, at any depth."""
        return any(obj.includes(shape) for obj in self.objects)


def default_world() -> World:
    """Build the two-sphere reference world.

    An outer unit sphere with a green-ish material, a half-size white sphere
    inside it, and one white light at (-10, 10, -10).
    """
    outer = sphere(
        material=Material(color=color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
    )
    inner = sphere(transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10, 10, -10), color(1, 1, 1))
    return World(objects=[outer, inner], lights=[light])


def intersect_world(world: World, ray: Ray) -> list[Intersection]:
    """Intersect a ray with every shape in the world.

    Returns:
        All intersections sorted by ascending t.
    """
    xs: list[Intersection] = []
    for obj in world.objects:
        xs.extend(intersect(obj, ray))
    xs.sort(key=lambda i: i.t)
    return xs


def is_shadowed(
    world: World, at: Tuple4, light: PointLight, epsilon: float = EPSILON
) -> bool:
    """Check whether anything blocks the path from a point to a light.

    Args:
        world: The world to test against.
        at: The (already offset) surface point.
        light: The light being tested.
        epsilon: Points closer than this to the light are never shadowed.

    Returns:
        True if some shape is hit strictly between the point and the light.
    """
    to_light = light.position - at
    distance = magnitude(to_light)
    if distance < epsilon:
        return False

    ray = Ray(at, normalize(to_light))
    h = hit(intersect_world(world, ray))
    return h is not None and h.t < distance
