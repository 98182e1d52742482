"""Shape variants, world/object space plumbing and intersection dispatch.

Every shape is a ``Shape`` instance tagged with a ``ShapeKind``. Shared state
(transform, material) lives on the instance together with the fields used by
particular variants (cylinder/cone bounds, group children). Local-space
intersection and normal computation dispatch on the kind, mirroring the
per-material dispatch in the integrator.

Coordinate spaces:
    world space  --(group inverses, outermost first)-->  parent space
    parent space --(shape.inverse)-->                    object space

Every primitive's object-space math assumes a canonical unit-sized shape at
the origin; all placement comes from transforms.

Groups own their children. A child refers back to its group through a weak
reference, so there is no ownership cycle and a shape can be pickled on its
own (the link is rebuilt when the enclosing group is unpickled).

Example:
    >>> from src.whitted.core.matrix import scaling, translation
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import point, vector
    >>> from src.whitted.geometry.shape import group, intersect, sphere
    >>> ball = sphere(transform=translation(5, 0, 0))
    >>> g = group(ball, transform=scaling(2, 2, 2))
    >>> xs = intersect(g, Ray(point(10, 0, -10), vector(0, 0, 1)))
"""

from __future__ import annotations

import math
import weakref
from dataclasses import dataclass
from enum import IntEnum

from src.whitted.core.matrix import Matrix4, Transformable
from src.whitted.core.ray import Ray, transform_ray
from src.whitted.core.tuples import Tuple4, normalize
from src.whitted.geometry.cube import intersect_cube, normal_cube
from src.whitted.geometry.cylinder import (
    intersect_cone,
    intersect_cylinder,
    normal_cone,
    normal_cylinder,
)
from src.whitted.geometry.plane import intersect_plane, normal_plane
from src.whitted.geometry.sphere import intersect_sphere, normal_sphere
from src.whitted.materials.material import Material


class ShapeKind(IntEnum):
    """Enumeration of supported shape variants."""

    SPHERE = 0
    PLANE = 1
    CUBE = 2
    CYLINDER = 3
    CONE = 4
    GROUP = 5


@dataclass(frozen=True, eq=False)
class Intersection:
    """A ray parameter at which a ray crosses a shape's surface.

    Attributes:
        t: Distance along the ray (in units of the ray direction).
        shape: The primitive that was hit. Never a group.
    """

    t: float
    shape: Shape


class Shape(Transformable):
    """A primitive or group with an owned transform and material.

    Shapes compare by identity; two spheres with equal parameters are still
    different objects for containment tracking during refraction.

    Attributes:
        kind: The shape variant.
        transform: Object-to-parent transform.
        material: Surface material (ignored for groups).
        minimum: Lower y bound for cylinders and cones.
        maximum: Upper y bound for cylinders and cones.
        closed: Whether cylinders and cones are capped.
        children: Child shapes, for groups only.
    """

    def __init__(
        self,
        kind: ShapeKind,
        transform: Matrix4 | None = None,
        material: Material | None = None,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False,
    ) -> None:
        super().__init__(transform)
        self.kind = kind
        self.material = Material() if material is None else material
        self.minimum = minimum
        self.maximum = maximum
        self.closed = closed
        self.children: list[Shape] = []
        self._parent: weakref.ref[Shape] | None = None

    def __repr__(self) -> str:
        if self.kind == ShapeKind.GROUP:
            return f"Shape(kind=GROUP, children={len(self.children)})"
        return f"Shape(kind={self.kind.name})"

    # =========================================================================
    # Group Membership
    # =========================================================================

    @property
    def parent(self) -> Shape | None:
        """The enclosing group, or None for a top-level shape."""
        return None if self._parent is None else self._parent()

    def add_child(self, child: Shape) -> Shape:
        """Add a shape to this group.

        Args:
            child: The shape to add. It must not already belong to a group.

        Returns:
            The child, for chaining.

        Raises:
            TypeError: If this shape is not a group.
            ValueError: If the child already has a parent, or is this group or one
                of its ancestors.
        """
        if self.kind != ShapeKind.GROUP:
            raise TypeError(f"Cannot add children to a {self.kind.name.lower()}")
        if child.includes(self):
            raise ValueError("Adding this shape would create a group cycle")
        if child.parent is not None:
            raise ValueError("Shape already belongs to a group")
        self.children.append(child)
        child._parent = weakref.ref(self)
        return child

    def includes(self, other: Shape) -> bool:
        """Check whether ``other`` is this shape or one of its descendants."""
        if other is self:
            return True
        return any(child.includes(other) for child in self.children)

    def __getstate__(self) -> dict:
        state = self.__dict__.copy()
        state["_parent"] = None
        return state

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)
        for child in self.children:
            child._parent = weakref.ref(self)

    # =========================================================================
    # Space Conversion
    # =========================================================================

    def world_to_object(self, world_point: Tuple4) -> Tuple4:
        """Convert a world-space point into this shape's object space."""
        parent = self.parent
        if parent is not None:
            world_point = parent.world_to_object(world_point)
        return self.inverse @ world_point

    def normal_to_world(self, object_normal: Tuple4) -> Tuple4:
        """Convert an object-space normal into a normalized world-space vector.

        Uses the inverse-transpose so normals stay perpendicular to surfaces
        under non-uniform scaling, then walks outward through enclosing groups.
        """
        normal = self.inverse_transpose @ object_normal
        normal[3] = 0.0
        normal = normalize(normal)

        parent = self.parent
        if parent is not None:
            normal = parent.normal_to_world(normal)
        return normal


# =============================================================================
# Shape Constructors
# =============================================================================


def sphere(transform: Matrix4 | None = None, material: Material | None = None) -> Shape:
    """Create a unit sphere centered at the origin."""
    return Shape(ShapeKind.SPHERE, transform, material)


def glass_sphere(transform: Matrix4 | None = None) -> Shape:
    """Create a unit sphere with a clear glass material."""
    return Shape(
        ShapeKind.SPHERE,
        transform,
        Material(transparency=1.0, refractive_index=1.5),
    )


def plane(transform: Matrix4 | None = None, material: Material | None = None) -> Shape:
    """Create the infinite xz-plane."""
    return Shape(ShapeKind.PLANE, transform, material)


def cube(transform: Matrix4 | None = None, material: Material | None = None) -> Shape:
    """Create an axis-aligned cube spanning [-1, 1]^3."""
    return Shape(ShapeKind.CUBE, transform, material)


def cylinder(
    minimum: float = -math.inf,
    maximum: float = math.inf,
    closed: bool = False,
    transform: Matrix4 | None = None,
    material: Material | None = None,
) -> Shape:
    """Create a unit-radius cylinder around the y axis."""
    if minimum > maximum:
        raise ValueError(f"Cylinder minimum {minimum} exceeds maximum {maximum}")
    return Shape(ShapeKind.CYLINDER, transform, material, minimum, maximum, closed)


def cone(
    minimum: float = -math.inf,
    maximum: float = math.inf,
    closed: bool = False,
    transform: Matrix4 | None = None,
    material: Material | None = None,
) -> Shape:
    """Create a double-napped cone around the y axis."""
    if minimum > maximum:
        raise ValueError(f"Cone minimum {minimum} exceeds maximum {maximum}")
    return Shape(ShapeKind.CONE, transform, material, minimum, maximum, closed)


def group(*children: Shape, transform: Matrix4 | None = None) -> Shape:
    """Create a group containing the given children."""
    g = Shape(ShapeKind.GROUP, transform)
    for child in children:
        g.add_child(child)
    return g


# =============================================================================
# Intersection and Normal Dispatch
# =============================================================================


def local_intersect(shape: Shape, local_ray: Ray) -> list[float]:
    """Intersect an object-space ray with a primitive.

    Args:
        shape: A non-group shape.
        local_ray: The ray already transformed into the shape's object space.

    Returns:
        Intersection t values (possibly including negatives and duplicates).

    Raises:
        TypeError: If ``shape`` is a group; groups have no surface of their own.
    """
    kind = shape.kind

    if kind == ShapeKind.SPHERE:
        return intersect_sphere(local_ray)
    elif kind == ShapeKind.PLANE:
        return intersect_plane(local_ray)
    elif kind == ShapeKind.CUBE:
        return intersect_cube(local_ray)
    elif kind == ShapeKind.CYLINDER:
        return intersect_cylinder(local_ray, shape.minimum, shape.maximum, shape.closed)
    elif kind == ShapeKind.CONE:
        return intersect_cone(local_ray, shape.minimum, shape.maximum, shape.closed)

    raise TypeError(f"No local surface for shape kind {kind.name}")


def local_normal_at(shape: Shape, local_point: Tuple4) -> Tuple4:
    """Compute the object-space normal of a primitive at an object-space point.

    Raises:
        TypeError: If ``shape`` is a group.
    """
    kind = shape.kind

    if kind == ShapeKind.SPHERE:
        return normal_sphere(local_point)
    elif kind == ShapeKind.PLANE:
        return normal_plane(local_point)
    elif kind == ShapeKind.CUBE:
        return normal_cube(local_point)
    elif kind == ShapeKind.CYLINDER:
        return normal_cylinder(local_point, shape.minimum, shape.maximum)
    elif kind == ShapeKind.CONE:
        return normal_cone(local_point, shape.minimum, shape.maximum)

    raise TypeError(f"No surface normal for shape kind {kind.name}")


def intersect(shape: Shape, ray: Ray) -> list[Intersection]:
    """Intersect a ray (in the parent's space) with a shape.

    For a group, the ray is moved into the group's space once and tested
    against every child; the union is returned sorted by t.

    Args:
        shape: The shape to test.
        ray: The ray in the shape's parent space (world space for top-level
            shapes).

    Returns:
        Intersections sorted by ascending t.
    """
    local_ray = transform_ray(ray, shape.inverse)

    if shape.kind == ShapeKind.GROUP:
        xs: list[Intersection] = []
        for child in shape.children:
            xs.extend(intersect(child, local_ray))
        xs.sort(key=lambda i: i.t)
        return xs

    return [Intersection(t, shape) for t in local_intersect(shape, local_ray)]


def normal_at(shape: Shape, world_point: Tuple4) -> Tuple4:
    """Compute the world-space unit normal of a primitive at a world point.

    Raises:
        TypeError: If ``shape`` is a group.
    """
    if shape.kind == ShapeKind.GROUP:
        raise TypeError("Groups have no surface normal; ask a child primitive")
    local_point = shape.world_to_object(world_point)
    local_normal = local_normal_at(shape, local_point)
    return shape.normal_to_world(local_normal)
