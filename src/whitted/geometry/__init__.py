"""Geometry module for shape primitives.

This module provides the shape variants and their intersection algorithms:

Components:
    shape: Shape tagged variant, groups, space conversion and dispatch
    sphere: Unit sphere with robust quadratic intersection
    plane: Infinite xz-plane
    cube: Axis-aligned unit cube (slab test)
    cylinder: Truncatable, cappable cylinders and cones

Ray-object intersection follows the pattern:
    local_ray = transform_ray(ray, shape.inverse)
    ts = local_intersect(shape, local_ray)
"""

from .shape import (
    Intersection,
    Shape,
    ShapeKind,
    cone,
    cube,
    cylinder,
    glass_sphere,
    group,
    intersect,
    local_intersect,
    local_normal_at,
    normal_at,
    plane,
    sphere,
)

__all__ = [
    "Shape",
    "ShapeKind",
    "Intersection",
    "sphere",
    "glass_sphere",
    "plane",
    "cube",
    "cylinder",
    "cone",
    "group",
    "intersect",
    "local_intersect",
    "local_normal_at",
    "normal_at",
]
