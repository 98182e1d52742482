"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    tuples: Points, vectors and colors as numpy arrays with epsilon comparison
    matrix: 4x4 transforms, cofactor inversion and the Transformable mixin
    ray: Immutable rays and ray transformation
    canvas: Pixel buffer with a get/set contract
    shading: Phong local illumination
    integrator: Recursive reflection/refraction color resolution
    renderer: Per-pixel render driver with row-band process parallelism
"""

from .canvas import Canvas
from .matrix import (
    Matrix4,
    Transformable,
    chain,
    determinant,
    identity,
    inverse,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    transpose,
    view_transform,
)
from .ray import Ray, position, transform_ray
from .tuples import (
    BLACK,
    EPSILON,
    ORIGIN,
    WHITE,
    Color,
    Tuple4,
    approx_equal,
    color,
    cross,
    dot,
    magnitude,
    normalize,
    point,
    reflect,
    vector,
)

# Note: shading, integrator and renderer are NOT imported here to avoid circular
# imports (they depend on materials and scene). Import them directly, e.g.
#   from src.whitted.core.renderer import render

__all__ = [
    "Canvas",
    "Matrix4",
    "Transformable",
    "identity",
    "transpose",
    "determinant",
    "inverse",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "chain",
    "view_transform",
    "Ray",
    "position",
    "transform_ray",
    "Tuple4",
    "Color",
    "EPSILON",
    "ORIGIN",
    "BLACK",
    "WHITE",
    "point",
    "vector",
    "color",
    "approx_equal",
    "magnitude",
    "normalize",
    "dot",
    "cross",
    "reflect",
]
