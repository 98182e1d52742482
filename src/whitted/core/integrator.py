"""Recursive Whitted-style color resolution.

This module turns a ray into a color. The local Phong term of every light is
combined with recursively traced mirror reflection and Snell refraction:

    color_at(ray)
        -> nearest hit -> prepare_computations
        -> shade_hit = sum(lighting per light, own shadow test)
                       + reflected_color  (color_at along reflectv)
                       + refracted_color  (color_at along the refracted ray)

Recursion is bounded by an explicit ``remaining`` budget decremented on every
secondary ray. When the budget is spent a secondary ray contributes black;
this is the only thing that stops two facing mirrors from recursing forever.

When a surface is both reflective and transparent, the reflected and
refracted terms are weighted by the Schlick approximation of the Fresnel
reflectance instead of simply being added.

Example:
    >>> from src.whitted.core.integrator import color_at
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import point, vector
    >>> from src.whitted.scene.world import default_world
    >>> c = color_at(default_world(), Ray(point(0, 0, -5), vector(0, 0, 1)))
"""

import math

import numpy as np

from src.whitted.core.ray import Ray
from src.whitted.core.shading import lighting
from src.whitted.core.tuples import BLACK, EPSILON, Color, dot
from src.whitted.scene.intersection import Computations, hit, prepare_computations
from src.whitted.scene.world import World, intersect_world, is_shadowed

# =============================================================================
# Rendering Constants
# =============================================================================

# Default budget of secondary rays along any path
MAX_DEPTH = 5

# Color of rays that escape the scene
BACKGROUND_COLOR = BLACK


def _black() -> Color:
    return np.zeros(3, dtype=np.float64)


# =============================================================================
# Secondary Rays
# =============================================================================


def reflected_color(
    world: World, comps: Computations, remaining: int = MAX_DEPTH, epsilon: float = EPSILON
) -> Color:
    """Color seen in the mirror direction at a hit.

    Args:
        world: The scene.
        comps: Prepared hit state.
        remaining: Secondary-ray budget left on this path.
        epsilon: Surface offset and "non-reflective" threshold.

    Returns:
        The reflected color scaled by the material's reflectivity, or black
        when the surface is not reflective or the budget is spent.
    """
    reflective = comps.shape.material.reflective
    if remaining <= 0 or reflective < epsilon:
        return _black()

    reflect_ray = Ray(comps.over_point, comps.reflectv)
    return color_at(world, reflect_ray, remaining - 1, epsilon) * reflective


def refracted_color(
    world: World, comps: Computations, remaining: int = MAX_DEPTH, epsilon: float = EPSILON
) -> Color:
    """Color seen through a transparent surface at a hit.

    Uses Snell's law with n1 and n2 from the prepared computations. Total
    internal reflection yields black without tracing a ray.

    Args:
        world: The scene.
        comps: Prepared hit state.
        remaining: Secondary-ray budget left on this path.
        epsilon: Surface offset and "opaque" threshold.

    Returns:
        The refracted color scaled by the material's transparency.
    """
    transparency = comps.shape.material.transparency
    if remaining <= 0 or transparency < epsilon:
        return _black()

    n_ratio = comps.n1 / comps.n2
    cos_i = dot(comps.eyev, comps.normalv)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)

    # Total internal reflection
    if sin2_t > 1.0:
        return _black()

    cos_t = math.sqrt(1.0 - sin2_t)
    direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
    refract_ray = Ray(comps.under_point, direction)
    return color_at(world, refract_ray, remaining - 1, epsilon) * transparency


def schlick(comps: Computations) -> float:
    """Approximate the Fresnel reflectance at a hit.

    Args:
        comps: Prepared hit state with n1 and n2.

    Returns:
        Fraction of light reflected, in [0, 1]. Returns 1.0 under total
        internal reflection.
    """
    cos = dot(comps.eyev, comps.normalv)

    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)

    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5


# =============================================================================
# Shading
# =============================================================================


def shade_hit(
    world: World, comps: Computations, remaining: int = MAX_DEPTH, epsilon: float = EPSILON
) -> Color:
    """Shade a prepared hit.

    Every light contributes its own Phong term with its own shadow test.
    Reflection and refraction are added on top; for a material that is both
    reflective and transparent they are blended by the Schlick reflectance.

    Args:
        world: The scene.
        comps: Prepared hit state.
        remaining: Secondary-ray budget left on this path.
        epsilon: Surface offset used by secondary rays.

    Returns:
        The RGB color at the hit (not clamped).
    """
    material = comps.shape.material

    surface = _black()
    for light in world.lights:
        shadowed = is_shadowed(world, comps.over_point, light, epsilon)
        surface = surface + lighting(
            material,
            comps.shape,
            light,
            comps.over_point,
            comps.eyev,
            comps.normalv,
            shadowed,
        )

    reflected = reflected_color(world, comps, remaining, epsilon)
    refracted = refracted_color(world, comps, remaining, epsilon)

    if material.reflective > 0.0 and material.transparency > 0.0:
        reflectance = schlick(comps)
        return surface + reflected * reflectance + refracted * (1.0 - reflectance)

    return surface + reflected + refracted


def color_at(
    world: World, ray: Ray, remaining: int = MAX_DEPTH, epsilon: float = EPSILON
) -> Color:
    """Trace a ray into the world and return the color it sees.

    Args:
        world: The scene.
        ray: The ray to trace.
        remaining: Secondary-ray budget for this path.
        epsilon: Surface offset used for shadow and secondary rays.

    Returns:
        The shaded color of the nearest hit, or the background color.
    """
    xs = intersect_world(world, ray)
    h = hit(xs)
    if h is None:
        return BACKGROUND_COLOR.copy()

    comps = prepare_computations(h, ray, xs, epsilon)
    return shade_hit(world, comps, remaining, epsilon)
