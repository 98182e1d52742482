"""Phong local illumination.

The reflected light at a surface point is the sum of three terms:

    ambient  = effective_color * ambient
    diffuse  = effective_color * diffuse * max(0, N . L)
    specular = intensity * specular * max(0, R . E) ** shininess

where ``effective_color`` is the surface color (or pattern color) tinted by
the light intensity, N the surface normal, L the direction to the light,
R the mirror of -L about N and E the direction to the eye. A point in shadow
only receives the ambient term.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from src.whitted.core.tuples import Color, Tuple4, dot, normalize, reflect
from src.whitted.materials.material import Material
from src.whitted.materials.patterns import pattern_at, pattern_at_shape
from src.whitted.scene.light import PointLight

if TYPE_CHECKING:
    from src.whitted.geometry.shape import Shape


def surface_color(material: Material, shape: Shape | None, world_point: Tuple4) -> Color:
    """Resolve the base color of a material at a world point.

    Args:
        material: The surface material.
        shape: The shape the material belongs to. Needed to map the point
            into pattern space; when None the point is used as-is.
        world_point: The world-space point being shaded.

    Returns:
        The pattern color if the material has a pattern, else its flat color.
    """
    if material.pattern is None:
        return material.color
    if shape is None:
        return pattern_at(material.pattern, material.pattern.inverse @ world_point)
    return pattern_at_shape(material.pattern, shape, world_point)


def lighting(
    material: Material,
    shape: Shape | None,
    light: PointLight,
    point: Tuple4,
    eyev: Tuple4,
    normalv: Tuple4,
    in_shadow: bool = False,
) -> Color:
    """Compute the Phong color of a surface point lit by one light.

    Args:
        material: Surface material.
        shape: Shape being shaded (for pattern lookup), or None.
        light: The light source.
        point: World-space surface point.
        eyev: Unit vector toward the eye.
        normalv: Unit surface normal.
        in_shadow: Whether the light is blocked at this point.

    Returns:
        The RGB contribution of this light.

    Example:
        >>> from src.whitted.core.tuples import color, point, vector
        >>> light = PointLight(point(0, 0, -10), color(1, 1, 1))
        >>> lighting(Material(), None, light, point(0, 0, 0),
        ...          vector(0, 0, -1), vector(0, 0, -1))
        array([1.9, 1.9, 1.9])
    """
    effective_color = surface_color(material, shape, point) * light.intensity
    ambient = effective_color * material.ambient

    if in_shadow:
        return ambient

    lightv = normalize(light.position - point)
    light_dot_normal = dot(lightv, normalv)

    # Light on the far side of the surface
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)

    reflectv = reflect(-lightv, normalv)
    reflect_dot_eye = dot(reflectv, eyev)
    if reflect_dot_eye <= 0.0:
        specular = np.zeros(3, dtype=np.float64)
    else:
        factor = reflect_dot_eye**material.shininess
        specular = light.intensity * (material.specular * factor)

    return ambient + diffuse + specular
