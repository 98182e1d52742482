"""Showcase scene exercising every shape, pattern and optical effect.

The scene is a checkered floor and striped back wall holding:
- A glass sphere with an air bubble inside (refraction, Schlick blending)
- A mirror sphere (reflection)
- A matte ring-patterned sphere
- A capped cylinder and cone grouped and rotated together
- A small tilted cube with a gradient
Two lights of different color show additive, independently shadowed lighting.

Example:
    >>> from src.whitted.scene.showcase import create_showcase_scene
    >>> world, camera = create_showcase_scene(width=160, height=120)
"""

import math
from dataclasses import dataclass

from src.whitted.camera.camera import Camera
from src.whitted.core.matrix import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    translation,
    view_transform,
)
from src.whitted.core.tuples import color, point, vector
from src.whitted.geometry.shape import cone, cube, cylinder, group, plane, sphere
from src.whitted.materials.material import Material, glass
from src.whitted.materials.patterns import (
    checkers_pattern,
    gradient_pattern,
    ring_pattern,
    stripe_pattern,
)
from src.whitted.scene.light import PointLight
from src.whitted.scene.world import World

# =============================================================================
# Showcase Parameters
# =============================================================================


@dataclass
class ShowcaseParams:
    """Tunable parameters of the showcase scene.

    Attributes:
        key_light_color: RGB intensity of the main light.
        fill_light_color: RGB intensity of the dimmer second light.
        floor_reflective: Reflectivity of the checkered floor.
        glass_index: Refractive index of the glass sphere.
    """

    key_light_color: tuple[float, float, float] = (0.9, 0.9, 0.9)
    fill_light_color: tuple[float, float, float] = (0.2, 0.2, 0.25)
    floor_reflective: float = 0.15
    glass_index: float = 1.5


# Camera placement
CAMERA_FROM = (0.0, 2.0, -6.0)
CAMERA_TO = (0.0, 1.0, 0.0)
CAMERA_FOV = math.pi / 3


def create_showcase_scene(
    width: int = 400,
    height: int = 300,
    params: ShowcaseParams | None = None,
) -> tuple[World, Camera]:
    """Create the showcase world and a camera looking at it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        params: Optional scene parameters.

    Returns:
        (world, camera).
    """
    if params is None:
        params = ShowcaseParams()

    floor = plane(
        material=Material(
            pattern=checkers_pattern(
                color(0.9, 0.9, 0.9), color(0.15, 0.15, 0.15), scaling(0.75, 0.75, 0.75)
            ),
            specular=0.1,
            reflective=params.floor_reflective,
        )
    )

    wall = plane(
        transform=chain(rotation_x(math.pi / 2), translation(0, 0, 8)),
        material=Material(
            pattern=stripe_pattern(
                color(0.55, 0.6, 0.7),
                color(0.45, 0.5, 0.6),
                chain(scaling(0.5, 1, 1), rotation_y(math.pi / 4)),
            ),
            specular=0.0,
        ),
    )

    glass_ball = sphere(
        transform=translation(-0.6, 1.0, 0.5),
        material=glass(
            color=color(0.05, 0.05, 0.05),
            diffuse=0.1,
            specular=1.0,
            shininess=300.0,
            reflective=0.9,
            refractive_index=params.glass_index,
        ),
    )
    bubble = sphere(
        transform=chain(scaling(0.5, 0.5, 0.5), translation(-0.6, 1.0, 0.5)),
        material=glass(
            color=color(0.0, 0.0, 0.0),
            diffuse=0.0,
            reflective=0.9,
            refractive_index=1.0000034,
        ),
    )

    mirror = sphere(
        transform=chain(scaling(0.6, 0.6, 0.6), translation(1.6, 0.6, -0.4)),
        material=Material(
            color=color(0.1, 0.1, 0.12), diffuse=0.2, specular=1.0, reflective=0.85
        ),
    )

    matte = sphere(
        transform=chain(scaling(0.4, 0.4, 0.4), translation(-2.2, 0.4, -0.8)),
        material=Material(
            pattern=ring_pattern(
                color(0.9, 0.4, 0.2),
                color(0.95, 0.8, 0.3),
                chain(scaling(0.15, 0.15, 0.15), rotation_z(math.pi / 5)),
            ),
            diffuse=0.8,
            specular=0.2,
        ),
    )

    post = cylinder(
        minimum=0.0,
        maximum=1.0,
        closed=True,
        transform=scaling(0.3, 1.0, 0.3),
        material=Material(color=color(0.2, 0.5, 0.8), specular=0.4),
    )
    cap = cone(
        minimum=-1.0,
        maximum=0.0,
        closed=True,
        transform=chain(scaling(0.4, 0.6, 0.4), translation(0, 1.6, 0)),
        material=Material(color=color(0.8, 0.25, 0.3), specular=0.4),
    )
    marker = group(
        post,
        cap,
        transform=chain(rotation_y(math.pi / 6), translation(2.4, 0.0, 2.0)),
    )

    block = cube(
        transform=chain(
            scaling(0.3, 0.3, 0.3),
            rotation_y(math.pi / 5),
            translation(0.6, 0.3, -1.6),
        ),
        material=Material(
            pattern=gradient_pattern(
                color(0.3, 0.8, 0.4),
                color(0.9, 0.9, 0.2),
                chain(translation(1, 0, 0), scaling(2, 1, 1)),
            ),
        ),
    )

    world = World(
        objects=[floor, wall, glass_ball, bubble, mirror, matte, marker, block],
        lights=[
            PointLight(point(-6, 8, -8), color(*params.key_light_color)),
            PointLight(point(6, 4, -6), color(*params.fill_light_color)),
        ],
    )

    camera = Camera(
        width,
        height,
        CAMERA_FOV,
        view_transform(point(*CAMERA_FROM), point(*CAMERA_TO), vector(0, 1, 0)),
    )
    return world, camera
