"""Scene module for lights, intersection records and the world.

Components:
    light: Point light sources
    intersection: Hit selection and prepared hit state (n1/n2, offsets)
    world: Shape and light container with shadow queries
    loader: YAML scene descriptions to (World, Camera)
    showcase: Programmatic demo scene

A world is built once and is read-only while rendering.
"""

from .intersection import (
    Computations,
    Intersection,
    hit,
    intersections,
    prepare_computations,
)
from .light import PointLight
from .world import World, default_world, intersect_world, is_shadowed

# Loader and showcase build on everything above
from .loader import SceneError, load_scene, load_scene_file, parse_scene
from .showcase import create_showcase_scene

__all__ = [
    # Intersection module
    "Intersection",
    "Computations",
    "intersections",
    "hit",
    "prepare_computations",
    # Lights and world
    "PointLight",
    "World",
    "default_world",
    "intersect_world",
    "is_shadowed",
    # Loading
    "SceneError",
    "load_scene",
    "load_scene_file",
    "parse_scene",
    "create_showcase_scene",
]
