"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules: the reference
two-sphere world and the camera used to look at it.
"""

import math

import pytest


@pytest.fixture
def default_world():
    """The two concentric spheres lit from (-10, 10, -10).

    Built fresh for every test so tests may modify it freely.
    """
    from src.whitted.scene.world import default_world as build

    return build()


@pytest.fixture
def default_camera():
    """An 11x11 camera at (0, 0, -5) looking at the origin with a 90 degree view."""
    from src.whitted.camera.camera import Camera
    from src.whitted.core.matrix import view_transform
    from src.whitted.core.tuples import point, vector

    transform = view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0))
    return Camera(11, 11, math.pi / 2, transform)

