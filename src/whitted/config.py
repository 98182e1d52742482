"""Render configuration.

Everything the renderer needs besides the world itself: image size, view,
recursion budget, surface offset and worker count. Values are passed
explicitly to the camera and renderer; nothing is read from the environment.

Example:
    >>> from src.whitted.config import RenderConfig
    >>> config = RenderConfig.from_dict({"width": 320, "height": 240, "workers": 4})
    >>> config.validate()
    >>> camera = config.make_camera()
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

from src.whitted.camera.camera import Camera
from src.whitted.core.matrix import view_transform
from src.whitted.core.tuples import EPSILON, point, vector

Vec3 = tuple[float, float, float]


@dataclass
class RenderConfig:
    """Configuration for a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        field_of_view: Field of view across the longer side, in radians.
        from_point: Eye position (x, y, z).
        to_point: Point the camera looks at (x, y, z).
        up: Approximate up direction (x, y, z).
        max_depth: Secondary-ray budget per primary ray.
        epsilon: Surface offset for shadow and secondary rays.
        workers: Number of worker processes (1 renders in-process).
    """

    width: int = 400
    height: int = 300
    field_of_view: float = math.pi / 3
    from_point: Vec3 = (0.0, 1.5, -5.0)
    to_point: Vec3 = (0.0, 1.0, 0.0)
    up: Vec3 = (0.0, 1.0, 0.0)
    max_depth: int = 5
    epsilon: float = EPSILON
    workers: int = 1

    def validate(self) -> None:
        """Check that every field is in range.

        Raises:
            ValueError: Describing the first invalid field.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(
                f"field_of_view must be in (0, pi) radians, got {self.field_of_view}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.epsilon <= 0.0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        for name in ("from_point", "to_point", "up"):
            value = getattr(self, name)
            if len(value) != 3:
                raise ValueError(f"{name} must have 3 components, got {len(value)}")
        if tuple(self.from_point) == tuple(self.to_point):
            raise ValueError("from_point and to_point must differ")

    def make_camera(self) -> Camera:
        """Build a camera from this configuration."""
        self.validate()
        transform = view_transform(
            point(*self.from_point), point(*self.to_point), vector(*self.up)
        )
        return Camera(self.width, self.height, self.field_of_view, transform)

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration as plain data."""
        data = asdict(self)
        for name in ("from_point", "to_point", "up"):
            data[name] = list(data[name])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Create a configuration from a dictionary.

        Missing keys keep their defaults; vectors may be lists.

        Raises:
            ValueError: If the dictionary contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        values = dict(data)
        for name in ("from_point", "to_point", "up"):
            if name in values:
                values[name] = tuple(float(c) for c in values[name])
        return cls(**values)
