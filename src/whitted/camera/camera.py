"""Perspective camera producing one primary ray per pixel.

The camera sits at the origin of its own space looking down -z, with the
image plane at z = -1. Its transform is a view transform (world to camera);
its cached inverse moves camera-space points back into the world.

The field of view spans the longer image side. With ``half_view =
tan(fov / 2)`` the image plane extends ``half_width`` to either side and
``half_height`` above and below, and each pixel covers ``pixel_size`` world
units.

Example:
    >>> import math
    >>> from src.whitted.camera.camera import Camera, ray_for_pixel
    >>> from src.whitted.core.matrix import view_transform
    >>> from src.whitted.core.tuples import point, vector
    >>> camera = Camera(
    ...     160, 120, math.pi / 3,
    ...     transform=view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0)),
    ... )
    >>> ray = ray_for_pixel(camera, 80, 60)
"""

import math

from src.whitted.core.matrix import Matrix4, Transformable
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import ORIGIN, normalize, point


class Camera(Transformable):
    """A pinhole camera with a view transform.

    Attributes:
        hsize: Horizontal size of the image in pixels.
        vsize: Vertical size of the image in pixels.
        field_of_view: Angle of view across the longer side, in radians.
        transform: View transform (world to camera space).
        half_width: Half the image plane width at z = -1.
        half_height: Half the image plane height at z = -1.
        pixel_size: Size of one pixel on the image plane.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix4 | None = None,
    ) -> None:
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(
                f"Field of view must be in (0, pi) radians, got {field_of_view}"
            )
        super().__init__(transform)
        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = self.half_width * 2.0 / hsize

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view:.4f})"
        )


def ray_for_pixel(camera: Camera, px: float, py: float) -> Ray:
    """Build the world-space ray through the center of a pixel.

    Args:
        camera: The camera.
        px: Pixel column (0 is the left edge).
        py: Pixel row (0 is the top edge).

    Returns:
        A ray from the camera position with a unit direction.
    """
    # Offset from the image edge to the pixel center
    xoffset = (px + 0.5) * camera.pixel_size
    yoffset = (py + 0.5) * camera.pixel_size

    # Camera looks toward -z, so +x is to the left
    world_x = camera.half_width - xoffset
    world_y = camera.half_height - yoffset

    inverse = camera.inverse
    pixel = inverse @ point(world_x, world_y, -1.0)
    origin = inverse @ ORIGIN
    direction = normalize(pixel - origin)
    return Ray(origin, direction)
