"""Pixel buffer written by the renderer.

The canvas stores linear RGB floats in a numpy array of shape
``(height, width, 3)``; row 0 is the top of the image. Values are not
clamped here; encoders clamp when converting to 8-bit.

Example:
    >>> from src.whitted.core.canvas import Canvas
    >>> from src.whitted.core.tuples import color
    >>> canvas = Canvas(10, 20)
    >>> canvas.set(2, 3, color(1, 0, 0))
    >>> canvas.get(2, 3)
    array([1., 0., 0.])
"""

import numpy as np
import numpy.typing as npt

from src.whitted.core.tuples import Color


class Canvas:
    """A width x height grid of colors.

    Attributes:
        width: Number of pixel columns.
        height: Number of pixel rows.
        pixels: Backing array of shape (height, width, 3).
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.float64] = np.zeros((height, width, 3), dtype=np.float64)

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"

    def _check(self, x: int, y: int) -> None:
        if not 0 <= x < self.width:
            raise IndexError(f"x = {x} out of range, width is {self.width}")
        if not 0 <= y < self.height:
            raise IndexError(f"y = {y} out of range, height is {self.height}")

    def get(self, x: int, y: int) -> Color:
        """Return a copy of the color at column x, row y.

        Raises:
            IndexError: If the coordinates are outside the canvas.
        """
        self._check(x, y)
        return self.pixels[y, x].copy()

    def set(self, x: int, y: int, value: Color) -> None:
        """Write the color at column x, row y.

        Raises:
            IndexError: If the coordinates are outside the canvas.
        """
        self._check(x, y)
        self.pixels[y, x] = value

    def write_rows(self, start: int, rows: npt.NDArray[np.float64]) -> None:
        """Copy a block of whole rows into the canvas starting at row ``start``.

        Raises:
            IndexError: If the block does not fit below ``start``.
            ValueError: If the block is not (n, width, 3).
        """
        if rows.ndim != 3 or rows.shape[1:] != (self.width, 3):
            raise ValueError(
                f"Row block must have shape (n, {self.width}, 3), got {rows.shape}"
            )
        stop = start + rows.shape[0]
        if start < 0 or stop > self.height:
            raise IndexError(f"Rows {start}..{stop} out of range, height is {self.height}")
        self.pixels[start:stop] = rows
