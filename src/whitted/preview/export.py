"""Image export for rendered canvases.

Supported formats:
    - PNG (8-bit RGB via Pillow)
    - PPM (plain-text P3, 255 max value)

Both encoders take a Canvas, run it through the display pipeline and
quantize each channel with rounding to the nearest of 256 levels.

Example:
    >>> from src.whitted.preview.export import save_png, save_ppm
    >>> save_png(canvas, "render.png")
    >>> save_ppm(canvas, "render.ppm")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.preview.display import ToneMapMethod, prepare_for_display

if TYPE_CHECKING:
    from src.whitted.core.canvas import Canvas

# Plain PPM readers are only required to handle lines up to 70 characters
PPM_LINE_LIMIT = 70


def canvas_to_uint8(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a canvas to an 8-bit (height, width, 3) array.

    Args:
        canvas: The rendered canvas.
        tone_map: Tone mapping method.
        gamma: Gamma for encoding.
        exposure: Exposure for the "exposure" tone map.

    Returns:
        Array of dtype uint8; 0.5 maps to 128.
    """
    processed = prepare_for_display(
        canvas.pixels, tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    return np.rint(processed * 255.0).astype(np.uint8)


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Write a canvas to an 8-bit RGB PNG file."""
    pixels = canvas_to_uint8(canvas, tone_map=tone_map, gamma=gamma, exposure=exposure)
    PILImage.fromarray(pixels).save(filepath, format="PNG")


def canvas_to_ppm(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> str:
    """Encode a canvas as a plain (P3) PPM document.

    Each image row starts a new line; rows longer than 70 characters are
    wrapped at value boundaries. The document ends with a newline.
    """
    pixels = canvas_to_uint8(canvas, tone_map=tone_map, gamma=gamma, exposure=exposure)
    lines = ["P3", f"{canvas.width} {canvas.height}", "255"]

    for row in pixels:
        line = ""
        for value in row.reshape(-1):
            token = str(int(value))
            if not line:
                line = token
            elif len(line) + 1 + len(token) > PPM_LINE_LIMIT:
                lines.append(line)
                line = token
            else:
                line = f"{line} {token}"
        lines.append(line)

    return "\n".join(lines) + "\n"


def save_ppm(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Write a canvas to a plain PPM file."""
    text = canvas_to_ppm(canvas, tone_map=tone_map, gamma=gamma, exposure=exposure)
    Path(filepath).write_text(text, encoding="ascii")


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Root mean squared difference between two images of the same shape.

    Raises:
        ValueError: If the shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")
    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
