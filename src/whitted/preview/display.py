"""Display pipeline and Matplotlib preview for rendered canvases.

Shading produces linear colors that may exceed 1.0 where several lights or
specular highlights add up. Before display or export a canvas passes through:

1. Tone mapping (optional): "reinhard" c / (1 + c), or "exposure"
   1 - exp(-c * exposure)
2. Gamma encoding c ** (1 / gamma); gamma 1.0 leaves values as they are
3. Clamping to [0, 1]

The default (no tone map, gamma 1.0) simply clamps, matching how the classic
tracer writes its images.

Example:
    >>> from src.whitted.preview.display import show_preview
    >>> show_preview(canvas, tone_map="reinhard", gamma=2.2)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from src.whitted.core.canvas import Canvas


# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure"]

TONE_MAP_METHODS: tuple[str, ...] = ("none", "reinhard", "exposure")


def tone_map_reinhard(image: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Compress linear values with the global Reinhard operator c / (1 + c).

    Negative inputs are treated as zero.
    """
    image = np.maximum(image, 0.0)
    return image / (1.0 + image)


def tone_map_exposure(
    image: npt.NDArray[np.float64], exposure: float = 1.0
) -> npt.NDArray[np.float64]:
    """Map linear values through 1 - exp(-c * exposure).

    Args:
        image: Linear image of shape (H, W, 3).
        exposure: Brightness control; must be positive.

    Returns:
        Tone mapped image in [0, 1).

    Raises:
        ValueError: If ``exposure`` is not positive.
    """
    if exposure <= 0.0:
        raise ValueError(f"Exposure must be positive, got {exposure}")
    image = np.maximum(image, 0.0)
    return 1.0 - np.exp(-image * exposure)


def apply_gamma(image: npt.NDArray[np.float64], gamma: float = 2.2) -> npt.NDArray[np.float64]:
    """Gamma-encode an image, clamping to [0, 1] first.

    Raises:
        ValueError: If ``gamma`` is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image
    return np.power(np.clip(image, 0.0, 1.0), 1.0 / gamma)


def prepare_for_display(
    image: npt.NDArray[np.float64],
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.float64]:
    """Run the full display pipeline on a linear image.

    Args:
        image: Linear image of shape (H, W, 3).
        tone_map: "none", "reinhard" or "exposure".
        gamma: Gamma for encoding (1.0 for none, 2.2 for sRGB-like output).
        exposure: Exposure for the "exposure" tone map.

    Returns:
        A new image with values in [0, 1].

    Raises:
        ValueError: For an unknown tone map or invalid gamma/exposure.
    """
    result = np.array(image, dtype=np.float64)

    if tone_map == "reinhard":
        result = tone_map_reinhard(result)
    elif tone_map == "exposure":
        result = tone_map_exposure(result, exposure)
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0)


def show_preview(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Show a rendered canvas in a Matplotlib window.

    Args:
        canvas: The rendered canvas.
        tone_map: Tone mapping method.
        gamma: Gamma for encoding.
        exposure: Exposure for the "exposure" tone map.
        title: Window title (defaults to the image size).
        figsize: Figure size in inches.
        block: Whether to block until the window is closed.
    """
    import matplotlib.pyplot as plt

    image = prepare_for_display(canvas.pixels, tone_map=tone_map, gamma=gamma, exposure=exposure)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(image, interpolation="nearest")
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render {canvas.width}x{canvas.height}")

    plt.tight_layout()
    plt.show(block=block)
