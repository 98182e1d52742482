"""Preview module for output and visualization.

Components:
    display: Tone mapping, gamma encoding and Matplotlib preview
    export: PNG (Pillow) and plain PPM encoders

Example:
    >>> from src.whitted.preview import save_png, show_preview
    >>> save_png(canvas, "render.png")
    >>> show_preview(canvas, tone_map="reinhard", gamma=2.2)
"""

from src.whitted.preview.display import (
    TONE_MAP_METHODS,
    ToneMapMethod,
    apply_gamma,
    prepare_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from src.whitted.preview.export import (
    canvas_to_ppm,
    canvas_to_uint8,
    compute_rmse,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "prepare_for_display",
    "ToneMapMethod",
    "TONE_MAP_METHODS",
    # Export functions
    "canvas_to_uint8",
    "canvas_to_ppm",
    "save_png",
    "save_ppm",
    "compute_rmse",
]
