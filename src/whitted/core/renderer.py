"""Per-pixel render driver with row-band parallelism.

Every pixel is independent: its color depends only on the read-only camera
and world. The image is cut into disjoint bands of whole rows; each band is
rendered into its own array and copied into the canvas by the caller's
process. No two bands share a row, so no locking is needed and the result
does not depend on the number of workers or on completion order.

With ``workers=1`` bands are rendered in-process. Otherwise a
``ProcessPoolExecutor`` is started once per render; its initializer hands
each worker process its own copy of the camera and world.

Example:
    >>> import math
    >>> from src.whitted.camera.camera import Camera
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.scene.world import default_world
    >>> camera = Camera(32, 24, math.pi / 3)
    >>> canvas = render(camera, default_world(), workers=2)
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed

import numpy as np
import numpy.typing as npt

from src.whitted.camera.camera import Camera, ray_for_pixel
from src.whitted.core.canvas import Canvas
from src.whitted.core.integrator import MAX_DEPTH, color_at
from src.whitted.core.tuples import EPSILON
from src.whitted.scene.world import World

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Bands per worker; more bands smooth out uneven per-row cost
BANDS_PER_WORKER = 4


def render_rows(
    camera: Camera,
    world: World,
    start: int,
    stop: int,
    max_depth: int = MAX_DEPTH,
    epsilon: float = EPSILON,
) -> npt.NDArray[np.float64]:
    """Render rows ``start`` (inclusive) to ``stop`` (exclusive).

    Returns:
        Array of shape (stop - start, camera.hsize, 3).
    """
    band = np.zeros((stop - start, camera.hsize, 3), dtype=np.float64)
    for row, py in enumerate(range(start, stop)):
        for px in range(camera.hsize):
            ray = ray_for_pixel(camera, px, py)
            band[row, px] = color_at(world, ray, max_depth, epsilon)
    return band


def split_rows(height: int, band_count: int) -> list[tuple[int, int]]:
    """Partition ``range(height)`` into at most ``band_count`` contiguous bands.

    Bands differ in size by at most one row and together cover every row
    exactly once.
    """
    band_count = max(1, min(band_count, height))
    base, extra = divmod(height, band_count)
    bands = []
    start = 0
    for i in range(band_count):
        stop = start + base + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


# =============================================================================
# Worker Process State
# =============================================================================

_worker_scene: dict = {}


def _init_worker(camera: Camera, world: World, max_depth: int, epsilon: float) -> None:
    _worker_scene.update(camera=camera, world=world, max_depth=max_depth, epsilon=epsilon)


def _render_band(start: int, stop: int) -> tuple[int, npt.NDArray[np.float64]]:
    band = render_rows(
        _worker_scene["camera"],
        _worker_scene["world"],
        start,
        stop,
        _worker_scene["max_depth"],
        _worker_scene["epsilon"],
    )
    return start, band


# =============================================================================
# Render Entry Point
# =============================================================================


def render(
    camera: Camera,
    world: World,
    *,
    max_depth: int = MAX_DEPTH,
    epsilon: float = EPSILON,
    workers: int | None = 1,
    callback: ProgressCallback | None = None,
) -> Canvas:
    """Render the world as seen by the camera.

    Args:
        camera: The camera (defines image size and view).
        world: The scene. Must not be modified while rendering.
        max_depth: Secondary-ray budget for every primary ray.
        epsilon: Surface offset for shadow and secondary rays.
        workers: Number of worker processes. 1 renders in-process; None uses
            ``os.cpu_count()``.
        callback: Optional progress callback, called after every finished
            band with (rows_done, total_rows).

    Returns:
        A canvas of camera.hsize x camera.vsize.

    Raises:
        ValueError: If ``workers`` or ``max_depth`` is invalid.

    Example:
        >>> def progress(done, total):
        ...     print(f"Progress: {done}/{total} rows")
        >>> canvas = render(camera, world, workers=4, callback=progress)
    """
    if workers is None:
        workers = os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")

    canvas = Canvas(camera.hsize, camera.vsize)
    total = camera.vsize
    bands = split_rows(total, workers * BANDS_PER_WORKER if workers > 1 else total)

    logger.info(
        "Rendering %dx%d with %d worker(s), %d band(s), max depth %d",
        camera.hsize,
        camera.vsize,
        workers,
        len(bands),
        max_depth,
    )
    start_time = time.perf_counter()
    rows_done = 0

    if workers == 1:
        for start, stop in bands:
            canvas.write_rows(start, render_rows(camera, world, start, stop, max_depth, epsilon))
            rows_done += stop - start
            if callback is not None:
                callback(rows_done, total)
    else:
        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_worker,
            initargs=(camera, world, max_depth, epsilon),
        ) as executor:
            futures = []
            for start, stop in bands:
                logger.debug("Scheduling rows %d..%d", start, stop)
                futures.append(executor.submit(_render_band, start, stop))

            for future in as_completed(futures):
                start, band = future.result()
                canvas.write_rows(start, band)
                rows_done += band.shape[0]
                if callback is not None:
                    callback(rows_done, total)

    elapsed = time.perf_counter() - start_time
    logger.info(
        "Rendered %d pixels in %.2fs (%.0f px/s)",
        camera.hsize * camera.vsize,
        elapsed,
        camera.hsize * camera.vsize / max(elapsed, 1e-9),
    )
    return canvas

