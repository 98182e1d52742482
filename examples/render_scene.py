#!/usr/bin/env python3
"""Render a YAML scene description (or the built-in showcase) to an image.

Usage:
    python -m examples.render_scene [scene.yaml] [options]

Options:
    --width WIDTH       Image width in pixels (default: from the scene, else 400)
    --height HEIGHT     Image height in pixels (default: from the scene, else 300)
    --depth DEPTH       Reflection/refraction depth budget (default: 5)
    --workers N         Worker processes (default: 1)
    --output OUTPUT     Output file path, .png or .ppm (default: render.png)
    --tone-map METHOD   none, reinhard or exposure (default: none)
    --gamma GAMMA       Gamma for encoding (default: 1.0)
    --preview           Show the result in a Matplotlib window
    --verbose           Log render progress details
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene examples/scenes/cover.yaml --workers 4
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a YAML scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "scene",
        nargs="?",
        default=None,
        help="YAML scene file (default: the built-in showcase scene)",
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels")
    parser.add_argument(
        "--depth",
        type=int,
        default=5,
        help="Reflection/refraction depth budget (default: 5)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (default: 1)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path, .png or .ppm (default: render.png)",
    )
    parser.add_argument(
        "--tone-map",
        choices=["none", "reinhard", "exposure"],
        default="none",
        help="Tone mapping method (default: none)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma for encoding (default: 1.0)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log render details",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_scene(
    scene_path: str | None = None,
    width: int | None = None,
    height: int | None = None,
    depth: int = 5,
    workers: int = 1,
    output_path: str = "render.png",
    tone_map: str = "none",
    gamma: float = 1.0,
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Load (or build) a scene, render it and save the image.

    Args:
        scene_path: YAML scene file, or None for the showcase scene.
        width: Image width override.
        height: Image height override.
        depth: Secondary-ray budget.
        workers: Worker processes.
        output_path: Output file (.png or .ppm).
        tone_map: Tone mapping method.
        gamma: Gamma for encoding.
        preview: Whether to show the image afterwards.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from src.whitted.camera.camera import Camera
    from src.whitted.config import RenderConfig
    from src.whitted.core.renderer import render
    from src.whitted.preview.export import save_png, save_ppm
    from src.whitted.scene.loader import load_scene_file
    from src.whitted.scene.showcase import create_showcase_scene

    if scene_path is None:
        if not quiet:
            print("Building showcase scene...")
        world, camera = create_showcase_scene()
    else:
        if not quiet:
            print(f"Loading scene {scene_path}...")
        world, camera = load_scene_file(scene_path)

    if camera is None:
        config = RenderConfig()
        if width is not None:
            config.width = width
        if height is not None:
            config.height = height
        camera = config.make_camera()
    elif width is not None or height is not None:
        camera = Camera(
            width if width is not None else camera.hsize,
            height if height is not None else camera.vsize,
            camera.field_of_view,
            camera.transform,
        )

    if not world.lights:
        raise ValueError("Scene has no lights")

    if not quiet:
        print(
            f"Rendering {camera.hsize}x{camera.vsize}, depth {depth}, "
            f"{workers} worker(s)..."
        )

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (done / total) * 100 if total > 0 else 0
            rows_per_sec = done / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    canvas = render(
        camera,
        world,
        max_depth=depth,
        workers=workers,
        callback=progress_callback,
    )

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".ppm":
        save_ppm(canvas, output_file, tone_map=tone_map, gamma=gamma)
    else:
        save_png(canvas, output_file, tone_map=tone_map, gamma=gamma)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if preview:
        from src.whitted.preview.display import show_preview

        show_preview(canvas, tone_map=tone_map, gamma=gamma)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        render_scene(
            scene_path=args.scene,
            width=args.width,
            height=args.height,
            depth=args.depth,
            workers=args.workers,
            output_path=args.output,
            tone_map=args.tone_map,
            gamma=args.gamma,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
