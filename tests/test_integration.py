"""Integration tests for the end-to-end rendering pipeline.

This module exercises the complete path from scene construction through the
final image file: the showcase scene, YAML scenes and the command-line
example. Renders use tiny image sizes to keep the tests fast.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

SCENES_DIR = Path(__file__).resolve().parent.parent / "examples" / "scenes"


class TestShowcaseScene:
    """Integration tests for the built-in showcase scene."""

    def test_scene_contents(self) -> None:
        """Test the showcase holds every shape kind and two lights."""
        from src.whitted.geometry.shape import ShapeKind
        from src.whitted.scene.showcase import create_showcase_scene

        world, camera = create_showcase_scene(width=32, height=24)
        assert (camera.hsize, camera.vsize) == (32, 24)
        assert len(world.lights) == 2

        kinds = set()
        stack = list(world.objects)
        while stack:
            shape = stack.pop()
            kinds.add(shape.kind)
            stack.extend(shape.children)
        assert kinds == set(ShapeKind)

    def test_custom_parameters(self) -> None:
        """Test showcase parameters reach the scene."""
        from src.whitted.scene.showcase import ShowcaseParams, create_showcase_scene

        params = ShowcaseParams(glass_index=1.33, floor_reflective=0.0)
        world, _ = create_showcase_scene(width=8, height=6, params=params)
        assert world.objects[0].material.reflective == 0.0
        assert any(obj.material.refractive_index == 1.33 for obj in world.objects)

    def test_render_produces_lit_image(self) -> None:
        """Test a tiny showcase render is neither empty nor invalid."""
        from src.whitted.core.renderer import render
        from src.whitted.scene.showcase import create_showcase_scene

        world, camera = create_showcase_scene(width=16, height=12)
        image = render(camera, world)

        assert image.pixels.shape == (12, 16, 3)
        assert np.all(np.isfinite(image.pixels))
        assert image.pixels.min() >= 0.0
        assert image.pixels.mean() > 0.05


class TestYamlScenes:
    """Integration tests for scene files."""

    def test_table_scene_renders(self) -> None:
        """Test the table scene renders at a reduced size."""
        from src.whitted.camera.camera import Camera
        from src.whitted.core.renderer import render
        from src.whitted.scene.loader import load_scene_file

        world, camera = load_scene_file(SCENES_DIR / "table.yaml")
        small = Camera(12, 8, camera.field_of_view, camera.transform)
        image = render(small, world, max_depth=2)
        assert np.all(np.isfinite(image.pixels))
        assert image.pixels.any()


class TestCommandLine:
    """Integration tests for the render_scene example script."""

    def test_render_showcase_to_ppm(self, tmp_path, capsys) -> None:
        """Test the CLI renders the showcase to a PPM file."""
        from examples.render_scene import main

        output = tmp_path / "out.ppm"
        code = main(["--width", "8", "--height", "6", "--output", str(output), "--quiet"])

        assert code == 0
        lines = output.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "8 6", "255"]
        assert capsys.readouterr().out == ""

    def test_render_scene_file_to_png(self, tmp_path) -> None:
        """Test the CLI renders a YAML scene to PNG with a size override."""
        from PIL import Image

        from examples.render_scene import main

        output = tmp_path / "cover.png"
        code = main(
            [
                str(SCENES_DIR / "cover.yaml"),
                "--width",
                "10",
                "--height",
                "5",
                "--depth",
                "1",
                "--gamma",
                "2.2",
                "--output",
                str(output),
                "--quiet",
            ]
        )

        assert code == 0
        with Image.open(output) as img:
            assert img.size == (10, 5)

    def test_missing_scene_reports_error(self, tmp_path, capsys) -> None:
        """Test a missing scene file returns 1 with an error message."""
        from examples.render_scene import main

        code = main([str(tmp_path / "nope.yaml"), "--quiet"])
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_scene_without_lights_is_rejected(self, tmp_path, capsys) -> None:
        """Test rendering a scene with no lights fails cleanly."""
        from examples.render_scene import main

        scene = tmp_path / "dark.yaml"
        scene.write_text("- add: sphere\n", encoding="utf-8")
        code = main([str(scene), "--quiet", "--output", str(tmp_path / "dark.png")])
        assert code == 1
        assert "no lights" in capsys.readouterr().err

    @pytest.mark.parametrize("argv", [["--tone-map", "filmic"], ["--width", "wide"]])
    def test_bad_arguments_exit(self, argv) -> None:
        """Test argparse rejects invalid options."""
        from examples.render_scene import main

        with pytest.raises(SystemExit):
            main(argv)
