"""Unit tests for the display pipeline and image export.

Tests cover:
- Tone mapping and gamma encoding
- 8-bit quantization
- Plain PPM layout, line wrapping and trailing newline
- PNG output through Pillow
"""

import numpy as np
import pytest


class TestDisplayPipeline:
    """Tests for tone mapping and gamma."""

    def test_default_pipeline_clamps(self):
        """Test the default pipeline only clamps to [0, 1]."""
        from src.whitted.preview.display import prepare_for_display

        image = np.array([[[-0.5, 0.25, 1.5]]])
        np.testing.assert_allclose(prepare_for_display(image), [[[0.0, 0.25, 1.0]]])

    def test_input_not_modified(self):
        """Test the pipeline returns a new array."""
        from src.whitted.preview.display import prepare_for_display

        image = np.full((2, 2, 3), 2.0)
        prepare_for_display(image, tone_map="reinhard", gamma=2.2)
        assert np.all(image == 2.0)

    def test_reinhard(self):
        """Test Reinhard maps 1 to 0.5 and negatives to 0."""
        from src.whitted.preview.display import tone_map_reinhard

        result = tone_map_reinhard(np.array([1.0, 3.0, -2.0]))
        np.testing.assert_allclose(result, [0.5, 0.75, 0.0])

    def test_exposure(self):
        """Test exposure mapping of zero and large values."""
        from src.whitted.preview.display import tone_map_exposure

        result = tone_map_exposure(np.array([0.0, 50.0]), exposure=1.0)
        np.testing.assert_allclose(result, [0.0, 1.0])

    def test_exposure_must_be_positive(self):
        """Test a non-positive exposure raises ValueError."""
        from src.whitted.preview.display import tone_map_exposure

        with pytest.raises(ValueError):
            tone_map_exposure(np.zeros(3), exposure=0.0)

    def test_gamma(self):
        """Test gamma encoding brightens midtones."""
        from src.whitted.preview.display import apply_gamma

        result = apply_gamma(np.array([0.25]), gamma=2.2)
        np.testing.assert_allclose(result, [0.25 ** (1 / 2.2)])

    def test_gamma_one_is_identity(self):
        """Test gamma 1.0 leaves values unchanged."""
        from src.whitted.preview.display import apply_gamma

        image = np.array([0.1, 0.5, 0.9])
        np.testing.assert_array_equal(apply_gamma(image, 1.0), image)

    def test_gamma_must_be_positive(self):
        """Test a non-positive gamma raises ValueError."""
        from src.whitted.preview.display import apply_gamma

        with pytest.raises(ValueError):
            apply_gamma(np.zeros(3), gamma=-1.0)

    def test_unknown_tone_map(self):
        """Test an unknown tone map name raises ValueError."""
        from src.whitted.preview.display import prepare_for_display

        with pytest.raises(ValueError, match="filmic"):
            prepare_for_display(np.zeros((1, 1, 3)), tone_map="filmic")


class TestExport:
    """Tests for PPM and PNG output."""

    def _canvas(self):
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import color

        c = Canvas(5, 3)
        c.set(0, 0, color(1.5, 0, 0))
        c.set(2, 1, color(0, 0.5, 0))
        c.set(4, 2, color(-0.5, 0, 1))
        return c

    def test_quantization(self):
        """Test channels are clamped and rounded to 8 bits."""
        from src.whitted.preview.export import canvas_to_uint8

        pixels = canvas_to_uint8(self._canvas())
        assert pixels.dtype == np.uint8
        assert pixels.shape == (3, 5, 3)
        assert tuple(pixels[0, 0]) == (255, 0, 0)
        assert tuple(pixels[1, 2]) == (0, 128, 0)
        assert tuple(pixels[2, 4]) == (0, 0, 255)

    def test_ppm_header(self):
        """Test the PPM header lines."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.preview.export import canvas_to_ppm

        lines = canvas_to_ppm(Canvas(5, 3)).splitlines()
        assert lines[:3] == ["P3", "5 3", "255"]

    def test_ppm_pixel_data(self):
        """Test one line of values per image row."""
        from src.whitted.preview.export import canvas_to_ppm

        lines = canvas_to_ppm(self._canvas()).splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_ppm_long_lines_wrap(self):
        """Test rows longer than 70 characters are split."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.preview.export import PPM_LINE_LIMIT, canvas_to_ppm

        c = Canvas(10, 2)
        c.pixels[:] = (1.0, 0.8, 0.6)
        lines = canvas_to_ppm(c).splitlines()
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]
        assert all(len(line) <= PPM_LINE_LIMIT for line in lines)

    def test_ppm_ends_with_newline(self):
        """Test the document is newline terminated."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.preview.export import canvas_to_ppm

        assert canvas_to_ppm(Canvas(5, 3)).endswith("\n")

    def test_save_ppm(self, tmp_path):
        """Test writing a PPM file."""
        from src.whitted.preview.export import canvas_to_ppm, save_ppm

        path = tmp_path / "image.ppm"
        save_ppm(self._canvas(), path)
        assert path.read_text(encoding="ascii") == canvas_to_ppm(self._canvas())

    def test_save_png(self, tmp_path):
        """Test writing a PNG file readable by Pillow."""
        from PIL import Image

        from src.whitted.preview.export import save_png

        path = tmp_path / "image.png"
        save_png(self._canvas(), path)

        with Image.open(path) as img:
            assert img.size == (5, 3)
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (255, 0, 0)
            assert img.getpixel((2, 1)) == (0, 128, 0)

    def test_rmse(self):
        """Test the RMSE of identical and different images."""
        from src.whitted.preview.export import compute_rmse

        a = np.zeros((2, 2, 3))
        b = np.ones((2, 2, 3))
        assert compute_rmse(a, a) == 0.0
        assert compute_rmse(a, b) == pytest.approx(1.0)
        with pytest.raises(ValueError):
            compute_rmse(a, np.zeros((2, 3, 3)))
