"""Unit tests for render configuration."""

import math

import numpy as np
import pytest


class TestRenderConfig:
    """Tests for RenderConfig."""

    def test_defaults_are_valid(self):
        """Test the default configuration validates."""
        from src.whitted.config import RenderConfig

        config = RenderConfig()
        config.validate()
        assert config.max_depth == 5
        assert config.workers == 1

    @pytest.mark.parametrize(
        "changes",
        [
            {"width": 0},
            {"height": -1},
            {"field_of_view": 0.0},
            {"field_of_view": math.pi},
            {"max_depth": -1},
            {"epsilon": 0.0},
            {"workers": 0},
            {"up": (0.0, 1.0)},
            {"from_point": (0.0, 1.0, 0.0), "to_point": (0.0, 1.0, 0.0)},
        ],
    )
    def test_invalid_values(self, changes):
        """Test out-of-range fields raise ValueError."""
        from src.whitted.config import RenderConfig

        with pytest.raises(ValueError):
            RenderConfig(**changes).validate()

    def test_make_camera(self):
        """Test the camera uses the configured size and view."""
        from src.whitted.config import RenderConfig
        from src.whitted.core.matrix import view_transform
        from src.whitted.core.tuples import point, vector

        config = RenderConfig(width=32, height=24, from_point=(0, 0, -5), to_point=(0, 0, 0))
        camera = config.make_camera()
        assert (camera.hsize, camera.vsize) == (32, 24)
        np.testing.assert_allclose(
            camera.transform,
            view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0)),
        )

    def test_dict_round_trip(self):
        """Test exporting and re-importing keeps every field."""
        from src.whitted.config import RenderConfig

        config = RenderConfig(width=64, workers=3, from_point=(1.0, 2.0, 3.0))
        data = config.to_dict()
        assert data["from_point"] == [1.0, 2.0, 3.0]
        assert RenderConfig.from_dict(data) == config

    def test_from_dict_partial(self):
        """Test missing keys keep their defaults."""
        from src.whitted.config import RenderConfig

        config = RenderConfig.from_dict({"width": 80, "up": [0, 0, 1]})
        assert config.width == 80
        assert config.height == RenderConfig().height
        assert config.up == (0.0, 0.0, 1.0)

    def test_from_dict_unknown_key(self):
        """Test unknown keys raise ValueError."""
        from src.whitted.config import RenderConfig

        with pytest.raises(ValueError, match="resolution"):
            RenderConfig.from_dict({"resolution": 100})
