"""Tests for the scanline renderer.

Tests cover:
- RenderSettings validation and aspect-ratio sizing
- Buffer shapes and row order
- Progress reporting (callback and generator)
- Reproducibility with a fixed seed
- Known images for the debug shading modes
"""

import numpy as np
import pytest

from weekend_tracer.core.renderer import Renderer, RenderSettings


@pytest.fixture
def tiny_settings():
    """Small, fast, seeded render settings."""
    return RenderSettings(width=8, height=5, samples_per_pixel=2, max_depth=5, seed=123)


class TestRenderSettings:
    """Tests for render configuration."""

    def test_defaults(self):
        """Test the default settings."""
        settings = RenderSettings()
        assert (settings.width, settings.height) == (400, 225)
        assert settings.samples_per_pixel == 100
        assert settings.max_depth == 50
        assert settings.sampling_method == "inverse_cdf"
        assert settings.shading == "diffuse"
        assert settings.seed is None

    def test_from_aspect_ratio(self):
        """Test that height is derived by truncating width / aspect_ratio."""
        settings = RenderSettings.from_aspect_ratio(400, 16.0 / 9.0)
        assert settings.height == 225

        settings = RenderSettings.from_aspect_ratio(100, 3.0, samples_per_pixel=4)
        assert settings.height == 33
        assert settings.samples_per_pixel == 4

    def test_from_aspect_ratio_rejects_non_positive(self):
        """Test that a non-positive aspect ratio is rejected."""
        with pytest.raises(ValueError, match="aspect_ratio"):
            RenderSettings.from_aspect_ratio(100, 0.0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 1},
            {"height": 0},
            {"samples_per_pixel": 0},
            {"max_depth": -1},
            {"shading": "phong"},
            {"sampling_method": "stratified"},
        ],
    )
    def test_invalid_settings(self, kwargs):
        """Test that invalid settings raise ValueError."""
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)

    def test_frozen(self):
        """Test that settings cannot be reassigned."""
        from dataclasses import FrozenInstanceError

        settings = RenderSettings()
        with pytest.raises(FrozenInstanceError):
            settings.width = 10


class TestRenderer:
    """Tests for the render loop."""

    def test_initial_state(self, ground_scene, tiny_settings):
        """Test a fresh renderer has an empty buffer."""
        scene, camera = ground_scene
        renderer = Renderer(scene, camera, tiny_settings)

        assert renderer.rows_done == 0
        assert not renderer.is_complete
        assert renderer.get_color_sum().shape == (5, 8, 3)
        assert np.all(renderer.get_color_sum() == 0.0)

    def test_render_returns_averaged_image(self, ground_scene, tiny_settings):
        """Test that render returns the color sums divided by the sample count."""
        scene, camera = ground_scene
        renderer = Renderer(scene, camera, tiny_settings)

        image = renderer.render()

        assert image.shape == (5, 8, 3)
        assert renderer.is_complete
        assert np.allclose(image, renderer.get_color_sum() / 2)
        assert np.all(image >= 0.0)
        assert np.all(image <= 1.0 + 1e-12)

    def test_callback_called_per_row(self, ground_scene, tiny_settings):
        """Test that the progress callback sees every row."""
        scene, camera = ground_scene
        renderer = Renderer(scene, camera, tiny_settings)
        calls = []

        renderer.render(callback=lambda done, total: calls.append((done, total)))

        assert calls == [(1, 5), (2, 5), (3, 5), (4, 5), (5, 5)]

    def test_render_progressive(self, ground_scene, tiny_settings):
        """Test the generator-based render loop."""
        scene, camera = ground_scene
        renderer = Renderer(scene, camera, tiny_settings)

        progress = list(renderer.render_progressive())

        assert progress[-1] == (5, 5)
        assert len(progress) == 5
        assert renderer.is_complete

    def test_same_seed_same_image(self, ground_scene, tiny_settings):
        """Test that a fixed seed reproduces the image exactly."""
        scene, camera = ground_scene
        a = Renderer(scene, camera, tiny_settings).render()
        b = Renderer(scene, camera, tiny_settings).render()
        assert np.array_equal(a, b)

    def test_reset_restarts_stream(self, ground_scene, tiny_settings):
        """Test that reset clears progress and reproduces the same image."""
        scene, camera = ground_scene
        renderer = Renderer(scene, camera, tiny_settings)
        first = renderer.render()

        renderer.reset()
        assert renderer.rows_done == 0
        assert np.all(renderer.get_color_sum() == 0.0)

        second = renderer.render()
        assert np.array_equal(first, second)

    def test_top_row_is_sky(self, ground_scene):
        """Test that the top row sees only the blue sky gradient."""
        scene, camera = ground_scene
        settings = RenderSettings(width=16, height=9, samples_per_pixel=4, seed=1)
        renderer = Renderer(scene, camera, settings)
        renderer.render()

        top_row = renderer.get_image_uint8()[0]
        assert np.all(top_row[:, 2] == 255)
        assert np.all(top_row[:, 0] < top_row[:, 2])

    def test_flat_shading_image(self, single_sphere_scene):
        """Test that the center pixel of a flat render is pure red."""
        scene, camera = single_sphere_scene
        settings = RenderSettings(width=17, height=9, samples_per_pixel=1, shading="flat", seed=0)
        renderer = Renderer(scene, camera, settings)
        image = renderer.render()

        assert tuple(image[4, 8]) == (1.0, 0.0, 0.0)

    def test_gradient_top_bluer_than_bottom(self, single_sphere_scene):
        """Test that the top row is bluer than the bottom row in gradient mode."""
        scene, camera = single_sphere_scene
        settings = RenderSettings(
            width=4, height=6, samples_per_pixel=1, shading="gradient", seed=0
        )
        image = Renderer(scene, camera, settings).render()

        # Row 0 looks upward, the last row looks downward
        assert image[0, :, 0].max() < image[-1, :, 0].min()
        assert np.all(image[:, :, 2] > 0.999)

    def test_iter_pixels(self, ground_scene, tiny_settings):
        """Test pixel iteration in row-major order."""
        scene, camera = ground_scene
        renderer = Renderer(scene, camera, tiny_settings)
        renderer.render()

        pixels = list(renderer.iter_pixels())
        image = renderer.get_image_uint8()

        assert len(pixels) == 40
        assert pixels[0] == tuple(int(c) for c in image[0, 0])
        assert pixels[-1] == tuple(int(c) for c in image[-1, -1])
        assert all(0 <= c <= 255 for pixel in pixels for c in pixel)

    def test_render_pixel_sums_samples(self, single_sphere_scene):
        """Test that render_pixel returns the unnormalized sample sum."""
        scene, camera = single_sphere_scene
        settings = RenderSettings(
            width=17, height=9, samples_per_pixel=3, shading="flat", seed=0
        )
        renderer = Renderer(scene, camera, settings)

        assert renderer.render_pixel(8, 4).to_tuple() == (3.0, 0.0, 0.0)

    def test_repr(self, ground_scene, tiny_settings):
        """Test the string representation."""
        scene, camera = ground_scene
        renderer = Renderer(scene, camera, tiny_settings)
        assert repr(renderer) == "Renderer(width=8, height=5, spp=2, rows_done=0)"
