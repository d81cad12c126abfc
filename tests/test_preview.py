"""Tests for the preview module.

This module tests the preview/display and preview/export functionality including:
- Gamma correction and display clamping
- 8-bit color encoding
- Plain-text PPM output
- PNG export and PPM-to-PNG conversion
- RMSE computation

Note: Tests avoid displaying actual windows by not calling show_preview
in automated tests. The processing functions are tested directly.
"""

import numpy as np
import pytest
from PIL import Image as PILImage

from weekend_tracer.core.color import RGBColor


class TestGamma:
    """Test gamma correction."""

    def test_gamma_two_is_square_root(self):
        """Test that the default gamma takes the square root."""
        from weekend_tracer.preview.display import apply_gamma

        image = np.full((2, 2, 3), 0.25)
        assert np.allclose(apply_gamma(image), 0.5)

    def test_gamma_one_is_identity(self):
        """Test that gamma 1 leaves the image unchanged."""
        from weekend_tracer.preview.display import apply_gamma

        image = np.linspace(0.0, 1.0, 12).reshape(2, 2, 3)
        assert np.allclose(apply_gamma(image, gamma=1.0), image)

    def test_other_gamma(self):
        """Test a general gamma exponent."""
        from weekend_tracer.preview.display import apply_gamma

        image = np.full((1, 1, 3), 0.5)
        assert np.allclose(apply_gamma(image, gamma=2.2), 0.5 ** (1.0 / 2.2))

    def test_negative_clamped(self):
        """Test that negative inputs become zero instead of NaN."""
        from weekend_tracer.preview.display import apply_gamma

        image = np.full((2, 2, 3), -1.0)
        result = apply_gamma(image)
        assert not np.any(np.isnan(result))
        assert np.all(result == 0.0)

    def test_nan_becomes_zero(self):
        """Test that NaN inputs are set to zero before the power."""
        from weekend_tracer.preview.display import apply_gamma

        image = np.array([[[np.nan, 0.25, 4.0]]])
        assert np.allclose(apply_gamma(image), [[[0.0, 0.5, 2.0]]])

    def test_display_clamp(self):
        """Test that processed values stay in [0, 0.999]."""
        from weekend_tracer.preview.display import MAX_DISPLAY_VALUE, process_image_for_display

        image = np.array([[[4.0, 0.0, -2.0]]])
        result = process_image_for_display(image)
        assert result.max() == MAX_DISPLAY_VALUE == 0.999
        assert result.min() == 0.0


class TestEncodeColor:
    """Test per-pixel 8-bit encoding."""

    def test_single_sample(self):
        """Test encoding a single-sample color."""
        from weekend_tracer.preview.export import encode_color

        assert encode_color(RGBColor(0.25, 1.0, 0.0), 1) == (128, 255, 0)

    def test_divides_by_sample_count(self):
        """Test that the sum is averaged before encoding."""
        from weekend_tracer.preview.export import encode_color

        assert encode_color(RGBColor(1.0, 4.0, 0.0), 4) == (128, 255, 0)

    def test_out_of_range_clamped(self):
        """Test that bright and negative channels are clamped."""
        from weekend_tracer.preview.export import encode_color

        assert encode_color(RGBColor(50.0, -3.0, 0.0), 1) == (255, 0, 0)

    def test_white_is_255(self):
        """Test that pure white encodes to 255 (0.999 * 256 = 255.744)."""
        from weekend_tracer.preview.export import encode_color

        assert encode_color(RGBColor(1.0, 1.0, 1.0), 1) == (255, 255, 255)

    def test_nan_channel_is_zero(self):
        """Test that a NaN channel encodes as 0 instead of raising."""
        from weekend_tracer.preview.export import encode_color

        assert encode_color(RGBColor(float("nan"), 0.25, 1.0), 1) == (0, 128, 255)

    def test_nan_agrees_with_image_to_uint8(self):
        """Test that both encoders map NaN to the same value."""
        from weekend_tracer.preview.export import encode_color, image_to_uint8

        image = np.array([[[np.nan, 0.25, 1.0], [0.0, np.nan, np.nan]]])
        encoded = image_to_uint8(image)

        assert tuple(int(c) for c in encoded[0, 0]) == encode_color(RGBColor(*image[0, 0]), 1)
        assert tuple(int(c) for c in encoded[0, 1]) == encode_color(RGBColor(*image[0, 1]), 1)
        assert tuple(int(c) for c in encoded[0, 1]) == (0, 0, 0)

    def test_image_to_uint8_matches_encode_color(self, rng):
        """Test the vectorized encoder against the per-pixel one."""
        from weekend_tracer.preview.export import encode_color, image_to_uint8

        image = rng.uniform(-0.2, 1.5, size=(4, 5, 3))
        encoded = image_to_uint8(image)

        assert encoded.dtype == np.uint8
        for row in range(4):
            for col in range(5):
                expected = encode_color(RGBColor(*image[row, col]), 1)
                assert tuple(int(c) for c in encoded[row, col]) == expected


class TestPPM:
    """Test plain-text PPM output."""

    def test_header_and_pixel_lines(self, small_image_uint8):
        """Test the P3 header followed by one triple per pixel."""
        from weekend_tracer.preview.export import iter_ppm_lines

        lines = list(iter_ppm_lines(small_image_uint8))

        assert lines[:3] == ["P3", "3 2", "255"]
        assert lines[3:] == [
            "255 0 0",
            "0 255 0",
            "0 0 255",
            "10 20 30",
            "128 128 128",
            "0 0 0",
        ]

    def test_rejects_bad_shape(self):
        """Test that a non-RGB array is rejected."""
        from weekend_tracer.preview.export import iter_ppm_lines

        with pytest.raises(ValueError, match="shape"):
            list(iter_ppm_lines(np.zeros((2, 2), dtype=np.uint8)))

    def test_write_ppm(self, small_image_uint8, tmp_path):
        """Test writing a PPM file to disk."""
        from weekend_tracer.preview.export import write_ppm

        path = write_ppm(tmp_path / "image.ppm", small_image_uint8)

        assert path == tmp_path / "image.ppm"
        text = path.read_text(encoding="ascii")
        assert text.startswith("P3\n3 2\n255\n255 0 0\n")
        assert text.endswith("0 0 0\n")
        assert len(text.splitlines()) == 3 + 6

    def test_write_ppm_accepts_str_path(self, small_image_uint8, tmp_path):
        """Test that a plain string path works."""
        from weekend_tracer.preview.export import write_ppm

        path = write_ppm(str(tmp_path / "image.ppm"), small_image_uint8)
        assert path.exists()


class TestPNG:
    """Test PNG export and conversion."""

    def test_save_png(self, small_image_uint8, tmp_path):
        """Test that save_png writes a readable PNG with the same pixels."""
        from weekend_tracer.preview.export import save_png

        filepath = tmp_path / "test.png"
        save_png(small_image_uint8, filepath)

        with PILImage.open(filepath) as img:
            assert img.size == (3, 2)
            assert np.array_equal(np.asarray(img.convert("RGB")), small_image_uint8)

    def test_save_png_rejects_bad_shape(self, tmp_path):
        """Test that save_png validates the array shape."""
        from weekend_tracer.preview.export import save_png

        with pytest.raises(ValueError):
            save_png(np.zeros((2, 2, 4), dtype=np.uint8), tmp_path / "bad.png")

    def test_convert_to_png(self, small_image_uint8, tmp_path):
        """Test PPM-to-PNG conversion removes the PPM on success."""
        from weekend_tracer.preview.export import convert_to_png, write_ppm

        ppm_path = write_ppm(tmp_path / "image.ppm", small_image_uint8)
        png_path = convert_to_png(ppm_path)

        assert png_path == tmp_path / "image.png"
        assert png_path.exists()
        assert not ppm_path.exists()
        with PILImage.open(png_path) as img:
            assert np.array_equal(np.asarray(img.convert("RGB")), small_image_uint8)

    def test_convert_keep_source(self, small_image_uint8, tmp_path):
        """Test that remove_source=False keeps the PPM."""
        from weekend_tracer.preview.export import convert_to_png, write_ppm

        ppm_path = write_ppm(tmp_path / "image.ppm", small_image_uint8)
        png_path = convert_to_png(ppm_path, tmp_path / "other.png", remove_source=False)

        assert png_path == tmp_path / "other.png"
        assert png_path.exists()
        assert ppm_path.exists()

    def test_convert_failure_keeps_ppm(self, tmp_path):
        """Test that a failed conversion raises and leaves the source in place."""
        from weekend_tracer.preview.export import convert_to_png

        ppm_path = tmp_path / "broken.ppm"
        ppm_path.write_text("this is not an image\n", encoding="ascii")

        with pytest.raises(RuntimeError, match="conversion failed"):
            convert_to_png(ppm_path)

        assert ppm_path.exists()
        assert not (tmp_path / "broken.png").exists()

    def test_convert_missing_file(self, tmp_path):
        """Test that a missing PPM raises RuntimeError."""
        from weekend_tracer.preview.export import convert_to_png

        with pytest.raises(RuntimeError):
            convert_to_png(tmp_path / "missing.ppm")


class TestComputeRMSE:
    """Test RMSE computation."""

    def test_identical_images(self):
        """Test that identical images have zero RMSE."""
        from weekend_tracer.preview.export import compute_rmse

        image = np.random.default_rng(0).random((10, 10, 3))
        assert compute_rmse(image, image) == 0.0

    def test_constant_offset(self):
        """Test RMSE of a constant offset."""
        from weekend_tracer.preview.export import compute_rmse

        a = np.zeros((4, 4, 3))
        b = np.full((4, 4, 3), 0.5)
        assert compute_rmse(a, b) == pytest.approx(0.5)

    def test_shape_mismatch(self):
        """Test that mismatched shapes raise ValueError."""
        from weekend_tracer.preview.export import compute_rmse

        with pytest.raises(ValueError, match="shapes must match"):
            compute_rmse(np.zeros((2, 2, 3)), np.zeros((3, 2, 3)))
