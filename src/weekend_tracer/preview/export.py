"""Image export utilities for rendered images.

This module turns accumulated colors into 8-bit pixels and writes them out.

Supported formats:
    - PPM (plain-text P3, one "r g b" triple per line)
    - PNG (8-bit via Pillow, directly or converted from a written PPM)

Encoding follows a fixed pipeline per channel: divide the sample sum by the
sample count, take the square root (gamma 2), clamp to [0, 0.999] and scale
by 256.

Example:
    >>> from weekend_tracer.preview.export import convert_to_png, write_ppm
    >>> image_uint8 = renderer.get_image_uint8()
    >>> ppm_path = write_ppm("spheres.ppm", image_uint8)
    >>> png_path = convert_to_png(ppm_path)  # Removes spheres.ppm on success
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Iterator
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from weekend_tracer.core.color import RGBColor
from weekend_tracer.preview.display import MAX_DISPLAY_VALUE, process_image_for_display

logger = logging.getLogger(__name__)

# Scale from [0, 0.999] to integer channel values 0..255
CHANNEL_SCALE = 256

# Largest channel value written to the PPM header
PPM_MAX_VALUE = 255


def _clamp(x: float, low: float, high: float) -> float:
    return low if x < low else high if x > high else x


def encode_color(color_sum: RGBColor, samples_per_pixel: int) -> tuple[int, int, int]:
    """Encode an accumulated pixel color as an 8-bit triple.

    Args:
        color_sum: Sum of samples_per_pixel linear sample colors.
        samples_per_pixel: Number of samples in the sum.

    Returns:
        (r, g, b) integers in [0, 255]. A NaN channel encodes as 0, matching
        image_to_uint8().
    """
    scale = 1.0 / samples_per_pixel
    channels = []
    for value in color_sum.to_tuple():
        if math.isnan(value):
            value = 0.0
        corrected = math.sqrt(max(scale * value, 0.0))
        channels.append(int(CHANNEL_SCALE * _clamp(corrected, 0.0, MAX_DISPLAY_VALUE)))
    return (channels[0], channels[1], channels[2])


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert an averaged linear image to uint8 for display/export.

    Vectorized equivalent of encode_color() applied to every pixel.

    Args:
        image: Averaged linear image array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(image)
    return (processed * CHANNEL_SCALE).astype(np.uint8)


# =============================================================================
# PPM Output
# =============================================================================


def iter_ppm_lines(image_uint8: npt.NDArray[np.uint8]) -> Iterator[str]:
    """Generate the lines of a plain-text PPM file.

    Args:
        image_uint8: 8-bit image array of shape (H, W, 3), top row first.

    Yields:
        "P3", "<width> <height>", "255", then one "r g b" line per pixel in
        row-major order. Lines carry no trailing newline.

    Raises:
        ValueError: If the array is not of shape (H, W, 3).
    """
    if image_uint8.ndim != 3 or image_uint8.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image_uint8.shape}")

    height, width = image_uint8.shape[:2]
    yield "P3"
    yield f"{width} {height}"
    yield str(PPM_MAX_VALUE)
    for row in image_uint8:
        for r, g, b in row:
            yield f"{r} {g} {b}"


def write_ppm(filepath: str | os.PathLike[str], image_uint8: npt.NDArray[np.uint8]) -> Path:
    """Write an 8-bit image as a plain-text PPM file.

    Args:
        filepath: Output file path (should end in .ppm).
        image_uint8: 8-bit image array of shape (H, W, 3), top row first.

    Returns:
        The path written.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(filepath)
    with path.open("w", encoding="ascii") as ppm_file:
        for line in iter_ppm_lines(image_uint8):
            ppm_file.write(line)
            ppm_file.write("\n")
    logger.info("Wrote %s", path)
    return path


# =============================================================================
# PNG Output
# =============================================================================


def save_png(image_uint8: npt.NDArray[np.uint8], filepath: str | os.PathLike[str]) -> None:
    """Save an 8-bit image as a PNG file using Pillow.

    Args:
        image_uint8: 8-bit image array of shape (H, W, 3), top row first.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the array is not of shape (H, W, 3).
    """
    if image_uint8.ndim != 3 or image_uint8.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image_uint8.shape}")

    pil_image = PILImage.fromarray(np.ascontiguousarray(image_uint8, dtype=np.uint8))
    pil_image.save(filepath)
    logger.info("Wrote %s", filepath)


def convert_to_png(
    ppm_path: str | os.PathLike[str],
    png_path: str | os.PathLike[str] | None = None,
    *,
    remove_source: bool = True,
) -> Path:
    """Convert a written PPM file to PNG.

    The PPM is removed only after the PNG has been written, so a failed
    conversion never loses the rendered image.

    Args:
        ppm_path: The PPM file to convert.
        png_path: Output path. Defaults to ppm_path with a .png suffix.
        remove_source: Delete the PPM after a successful conversion.

    Returns:
        The path of the PNG file.

    Raises:
        RuntimeError: If the PPM cannot be read or the PNG cannot be written.
    """
    source = Path(ppm_path)
    target = Path(png_path) if png_path is not None else source.with_suffix(".png")

    try:
        with PILImage.open(source) as pil_image:
            pil_image.save(target, format="PNG")
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"PNG conversion failed for {source}: {exc}") from exc

    logger.info("Converted %s to %s", source, target)

    if remove_source:
        source.unlink()
    return target


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
