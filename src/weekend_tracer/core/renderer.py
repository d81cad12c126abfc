"""Scanline renderer with jittered antialiasing.

This module drives the per-pixel sampling loop:
- Each pixel draws samples_per_pixel jittered camera rays
- Each ray is shaded by the configured Integrator
- The per-pixel color sums are kept in a NumPy buffer for the output stage

Rows are rendered from the top of the image to the bottom, matching the row
order of the PPM output. Rendering is single-threaded; every pixel only reads
the scene and camera, and all randomness comes from the renderer's own
generator seeded from the settings.

Example:
    >>> from weekend_tracer.core.renderer import Renderer, RenderSettings
    >>> from weekend_tracer.scene.presets import create_ground_scene
    >>>
    >>> scene, camera = create_ground_scene()
    >>> settings = RenderSettings.from_aspect_ratio(400, camera.aspect_ratio, seed=42)
    >>> renderer = Renderer(scene, camera, settings)
    >>> image = renderer.render()  # Linear image of shape (height, width, 3)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator, Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt

from weekend_tracer.camera.pinhole import PinholeCamera
from weekend_tracer.core.color import RGBColor
from weekend_tracer.core.integrator import MAX_DEPTH, SHADING_MODES, Integrator, ShadingMode
from weekend_tracer.core.sampling import (
    DEFAULT_SAMPLING_METHOD,
    SamplingMethod,
    get_unit_vector_sampler,
    make_rng,
)
from weekend_tracer.geometry.hittable import Hittable
from weekend_tracer.preview.export import image_to_uint8

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Render Settings
# =============================================================================


@dataclass(frozen=True)
class RenderSettings:
    """Numeric configuration for one render.

    Attributes:
        width: Image width in pixels (at least 2).
        height: Image height in pixels (at least 2).
        samples_per_pixel: Jittered samples averaged per pixel.
        max_depth: Bounce budget per camera ray.
        sampling_method: Unit-sphere sampler for diffuse scattering.
        shading: Shading mode for the integrator.
        seed: Seed for the render's random generator. None is nondeterministic.
    """

    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = MAX_DEPTH
    sampling_method: SamplingMethod = DEFAULT_SAMPLING_METHOD
    shading: ShadingMode = "diffuse"
    seed: int | None = None

    def __post_init__(self) -> None:
        # Jittered sampling divides by (width - 1) and (height - 1)
        if self.width < 2 or self.height < 2:
            raise ValueError(
                f"Image dimensions must be at least 2x2, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(
                f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.shading not in SHADING_MODES:
            raise ValueError(
                f"Unknown shading mode: {self.shading!r}. "
                f"Expected one of {', '.join(SHADING_MODES)}"
            )
        get_unit_vector_sampler(self.sampling_method)

    @classmethod
    def from_aspect_ratio(cls, width: int, aspect_ratio: float, **kwargs: Any) -> RenderSettings:
        """Create settings whose height follows from the width and aspect ratio.

        Args:
            width: Image width in pixels.
            aspect_ratio: Width divided by height.
            **kwargs: Remaining RenderSettings fields.

        Returns:
            Settings with height = int(width / aspect_ratio).
        """
        if aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders a scene through a camera into a color-sum buffer.

    The buffer has shape (height, width, 3); row 0 is the top of the image,
    which is pixel row j = height - 1 in camera coordinates.

    Attributes:
        scene: The objects to render.
        camera: The camera generating primary rays.
        settings: Image size and sampling configuration.
    """

    def __init__(
        self,
        scene: Hittable,
        camera: PinholeCamera,
        settings: RenderSettings | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: The objects to render.
            camera: The camera generating primary rays.
            settings: Render configuration. Defaults to RenderSettings().

        Raises:
            ValueError: If the shading mode or sampling method is unknown.
        """
        self.scene = scene
        self.camera = camera
        self.settings = settings if settings is not None else RenderSettings()
        self._integrator = Integrator(
            shading=self.settings.shading,
            max_depth=self.settings.max_depth,
            sampling_method=self.settings.sampling_method,
        )
        self._rng = make_rng(self.settings.seed)
        self._color_sum = np.zeros((self.height, self.width, 3), dtype=np.float64)
        self._rows_done = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.settings.height

    @property
    def samples_per_pixel(self) -> int:
        """Get the number of samples summed into each pixel."""
        return self.settings.samples_per_pixel

    @property
    def rows_done(self) -> int:
        """Get the number of completed rows."""
        return self._rows_done

    @property
    def is_complete(self) -> bool:
        """Check whether every row has been rendered."""
        return self._rows_done == self.height

    def reset(self) -> None:
        """Clear the color buffer and restart the random generator."""
        self._color_sum.fill(0.0)
        self._rows_done = 0
        self._rng = make_rng(self.settings.seed)

    # =========================================================================
    # Sampling
    # =========================================================================

    def render_pixel(self, pixel_i: int, pixel_j: int) -> RGBColor:
        """Sum the jittered samples for one pixel.

        Args:
            pixel_i: Pixel x-coordinate (0 = left).
            pixel_j: Pixel y-coordinate (0 = bottom).

        Returns:
            The unnormalized sum of samples_per_pixel sample colors.
        """
        color_sum = RGBColor(0.0, 0.0, 0.0)
        for _ in range(self.samples_per_pixel):
            ray = self.camera.get_ray_jittered(
                pixel_i, pixel_j, self.width, self.height, self._rng
            )
            color_sum = color_sum + self._integrator.radiance(ray, self.scene, self._rng)
        return color_sum

    def _render_row(self, row: int) -> None:
        pixel_j = self.height - 1 - row
        for pixel_i in range(self.width):
            color_sum = self.render_pixel(pixel_i, pixel_j)
            self._color_sum[row, pixel_i] = color_sum.to_tuple()

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render the remaining rows, yielding progress after each one.

        This is a generator-based alternative to render() with callbacks.

        Yields:
            Tuple of (rows_done, total_rows).
        """
        while self._rows_done < self.height:
            self._render_row(self._rows_done)
            self._rows_done += 1
            yield (self._rows_done, self.height)

    def render(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.float64]:
        """Render every remaining row.

        Args:
            callback: Optional callback called after each row.
                Receives (rows_done, total_rows).

        Returns:
            The averaged linear image, shape (height, width, 3).

        Example:
            >>> def progress(done, total):
            ...     print(f"Scanlines: {done}/{total}")
            >>> image = renderer.render(callback=progress)
        """
        logger.info(
            "Rendering %dx%d at %d spp (depth %d, %s shading, %s sampling)",
            self.width,
            self.height,
            self.samples_per_pixel,
            self.settings.max_depth,
            self.settings.shading,
            self.settings.sampling_method,
        )
        start_time = time.perf_counter()

        for rows_done, total_rows in self.render_progressive():
            if callback is not None:
                callback(rows_done, total_rows)

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return self.get_image_numpy()

    # =========================================================================
    # Output
    # =========================================================================

    def get_color_sum(self) -> npt.NDArray[np.float64]:
        """Get a copy of the raw per-pixel sample sums."""
        return self._color_sum.copy()

    def get_image_numpy(self) -> npt.NDArray[np.float64]:
        """Get the averaged linear image.

        Returns:
            Color sums divided by samples_per_pixel, shape (height, width, 3).
        """
        return self._color_sum / self.samples_per_pixel

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the gamma-corrected 8-bit image.

        Returns:
            NumPy array of shape (height, width, 3) with dtype uint8.
        """
        return image_to_uint8(self.get_image_numpy())

    def iter_pixels(self) -> Iterator[tuple[int, int, int]]:
        """Iterate over the encoded pixels in row-major order, top row first.

        Yields:
            (r, g, b) integer triples in [0, 255].
        """
        for row in self.get_image_uint8():
            for r, g, b in row:
                yield (int(r), int(g), int(b))

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"spp={self.samples_per_pixel}, rows_done={self._rows_done})"
        )
