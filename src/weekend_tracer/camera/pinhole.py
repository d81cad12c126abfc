"""Pinhole camera model for perspective projection ray generation.

This module implements an axis-aligned pinhole camera that generates primary
rays for rendering. The camera looks down the -z axis from its origin, with
the image plane at distance focal_length.

The viewport is spanned by two basis vectors:
- horizontal: (viewport_width, 0, 0), left to right
- vertical: (0, viewport_height, 0), bottom to top

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image

Example:
    >>> from weekend_tracer.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(aspect_ratio=16.0 / 9.0, viewport_height=2.0)
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through image center
    >>> ray.direction
    Vector3(0.0, 0.0, -1.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from weekend_tracer.core.ray import Ray
from weekend_tracer.core.vector import Vector3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True, eq=False)
class PinholeCamera:
    """A pinhole (perspective) camera.

    The derived viewport vectors are computed once at construction and never
    change afterwards.

    Attributes:
        aspect_ratio: Width divided by height of the output image.
        viewport_height: Height of the virtual image plane.
        focal_length: Distance from the origin to the image plane.
        origin: Camera position in world space.
        viewport_width: aspect_ratio * viewport_height.
        horizontal: Vector spanning the full viewport width.
        vertical: Vector spanning the full viewport height.
        lower_left_corner: World-space position of the viewport's
            bottom-left corner.
    """

    aspect_ratio: float = 16.0 / 9.0
    viewport_height: float = 2.0
    focal_length: float = 1.0
    origin: Vector3 = field(default_factory=Vector3)

    viewport_width: float = field(init=False)
    horizontal: Vector3 = field(init=False)
    vertical: Vector3 = field(init=False)
    lower_left_corner: Vector3 = field(init=False)

    def __post_init__(self) -> None:
        for name in ("aspect_ratio", "viewport_height", "focal_length"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0.0):
                raise ValueError(f"Camera {name} must be positive and finite, got {value}")

        # The camera owns its origin
        object.__setattr__(self, "origin", Vector3(*self.origin))

        # Width is the aspect ratio times the height
        viewport_width = self.aspect_ratio * self.viewport_height
        horizontal = Vector3(viewport_width, 0.0, 0.0)
        vertical = Vector3(0.0, self.viewport_height, 0.0)
        lower_left_corner = (
            self.origin
            - horizontal / 2.0
            - vertical / 2.0
            - Vector3(0.0, 0.0, self.focal_length)
        )

        object.__setattr__(self, "viewport_width", viewport_width)
        object.__setattr__(self, "horizontal", horizontal)
        object.__setattr__(self, "vertical", vertical)
        object.__setattr__(self, "lower_left_corner", lower_left_corner)

    # =========================================================================
    # Ray Generation
    # =========================================================================

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        - u = 0: left edge of image, u = 1: right edge
        - v = 0: bottom edge of image, v = 1: top edge

        Args:
            u: Horizontal coordinate (left to right).
            v: Vertical coordinate (bottom to top).

        Returns:
            A Ray from the camera origin toward the point (u, v) on the
            viewport. The direction is not normalized.
        """
        direction = (
            self.lower_left_corner + self.horizontal * u + self.vertical * v - self.origin
        )
        # Rays never share the camera origin
        return Ray(Vector3(*self.origin), direction)

    def get_ray_jittered(
        self,
        pixel_i: int,
        pixel_j: int,
        width: int,
        height: int,
        rng: np.random.Generator,
    ) -> Ray:
        """Generate a jittered ray for anti-aliasing.

        Adds a random sub-pixel offset in [0, 1) to the pixel coordinates
        before normalizing by (width - 1) and (height - 1).

        Args:
            pixel_i: Pixel x-coordinate (0 = left).
            pixel_j: Pixel y-coordinate (0 = bottom).
            width: Image width in pixels (at least 2).
            height: Image height in pixels (at least 2).
            rng: Random generator supplying the jitter.

        Returns:
            A Ray with random sub-pixel offset.
        """
        u = (pixel_i + rng.random()) / (width - 1)
        v = (pixel_j + rng.random()) / (height - 1)
        return self.get_ray(u, v)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info(camera: PinholeCamera) -> dict[str, tuple[float, float, float]]:
    """Get the camera's vectors for debugging.

    Returns:
        Dictionary with origin, horizontal, vertical and lower_left as tuples.
    """
    return {
        "origin": camera.origin.to_tuple(),
        "horizontal": camera.horizontal.to_tuple(),
        "vertical": camera.vertical.to_tuple(),
        "lower_left": camera.lower_left_corner.to_tuple(),
    }
