"""Color integrator for diffuse light transport.

This module computes the color carried along a camera ray. The production
mode traces diffuse bounces: at each hit a scatter direction is sampled
around the surface normal and the returned radiance is attenuated by a fixed
absorption factor. Rays that escape the scene pick up the sky gradient.

The bounce budget (depth) is the only termination mechanism: once it is
exhausted the path contributes black.

Shading modes:
    diffuse: Full diffuse-bounce integration (default)
    normals: Visualize the face-corrected surface normal
    flat: Flat red on any hit
    gradient: Background gradient only, ignoring the scene

Example:
    >>> from weekend_tracer.core.integrator import Integrator
    >>> from weekend_tracer.core.sampling import make_rng
    >>> from weekend_tracer.scene.presets import create_ground_scene
    >>>
    >>> scene, camera = create_ground_scene()
    >>> integrator = Integrator(max_depth=50, sampling_method="inverse_cdf")
    >>> color = integrator.radiance(camera.get_ray(0.5, 0.5), scene, make_rng(42))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

import numpy as np

from weekend_tracer.core.color import BLACK, RED, SKY_BLUE, WHITE, RGBColor
from weekend_tracer.core.ray import Ray
from weekend_tracer.core.sampling import (
    DEFAULT_SAMPLING_METHOD,
    SamplingMethod,
    UnitVectorSampler,
    get_unit_vector_sampler,
)
from weekend_tracer.geometry.hittable import HitRecord, Hittable

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# t_min and t_max for ray intersection; t_min > 0 avoids shadow acne
T_MIN = 1e-4
T_MAX = math.inf

# Fraction of radiance kept per diffuse bounce
ABSORPTION = 0.5

# Type alias for shading modes
ShadingMode = Literal["diffuse", "normals", "flat", "gradient"]

SHADING_MODES: tuple[str, ...] = ("diffuse", "normals", "flat", "gradient")


# =============================================================================
# Background and Debug Shading
# =============================================================================


def background_color(ray: Ray) -> RGBColor:
    """Compute the sky gradient seen by a ray that hits nothing.

    Blends linearly from white at unit_direction.y = -1 to sky blue at
    unit_direction.y = 1.

    Args:
        ray: The escaping ray. Its direction must be non-zero.

    Returns:
        (1 - t) * WHITE + t * SKY_BLUE with t = 0.5 * (unit_direction.y + 1).
    """
    unit_direction = ray.direction.unit_vector()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color_gradient(ray: Ray) -> RGBColor:
    """Shade with the background gradient only."""
    return background_color(ray)


def ray_color_flat(ray: Ray, scene: Hittable) -> RGBColor:
    """Shade every hit flat red, otherwise show the background."""
    record = HitRecord()
    if scene.hit(ray, 0.0, T_MAX, record):
        return RED
    return background_color(ray)


def ray_color_normals(ray: Ray, scene: Hittable) -> RGBColor:
    """Map the face-corrected hit normal from [-1, 1] to [0, 1] per channel."""
    record = HitRecord()
    if scene.hit(ray, 0.0, T_MAX, record):
        n = record.normal
        return RGBColor(0.5 * (n.x + 1.0), 0.5 * (n.y + 1.0), 0.5 * (n.z + 1.0))
    return background_color(ray)


# =============================================================================
# Diffuse Integration
# =============================================================================


def ray_color(
    ray: Ray,
    scene: Hittable,
    depth: int,
    rng: np.random.Generator,
    sampler: UnitVectorSampler | None = None,
) -> RGBColor:
    """Compute the radiance along a ray with diffuse bounces.

    At each hit the path continues toward point + normal + random unit
    vector and keeps ABSORPTION of the returned radiance. The path ends with
    the background color when it escapes, or with black when the bounce
    budget runs out. The recursion is unrolled into a loop that carries the
    accumulated attenuation.

    Args:
        ray: The ray to trace.
        scene: The objects to intersect.
        depth: Remaining bounce budget. depth <= 0 returns black.
        rng: Random generator for scatter directions.
        sampler: Unit-sphere direction sampler. Defaults to the
            inverse-CDF sampler.

    Returns:
        The linear-light color carried by the ray.
    """
    if sampler is None:
        sampler = get_unit_vector_sampler(DEFAULT_SAMPLING_METHOD)

    record = HitRecord()
    throughput = 1.0
    current = ray

    for _ in range(depth):
        if not scene.hit(current, T_MIN, T_MAX, record):
            return background_color(current) * throughput

        scatter_direction = record.normal + sampler(rng)
        # Degenerate when the sample cancels the normal
        if scatter_direction.near_zero():
            scatter_direction = record.normal

        current = Ray(record.point, scatter_direction)
        throughput *= ABSORPTION

    # Bounce budget exhausted: no more light is gathered
    return BLACK


# =============================================================================
# Integrator
# =============================================================================


@dataclass(frozen=True)
class Integrator:
    """Configured color integrator.

    The shading mode and sampling method are validated once here, so a bad
    configuration fails at setup instead of per sample.

    Attributes:
        shading: Shading mode ("diffuse", "normals", "flat" or "gradient").
        max_depth: Bounce budget for diffuse shading.
        sampling_method: Unit-sphere sampler name for diffuse scattering.
    """

    shading: ShadingMode = "diffuse"
    max_depth: int = MAX_DEPTH
    sampling_method: SamplingMethod = DEFAULT_SAMPLING_METHOD
    _sampler: UnitVectorSampler = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.shading not in SHADING_MODES:
            raise ValueError(
                f"Unknown shading mode: {self.shading!r}. "
                f"Expected one of {', '.join(SHADING_MODES)}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        object.__setattr__(self, "_sampler", get_unit_vector_sampler(self.sampling_method))

    def radiance(self, ray: Ray, scene: Hittable, rng: np.random.Generator) -> RGBColor:
        """Compute the color for one camera ray.

        Args:
            ray: The camera ray.
            scene: The objects to intersect.
            rng: Random generator for scatter directions.

        Returns:
            The linear-light color for the ray.
        """
        if self.shading == "diffuse":
            return ray_color(ray, scene, self.max_depth, rng, self._sampler)
        if self.shading == "normals":
            return ray_color_normals(ray, scene)
        if self.shading == "flat":
            return ray_color_flat(ray, scene)
        return ray_color_gradient(ray)
