"""Random sampling for antialiasing and diffuse scattering.

This module provides the random number utilities used by the camera (pixel
jitter) and by the integrator (scatter directions). Random state is always
passed explicitly as a NumPy Generator so renders are reproducible for a
given seed and no generator is shared implicitly.

Three interchangeable unit-sphere direction samplers are available:
    rejection: Draw points in the cube [-1, 1]^3 until one lies inside the
        unit ball, then normalize it.
    inverse_cdf: Spherical coordinates with uniform azimuth and a polar
        angle from the inverse CDF of the uniform-area distribution.
        No rejection loop, so this is the default.
    gaussian: Three independent Gaussian coordinates, normalized.

Example:
    >>> from weekend_tracer.core.sampling import get_unit_vector_sampler, make_rng
    >>> rng = make_rng(42)
    >>> sampler = get_unit_vector_sampler("inverse_cdf")
    >>> direction = sampler(rng)  # Uniform direction on the unit sphere
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Literal

import numpy as np

from weekend_tracer.core.vector import Vector3

# Type alias for the supported direction sampling methods
SamplingMethod = Literal["rejection", "inverse_cdf", "gaussian"]

# A sampler maps a generator to a random unit vector
UnitVectorSampler = Callable[[np.random.Generator], Vector3]

DEFAULT_SAMPLING_METHOD: SamplingMethod = "inverse_cdf"

# Per-axis standard deviation for Gaussian sampling (unit expected squared norm)
GAUSSIAN_STD_DEV = 1.0 / math.sqrt(3.0)


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a random generator for one render or one worker.

    Args:
        seed: Seed for reproducible output. None draws fresh OS entropy.

    Returns:
        A new NumPy Generator.
    """
    return np.random.default_rng(seed)


def random_uniform(rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> float:
    """Draw a float uniformly from [low, high)."""
    return low + rng.random() * (high - low)


def random_gaussian(
    rng: np.random.Generator, mean: float = 0.0, std_dev: float = 1.0
) -> float:
    """Draw a float from the normal distribution N(mean, std_dev^2)."""
    return float(rng.normal(mean, std_dev))


# =============================================================================
# Unit Sphere Samplers
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vector3:
    """Generate a random point strictly inside the unit ball.

    Uses rejection sampling in the cube [-1, 1]^3. The origin itself is also
    rejected so the result can always be normalized.

    Args:
        rng: Random generator supplying the draws.

    Returns:
        A point p with 0 < |p| < 1.
    """
    while True:
        x = random_uniform(rng, -1.0, 1.0)
        y = random_uniform(rng, -1.0, 1.0)
        z = random_uniform(rng, -1.0, 1.0)
        r_squared = x * x + y * y + z * z
        if 0.0 < r_squared < 1.0:
            return Vector3(x, y, z)


def random_unit_vector_rejection(rng: np.random.Generator) -> Vector3:
    """Sample a unit direction by normalizing a point from the unit ball."""
    return random_in_unit_sphere(rng).unit_vector()


def random_unit_vector_inverse_cdf(rng: np.random.Generator) -> Vector3:
    """Sample a unit direction with the inverse-CDF spherical method.

    The azimuth theta is uniform in [-pi, pi) and the polar angle is
    phi = acos(1 - 2U), which makes cos(phi) uniform in (-1, 1] and the
    resulting points uniform in area.

    Args:
        rng: Random generator supplying the draws.

    Returns:
        A unit vector.
    """
    theta = 2.0 * math.pi * rng.random() - math.pi
    phi = math.acos(1.0 - 2.0 * rng.random())
    sin_phi = math.sin(phi)
    return Vector3(sin_phi * math.cos(theta), sin_phi * math.sin(theta), math.cos(phi))


def random_unit_vector_gaussian(rng: np.random.Generator) -> Vector3:
    """Sample a unit direction by normalizing a Gaussian point.

    The multivariate normal distribution is rotationally symmetric, so the
    normalized point is uniform on the sphere.
    """
    while True:
        x, y, z = rng.normal(0.0, GAUSSIAN_STD_DEV, size=3)
        point = Vector3(float(x), float(y), float(z))
        if point.length_squared() > 0.0:
            return point.unit_vector()


_SAMPLERS: dict[str, UnitVectorSampler] = {
    "rejection": random_unit_vector_rejection,
    "inverse_cdf": random_unit_vector_inverse_cdf,
    "gaussian": random_unit_vector_gaussian,
}

SAMPLING_METHODS: tuple[str, ...] = tuple(_SAMPLERS)


def get_unit_vector_sampler(method: str = DEFAULT_SAMPLING_METHOD) -> UnitVectorSampler:
    """Look up the unit-sphere sampler for a method name.

    Resolve the sampler once at setup time and reuse it per sample.

    Args:
        method: One of "rejection", "inverse_cdf" or "gaussian".

    Returns:
        The sampling function for that method.

    Raises:
        ValueError: If the method name is not recognized.
    """
    try:
        return _SAMPLERS[method]
    except KeyError:
        raise ValueError(
            f"Unknown sampling method: {method!r}. "
            f"Expected one of {', '.join(SAMPLING_METHODS)}"
        ) from None


def random_unit_vector(
    rng: np.random.Generator, method: str = DEFAULT_SAMPLING_METHOD
) -> Vector3:
    """Generate a random unit vector with the given sampling method.

    Args:
        rng: Random generator supplying the draws.
        method: Sampling method name (default "inverse_cdf").

    Returns:
        A unit vector uniformly distributed over the sphere.

    Raises:
        ValueError: If the method name is not recognized.
    """
    return get_unit_vector_sampler(method)(rng)
