"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vector3 value type and geometric operations
    ray: Ray data structure
    color: Linear-light RGB color accumulator
    sampling: Random number generation and unit-sphere direction sampling
    integrator: Diffuse light transport and debug shading modes
    renderer: Scanline rendering loop with jittered antialiasing
"""

from .color import BLACK, RED, SKY_BLUE, WHITE, RGBColor
from .ray import Ray
from .sampling import (
    DEFAULT_SAMPLING_METHOD,
    SAMPLING_METHODS,
    SamplingMethod,
    get_unit_vector_sampler,
    make_rng,
    random_gaussian,
    random_in_unit_sphere,
    random_uniform,
    random_unit_vector,
)
from .vector import Vector3

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from weekend_tracer.core.integrator or weekend_tracer.core.renderer.

__all__ = [
    "Vector3",
    "Ray",
    "RGBColor",
    "BLACK",
    "WHITE",
    "RED",
    "SKY_BLUE",
    "SamplingMethod",
    "SAMPLING_METHODS",
    "DEFAULT_SAMPLING_METHOD",
    "make_rng",
    "random_uniform",
    "random_gaussian",
    "random_in_unit_sphere",
    "random_unit_vector",
    "get_unit_vector_sampler",
]
