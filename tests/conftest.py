"""Pytest configuration for weekend_tracer tests.

This module provides shared fixtures for all test modules. Every fixture that
needs randomness builds its own seeded generator, so tests never share random
state.
"""

import numpy as np
import pytest

from weekend_tracer.core.sampling import make_rng
from weekend_tracer.scene.presets import create_ground_scene, create_single_sphere_scene


@pytest.fixture
def rng():
    """Seeded random generator for reproducible draws."""
    return make_rng(42)


@pytest.fixture
def ground_scene():
    """Sphere-on-ground scene and its default camera."""
    return create_ground_scene()


@pytest.fixture
def single_sphere_scene():
    """Single sphere scene and its default camera."""
    return create_single_sphere_scene()


@pytest.fixture
def small_image_uint8():
    """A 2x3 image with distinct, known pixel values (top row first)."""
    return np.array(
        [
            [[255, 0, 0], [0, 255, 0], [0, 0, 255]],
            [[10, 20, 30], [128, 128, 128], [0, 0, 0]],
        ],
        dtype=np.uint8,
    )
