"""Preset scenes.

This module provides factory functions for the standard test scenes:
- A single sphere in front of the camera (useful with the flat and normals
  shading modes)
- The same sphere resting on a very large "ground" sphere

Both use the default pinhole camera at the origin looking down -z.

Example:
    >>> from weekend_tracer.scene.presets import create_ground_scene
    >>> scene, camera = create_ground_scene()
    >>> len(scene)
    2
"""

from __future__ import annotations

from dataclasses import dataclass

from weekend_tracer.camera.pinhole import PinholeCamera
from weekend_tracer.core.vector import Vector3
from weekend_tracer.geometry.sphere import Sphere
from weekend_tracer.scene.scene import Scene

# =============================================================================
# Scene Constants
# =============================================================================

ASPECT_RATIO = 16.0 / 9.0
VIEWPORT_HEIGHT = 2.0
FOCAL_LENGTH = 1.0

SPHERE_CENTER = (0.0, 0.0, -1.0)
SPHERE_RADIUS = 0.5

# A huge sphere whose top sits just under the small sphere
GROUND_CENTER = (0.0, -100.5, -1.0)
GROUND_RADIUS = 100.0


@dataclass(frozen=True)
class GroundSceneParams:
    """Parameters for the sphere-on-ground scene.

    Attributes:
        sphere_center: Center of the small sphere.
        sphere_radius: Radius of the small sphere.
        ground_center: Center of the ground sphere.
        ground_radius: Radius of the ground sphere.
        aspect_ratio: Camera aspect ratio (width / height).
    """

    sphere_center: tuple[float, float, float] = SPHERE_CENTER
    sphere_radius: float = SPHERE_RADIUS
    ground_center: tuple[float, float, float] = GROUND_CENTER
    ground_radius: float = GROUND_RADIUS
    aspect_ratio: float = ASPECT_RATIO


def create_default_camera(aspect_ratio: float = ASPECT_RATIO) -> PinholeCamera:
    """Create the standard camera at the origin looking down -z."""
    return PinholeCamera(
        aspect_ratio=aspect_ratio,
        viewport_height=VIEWPORT_HEIGHT,
        focal_length=FOCAL_LENGTH,
        origin=Vector3(0.0, 0.0, 0.0),
    )


def create_single_sphere_scene(
    aspect_ratio: float = ASPECT_RATIO,
) -> tuple[Scene, PinholeCamera]:
    """Create a scene with one sphere centered in front of the camera.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    scene = Scene()
    scene.add(Sphere(Vector3(*SPHERE_CENTER), SPHERE_RADIUS))
    return scene, create_default_camera(aspect_ratio)


def create_ground_scene(
    params: GroundSceneParams | None = None,
) -> tuple[Scene, PinholeCamera]:
    """Create a sphere resting on a large ground sphere.

    Args:
        params: Optional GroundSceneParams. If None, uses the defaults.

    Returns:
        A tuple of (Scene, PinholeCamera).

    Raises:
        ValueError: If a radius or the aspect ratio is not positive.
    """
    if params is None:
        params = GroundSceneParams()

    scene = Scene()
    scene.add(Sphere(Vector3(*params.sphere_center), params.sphere_radius))
    scene.add(Sphere(Vector3(*params.ground_center), params.ground_radius))
    return scene, create_default_camera(params.aspect_ratio)
