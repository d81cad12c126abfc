"""Scene module for object aggregation and preset scenes.

Components:
    scene: Scene container with closest-hit resolution
    presets: Factory functions for the standard test scenes
"""

from .presets import (
    GroundSceneParams,
    create_default_camera,
    create_ground_scene,
    create_single_sphere_scene,
)
from .scene import Scene

__all__ = [
    "Scene",
    "GroundSceneParams",
    "create_default_camera",
    "create_ground_scene",
    "create_single_sphere_scene",
]
