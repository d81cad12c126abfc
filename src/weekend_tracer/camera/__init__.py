"""Camera module for primary ray generation.

Components:
    pinhole: Axis-aligned pinhole (perspective) camera

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .pinhole import PinholeCamera, get_camera_info

__all__ = [
    "PinholeCamera",
    "get_camera_info",
]
