"""Preview module for image output.

This module provides functionality for processing and saving rendered images:
- Gamma correction (fixed gamma 2)
- 8-bit color encoding
- Plain-text PPM export and PNG conversion via Pillow
- Matplotlib preview window (optional "preview" extra)

Example:
    >>> from weekend_tracer.preview import write_ppm, convert_to_png
    >>> write_ppm("spheres.ppm", renderer.get_image_uint8())
    >>> convert_to_png("spheres.ppm")
"""

from .display import apply_gamma, process_image_for_display, show_preview
from .export import (
    compute_rmse,
    convert_to_png,
    encode_color,
    image_to_uint8,
    iter_ppm_lines,
    save_png,
    write_ppm,
)

__all__ = [
    # Display
    "apply_gamma",
    "process_image_for_display",
    "show_preview",
    # Export
    "encode_color",
    "image_to_uint8",
    "iter_ppm_lines",
    "write_ppm",
    "save_png",
    "convert_to_png",
    "compute_rmse",
]
