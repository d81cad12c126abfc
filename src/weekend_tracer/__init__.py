"""CPU ray tracer for scenes of diffuse spheres.

This package renders spheres into a pixel buffer using recursive diffuse
light transport and jittered antialiasing, with support for:
- Closed-form ray-sphere intersection with nearest-hit resolution
- Pinhole camera ray generation
- Selectable unit-sphere direction samplers
- Plain-text PPM output with optional PNG conversion

Subpackages:
    core: Vector/ray/color types, sampling, integrator and rendering loop
    geometry: Hittable protocol, hit records and the sphere primitive
    scene: Scene aggregation and preset scenes
    camera: Pinhole camera with ray generation
    preview: Output encoding, export and preview utilities
"""

__version__ = "0.1.0"
