"""Ray-surface intersection protocol.

Every intersectable object implements Hittable.hit(), which reports whether a
ray crosses the surface strictly inside the parametric window (t_min, t_max)
and fills a caller-owned HitRecord on success.

The lower bound t_min keeps scattered rays from re-hitting the surface they
start on due to floating-point error ("shadow acne"). Callers tracing
secondary rays pass a small positive value such as 1e-4 instead of 0.

Example:
    >>> from weekend_tracer.geometry.hittable import HitRecord
    >>> record = HitRecord()
    >>> if shape.hit(ray, 1e-4, float("inf"), record):
    ...     print(record.t, record.front_face)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from weekend_tracer.core.ray import Ray
from weekend_tracer.core.vector import Vector3


@dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    The record is scratch state owned by the caller of a hit test and is
    overwritten on every accepted intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The unit surface normal at the intersection point. Always
            opposes the incoming ray direction (flipped for back-face hits).
        t: The parameter value along the ray where intersection occurred.
        front_face: True if the ray hit the surface from outside, i.e.
            dot(ray.direction, outward_normal) < 0.
    """

    point: Vector3 = field(default_factory=Vector3)
    normal: Vector3 = field(default_factory=Vector3)
    t: float = 0.0
    front_face: bool = False

    def set_face_normal(self, ray: Ray, outward_normal: Vector3) -> None:
        """Store the normal facing against the ray and record the side hit.

        Args:
            ray: The incoming ray.
            outward_normal: Unit normal pointing out of the surface.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0.0
        self.normal = outward_normal if self.front_face else -outward_normal

    def copy_from(self, other: HitRecord) -> None:
        """Overwrite every field with the values of another record."""
        self.point = other.point
        self.normal = other.normal
        self.t = other.t
        self.front_face = other.front_face


class Hittable(ABC):
    """Capability for testing ray intersection within a parametric window."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float, record: HitRecord) -> bool:
        """Test the ray against this object.

        Args:
            ray: The ray to test.
            t_min: Exclusive lower bound on accepted t values.
            t_max: Exclusive upper bound on accepted t values.
            record: Output record, overwritten only when a hit is found.

        Returns:
            True iff the ray intersects the object at some t in (t_min, t_max).
        """
