"""Sphere primitive with closed-form ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(oc, direction)  (half of the traditional 'b')
    c = dot(oc, oc) - radius^2
    oc = origin - center

Example:
    >>> from weekend_tracer.core.ray import Ray
    >>> from weekend_tracer.core.vector import Vector3
    >>> from weekend_tracer.geometry.hittable import HitRecord
    >>> from weekend_tracer.geometry.sphere import Sphere
    >>> sphere = Sphere(Vector3(0.0, 0.0, -1.0), 0.5)
    >>> ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))
    >>> record = HitRecord()
    >>> sphere.hit(ray, 0.0, float("inf"), record)
    True
    >>> record.t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from weekend_tracer.core.ray import Ray
from weekend_tracer.core.vector import Vector3
from weekend_tracer.geometry.hittable import HitRecord, Hittable


@dataclass(frozen=True, eq=False)
class Sphere(Hittable):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive, finite).
    """

    center: Vector3
    radius: float

    def __post_init__(self) -> None:
        # The sphere owns its center
        object.__setattr__(self, "center", Vector3(*self.center))
        if not (math.isfinite(self.radius) and self.radius > 0.0):
            raise ValueError(f"Sphere radius must be positive and finite, got {self.radius}")

    def hit(self, ray: Ray, t_min: float, t_max: float, record: HitRecord) -> bool:
        """Test for ray-sphere intersection.

        Prefers the nearer root and falls back to the farther one, so the
        reported hit is the first surface crossing inside the open window
        (t_min, t_max). A negative discriminant is the ordinary "miss" case.

        Args:
            ray: The ray to test (direction need not be normalized).
            t_min: Exclusive lower bound on accepted t values.
            t_max: Exclusive upper bound on accepted t values.
            record: Output record, overwritten only on a hit.

        Returns:
            True if the ray hits the sphere inside the window.
        """
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        if a == 0.0:
            # Degenerate ray with no direction
            return False
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0.0:
            return False

        sqrt_d = math.sqrt(discriminant)

        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_d) / a
        if root <= t_min or root >= t_max:
            root = (-half_b + sqrt_d) / a
            if root <= t_min or root >= t_max:
                return False

        record.t = root
        record.point = ray.at(root)
        outward_normal = (record.point - self.center) / self.radius
        record.set_face_normal(ray, outward_normal)
        return True
