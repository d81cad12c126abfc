"""Ray data structure.

Example:
    >>> from weekend_tracer.core.ray import Ray
    >>> from weekend_tracer.core.vector import Vector3
    >>> ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vector3(0.0, 0.0, -5.0)
"""

from __future__ import annotations

from weekend_tracer.core.vector import Vector3


class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            unit length; the parameter t scales with its magnitude.
    """

    __slots__ = ("origin", "direction")

    def __init__(self, origin: Vector3, direction: Vector3) -> None:
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Vector3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.origin == other.origin and self.direction == other.direction

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"
