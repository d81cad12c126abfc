"""Three-component vector type for ray tracing geometry.

This module provides the Vector3 value type used for points, directions and
normals throughout the renderer. All arithmetic operators return new vectors;
the only in-place operation is normalize().

Example:
    >>> from weekend_tracer.core.vector import Vector3
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> v.norm()
    5.0
    >>> v.unit_vector()
    Vector3(0.6, 0.0, 0.8)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from numbers import Real
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

# Threshold below which every component counts as zero in near_zero()
NEAR_ZERO_EPSILON = 1e-8


class Vector3:
    """A 3D vector with algebraic operators and geometric operations.

    Equality is structural. Vectors are treated as values: operators never
    modify their operands.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = x
        self.y = y
        self.z = z

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def zeros(cls) -> Vector3:
        """Create the zero vector."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def ones(cls) -> Vector3:
        """Create a vector with every component set to one."""
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def random_uniform(cls, rng: np.random.Generator, low: float, high: float) -> Vector3:
        """Create a vector with components drawn uniformly from [low, high).

        Args:
            rng: Random generator supplying the draws.
            low: Lower bound (inclusive).
            high: Upper bound (exclusive).

        Returns:
            A new random vector.

        Raises:
            ValueError: If high is not greater than low.
        """
        if high <= low:
            raise ValueError(
                f"Upper bound ({high}) must be greater than lower bound ({low})"
            )
        x, y, z = rng.uniform(low, high, size=3)
        return cls(float(x), float(y), float(z))

    # =========================================================================
    # Operators
    # =========================================================================

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vector3 | float) -> Vector3:
        # Entry-wise for vectors, scaling for reals
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, Real):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Vector3:
        if isinstance(other, Real):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, scalar: float) -> Vector3:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    # normalize() mutates, so vectors are not hashable
    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"

    # =========================================================================
    # Geometric Operations
    # =========================================================================

    def dot(self, other: Vector3) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Compute the cross product self x other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Compute the squared Euclidean length.

        Cheaper than norm() when only comparing magnitudes.
        """
        return self.dot(self)

    def norm(self) -> float:
        """Compute the Euclidean length sqrt(dot(v, v))."""
        return math.sqrt(self.dot(self))

    def unit_vector(self) -> Vector3:
        """Return a unit-length copy of this vector.

        Returns:
            self / norm(self).

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.norm()
        if length == 0.0:
            raise ValueError("Cannot compute the unit vector of a zero-length vector")
        return self / length

    def normalize(self) -> None:
        """Divide this vector by its own norm, in place.

        Raises:
            ValueError: If the vector has zero length. The vector is left
                unchanged in that case.
        """
        length = self.norm()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        self.x /= length
        self.y /= length
        self.z /= length

    def project(self, other: Vector3) -> Vector3:
        """Project this vector onto another vector.

        Args:
            other: The vector to project onto.

        Returns:
            other * dot(self, other) / dot(other, other).

        Raises:
            ValueError: If other has zero length.
        """
        denominator = other.dot(other)
        if denominator == 0.0:
            raise ValueError("Cannot project onto a zero-length vector")
        return other * (self.dot(other) / denominator)

    def near_zero(self) -> bool:
        """Check whether every component is close to zero."""
        return (
            abs(self.x) < NEAR_ZERO_EPSILON
            and abs(self.y) < NEAR_ZERO_EPSILON
            and abs(self.z) < NEAR_ZERO_EPSILON
        )

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to a plain (x, y, z) tuple."""
        return (self.x, self.y, self.z)
