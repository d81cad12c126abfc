"""Linear-light RGB color accumulator.

Colors are accumulated unclamped during integration; clamping and gamma
correction happen only in the output stage (see weekend_tracer.preview).
"""

from __future__ import annotations

from numbers import Real
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np


class RGBColor:
    """An RGB triple in linear light.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    __slots__ = ("r", "g", "b")

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0) -> None:
        self.r = r
        self.g = g
        self.b = b

    @classmethod
    def zeros(cls) -> RGBColor:
        """Create black."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def ones(cls) -> RGBColor:
        """Create white."""
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def random_uniform(cls, rng: np.random.Generator, low: float, high: float) -> RGBColor:
        """Create a color with channels drawn uniformly from [low, high).

        Raises:
            ValueError: If high is not greater than low.
        """
        if high <= low:
            raise ValueError(
                f"Upper bound ({high}) must be greater than lower bound ({low})"
            )
        r, g, b = rng.uniform(low, high, size=3)
        return cls(float(r), float(g), float(b))

    def __add__(self, other: RGBColor) -> RGBColor:
        if not isinstance(other, RGBColor):
            return NotImplemented
        return RGBColor(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: RGBColor) -> RGBColor:
        if not isinstance(other, RGBColor):
            return NotImplemented
        return RGBColor(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other: RGBColor | float) -> RGBColor:
        if isinstance(other, RGBColor):
            return RGBColor(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, Real):
            return RGBColor(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    def __rmul__(self, other: float) -> RGBColor:
        if isinstance(other, Real):
            return RGBColor(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    def __truediv__(self, scalar: float) -> RGBColor:
        if not isinstance(scalar, Real):
            return NotImplemented
        return RGBColor(self.r / scalar, self.g / scalar, self.b / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RGBColor):
            return NotImplemented
        return self.r == other.r and self.g == other.g and self.b == other.b

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RGBColor({self.r}, {self.g}, {self.b})"

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to a plain (r, g, b) tuple."""
        return (self.r, self.g, self.b)


# =============================================================================
# Named Colors
# =============================================================================

BLACK = RGBColor(0.0, 0.0, 0.0)
WHITE = RGBColor(1.0, 1.0, 1.0)
RED = RGBColor(1.0, 0.0, 0.0)

# Top of the background sky gradient
SKY_BLUE = RGBColor(0.5, 0.7, 1.0)
