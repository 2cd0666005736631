"""Two-dimensional point and vector primitive.

Point doubles as a position and as a displacement vector: path control
points, segment chords and curve derivatives all use the same type.
"""

import math
from dataclasses import dataclass

from bezierkernel.exceptions import GeometryError


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D world space.

    Immutable and hashable for use in sets/dicts.
    Uses slots for memory efficiency when shipped to worker processes.

    Attributes:
        x: X coordinate in world units
        y: Y coordinate in world units
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Point":
        return Point(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def dot(self, other: "Point") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """Z component of the cross product with another vector.

        Positive when ``other`` lies counter-clockwise of this vector.
        """
        return self.x * other.y - self.y * other.x

    @property
    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Point":
        """Return the unit vector pointing in the same direction.

        Returns:
            Vector of length 1

        Raises:
            GeometryError: If this is the zero vector
        """
        length = self.length
        if length == 0.0:
            raise GeometryError("Cannot normalize a zero-length vector")
        return Point(self.x / length, self.y / length)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def angle_to(self, other: "Point") -> float:
        """Angle in radians of the direction from this point towards ``other``."""
        return math.atan2(other.y - self.y, other.x - self.x)

    def angle_from(self, other: "Point") -> float:
        """Angle in radians of the direction from ``other`` towards this point."""
        return math.atan2(self.y - other.y, self.x - other.x)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linearly interpolate towards ``other``.

        Args:
            other: Target point (reached at t=1)
            t: Interpolation parameter

        Returns:
            self + t * (other - self)
        """
        return Point(self.x + t * (other.x - self.x), self.y + t * (other.y - self.y))

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, pt: tuple[float, float]) -> "Point":
        """Build a point from an (x, y) pair, as used by fontTools pens."""
        return cls(float(pt[0]), float(pt[1]))
