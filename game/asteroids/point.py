"""
2D point / vector value type used by the intersection math
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Immutable 2D point with the usual vector operators"""
    x: float
    y: float

    def cross(self, other: "Point") -> float:
        """Signed parallelogram area; zero iff the vectors are parallel"""
        return self.x * other.y - other.x * self.y

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)

    def __truediv__(self, k: float) -> "Point":
        return Point(self.x / k, self.y / k)
