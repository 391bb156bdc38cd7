"""2D geometry for the continuous board."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D point/vector with real-valued coordinates."""

    x: float
    y: float

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vector2":
        length = self.length()
        if length == 0:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / length, self.y / length)

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other: "Vector2", t: float) -> "Vector2":
        """Linear interpolation; t=0 gives self, t=1 gives other."""
        return Vector2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    @classmethod
    def from_angle(cls, origin: "Vector2", angle: float, radius: float) -> "Vector2":
        """Point at `radius` from `origin` along `angle` (radians)."""
        return cls(origin.x + math.cos(angle) * radius, origin.y + math.sin(angle) * radius)


def distance(p1: Vector2, p2: Vector2) -> float:
    """Euclidean distance between two points."""
    return p1.distance_to(p2)


def clamp_displacement(start: Vector2, target: Vector2, max_distance: float) -> Vector2:
    """Truncate the move start -> target to at most `max_distance` along its direction.

    Examples:
        >>> clamp_displacement(Vector2(0, 0), Vector2(300, 0), 150)
        Vector2(x=150.0, y=0.0)
    """
    offset = target - start
    if offset.length() <= max_distance:
        return target
    return start + offset.normalized() * max_distance


def clamp_to_circle(point: Vector2, center: Vector2, radius: float) -> Vector2:
    """Project `point` onto the circle around `center` if it lies outside it."""
    offset = point - center
    if offset.length() <= radius:
        return point
    return center + offset.normalized() * radius


def is_point_in_triangle(point: Vector2, vertices: tuple[Vector2, Vector2, Vector2]) -> bool:
    """Barycentric sign test, inclusive of the boundary.

    Degenerate (collinear) triangles contain nothing.
    """
    a, b, c = vertices
    denominator = (b.y - c.y) * (a.x - c.x) + (c.x - b.x) * (a.y - c.y)
    if denominator == 0:
        return False
    u = ((b.y - c.y) * (point.x - c.x) + (c.x - b.x) * (point.y - c.y)) / denominator
    v = ((c.y - a.y) * (point.x - c.x) + (a.x - c.x) * (point.y - c.y)) / denominator
    w = 1 - u - v
    return 0 <= u <= 1 and 0 <= v <= 1 and 0 <= w <= 1
