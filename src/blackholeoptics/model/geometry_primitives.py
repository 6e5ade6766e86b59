"""
Geometric Primitives for the 2-D canvas.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Union
import math


@dataclass(frozen=True)
class Vector:
    """
    A 2-D vector representing direction and magnitude (screen convention, +y down).
    """
    x: float
    y: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y

    @classmethod
    def from_angle(cls, angle_deg: float) -> Vector:
        """Unit vector for a screen angle in degrees (0 = right, 90 = down)."""
        angle_rad = math.radians(angle_deg)
        return cls(math.cos(angle_rad), math.sin(angle_rad))


@dataclass(frozen=True)
class Point:
    """A point on the canvas plane."""
    x: float
    y: float

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Vector or Point from a Point.")

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    @property
    def norm(self) -> float:
        """Distance from the origin, i.e. from the body center for world points."""
        return math.hypot(self.x, self.y)

    @property
    def polar_angle(self) -> float:
        """Polar angle in radians measured from +x toward +y."""
        return math.atan2(self.y, self.x)

    @classmethod
    def from_polar(cls, r: float, phi: float) -> Point:
        return cls(r * math.cos(phi), r * math.sin(phi))


ORIGIN = Point(0.0, 0.0)
