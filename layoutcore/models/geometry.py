"""Geometric primitives used throughout the layout core."""

from __future__ import annotations
import math
from pydantic import BaseModel


class Point2D(BaseModel):
    """Point on the drawing canvas (screen convention, y grows downward)."""
    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def lerp(self, other: Point2D, t: float) -> Point2D:
        return Point2D(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
        )

    def dot(self, other: Point2D) -> float:
        return self.x * other.x + self.y * other.y

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: Point2D) -> Point2D:
        return Point2D(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Point2D) -> Point2D:
        return Point2D(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, scalar: float) -> Point2D:
        return Point2D(x=self.x * scalar, y=self.y * scalar)


class Vector2D(BaseModel):
    """Unit direction on the canvas."""
    x: float
    y: float

    @classmethod
    def from_angle(cls, angle: float) -> Vector2D:
        return cls(x=math.cos(angle), y=math.sin(angle))

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)


def point_to_line_distance(point: Point2D, line_start: Point2D, line_end: Point2D) -> float:
    """Perpendicular distance from a point to the infinite line through two points.

    A degenerate line (both points equal) falls back to point distance.
    """
    dx = line_end.x - line_start.x
    dy = line_end.y - line_start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return point.distance_to(line_start)

    cross = abs(dy * point.x - dx * point.y + line_end.x * line_start.y - line_end.y * line_start.x)
    return cross / math.sqrt(length_sq)
