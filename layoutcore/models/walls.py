"""Wall models — boundary edges of shapes and the walls two shapes share."""

from __future__ import annotations
from pydantic import BaseModel

from .geometry import Point2D, Vector2D


class WallSegment(BaseModel):
    """One oriented boundary edge of a shape."""
    owner_shape_id: str
    index: int           # Position of the edge in the shape's vertex loop
    start: Point2D
    end: Point2D
    midpoint: Point2D
    length: float
    angle: float         # Radians, atan2(dy, dx)
    normal: Vector2D     # Unit vector, angle + 90 degrees


class SharedWall(BaseModel):
    """The overlapping stretch of two collinear edges belonging to different shapes."""
    id: str
    shape1_id: str
    shape2_id: str
    edge1_index: int
    edge2_index: int
    start: Point2D
    end: Point2D
    midpoint: Point2D
    length: float
    angle: float
    normal: Vector2D

    def involves(self, shape_id: str) -> bool:
        return shape_id in (self.shape1_id, self.shape2_id)

    def connects(self, shape_a_id: str, shape_b_id: str) -> bool:
        return {self.shape1_id, self.shape2_id} == {shape_a_id, shape_b_id}


class WallProjection(BaseModel):
    """A point snapped onto a wall, with its 0..1 parameter from the wall's start."""
    position: Point2D
    normalized_position: float
