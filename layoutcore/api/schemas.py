"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel, Field

from layoutcore.models import (
    DetectionParams, DoorPlacement, Point2D, Rectangle, Shape, SharedWall, WallSegment,
)


class ShapesRequest(BaseModel):
    """Snapshot of the host's shapes."""
    shapes: list[Shape]
    params: DetectionParams = Field(default_factory=DetectionParams)


class WallsResponse(BaseModel):
    walls: list[WallSegment]
    shape_count: int


class SharedWallsResponse(BaseModel):
    shared_walls: list[SharedWall]
    shape_count: int


class ProjectRequest(BaseModel):
    wall: SharedWall
    point: Point2D


class PositionRequest(BaseModel):
    wall: SharedWall
    normalized_position: float


class RefreshDoorsRequest(BaseModel):
    doors: list[DoorPlacement]
    shapes: list[Shape]
    params: DetectionParams = Field(default_factory=DetectionParams)


class MergeRequest(BaseModel):
    rectangles: list[Rectangle]


class MergeResponse(BaseModel):
    polygon: list[Point2D]
    vertex_count: int


class RuleInfo(BaseModel):
    id: str
    name: str
