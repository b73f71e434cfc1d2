"""Wall segment building — one oriented segment per outline edge."""

from __future__ import annotations
import math
from typing import Iterable

from layoutcore.models import Point2D, Shape, Vector2D, WallSegment
from layoutcore.core.polygon import shape_vertices


def build_wall_segments(shape_id: str, vertices: list[Point2D]) -> list[WallSegment]:
    """Walk a closed vertex loop and emit a segment for each edge.

    The closing edge (last vertex back to the first) is included.
    Zero-length edges are dropped.
    """
    segments: list[WallSegment] = []
    n = len(vertices)
    for i in range(n):
        start = vertices[i]
        end = vertices[(i + 1) % n]
        segment = make_segment(shape_id, i, start, end)
        if segment is not None:
            segments.append(segment)
    return segments


def make_segment(shape_id: str, index: int, start: Point2D, end: Point2D) -> WallSegment | None:
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.sqrt(dx * dx + dy * dy)
    if length == 0:
        return None

    angle = math.atan2(dy, dx)
    return WallSegment(
        owner_shape_id=shape_id,
        index=index,
        start=start,
        end=end,
        midpoint=start.lerp(end, 0.5),
        length=length,
        angle=angle,
        normal=Vector2D.from_angle(angle + math.pi / 2),
    )


def shape_wall_segments(shape: Shape) -> list[WallSegment]:
    return build_wall_segments(shape.id, shape_vertices(shape))


def extract_walls(shapes: Iterable[Shape]) -> list[WallSegment]:
    """All wall segments of all shapes, in shape order then edge order."""
    walls: list[WallSegment] = []
    for shape in shapes:
        walls.extend(shape_wall_segments(shape))
    return walls
