"""Adjacency analysis — shared walls between shapes."""

from __future__ import annotations
import math
from typing import Sequence

from loguru import logger

from layoutcore.models import (
    DetectionParams, Point2D, Shape, SharedWall, WallSegment, point_to_line_distance,
)
from layoutcore.core.doors import project_point_onto_wall
from layoutcore.core.segments import shape_wall_segments


TWO_PI = 2 * math.pi


def shared_wall_id(shape_a_id: str, shape_b_id: str) -> str:
    """Order-independent wall id for a pair of shapes."""
    first, second = sorted((shape_a_id, shape_b_id))
    return f"wall-{first}-{second}"


class SharedWallAnalyzer:
    """Finds the collinear, overlapping edge stretches two shapes have in common."""

    def __init__(self, params: DetectionParams | None = None) -> None:
        self.params = params or DetectionParams()

    def detect(self, shapes: Sequence[Shape]) -> list[SharedWall]:
        """Compare every pair of shapes and return all shared walls.

        Pairs come in input order. Within a pair, the shape with the lower
        id is `shape1` and its edges give the wall's direction.
        """
        segments = [shape_wall_segments(shape) for shape in shapes]
        walls: list[SharedWall] = []

        for i in range(len(shapes)):
            for j in range(i + 1, len(shapes)):
                walls.extend(self._pair_walls(segments[i], segments[j],
                                              shapes[i].id, shapes[j].id))

        logger.debug("Detected {} shared walls among {} shapes", len(walls), len(shapes))
        return walls

    def find_shared_edge(
        self,
        shape_a: Shape,
        shape_b: Shape,
        near: Point2D | None = None,
    ) -> SharedWall | None:
        """Return the wall shared by two specific shapes.

        With `near`, the wall closest to that point wins; otherwise the
        first one in detection order.
        """
        walls = self._pair_walls(
            shape_wall_segments(shape_a), shape_wall_segments(shape_b),
            shape_a.id, shape_b.id,
        )
        if not walls:
            return None
        if near is None:
            return walls[0]
        return min(walls, key=lambda w: near.distance_to(project_point_onto_wall(w, near).position))

    def _pair_walls(
        self,
        segments_a: list[WallSegment],
        segments_b: list[WallSegment],
        shape_a_id: str,
        shape_b_id: str,
    ) -> list[SharedWall]:
        # The lower id owns the wall, so its direction and suffix are the
        # same whichever shape the caller names first
        if shape_b_id < shape_a_id:
            segments_a, segments_b = segments_b, segments_a
            shape_a_id, shape_b_id = shape_b_id, shape_a_id

        base_id = shared_wall_id(shape_a_id, shape_b_id)
        walls: list[SharedWall] = []
        for seg1 in segments_a:
            for seg2 in segments_b:
                # A pair of shapes can share several walls (U shapes, notches)
                wall_id = base_id if not walls else f"{base_id}-{len(walls) + 1}"
                wall = self.match_segments(seg1, seg2, wall_id)
                if wall is not None:
                    walls.append(wall)
        return walls

    def match_segments(
        self, seg1: WallSegment, seg2: WallSegment, wall_id: str,
    ) -> SharedWall | None:
        """Build the shared wall of two segments, or None if they don't share one."""
        if not self._is_parallel(seg1.angle, seg2.angle):
            return None

        if point_to_line_distance(seg2.start, seg1.start, seg1.end) > self.params.collinear_tolerance:
            return None

        overlap = _overlap_on_line(seg1, seg2)
        if overlap is None:
            return None

        start, end = overlap
        length = start.distance_to(end)
        if length < self.params.min_overlap:
            return None

        return SharedWall(
            id=wall_id,
            shape1_id=seg1.owner_shape_id,
            shape2_id=seg2.owner_shape_id,
            edge1_index=seg1.index,
            edge2_index=seg2.index,
            start=start,
            end=end,
            midpoint=start.lerp(end, 0.5),
            length=length,
            angle=seg1.angle,
            normal=seg1.normal,
        )

    def _is_parallel(self, angle1: float, angle2: float) -> bool:
        """Same or opposite direction, within the angle tolerance."""
        diff = abs(angle1 - angle2) % TWO_PI
        eps = self.params.angle_tolerance
        return min(diff, TWO_PI - diff) < eps or abs(diff - math.pi) < eps


def _overlap_on_line(seg1: WallSegment, seg2: WallSegment) -> tuple[Point2D, Point2D] | None:
    """Overlap of both segments projected on seg1's direction, mapped back onto seg1's line."""
    cos_a = math.cos(seg1.angle)
    sin_a = math.sin(seg1.angle)

    def project(p: Point2D) -> float:
        return p.x * cos_a + p.y * sin_a

    t1a, t1b = project(seg1.start), project(seg1.end)
    t2a, t2b = project(seg2.start), project(seg2.end)

    overlap_start = max(min(t1a, t1b), min(t2a, t2b))
    overlap_end = min(max(t1a, t1b), max(t2a, t2b))
    if overlap_start >= overlap_end:
        return None

    def unproject(t: float) -> Point2D:
        d = t - t1a
        return Point2D(x=seg1.start.x + d * cos_a, y=seg1.start.y + d * sin_a)

    return unproject(overlap_start), unproject(overlap_end)


def detect_shared_walls(
    shapes: Sequence[Shape], params: DetectionParams | None = None,
) -> list[SharedWall]:
    return SharedWallAnalyzer(params).detect(shapes)
