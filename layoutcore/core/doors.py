"""Door placement along shared walls — projection, inverse mapping, dragging."""

from __future__ import annotations
import math
import uuid
from typing import Iterable

from loguru import logger

from layoutcore.models import (
    DetectionParams, DoorEndpoints, DoorPlacement, FlowDirection, FlowType,
    Point2D, SharedWall, UnidirectionalDirection, WallProjection,
)


def project_point_onto_wall(wall: SharedWall, point: Point2D) -> WallProjection:
    """Closest point on the wall to `point`, and its 0..1 parameter."""
    along = wall.end - wall.start
    length_sq = along.dot(along)
    if length_sq == 0:
        return WallProjection(position=wall.start, normalized_position=0.0)

    t = (point - wall.start).dot(along) / length_sq
    t = max(0.0, min(1.0, t))
    return WallProjection(position=wall.start + along * t, normalized_position=t)


def position_from_normalized(wall: SharedWall, normalized_position: float) -> Point2D:
    """Point at parameter t along the wall (t clamped to 0..1)."""
    t = max(0.0, min(1.0, normalized_position))
    return wall.start.lerp(wall.end, t)


def door_endpoints(door: DoorPlacement, wall: SharedWall) -> DoorEndpoints:
    """The door's span: centered on its position, half a width each way along the wall."""
    half = door.width / 2
    offset = Point2D(x=math.cos(wall.angle) * half, y=math.sin(wall.angle) * half)
    return DoorEndpoints(start=door.position - offset, end=door.position + offset)


def new_door_id() -> str:
    return f"door-{uuid.uuid4().hex[:12]}"


def create_door(
    wall: SharedWall,
    point: Point2D,
    flow_type: FlowType = FlowType.PERSONNEL,
    flow_direction: FlowDirection = FlowDirection.BIDIRECTIONAL,
    unidirectional_direction: UnidirectionalDirection | None = None,
    params: DetectionParams | None = None,
    width: float | None = None,
    door_id: str | None = None,
) -> DoorPlacement:
    """Place a new door on `wall` at the projection of `point`.

    The width comes from `params.door_width` unless given explicitly.
    """
    params = params or DetectionParams()
    projection = project_point_onto_wall(wall, point)
    return DoorPlacement(
        id=door_id or new_door_id(),
        shared_wall_id=wall.id,
        shape1_id=wall.shape1_id,
        shape2_id=wall.shape2_id,
        position=projection.position,
        normalized_position=projection.normalized_position,
        width=width if width is not None else params.door_width,
        flow_type=flow_type,
        flow_direction=flow_direction,
        unidirectional_direction=unidirectional_direction,
    )


def move_door(door: DoorPlacement, wall: SharedWall, point: Point2D) -> DoorPlacement:
    """Door re-projected onto its own wall at `point`."""
    projection = project_point_onto_wall(wall, point)
    return door.model_copy(update={
        "position": projection.position,
        "normalized_position": projection.normalized_position,
    })


def refresh_doors(
    doors: Iterable[DoorPlacement], walls: Iterable[SharedWall],
) -> list[DoorPlacement]:
    """Re-anchor doors on freshly detected walls after shapes moved.

    Each door keeps its normalized position on the wall with the same id.
    Doors whose wall no longer exists come back unchanged.
    """
    by_id = {w.id: w for w in walls}
    refreshed: list[DoorPlacement] = []
    for door in doors:
        wall = by_id.get(door.shared_wall_id)
        if wall is None:
            logger.debug("Door {} lost its wall {}", door.id, door.shared_wall_id)
            refreshed.append(door)
            continue
        refreshed.append(door.model_copy(update={
            "position": position_from_normalized(wall, door.normalized_position),
        }))
    return refreshed


class DoorDrag:
    """
    Pointer interaction with one door.

    A press only turns into a drag once the pointer travels further than
    the drag threshold; below it the interaction is a click. While
    dragging, the door follows the pointer along its own wall.
    """

    def __init__(
        self,
        door: DoorPlacement,
        wall: SharedWall,
        press_point: Point2D,
        params: DetectionParams | None = None,
    ) -> None:
        if door.shared_wall_id != wall.id:
            raise ValueError(f"Door {door.id} is on {door.shared_wall_id}, not {wall.id}")
        self.door = door
        self.wall = wall
        self.press_point = press_point
        self.params = params or DetectionParams()
        self.dragging = False

    def move(self, point: Point2D) -> DoorPlacement | None:
        """Feed a pointer move. Returns the updated door once dragging."""
        if not self.dragging:
            if self.press_point.distance_to(point) <= self.params.drag_threshold:
                return None
            self.dragging = True
        self.door = move_door(self.door, self.wall, point)
        return self.door

    def release(self) -> tuple[DoorPlacement, bool]:
        """End the interaction. Returns the door and whether it was a click."""
        return self.door, not self.dragging
