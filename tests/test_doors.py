from __future__ import annotations

import math

import pytest

from layoutcore.core.analyzer import detect_shared_walls
from layoutcore.core.doors import (
    DoorDrag, create_door, door_endpoints, position_from_normalized,
    project_point_onto_wall, refresh_doors,
)
from layoutcore.models import (
    DetectionParams, DoorPlacement, FlowDirection, FlowType, Point2D, SharedWall,
    UnidirectionalDirection, Vector2D,
)

from conftest import rect


def make_wall(x1: float, y1: float, x2: float, y2: float, wall_id: str = "wall-a-b") -> SharedWall:
    angle = math.atan2(y2 - y1, x2 - x1)
    start, end = Point2D(x=x1, y=y1), Point2D(x=x2, y=y2)
    return SharedWall(
        id=wall_id,
        shape1_id="a",
        shape2_id="b",
        edge1_index=0,
        edge2_index=0,
        start=start,
        end=end,
        midpoint=start.lerp(end, 0.5),
        length=start.distance_to(end),
        angle=angle,
        normal=Vector2D.from_angle(angle + math.pi / 2),
    )


@pytest.mark.parametrize("t", [0.0, 0.1, 0.25, 0.5, 0.77, 0.999, 1.0])
def test_normalized_position_round_trip(t: float) -> None:
    wall = make_wall(10, 20, 130, 70)

    point = position_from_normalized(wall, t)
    back = project_point_onto_wall(wall, point).normalized_position

    assert back == pytest.approx(t, abs=1e-9)


def test_projection_drops_perpendicular_offset() -> None:
    wall = make_wall(0, 0, 100, 0)

    projection = project_point_onto_wall(wall, Point2D(x=25, y=40))

    assert projection.position.as_tuple() == (25, 0)
    assert projection.normalized_position == pytest.approx(0.25)


def test_far_points_clamp_to_wall_ends() -> None:
    wall = make_wall(0, 0, 100, 0)

    before = project_point_onto_wall(wall, Point2D(x=-500, y=3))
    after = project_point_onto_wall(wall, Point2D(x=900, y=-3))

    assert before.normalized_position == 0.0 and before.position.as_tuple() == (0, 0)
    assert after.normalized_position == 1.0 and after.position.as_tuple() == (100, 0)


def test_zero_length_wall_projects_to_start() -> None:
    wall = make_wall(5, 5, 5, 5)

    projection = project_point_onto_wall(wall, Point2D(x=50, y=50))

    assert projection.position.as_tuple() == (5, 5)
    assert projection.normalized_position == 0.0


def test_position_from_normalized_clamps() -> None:
    wall = make_wall(0, 0, 0, 100)

    assert position_from_normalized(wall, 1.5).as_tuple() == (0, 100)
    assert position_from_normalized(wall, -0.2).as_tuple() == (0, 0)


def test_door_spans_along_wall() -> None:
    wall = make_wall(0, 0, 100, 0)
    door = create_door(wall, Point2D(x=50, y=10))

    ends = door_endpoints(door, wall)

    assert ends.start.as_tuple() == pytest.approx((30, 0))
    assert ends.end.as_tuple() == pytest.approx((70, 0))


def test_door_on_vertical_wall_spans_vertically() -> None:
    wall = make_wall(100, 0, 100, 100)
    door = create_door(wall, Point2D(x=100, y=50), width=20)

    ends = door_endpoints(door, wall)

    assert ends.start.x == pytest.approx(100)
    assert ends.end.x == pytest.approx(100)
    assert ends.start.y == pytest.approx(40)
    assert ends.end.y == pytest.approx(60)


def test_create_door_takes_wall_identity() -> None:
    wall = make_wall(0, 0, 100, 0)

    door = create_door(
        wall, Point2D(x=80, y=0),
        flow_type=FlowType.MATERIAL,
        flow_direction=FlowDirection.UNIDIRECTIONAL,
        unidirectional_direction=UnidirectionalDirection.FROM_SECOND_TO_FIRST,
    )

    assert door.id.startswith("door-")
    assert door.shared_wall_id == wall.id
    assert (door.shape1_id, door.shape2_id) == ("a", "b")
    assert door.normalized_position == pytest.approx(0.8)
    assert door.width == 40.0
    assert door.unidirectional_direction == UnidirectionalDirection.FROM_SECOND_TO_FIRST


def test_create_door_takes_width_from_params() -> None:
    wall = make_wall(0, 0, 100, 0)

    door = create_door(wall, Point2D(x=50, y=0), params=DetectionParams(door_width=60))

    assert door.width == 60
    assert door_endpoints(door, wall).start.x == pytest.approx(20)


def test_drag_threshold_comes_from_params() -> None:
    wall = make_wall(0, 0, 100, 0)
    door = create_door(wall, Point2D(x=50, y=0), door_id="d1")
    drag = DoorDrag(door, wall, press_point=Point2D(x=50, y=0), params=DetectionParams(drag_threshold=1.0))

    moved = drag.move(Point2D(x=53, y=0))

    assert moved is not None
    assert moved.normalized_position == pytest.approx(0.53)
    assert not drag.release()[1]


def test_bidirectional_door_has_no_one_way_direction() -> None:
    door = DoorPlacement(
        id="d1",
        shared_wall_id="wall-a-b",
        shape1_id="a",
        shape2_id="b",
        position=Point2D(x=0, y=0),
        normalized_position=0.0,
        flow_direction=FlowDirection.BIDIRECTIONAL,
        unidirectional_direction=UnidirectionalDirection.FROM_FIRST_TO_SECOND,
    )

    assert door.unidirectional_direction is None


def test_small_pointer_jitter_is_a_click() -> None:
    wall = make_wall(0, 0, 100, 0)
    door = create_door(wall, Point2D(x=50, y=0), door_id="d1")
    drag = DoorDrag(door, wall, press_point=Point2D(x=50, y=0))

    assert drag.move(Point2D(x=53, y=2)) is None

    released, was_click = drag.release()
    assert was_click
    assert released.normalized_position == pytest.approx(0.5)


def test_drag_follows_pointer_along_own_wall() -> None:
    wall = make_wall(0, 0, 100, 0)
    door = create_door(wall, Point2D(x=50, y=0), door_id="d1")
    drag = DoorDrag(door, wall, press_point=Point2D(x=50, y=0))

    moved = drag.move(Point2D(x=70, y=35))
    assert moved is not None
    assert moved.position.as_tuple() == pytest.approx((70, 0))
    assert moved.normalized_position == pytest.approx(0.7)

    # Once dragging, even tiny moves update the door
    assert drag.move(Point2D(x=71, y=0)) is not None
    assert drag.move(Point2D(x=400, y=0)).normalized_position == 1.0

    released, was_click = drag.release()
    assert not was_click
    assert released.id == "d1"


def test_drag_rejects_foreign_wall() -> None:
    wall = make_wall(0, 0, 100, 0)
    other = make_wall(0, 0, 0, 100, wall_id="wall-x-y")
    door = create_door(wall, Point2D(x=50, y=0))

    with pytest.raises(ValueError):
        DoorDrag(door, other, press_point=Point2D(x=0, y=0))


def test_refresh_keeps_normalized_position_when_shapes_move() -> None:
    before = detect_shared_walls([rect("a", 0, 0), rect("b", 100, 0)])
    door = create_door(before[0], Point2D(x=100, y=50))
    orphan = door.model_copy(update={"id": "orphan", "shared_wall_id": "wall-gone"})

    after = detect_shared_walls([rect("a", 0, 0), rect("b", 100, 50)])
    refreshed, untouched = refresh_doors([door, orphan], after)

    assert refreshed.normalized_position == pytest.approx(0.5)
    assert refreshed.position.x == pytest.approx(100)
    assert refreshed.position.y == pytest.approx(75)
    assert untouched == orphan
