from __future__ import annotations

import pytest

from layoutcore.core.analyzer import SharedWallAnalyzer, detect_shared_walls, shared_wall_id
from layoutcore.models import DetectionParams, Point2D

from conftest import rect


def test_side_by_side_rooms_share_one_wall(side_by_side) -> None:
    walls = detect_shared_walls(side_by_side)

    assert len(walls) == 1
    wall = walls[0]
    assert wall.id == "wall-a-b"
    assert (wall.shape1_id, wall.shape2_id) == ("a", "b")
    assert (wall.edge1_index, wall.edge2_index) == (1, 3)  # a's right edge, b's left edge
    assert wall.length == pytest.approx(100)
    assert wall.midpoint.x == pytest.approx(100)
    assert wall.midpoint.y == pytest.approx(50)


def test_wall_id_does_not_depend_on_shape_order() -> None:
    walls = detect_shared_walls([rect("b", 100, 0), rect("a", 0, 0)])

    assert [w.id for w in walls] == ["wall-a-b"]
    assert walls[0].shape1_id == "a"
    assert shared_wall_id("b", "a") == shared_wall_id("a", "b")


def test_distant_rooms_share_nothing() -> None:
    assert detect_shared_walls([rect("a", 0, 0), rect("b", 300, 0)]) == []


def test_corner_contact_is_filtered_as_noise() -> None:
    # b's left edge overlaps a's right edge by only 3 px
    assert detect_shared_walls([rect("a", 0, 0), rect("b", 100, 97)]) == []


def test_overlap_above_threshold_is_kept() -> None:
    walls = detect_shared_walls([rect("a", 0, 0), rect("b", 100, 85)])

    assert len(walls) == 1
    assert walls[0].length == pytest.approx(15)


def test_small_gap_within_tolerance_still_counts() -> None:
    walls = detect_shared_walls([rect("a", 0, 0), rect("b", 103, 0)])

    assert len(walls) == 1
    assert walls[0].start.x == pytest.approx(100)


def test_gap_beyond_tolerance_is_not_a_wall() -> None:
    assert detect_shared_walls([rect("a", 0, 0), rect("b", 106, 0)]) == []


def test_tolerances_come_from_params() -> None:
    shapes = [rect("a", 0, 0), rect("b", 100, 97)]
    params = DetectionParams(min_overlap=2.0)

    assert len(detect_shared_walls(shapes, params)) == 1


def test_detection_is_deterministic(side_by_side, l_room_with_notch) -> None:
    shapes = side_by_side + l_room_with_notch

    first = [w.model_dump() for w in detect_shared_walls(shapes)]
    second = [w.model_dump() for w in detect_shared_walls(shapes)]

    assert first == second


def test_polygon_room_can_share_several_walls(l_room_with_notch) -> None:
    walls = detect_shared_walls(l_room_with_notch)

    assert [w.id for w in walls] == ["wall-c-l", "wall-c-l-2"]
    assert [w.edge1_index for w in walls] == [0, 3]  # c owns the walls
    assert [w.edge2_index for w in walls] == [2, 3]
    assert all(w.length == pytest.approx(100) for w in walls)


def test_rooms_meeting_at_a_corner_share_nothing() -> None:
    # Collinear edges that only meet at the point (100, 100)
    walls = detect_shared_walls([rect("a", 0, 0), rect("b", 100, 100)])

    assert walls == []


def test_find_shared_edge_prefers_wall_near_point(l_room_with_notch) -> None:
    l_room, notch = l_room_with_notch
    analyzer = SharedWallAnalyzer()

    horizontal = analyzer.find_shared_edge(l_room, notch, near=Point2D(x=150, y=100))
    vertical = analyzer.find_shared_edge(l_room, notch, near=Point2D(x=100, y=180))

    assert horizontal is not None and horizontal.edge2_index == 2
    assert vertical is not None and vertical.edge2_index == 3


def test_find_shared_edge_matches_detection_in_either_order(l_room_with_notch) -> None:
    l_room, notch = l_room_with_notch
    analyzer = SharedWallAnalyzer()
    detected = {w.id: w for w in analyzer.detect([l_room, notch])}

    for first, second in ((l_room, notch), (notch, l_room)):
        for near in (Point2D(x=150, y=100), Point2D(x=100, y=180)):
            wall = analyzer.find_shared_edge(first, second, near=near)
            assert wall == detected[wall.id]


def test_find_shared_edge_without_contact() -> None:
    analyzer = SharedWallAnalyzer()

    assert analyzer.find_shared_edge(rect("a", 0, 0), rect("b", 300, 0)) is None


def test_opposite_angles_across_the_wrap_are_parallel() -> None:
    analyzer = SharedWallAnalyzer()

    assert analyzer._is_parallel(3.1, -3.1)
    assert analyzer._is_parallel(0.05, 0.05 - 3.14159)
    assert not analyzer._is_parallel(0.0, 1.0)
