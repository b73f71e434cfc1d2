"""High-level layout geometry service — facade for hosts and the API layer."""

from __future__ import annotations
from typing import Sequence

from layoutcore.models import (
    DetectionParams, DoorEndpoints, DoorPlacement, Point2D, PolicyConfig,
    Rectangle, Shape, SharedWall, WallProjection, WallSegment,
)
from layoutcore.core import doors as door_ops
from layoutcore.core.analyzer import SharedWallAnalyzer
from layoutcore.core.gateway import Classifier, ConnectionGateway
from layoutcore.core.registry import RuleRegistry, create_default_registry
from layoutcore.core.segments import extract_walls
from layoutcore.core.union import merge_rectangles


class LayoutService:
    """Bundles the pure geometry operations with one set of detection parameters."""

    def __init__(
        self,
        params: DetectionParams | None = None,
        registry: RuleRegistry | None = None,
    ) -> None:
        self.params = params or DetectionParams()
        self.registry = registry or create_default_registry()
        self.analyzer = SharedWallAnalyzer(self.params)

    def extract_walls(self, shapes: Sequence[Shape]) -> list[WallSegment]:
        return extract_walls(shapes)

    def detect_shared_walls(self, shapes: Sequence[Shape]) -> list[SharedWall]:
        return self.analyzer.detect(shapes)

    def project_point_onto_wall(self, wall: SharedWall, point: Point2D) -> WallProjection:
        return door_ops.project_point_onto_wall(wall, point)

    def position_from_normalized(self, wall: SharedWall, normalized_position: float) -> Point2D:
        return door_ops.position_from_normalized(wall, normalized_position)

    def door_endpoints(self, door: DoorPlacement, wall: SharedWall) -> DoorEndpoints:
        return door_ops.door_endpoints(door, wall)

    def refresh_doors(
        self, doors: Sequence[DoorPlacement], shapes: Sequence[Shape],
    ) -> list[DoorPlacement]:
        """Re-anchor doors after the shapes changed."""
        return door_ops.refresh_doors(doors, self.detect_shared_walls(shapes))

    def start_drag(
        self, door: DoorPlacement, wall: SharedWall, press_point: Point2D,
    ) -> door_ops.DoorDrag:
        return door_ops.DoorDrag(door, wall, press_point, params=self.params)

    def merge_rectangles(self, rects: Sequence[Rectangle]) -> list[Point2D]:
        return merge_rectangles(rects)

    def connection_gateway(
        self,
        classifier: Classifier,
        config: PolicyConfig | None = None,
        timeout: float | None = None,
    ) -> ConnectionGateway:
        return ConnectionGateway(
            classifier,
            registry=self.registry,
            params=self.params,
            config=config,
            timeout=timeout,
        )

    def list_rules(self) -> list[dict[str, str]]:
        return [
            {"id": r.get_id(), "name": r.get_name()}
            for r in self.registry.list_rules()
        ]
