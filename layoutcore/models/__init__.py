from .geometry import Point2D, Vector2D, point_to_line_distance
from .shapes import Shape, ShapeOutline, RectangleOutline, PolygonOutline, Rectangle
from .walls import WallSegment, SharedWall, WallProjection
from .doors import (
    DoorPlacement, DoorEndpoints, FlowType, FlowDirection, UnidirectionalDirection,
)
from .validation import (
    ValidationOutcome, ValidationStatus, ConnectionStep, ConnectionStatus,
    ConnectionResult, Rejection,
)
from .parameters import DetectionParams, PolicyConfig
from .context import ConnectionContext

__all__ = [
    "Point2D", "Vector2D", "point_to_line_distance",
    "Shape", "ShapeOutline", "RectangleOutline", "PolygonOutline", "Rectangle",
    "WallSegment", "SharedWall", "WallProjection",
    "DoorPlacement", "DoorEndpoints", "FlowType", "FlowDirection", "UnidirectionalDirection",
    "ValidationOutcome", "ValidationStatus", "ConnectionStep", "ConnectionStatus",
    "ConnectionResult", "Rejection",
    "DetectionParams", "PolicyConfig",
    "ConnectionContext",
]
