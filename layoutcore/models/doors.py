"""Door models — openings placed along shared walls."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, model_validator

from .geometry import Point2D


class FlowType(str, Enum):
    MATERIAL = "material"
    PERSONNEL = "personnel"
    WASTE = "waste"


class FlowDirection(str, Enum):
    UNIDIRECTIONAL = "unidirectional"
    BIDIRECTIONAL = "bidirectional"


class UnidirectionalDirection(str, Enum):
    FROM_FIRST_TO_SECOND = "fromFirstToSecond"
    FROM_SECOND_TO_FIRST = "fromSecondToFirst"


class DoorPlacement(BaseModel):
    """A door positioned along a shared wall."""
    id: str
    shared_wall_id: str
    shape1_id: str
    shape2_id: str
    position: Point2D
    normalized_position: float   # 0 = wall start, 1 = wall end
    width: float = 40.0          # Span along the wall (pixels)
    flow_type: FlowType = FlowType.PERSONNEL
    flow_direction: FlowDirection = FlowDirection.BIDIRECTIONAL
    unidirectional_direction: UnidirectionalDirection | None = None

    @model_validator(mode="after")
    def _direction_only_when_unidirectional(self) -> DoorPlacement:
        if self.flow_direction == FlowDirection.BIDIRECTIONAL:
            self.unidirectional_direction = None
        return self


class DoorEndpoints(BaseModel):
    """The sub-span of a wall occupied by a door."""
    start: Point2D
    end: Point2D
