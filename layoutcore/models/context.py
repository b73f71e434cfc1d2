"""Connection context — accumulates state while a connection attempt is checked."""

from __future__ import annotations
from pydantic import BaseModel, Field

from .doors import FlowDirection, FlowType, UnidirectionalDirection
from .geometry import Point2D
from .parameters import DetectionParams, PolicyConfig
from .shapes import Shape
from .validation import ValidationOutcome
from .walls import SharedWall


class ConnectionContext(BaseModel):
    """
    Holds all state for a single connection check.

    The gateway fills in the request and the classifier outcome.
    Rules read it, and may attach findings (the located shared wall).
    """
    # Input
    shapes: list[Shape]
    first_shape_id: str
    second_shape_id: str
    point: Point2D
    flow_type: FlowType
    flow_direction: FlowDirection = FlowDirection.BIDIRECTIONAL
    unidirectional_direction: UnidirectionalDirection | None = None
    params: DetectionParams = Field(default_factory=DetectionParams)
    config: PolicyConfig = Field(default_factory=PolicyConfig)

    # Classification result (from the external service)
    outcome: ValidationOutcome

    # Findings (populated by rules)
    shared_wall: SharedWall | None = None

    def get_shape(self, shape_id: str) -> Shape | None:
        for s in self.shapes:
            if s.id == shape_id:
                return s
        return None
