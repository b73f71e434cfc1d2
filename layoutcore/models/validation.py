"""Connection validation models — classifier outcomes and gateway results."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from .doors import DoorPlacement, FlowType
from .walls import SharedWall


class ValidationStatus(str, Enum):
    ALLOWED = "allowed"
    DISALLOWED = "disallowed"
    NO_CLASSIFICATION = "no-classification"


class ValidationOutcome(BaseModel):
    """Verdict of the classification service for a pair of shapes."""
    model_config = ConfigDict(populate_by_name=True)

    can_connect: bool = Field(alias="canConnect")
    allowed_flow_types: set[FlowType] = Field(default_factory=set, alias="allowedFlowTypes")
    status: ValidationStatus
    message: str = ""
    details: str | None = None

    def sorted_flow_types(self) -> list[FlowType]:
        """Allowed flow types in declaration order, for stable messages."""
        return [ft for ft in FlowType if ft in self.allowed_flow_types]


class ConnectionStep(str, Enum):
    IDLE = "idle"
    SELECT_SECOND_SHAPE = "selectSecondShape"
    SELECT_EDGE_POINT = "selectEdgePoint"


class ConnectionStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NO_SHARED_EDGE = "no_shared_edge"
    CANCELLED = "cancelled"
    ERROR = "error"


class Rejection(BaseModel):
    """Why a connection rule refused a connection."""
    rule_id: str
    status: ConnectionStatus = ConnectionStatus.REJECTED
    message: str
    details: str | None = None


class ConnectionResult(BaseModel):
    """Final answer of one connection attempt."""
    status: ConnectionStatus
    message: str
    details: str | None = None
    outcome: ValidationOutcome | None = None
    shared_wall: SharedWall | None = None
    door: DoorPlacement | None = None

    @property
    def accepted(self) -> bool:
        return self.status == ConnectionStatus.ACCEPTED
