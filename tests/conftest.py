from __future__ import annotations

import asyncio

import pytest

from layoutcore.models import (
    FlowType, Point2D, Shape, ValidationOutcome, ValidationStatus,
)


def rect(shape_id: str, x: float, y: float, w: float = 100, h: float = 100) -> Shape:
    return Shape.rectangle(shape_id, x, y, w, h)


def allowed(*flow_types: FlowType) -> ValidationOutcome:
    return ValidationOutcome(
        can_connect=True,
        allowed_flow_types=set(flow_types or FlowType),
        status=ValidationStatus.ALLOWED,
        message="Connection allowed",
    )


class FakeClassifier:
    """In-process stand-in for the classification service."""

    def __init__(
        self,
        outcome: ValidationOutcome | None = None,
        error: Exception | None = None,
        hold: bool = False,
    ) -> None:
        self.outcome = outcome or allowed()
        self.error = error
        self.gate = asyncio.Event() if hold else None
        self.calls: list[tuple[str, str]] = []

    async def classify(self, first_shape_id: str, second_shape_id: str) -> ValidationOutcome:
        self.calls.append((first_shape_id, second_shape_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.outcome


@pytest.fixture
def side_by_side() -> list[Shape]:
    """Two 100x100 rooms touching along x = 100."""
    return [rect("a", 0, 0), rect("b", 100, 0)]


@pytest.fixture
def l_room_with_notch() -> list[Shape]:
    """An L-shaped room and a square filling its notch."""
    l_room = Shape(
        id="l",
        origin=Point2D(x=0, y=0),
        width=200,
        height=200,
        relative_vertices=[
            Point2D(x=0, y=0), Point2D(x=200, y=0), Point2D(x=200, y=100),
            Point2D(x=100, y=100), Point2D(x=100, y=200), Point2D(x=0, y=200),
        ],
    )
    return [l_room, rect("c", 100, 100)]
