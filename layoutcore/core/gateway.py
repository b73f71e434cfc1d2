"""Connection gateway — the door-connection state machine and its policy checks."""

from __future__ import annotations
import asyncio
from typing import Protocol, Sequence

from loguru import logger

from layoutcore.models import (
    ConnectionContext, ConnectionResult, ConnectionStatus, ConnectionStep,
    DetectionParams, FlowDirection, FlowType, Point2D, PolicyConfig, Shape,
    UnidirectionalDirection, ValidationOutcome,
)
from layoutcore.core.analyzer import SharedWallAnalyzer
from layoutcore.core.doors import create_door
from layoutcore.core.registry import RuleRegistry, create_default_registry
from layoutcore.exceptions import ClassificationError, ConnectionStateError
from layoutcore.rules.connection.shared_edge import SHARED_EDGE_MESSAGE


class Classifier(Protocol):
    """External oracle deciding whether two shapes may be connected."""

    async def classify(self, first_shape_id: str, second_shape_id: str) -> ValidationOutcome:
        ...


class ConnectionGateway:
    """
    Walks a user through connecting two shapes with a door.

    idle -> selectSecondShape -> selectEdgePoint -> idle

    The last step awaits the classifier. Only one validation may be in
    flight; cancelling while it runs discards its answer. Shapes are
    passed in per call and never kept.
    """

    def __init__(
        self,
        classifier: Classifier,
        registry: RuleRegistry | None = None,
        params: DetectionParams | None = None,
        config: PolicyConfig | None = None,
        timeout: float | None = None,
    ) -> None:
        self.classifier = classifier
        self.registry = registry or create_default_registry()
        self.params = params or DetectionParams()
        self.config = config or PolicyConfig()
        self.timeout = timeout

        self.step = ConnectionStep.IDLE
        self.first_shape_id: str | None = None
        self.second_shape_id: str | None = None
        self._pending = False
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._pending

    def begin_connection(self, shape_id: str) -> ConnectionStep:
        if self.step != ConnectionStep.IDLE:
            raise ConnectionStateError(
                "A connection is already in progress",
                {"step": self.step.value},
            )
        self.first_shape_id = shape_id
        self.step = ConnectionStep.SELECT_SECOND_SHAPE
        return self.step

    def advance_connection(self, shape_id: str) -> ConnectionStep:
        """Pick the second shape. Picking the first one again cancels."""
        if self.step != ConnectionStep.SELECT_SECOND_SHAPE:
            raise ConnectionStateError(
                "Not waiting for a second shape",
                {"step": self.step.value},
            )
        if shape_id == self.first_shape_id:
            self._reset()
            return self.step
        self.second_shape_id = shape_id
        self.step = ConnectionStep.SELECT_EDGE_POINT
        return self.step

    def cancel_connection(self) -> None:
        if self._pending:
            logger.info("Discarding in-flight validation for {} <-> {}",
                        self.first_shape_id, self.second_shape_id)
        self._reset()

    async def resolve_edge_point(
        self,
        shapes: Sequence[Shape],
        point: Point2D,
        flow_type: FlowType,
        flow_direction: FlowDirection = FlowDirection.BIDIRECTIONAL,
        unidirectional_direction: UnidirectionalDirection | None = None,
    ) -> ConnectionResult:
        """Validate the chosen pair and, if allowed, place a door near `point`.

        Always returns to idle, except when the attempt was cancelled
        meanwhile (the gateway has then already been reset).
        """
        if self.step != ConnectionStep.SELECT_EDGE_POINT:
            raise ConnectionStateError("Both shapes must be selected first",
                                       {"step": self.step.value})
        if self._pending:
            raise ConnectionStateError("A validation is already in flight")

        first_id, second_id = self.first_shape_id, self.second_shape_id
        if first_id is None or second_id is None:
            raise ConnectionStateError("Both shapes must be selected first",
                                       {"step": self.step.value})
        snapshot = list(shapes)
        known = {s.id for s in snapshot}
        missing = [sid for sid in (first_id, second_id) if sid not in known]
        if missing:
            self._reset()
            return _shape_not_found(missing)

        generation = self._generation
        self._pending = True
        try:
            outcome = await self._classify(first_id, second_id)
        except ClassificationError as exc:
            if generation != self._generation:
                return _cancelled()
            logger.warning("Classification of {} <-> {} failed: {}", first_id, second_id, exc.message)
            return ConnectionResult(
                status=ConnectionStatus.ERROR,
                message=exc.message,
                details="; ".join(f"{k}={v}" for k, v in exc.details.items()) or None,
            )
        finally:
            # Any exit from the await ends this attempt, unless a newer one took over
            stale = generation != self._generation
            if not stale:
                self._reset()

        if stale:
            return _cancelled()

        context = ConnectionContext(
            shapes=snapshot,
            first_shape_id=first_id,
            second_shape_id=second_id,
            point=point,
            flow_type=flow_type,
            flow_direction=flow_direction,
            unidirectional_direction=unidirectional_direction,
            params=self.params,
            config=self.config,
            outcome=outcome,
        )
        return self._apply_policy(context)

    async def _classify(self, first_id: str, second_id: str) -> ValidationOutcome:
        call = self.classifier.classify(first_id, second_id)
        if self.timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, self.timeout)
        except asyncio.TimeoutError as exc:
            raise ClassificationError(
                "Classification service did not answer in time",
                {"timeout": str(self.timeout)},
            ) from exc

    def _apply_policy(self, context: ConnectionContext) -> ConnectionResult:
        rejection = self.registry.evaluate(context)
        if rejection is not None:
            logger.warning("Connection {} <-> {} rejected by {}: {}",
                           context.first_shape_id, context.second_shape_id,
                           rejection.rule_id, rejection.message)
            return ConnectionResult(
                status=rejection.status,
                message=rejection.message,
                details=rejection.details,
                outcome=context.outcome,
                shared_wall=context.shared_wall,
            )

        wall = context.shared_wall
        if wall is None:
            # Shared-edge rule disabled by the policy config
            first = context.get_shape(context.first_shape_id)
            second = context.get_shape(context.second_shape_id)
            if first is None or second is None:
                return _shape_not_found([
                    sid for sid, s in ((context.first_shape_id, first), (context.second_shape_id, second))
                    if s is None
                ])
            wall = SharedWallAnalyzer(self.params).find_shared_edge(first, second, near=context.point)
        if wall is None:
            return ConnectionResult(
                status=ConnectionStatus.NO_SHARED_EDGE,
                message=SHARED_EDGE_MESSAGE,
                outcome=context.outcome,
            )

        door = create_door(
            wall, context.point,
            flow_type=context.flow_type,
            flow_direction=context.flow_direction,
            unidirectional_direction=context.unidirectional_direction,
            params=self.params,
        )
        logger.info("Door {} created on {}", door.id, wall.id)
        return ConnectionResult(
            status=ConnectionStatus.ACCEPTED,
            message="Door connection created successfully",
            outcome=context.outcome,
            shared_wall=wall,
            door=door,
        )

    def _reset(self) -> None:
        self.step = ConnectionStep.IDLE
        self.first_shape_id = None
        self.second_shape_id = None
        self._pending = False
        self._generation += 1


def _cancelled() -> ConnectionResult:
    return ConnectionResult(
        status=ConnectionStatus.CANCELLED,
        message="Connection attempt was cancelled",
    )


def _shape_not_found(missing: list[str]) -> ConnectionResult:
    return ConnectionResult(
        status=ConnectionStatus.REJECTED,
        message="Shape not found",
        details=", ".join(missing),
    )
