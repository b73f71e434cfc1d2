"""Shared edge — a door needs a physical wall between the two shapes."""

from __future__ import annotations

from loguru import logger

from layoutcore.core.analyzer import SharedWallAnalyzer
from layoutcore.rules.base import ConnectionRule
from layoutcore.models import ConnectionContext, ConnectionStatus, Rejection


SHARED_EDGE_MESSAGE = "Shapes must share a common edge to create a door connection"


class SharedEdgeRule(ConnectionRule):
    """Locates the wall the door goes on; rejects if the shapes don't touch."""

    priority = 50

    def get_id(self) -> str:
        return "connection.shared_edge"

    def get_name(self) -> str:
        return "Shapes Share an Edge"

    def check(self, context: ConnectionContext) -> Rejection | None:
        first = context.get_shape(context.first_shape_id)
        second = context.get_shape(context.second_shape_id)
        if first is None or second is None:
            return self.reject(SHARED_EDGE_MESSAGE, "One of the shapes no longer exists",
                               status=ConnectionStatus.NO_SHARED_EDGE)

        wall = SharedWallAnalyzer(context.params).find_shared_edge(first, second, near=context.point)
        if wall is None:
            logger.warning(
                "Classifier allowed {} <-> {} but they share no edge",
                first.id, second.id,
            )
            return self.reject(SHARED_EDGE_MESSAGE, status=ConnectionStatus.NO_SHARED_EDGE)

        context.shared_wall = wall
        return None
