"""Classification verdict — the service must allow the pair at all."""

from __future__ import annotations

from layoutcore.rules.base import ConnectionRule
from layoutcore.models import ConnectionContext, Rejection


class ClassificationRule(ConnectionRule):
    """Rejects pairs the classification service marks as not connectable."""

    priority = 10

    def get_id(self) -> str:
        return "connection.classification"

    def get_name(self) -> str:
        return "Classification Allows Connection"

    def check(self, context: ConnectionContext) -> Rejection | None:
        outcome = context.outcome
        if outcome.can_connect:
            return None
        return self.reject(outcome.message or "Connection not allowed", outcome.details)
