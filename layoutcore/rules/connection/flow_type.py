"""Flow type — the requested traffic must be one the classifier allows."""

from __future__ import annotations

from layoutcore.rules.base import ConnectionRule
from layoutcore.models import ConnectionContext, Rejection


class FlowTypeRule(ConnectionRule):
    """Rejects a door whose flow type is not in the allowed set."""

    priority = 20

    def get_id(self) -> str:
        return "connection.flow_type"

    def get_name(self) -> str:
        return "Allowed Flow Type"

    def check(self, context: ConnectionContext) -> Rejection | None:
        if context.flow_type in context.outcome.allowed_flow_types:
            return None
        allowed = ", ".join(ft.value for ft in context.outcome.sorted_flow_types()) or "none"
        return self.reject(f"{context.flow_type.value} flow not allowed. Allowed: {allowed}")
