"""Connection rules — one condition each that a door connection must meet."""

from __future__ import annotations
from abc import ABC, abstractmethod

from layoutcore.models import ConnectionContext, Rejection


class ConnectionRule(ABC):
    """
    Base class for all connection rules.

    Subclasses implement `applies()` and `check()`.
    The registry sorts rules by `priority`, skips those whose
    `applies()` is False and calls `check()` in order. The first
    rejection ends the attempt.
    """

    # Lower priority = runs first. Default 100.
    priority: int = 100

    @abstractmethod
    def get_id(self) -> str:
        """Unique identifier for this rule (e.g., 'connection.flow_type')."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable name (e.g., 'Allowed Flow Type')."""
        ...

    def applies(self, context: ConnectionContext) -> bool:
        """Return True if this rule should run for the given context."""
        return True

    @abstractmethod
    def check(self, context: ConnectionContext) -> Rejection | None:
        """
        Return a Rejection if the connection breaks this rule, else None.

        Rules may record findings on the context (e.g. the shared wall)
        for later rules and for the gateway.
        """
        ...

    def reject(self, message: str, details: str | None = None, **kwargs) -> Rejection:
        return Rejection(rule_id=self.get_id(), message=message, details=details, **kwargs)
