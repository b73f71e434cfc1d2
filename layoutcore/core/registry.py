"""Connection policy — the ordered checks a door connection must pass."""

from __future__ import annotations
from typing import Iterable

from loguru import logger

from layoutcore.exceptions import ConfigurationError
from layoutcore.models import ConnectionContext, PolicyConfig, Rejection
from layoutcore.rules.base import ConnectionRule


class RuleRegistry:
    """
    Holds the connection rules and runs them for one attempt.

    Rules run by ascending priority (ties broken by id). The first
    rejection ends the run, so later rules may rely on earlier ones
    having passed.
    """

    def __init__(self, rules: Iterable[ConnectionRule] = ()) -> None:
        self._rules: dict[str, ConnectionRule] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: ConnectionRule) -> None:
        rule_id = rule.get_id()
        if rule_id in self._rules:
            raise ConfigurationError("Connection rule registered twice", {"rule_id": rule_id})
        self._rules[rule_id] = rule

    def get_rule(self, rule_id: str) -> ConnectionRule | None:
        return self._rules.get(rule_id)

    def list_rules(self) -> list[ConnectionRule]:
        """All registered rules, in the order they run."""
        return sorted(self._rules.values(), key=lambda r: (r.priority, r.get_id()))

    def active_rules(self, config: PolicyConfig) -> list[ConnectionRule]:
        """Rules left after the config's enabled/disabled lists."""
        unknown = set(config.enabled_rules) | set(config.disabled_rules)
        unknown -= self._rules.keys()
        if unknown:
            logger.warning("Policy config names unknown rules: {}", ", ".join(sorted(unknown)))

        return [
            r for r in self.list_rules()
            if (not config.enabled_rules or r.get_id() in config.enabled_rules)
            and r.get_id() not in config.disabled_rules
        ]

    def evaluate(self, context: ConnectionContext) -> Rejection | None:
        """Run the active rules against `context`; return the first rejection."""
        for rule in self.active_rules(context.config):
            if not rule.applies(context):
                continue
            rejection = rule.check(context)
            if rejection is not None:
                return rejection
        return None


def create_default_registry() -> RuleRegistry:
    """Classification verdict, then flow type, then the shared wall."""
    from layoutcore.rules.connection.classification import ClassificationRule
    from layoutcore.rules.connection.flow_type import FlowTypeRule
    from layoutcore.rules.connection.shared_edge import SharedEdgeRule

    return RuleRegistry([ClassificationRule(), FlowTypeRule(), SharedEdgeRule()])
