"""Rule registry for formrules.

Provides registration and lookup for validation rules:
- Built-in rules (seeded on construction)
- Application rules (registered at startup, or overriding a built-in)
"""

import logging
from typing import Callable

from formrules.parser import normalize_rule_name
from formrules.rules.builtin import register_builtin_rules
from formrules.types import Rule, RulePredicate

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Registry mapping rule names to predicates and message templates.

    Registries are plain objects: construct one per application (or per
    test) and pass it to the runner. Registering a name that already
    exists replaces the rule; this is how applications override built-ins.

    Names are trimmed and lower-cased on every call, the same way rule
    specifications are parsed, so "NoFoo" and "nofoo" are one rule.

    Example:
        registry = RuleRegistry()

        @registry.rule("even", "{name} must be an even number")
        def even(value, field, params):
            return value.isdigit() and int(value) % 2 == 0
    """

    def __init__(self, include_builtins: bool = True):
        self._rules: dict[str, Rule] = {}
        if include_builtins:
            register_builtin_rules(self)

    def register(self, name: str, predicate: RulePredicate, message: str) -> None:
        """Register a rule by name.

        Re-registering an existing name replaces the previous rule.

        Args:
            name: Rule name as used in rule specifications
            predicate: Callable ``(value, field, params)`` returning truthy when valid
            message: Message template for failures
        """
        name = normalize_rule_name(name)
        if name in self._rules:
            logger.debug("Rule '%s' redefined", name)
        self._rules[name] = Rule(name=name, predicate=predicate, message=message)

    def update_message(self, name: str, message: str) -> None:
        """Replace the message template of a registered rule.

        Unknown names are ignored.
        """
        rule = self.resolve(name)
        if rule is None:
            return
        rule.message = message

    def resolve(self, name: str) -> Rule | None:
        """Get a registered rule by name, or None if it is not registered."""
        return self._rules.get(normalize_rule_name(name))

    def rule(self, name: str, message: str) -> Callable[[RulePredicate], RulePredicate]:
        """Decorator to register a predicate function.

        Usage:
            @registry.rule("even", "{name} must be even")
            def even(value, field, params):
                ...
        """

        def decorator(fn: RulePredicate) -> RulePredicate:
            self.register(name, fn, message)
            return fn

        return decorator

    def is_registered(self, name: str) -> bool:
        """Check if a rule is registered."""
        return self.resolve(name) is not None

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules.keys())

    def copy(self) -> "RuleRegistry":
        """Create an independent registry holding the same rules."""
        clone = RuleRegistry(include_builtins=False)
        for rule in self._rules.values():
            clone.register(rule.name, rule.predicate, rule.message)
        return clone

    def clear(self) -> None:
        """Remove all registered rules."""
        self._rules.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    def __len__(self) -> int:
        return len(self._rules)
