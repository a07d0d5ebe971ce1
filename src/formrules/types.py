"""Core types for the formrules validation engine.

This module defines the types shared by the registry and the runner:
- FieldHandle: what the runner needs to know about an input field
- Rule: a named predicate paired with a message template
- RuleInvocation: one ``name[params]`` occurrence in a rule specification
- ValidationReport: an immutable snapshot of one validation pass
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class FieldHandle(Protocol):
    """Protocol for an input field carrying a rule specification.

    Any UI or data binding can implement this. The runner only reads the
    three attributes below and never mutates the field.
    """

    @property
    def name(self) -> str:
        """Human name of the field; keys the error state and fills {name}."""
        ...

    @property
    def value(self) -> Any:
        """Current raw value of the field."""
        ...

    @property
    def rules(self) -> str | None:
        """Rule specification, e.g. ``"required|between[1,10]"``."""
        ...


# Predicate signature: (value, field, params) -> truthy when the value is valid
RulePredicate = Callable[[str, Any, list[str]], Any]


@dataclass
class FormField:
    """A plain field implementation of FieldHandle.

    Attributes:
        name: Field name used for error keys and messages
        value: Current value
        rules: Rule specification string (empty means no rules)
    """

    name: str
    value: Any = ""
    rules: str | None = ""


@dataclass
class Rule:
    """A registered validation rule.

    Attributes:
        name: Unique rule name within a registry
        predicate: Callable returning a truthy result when the value is valid
        message: Message template with {name}, {val}, {param1}... placeholders
    """

    name: str
    predicate: RulePredicate
    message: str


@dataclass(frozen=True)
class RuleInvocation:
    """A single rule reference parsed from a rule specification."""

    name: str
    params: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationReport:
    """Result of one validation pass.

    Attributes:
        field_errors: Field name -> messages, in first-failure order
    """

    field_errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.field_errors

    @property
    def errors(self) -> list[str]:
        return [message for messages in self.field_errors.values() for message in messages]

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "fieldErrors": {name: list(messages) for name, messages in self.field_errors.items()},
            "errors": self.errors,
        }
