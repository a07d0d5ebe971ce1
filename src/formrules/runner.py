"""Validation runner for formrules.

Runs every rule named in each field's rule specification and collects the
failure messages per field. The collected error state belongs to the runner
and is replaced, not merged, on every run.
"""

import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from formrules.config import ValidationConfig
from formrules.exceptions import UnknownRuleError
from formrules.messages import MessageFormatter
from formrules.parser import parse_rules
from formrules.registry import RuleRegistry
from formrules.types import FieldHandle, ValidationReport

logger = logging.getLogger(__name__)


class FormValidator:
    """Evaluates rule specifications against a set of fields.

    Validation failures are recorded, never raised. Unknown rule names are
    skipped unless the config enables strict mode. Exceptions raised by a
    predicate propagate to the caller of ``run``.

    Example:
        validator = FormValidator()
        validator.run([FormField("email", "bob@", "required|email")])
        if validator.failed():
            print(validator.all_errors())
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        config: ValidationConfig | None = None,
        formatter: MessageFormatter | None = None,
    ):
        self.registry = registry if registry is not None else RuleRegistry()
        self.config = config or ValidationConfig()
        self.formatter = formatter or MessageFormatter()
        self._errors: dict[str, list[str]] = {}

    def run(self, fields: Iterable[FieldHandle]) -> None:
        """Validate all fields, replacing the previous error state.

        Args:
            fields: Fields to validate, in the order their errors should be reported

        Raises:
            UnknownRuleError: In strict mode, for an unregistered rule name
        """
        self._errors = {}
        checked = 0

        for field in fields:
            invocations = parse_rules(field.rules)
            if not invocations:
                continue

            value = self._read_value(field)
            for invocation in invocations:
                rule = self.registry.resolve(invocation.name)
                if rule is None:
                    if self.config.strict:
                        raise UnknownRuleError(invocation.name, field.name)
                    logger.debug(
                        "Rule '%s' on field '%s' is not registered, skipping",
                        invocation.name,
                        field.name,
                    )
                    continue

                checked += 1
                if rule.predicate(value, field, invocation.params):
                    continue

                message = self.formatter.format(
                    rule.message, field.name, value, invocation.params
                )
                self._errors.setdefault(field.name, []).append(message)

        logger.info(
            "Validation run checked %d rule(s): %d field(s) failed",
            checked,
            len(self._errors),
        )

    def validate(self, fields: Iterable[FieldHandle]) -> ValidationReport:
        """Run validation and return a snapshot of the result."""
        self.run(fields)
        return self.report()

    def passed(self) -> bool:
        """True if the last run recorded no errors."""
        return not self._errors

    def failed(self) -> bool:
        """True if the last run recorded at least one error."""
        return not self.passed()

    def field_errors(self) -> Mapping[str, list[str]]:
        """Read-only view of field name -> error messages from the last run."""
        return MappingProxyType(
            {name: list(messages) for name, messages in self._errors.items()}
        )

    def all_errors(self) -> list[str]:
        """All error messages from the last run, field by field."""
        return [message for messages in self._errors.values() for message in messages]

    def report(self) -> ValidationReport:
        """Snapshot of the last run."""
        return ValidationReport(
            field_errors={name: list(messages) for name, messages in self._errors.items()}
        )

    def _read_value(self, field: FieldHandle) -> str:
        value: Any = field.value
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)
