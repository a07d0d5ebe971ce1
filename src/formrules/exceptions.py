"""Exceptions raised by formrules.

Validation failures are never raised; they are recorded on the runner.
These exceptions cover configuration problems only.
"""


class FormRulesError(Exception):
    """Base class for all formrules errors."""


class UnknownRuleError(FormRulesError, ValueError):
    """A rule specification names a rule that is not registered.

    Only raised when the runner is configured in strict mode.
    """

    def __init__(self, rule_name: str, field_name: str):
        self.rule_name = rule_name
        self.field_name = field_name
        super().__init__(
            f"Rule '{rule_name}' on field '{field_name}' is not registered."
        )


class FormDefinitionError(FormRulesError, ValueError):
    """A form definition file is structurally invalid."""
