"""formrules: declarative form field validation.

Fields carry rule specifications such as ``"required|between[1,10]"``. The
runner evaluates each named rule from a RuleRegistry and collects
human-readable error messages per field.

Usage:
    from formrules import FormField, FormValidator, RuleRegistry

    registry = RuleRegistry()
    registry.update_message("required", "Please fill in {name}")

    validator = FormValidator(registry)
    validator.run([FormField("email", "", "required|email")])
    validator.failed()        # True
    validator.field_errors()  # {"email": ["Please fill in email", " is not a valid email address"]}
"""

from formrules.config import ValidationConfig
from formrules.exceptions import FormDefinitionError, FormRulesError, UnknownRuleError
from formrules.messages import MessageFormatter
from formrules.parser import parse_rules
from formrules.registry import RuleRegistry
from formrules.runner import FormValidator
from formrules.types import (
    FieldHandle,
    FormField,
    Rule,
    RuleInvocation,
    RulePredicate,
    ValidationReport,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "FieldHandle",
    "FormField",
    "Rule",
    "RuleInvocation",
    "RulePredicate",
    "ValidationReport",
    # Registry
    "RuleRegistry",
    # Runner
    "FormValidator",
    "MessageFormatter",
    "ValidationConfig",
    "parse_rules",
    # Errors
    "FormDefinitionError",
    "FormRulesError",
    "UnknownRuleError",
]
