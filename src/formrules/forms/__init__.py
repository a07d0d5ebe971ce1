"""Form definitions: YAML-backed field discovery for the validation runner."""

from formrules.forms.loader import FieldDefinition, FormDefinition, FormLoader, load_form
from formrules.forms.schema import SchemaIssue, validate_form_file

__all__ = [
    "FieldDefinition",
    "FormDefinition",
    "FormLoader",
    "SchemaIssue",
    "load_form",
    "validate_form_file",
]
