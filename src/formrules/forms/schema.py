"""
forms/schema.py: JSON Schema validation for form definition files.

Usage:
    from formrules.forms.schema import validate_form_file

    issues = validate_form_file(Path("forms/signup.yaml"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "form.schema.json"


ERROR = "error"
WARNING = "warning"


@dataclass
class SchemaIssue:
    """One problem found in a form definition file.

    Attributes:
        file: The YAML file the issue was found in
        message: Human-readable description
        path: Where in the document the issue sits, such as ``fields[0]``;
            empty when it concerns the whole file
        severity: ``ERROR`` or ``WARNING``
    """

    file: Path
    message: str
    path: str = ""
    severity: str = ERROR

    def __str__(self) -> str:
        where = f"{self.file} at {self.path}" if self.path else str(self.file)
        return f"[{self.severity.upper()}] {where}: {self.message}"


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _location(error: ValidationError) -> str:
    """Render the failing element's position, e.g. ``fields[2]/rules``."""
    location = ""
    for key in error.absolute_path:
        if isinstance(key, int):
            location += f"[{key}]"
        else:
            location += f"/{key}" if location else str(key)
    return location


def validate_form_file(yaml_path: Path) -> list[SchemaIssue]:
    """
    Validate a form definition file against the bundled JSON Schema.

    Args:
        yaml_path: Path to the YAML file to validate.

    Returns:
        A list of :class:`SchemaIssue` objects (empty on success).
    """
    yaml_path = Path(yaml_path)

    try:
        with yaml_path.open() as fh:
            doc = yaml.safe_load(fh)
    except OSError as exc:
        return [SchemaIssue(file=yaml_path, message=f"Cannot read file: {exc}")]
    except yaml.YAMLError as exc:
        return [SchemaIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [
            SchemaIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    validator = Draft202012Validator(_load_schema())
    issues = [
        SchemaIssue(file=yaml_path, message=error.message, path=_location(error))
        for error in sorted(validator.iter_errors(doc), key=_location)
    ]
    if issues:
        logger.debug("%s has %d schema issue(s)", yaml_path, len(issues))
    return issues
