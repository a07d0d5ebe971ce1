"""Load form definitions from YAML files.

A form definition lists the fields of a form and the rule specification each
one carries:

    form: signup
    fields:
      - name: email
        rules: required|email
      - name: age
        rules: numeric|between[17,120]
        value: "30"
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from formrules.exceptions import FormDefinitionError
from formrules.parser import parse_rules
from formrules.registry import RuleRegistry
from formrules.types import FormField

logger = logging.getLogger(__name__)


@dataclass
class FieldDefinition:
    name: str
    rules: str = ""
    value: Any = None


@dataclass
class FormDefinition:
    """A named, ordered set of field definitions."""

    name: str
    fields: list[FieldDefinition] = field(default_factory=list)
    description: str = ""

    def bind(self, values: Mapping[str, Any] | None = None) -> list[FormField]:
        """Create fields carrying the given values.

        Each field takes its value from ``values``, falling back to the value
        declared in the definition, then to an empty string.

        Args:
            values: Field name -> submitted value

        Returns:
            FormField objects in declaration order
        """
        values = values or {}
        bound = []
        for definition in self.fields:
            value = values.get(definition.name, definition.value)
            bound.append(
                FormField(
                    name=definition.name,
                    value="" if value is None else value,
                    rules=definition.rules,
                )
            )
        return bound

    def unknown_rules(self, registry: RuleRegistry) -> list[tuple[str, str]]:
        """List (field name, rule name) pairs that the registry cannot resolve."""
        missing = []
        for definition in self.fields:
            for invocation in parse_rules(definition.rules):
                if not registry.is_registered(invocation.name):
                    missing.append((definition.name, invocation.name))
        return missing


class FormLoader:
    """Loads a form definition from a YAML file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> FormDefinition:
        """Parse and resolve the form definition.

        Raises:
            FormDefinitionError: If the file cannot be read or is malformed
        """
        try:
            with open(self.path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise FormDefinitionError(f"Cannot read form definition {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise FormDefinitionError(f"Invalid YAML in {self.path}: {e}") from e

        return self._resolve_form(data)

    def _resolve_form(self, data: Any) -> FormDefinition:
        if not isinstance(data, dict) or "form" not in data:
            raise FormDefinitionError(f"{self.path} must define a 'form' mapping")

        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, list):
            raise FormDefinitionError(f"Form '{data['form']}' fields must be a list")

        fields = [self._resolve_field(raw, index) for index, raw in enumerate(raw_fields)]

        seen: set[str] = set()
        for definition in fields:
            if definition.name in seen:
                # Messages for both fields accumulate under the one name
                logger.warning(
                    "Form '%s' declares field '%s' more than once",
                    data["form"],
                    definition.name,
                )
            seen.add(definition.name)

        return FormDefinition(
            name=str(data["form"]),
            fields=fields,
            description=data.get("description", ""),
        )

    def _resolve_field(self, raw: Any, index: int) -> FieldDefinition:
        if not isinstance(raw, dict) or not raw.get("name"):
            raise FormDefinitionError(
                f"Field #{index + 1} in {self.path} must be a mapping with a 'name'"
            )
        return FieldDefinition(
            name=str(raw["name"]),
            rules=raw.get("rules") or "",
            value=raw.get("value"),
        )


def load_form(path: Path) -> FormDefinition:
    """Load a form definition from ``path``."""
    return FormLoader(path).load()
