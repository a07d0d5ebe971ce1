"""Form CLI commands: check, lint and rules."""

import json
from pathlib import Path
from typing import Any

import click
import yaml

from formrules.config import ValidationConfig
from formrules.exceptions import FormDefinitionError, UnknownRuleError
from formrules.forms.loader import load_form
from formrules.forms.schema import ERROR, WARNING, SchemaIssue, validate_form_file
from formrules.registry import RuleRegistry
from formrules.runner import FormValidator

EXIT_FAILED = 1
EXIT_USAGE = 2


def _load_values(values_path: Path | None, pairs: tuple[str, ...]) -> dict[str, Any]:
    """Merge values from a YAML file and NAME=VALUE pairs (pairs win)."""
    values: dict[str, Any] = {}

    if values_path is not None:
        try:
            with open(values_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise click.UsageError(f"Invalid YAML in {values_path}: {e}")
        if data is not None and not isinstance(data, dict):
            raise click.UsageError(f"{values_path} must contain a mapping of field values")
        values.update(data or {})

    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise click.UsageError(f"Expected NAME=VALUE, got '{pair}'")
        values[name.strip()] = value

    return values


@click.command()
@click.argument("form_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--values",
    "values_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file mapping field names to submitted values.",
)
@click.option(
    "--value",
    "pairs",
    multiple=True,
    metavar="NAME=VALUE",
    help="Set a single field value. May be repeated.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail on rule names that are not registered.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
def check(
    form_path: Path,
    values_path: Path | None,
    pairs: tuple[str, ...],
    strict: bool,
    as_json: bool,
):
    """Validate submitted values against a form definition."""
    try:
        form = load_form(form_path)
    except FormDefinitionError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(EXIT_USAGE)

    values = _load_values(values_path, pairs)

    config = ValidationConfig.from_env()
    config.strict = config.strict or strict
    validator = FormValidator(config=config)

    try:
        report = validator.validate(form.bind(values))
    except UnknownRuleError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(EXIT_USAGE)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    elif report.valid:
        click.echo(click.style(f"Form '{form.name}' passed.", fg="green", bold=True))
    else:
        for name, messages in report.field_errors.items():
            click.echo(click.style(name, bold=True))
            for message in messages:
                click.echo(click.style(f"  ✗ {message}", fg="red"))
        click.echo(
            click.style(
                f"\nForm '{form.name}' failed: {len(report.errors)} error(s) "
                f"in {len(report.field_errors)} field(s)",
                fg="red",
                bold=True,
            )
        )

    if not report.valid:
        raise SystemExit(EXIT_FAILED)


@click.command()
@click.argument("form_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def lint(form_path: Path):
    """Check a form definition for schema errors and unknown rules."""
    issues = validate_form_file(form_path)

    if not issues:
        form = load_form(form_path)
        for field_name, rule_name in form.unknown_rules(RuleRegistry()):
            issues.append(
                SchemaIssue(
                    file=form_path,
                    message=f"field '{field_name}' uses unknown rule '{rule_name}'",
                    severity=WARNING,
                )
            )

    for issue in issues:
        colour = "red" if issue.severity == ERROR else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if issues:
        click.echo(click.style(f"\n{len(issues)} issue(s) found", fg="red", bold=True))
        raise SystemExit(EXIT_FAILED)

    click.echo(click.style("Form definition is valid.", fg="green", bold=True))


@click.command()
def rules():
    """List the built-in rules and their message templates."""
    registry = RuleRegistry()
    for name in registry.list_registered():
        rule = registry.resolve(name)
        click.echo(f"{name:<14} {rule.message}")
