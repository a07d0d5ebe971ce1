"""
Tests for formrules.forms

Covers:
  - FormLoader / load_form   (YAML parsing, structural errors)
  - FormDefinition.bind()    (value precedence)
  - FormDefinition.unknown_rules()
  - validate_form_file()     (JSON Schema checks)
"""
from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from formrules.exceptions import FormDefinitionError
from formrules.forms.loader import FieldDefinition, FormDefinition, FormLoader, load_form
from formrules.forms.schema import WARNING, SchemaIssue, validate_form_file
from formrules.registry import RuleRegistry
from formrules.runner import FormValidator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SIGNUP = {
    "form": "signup",
    "fields": [
        {"name": "username", "rules": "required|alpha_dash|between[2,16]"},
        {"name": "email", "rules": "required|email"},
        {"name": "age", "rules": "numeric|min[18]", "value": "30"},
        {"name": "nickname"},
    ],
}


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.dump(data))
    return path


def _write_raw(path: Path, content: str) -> Path:
    path.write_text(content)
    return path


@pytest.fixture
def signup_file(tmp_path):
    return _write_yaml(tmp_path / "signup.yaml", SIGNUP)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class TestFormLoader:
    def test_loads_fields_in_order(self, signup_file):
        form = load_form(signup_file)

        assert form.name == "signup"
        assert [f.name for f in form.fields] == ["username", "email", "age", "nickname"]
        assert form.fields[0].rules == "required|alpha_dash|between[2,16]"
        assert form.fields[2].value == "30"

    def test_missing_rules_become_empty(self, signup_file):
        form = FormLoader(signup_file).load()
        assert form.fields[3] == FieldDefinition(name="nickname", rules="", value=None)

    def test_empty_field_list(self, tmp_path):
        path = _write_yaml(tmp_path / "empty.yaml", {"form": "empty", "fields": None})
        assert load_form(path).fields == []

    def test_missing_form_key(self, tmp_path):
        path = _write_yaml(tmp_path / "bad.yaml", {"fields": []})
        with pytest.raises(FormDefinitionError, match="'form'"):
            load_form(path)

    def test_fields_must_be_a_list(self, tmp_path):
        path = _write_yaml(tmp_path / "bad.yaml", {"form": "x", "fields": {"a": 1}})
        with pytest.raises(FormDefinitionError, match="must be a list"):
            load_form(path)

    def test_field_needs_a_name(self, tmp_path):
        path = _write_yaml(tmp_path / "bad.yaml", {"form": "x", "fields": [{"rules": "required"}]})
        with pytest.raises(FormDefinitionError, match="Field #1"):
            load_form(path)

    def test_invalid_yaml(self, tmp_path):
        path = _write_raw(tmp_path / "bad.yaml", "form: [unclosed\n")
        with pytest.raises(FormDefinitionError, match="Invalid YAML"):
            load_form(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FormDefinitionError, match="Cannot read"):
            load_form(tmp_path / "missing.yaml")

    def test_duplicate_field_names_warn(self, tmp_path, caplog):
        path = _write_yaml(
            tmp_path / "dup.yaml",
            {"form": "dup", "fields": [{"name": "a"}, {"name": "a"}]},
        )
        with caplog.at_level(logging.WARNING, logger="formrules.forms.loader"):
            form = load_form(path)

        assert len(form.fields) == 2
        assert "more than once" in caplog.text


# ---------------------------------------------------------------------------
# FormDefinition
# ---------------------------------------------------------------------------


class TestBind:
    def test_submitted_values_win(self, signup_file):
        fields = load_form(signup_file).bind({"username": "bob", "age": "12"})
        values = {f.name: f.value for f in fields}

        assert values == {"username": "bob", "email": "", "age": "12", "nickname": ""}

    def test_declared_value_is_the_fallback(self, signup_file):
        fields = load_form(signup_file).bind()
        assert fields[2].value == "30"

    def test_bound_fields_carry_rules(self, signup_file):
        fields = load_form(signup_file).bind()
        assert fields[1].rules == "required|email"

    def test_bound_fields_validate(self, signup_file):
        form = load_form(signup_file)
        validator = FormValidator()

        validator.run(form.bind({"username": "bob_1", "email": "bob@", "age": "12"}))

        assert dict(validator.field_errors()) == {
            "email": ["bob@ is not a valid email address"],
            "age": ["age must be minimum 18."],
        }


class TestUnknownRules:
    def test_reports_unregistered_rules(self):
        form = FormDefinition(
            name="x",
            fields=[
                FieldDefinition(name="a", rules="required|colour"),
                FieldDefinition(name="b", rules="Shape[3]"),
            ],
        )
        assert form.unknown_rules(RuleRegistry()) == [("a", "colour"), ("b", "shape")]

    def test_known_rules_only(self, signup_file):
        assert load_form(signup_file).unknown_rules(RuleRegistry()) == []


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestValidateFormFile:
    def test_valid_file(self, signup_file):
        assert validate_form_file(signup_file) == []

    def test_unexpected_property(self, tmp_path):
        data = {"form": "x", "fields": [{"name": "a", "colour": "red"}]}
        issues = validate_form_file(_write_yaml(tmp_path / "f.yaml", data))

        assert len(issues) == 1
        assert "Additional properties" in issues[0].message
        assert issues[0].path == "fields[0]"

    def test_missing_field_name(self, tmp_path):
        data = {"form": "x", "fields": [{"rules": "required"}]}
        issues = validate_form_file(_write_yaml(tmp_path / "f.yaml", data))

        assert any("'name' is a required property" in i.message for i in issues)

    def test_missing_form(self, tmp_path):
        issues = validate_form_file(_write_yaml(tmp_path / "f.yaml", {"fields": []}))
        assert any("'form' is a required property" in i.message for i in issues)

    def test_empty_file(self, tmp_path):
        issues = validate_form_file(_write_raw(tmp_path / "f.yaml", "   \n"))
        assert len(issues) == 1
        assert "empty" in issues[0].message

    def test_yaml_error(self, tmp_path):
        issues = validate_form_file(_write_raw(tmp_path / "f.yaml", "form: [oops\n"))
        assert issues[0].message.startswith("YAML parse error")

    def test_issue_str(self, tmp_path):
        issue = SchemaIssue(file=Path("f.yaml"), message="bad", path="fields[0]")
        assert str(issue) == "[ERROR] f.yaml at fields[0]: bad"

    def test_issue_str_without_path(self):
        issue = SchemaIssue(file=Path("f.yaml"), message="unknown rule", severity=WARNING)
        assert str(issue) == "[WARNING] f.yaml: unknown rule"

    def test_nested_location(self, tmp_path):
        data = {"form": "x", "fields": [{"name": "a"}, {"name": "b", "rules": 5}]}
        issues = validate_form_file(_write_yaml(tmp_path / "f.yaml", data))

        assert [i.path for i in issues] == ["fields[1]/rules"]
