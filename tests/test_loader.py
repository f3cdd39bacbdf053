"""Tests for document loading and JSON Schema input validation."""

from __future__ import annotations

import json

import pytest

from json_expressions.errors import ExpressionLoadError, InputValidationError
from json_expressions.loader import load_document, load_schema, validate_input


# ── load_document ─────────────────────────────────────────────────────────────

def test_load_json(tmp_path):
    f = tmp_path / "expr.json"
    f.write_text(json.dumps({"$get": "name"}))
    assert load_document(f) == {"$get": "name"}


def test_load_yaml(tmp_path):
    f = tmp_path / "expr.yaml"
    f.write_text(
        """\
$pipe:
  - $get: children
  - $map:
      $get: name
"""
    )
    assert load_document(f) == {"$pipe": [{"$get": "children"}, {"$map": {"$get": "name"}}]}


def test_load_accepts_str_path(tmp_path):
    f = tmp_path / "data.json"
    f.write_text("[1, 2, 3]")
    assert load_document(str(f)) == [1, 2, 3]


def test_empty_file_is_none(tmp_path):
    f = tmp_path / "empty.yaml"
    f.write_text("")
    assert load_document(f) is None


def test_missing_file(tmp_path):
    with pytest.raises(ExpressionLoadError, match="File not found"):
        load_document(tmp_path / "nope.json")


def test_invalid_yaml(tmp_path):
    f = tmp_path / "bad.yaml"
    f.write_text("key: [unclosed")
    with pytest.raises(ExpressionLoadError, match="Invalid JSON/YAML"):
        load_document(f)


# ── load_schema ───────────────────────────────────────────────────────────────

def test_load_schema(tmp_path):
    f = tmp_path / "schema.json"
    f.write_text(json.dumps({"type": "object", "required": ["name"]}))
    assert load_schema(f)["required"] == ["name"]


def test_schema_must_be_mapping(tmp_path):
    f = tmp_path / "schema.json"
    f.write_text("[]")
    with pytest.raises(ExpressionLoadError, match="must be a mapping"):
        load_schema(f)


def test_schema_must_be_valid(tmp_path):
    f = tmp_path / "schema.json"
    f.write_text(json.dumps({"type": "not-a-type"}))
    with pytest.raises(ExpressionLoadError, match="Invalid JSON Schema"):
        load_schema(f)


# ── validate_input ────────────────────────────────────────────────────────────

SCHEMA = {
    "type": "object",
    "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
    "required": ["name"],
}


def test_valid_input():
    validate_input(SCHEMA, {"name": "Kai", "age": 4})


def test_missing_required():
    with pytest.raises(InputValidationError, match="'name' is a required property"):
        validate_input(SCHEMA, {"age": 4})


def test_wrong_type():
    with pytest.raises(InputValidationError, match="Input validation failed"):
        validate_input(SCHEMA, {"name": 5})
