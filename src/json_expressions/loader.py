"""Expression and data document loading, plus JSON Schema input checks."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jsonschema
import yaml

from json_expressions.errors import ExpressionLoadError, InputValidationError


def load_document(path: str | Path) -> Any:
    """Load a JSON or YAML document from a file.

    YAML is a superset of JSON, so both parse with ``yaml.safe_load``.
    An empty file loads as None.

    Raises:
        ExpressionLoadError: If the file doesn't exist or doesn't parse.
    """
    path = Path(path)
    if not path.is_file():
        raise ExpressionLoadError(f"File not found: {path}")

    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ExpressionLoadError(f"Invalid JSON/YAML in {path}: {e}") from e


def load_schema(path: str | Path) -> dict[str, Any]:
    """Load a JSON Schema document and check that it is itself valid.

    Raises:
        ExpressionLoadError: Missing file, parse failure, or a document
            that is not a valid JSON Schema.
    """
    schema = load_document(path)
    if not isinstance(schema, dict):
        raise ExpressionLoadError(
            f"Schema in {path} must be a mapping, got {type(schema).__name__}"
        )
    try:
        jsonschema.validators.validator_for(schema).check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ExpressionLoadError(f"Invalid JSON Schema in {path}: {e.message}") from e
    return schema


def validate_input(schema: dict[str, Any], data: Any) -> None:
    """Validate input data against a JSON Schema.

    Raises:
        InputValidationError: If data doesn't match schema.
    """
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise InputValidationError(f"Input validation failed: {e.message}") from e
