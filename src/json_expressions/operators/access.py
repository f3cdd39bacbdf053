"""Access operators: reading values out of the input data."""

from __future__ import annotations

from typing import Any

from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import describe
from json_expressions.paths import get_path


def get(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """``{"$get": "a.b[0]"}`` reads a path; ``$`` wildcards fan out over lists.

    The object form ``{"path": ..., "default": ...}`` falls back to
    *default* when the path resolves to None.
    """
    if isinstance(operand, dict) and "path" in operand:
        path = context.apply(operand["path"], input_data, "path")
        value = get_path(input_data, path, allow_wildcards=True)
        if value is None and "default" in operand:
            return context.apply(operand["default"], input_data, "default")
        return value

    path = context.apply(operand, input_data)
    if not isinstance(path, (str, int, list)):
        raise OperandError(
            f"$get operand must resolve to a path string, index or list, got {describe(path)}"
        )
    return get_path(input_data, path, allow_wildcards=True)


def prop(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """Single property or index lookup, no path parsing."""
    key = context.apply(operand, input_data)
    if isinstance(input_data, dict):
        return input_data.get(key)
    if isinstance(input_data, list) and isinstance(key, int) and not isinstance(key, bool):
        return input_data[key] if -len(input_data) <= key < len(input_data) else None
    return None


def identity(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    return input_data


def is_defined(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    return context.apply(operand, input_data) is not None


def exists(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    path = context.apply(operand, input_data)
    if not isinstance(path, str):
        raise OperandError("$exists operand must resolve to a string path")
    return get_path(input_data, path) is not None


def select(operand: Any, input_data: Any, context: OperatorContext) -> dict[str, Any]:
    """Project the input into a new object.

    A list of paths copies those properties that are present; a mapping
    of ``new_key: expression`` computes each value.
    """
    if isinstance(operand, list):
        result: dict[str, Any] = {}
        for i, item in enumerate(operand):
            key = item if isinstance(item, str) else context.apply(item, input_data, i)
            value = get_path(input_data, key)
            if value is not None:
                result[key] = value
        return result

    if isinstance(operand, dict):
        return {
            key: context.apply(expression, input_data, key)
            for key, expression in operand.items()
        }

    raise OperandError(
        "$select operand must be array of paths or object with key mappings"
    )


OPERATORS = {
    "$exists": exists,
    "$get": get,
    "$identity": identity,
    "$isDefined": is_defined,
    "$prop": prop,
    "$select": select,
}
