"""Shared helpers for built-in operators."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.paths import get_path


def describe(value: Any) -> str:
    """Render *value* as JSON for error messages."""
    return json.dumps(value, default=str)


def values_equal(a: Any, b: Any) -> bool:
    """Deep JSON equality.

    Booleans never equal numbers, so ``True`` and ``1`` differ even
    though Python considers them equal.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(values_equal(a[k], b[k]) for k in a)
    return a == b


def contains(items: list[Any], value: Any) -> bool:
    return any(values_equal(item, value) for item in items)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_list(name: str, value: Any, message: str | None = None) -> list[Any]:
    if not isinstance(value, list):
        raise OperandError(message or f"{name} can only be applied to arrays")
    return value


def require_object(name: str, value: Any, message: str | None = None) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise OperandError(message or f"{name} can only be applied to objects")
    return value


def order(name: str, a: Any, b: Any) -> int:
    """Three-way compare two JSON scalars, raising OperandError on a type clash."""
    try:
        return (a > b) - (a < b)
    except TypeError:
        raise OperandError(
            f"{name} cannot compare {describe(a)} with {describe(b)}"
        ) from None


def matches_conditions(
    conditions: Mapping[str, Any],
    data: Any,
    context: OperatorContext,
) -> bool:
    """True when every ``path: condition`` pair holds for *data*.

    An expression condition is applied to the value at its path; any
    other condition is compared to it for equality.
    """
    for path, condition in conditions.items():
        value = get_path(data, path)
        if context.is_expression(condition):
            if not context.apply(condition, value, path):
                return False
        elif not values_equal(value, condition):
            return False
    return True
