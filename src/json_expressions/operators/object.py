"""Object operators: merging, key selection and introspection."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import require_object


def merge(operand: Any, input_data: Any, context: OperatorContext) -> dict[str, Any]:
    """Shallow-merge a list of objects, later keys winning.

    A single object operand is merged over the input data.
    """
    resolved = context.apply(operand, input_data)
    if isinstance(resolved, dict):
        sources = [require_object("$merge", input_data), resolved]
    elif isinstance(resolved, list):
        sources = resolved
    else:
        raise OperandError("$merge operand must be an array of objects to merge")

    merged: dict[str, Any] = {}
    for source in sources:
        merged.update(require_object("$merge", source, "$merge can only merge objects"))
    return merged


def _key_filter(name: str, keep: bool):
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> dict[str, Any]:
        if not isinstance(operand, list):
            raise OperandError(f"{name} operand must be an array of property names")
        data = require_object(name, input_data, f"{name} must be applied to an object")
        keys = {context.apply(key, input_data, i) for i, key in enumerate(operand)}
        return {k: v for k, v in data.items() if (k in keys) == keep}

    return operator


pick = _key_filter("$pick", keep=True)
omit = _key_filter("$omit", keep=False)


def _extract(name: str, fn: Callable[[dict[str, Any]], Any]):
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> Any:
        return fn(require_object(name, input_data))

    return operator


keys = _extract("$keys", lambda data: list(data))
values = _extract("$values", lambda data: list(data.values()))
pairs = _extract("$pairs", lambda data: [[k, v] for k, v in data.items()])


def from_pairs(operand: Any, input_data: Any, context: OperatorContext) -> dict[str, Any]:
    message = "$fromPairs can only be applied to arrays of [key, value] pairs"
    if not isinstance(input_data, list):
        raise OperandError(message)
    result: dict[str, Any] = {}
    for pair in input_data:
        if not isinstance(pair, list) or len(pair) != 2:
            raise OperandError(message)
        key, value = pair
        result[key] = value
    return result


OPERATORS = {
    "$fromPairs": from_pairs,
    "$keys": keys,
    "$merge": merge,
    "$omit": omit,
    "$pairs": pairs,
    "$pick": pick,
    "$values": values,
}
