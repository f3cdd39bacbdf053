"""Flow operators: pipelines, fallbacks, sorting and the literal escape."""

from __future__ import annotations

import functools
from typing import Any

from json_expressions import engine_logger
from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import order, require_list
from json_expressions.paths import get_path


def literal(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """Return the operand untouched, whatever it looks like."""
    return operand


def pipe(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """Feed the input through each stage in turn, left to right."""
    if not isinstance(operand, list):
        raise OperandError("$pipe operand must be an array of expressions")

    data = input_data
    for i, stage in enumerate(operand):
        data = context.apply(stage, data, i)
    return data


def default(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """First value unless it is None, otherwise the fallback.

    Accepts ``[expression, fallback]`` or ``{"expression": ..., "default": ...}``.
    The fallback is only evaluated when it is needed.
    """
    if isinstance(operand, list):
        if len(operand) != 2:
            raise OperandError(
                "$default array form must have exactly 2 elements: [expression, default]"
            )
        result = context.apply(operand[0], input_data, 0)
        return result if result is not None else context.apply(operand[1], input_data, 1)

    if not isinstance(operand, dict) or "expression" not in operand or "default" not in operand:
        raise OperandError(
            "$default operand must be an object with { expression, default } "
            "or array [expression, default]"
        )

    result = context.apply(operand["expression"], input_data, "expression")
    if result is not None:
        return result
    return context.apply(operand["default"], input_data, "default")


def debug(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """Evaluate the operand, log it at INFO, and pass the result through."""
    result = context.apply(operand, input_data)
    engine_logger.log_debug_value(operand, input_data, result)
    return result


# ---------------------------------------------------------------------------
# $sort
# ---------------------------------------------------------------------------

_SORT_USAGE = (
    "$sort operand must be string, object with 'by' property, "
    "or array of sort criteria"
)


def _criterion(criterion: Any) -> tuple[Any, bool]:
    if isinstance(criterion, str):
        return criterion, False
    if isinstance(criterion, dict) and "by" in criterion:
        return criterion["by"], bool(criterion.get("desc", False))
    raise OperandError(_SORT_USAGE)


def _sort_key(by: Any, item: Any, context: OperatorContext) -> Any:
    if isinstance(by, str):
        return get_path(item, by)
    return context.apply(by, item, "by")


def _compare_keys(a: Any, b: Any) -> int:
    # None sorts after everything else in either direction
    if a is None or b is None:
        return (a is None) - (b is None)
    return order("$sort", a, b)


def sort(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    """Stable multi-key sort of the input list. The input is not modified.

    Examples:
        ``{"$sort": "age"}``
        ``{"$sort": {"by": {"$get": "score"}, "desc": true}}``
        ``{"$sort": [{"by": "group"}, {"by": "score", "desc": true}]}``
    """
    items = require_list("$sort", input_data)
    raw = operand if isinstance(operand, list) else [operand]
    criteria = [_criterion(c) for c in raw]
    if not criteria:
        raise OperandError(_SORT_USAGE)

    keyed = [
        ([_sort_key(by, item, context) for by, _ in criteria], item) for item in items
    ]

    def compare(left: tuple[list[Any], Any], right: tuple[list[Any], Any]) -> int:
        for (_, desc), a, b in zip(criteria, left[0], right[0]):
            result = _compare_keys(a, b)
            if result:
                return -result if desc and a is not None and b is not None else result
        return 0

    return [item for _, item in sorted(keyed, key=functools.cmp_to_key(compare))]


OPERATORS = {
    "$debug": debug,
    "$default": default,
    "$literal": literal,
    "$pipe": pipe,
    "$sort": sort,
}
