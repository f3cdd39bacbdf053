"""Array operators.

Iteration operators (``$map``, ``$filter`` and friends) apply their
operand to each element of the input list, attributing failures to the
element's index.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import (
    contains,
    describe,
    is_number,
    matches_conditions,
    require_list,
)
from json_expressions.paths import get_path

# ---------------------------------------------------------------------------
# Iteration
# ---------------------------------------------------------------------------


def _each(name: str, operand: Any, input_data: Any, context: OperatorContext):
    items = require_list(name, input_data)
    for i, item in enumerate(items):
        yield item, context.apply(operand, item, i)


def map_(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    return [result for _, result in _each("$map", operand, input_data, context)]


def filter_(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    return [item for item, keep in _each("$filter", operand, input_data, context) if keep]


def find(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    for item, found in _each("$find", operand, input_data, context):
        if found:
            return item
    return None


def all_(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    return all(ok for _, ok in _each("$all", operand, input_data, context))


def any_(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    return any(ok for _, ok in _each("$any", operand, input_data, context))


def flat_map(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    out: list[Any] = []
    for _, result in _each("$flatMap", operand, input_data, context):
        if isinstance(result, list):
            out.extend(result)
        else:
            out.append(result)
    return out


def filter_by(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    """Keep elements matching every ``path: condition`` pair.

    ``{"$filterBy": {"age": {"$gte": 4}, "status": "active"}}``
    """
    items = require_list("$filterBy", input_data)
    if not isinstance(operand, dict):
        raise OperandError("$filterBy operand must be an object with property conditions")
    return [item for item in items if matches_conditions(operand, item, context)]


def pluck(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    items = require_list("$pluck", input_data)
    if isinstance(operand, str):
        return [get_path(item, operand, allow_wildcards=True) for item in items]
    return [context.apply(operand, item, i) for i, item in enumerate(items)]


def group_by(operand: Any, input_data: Any, context: OperatorContext) -> dict[str, list[Any]]:
    """Group elements by a property path or an expression result.

    Keys are stringified. An element whose key is None cannot be grouped.
    """
    items = require_list("$groupBy", input_data)
    groups: dict[str, list[Any]] = {}
    for i, item in enumerate(items):
        if isinstance(operand, str):
            key = get_path(item, operand)
        else:
            key = context.apply(operand, item, i)
        if key is None:
            raise OperandError(f"{describe(item)} could not be grouped by {describe(operand)}")
        groups.setdefault(key if isinstance(key, str) else describe(key), []).append(item)
    return groups


# ---------------------------------------------------------------------------
# Transformations
# ---------------------------------------------------------------------------


def concat(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    """Append each of the resolved operand's lists to the input list."""
    items = require_list("$concat", input_data)
    arrays = context.apply(operand, input_data)
    if not isinstance(arrays, list):
        raise OperandError("$concat operand must resolve to an array of arrays")
    out = list(items)
    for extra in arrays:
        if isinstance(extra, list):
            out.extend(extra)
        else:
            out.append(extra)
    return out


def _flatten(items: list[Any], depth: int) -> list[Any]:
    out: list[Any] = []
    for item in items:
        if isinstance(item, list) and depth > 0:
            out.extend(_flatten(item, depth - 1))
        else:
            out.append(item)
    return out


def flatten(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    """Flatten nested lists, one level unless ``{"depth": n}`` says otherwise."""
    items = require_list("$flatten", input_data)
    options = context.apply(operand, input_data)
    depth = options.get("depth", 1) if isinstance(options, dict) else 1
    if not is_number(depth):
        raise OperandError(f"$flatten depth must be a number, got {describe(depth)}")
    return _flatten(items, int(depth))


def join(operand: Any, input_data: Any, context: OperatorContext) -> str:
    items = require_list("$join", input_data)
    separator = context.apply(operand, input_data)
    if separator is None:
        separator = ","
    if not isinstance(separator, str):
        raise OperandError("$join separator must be a string")
    return separator.join("" if item is None else _text(item) for item in items)


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if is_number(value):
        return str(value)
    return describe(value)


def reverse(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    return list(reversed(require_list("$reverse", input_data)))


def unique(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    """Drop repeated elements, keeping first occurrences in order."""
    out: list[Any] = []
    for item in require_list("$unique", input_data):
        if not contains(out, item):
            out.append(item)
    return out


def _count_operator(name: str, slicer: Callable[[list[Any], int], list[Any]]):
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
        items = require_list(name, input_data)
        count = context.apply(operand, input_data)
        if not isinstance(count, int) or isinstance(count, bool):
            raise OperandError(f"{name} count must be an integer, got {describe(count)}")
        return slicer(items, max(count, 0))

    return operator


take = _count_operator("$take", lambda items, n: items[:n])
skip = _count_operator("$skip", lambda items, n: items[n:])


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def _accessor(name: str, pick: Callable[[list[Any]], Any]):
    # a list operand (literal or computed) takes priority over the input
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> Any:
        resolved = context.apply(operand, input_data)
        if isinstance(resolved, list):
            return pick(resolved)
        if isinstance(input_data, list):
            return pick(input_data)
        raise OperandError(f"{name} requires array operand or input data")

    return operator


first = _accessor("$first", lambda items: items[0] if items else None)
last = _accessor("$last", lambda items: items[-1] if items else None)


def coalesce(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """First non-None value of the resolved operand list."""
    values = context.apply(operand, input_data)
    if not isinstance(values, list):
        raise OperandError("$coalesce operand must resolve to an array")
    return next((value for value in values if value is not None), None)


OPERATORS = {
    "$all": all_,
    "$any": any_,
    "$coalesce": coalesce,
    "$concat": concat,
    "$filter": filter_,
    "$filterBy": filter_by,
    "$find": find,
    "$first": first,
    "$flatMap": flat_map,
    "$flatten": flatten,
    "$groupBy": group_by,
    "$join": join,
    "$last": last,
    "$map": map_,
    "$pluck": pluck,
    "$reverse": reverse,
    "$skip": skip,
    "$take": take,
    "$unique": unique,
}
