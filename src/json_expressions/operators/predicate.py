"""Predicate operators: comparisons, boolean logic and membership tests.

Comparisons are bimodal. ``{"$gt": 5}`` compares the input data with 5;
``{"$gt": [{"$get": "age"}, 5]}`` compares the two list elements.
"""

from __future__ import annotations

import re
from typing import Any

from json_expressions.authoring import bimodal
from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import (
    contains,
    describe,
    matches_conditions,
    order,
    values_equal,
)

# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------


@bimodal
def eq(a: Any, b: Any) -> bool:
    return values_equal(a, b)


@bimodal
def ne(a: Any, b: Any) -> bool:
    return not values_equal(a, b)


@bimodal
def gt(a: Any, b: Any) -> bool:
    return order("$gt", a, b) > 0


@bimodal
def gte(a: Any, b: Any) -> bool:
    return order("$gte", a, b) >= 0


@bimodal
def lt(a: Any, b: Any) -> bool:
    return order("$lt", a, b) < 0


@bimodal
def lte(a: Any, b: Any) -> bool:
    return order("$lte", a, b) <= 0


def between(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    """Inclusive range check: ``{"$between": {"min": 1, "max": 5}}``."""
    bounds = context.apply(operand, input_data)
    if not isinstance(bounds, dict) or "min" not in bounds or "max" not in bounds:
        raise OperandError("$between operand must resolve to an object with min and max")
    return (
        order("$between", input_data, bounds["min"]) >= 0
        and order("$between", input_data, bounds["max"]) <= 0
    )


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------


def _membership(name: str, negate: bool):
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> bool:
        items = context.apply(operand, input_data)
        if not isinstance(items, list):
            raise OperandError(f"{name} parameter must be an array")
        return contains(items, input_data) != negate

    return operator


in_ = _membership("$in", negate=False)
nin = _membership("$nin", negate=True)


# ---------------------------------------------------------------------------
# Boolean logic
# ---------------------------------------------------------------------------


def and_(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    if not isinstance(operand, list):
        raise OperandError("$and operand must be an array of expressions")
    return all(context.apply(expr, input_data, i) for i, expr in enumerate(operand))


def or_(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    if not isinstance(operand, list):
        raise OperandError("$or operand must be an array of expressions")
    return any(context.apply(expr, input_data, i) for i, expr in enumerate(operand))


def not_(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    return not context.apply(operand, input_data)


# ---------------------------------------------------------------------------
# Value checks
# ---------------------------------------------------------------------------


def is_present(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    return input_data is not None


def is_empty(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    return input_data is None


def matches(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    """Every ``path: condition`` pair in the operand holds for the input."""
    if not isinstance(operand, dict):
        raise OperandError("$matches operand must be an object with property conditions")
    return matches_conditions(operand, input_data, context)


def matches_regex(operand: Any, input_data: Any, context: OperatorContext) -> bool:
    """Search the input string for a pattern. Inline flags like ``(?i)`` work."""
    pattern = context.apply(operand, input_data)
    if not isinstance(pattern, str):
        raise OperandError(f"$matchesRegex pattern must be a string, got {describe(pattern)}")
    if not isinstance(input_data, str):
        raise OperandError("$matchesRegex requires string input")
    try:
        return re.search(pattern, input_data) is not None
    except re.error as e:
        raise OperandError(f"$matchesRegex invalid pattern {pattern!r}: {e}") from e


OPERATORS = {
    "$and": and_,
    "$between": between,
    "$eq": eq,
    "$gt": gt,
    "$gte": gte,
    "$in": in_,
    "$isEmpty": is_empty,
    "$isPresent": is_present,
    "$lt": lt,
    "$lte": lte,
    "$matches": matches,
    "$matchesRegex": matches_regex,
    "$ne": ne,
    "$nin": nin,
    "$not": not_,
    "$or": or_,
}
