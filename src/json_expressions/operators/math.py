"""Arithmetic operators.

Binary operators take ``[left, right]`` or a single right-hand operand
applied to the input data: ``{"$add": [1, 2]}`` and ``{"$add": 2}``
against 1 both give 3.
"""

from __future__ import annotations

import math
import random as _random
from collections.abc import Callable
from typing import Any

from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import describe, is_number


def _binary(name: str, fn: Callable[[Any, Any], Any]):
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> Any:
        resolved = context.apply(operand, input_data)
        if isinstance(resolved, list):
            if len(resolved) != 2:
                raise OperandError(f"{name} in array form requires exactly 2 elements")
            left, right = resolved
        else:
            left, right = input_data, resolved
        for value in (left, right):
            if not is_number(value):
                raise OperandError(f"{name} requires numbers, got {describe(value)}")
        return fn(left, right)

    operator.__name__ = name.lstrip("$")
    return operator


def _divide(left: float, right: float) -> float:
    if right == 0:
        raise OperandError("Division by zero")
    return left / right


def _modulo(left: float, right: float) -> float:
    # Python's % already takes the sign of the divisor
    if right == 0:
        raise OperandError("Modulo by zero")
    return left % right


def _pow(left: float, right: float) -> float:
    if left < 0 and right % 1 != 0:
        raise OperandError(
            "Complex numbers are not supported (negative base with fractional exponent)"
        )
    if left == 0 and right < 0:
        raise OperandError("Division by zero (0 raised to negative exponent)")
    return left**right


add = _binary("$add", lambda a, b: a + b)
subtract = _binary("$subtract", lambda a, b: a - b)
multiply = _binary("$multiply", lambda a, b: a * b)
divide = _binary("$divide", _divide)
modulo = _binary("$modulo", _modulo)
pow_ = _binary("$pow", _pow)


# ---------------------------------------------------------------------------
# Unary transforms: numeric operand, otherwise the input data
# ---------------------------------------------------------------------------


def _unary(name: str, fn: Callable[[Any], Any]):
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> Any:
        resolved = context.apply(operand, input_data)
        value = resolved if is_number(resolved) else input_data
        if not is_number(value):
            raise OperandError(f"{name} requires a number, got {describe(value)}")
        return fn(value)

    operator.__name__ = name.lstrip("$")
    return operator


def _sqrt(value: float) -> float:
    if value < 0:
        raise OperandError(
            "Complex numbers are not supported (square root of negative number)"
        )
    return math.sqrt(value)


abs_ = _unary("$abs", abs)
ceil = _unary("$ceil", math.ceil)
floor = _unary("$floor", math.floor)
sqrt = _unary("$sqrt", _sqrt)


def random(operand: Any, input_data: Any, context: OperatorContext) -> float:
    """Uniform random number in ``[min, max)``.

    ``precision`` rounds to that many decimal places; a negative value
    rounds to tens, hundreds, and so on.
    """
    options = context.apply(operand, input_data) or {}
    if not isinstance(options, dict):
        raise OperandError("$random operand must be an object with min, max and precision")
    low = options.get("min", 0)
    high = options.get("max", 1)
    precision = options.get("precision")

    value = _random.random() * (high - low) + low
    if precision is None:
        return value
    if precision >= 0:
        return round(value, precision)
    factor = 10 ** (-precision)
    return round(value / factor) * factor


OPERATORS = {
    "$abs": abs_,
    "$add": add,
    "$ceil": ceil,
    "$divide": divide,
    "$floor": floor,
    "$modulo": modulo,
    "$multiply": multiply,
    "$pow": pow_,
    "$random": random,
    "$sqrt": sqrt,
    "$subtract": subtract,
}
