"""Helpers for writing operators.

Most operators follow one of two shapes: evaluate the operand, then do
something with the result; or act as a plain unary/binary function that
can take its argument(s) either from the operand or from the input data.
These decorators turn such functions into ``(operand, input_data,
context)`` operators.

Examples:
    >>> @with_resolved_operand
    ... def shout(text, input_data, context):
    ...     return text.upper()

    >>> is_adult = bimodal(lambda age, limit: age >= limit)
    >>> # {"$isAdult": 18} against 20 -> True
    >>> # {"$isAdult": [{"$get": "age"}, 18]} against {"age": 20} -> True
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

from json_expressions.context import OperatorContext


def with_resolved_operand(
    fn: Callable[[Any, Any, OperatorContext], Any],
) -> Callable[[Any, Any, OperatorContext], Any]:
    """Evaluate the operand before calling *fn(resolved, input_data, context)*."""

    @functools.wraps(fn)
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> Any:
        return fn(context.apply(operand, input_data), input_data, context)

    return operator


def _arity(fn: Callable[..., Any]) -> int:
    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return -1
    return sum(
        1
        for p in parameters
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        and p.default is p.empty
    )


def bimodal(fn: Callable[..., Any]) -> Callable[[Any, Any, OperatorContext], Any]:
    """Wrap a unary or binary function as an operator.

    Unary ``fn(x)``: ``x`` is the resolved operand, or the input data when
    the operand resolves to None.

    Binary ``fn(a, b)``: when the operand resolves to a two-element list
    both arguments come from it; otherwise ``a`` is the input data and
    ``b`` the resolved operand.

    Raises:
        TypeError: *fn* takes neither one nor two required positional
            arguments.
    """
    arity = _arity(fn)

    if arity == 1:

        @functools.wraps(fn)
        def unary(operand: Any, input_data: Any, context: OperatorContext) -> Any:
            resolved = context.apply(operand, input_data)
            return fn(input_data if resolved is None else resolved)

        return unary

    if arity == 2:

        @functools.wraps(fn)
        def binary(operand: Any, input_data: Any, context: OperatorContext) -> Any:
            resolved = context.apply(operand, input_data)
            if isinstance(resolved, list) and len(resolved) == 2:
                return fn(resolved[0], resolved[1])
            return fn(input_data, resolved)

        return binary

    raise TypeError("only unary and binary functions can be wrapped")
