"""Middleware composition around operator invocation.

A middleware is ``fn(operand, input_data, next_fn, meta)``. Calling
``next_fn(operand, input_data)`` proceeds to the next middleware, and
eventually to the operator itself, with possibly replaced arguments.
Returning without calling it short-circuits the operator.

The list is composed right to left, so the first middleware is the
outermost layer: it sees the call first and the result last.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from json_expressions.context import OperatorContext
from json_expressions.errors import Step
from json_expressions.models import InvocationMeta, Middleware, Operator

# (name, operator, operand, input_data, context, path) -> result
Invoker = Callable[..., Any]


def invoke_direct(
    name: str,
    operator: Operator,
    operand: Any,
    input_data: Any,
    context: OperatorContext,
    path: tuple[Step, ...] | None,
) -> Any:
    """Call the operator with no middleware in between."""
    return operator(operand, input_data, context)


def _link(
    middleware: Middleware,
    next_fn: Callable[[Any, Any], Any],
    meta: InvocationMeta,
) -> Callable[[Any, Any], Any]:
    def call(operand: Any, input_data: Any) -> Any:
        return middleware(operand, input_data, next_fn, meta)

    return call


def compose_middleware(middleware: Sequence[Middleware]) -> Invoker:
    """Fold *middleware* into a single invoker.

    With no middleware the direct invoker is returned as-is, so engines
    without middleware pay nothing for the feature.
    """
    if not middleware:
        return invoke_direct

    chain = tuple(reversed(middleware))

    def invoke(
        name: str,
        operator: Operator,
        operand: Any,
        input_data: Any,
        context: OperatorContext,
        path: tuple[Step, ...] | None,
    ) -> Any:
        meta = InvocationMeta(operator_name=name, path=path)

        def terminal(operand: Any, input_data: Any) -> Any:
            return operator(operand, input_data, context)

        next_fn: Callable[[Any, Any], Any] = terminal
        for layer in chain:
            next_fn = _link(layer, next_fn, meta)
        return next_fn(operand, input_data)

    return invoke
