"""Conditional operators: ``$if`` and ``$case``."""

from __future__ import annotations

from typing import Any

from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import describe, values_equal


def if_(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """``{"if": condition, "then": a, "else": b}``; only the taken branch runs."""
    if not isinstance(operand, dict) or "if" not in operand:
        raise OperandError("$if operand must be an object with if, then and else")

    condition = context.apply(operand["if"], input_data, "if")
    if not isinstance(condition, bool):
        raise OperandError(
            "$if.if must be a boolean or an expression that resolves to one, "
            f"got {describe(condition)}"
        )

    branch = "then" if condition else "else"
    return context.apply(operand.get(branch), input_data, branch)


def case(operand: Any, input_data: Any, context: OperatorContext) -> Any:
    """Pick the first matching case.

    ``value`` (defaulting to the input data) is evaluated once. A ``when``
    that is an expression is applied to that value and must produce a
    boolean; any other ``when`` (including a ``$literal``) is compared to
    it for equality. ``then`` and ``default`` are evaluated against the
    original input data.
    """
    if not isinstance(operand, dict) or not isinstance(operand.get("cases"), list):
        raise OperandError("$case operand must be an object with a cases array")

    if "value" in operand:
        value = context.apply(operand["value"], input_data, "value")
    else:
        value = input_data

    for i, item in enumerate(operand["cases"]):
        if not isinstance(item, dict) or "when" not in item:
            raise OperandError("Case item must have 'when' property")

        when = item["when"]
        steps = ["cases", i, "when"]
        if context.is_expression(when) and not context.is_wrapped_literal(when):
            matched = context.apply(when, value, steps)
            if not isinstance(matched, bool):
                raise OperandError(
                    f"$case.when must resolve to a boolean, got {describe(matched)}"
                )
        else:
            matched = values_equal(context.apply(when, input_data, steps), value)

        if matched:
            return context.apply(item.get("then"), input_data, ["cases", i, "then"])

    return context.apply(operand.get("default"), input_data, "default")


OPERATORS = {
    "$case": case,
    "$if": if_,
}
