"""String operators.

Transforms (``$uppercase``, ``$trim``, ...) work on the input string.
Parameterised operations take their parameters from the operand:
``{"$split": ","}``, ``{"$replace": ["a+", "b"]}``, ``{"$substring": [0, 3]}``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

import jinja2

from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import describe, is_number
from json_expressions.templates import render_template


def _require_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise OperandError(f"{name} requires string input, got {describe(value)}")
    return value


def _transform(name: str, fn: Callable[[str], str]):
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> str:
        return fn(_require_str(name, input_data))

    return operator


lowercase = _transform("$lowercase", str.lower)
uppercase = _transform("$uppercase", str.upper)
trim = _transform("$trim", str.strip)


def _params(operand: Any, input_data: Any, context: OperatorContext) -> list[Any]:
    if isinstance(operand, list):
        return [context.apply(param, input_data, i) for i, param in enumerate(operand)]
    return [context.apply(operand, input_data)]


def replace(operand: Any, input_data: Any, context: OperatorContext) -> str:
    """Replace every regex match of ``pattern`` with ``replacement``."""
    text = _require_str("$replace", input_data)
    params = _params(operand, input_data, context)
    if len(params) != 2 or not all(isinstance(p, str) for p in params):
        raise OperandError("$replace operand must be [pattern, replacement] strings")
    pattern, replacement = params
    try:
        return re.sub(pattern, replacement, text)
    except re.error as e:
        raise OperandError(f"$replace invalid pattern {pattern!r}: {e}") from e


def split(operand: Any, input_data: Any, context: OperatorContext) -> list[str]:
    text = _require_str("$split", input_data)
    params = _params(operand, input_data, context)
    if len(params) != 1 or not isinstance(params[0], str):
        raise OperandError(f"$split delimiter must be a string, got {describe(operand)}")
    delimiter = params[0]
    if delimiter == "":
        return list(text)
    return text.split(delimiter)


def substring(operand: Any, input_data: Any, context: OperatorContext) -> str:
    """``[start]`` or ``[start, length]``; a negative start counts from the end."""
    text = _require_str("$substring", input_data)
    params = _params(operand, input_data, context)
    if not params or len(params) > 2 or not all(is_number(p) for p in params):
        raise OperandError("$substring operand must be [start] or [start, length]")
    start = int(params[0])
    if len(params) == 1:
        return text[start:]
    length = int(params[1])
    if start < 0:
        start = max(len(text) + start, 0)
    return text[start:start + max(length, 0)]


def template(operand: Any, input_data: Any, context: OperatorContext) -> str:
    """Render a Jinja2 template against the input data.

    ``{"$template": "Hello {{ name }}"}`` against ``{"name": "Kai"}``
    gives ``"Hello Kai"``.
    """
    source = context.apply(operand, input_data)
    if not isinstance(source, str):
        raise OperandError(f"$template operand must resolve to a string, got {describe(source)}")
    try:
        return render_template(source, input_data)
    except jinja2.TemplateError as e:
        raise OperandError(f"$template failed to render: {e}") from e


OPERATORS = {
    "$lowercase": lowercase,
    "$replace": replace,
    "$split": split,
    "$substring": substring,
    "$template": template,
    "$trim": trim,
    "$uppercase": uppercase,
}
