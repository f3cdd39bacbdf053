"""Aggregation operators over a list of numbers.

Each operator aggregates the resolved operand when it is a list,
otherwise the input data, which must then be a list.
"""

from __future__ import annotations

import statistics
from collections import Counter
from collections.abc import Callable
from typing import Any

from json_expressions.context import OperatorContext
from json_expressions.errors import OperandError
from json_expressions.operators.common import describe, is_number


def _aggregate(name: str, fn: Callable[[list[Any]], Any], numeric: bool = True):
    def operator(operand: Any, input_data: Any, context: OperatorContext) -> Any:
        resolved = context.apply(operand, input_data)
        if isinstance(resolved, list):
            values = resolved
        elif isinstance(input_data, list):
            values = input_data
        else:
            raise OperandError(f"{name} requires array operand or input data")
        if numeric:
            for value in values:
                if not is_number(value):
                    raise OperandError(f"{name} requires numbers, got {describe(value)}")
        return fn(values)

    operator.__name__ = name.lstrip("$")
    return operator


def _mode(values: list[Any]) -> Any:
    """Most frequent value; a sorted list on ties; None when nothing repeats."""
    if not values:
        return None
    counts = Counter(values)
    top = max(counts.values())
    if top == 1:
        return None
    modes = [value for value, n in counts.items() if n == top]
    return modes[0] if len(modes) == 1 else sorted(modes)


count = _aggregate("$count", len, numeric=False)
sum_ = _aggregate("$sum", sum)
max_ = _aggregate("$max", lambda values: max(values) if values else None)
min_ = _aggregate("$min", lambda values: min(values) if values else None)
mean = _aggregate("$mean", lambda values: sum(values) / len(values) if values else None)
median = _aggregate("$median", lambda values: statistics.median(values) if values else None)
mode = _aggregate("$mode", _mode)


OPERATORS = {
    "$count": count,
    "$max": max_,
    "$mean": mean,
    "$median": median,
    "$min": min_,
    "$mode": mode,
    "$sum": sum_,
}
