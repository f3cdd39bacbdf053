"""Operator invocation context.

Every operator receives an OperatorContext as its third argument. It is
the only channel through which an operator can reach back into the
engine: to evaluate part of its operand, or to ask whether a value is an
expression or a literal wrapper.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol


class ApplyFn(Protocol):
    def __call__(self, node: Any, input_data: Any, steps: Any = None) -> Any: ...


@dataclass(frozen=True)
class OperatorContext:
    """Callbacks handed to an operator.

    ``apply(node, input_data, steps=None)`` evaluates *node* against
    *input_data*. *steps* is a single path step or a list of steps
    (e.g. ``"then"`` or ``["cases", 2, "when"]``) naming where inside the
    operand *node* came from; it only affects error paths.
    """

    apply: ApplyFn
    is_expression: Callable[[Any], bool]
    is_wrapped_literal: Callable[[Any], bool]
