"""Recursive expression evaluator.

One walk algorithm, two path-tracking strategies:

- OPTIMISTIC keeps no path at all. Operators receive a shared context
  whose ``apply`` is the evaluator's own bound method, so a successful
  evaluation allocates nothing for diagnostics.
- EXACT carries the tuple of steps from the root to the current node and
  hands each operator a context whose ``apply`` extends it. Failures are
  attributed to the innermost expression node they crossed.

The engine runs OPTIMISTIC first and re-runs EXACT only to explain a
failure, which is sound as long as operators are pure.
"""

from __future__ import annotations

from typing import Any

from json_expressions.classify import (
    is_expression,
    is_wrapped_literal,
    looks_like_expression,
    operator_of,
    unknown_operator_message,
)
from json_expressions.context import OperatorContext
from json_expressions.errors import Step, UnknownOperatorError, annotate_error
from json_expressions.middleware import Invoker
from json_expressions.models import Operator
from json_expressions.registry import Registry

Path = tuple[Step, ...] | None


# ---------------------------------------------------------------------------
# Path-tracking strategies
# ---------------------------------------------------------------------------


class _Optimistic:
    root: Path = None

    def child(self, path: Path, step: Step) -> Path:
        return None

    def extend(self, path: Path, steps: Any) -> Path:
        return None

    def context(self, evaluator: Evaluator, path: Path) -> OperatorContext:
        return evaluator.optimistic_context

    def invoke(
        self,
        evaluator: Evaluator,
        name: str,
        operator: Operator,
        operand: Any,
        input_data: Any,
        here: Path,
    ) -> Any:
        context = self.context(evaluator, here)
        return evaluator.invoker(name, operator, operand, input_data, context, here)

    def fail(self, exc: UnknownOperatorError, here: Path) -> Exception:
        return exc


class _Exact(_Optimistic):
    root: Path = ()

    def child(self, path: Path, step: Step) -> Path:
        return (*path, step)

    def extend(self, path: Path, steps: Any) -> Path:
        if steps is None:
            return path
        if isinstance(steps, (list, tuple)):
            return (*path, *steps)
        return (*path, steps)

    def context(self, evaluator: Evaluator, path: Path) -> OperatorContext:
        def apply(node: Any, input_data: Any, steps: Any = None) -> Any:
            return evaluator.walk(node, input_data, self.extend(path, steps), self)

        return OperatorContext(
            apply=apply,
            is_expression=evaluator.is_expression,
            is_wrapped_literal=is_wrapped_literal,
        )

    def invoke(
        self,
        evaluator: Evaluator,
        name: str,
        operator: Operator,
        operand: Any,
        input_data: Any,
        here: Path,
    ) -> Any:
        try:
            return super().invoke(evaluator, name, operator, operand, input_data, here)
        except Exception as exc:
            raise annotate_error(exc, here)

    def fail(self, exc: UnknownOperatorError, here: Path) -> Exception:
        return exc.annotate(here)


OPTIMISTIC = _Optimistic()
EXACT = _Exact()


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class Evaluator:
    """Walks expression trees against one immutable registry."""

    def __init__(self, registry: Registry, invoker: Invoker) -> None:
        self.registry = registry
        self.invoker = invoker
        self.optimistic_context = OperatorContext(
            apply=self._apply_optimistic,
            is_expression=self.is_expression,
            is_wrapped_literal=is_wrapped_literal,
        )

    def is_expression(self, value: Any) -> bool:
        return is_expression(value, self.registry)

    def run_optimistic(self, tree: Any, input_data: Any) -> Any:
        return self.walk(tree, input_data, OPTIMISTIC.root, OPTIMISTIC)

    def run_exact(self, tree: Any, input_data: Any) -> Any:
        return self.walk(tree, input_data, EXACT.root, EXACT)

    def _apply_optimistic(self, node: Any, input_data: Any, steps: Any = None) -> Any:
        return self.walk(node, input_data, None, OPTIMISTIC)

    def walk(self, node: Any, input_data: Any, path: Path, mode: _Optimistic) -> Any:
        if looks_like_expression(node):
            name, operand = operator_of(node)
            here = mode.child(path, name)
            operator = self.registry.get(name)
            if operator is None:
                message, suggestion = unknown_operator_message(
                    name, node, self.registry.names
                )
                raise mode.fail(
                    UnknownOperatorError(name, message, suggestion=suggestion), here
                )
            return mode.invoke(self, name, operator, operand, input_data, here)

        if isinstance(node, list):
            return [
                self.walk(item, input_data, mode.child(path, i), mode)
                for i, item in enumerate(node)
            ]
        if isinstance(node, dict):
            return {
                key: self.walk(value, input_data, mode.child(path, key), mode)
                for key, value in node.items()
            }
        return node
