"""Static expression validator.

Walks an expression tree without evaluating it and reports every node
that looks like an expression but names an unregistered operator. Input
data is never consulted, so only structural problems are caught; a
valid expression can still fail at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from json_expressions.classify import (
    LITERAL,
    looks_like_expression,
    operator_of,
    unknown_operator_message,
)
from json_expressions.errors import Step, render_path
from json_expressions.registry import Registry

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Diagnostic:
    """A single unknown-operator finding."""

    path: tuple[Step, ...]
    operator: str
    message: str
    suggestion: str | None = None

    def render(self) -> str:
        return f"[{render_path(self.path)}] {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Aggregate result of expression validation."""

    diagnostics: list[Diagnostic]

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    @property
    def messages(self) -> list[str]:
        return [d.render() for d in self.diagnostics]


# ---------------------------------------------------------------------------
# Tree walk
# ---------------------------------------------------------------------------


def _walk(
    node: Any,
    path: tuple[Step, ...],
    registry: Registry,
    out: list[Diagnostic],
) -> None:
    if looks_like_expression(node):
        name, operand = operator_of(node)
        here = (*path, name)
        if name not in registry:
            message, suggestion = unknown_operator_message(name, node, registry.names)
            out.append(Diagnostic(here, name, message, suggestion))
            return
        # a $literal operand is data, whatever it looks like
        if name != LITERAL:
            _walk(operand, here, registry, out)
        return

    if isinstance(node, list):
        for i, item in enumerate(node):
            _walk(item, (*path, i), registry, out)
    elif isinstance(node, dict):
        for key, value in node.items():
            _walk(value, (*path, key), registry, out)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_tree(tree: Any, registry: Registry) -> ValidationResult:
    """Validate *tree* against *registry*.

    Diagnostics are returned in depth-first, left-to-right order. An
    unknown operator's operand is not inspected further.
    """
    diagnostics: list[Diagnostic] = []
    _walk(tree, (), registry, diagnostics)
    return ValidationResult(diagnostics=diagnostics)
