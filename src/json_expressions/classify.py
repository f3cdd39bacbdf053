"""Expression classification predicates.

A node *looks like* an expression when it is a dict with exactly one key
and that key starts with ``$``. It *is* an expression only when that key
is also a registered operator. Keeping the two apart lets the evaluator
and validator report near-misses (``{"$gte": ...}`` typed as
``{"$gtee": ...}``) instead of silently treating them as data.
"""

from __future__ import annotations

import difflib
import json
from collections.abc import Container, Sequence
from typing import Any

SIGIL = "$"
LITERAL = "$literal"

_SAMPLE_SIZE = 8


def looks_like_expression(value: Any) -> bool:
    if not isinstance(value, dict) or len(value) != 1:
        return False
    key = next(iter(value))
    return isinstance(key, str) and key.startswith(SIGIL)


def is_wrapped_literal(value: Any) -> bool:
    return isinstance(value, dict) and len(value) == 1 and LITERAL in value


def is_expression(value: Any, operators: Container[str]) -> bool:
    return looks_like_expression(value) and next(iter(value)) in operators


def operator_of(node: dict[str, Any]) -> tuple[str, Any]:
    """Return the ``(name, operand)`` pair of an expression-shaped node."""
    return next(iter(node.items()))


def suggest_operator(name: str, names: Sequence[str]) -> str | None:
    """Closest registered operator name to *name*, if any is close enough."""
    matches = difflib.get_close_matches(name, names, n=1, cutoff=0.6)
    if matches:
        return matches[0]
    # difflib is case-sensitive; "$GET" should still point at "$get"
    lowered = {n.lower(): n for n in names}
    return lowered.get(name.lower())


def unknown_operator_message(
    name: str, node: Any, names: Sequence[str]
) -> tuple[str, str | None]:
    """Build the user-facing message for an unregistered operator.

    Returns ``(message, suggestion)``.
    """
    suggestion = suggest_operator(name, names)
    if suggestion:
        help_text = f'Did you mean "{suggestion}"?'
    else:
        sample = ", ".join(names[:_SAMPLE_SIZE])
        more = ", ..." if len(names) > _SAMPLE_SIZE else ""
        help_text = f"Available operators: {sample}{more}."

    literal = json.dumps({LITERAL: node}, default=str)
    message = (
        f'Unknown expression operator: "{name}". {help_text} '
        f"Use {literal} if you meant this as a literal value."
    )
    return message, suggestion
