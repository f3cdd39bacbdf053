"""Pydantic models for engine configuration and middleware metadata.

No business logic here, just shapes. EngineConfig validates the options
accepted by ``create_expression_engine`` so a misspelled option or a
non-callable operator fails at construction instead of mid-evaluation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from json_expressions.errors import Step


# ── Engine configuration ─────────────────────────────────────────


class EngineConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    packs: list[dict[str, Callable[..., Any]]] = Field(default_factory=list)
    custom: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    include_base: bool = True
    exclude: list[str] = Field(default_factory=list)
    middleware: list[Callable[..., Any]] = Field(default_factory=list)


# ── Runtime metadata ─────────────────────────────────────────────


@dataclass(frozen=True)
class InvocationMeta:
    """What middleware learns about the call it wraps.

    ``path`` locates the invoked expression node inside the tree and ends
    with its operator name, e.g. ``("$pipe", 0, "$get")``. It is only
    tracked during an exact (error-attribution) pass; the optimistic pass
    reports None.
    """

    operator_name: str
    path: tuple[Step, ...] | None


Operator = Callable[[Any, Any, Any], Any]
Middleware = Callable[[Any, Any, Callable[[Any, Any], Any], InvocationMeta], Any]
