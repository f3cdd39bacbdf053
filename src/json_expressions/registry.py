"""Operator registry assembly.

A Registry is the immutable name -> operator table one engine uses for
its whole lifetime. It is built once from, in order of increasing
precedence: the base pack, any additional packs, then custom operators.
Exclusions are applied to the merged table, and ``$literal`` is injected
last so it can be neither overridden nor excluded.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from json_expressions.classify import LITERAL
from json_expressions.models import Operator
from json_expressions.operators.flow import literal
from json_expressions.packs import base


class Registry(Mapping[str, Operator]):
    """Read-only operator table. ``names`` preserves registration order."""

    def __init__(self, operators: Mapping[str, Operator]) -> None:
        self._operators = MappingProxyType(dict(operators))
        self.names: tuple[str, ...] = tuple(self._operators)

    def __getitem__(self, name: str) -> Operator:
        return self._operators[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._operators)

    def __len__(self) -> int:
        return len(self._operators)

    def __contains__(self, name: object) -> bool:
        return name in self._operators

    def __repr__(self) -> str:
        return f"Registry({len(self)} operators)"


def build_registry(
    packs: Iterable[Mapping[str, Operator]] = (),
    custom: Mapping[str, Operator] | None = None,
    include_base: bool = True,
    exclude: Iterable[str] = (),
) -> Registry:
    """Merge operator packs into a Registry.

    Later sources win: base pack (when *include_base*), then each of
    *packs* in order, then *custom*. Names in *exclude* are removed from
    the merged table; unknown names are ignored. ``$literal`` is always
    present afterwards.
    """
    merged: dict[str, Operator] = {}
    if include_base:
        merged.update(base)
    for pack in packs:
        merged.update(pack)
    if custom:
        merged.update(custom)

    for name in (*exclude, LITERAL):
        merged.pop(name, None)

    merged[LITERAL] = literal
    return Registry(merged)
