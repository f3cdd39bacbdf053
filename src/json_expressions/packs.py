"""Operator packs: ready-made name -> operator mappings.

``base`` is what every engine gets unless ``include_base=False``. The
rest are opt-in via ``create_expression_engine(packs=[...])`` and may
overlap; registering the same operator twice is harmless.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from json_expressions.models import Operator
from json_expressions.operators import (
    access,
    aggregative,
    array as array_ops,
    conditional,
    flow,
    math as math_ops,
    object as object_ops,
    predicate,
    string as string_ops,
    temporal as temporal_ops,
)

# `object` and `all` shadow builtins here; neither builtin is used below.
__all__ = [
    "PACKS",
    "aggregation",
    "all",
    "array",
    "base",
    "comparison",
    "filtering",
    "logic",
    "math",
    "object",
    "projection",
    "string",
    "temporal",
]

_FAMILIES = (
    access.OPERATORS,
    aggregative.OPERATORS,
    array_ops.OPERATORS,
    conditional.OPERATORS,
    flow.OPERATORS,
    math_ops.OPERATORS,
    object_ops.OPERATORS,
    predicate.OPERATORS,
    string_ops.OPERATORS,
    temporal_ops.OPERATORS,
)

_ALL: dict[str, Operator] = {}
for _operators in _FAMILIES:
    _ALL.update(_operators)


def _pack(names: Iterable[str]) -> dict[str, Operator]:
    return {name: _ALL[name] for name in names}


def _family(operators: Mapping[str, Operator]) -> dict[str, Operator]:
    return dict(operators)


base = _pack([
    "$and", "$case", "$default", "$eq", "$filter", "$filterBy", "$get",
    "$gt", "$gte", "$identity", "$if", "$isDefined", "$literal", "$lt",
    "$lte", "$map", "$matches", "$ne", "$not", "$or", "$pipe", "$sort",
])

aggregation = _family(aggregative.OPERATORS)

array = _family(array_ops.OPERATORS)

comparison = _pack([
    "$between", "$eq", "$gt", "$gte", "$in", "$isEmpty", "$isPresent",
    "$lt", "$lte", "$ne", "$nin",
])

filtering = _pack([
    "$all", "$and", "$any", "$between", "$eq", "$exists", "$filter",
    "$filterBy", "$find", "$gt", "$gte", "$in", "$isEmpty", "$isPresent",
    "$lt", "$lte", "$matches", "$matchesRegex", "$ne", "$nin", "$not", "$or",
])

logic = _pack(["$and", "$case", "$if", "$not", "$or"])

math = _family(math_ops.OPERATORS)

object = _pack([
    "$fromPairs", "$keys", "$merge", "$omit", "$pairs", "$pick", "$prop",
    "$select", "$values",
])

projection = _pack([
    "$case", "$concat", "$eq", "$filter", "$flatMap", "$get", "$gt", "$gte",
    "$if", "$in", "$join", "$lowercase", "$lt", "$lte", "$map", "$ne", "$nin",
    "$pluck", "$select", "$substring", "$unique", "$uppercase",
])

string = _family(string_ops.OPERATORS)

temporal = _family(temporal_ops.OPERATORS)

all = dict(_ALL)

PACKS: dict[str, dict[str, Operator]] = {
    "aggregation": aggregation,
    "all": all,
    "array": array,
    "base": base,
    "comparison": comparison,
    "filtering": filtering,
    "logic": logic,
    "math": math,
    "object": object,
    "projection": projection,
    "string": string,
    "temporal": temporal,
}
