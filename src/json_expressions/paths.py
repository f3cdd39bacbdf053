"""Property-path access into nested JSON values.

Paths use dot and bracket notation (``user.name``, ``items[0].id``).
The ``$`` segment is a wildcard that fans out over list elements and
flattens the results; it is opt-in per call so operators that expect a
single value cannot accidentally receive a list.
"""

from __future__ import annotations

from typing import Any

from json_expressions.errors import PathError

WILDCARD = "$"

PathLike = str | int | list[str | int] | tuple[str | int, ...]


def parse_path(path: str) -> list[str]:
    """Split a path string into segments.

    Examples:
        >>> parse_path("foo.bar")
        ['foo', 'bar']
        >>> parse_path("foo[0].bar")
        ['foo', '0', 'bar']
        >>> parse_path("items[$].id")
        ['items', '$', 'id']
        >>> parse_path("[$].name")
        ['$', 'name']
    """
    if "[" not in path:
        return path.split(".")

    segments: list[str] = []
    current = ""
    in_bracket = False

    for char in path:
        if char == "[":
            if current:
                segments.append(current)
                current = ""
            in_bracket = True
        elif char == "]":
            if in_bracket and current:
                segments.append(current)
                current = ""
            in_bracket = False
        elif char == "." and not in_bracket:
            if current:
                segments.append(current)
                current = ""
        else:
            current += char

    if current:
        segments.append(current)

    return segments


def _step(current: Any, segment: str | int) -> Any:
    if isinstance(current, dict):
        return current.get(segment if isinstance(segment, str) else str(segment))
    if isinstance(current, list):
        if isinstance(segment, int):
            index = segment
        elif segment.isascii() and segment.isdigit():
            index = int(segment)
        else:
            return None
        return current[index] if 0 <= index < len(current) else None
    return None


def get_path(value: Any, path: PathLike, allow_wildcards: bool = False) -> Any:
    """Resolve *path* inside *value*.

    Returns None when any segment is missing. An empty path, ``""`` or
    ``"."`` returns *value* itself.

    Args:
        value: Object or list to read from.
        path: Path string, single integer index, or list of segments.
        allow_wildcards: Permit ``$`` segments. When False a wildcard
            raises PathError instead of being treated as a key.

    Examples:
        >>> get_path({"user": {"name": "Amira"}}, "user.name")
        'Amira'
        >>> get_path({"items": [{"id": 1}, {"id": 2}]}, "items.$.id", True)
        [1, 2]
    """
    if value is None:
        return None
    if isinstance(path, int):
        segments: list[str | int] = [path]
    elif isinstance(path, str):
        if path in ("", "."):
            return value
        segments = list(parse_path(path))
    else:
        segments = list(path)
    if not segments:
        return value

    return _resolve(value, segments, path, allow_wildcards)


def _resolve(
    value: Any,
    segments: list[str | int],
    original: PathLike,
    allow_wildcards: bool,
) -> Any:
    current = value
    for i, segment in enumerate(segments):
        if segment == WILDCARD:
            if not allow_wildcards:
                shown = original if isinstance(original, str) else ".".join(map(str, original))
                raise PathError(
                    f'Wildcard ($) not supported in this context. Path: "{shown}"'
                )
            items = current if isinstance(current, list) else [current]
            remaining = segments[i + 1:]
            if not remaining:
                return items

            flattened: list[Any] = []
            for item in items:
                resolved = None if item is None else _resolve(item, remaining, original, allow_wildcards)
                if isinstance(resolved, list):
                    flattened.extend(resolved)
                else:
                    flattened.append(resolved)
            return flattened

        current = _step(current, segment)
        if current is None:
            return None

    return current
