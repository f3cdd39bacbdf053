"""Structured JSON logging for expression evaluation.

Events are emitted on the ``json_expressions`` logger as one JSON object
per line. Nothing is written anywhere until a handler is attached, either
by the host application or by ``configure_logging``.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from json_expressions.errors import render_path
from json_expressions.models import InvocationMeta

_logger = logging.getLogger("json_expressions")


def configure_logging(
    log_dir: str | Path, level: int = logging.DEBUG
) -> None:
    """Set up engine logging to write JSON-lines to a file.

    Args:
        log_dir: Directory to write ``expressions.log`` into.
        level: Logging level (default: DEBUG).
    """
    log_path = Path(log_dir) / "expressions.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(str(log_path))
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    _logger.addHandler(handler)
    _logger.setLevel(level)


def _log(event: dict[str, Any], level: int = logging.INFO) -> None:
    if _logger.isEnabledFor(level):
        _logger.log(level, json.dumps(event, default=str))


def log_engine_created(operator_count: int, middleware_count: int) -> None:
    _log(
        {
            "event": "engine_created",
            "operator_count": operator_count,
            "middleware_count": middleware_count,
        },
        logging.DEBUG,
    )


def log_exact_retry(error: str) -> None:
    _log({"event": "exact_retry", "error": error}, logging.DEBUG)


def log_integrity_failure(error: str) -> None:
    _log({"event": "integrity_failure", "error": error}, logging.ERROR)


def log_operator_call(
    operator_name: str, path: str | None, duration_ms: float, ok: bool
) -> None:
    _log({
        "event": "operator_call",
        "operator": operator_name,
        "path": path,
        "duration_ms": round(duration_ms, 3),
        "ok": ok,
    }, logging.DEBUG)


def log_debug_value(operand: Any, input_data: Any, result: Any) -> None:
    _log({
        "event": "debug",
        "operand": operand,
        "input": input_data,
        "result": result,
    })


def logging_middleware(
    operand: Any,
    input_data: Any,
    next_fn: Callable[[Any, Any], Any],
    meta: InvocationMeta,
) -> Any:
    """Middleware that logs every operator call with its wall-clock time.

    Install with ``create_expression_engine(middleware=[logging_middleware])``.
    Errors are logged and re-raised untouched.
    """
    start = time.monotonic()
    path = render_path(meta.path) if meta.path is not None else None
    try:
        result = next_fn(operand, input_data)
    except Exception:
        log_operator_call(meta.operator_name, path, (time.monotonic() - start) * 1000, False)
        raise
    log_operator_call(meta.operator_name, path, (time.monotonic() - start) * 1000, True)
    return result
