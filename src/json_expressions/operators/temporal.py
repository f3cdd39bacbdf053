"""Temporal operators: current time as ISO 8601 text or epoch milliseconds.

These read the clock, so an expression using them is not deterministic.
Avoid them in expressions that may fail, or the engine's error re-run
can observe a different time.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any

from json_expressions.context import OperatorContext


def now_utc(operand: Any, input_data: Any, context: OperatorContext) -> str:
    """``2025-10-05T11:23:45.234Z``"""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def now_local(operand: Any, input_data: Any, context: OperatorContext) -> str:
    """Local time with its UTC offset, e.g. ``2025-10-05T13:23:45.234+02:00``."""
    return datetime.now().astimezone().isoformat(timespec="milliseconds")


def timestamp(operand: Any, input_data: Any, context: OperatorContext) -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


OPERATORS = {
    "$nowLocal": now_local,
    "$nowUTC": now_utc,
    "$timestamp": timestamp,
}
