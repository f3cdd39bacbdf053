"""Expression engine: the public entry point.

An ExpressionEngine owns one immutable registry and one composed
middleware chain. ``apply`` evaluates optimistically and, only when that
fails, re-evaluates with path tracking to produce an error that says
exactly where the failure happened.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from json_expressions import engine_logger
from json_expressions.errors import (
    EngineConfigError,
    EngineIntegrityError,
    InvalidExpressionError,
)
from json_expressions.evaluator import Evaluator
from json_expressions.middleware import compose_middleware
from json_expressions.models import EngineConfig
from json_expressions.registry import Registry, build_registry
from json_expressions.validator import validate_tree


class ExpressionEngine:
    """Evaluate JSON expression trees against input data.

    Build one with ``create_expression_engine``. Instances are immutable
    after construction and safe to share between threads as long as the
    registered operators are pure.
    """

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self.registry: Registry = build_registry(
            packs=config.packs,
            custom=config.custom,
            include_base=config.include_base,
            exclude=config.exclude,
        )
        self._evaluator = Evaluator(self.registry, compose_middleware(config.middleware))
        engine_logger.log_engine_created(len(self.registry), len(config.middleware))

    @property
    def expression_names(self) -> list[str]:
        """Every registered operator name, ``$literal`` included."""
        return list(self.registry.names)

    def is_expression(self, value: Any) -> bool:
        return self._evaluator.is_expression(value)

    def apply(self, expression: Any, input_data: Any = None) -> Any:
        """Evaluate *expression* against *input_data*.

        Raises:
            EvaluationError: The expression failed. The message starts
                with the ``[path]`` of the failing node. Exception types a
                custom operator defines propagate as themselves, with the
                same ``[path]`` prefix.
            EngineIntegrityError: The expression failed once and then
                succeeded when re-run, meaning some operator is not pure.
        """
        try:
            return self._evaluator.run_optimistic(expression, input_data)
        except Exception as exc:
            failure = exc

        engine_logger.log_exact_retry(str(failure))
        self._evaluator.run_exact(expression, input_data)

        engine_logger.log_integrity_failure(str(failure))
        raise EngineIntegrityError(
            "Error mode failed to throw. Is your expression deterministic? "
            f"The first evaluation failed with: {failure}"
        ) from failure

    def validate_expression(self, expression: Any) -> list[str]:
        """Return one message per unknown operator in *expression*."""
        return validate_tree(expression, self.registry).messages

    def ensure_valid_expression(self, expression: Any) -> bool:
        """Return True, or raise InvalidExpressionError listing every problem."""
        errors = self.validate_expression(expression)
        if errors:
            raise InvalidExpressionError(errors)
        return True

    def __repr__(self) -> str:
        return (
            f"ExpressionEngine({len(self.registry)} operators, "
            f"{len(self.config.middleware)} middleware)"
        )


def create_expression_engine(
    config: EngineConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> ExpressionEngine:
    """Build an ExpressionEngine.

    Accepts an EngineConfig, a mapping of options, keyword options, or
    nothing at all (base pack only).

    Examples:
        >>> engine = create_expression_engine(packs=[math], exclude=["$sort"])
        >>> engine.apply({"$add": [{"$get": "x"}, 5]}, {"x": 10})
        15

    Raises:
        EngineConfigError: Unknown option or non-callable operator.
    """
    if isinstance(config, EngineConfig):
        if options:
            raise EngineConfigError(
                "Pass either an EngineConfig or keyword options, not both"
            )
        return ExpressionEngine(config)

    try:
        validated = EngineConfig.model_validate({**(config or {}), **options})
    except PydanticValidationError as e:
        raise EngineConfigError(f"Invalid engine configuration: {e}") from e
    return ExpressionEngine(validated)
