"""json-expressions: declarative JSON expression evaluation."""

from json_expressions import packs
from json_expressions.authoring import bimodal, with_resolved_operand
from json_expressions.context import OperatorContext
from json_expressions.engine import ExpressionEngine, create_expression_engine
from json_expressions.engine_logger import configure_logging, logging_middleware
from json_expressions.errors import (
    EngineConfigError,
    EngineIntegrityError,
    EvaluationError,
    ExpressionError,
    ExpressionLoadError,
    InputValidationError,
    InvalidExpressionError,
    OperandError,
    PathError,
    UnknownOperatorError,
)
from json_expressions.loader import load_document, validate_input
from json_expressions.models import EngineConfig, InvocationMeta
from json_expressions.paths import get_path, parse_path
from json_expressions.validator import Diagnostic, ValidationResult, validate_tree

__all__ = [
    "bimodal",
    "configure_logging",
    "create_expression_engine",
    "get_path",
    "load_document",
    "logging_middleware",
    "packs",
    "parse_path",
    "validate_input",
    "validate_tree",
    "with_resolved_operand",
    "Diagnostic",
    "EngineConfig",
    "EngineConfigError",
    "EngineIntegrityError",
    "EvaluationError",
    "ExpressionEngine",
    "ExpressionError",
    "ExpressionLoadError",
    "InputValidationError",
    "InvalidExpressionError",
    "InvocationMeta",
    "OperandError",
    "OperatorContext",
    "PathError",
    "UnknownOperatorError",
    "ValidationResult",
]
