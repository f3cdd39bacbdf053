"""Tests for the exception hierarchy and path annotation."""

from __future__ import annotations

import pytest

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
    annotate_error,
    annotated_path,
    render_path,
)


@pytest.mark.parametrize(
    "cls",
    [
        EvaluationError,
        UnknownOperatorError,
        OperandError,
        PathError,
        EngineIntegrityError,
        InvalidExpressionError,
        EngineConfigError,
        ExpressionLoadError,
        InputValidationError,
    ],
)
def test_everything_is_an_expression_error(cls):
    assert issubclass(cls, ExpressionError)


# ── render_path ───────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "path, rendered",
    [
        (("$get",), "get"),
        (("$pipe", 0, "$get"), "pipe[0].get"),
        ((2, "$get"), "[2].get"),
        (("$case", "cases", 1, "when", "$eq"), "case.cases[1].when.eq"),
        (("$select", "name", "$get"), "select.name.get"),
        (("$get", "$"), "get.$"),
        ((), ""),
    ],
)
def test_render_path(path, rendered):
    assert render_path(path) == rendered


# ── annotation ────────────────────────────────────────────────────────────────

class Unsupported(Exception):
    """Stands in for an exception type a custom operator defines."""


class TestAnnotateError:
    def test_evaluation_error_annotated_in_place(self):
        exc = OperandError("bad operand")
        result = annotate_error(exc, ("$pipe", 0, "$map"))
        assert result is exc
        assert exc.path == ("$pipe", 0, "$map")
        assert str(exc) == "[pipe[0].map] bad operand"

    def test_annotated_error_is_not_reannotated(self):
        exc = OperandError("bad operand")
        annotate_error(exc, ("$pipe", 0, "$map"))
        annotate_error(exc, ("$pipe",))
        assert str(exc) == "[pipe[0].map] bad operand"
        assert exc.path == ("$pipe", 0, "$map")

    def test_builtin_exception_is_wrapped(self):
        cause = ZeroDivisionError("division by zero")
        result = annotate_error(cause, ("$divide",))
        assert type(result) is EvaluationError
        assert result.__cause__ is cause
        assert result.path == ("$divide",)
        assert str(result) == "[divide] division by zero"

    def test_custom_exception_keeps_identity(self):
        exc = Unsupported("not supported", 42)
        result = annotate_error(exc, ("$pipe", 0, "$op"))
        assert result is exc
        assert exc.args == ("[pipe[0].op] not supported", 42)
        assert annotated_path(exc) == ("$pipe", 0, "$op")

    def test_custom_exception_is_not_reannotated(self):
        exc = Unsupported("not supported")
        annotate_error(exc, ("$pipe", 0, "$op"))
        assert annotate_error(exc, ("$pipe",)) is exc
        assert str(exc) == "[pipe[0].op] not supported"

    def test_custom_exception_without_message(self):
        exc = Unsupported()
        annotate_error(exc, ("$op",))
        assert str(exc) == "[op] Unsupported"

    def test_wrapped_error_counts_as_annotated(self):
        result = annotate_error(ValueError("bad"), ("$op",))
        assert annotate_error(result, ("$pipe",)) is result
        assert str(result) == "[op] bad"

    def test_key_error_is_described_readably(self):
        result = annotate_error(KeyError("missing"), ("$custom",))
        assert str(result) == "[custom] KeyError: missing"

    def test_unannotated_error_has_no_path(self):
        exc = EvaluationError("oops")
        assert exc.path is None
        assert exc.annotated is False
        assert annotated_path(exc) is None
        assert annotated_path(Unsupported("x")) is None

    def test_path_given_at_construction_counts_as_annotated(self):
        exc = EvaluationError("[get] oops", path=("$get",))
        assert exc.annotated is True
        assert annotate_error(exc, ("$pipe",)) is exc
        assert str(exc) == "[get] oops"


def test_unknown_operator_error_carries_details():
    exc = UnknownOperatorError("$gett", "Unknown expression operator", suggestion="$get")
    assert exc.operator == "$gett"
    assert exc.suggestion == "$get"


def test_invalid_expression_error_joins_messages():
    exc = InvalidExpressionError(["first", "second"])
    assert exc.errors == ["first", "second"]
    assert str(exc) == "first\nsecond"
