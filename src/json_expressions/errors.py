"""Custom exception hierarchy for json-expressions.

All exceptions inherit from ExpressionError so callers can catch broadly
or narrowly as needed. Errors raised out of ``ExpressionEngine.apply``
are EvaluationErrors, except for exception types defined outside the
standard library, which a custom operator may raise and which keep their
own type, and EngineIntegrityError, which signals a broken operator
rather than a bad expression.
"""

from __future__ import annotations


Step = str | int

# Set on an exception once it has been attributed to a path.
_PATH_MARKER = "__json_expressions_path__"


def render_path(path: tuple[Step, ...] | list[Step]) -> str:
    """Render a path as dotted/bracketed text, e.g. ``pipe[0].get``.

    Operator steps are written without their ``$`` sigil.
    """
    out: list[str] = []
    for step in path:
        if isinstance(step, int):
            out.append(f"[{step}]")
            continue
        name = step[1:] if step.startswith("$") and len(step) > 1 else step
        out.append(f".{name}" if out else name)
    return "".join(out)


def annotated_path(exc: BaseException) -> tuple[Step, ...] | None:
    """The path *exc* was attributed to, or None if it has not been yet."""
    return getattr(exc, _PATH_MARKER, None)


def _prefix_in_place(exc: BaseException, path: tuple[Step, ...]) -> None:
    if exc.args and isinstance(exc.args[0], str):
        message, rest = exc.args[0], exc.args[1:]
    else:
        message, rest = _describe(exc), ()
    exc.args = (f"[{render_path(path)}] {message}", *rest)
    setattr(exc, _PATH_MARKER, path)


class ExpressionError(Exception):
    """Base for all json-expressions errors."""


class EvaluationError(ExpressionError):
    """Applying an expression failed.

    ``path`` stays None until the evaluator attributes the error to the
    node that raised it. Once set, the message carries the rendered path
    as a ``[...]`` prefix and the error is never annotated again.
    """

    def __init__(self, message: str, *, path: tuple[Step, ...] | None = None) -> None:
        super().__init__(message)
        if path is not None:
            setattr(self, _PATH_MARKER, path)

    @property
    def path(self) -> tuple[Step, ...] | None:
        return annotated_path(self)

    @property
    def annotated(self) -> bool:
        return annotated_path(self) is not None

    def annotate(self, path: tuple[Step, ...]) -> EvaluationError:
        """Prefix the message with *path* in place and return self."""
        _prefix_in_place(self, path)
        return self


class UnknownOperatorError(EvaluationError):
    """A node looks like an expression but its operator is not registered."""

    def __init__(
        self,
        operator: str,
        message: str,
        *,
        suggestion: str | None = None,
        path: tuple[Step, ...] | None = None,
    ) -> None:
        self.operator = operator
        self.suggestion = suggestion
        super().__init__(message, path=path)


class OperandError(EvaluationError):
    """An operator rejected its operand or input data."""


class PathError(EvaluationError):
    """A property path could not be resolved as written."""


class EngineIntegrityError(ExpressionError):
    """Optimistic evaluation failed but the exact re-run did not.

    Raised when some operator is non-deterministic or has side effects.
    The original optimistic failure is chained as ``__cause__``.
    """


class InvalidExpressionError(ExpressionError):
    """Static validation found unknown operators."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("\n".join(errors))


class EngineConfigError(ExpressionError):
    """Engine configuration is malformed."""


class ExpressionLoadError(ExpressionError):
    """Expression or data document could not be read or parsed."""


class InputValidationError(ExpressionError):
    """Input data does not match its JSON Schema."""


def annotate_error(exc: Exception, path: tuple[Step, ...]) -> Exception:
    """Attribute *exc* to *path* exactly once.

    An exception that already carries a path is returned untouched.
    EvaluationErrors and exception types defined outside the standard
    library keep their identity and have their message prefixed in
    place. A built-in exception (ValueError, KeyError, ...) is wrapped in
    a new EvaluationError whose ``__cause__`` is the original.
    """
    if annotated_path(exc) is not None:
        return exc
    if isinstance(exc, EvaluationError) or type(exc).__module__ != "builtins":
        _prefix_in_place(exc, path)
        return exc

    wrapped = EvaluationError(f"[{render_path(path)}] {_describe(exc)}", path=path)
    wrapped.__cause__ = exc
    return wrapped


def _describe(exc: Exception) -> str:
    # KeyError("x") renders as "'x'" which reads badly after a path prefix
    if isinstance(exc, KeyError) and exc.args:
        return f"{type(exc).__name__}: {exc.args[0]}"
    return str(exc) or type(exc).__name__
