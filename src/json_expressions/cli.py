"""Command-line interface for json-expressions.

Enables execution via ``python -m json_expressions`` or a plain
``json-expressions`` command after install.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from json_expressions.errors import ExpressionError, ExpressionLoadError
from json_expressions.packs import PACKS

# ── Human-readable help strings ──────────────────────────────────────────────

_TOP_DESCRIPTION = """\
Evaluate declarative JSON expressions against JSON/YAML data.

An expression is any JSON value. Objects with exactly one "$"-prefixed key
(e.g. {"$get": "user.name"}) are operator calls; everything else is data.
Use {"$literal": ...} to pass an operator-looking object through untouched.
"""

_TOP_EPILOG = """\
For a machine-readable JSON description of this CLI:

  json-expressions schema

Quick examples:
  json-expressions apply '{"$get": "name"}' --input name=Kai
  json-expressions apply query.yaml --data children.json --pack all
  json-expressions validate query.yaml --pack math
  json-expressions names --pack string
"""

_APPLY_DESCRIPTION = """\
Evaluate an expression and print the result as JSON.

EXPRESSION is a path to a JSON or YAML file, or an inline JSON document.
Input data comes from --data (a JSON/YAML file) and/or --input KEY=VALUE
pairs, which are merged over --data when both are given.
"""

_APPLY_EPILOG = """\
Input value parsing:
  --input KEY=VALUE tries JSON parsing first (so integers, booleans, arrays,
  and objects work without extra quoting), then falls back to a plain string.

Errors:
  Evaluation errors are printed to stderr prefixed with the path of the
  failing node, e.g. "[pipe[1].map[0].get] ...", and exit with status 1.

Examples:
  json-expressions apply '{"$add": [{"$get": "x"}, 5]}' --input x=10 --pack math
  json-expressions apply query.json --data data.yaml --schema input.schema.json
  json-expressions apply query.json --data data.json --output result.json
"""

_VALIDATE_DESCRIPTION = """\
Statically check an expression for unknown operators without evaluating it.

Every problem in the tree is reported in one pass. Input data is never
read, so an expression that validates can still fail when applied.
"""

_VALIDATE_EPILOG = """\
Exit codes:
  0  expression is valid
  1  one or more unknown operators (each printed to stderr)
"""

_SCHEMA_DESCRIPTION = """\
Print a machine-readable JSON description of this CLI to stdout.
"""


def _cli_schema() -> dict[str, Any]:
    """Return a structured JSON description of the entire CLI."""
    engine_arguments = {
        "--pack": {
            "short": "-p",
            "type": "string",
            "choices": sorted(PACKS),
            "required": False,
            "repeatable": True,
            "description": "Operator pack to register on top of the base pack.",
        },
        "--no-base": {
            "type": "flag",
            "required": False,
            "description": "Do not register the base pack.",
        },
        "--exclude": {
            "short": "-x",
            "type": "string",
            "required": False,
            "repeatable": True,
            "description": "Operator name to remove from the registry. $literal cannot be removed.",
        },
    }
    return {
        "tool": "json-expressions",
        "description": (
            "Evaluates declarative JSON expressions (objects with a single "
            "$-prefixed operator key) against JSON/YAML input data."
        ),
        "commands": [
            {
                "name": "apply",
                "description": "Evaluate an expression and print the result as JSON.",
                "arguments": {
                    "expression": {
                        "type": "string",
                        "format": "file path or inline JSON",
                        "required": True,
                        "description": "Expression document to evaluate.",
                    },
                    "--data": {
                        "short": "-d",
                        "type": "string",
                        "format": "file path",
                        "required": False,
                        "description": "JSON or YAML file holding the input data.",
                    },
                    "--input": {
                        "short": "-i",
                        "type": "string",
                        "format": "KEY=VALUE",
                        "required": False,
                        "repeatable": True,
                        "description": (
                            "Input key-value pair. VALUE is JSON-parsed first, "
                            "falling back to a plain string. Overrides --data keys."
                        ),
                        "examples": ["name=Kai", "age=4", "ids=[1,2,3]"],
                    },
                    "--schema": {
                        "type": "string",
                        "format": "file path",
                        "required": False,
                        "description": "JSON Schema the input data must satisfy before evaluation.",
                    },
                    **engine_arguments,
                    "--output": {
                        "short": "-o",
                        "type": "string",
                        "format": "file path",
                        "required": False,
                        "description": "Write the JSON result to this file instead of stdout.",
                    },
                    "--log-dir": {
                        "type": "string",
                        "format": "directory path",
                        "required": False,
                        "description": (
                            "Directory for JSON-lines logs (expressions.log) with one "
                            "operator_call event per operator invocation."
                        ),
                    },
                },
                "output": {
                    "channel": "stdout (or the file given by --output)",
                    "format": "JSON value: the expression result",
                },
                "exit_codes": {
                    "0": "success",
                    "1": "load, input validation, or evaluation error (message on stderr)",
                },
            },
            {
                "name": "validate",
                "description": "Report every unknown operator in an expression without evaluating it.",
                "arguments": {
                    "expression": {
                        "type": "string",
                        "format": "file path or inline JSON",
                        "required": True,
                        "description": "Expression document to check.",
                    },
                    **engine_arguments,
                },
                "output": {
                    "stdout_on_success": "Expression is valid",
                    "stderr_on_failure": "[path] Unknown expression operator: ...",
                },
                "exit_codes": {"0": "valid", "1": "one or more unknown operators"},
            },
            {
                "name": "names",
                "description": "List every registered operator name, one per line.",
                "arguments": dict(engine_arguments),
                "exit_codes": {"0": "always succeeds"},
            },
            {
                "name": "schema",
                "description": "Print this machine-readable JSON schema to stdout.",
                "arguments": {},
                "exit_codes": {"0": "always succeeds"},
            },
        ],
        "packs": {name: sorted(pack) for name, pack in sorted(PACKS.items())},
    }


# ── Parser ───────────────────────────────────────────────────────────────────

def _add_engine_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p", "--pack",
        action="append",
        default=[],
        choices=sorted(PACKS),
        metavar="NAME",
        help=f"Register an operator pack (repeatable). One of: {', '.join(sorted(PACKS))}",
    )
    parser.add_argument(
        "--no-base",
        action="store_true",
        help="Do not register the base pack",
    )
    parser.add_argument(
        "-x", "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Remove an operator from the registry (repeatable)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-expressions",
        description=_TOP_DESCRIPTION,
        epilog=_TOP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command")

    # ── apply ────────────────────────────────────────────────────────────────
    apply_p = sub.add_parser(
        "apply",
        help="Evaluate an expression and print the result as JSON",
        description=_APPLY_DESCRIPTION,
        epilog=_APPLY_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    apply_p.add_argument("expression", help="Expression file (JSON/YAML) or inline JSON")
    apply_p.add_argument("-d", "--data", type=Path, help="JSON/YAML file with input data")
    apply_p.add_argument(
        "-i", "--input",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Input value (repeatable); VALUE is parsed as JSON when possible",
    )
    apply_p.add_argument("--schema", type=Path, help="JSON Schema to validate input data against")
    _add_engine_arguments(apply_p)
    apply_p.add_argument("-o", "--output", type=Path, help="Write the result to this file")
    apply_p.add_argument("--log-dir", type=Path, help="Directory for JSON-lines operator logs")

    # ── validate ─────────────────────────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Check an expression for unknown operators",
        description=_VALIDATE_DESCRIPTION,
        epilog=_VALIDATE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    val_p.add_argument("expression", help="Expression file (JSON/YAML) or inline JSON")
    _add_engine_arguments(val_p)

    # ── names ────────────────────────────────────────────────────────────────
    names_p = sub.add_parser("names", help="List registered operator names")
    _add_engine_arguments(names_p)

    # ── schema ───────────────────────────────────────────────────────────────
    sub.add_parser(
        "schema",
        help="Print a machine-readable JSON schema of this CLI to stdout",
        description=_SCHEMA_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    return parser


# ── Command handlers ──────────────────────────────────────────────────────────

def _read_expression(source: str) -> Any:
    """Load EXPRESSION from a file when it names one, else parse it as JSON."""
    from json_expressions.loader import load_document

    if Path(source).is_file():
        return load_document(source)
    try:
        return json.loads(source)
    except json.JSONDecodeError as e:
        raise ExpressionLoadError(
            f"Expression is neither an existing file nor valid JSON: {e}"
        ) from e


def _parse_inputs(raw: list[str], data_file: Path | None) -> Any:
    """Build the input data from --data and/or --input flags."""
    from json_expressions.loader import load_document

    data: Any = load_document(data_file) if data_file is not None else None
    if not raw:
        return data

    if data is None:
        data = {}
    if not isinstance(data, dict):
        print(
            f"Error: --input requires --data to hold an object, got {type(data).__name__}",
            file=sys.stderr,
        )
        sys.exit(1)

    for pair in raw:
        if "=" not in pair:
            print(f"Error: --input values must be KEY=VALUE, got {pair!r}", file=sys.stderr)
            sys.exit(1)
        key, value = pair.split("=", 1)
        # Try to parse as JSON for non-string values (numbers, booleans, arrays, objects)
        try:
            data[key] = json.loads(value)
        except json.JSONDecodeError:
            data[key] = value

    return data


def _engine(args: argparse.Namespace, middleware: list[Any] | None = None):
    from json_expressions import create_expression_engine

    return create_expression_engine(
        packs=[PACKS[name] for name in args.pack],
        include_base=not args.no_base,
        exclude=args.exclude,
        middleware=middleware or [],
    )


def _cmd_apply(args: argparse.Namespace) -> int:
    from json_expressions import configure_logging, logging_middleware
    from json_expressions.loader import load_schema, validate_input

    middleware = []
    if args.log_dir:
        configure_logging(args.log_dir)
        middleware.append(logging_middleware)

    engine = _engine(args, middleware)
    expression = _read_expression(args.expression)
    input_data = _parse_inputs(args.input, args.data)
    if args.schema:
        validate_input(load_schema(args.schema), input_data)

    text = json.dumps(engine.apply(expression, input_data), indent=2, default=str)

    if args.output:
        args.output.write_text(text)
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        print(text)

    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    engine = _engine(args)
    errors = engine.validate_expression(_read_expression(args.expression))

    if not errors:
        print("Expression is valid")
        return 0

    for message in errors:
        print(message, file=sys.stderr)
    print(f"\n{len(errors)} error(s)", file=sys.stderr)
    return 1


def _cmd_names(args: argparse.Namespace) -> int:
    for name in _engine(args).expression_names:
        print(name)
    return 0


def _cmd_schema() -> int:
    print(json.dumps(_cli_schema(), indent=2))
    return 0


# ── Entry point ───────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "apply":
            sys.exit(_cmd_apply(args))
        elif args.command == "validate":
            sys.exit(_cmd_validate(args))
        elif args.command == "names":
            sys.exit(_cmd_names(args))
        elif args.command == "schema":
            sys.exit(_cmd_schema())
    except ExpressionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
