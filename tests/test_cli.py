"""Tests for the CLI: argument parsing, subcommands, schema and exit codes."""

from __future__ import annotations

import json

import pytest

from json_expressions.cli import _build_parser, _cli_schema, _parse_inputs, _read_expression, main
from json_expressions.errors import ExpressionLoadError


def _run(capsys, *argv):
    with pytest.raises(SystemExit) as info:
        main(list(argv))
    out, err = capsys.readouterr()
    return info.value.code, out, err


# ── _parse_inputs ─────────────────────────────────────────────────────────────

class TestParseInputs:
    def test_empty(self):
        assert _parse_inputs([], None) is None

    def test_string_value(self):
        assert _parse_inputs(["key=hello"], None) == {"key": "hello"}

    def test_integer_value_parsed_from_json(self):
        result = _parse_inputs(["n=42"], None)
        assert result["n"] == 42
        assert isinstance(result["n"], int)

    def test_array_value_parsed_from_json(self):
        assert _parse_inputs(["ids=[1,2,3]"], None)["ids"] == [1, 2, 3]

    def test_equals_in_value(self):
        assert _parse_inputs(["expr=a=b"], None)["expr"] == "a=b"

    def test_data_file(self, tmp_path):
        f = tmp_path / "data.json"
        f.write_text(json.dumps([1, 2, 3]))
        assert _parse_inputs([], f) == [1, 2, 3]

    def test_flags_override_data_file(self, tmp_path):
        f = tmp_path / "data.yaml"
        f.write_text("key: from_file\nother: 1\n")
        assert _parse_inputs(["key=from_flag"], f) == {"key": "from_flag", "other": 1}

    def test_missing_equals_exits(self):
        with pytest.raises(SystemExit):
            _parse_inputs(["noequals"], None)

    def test_flags_with_list_data_exit(self, tmp_path):
        f = tmp_path / "data.json"
        f.write_text("[1, 2, 3]")
        with pytest.raises(SystemExit):
            _parse_inputs(["key=value"], f)


# ── _read_expression ──────────────────────────────────────────────────────────

class TestReadExpression:
    def test_inline_json(self):
        assert _read_expression('{"$get": "name"}') == {"$get": "name"}

    def test_file(self, tmp_path):
        f = tmp_path / "expr.yaml"
        f.write_text("$get: name\n")
        assert _read_expression(str(f)) == {"$get": "name"}

    def test_neither(self):
        with pytest.raises(ExpressionLoadError, match="neither an existing file nor valid JSON"):
            _read_expression("{not json")


# ── _cli_schema ───────────────────────────────────────────────────────────────

class TestCliSchema:
    def setup_method(self):
        self.schema = _cli_schema()

    def test_tool_name(self):
        assert self.schema["tool"] == "json-expressions"

    def test_commands_list(self):
        names = [c["name"] for c in self.schema["commands"]]
        assert names == ["apply", "validate", "names", "schema"]

    def test_packs_listed(self):
        assert "$get" in self.schema["packs"]["base"]
        assert "$add" in self.schema["packs"]["math"]

    def test_schema_is_json_serialisable(self):
        json.dumps(self.schema)


# ── Subcommands ───────────────────────────────────────────────────────────────

class TestApply:
    def test_inline_expression_with_inputs(self, capsys):
        code, out, _ = _run(
            capsys, "apply", '{"$add": [{"$get": "x"}, 5]}', "--input", "x=10", "--pack", "math"
        )
        assert code == 0
        assert json.loads(out) == 15

    def test_files(self, capsys, tmp_path):
        expr = tmp_path / "expr.json"
        expr.write_text(json.dumps({"$map": {"$get": "name"}}))
        data = tmp_path / "data.json"
        data.write_text(json.dumps([{"name": "Luna"}, {"name": "Kai"}]))
        code, out, _ = _run(capsys, "apply", str(expr), "--data", str(data))
        assert code == 0
        assert json.loads(out) == ["Luna", "Kai"]

    def test_output_file(self, capsys, tmp_path):
        target = tmp_path / "result.json"
        code, out, err = _run(capsys, "apply", '{"$literal": [1]}', "--output", str(target))
        assert code == 0
        assert out == ""
        assert json.loads(target.read_text()) == [1]
        assert "Output written to" in err

    def test_evaluation_error_exits_one(self, capsys):
        code, _, err = _run(capsys, "apply", '{"$pipe": [{"$nope": 1}]}')
        assert code == 1
        assert '[pipe[0].nope] Unknown expression operator: "$nope"' in err

    def test_excluded_operator(self, capsys):
        code, _, err = _run(capsys, "apply", '{"$get": "x"}', "--exclude", "$get")
        assert code == 1
        assert 'Unknown expression operator: "$get"' in err

    def test_schema_rejects_input(self, capsys, tmp_path):
        schema = tmp_path / "schema.json"
        schema.write_text(json.dumps({"type": "object", "required": ["x"]}))
        code, _, err = _run(capsys, "apply", '{"$get": "x"}', "--input", "y=1", "--schema", str(schema))
        assert code == 1
        assert "Input validation failed" in err

    def test_log_dir(self, capsys, tmp_path):
        import logging

        logger = logging.getLogger("json_expressions")
        before = list(logger.handlers)
        try:
            code, _, _ = _run(capsys, "apply", '{"$get": "x"}', "--input", "x=1", "--log-dir", str(tmp_path))
            for handler in logger.handlers:
                handler.flush()
            events = [json.loads(line) for line in (tmp_path / "expressions.log").read_text().splitlines()]
        finally:
            for handler in logger.handlers[:]:
                if handler not in before:
                    logger.removeHandler(handler)
                    handler.close()
        assert code == 0
        assert any(e["event"] == "operator_call" and e["operator"] == "$get" for e in events)


class TestValidate:
    def test_valid(self, capsys):
        code, out, _ = _run(capsys, "validate", '{"$get": "name"}')
        assert code == 0
        assert "Expression is valid" in out

    def test_invalid_reports_every_error(self, capsys):
        code, _, err = _run(capsys, "validate", '{"$pipe": [{"$bad1": 1}, {"$bad2": 2}]}')
        assert code == 1
        assert "$bad1" in err
        assert "$bad2" in err
        assert "2 error(s)" in err

    def test_pack_makes_operator_known(self, capsys):
        code, _, _ = _run(capsys, "validate", '{"$add": [1, 2]}', "--pack", "math")
        assert code == 0


class TestNames:
    def test_base_names(self, capsys):
        code, out, _ = _run(capsys, "names")
        assert code == 0
        assert "$get" in out.split()
        assert out.split()[-1] == "$literal"

    def test_no_base(self, capsys):
        code, out, _ = _run(capsys, "names", "--no-base")
        assert code == 0
        assert out.split() == ["$literal"]


class TestHelp:
    def test_no_args_exits_zero(self, capsys):
        code, out, _ = _run(capsys)
        assert code == 0
        assert "json-expressions" in out

    def test_schema_subcommand(self, capsys):
        code, out, err = _run(capsys, "schema")
        assert code == 0
        assert json.loads(out)["tool"] == "json-expressions"
        assert err == ""

    def test_unknown_pack_rejected(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["names", "--pack", "nope"])
