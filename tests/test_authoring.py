"""Tests for the operator authoring helpers."""

from __future__ import annotations

import operator

import pytest

from json_expressions import bimodal, create_expression_engine, with_resolved_operand


def _engine(**custom):
    return create_expression_engine(custom=custom)


# ── with_resolved_operand ────────────────────────────────────────────────────

def test_with_resolved_operand_receives_evaluated_operand():
    @with_resolved_operand
    def shout(text, input_data, context):
        return text.upper()

    engine = _engine(**{"$shout": shout})
    assert engine.apply({"$shout": {"$get": "name"}}, {"name": "kai"}) == "KAI"


def test_with_resolved_operand_passes_input_and_context():
    @with_resolved_operand
    def pair(resolved, input_data, context):
        return [resolved, input_data, context.is_expression({"$get": "x"})]

    engine = _engine(**{"$pair": pair})
    assert engine.apply({"$pair": 1}, "in") == [1, "in", True]


def test_with_resolved_operand_keeps_name():
    @with_resolved_operand
    def named(resolved, input_data, context):
        return resolved

    assert named.__name__ == "named"


# ── bimodal ──────────────────────────────────────────────────────────────────

class TestBimodalUnary:
    def test_uses_resolved_operand(self):
        engine = _engine(**{"$double": bimodal(lambda x: x * 2)})
        assert engine.apply({"$double": {"$get": "n"}}, {"n": 4}) == 8

    def test_falls_back_to_input_when_operand_is_none(self):
        engine = _engine(**{"$double": bimodal(lambda x: x * 2)})
        assert engine.apply({"$double": None}, 21) == 42


class TestBimodalBinary:
    def test_two_element_list_supplies_both_arguments(self):
        engine = _engine(**{"$isAdult": bimodal(lambda age, limit: age >= limit)})
        assert engine.apply({"$isAdult": [{"$get": "age"}, 18]}, {"age": 20}) is True

    def test_single_operand_compares_against_input(self):
        engine = _engine(**{"$isAdult": bimodal(lambda age, limit: age >= limit)})
        assert engine.apply({"$isAdult": 18}, 12) is False

    def test_other_lists_are_a_single_argument(self):
        engine = _engine(**{"$has": bimodal(lambda items, wanted: wanted in items)})
        assert engine.apply({"$has": [1, 2, 3]}, [[1, 2, 3]]) is True

    def test_builtin_binary_function(self):
        engine = _engine(**{"$sub": bimodal(operator.sub)})
        assert engine.apply({"$sub": [10, 4]}) == 6


@pytest.mark.parametrize(
    "fn",
    [
        lambda: 1,
        lambda a, b, c: a,
        lambda *args: args,
    ],
)
def test_bimodal_rejects_other_arities(fn):
    with pytest.raises(TypeError, match="only unary and binary functions can be wrapped"):
        bimodal(fn)


def test_bimodal_ignores_defaulted_parameters():
    def scale(x, factor=10):
        return x * factor

    engine = _engine(**{"$scale": bimodal(scale)})
    assert engine.apply({"$scale": 3}) == 30
