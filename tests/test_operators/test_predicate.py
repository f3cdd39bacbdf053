"""Tests for comparison, membership and boolean operators."""

from __future__ import annotations

import pytest

from json_expressions import OperandError


# ── Comparisons ──────────────────────────────────────────────────────────────

@pytest.mark.parametrize("tree,data,expected", [
    ({"$eq": 5}, 5, True),
    ({"$eq": [{"$get": "a"}, {"$get": "b"}]}, {"a": 1, "b": 1}, True),
    ({"$eq": {"x": [1, 2]}}, {"x": [1, 2]}, True),
    ({"$eq": 1}, True, False),
    ({"$ne": "a"}, "b", True),
    ({"$gt": 3}, 4, True),
    ({"$gt": [3, 4]}, None, False),
    ({"$gte": 4}, 4, True),
    ({"$lt": "b"}, "a", True),
    ({"$lte": [2, 2]}, None, True),
])
def test_comparisons(apply, tree, data, expected):
    assert apply(tree, data) is expected


def test_two_element_list_is_read_as_pair(apply):
    # a list input cannot be compared against a two-element literal list
    assert apply({"$eq": [1, 2]}, [1, 2]) is False


def test_comparison_type_clash(apply):
    with pytest.raises(OperandError, match=r'^\[gt\] \$gt cannot compare "a" with 1$'):
        apply({"$gt": 1}, "a")


class TestBetween:
    def test_inclusive(self, apply):
        tree = {"$between": {"min": 1, "max": 5}}
        assert [apply(tree, n) for n in (0, 1, 5, 6)] == [False, True, True, False]

    def test_computed_bounds(self, apply):
        tree = {"$between": {"min": {"$literal": 2}, "max": 3}}
        assert apply(tree, 2.5) is True

    def test_bounds_required(self, apply):
        with pytest.raises(OperandError, match="min and max"):
            apply({"$between": {"min": 1}}, 2)


# ── Membership ───────────────────────────────────────────────────────────────

class TestMembership:
    def test_in(self, apply):
        assert apply({"$in": ["a", "b"]}, "b") is True
        assert apply({"$in": ["a", "b"]}, "c") is False

    def test_nin(self, apply):
        assert apply({"$nin": ["a", "b"]}, "c") is True

    def test_in_uses_json_equality(self, apply):
        assert apply({"$in": [1, 2]}, True) is False

    def test_requires_array(self, apply):
        with pytest.raises(OperandError, match=r"^\[in\] \$in parameter must be an array$"):
            apply({"$in": "abc"}, "a")


# ── Boolean logic ────────────────────────────────────────────────────────────

class TestLogic:
    def test_and(self, apply):
        tree = {"$and": [{"$gt": 1}, {"$lt": 10}]}
        assert apply(tree, 5) is True
        assert apply(tree, 11) is False

    def test_and_short_circuits(self, apply):
        assert apply({"$and": [False, {"$divide": [1, 0]}]}, {}) is False

    def test_or(self, apply):
        assert apply({"$or": [{"$eq": 1}, {"$eq": 2}]}, 2) is True

    def test_or_error_path(self, apply):
        with pytest.raises(OperandError, match=r"^\[or\[1\]\.gt\]"):
            apply({"$or": [False, {"$gt": 1}]}, "x")

    def test_not(self, apply):
        assert apply({"$not": {"$eq": 1}}, 1) is False
        assert apply({"$not": None}, {}) is True

    def test_and_requires_list(self, apply):
        with pytest.raises(OperandError, match="array of expressions"):
            apply({"$and": True}, {})


# ── Value checks ─────────────────────────────────────────────────────────────

def test_is_present_and_is_empty(apply):
    assert apply({"$isPresent": None}, 0) is True
    assert apply({"$isPresent": None}, None) is False
    assert apply({"$isEmpty": None}, None) is True
    assert apply({"$isEmpty": None}, "") is False


class TestMatches:
    def test_equality_and_predicates(self, apply):
        tree = {"$matches": {"status": "active", "age": {"$gte": 4}}}
        assert apply(tree, {"status": "active", "age": 5}) is True
        assert apply(tree, {"status": "active", "age": 3}) is False

    def test_nested_path(self, apply):
        assert apply({"$matches": {"user.role": "admin"}}, {"user": {"role": "admin"}}) is True

    def test_condition_error_path(self, apply):
        with pytest.raises(OperandError, match=r"^\[matches\.age\.gte\]"):
            apply({"$matches": {"age": {"$gte": 4}}}, {"age": "old"})


class TestMatchesRegex:
    def test_search(self, apply):
        assert apply({"$matchesRegex": r"^\d{3}-\d{4}$"}, "555-1234") is True
        assert apply({"$matchesRegex": "^abc"}, "xabc") is False

    def test_inline_flags(self, apply):
        assert apply({"$matchesRegex": "(?i)hello"}, "HELLO there") is True

    def test_requires_string_input(self, apply):
        with pytest.raises(OperandError, match="requires string input"):
            apply({"$matchesRegex": "a"}, 5)

    def test_invalid_pattern(self, apply):
        with pytest.raises(OperandError, match="invalid pattern"):
            apply({"$matchesRegex": "("}, "a")
