"""
Unit Tests: Validation rule combinators

Covers required(), in_range(), conditional() and chain().
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from taiko_configurator.models.taiko_schema.rules import (
    ValidationError,
    ValidationResult,
    chain,
    conditional,
    in_range,
    is_truthy,
    required,
    to_int,
    to_number,
)


@pytest.mark.parametrize("value,expected", [
    (0, 0.0),
    (12, 12.0),
    (-1.5, -1.5),
    (" 7 ", 7.0),
    ("abc", None),
    (None, None),
    (True, None),
    (float("nan"), None),
    (float("-inf"), None),
    ([1], None),
    (10**400, None),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_to_int_requires_whole_number():
    assert to_int("42") == 42
    assert to_int(3.0) == 3
    assert to_int(3.5) is None
    assert to_int(False) is None


@pytest.mark.parametrize("value,expected", [
    (1, True),
    ("1", True),
    (-1, True),
    (0, False),
    ("0", False),
    (None, False),
    ("", False),
    ("yes", False),
    (10**400, True),
    (False, False),
])
def test_is_truthy(value, expected):
    assert is_truthy(value) is expected


class TestRequired:

    def test_present_values_pass(self):
        rule = required()
        for value in (-1, 0, "26"):
            assert rule({"pin": value}, "pin", "Pin")

    def test_absent_values_fail(self):
        rule = required()
        for config in ({}, {"pin": None}, {"pin": "  "}):
            result = rule(config, "pin", "Pin")
            assert result.error == ValidationError.MISSING_VALUE
            assert result.message == "Pin is a required field"


class TestInRange:

    def test_bounds(self):
        rule = in_range(1, 10)
        assert rule({"x": 1}, "x", "X")
        assert rule({"x": 10}, "x", "X")

    def test_below_minimum(self):
        result = in_range(1, 10)({"x": 0}, "x", "X")
        assert result.error == ValidationError.OUT_OF_RANGE
        assert result.expected_min == 1
        assert result.expected_max == 10
        assert result.actual_value == 0
        assert result.message == "X must be greater than or equal to 1"

    def test_above_maximum(self):
        result = in_range(1, 10)({"x": 11}, "x", "X")
        assert result.message == "X must be less than or equal to 10"

    def test_missing_and_non_numeric(self):
        rule = in_range(1, 10)
        assert rule({}, "x", "X").error == ValidationError.OUT_OF_RANGE
        assert rule({"x": "ten"}, "x", "X").message == "X must be a number"
        assert rule({"x": 2.5}, "x", "X").message == "X must be a whole number"


class TestConditional:

    def test_guard_off_always_passes(self):
        rule = conditional("on", in_range(0, 1))
        assert rule({"on": 0, "x": 99}, "x", "X")
        assert rule({"x": 99}, "x", "X")

    def test_guard_on_applies_base_rule(self):
        rule = conditional("on", in_range(0, 1))
        assert not rule({"on": 1, "x": 99}, "x", "X")
        assert rule({"on": 1, "x": 1}, "x", "X")

    def test_guard_with_presence_rule(self):
        rule = conditional("on", required())
        assert rule({"on": 1, "x": -1}, "x", "X")
        assert rule({"on": 1}, "x", "X").error == ValidationError.MISSING_VALUE


def test_chain_returns_first_failure():
    rule = chain(required(), in_range(0, 1))
    assert rule({}, "x", "X").error == ValidationError.MISSING_VALUE
    assert rule({"x": 5}, "x", "X").error == ValidationError.OUT_OF_RANGE
    assert rule({"x": 1}, "x", "X")


def test_result_truthiness_and_default_message():
    ok = ValidationResult()
    assert ok and ok.is_valid
    assert ok.message == "OK"

    failed = ValidationResult(error=ValidationError.PIN_CONFLICT, field="sensor1Pin")
    assert not failed
    assert failed.message == "Pin is assigned to more than one sensor"
