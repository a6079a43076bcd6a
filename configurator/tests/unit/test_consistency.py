"""
Unit Tests: Cross-field consistency checks

Pin conflicts, pin availability and threshold ordering.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from taiko_configurator.models.taiko_schema import ValidationError, create_default_config
from taiko_configurator.models.taiko_schema.consistency import (
    check_consistency,
    consistency_errors,
)


def make_config(**overrides):
    config = create_default_config()
    config["enabled"] = 1
    config.update(overrides)
    return config


def codes(results):
    return {(r.field, r.error) for r in results}


def test_defaults_are_consistent():
    assert check_consistency(make_config()) == []


def test_fully_assigned_pins_are_consistent():
    config = make_config(sensor1Pin=26, sensor2Pin=27, sensor3Pin=28, sensor4Pin=29)
    assert check_consistency(config) == []


def test_disabled_reports_nothing():
    config = make_config(enabled=0, sensor1Pin=26, sensor2Pin=26, sensor1ThresholdHeavy=0)
    assert check_consistency(config, used_pins=[26]) == []


def test_duplicate_pins_reported_per_sensor():
    config = make_config(sensor1Pin=27, sensor3Pin=27)
    results = check_consistency(config)
    assert codes(results) == {
        ("sensor1Pin", ValidationError.PIN_CONFLICT),
        ("sensor3Pin", ValidationError.PIN_CONFLICT),
    }
    assert "Sensor 3 Pin" in consistency_errors(config)["sensor1Pin"]


def test_unassigned_pins_never_conflict():
    assert check_consistency(make_config()) == []


def test_non_analog_pin():
    results = check_consistency(make_config(sensor2Pin=5))
    assert codes(results) == {("sensor2Pin", ValidationError.PIN_NOT_ANALOG)}
    assert "26, 27, 28, 29" in results[0].message


def test_used_pin_unavailable():
    config = make_config(sensor4Pin=29)
    assert check_consistency(config) == []
    results = check_consistency(config, used_pins=(29,))
    assert codes(results) == {("sensor4Pin", ValidationError.PIN_UNAVAILABLE)}


def test_heavy_below_light():
    config = make_config(sensor2ThresholdLight=2000, sensor2ThresholdHeavy=1500)
    results = check_consistency(config)
    assert codes(results) == {("sensor2ThresholdHeavy", ValidationError.THRESHOLD_ORDER)}
    assert results[0].expected_min == 2000


def test_equal_thresholds_allowed():
    config = make_config(sensor1ThresholdLight=2000, sensor1ThresholdHeavy=2000)
    assert check_consistency(config) == []


def test_fields_failing_own_rule_are_skipped():
    config = make_config(sensor1ThresholdLight=9000, sensor1ThresholdHeavy=100)
    assert check_consistency(config) == []
