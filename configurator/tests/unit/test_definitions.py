"""
Unit Tests: Field definitions and default configuration
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from taiko_configurator.models.taiko_schema import (
    DEFAULTS_VERSION,
    FIELD_DEFINITIONS,
    TAIKO_DEFAULTS,
    build_json_schema,
    create_default_config,
)
from taiko_configurator.models.taiko_schema.definitions import (
    FieldKind,
    fields_for_sensor,
    get_field,
)


def test_every_field_has_a_default():
    assert [f.key for f in FIELD_DEFINITIONS] == list(TAIKO_DEFAULTS)


def test_field_keys_unique():
    keys = [f.key for f in FIELD_DEFINITIONS]
    assert len(keys) == len(set(keys))


def test_labels():
    assert get_field("enabled").label == "Taiko Enabled"
    assert get_field("sensor3ThresholdHeavy").label == "Sensor 3 Heavy Threshold"
    assert get_field("debounceMillis").label == "Debounce (ms)"


def test_get_field_unknown():
    with pytest.raises(KeyError):
        get_field("sensor0Pin")


def test_sensor_fields():
    fields = fields_for_sensor(2)
    assert [f.kind for f in fields] == [
        FieldKind.PIN, FieldKind.BUTTON, FieldKind.THRESHOLD_LIGHT, FieldKind.THRESHOLD_HEAVY,
    ]


def test_default_values():
    config = create_default_config()
    assert config["enabled"] == 0
    assert [config[f"sensor{n}Pin"] for n in range(1, 5)] == [-1, -1, -1, -1]
    assert [config[f"sensor{n}Button"] for n in range(1, 5)] == [0x01, 0x02, 0x04, 0x08]
    assert [config[f"sensor{n}ThresholdLight"] for n in range(1, 5)] == [1400, 600, 700, 1400]
    assert [config[f"sensor{n}ThresholdHeavy"] for n in range(1, 5)] == [3600, 2600, 2700, 3600]
    assert config["debounceMillis"] == 45
    assert config["keyTimeoutMillis"] == 30
    assert config["antiGhostingSides"] == 1
    assert config["antiGhostingCenter"] == 1
    assert DEFAULTS_VERSION == "1.0"


def test_default_config_is_a_copy():
    config = create_default_config()
    config["debounceMillis"] = 1
    assert TAIKO_DEFAULTS["debounceMillis"] == 45


def test_json_schema():
    schema = build_json_schema()
    assert schema["required"] == ["enabled"]
    assert schema["properties"]["enabled"]["enum"] == [0, 1]
    assert "sensor1Pin" in schema["then"]["required"]
    assert "sensor1Pin" not in schema["then"]["properties"]
    assert schema["then"]["properties"]["debounceMillis"] == {"minimum": 1, "maximum": 1000}
    assert schema["then"]["properties"]["sensor4Button"] == {"minimum": 0, "maximum": 0xFFFF}
