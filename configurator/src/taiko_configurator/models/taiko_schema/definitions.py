"""
Taiko Addon Field Definitions

Declarative rule set for every field of the Taiko addon options.
Field keys match the TaikoAddonOptions protobuf message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ...constants import ADC_MAX, TAIKO_SENSOR_COUNT
from .buttons import BUTTON_MASK_MAX
from .rules import Rule, chain, conditional, in_range, required


# Guard field; every other rule is inert while it is falsy
ENABLED_FIELD = "enabled"

# Alternate key names accepted on load
FIELD_ALIASES = {
    "TaikoEnabled": ENABLED_FIELD,
}

TIMING_MIN_MS = 1
TIMING_MAX_MS = 1000


class FieldKind(Enum):
    """Semantic group of a field"""
    FLAG = "flag"
    PIN = "pin"
    BUTTON = "button"
    THRESHOLD_LIGHT = "threshold_light"
    THRESHOLD_HEAVY = "threshold_heavy"
    TIMING = "timing"


@dataclass(frozen=True)
class FieldDefinition:
    """One configuration field and its rule"""
    key: str
    label: str
    kind: FieldKind
    rule: Rule
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    sensor: Optional[int] = None  # 1-based sensor index


# Sensor order follows the drum face: sides are 1 and 4, center is 2 and 3
SENSOR_NAMES = {
    1: "Left Side",
    2: "Center Left",
    3: "Center Right",
    4: "Right Side",
}
SIDE_SENSORS: Tuple[int, ...] = (1, 4)
CENTER_SENSORS: Tuple[int, ...] = (2, 3)


def sensor_pin_key(sensor: int) -> str:
    return f"sensor{sensor}Pin"


def sensor_button_key(sensor: int) -> str:
    return f"sensor{sensor}Button"


def sensor_light_key(sensor: int) -> str:
    return f"sensor{sensor}ThresholdLight"


def sensor_heavy_key(sensor: int) -> str:
    return f"sensor{sensor}ThresholdHeavy"


def _ranged(key: str, label: str, kind: FieldKind, minimum: int, maximum: int,
            sensor: Optional[int] = None) -> FieldDefinition:
    return FieldDefinition(
        key=key,
        label=label,
        kind=kind,
        rule=conditional(ENABLED_FIELD, in_range(minimum, maximum)),
        minimum=minimum,
        maximum=maximum,
        sensor=sensor,
    )


def _build_field_definitions() -> List[FieldDefinition]:
    fields = [
        FieldDefinition(
            key=ENABLED_FIELD,
            label="Taiko Enabled",
            kind=FieldKind.FLAG,
            rule=chain(required(), in_range(0, 1)),
            minimum=0,
            maximum=1,
        )
    ]

    sensors = range(1, TAIKO_SENSOR_COUNT + 1)

    for n in sensors:
        fields.append(FieldDefinition(
            key=sensor_pin_key(n),
            label=f"Sensor {n} Pin",
            kind=FieldKind.PIN,
            rule=conditional(ENABLED_FIELD, required()),
            sensor=n,
        ))

    for n in sensors:
        fields.append(_ranged(sensor_button_key(n), f"Sensor {n} Button",
                              FieldKind.BUTTON, 0, BUTTON_MASK_MAX, n))

    for n in sensors:
        fields.append(_ranged(sensor_light_key(n), f"Sensor {n} Light Threshold",
                              FieldKind.THRESHOLD_LIGHT, 0, ADC_MAX, n))

    for n in sensors:
        fields.append(_ranged(sensor_heavy_key(n), f"Sensor {n} Heavy Threshold",
                              FieldKind.THRESHOLD_HEAVY, 0, ADC_MAX, n))

    fields.append(_ranged("debounceMillis", "Debounce (ms)",
                          FieldKind.TIMING, TIMING_MIN_MS, TIMING_MAX_MS))
    fields.append(_ranged("keyTimeoutMillis", "Key Timeout (ms)",
                          FieldKind.TIMING, TIMING_MIN_MS, TIMING_MAX_MS))

    fields.append(_ranged("antiGhostingSides", "Anti-Ghosting Sides", FieldKind.FLAG, 0, 1))
    fields.append(_ranged("antiGhostingCenter", "Anti-Ghosting Center", FieldKind.FLAG, 0, 1))

    return fields


FIELD_DEFINITIONS: List[FieldDefinition] = _build_field_definitions()
FIELDS_BY_KEY: Dict[str, FieldDefinition] = {f.key: f for f in FIELD_DEFINITIONS}
FIELD_KEYS: Tuple[str, ...] = tuple(f.key for f in FIELD_DEFINITIONS)


def get_field(key: str) -> FieldDefinition:
    """
    Look up a field definition.

    Raises:
        KeyError: if key is not a Taiko field
    """
    try:
        return FIELDS_BY_KEY[key]
    except KeyError:
        raise KeyError(f"Unknown Taiko field: '{key}'") from None


def fields_for_sensor(sensor: int) -> List[FieldDefinition]:
    """All fields belonging to one sensor (1-based)"""
    return [f for f in FIELD_DEFINITIONS if f.sensor == sensor]


def build_json_schema() -> Dict[str, Any]:
    """
    Render the field rules as a JSON Schema style dict.

    Conditional rules are expressed with if/then on the enabled flag.
    """
    properties: Dict[str, Any] = {}
    conditional_required: List[str] = []

    for field in FIELD_DEFINITIONS:
        prop: Dict[str, Any] = {"type": "integer", "title": field.label}
        if field.key == ENABLED_FIELD:
            prop["enum"] = [0, 1]
        properties[field.key] = prop
        if field.key != ENABLED_FIELD:
            conditional_required.append(field.key)

    enabled_properties = {
        f.key: {"minimum": f.minimum, "maximum": f.maximum}
        for f in FIELD_DEFINITIONS
        if f.key != ENABLED_FIELD and f.minimum is not None
    }

    return {
        "type": "object",
        "required": [ENABLED_FIELD],
        "properties": properties,
        "if": {"properties": {ENABLED_FIELD: {"const": 1}}},
        "then": {
            "required": conditional_required,
            "properties": enabled_properties,
        },
    }
