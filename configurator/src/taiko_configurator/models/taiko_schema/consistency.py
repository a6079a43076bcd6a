"""
Cross-field consistency checks for the Taiko addon

Runs after per-field validation on the whole configuration. Findings are
advisory and never change field-level results. Fields that already fail
their own rule are skipped.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping

from ...constants import PIN_UNASSIGNED, TAIKO_SENSOR_COUNT
from ..pins import ANALOG_PINS, is_analog_pin
from .definitions import (
    ENABLED_FIELD,
    get_field,
    sensor_heavy_key,
    sensor_light_key,
    sensor_pin_key,
)
from .rules import ValidationError, ValidationResult, error, is_truthy, to_int
from .validator import ConfigValidator


def _check_pins(config: Mapping[str, Any], skip: Iterable[str],
                used_pins: frozenset) -> List[ValidationResult]:
    results = []
    assigned: Dict[str, int] = {}

    for n in range(1, TAIKO_SENSOR_COUNT + 1):
        key = sensor_pin_key(n)
        if key in skip:
            continue
        pin = to_int(config.get(key))
        if pin is None or pin == PIN_UNASSIGNED:
            continue
        label = get_field(key).label
        if not is_analog_pin(pin):
            allowed = ", ".join(str(p) for p in ANALOG_PINS)
            results.append(error(ValidationError.PIN_NOT_ANALOG, key,
                                 f"{label}: GPIO {pin} is not an ADC pin ({allowed})",
                                 actual=pin))
            continue
        assigned[key] = pin

    sensors_by_pin: Dict[int, List[str]] = defaultdict(list)
    for key, pin in assigned.items():
        sensors_by_pin[pin].append(key)

    for key, pin in assigned.items():
        label = get_field(key).label
        shared = [k for k in sensors_by_pin[pin] if k != key]
        if shared:
            others = ", ".join(get_field(k).label for k in shared)
            results.append(error(ValidationError.PIN_CONFLICT, key,
                                 f"{label}: GPIO {pin} is also assigned to {others}",
                                 actual=pin))
        elif pin in used_pins:
            results.append(error(ValidationError.PIN_UNAVAILABLE, key,
                                 f"{label}: GPIO {pin} is already in use",
                                 actual=pin))

    return results


def _check_thresholds(config: Mapping[str, Any], skip: Iterable[str]) -> List[ValidationResult]:
    results = []
    for n in range(1, TAIKO_SENSOR_COUNT + 1):
        light_key = sensor_light_key(n)
        heavy_key = sensor_heavy_key(n)
        if light_key in skip or heavy_key in skip:
            continue
        light = to_int(config.get(light_key))
        heavy = to_int(config.get(heavy_key))
        if light is None or heavy is None:
            continue
        if heavy < light:
            results.append(error(ValidationError.THRESHOLD_ORDER, heavy_key,
                                 f"Sensor {n}: heavy threshold {heavy} is below "
                                 f"light threshold {light}",
                                 actual=heavy, min_val=light))
    return results


def check_consistency(config: Mapping[str, Any],
                      used_pins: Iterable[int] = ()) -> List[ValidationResult]:
    """
    Check relationships between fields.

    Args:
        config: Configuration object
        used_pins: Snapshot of pins claimed by other features

    Returns:
        List of failing results (empty when consistent or disabled)
    """
    if not is_truthy(config.get(ENABLED_FIELD)):
        return []

    failing_fields = set(ConfigValidator.validate_config_results(config))
    results = _check_pins(config, failing_fields, frozenset(used_pins))
    results.extend(_check_thresholds(config, failing_fields))
    return results


def consistency_errors(config: Mapping[str, Any],
                       used_pins: Iterable[int] = ()) -> Dict[str, str]:
    """Field-keyed messages for consistency findings"""
    return {result.field: result.message for result in check_consistency(config, used_pins)}
