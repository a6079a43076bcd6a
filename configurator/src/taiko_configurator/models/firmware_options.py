"""
Effective firmware options for the Taiko addon

Mirrors how the firmware reads TaikoAddonOptions at setup: zero or missing
button masks, thresholds and timings fall back to the compiled defaults,
and each pin is mapped to its ADC channel. Nothing here samples sensors.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Tuple

from ..constants import ADC_CHANNEL_COUNT, PIN_UNASSIGNED, TAIKO_SENSOR_COUNT
from .pins import adc_channel_for_pin, is_valid_pin
from .taiko_schema.buttons import decode_button_mask
from .taiko_schema.defaults import TAIKO_DEFAULTS
from .taiko_schema.definitions import (
    CENTER_SENSORS,
    ENABLED_FIELD,
    SENSOR_NAMES,
    SIDE_SENSORS,
    sensor_button_key,
    sensor_heavy_key,
    sensor_light_key,
    sensor_pin_key,
)
from .taiko_schema.rules import is_truthy, to_int


@dataclass
class SensorSettings:
    """Per-sensor parameters as the firmware uses them"""
    index: int              # 1-based
    name: str
    adc_pin: int
    adc_channel: int
    button_mask: int
    threshold_light: int
    threshold_heavy: int

    @property
    def active(self) -> bool:
        """Sensor is sampled only with a valid pin on ADC0-ADC3"""
        return is_valid_pin(self.adc_pin) and 0 <= self.adc_channel < ADC_CHANNEL_COUNT

    @property
    def buttons(self) -> List[str]:
        return decode_button_mask(self.button_mask)


@dataclass
class TaikoFirmwareOptions:
    enabled: bool
    debounce_millis: int
    key_timeout_millis: int
    anti_ghosting_sides: bool
    anti_ghosting_center: bool
    sensors: List[SensorSettings] = field(default_factory=list)

    def sensor(self, index: int) -> SensorSettings:
        return self.sensors[index - 1]

    def suppressors(self, index: int) -> Tuple[int, ...]:
        """
        Sensors whose active press blocks a new hit on sensor index.

        Side sensors are blocked by the center pair when center
        anti-ghosting is on; center sensors by the side pair when side
        anti-ghosting is on.
        """
        if index in SIDE_SENSORS:
            return CENTER_SENSORS if self.anti_ghosting_center else ()
        if index in CENTER_SENSORS:
            return SIDE_SENSORS if self.anti_ghosting_sides else ()
        raise IndexError(f"Sensor index out of range: {index}")


def _positive_or_default(config: Mapping[str, Any], key: str) -> int:
    value = to_int(config.get(key))
    if value is None or value <= 0:
        return TAIKO_DEFAULTS[key]
    return value


def resolve_firmware_options(config: Mapping[str, Any]) -> TaikoFirmwareOptions:
    """Build the effective runtime parameters for a configuration object."""
    sensors = []
    for n in range(1, TAIKO_SENSOR_COUNT + 1):
        pin = to_int(config.get(sensor_pin_key(n)))
        if pin is None:
            pin = PIN_UNASSIGNED
        sensors.append(SensorSettings(
            index=n,
            name=SENSOR_NAMES[n],
            adc_pin=pin,
            adc_channel=adc_channel_for_pin(pin),
            button_mask=_positive_or_default(config, sensor_button_key(n)),
            threshold_light=_positive_or_default(config, sensor_light_key(n)),
            threshold_heavy=_positive_or_default(config, sensor_heavy_key(n)),
        ))

    return TaikoFirmwareOptions(
        enabled=is_truthy(config.get(ENABLED_FIELD)),
        debounce_millis=_positive_or_default(config, "debounceMillis"),
        key_timeout_millis=_positive_or_default(config, "keyTimeoutMillis"),
        anti_ghosting_sides=is_truthy(config.get("antiGhostingSides")),
        anti_ghosting_center=is_truthy(config.get("antiGhostingCenter")),
        sensors=sensors,
    )
