"""
Default Configuration for the Taiko addon

Values match the TAIKO_* defaults compiled into the firmware
(headers/addons/taiko.h). Thresholds and timing come from the reference
STM32 drum firmware calibration.
"""

from typing import Dict

from ...constants import PIN_UNASSIGNED
from .buttons import GamepadMask


DEFAULTS_VERSION = "1.0"

TAIKO_DEFAULTS: Dict[str, int] = {
    "enabled": 0,

    # Pins unassigned until the user picks ADC inputs
    "sensor1Pin": PIN_UNASSIGNED,
    "sensor2Pin": PIN_UNASSIGNED,
    "sensor3Pin": PIN_UNASSIGNED,
    "sensor4Pin": PIN_UNASSIGNED,

    # B1-B4 = A/B/X/Y
    "sensor1Button": GamepadMask.B1.value,
    "sensor2Button": GamepadMask.B2.value,
    "sensor3Button": GamepadMask.B3.value,
    "sensor4Button": GamepadMask.B4.value,

    "sensor1ThresholdLight": 1400,
    "sensor2ThresholdLight": 600,
    "sensor3ThresholdLight": 700,
    "sensor4ThresholdLight": 1400,

    "sensor1ThresholdHeavy": 3600,
    "sensor2ThresholdHeavy": 2600,
    "sensor3ThresholdHeavy": 2700,
    "sensor4ThresholdHeavy": 3600,

    "debounceMillis": 45,
    "keyTimeoutMillis": 30,

    "antiGhostingSides": 1,
    "antiGhostingCenter": 1,
}


def create_default_config() -> Dict[str, int]:
    """Create a fresh copy of the default Taiko configuration."""
    return dict(TAIKO_DEFAULTS)
