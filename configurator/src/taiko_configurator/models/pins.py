"""
Analog Pin Helpers

The RP2040 exposes ADC0-ADC3 on GPIO 26-29. Pins already claimed by other
addons come from the host application as a read-only snapshot.
"""

from typing import Iterable, List, Tuple

from ..constants import ADC_CHANNEL_COUNT, ADC_PIN_OFFSET, PIN_UNASSIGNED


ANALOG_PINS: Tuple[int, ...] = tuple(range(ADC_PIN_OFFSET, ADC_PIN_OFFSET + ADC_CHANNEL_COUNT))


def is_analog_pin(pin: int) -> bool:
    return pin in ANALOG_PINS


def is_valid_pin(pin: int) -> bool:
    """Assigned GPIO (not the unassigned sentinel)"""
    return pin is not None and pin >= 0


def adc_channel_for_pin(pin: int) -> int:
    """ADC channel for an analog GPIO, -1 for anything else."""
    if not is_analog_pin(pin):
        return PIN_UNASSIGNED
    return pin - ADC_PIN_OFFSET


def available_analog_pins(used_pins: Iterable[int] = ()) -> List[int]:
    """Analog pins not present in the used-pins snapshot."""
    used = frozenset(used_pins)
    return [pin for pin in ANALOG_PINS if pin not in used]


def format_pin_hint(used_pins: Iterable[int] = ()) -> str:
    """User-facing hint listing the analog pins still free."""
    available = available_analog_pins(used_pins)
    if not available:
        return "No ADC pins available"
    return "Available ADC pins: " + ", ".join(str(pin) for pin in available)
