"""
Gamepad Button Masks

Bit values must match the GAMEPAD_MASK_* defines used by the firmware.
"""

from enum import IntFlag
from typing import Iterable, List, Tuple


class GamepadMask(IntFlag):
    """Logical controller buttons (one bit each)"""
    B1 = 0x0001     # A / Cross
    B2 = 0x0002     # B / Circle
    B3 = 0x0004     # X / Square
    B4 = 0x0008     # Y / Triangle
    L1 = 0x0010     # LB
    R1 = 0x0020     # RB
    L2 = 0x0040     # LT
    R2 = 0x0080     # RT
    S1 = 0x0100     # Select / Share
    S2 = 0x0200     # Start / Options
    L3 = 0x0400     # LS
    R3 = 0x0800     # RS
    A1 = 0x1000     # Home / PS
    A2 = 0x2000     # Capture


# Largest legal sensorButton value. Bits 14-15 have no named button but are
# accepted so the field covers the full 16-bit mask.
BUTTON_MASK_MAX = 0xFFFF

# (display label, bit value) in selection order
BUTTON_MASK_OPTIONS: List[Tuple[str, int]] = [
    ("B1 (A / Cross)", GamepadMask.B1.value),
    ("B2 (B / Circle)", GamepadMask.B2.value),
    ("B3 (X / Square)", GamepadMask.B3.value),
    ("B4 (Y / Triangle)", GamepadMask.B4.value),
    ("L1 (LB)", GamepadMask.L1.value),
    ("R1 (RB)", GamepadMask.R1.value),
    ("L2 (LT)", GamepadMask.L2.value),
    ("R2 (RT)", GamepadMask.R2.value),
    ("S1 (Select / Share)", GamepadMask.S1.value),
    ("S2 (Start / Options)", GamepadMask.S2.value),
    ("L3 (LS)", GamepadMask.L3.value),
    ("R3 (RS)", GamepadMask.R3.value),
    ("A1 (Home / PS)", GamepadMask.A1.value),
    ("A2 (Capture)", GamepadMask.A2.value),
]


def decode_button_mask(mask: int) -> List[str]:
    """Return the names of the buttons set in mask, in bit order."""
    return [button.name for button in GamepadMask if mask & button.value]


def encode_button_mask(names: Iterable[str]) -> int:
    """
    Combine button names into a single mask.

    Raises:
        KeyError: if a name is not a known button
    """
    mask = 0
    for name in names:
        mask |= GamepadMask[name.strip().upper()].value
    return mask


def get_button_label(value: int) -> str:
    """Get display label for a single-bit mask, or a '+' joined list of names."""
    for label, option_value in BUTTON_MASK_OPTIONS:
        if option_value == value:
            return label
    names = decode_button_mask(value)
    return " + ".join(names) if names else f"0x{value:04X}"
