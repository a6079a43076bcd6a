"""
Unit Tests: Gamepad button mask enumeration
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from taiko_configurator.models.taiko_schema.buttons import (
    BUTTON_MASK_MAX,
    BUTTON_MASK_OPTIONS,
    GamepadMask,
    decode_button_mask,
    encode_button_mask,
    get_button_label,
)


def test_fourteen_named_buttons():
    assert len(BUTTON_MASK_OPTIONS) == 14
    assert [label.split()[0] for label, _ in BUTTON_MASK_OPTIONS] == [
        "B1", "B2", "B3", "B4", "L1", "R1", "L2", "R2",
        "S1", "S2", "L3", "R3", "A1", "A2",
    ]


def test_values_are_distinct_powers_of_two():
    values = [value for _, value in BUTTON_MASK_OPTIONS]
    assert values == [1 << bit for bit in range(14)]
    combined = 0
    for value in values:
        assert combined & value == 0
        combined |= value
    assert combined <= BUTTON_MASK_MAX


def test_max_mask_is_sixteen_bits():
    assert BUTTON_MASK_MAX == 0xFFFF


def test_decode_multi_bit_mask():
    assert decode_button_mask(0x01 | 0x20 | 0x2000) == ["B1", "R1", "A2"]
    assert decode_button_mask(0) == []


def test_encode_names():
    assert encode_button_mask(["b1", "R1"]) == GamepadMask.B1 | GamepadMask.R1
    assert encode_button_mask([]) == 0
    with pytest.raises(KeyError):
        encode_button_mask(["Z9"])


def test_button_labels():
    assert get_button_label(0x01) == "B1 (A / Cross)"
    assert get_button_label(0x03) == "B1 + B2"
    assert get_button_label(0x4000) == "0x4000"
