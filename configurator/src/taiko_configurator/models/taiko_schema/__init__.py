"""
Taiko Addon Configuration Schema Package

Provides field definitions, validation rules, consistency checks and
default configuration.
"""

from .buttons import GamepadMask, BUTTON_MASK_OPTIONS, BUTTON_MASK_MAX
from .definitions import FIELD_DEFINITIONS, ENABLED_FIELD, build_json_schema
from .rules import ValidationError, ValidationResult, conditional, in_range, required
from .validator import ConfigValidator
from .consistency import check_consistency
from .defaults import TAIKO_DEFAULTS, DEFAULTS_VERSION, create_default_config

__all__ = [
    "GamepadMask",
    "BUTTON_MASK_OPTIONS",
    "BUTTON_MASK_MAX",
    "FIELD_DEFINITIONS",
    "ENABLED_FIELD",
    "build_json_schema",
    "ValidationError",
    "ValidationResult",
    "conditional",
    "in_range",
    "required",
    "ConfigValidator",
    "check_consistency",
    "TAIKO_DEFAULTS",
    "DEFAULTS_VERSION",
    "create_default_config",
]
