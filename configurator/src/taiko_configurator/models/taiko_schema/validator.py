"""
Configuration Validator for the Taiko addon
Validates configuration fields against the rule set and normalizes loaded data.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging

from .definitions import FIELD_ALIASES, FIELD_DEFINITIONS, FIELDS_BY_KEY, get_field
from .defaults import create_default_config
from .rules import ValidationResult, to_int

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Field-level validator for Taiko addon options"""

    @staticmethod
    def validate_field(config: Mapping[str, Any], field_name: str) -> ValidationResult:
        """
        Validate one field of a configuration.

        Raises:
            KeyError: if field_name is not a Taiko field
        """
        definition = get_field(field_name)
        return definition.rule(config, definition.key, definition.label)

    @staticmethod
    def validate_config_results(config: Mapping[str, Any]) -> Dict[str, ValidationResult]:
        """Validate every field. Returns failing results keyed by field."""
        failures = {}
        for definition in FIELD_DEFINITIONS:
            result = definition.rule(config, definition.key, definition.label)
            if not result:
                failures[definition.key] = result
        return failures

    @staticmethod
    def validate_config(config: Mapping[str, Any]) -> Dict[str, str]:
        """
        Validate full configuration

        Returns:
            Dict[str, str]: field -> error message for every failing field
        """
        return {
            field: result.message
            for field, result in ConfigValidator.validate_config_results(config).items()
        }

    @staticmethod
    def is_valid(config: Mapping[str, Any]) -> bool:
        return not ConfigValidator.validate_config_results(config)

    @staticmethod
    def normalize_config(raw: Optional[Mapping[str, Any]],
                         base: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Merge raw values over a base configuration.

        Aliased keys are renamed, unknown keys are dropped and whole-number
        values (including numeric strings) become ints. Values that cannot be
        converted are kept unchanged so validation can report them.

        Args:
            raw: Loaded configuration values (may be partial)
            base: Values for missing fields (default: Taiko defaults)
        """
        config = dict(base) if base is not None else create_default_config()
        if not raw:
            return config

        # Canonical key wins over its alias
        renamed = {FIELD_ALIASES[k]: v for k, v in raw.items() if k in FIELD_ALIASES}
        renamed.update((k, v) for k, v in raw.items() if k not in FIELD_ALIASES)

        ignored = []
        for key, value in renamed.items():
            if key not in FIELDS_BY_KEY:
                ignored.append(key)
                continue
            if value is None:
                continue
            number = to_int(value)
            config[key] = number if number is not None else value

        if ignored:
            logger.debug(f"Ignored unknown Taiko fields: {', '.join(sorted(ignored))}")

        return config

    @staticmethod
    def split_valid_fields(config: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, str]]:
        """
        Separate passing fields from failing ones.

        Returns:
            Tuple[Dict, Dict]: (passing field values, failing field messages)
        """
        errors = ConfigValidator.validate_config(config)
        valid = {
            key: config[key]
            for key in FIELDS_BY_KEY
            if key in config and key not in errors
        }
        return valid, errors

    @staticmethod
    def format_validation_errors(errors: Mapping[str, str]) -> str:
        """Format validation errors for user display"""
        if not errors:
            return ""

        lines: List[str] = ["Configuration validation failed:", ""]
        for i, (field, message) in enumerate(errors.items(), 1):
            lines.append(f"{i}. {field}: {message}")

        return "\n".join(lines) + "\n"
