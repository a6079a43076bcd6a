"""
Taiko Configuration Manager

Owns the in-memory Taiko configuration object: load, merge with defaults,
validate and save.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from ..constants import CONFIG_FILE_VERSION, CONFIG_OPTIONS_KEY
from .taiko_schema import ConfigValidator, create_default_config
from .taiko_schema.consistency import consistency_errors

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages Taiko addon configuration (JSON files and device dicts)"""

    def __init__(self):
        self.config: Dict[str, Any] = create_default_config()
        self.current_file: Optional[Path] = None
        self.modified: bool = False

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration"""
        return self.config

    def get_value(self, key: str) -> Any:
        return self.config.get(key)

    def set_value(self, key: str, value: Any) -> None:
        """Store a value without validation (callers validate first)"""
        self.config[key] = value
        self.modified = True

    def new_config(self) -> None:
        """Reset to default configuration"""
        self.config = create_default_config()
        self.current_file = None
        self.modified = False
        logger.info("Created new configuration")

    def is_modified(self) -> bool:
        return self.modified

    # ========== Validation ==========

    def get_errors(self) -> Dict[str, str]:
        """Field-keyed error messages for the current configuration"""
        return ConfigValidator.validate_config(self.config)

    def get_consistency_errors(self, used_pins=()) -> Dict[str, str]:
        return consistency_errors(self.config, used_pins)

    def is_valid(self) -> bool:
        return ConfigValidator.is_valid(self.config)

    def get_valid_fields(self) -> Dict[str, Any]:
        """Only the fields currently passing validation"""
        valid, _ = ConfigValidator.split_valid_fields(self.config)
        return valid

    # ========== Loading ==========

    def load_from_dict(self, config_dict: Mapping[str, Any]) -> Tuple[bool, Optional[str]]:
        """
        Load configuration from dictionary (e.g., from device).

        Missing fields take default values, unknown fields are ignored.
        Field errors do not fail the load; they are reported by get_errors().

        Returns:
            Tuple[bool, Optional[str]]: (success, error_message)
        """
        if not isinstance(config_dict, Mapping):
            error_msg = f"Configuration must be an object, got {type(config_dict).__name__}"
            logger.error(error_msg)
            return False, error_msg

        loaded_config = ConfigValidator.normalize_config(config_dict)

        errors = ConfigValidator.validate_config(loaded_config)
        if errors:
            logger.warning(
                f"Config validation warnings:\n{ConfigValidator.format_validation_errors(errors)}"
            )

        self.config = loaded_config
        self.current_file = None
        self.modified = False

        logger.info(f"Loaded configuration ({len(config_dict)} fields provided)")
        return True, None

    def load_from_file(self, filepath: str) -> Tuple[bool, Optional[str]]:
        """
        Load configuration from JSON file

        Accepts either {"version": ..., "taikoAddonOptions": {...}} or a flat
        field mapping.

        Returns:
            Tuple[bool, Optional[str]]: (success, error_message)
        """
        path = Path(filepath)

        if not path.exists():
            error_msg = f"Configuration file not found: {filepath}"
            logger.error(error_msg)
            return False, error_msg

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            error_msg = (
                f"Invalid JSON format in configuration file:\n\n"
                f"Line {e.lineno}, Column {e.colno}:\n{e.msg}"
            )
            logger.error(f"JSON decode error: {e}")
            return False, error_msg
        except (OSError, UnicodeDecodeError) as e:
            error_msg = f"Failed to read configuration file: {e}"
            logger.error(error_msg)
            return False, error_msg

        options, error_msg = self._unwrap(data)
        if error_msg:
            logger.error(error_msg)
            return False, error_msg

        success, error_msg = self.load_from_dict(options)
        if success:
            self.current_file = path
            logger.info(f"Loaded configuration from: {filepath}")
        return success, error_msg

    @staticmethod
    def _unwrap(data: Any) -> Tuple[Optional[Mapping[str, Any]], Optional[str]]:
        if not isinstance(data, dict):
            return None, "Configuration file must contain a JSON object"

        if CONFIG_OPTIONS_KEY not in data:
            return data, None

        version = str(data.get("version", CONFIG_FILE_VERSION))
        major = CONFIG_FILE_VERSION.split(".")[0]
        if version.split(".")[0] != major:
            return None, (
                f"Unsupported configuration version {version} "
                f"(expected {major}.x)"
            )

        options = data[CONFIG_OPTIONS_KEY]
        if not isinstance(options, dict):
            return None, f"'{CONFIG_OPTIONS_KEY}' must be an object"
        return options, None

    # ========== Saving ==========

    def export_config(self, only_valid: bool = False) -> Dict[str, Any]:
        """
        Build the persisted representation.

        Args:
            only_valid: Drop fields that currently fail validation
        """
        options = self.get_valid_fields() if only_valid else dict(self.config)
        return {
            "version": CONFIG_FILE_VERSION,
            CONFIG_OPTIONS_KEY: options,
        }

    def save_to_file(self, filepath: Optional[str] = None, only_valid: bool = False) -> bool:
        """
        Save configuration to JSON file

        Args:
            filepath: Path to save to (uses current_file if None)
            only_valid: Persist only fields passing validation

        Returns:
            True if saved successfully, False otherwise
        """
        if filepath:
            path = Path(filepath)
        elif self.current_file:
            path = self.current_file
        else:
            logger.error("No filepath specified")
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.export_config(only_valid), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            return False

        self.current_file = path
        self.modified = False

        logger.info(f"Saved configuration to: {path}")
        return True
