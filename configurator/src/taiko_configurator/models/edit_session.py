"""
Taiko Edit Session

Single owner of the configuration while the user edits it. Every edit is
validated before it is accepted; accepted edits go through the undo stack
and are announced with Qt signals.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .config_manager import ConfigManager
from .pins import available_analog_pins
from .taiko_schema import ConfigValidator, ENABLED_FIELD, ValidationResult
from .taiko_schema.consistency import consistency_errors
from .taiko_schema.definitions import get_field
from .taiko_schema.rules import to_int
from .undo_manager import FieldChangeCommand, UndoManager

logger = logging.getLogger(__name__)


class TaikoEditSession(QObject):
    """
    Editing session for Taiko addon options.

    Signals:
        field_changed(key, value): an accepted edit, undo or redo changed a field
        errors_changed(errors): the field-keyed error map changed
        config_replaced(): a new configuration was loaded
    """

    field_changed = pyqtSignal(str, object)
    errors_changed = pyqtSignal(dict)
    config_replaced = pyqtSignal()

    def __init__(self, manager: Optional[ConfigManager] = None,
                 used_pins: Iterable[int] = (),
                 undo_manager: Optional[UndoManager] = None,
                 parent=None):
        super().__init__(parent)
        self.manager = manager or ConfigManager()
        self.undo_manager = undo_manager or UndoManager()
        self._used_pins: Tuple[int, ...] = tuple(used_pins)
        # Errors of edits that were rejected and therefore not in the config
        self._rejected: Dict[str, str] = {}
        self._errors: Dict[str, str] = self._compute_errors()

    # ========== State ==========

    @property
    def config(self) -> Dict[str, Any]:
        return self.manager.get_config()

    def value(self, key: str) -> Any:
        get_field(key)
        return self.manager.get_value(key)

    def errors(self) -> Dict[str, str]:
        """Field-keyed error messages (current state plus rejected edits)"""
        return dict(self._errors)

    def is_valid(self) -> bool:
        return not self._errors

    # ========== Editing ==========

    def set_field(self, key: str, value: Any) -> ValidationResult:
        """
        Validate and apply a single field edit.

        Rejected edits leave the configuration untouched and are recorded
        in the error map under key.

        Raises:
            KeyError: if key is not a Taiko field
        """
        result, command = self._prepare_edit(self.config, key, value)

        if not result:
            logger.debug(f"Rejected {key}={value!r}: {result.message}")
            self._rejected[key] = result.message
            self._refresh_errors()
            return result

        self._rejected.pop(key, None)
        if command is None:
            self._refresh_errors()
            return result

        self.undo_manager.execute(command)
        return result

    def set_fields(self, values: Mapping[str, Any],
                   description: str = "Change fields") -> Dict[str, ValidationResult]:
        """
        Apply several edits as one undo step.

        Each value is validated against the configuration with the earlier
        accepted edits of the batch already in place.

        Raises:
            KeyError: if any key is not a Taiko field (nothing is applied)
        """
        for key in values:
            get_field(key)

        group = self.undo_manager.begin_group(description)
        candidate = dict(self.config)
        results: Dict[str, ValidationResult] = {}
        rejected: Dict[str, str] = {}

        for key, value in values.items():
            result, command = self._prepare_edit(candidate, key, value)
            results[key] = result
            if not result:
                rejected[key] = result.message
                continue
            rejected.pop(key, None)
            self._rejected.pop(key, None)
            if command is not None:
                group.add(command)
                candidate[key] = command.new_value

        self.undo_manager.end_group(group)
        if rejected:
            logger.debug(f"Rejected fields in batch: {', '.join(rejected)}")
        self._rejected.update(rejected)
        self._refresh_errors()
        return results

    def undo(self) -> bool:
        return self.undo_manager.undo()

    def redo(self) -> bool:
        return self.undo_manager.redo()

    def load(self, config_dict: Mapping[str, Any]) -> Tuple[bool, Optional[str]]:
        """Replace the configuration wholesale."""
        success, error_msg = self.manager.load_from_dict(config_dict)
        if success:
            self.undo_manager.clear()
            self._rejected.clear()
            self.config_replaced.emit()
            self._refresh_errors()
        return success, error_msg

    def reset_to_defaults(self) -> None:
        self.manager.new_config()
        self.undo_manager.clear()
        self._rejected.clear()
        self.config_replaced.emit()
        self._refresh_errors()

    def revalidate(self) -> Dict[str, str]:
        """Drop stale rejected-edit errors and validate the whole configuration."""
        self._rejected.clear()
        self._refresh_errors()
        return self.errors()

    # ========== Pins ==========

    def set_used_pins(self, used_pins: Iterable[int]) -> None:
        """Replace the snapshot of pins claimed elsewhere."""
        self._used_pins = tuple(used_pins)

    def available_pins(self) -> List[int]:
        return available_analog_pins(self._used_pins)

    def consistency_errors(self) -> Dict[str, str]:
        return consistency_errors(self.config, self._used_pins)

    # ========== Internals ==========

    def _prepare_edit(self, config: Mapping[str, Any], key: str,
                      value: Any) -> Tuple[ValidationResult, Optional[FieldChangeCommand]]:
        """Validate key=value against config; the command is None when nothing changes."""
        definition = get_field(key)
        number = to_int(value)
        new_value = number if number is not None else value

        candidate = dict(config)
        candidate[definition.key] = new_value
        result = ConfigValidator.validate_field(candidate, definition.key)
        if not result:
            return result, None

        command = FieldChangeCommand(
            key=definition.key,
            old_value=config.get(definition.key),
            new_value=new_value,
            apply_callback=self._apply,
        )
        if command.is_noop():
            return result, None
        return result, command

    def _apply(self, key: str, value: Any) -> None:
        self.manager.set_value(key, value)
        self._rejected.pop(key, None)
        self.field_changed.emit(key, value)
        if key == ENABLED_FIELD:
            self.revalidate()
        else:
            self._refresh_errors()

    def _compute_errors(self) -> Dict[str, str]:
        errors = ConfigValidator.validate_config(self.config)
        errors.update(self._rejected)
        return errors

    def _refresh_errors(self) -> None:
        errors = self._compute_errors()
        if errors != self._errors:
            self._errors = errors
            self.errors_changed.emit(dict(errors))
