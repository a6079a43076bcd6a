"""
Undo/Redo Manager for Configuration Changes

Implements Command pattern for reversible field edits.
"""

from typing import Any, Callable, List
from PyQt6.QtCore import QObject, pyqtSignal
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
import time

logger = logging.getLogger(__name__)


class Command(ABC):
    """Abstract base class for reversible commands."""

    @abstractmethod
    def execute(self) -> bool:
        """Execute the command. Returns True if successful."""

    @abstractmethod
    def undo(self) -> bool:
        """Undo the command. Returns True if successful."""

    @abstractmethod
    def get_description(self) -> str:
        """Get human-readable description of the command."""

    def can_merge(self, other: 'Command') -> bool:
        """Check if this command can be merged with another."""
        return False

    def merge(self, other: 'Command') -> 'Command':
        """Merge this command with another. Returns merged command."""
        return self

    def is_noop(self) -> bool:
        """True when the command leaves the configuration unchanged."""
        return False


@dataclass
class FieldChangeCommand(Command):
    """Command for changing a single configuration field."""
    key: str
    old_value: Any
    new_value: Any
    apply_callback: Callable[[str, Any], None]
    _executed: bool = False

    def execute(self) -> bool:
        self.apply_callback(self.key, self.new_value)
        self._executed = True
        return True

    def undo(self) -> bool:
        if not self._executed:
            return False
        self.apply_callback(self.key, self.old_value)
        return True

    def get_description(self) -> str:
        return f"Change {self.key}"

    def can_merge(self, other: 'Command') -> bool:
        """Consecutive edits of the same field collapse into one step."""
        return isinstance(other, FieldChangeCommand) and other.key == self.key

    def merge(self, other: 'FieldChangeCommand') -> 'FieldChangeCommand':
        """Keep original old_value, use latest new_value."""
        return FieldChangeCommand(
            key=self.key,
            old_value=self.old_value,
            new_value=other.new_value,
            apply_callback=self.apply_callback,
            _executed=True,
        )

    def is_noop(self) -> bool:
        return self.old_value == self.new_value and type(self.old_value) is type(self.new_value)


@dataclass
class FieldGroupCommand(Command):
    """Several field edits applied and undone as one step."""
    description: str = "Change fields"
    changes: List[Command] = field(default_factory=list)
    _applied: int = 0

    def add(self, command: Command):
        self.changes.append(command)

    def execute(self) -> bool:
        self._applied = 0
        for change in self.changes:
            if not change.execute():
                # Leave no partial edit behind
                self.undo()
                return False
            self._applied += 1
        return True

    def undo(self) -> bool:
        undone = all([c.undo() for c in reversed(self.changes[:self._applied])])
        self._applied = 0
        return undone

    def get_description(self) -> str:
        return self.description


class UndoManager(QObject):
    """
    Manages undo/redo stack for configuration changes.

    Emits signals when undo/redo availability changes.
    """

    can_undo_changed = pyqtSignal(bool)
    can_redo_changed = pyqtSignal(bool)
    stack_changed = pyqtSignal()

    def __init__(self, max_stack_size: int = 100, merge_timeout_ms: int = 500, parent=None):
        super().__init__(parent)
        self._undo_stack: List[Command] = []
        self._redo_stack: List[Command] = []
        self._max_stack_size = max_stack_size
        self._merge_timeout_ms = merge_timeout_ms
        self._last_command_time = float("-inf")
        self._is_executing = False  # Prevent re-entrant execution

    def execute(self, command: Command, merge: bool = True) -> bool:
        """
        Execute a command and add it to the undo stack.

        Args:
            command: The command to execute
            merge: Whether to attempt merging with previous command

        Returns:
            True if command executed successfully
        """
        if self._is_executing:
            logger.warning("Ignoring re-entrant command execution")
            return False

        self._is_executing = True
        try:
            if not command.execute():
                return False

            if self._redo_stack:
                self._redo_stack.clear()
                self.can_redo_changed.emit(False)

            current_time = time.monotonic() * 1000

            if (merge and self._undo_stack and
                    (current_time - self._last_command_time) < self._merge_timeout_ms):
                last_cmd = self._undo_stack[-1]
                if last_cmd.can_merge(command):
                    merged = last_cmd.merge(command)
                    if merged.is_noop():
                        # Edits cancelled out; no step to undo
                        self._undo_stack.pop()
                        self._last_command_time = float("-inf")
                        if not self._undo_stack:
                            self.can_undo_changed.emit(False)
                        logger.debug(f"Dropped no-op: {merged.get_description()}")
                    else:
                        self._undo_stack[-1] = merged
                        self._last_command_time = current_time
                    self.stack_changed.emit()
                    return True

            self._undo_stack.append(command)
            self._last_command_time = current_time

            while len(self._undo_stack) > self._max_stack_size:
                self._undo_stack.pop(0)

            if len(self._undo_stack) == 1:
                self.can_undo_changed.emit(True)
            self.stack_changed.emit()

            logger.debug(f"Executed: {command.get_description()}")
            return True

        finally:
            self._is_executing = False

    def undo(self) -> bool:
        """Undo the last command. Returns True if successful."""
        if not self._undo_stack or self._is_executing:
            return False

        self._is_executing = True
        try:
            command = self._undo_stack.pop()

            if not command.undo():
                self._undo_stack.append(command)
                return False

            self._redo_stack.append(command)
            # Next edit must not merge into a command that was undone
            self._last_command_time = float("-inf")

            if not self._undo_stack:
                self.can_undo_changed.emit(False)
            if len(self._redo_stack) == 1:
                self.can_redo_changed.emit(True)
            self.stack_changed.emit()

            logger.debug(f"Undone: {command.get_description()}")
            return True

        finally:
            self._is_executing = False

    def redo(self) -> bool:
        """Redo the last undone command. Returns True if successful."""
        if not self._redo_stack or self._is_executing:
            return False

        self._is_executing = True
        try:
            command = self._redo_stack.pop()

            if not command.execute():
                self._redo_stack.append(command)
                return False

            self._undo_stack.append(command)
            self._last_command_time = float("-inf")

            if not self._redo_stack:
                self.can_redo_changed.emit(False)
            if len(self._undo_stack) == 1:
                self.can_undo_changed.emit(True)
            self.stack_changed.emit()

            logger.debug(f"Redone: {command.get_description()}")
            return True

        finally:
            self._is_executing = False

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def get_undo_description(self) -> str:
        if self._undo_stack:
            return self._undo_stack[-1].get_description()
        return ""

    def get_redo_description(self) -> str:
        if self._redo_stack:
            return self._redo_stack[-1].get_description()
        return ""

    def clear(self):
        """Clear both undo and redo stacks."""
        had_undo = bool(self._undo_stack)
        had_redo = bool(self._redo_stack)

        self._undo_stack.clear()
        self._redo_stack.clear()
        self._last_command_time = float("-inf")

        if had_undo:
            self.can_undo_changed.emit(False)
        if had_redo:
            self.can_redo_changed.emit(False)
        self.stack_changed.emit()

    def get_undo_count(self) -> int:
        return len(self._undo_stack)

    def get_redo_count(self) -> int:
        return len(self._redo_stack)

    def begin_group(self, description: str = "Change fields") -> FieldGroupCommand:
        """Start collecting field edits that undo as a single step."""
        return FieldGroupCommand(description=description)

    def end_group(self, group: FieldGroupCommand) -> bool:
        """Apply the collected edits and record them. Empty groups record nothing."""
        if not group.changes:
            return True
        return self.execute(group, merge=False)
