"""
Command pattern implementation for player actions in Scrambled Net.
Rotations and lock toggles are reversible, so the host can offer undo/redo.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from gridutils.coords import coordinate_to_string
from netscramble.types import ActionResult


class Command(ABC):
    """Abstract base class for all reversible commands."""

    @abstractmethod
    def execute(self, board) -> bool:
        """Execute the command. Returns True if successful."""
        pass

    @abstractmethod
    def undo(self, board) -> bool:
        """Undo the command. Returns True if successful."""
        pass

    @abstractmethod
    def get_description(self) -> str:
        """Get human-readable description of the command."""
        pass


class RotateCellCommand(Command):
    """Command to turn a cell one quarter turn."""

    def __init__(self, x: int, y: int, dirn: int):
        self.x = x
        self.y = y
        self.dirn = dirn
        self.result: Optional[ActionResult] = None

    def execute(self, board) -> bool:
        """Execute the rotation. Free, inactive and locked cells refuse it."""
        self.result = board.rotate_cell(self.x, self.y, self.dirn)
        return self.result == ActionResult.OK

    def undo(self, board) -> bool:
        """Turn the cell back, even if it has been locked since."""
        if self.result != ActionResult.OK:
            return False
        board.cell(self.x, self.y).rotate(-self.dirn * 90)
        return True

    def get_description(self) -> str:
        sense = "clockwise" if self.dirn > 0 else "anticlockwise"
        return f"Rotate cell ({coordinate_to_string(self.x, self.y)}) {sense}"


class ToggleLockCommand(Command):
    """Command to lock or unlock a cell."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.result: Optional[ActionResult] = None
        self.old_locked: Optional[bool] = None

    def execute(self, board) -> bool:
        """Execute the lock toggle."""
        self.old_locked = board.cell(self.x, self.y).is_locked
        self.result = board.toggle_lock(self.x, self.y)
        return self.result == ActionResult.OK

    def undo(self, board) -> bool:
        """Restore the previous lock state."""
        if self.result != ActionResult.OK:
            return False
        board.cell(self.x, self.y).is_locked = self.old_locked
        return True

    def get_description(self) -> str:
        action = "Unlock" if self.old_locked else "Lock"
        return f"{action} cell ({coordinate_to_string(self.x, self.y)})"


class CommandHistory:
    """
    Undo/redo stacks for player commands.

    Only successful commands are recorded. Executing a new command discards
    the redo stack. The undo stack is capped at max_history entries.
    """

    def __init__(self, max_history: int = 100):
        self.max_history = max_history
        self.undo_stack: List[Command] = []
        self.redo_stack: List[Command] = []

    def execute_command(self, command: Command, board) -> bool:
        """Execute a command and record it if it succeeded."""
        success = command.execute(board)
        if success:
            self.undo_stack.append(command)
            self.redo_stack.clear()
            if len(self.undo_stack) > self.max_history:
                del self.undo_stack[0]
        return success

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def undo(self, board) -> bool:
        """Undo the last command."""
        if not self.undo_stack:
            return False
        command = self.undo_stack[-1]
        if not command.undo(board):
            return False
        self.redo_stack.append(self.undo_stack.pop())
        return True

    def redo(self, board) -> bool:
        """Redo the most recently undone command."""
        if not self.redo_stack:
            return False
        command = self.redo_stack[-1]
        if not command.execute(board):
            return False
        self.undo_stack.append(self.redo_stack.pop())
        return True

    def get_undo_description(self) -> Optional[str]:
        return self.undo_stack[-1].get_description() if self.undo_stack else None

    def get_redo_description(self) -> Optional[str]:
        return self.redo_stack[-1].get_description() if self.redo_stack else None

    def clear_history(self):
        """Clear all command history."""
        self.undo_stack.clear()
        self.redo_stack.clear()

    def get_history_info(self) -> Dict[str, Any]:
        """Get information about current history state."""
        return {
            "undo_depth": len(self.undo_stack),
            "redo_depth": len(self.redo_stack),
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
            "undo_description": self.get_undo_description(),
            "redo_description": self.get_redo_description(),
        }
