"""
Shared types for the Scrambled Net engine.
Separated to avoid circular imports between modules.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional, Tuple


class ActionResult(Enum):
    """Outcome of a player command."""
    OK = "ok"
    INVALID = "invalid"     # Free, inactive or locked cell; host gives feedback
    IGNORED = "ignored"     # Input is not accepted while the autosolver runs


class AutosolveState(Enum):
    """Autosolve session states."""
    IDLE = "idle"
    PLANNING = "planning"
    STEPPING = "stepping"
    CANCELLED = "cancelled"


class Move(NamedTuple):
    """One autosolver step: rotate cell (x, y) by angle (+90 or -90)."""
    x: int
    y: int
    angle: int


class CellView(NamedTuple):
    """Read-only per-cell state handed to renderers."""
    x: int
    y: int
    current_dirs: Optional[int]
    generated_dirs: Optional[int]
    rotation_offset: int
    is_connected: bool
    is_fully_connected: bool
    is_root: bool
    is_locked: bool
    is_blind: bool
    is_focused: bool

    @property
    def is_inactive(self) -> bool:
        return self.generated_dirs is None


@dataclass(frozen=True)
class GenerationResult:
    """Summary of a network generation run."""
    cells: int
    active_cells: int
    attempts: int

    @property
    def coverage(self) -> float:
        if self.active_cells == 0:
            return 0.0
        return self.cells / self.active_cells


@dataclass(frozen=True)
class RestoreResult:
    """Outcome of restoring a saved board."""
    ok: bool
    board: Any = None
    solved: Any = None
    message: str = ""


class ValidationError:
    """Represents a validation error with severity and description."""
    def __init__(self, severity: str, message: str, location: Optional[Tuple[int, int]] = None):
        self.severity = severity  # "error", "warning", "info"
        self.message = message
        self.location = location

    def __str__(self):
        loc_str = f" at {self.location}" if self.location else ""
        return f"{self.severity.upper()}: {self.message}{loc_str}"
