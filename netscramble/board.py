"""
Board - cell matrix and topology for the Scrambled Net engine.

The board is a flat list of cells addressed by (x, y). The matrix is sized to
the largest grid the screen supports; each game plays on a centred active
sub-rectangle chosen by skill. Neighbors are computed on demand from the
active rectangle and the wrap flag, so cells hold no references to each other.

Rotation model:
- generated_dirs is the cable layout laid down by the generator
- rotation_offset is the player-visible turn away from that layout
- current_dirs is always derived from the two, never stored
"""
import copy
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from gridutils.directions import (
    CARDINALS,
    FREE,
    Direction,
    count_dirs,
    normalize_angle,
    reverse,
    rotate_dirs,
    step,
)
from netscramble.types import ActionResult, CellView, ValidationError

logger = logging.getLogger(__name__)


class GridTopology:
    """
    Active sub-rectangle of the grid plus the wrap mode.

    Attributes:
        grid_width, grid_height: Size of the whole cell matrix
        start_x, start_y: First active column/row
        end_x, end_y: One past the last active column/row
        wrap: If True, active edges wrap to the opposite active edge
    """

    def __init__(self, grid_width: int, grid_height: int,
                 start_x: int, start_y: int, end_x: int, end_y: int,
                 wrap: bool = False):
        if not (0 <= start_x < end_x <= grid_width and 0 <= start_y < end_y <= grid_height):
            raise ValueError(
                f"Active region ({start_x},{start_y})-({end_x},{end_y}) "
                f"does not fit a {grid_width}x{grid_height} grid")
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.start_x = start_x
        self.start_y = start_y
        self.end_x = end_x
        self.end_y = end_y
        self.wrap = wrap

    @classmethod
    def centered(cls, grid_width: int, grid_height: int,
                 board_width: int, board_height: int, wrap: bool = False) -> 'GridTopology':
        """Active board of the given size centred in the grid."""
        if board_width > grid_width or board_height > grid_height:
            raise ValueError(
                f"Board {board_width}x{board_height} larger than grid {grid_width}x{grid_height}")
        start_x = (grid_width - board_width) // 2
        start_y = (grid_height - board_height) // 2
        return cls(grid_width, grid_height,
                   start_x, start_y, start_x + board_width, start_y + board_height, wrap)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        return (self.start_x, self.start_y, self.end_x, self.end_y)

    @property
    def board_width(self) -> int:
        return self.end_x - self.start_x

    @property
    def board_height(self) -> int:
        return self.end_y - self.start_y

    def in_grid(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_width and 0 <= y < self.grid_height

    def is_active(self, x: int, y: int) -> bool:
        """True if (x, y) lies inside the active sub-rectangle."""
        return self.start_x <= x < self.end_x and self.start_y <= y < self.end_y

    def neighbor(self, x: int, y: int, direction: Direction) -> Optional[Tuple[int, int]]:
        """
        Neighbor coordinate in one direction.

        Returns None for positions outside the active board, and at the
        board edges when wrap is off.
        """
        if not self.is_active(x, y):
            return None
        return step(x, y, direction, self.bounds, self.wrap)


class Cell:
    """
    State of one grid position.

    generated_dirs is None for positions outside the active board, FREE for
    active positions the network does not use.
    """

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.reset(None)

    def reset(self, dirs: Optional[Direction]) -> None:
        """Clear all per-game state and set the layout to dirs."""
        self.generated_dirs: Optional[Direction] = dirs
        self.rotation_offset: int = 0
        self.is_root = False
        self.is_locked = False
        self.is_connected = False
        self.is_fully_connected = False
        self.is_blind = False

    @property
    def is_inactive(self) -> bool:
        return self.generated_dirs is None

    @property
    def is_free(self) -> bool:
        return self.generated_dirs is not None and self.generated_dirs == FREE

    @property
    def current_dirs(self) -> Optional[Direction]:
        """Connections as they currently face on screen."""
        if self.generated_dirs is None:
            return None
        return rotate_dirs(self.generated_dirs, self.rotation_offset)

    def num_dirs(self) -> int:
        if self.generated_dirs is None:
            return 0
        return count_dirs(self.generated_dirs)

    def has_connection(self, direction: Direction) -> bool:
        """True if the cable currently points in direction."""
        current = self.current_dirs
        return current is not None and bool(current & direction)

    def add_dir(self, direction: Direction) -> None:
        """Add a connection bit to the generated layout."""
        assert self.generated_dirs is not None, f"cell ({self.x},{self.y}) is inactive"
        self.generated_dirs = Direction(self.generated_dirs | direction)

    def rotate(self, angle: int) -> None:
        """Turn the cell by a multiple of 90 degrees (positive is clockwise)."""
        self.rotation_offset = normalize_angle(self.rotation_offset + angle)

    def is_rotated(self) -> bool:
        return self.rotation_offset != 0

    def view(self, focused: bool = False) -> CellView:
        return CellView(
            x=self.x,
            y=self.y,
            current_dirs=self.current_dirs,
            generated_dirs=self.generated_dirs,
            rotation_offset=self.rotation_offset,
            is_connected=self.is_connected,
            is_fully_connected=self.is_fully_connected,
            is_root=self.is_root,
            is_locked=self.is_locked,
            is_blind=self.is_blind,
            is_focused=focused,
        )

    def __repr__(self):
        return (f"Cell({self.x},{self.y} dirs={self.generated_dirs!r} "
                f"rot={self.rotation_offset} conn={self.is_connected})")


class Board:
    """
    Cell matrix for one device-sized grid.

    Responsibilities:
        - Own every Cell, addressed by (x, y)
        - Hold the active topology for the current skill
        - Track the single root (server) cell and the focused cell
        - Apply player actions that are legal on a cell

    Attributes:
        grid_width, grid_height: Matrix size
        cells: Flat list, index y * grid_width + x
        topology: Active sub-rectangle and wrap mode
        root_location: Optional root coordinate
        focus_location: Focused coordinate
    """

    def __init__(self, grid_width: int, grid_height: int):
        """
        Initialize a new board with every position inactive.

        Args:
            grid_width: Number of columns (must be > 0)
            grid_height: Number of rows (must be > 0)
        """
        if grid_width <= 0 or grid_height <= 0:
            raise ValueError(f"Grid dimensions must be positive: {grid_width}x{grid_height}")

        self.grid_width: int = grid_width
        self.grid_height: int = grid_height
        self.cells: List[Cell] = [
            Cell(x, y) for y in range(grid_height) for x in range(grid_width)
        ]
        self.topology: GridTopology = GridTopology(
            grid_width, grid_height, 0, 0, grid_width, grid_height, False)
        self.root_location: Optional[Tuple[int, int]] = None
        self.focus_location: Tuple[int, int] = (0, 0)

    # =============================================================================
    # CELL ACCESS
    # =============================================================================

    def _index(self, x: int, y: int) -> int:
        assert 0 <= x < self.grid_width, f"x {x} out of range [0, {self.grid_width})"
        assert 0 <= y < self.grid_height, f"y {y} out of range [0, {self.grid_height})"
        return y * self.grid_width + x

    def cell(self, x: int, y: int) -> Cell:
        """Cell at (x, y). Out-of-range coordinates are a caller bug."""
        return self.cells[self._index(x, y)]

    def active_cells(self) -> Iterator[Cell]:
        """Cells inside the active sub-rectangle, row by row."""
        t = self.topology
        for y in range(t.start_y, t.end_y):
            for x in range(t.start_x, t.end_x):
                yield self.cells[y * self.grid_width + x]

    def active_count(self) -> int:
        return self.topology.board_width * self.topology.board_height

    def used_count(self) -> int:
        """Active cells that carry cable."""
        return sum(1 for c in self.active_cells() if not c.is_free and not c.is_inactive)

    @property
    def root(self) -> Optional[Cell]:
        if self.root_location is None:
            return None
        return self.cell(*self.root_location)

    @property
    def focus(self) -> Cell:
        return self.cell(*self.focus_location)

    def neighbor(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        """Neighboring cell in one direction, or None."""
        loc = self.topology.neighbor(cell.x, cell.y, direction)
        if loc is None:
            return None
        return self.cell(*loc)

    # =============================================================================
    # BOARD SETUP
    # =============================================================================

    def reset(self, board_width: int, board_height: int, wrap: bool) -> None:
        """
        Choose the active board for a new game.

        Active cells become FREE, everything else inactive. The root is
        cleared; the focus is kept.
        """
        self.topology = GridTopology.centered(
            self.grid_width, self.grid_height, board_width, board_height, wrap)
        logger.info("Reset board %dx%d: active %dx%d at (%d,%d), wrap=%s",
                    self.grid_width, self.grid_height, board_width, board_height,
                    self.topology.start_x, self.topology.start_y, wrap)
        for c in self.cells:
            c.reset(FREE if self.topology.is_active(c.x, c.y) else None)
        self.root_location = None

    def set_root(self, x: int, y: int) -> None:
        """Make (x, y) the root. Only one root is allowed."""
        assert self.topology.is_active(x, y), f"root ({x},{y}) outside the active board"
        if self.root_location is not None:
            self.cell(*self.root_location).is_root = False
        self.root_location = (x, y)
        self.cell(x, y).is_root = True

    def set_focus(self, x: int, y: int) -> None:
        self._index(x, y)
        self.focus_location = (x, y)

    def snapshot(self) -> 'Board':
        """Deep copy of the whole board."""
        return copy.deepcopy(self)

    # =============================================================================
    # PLAYER ACTIONS
    # =============================================================================

    def rotate_cell(self, x: int, y: int, dirn: int) -> ActionResult:
        """
        Rotate a cell one quarter turn (dirn +1 clockwise, -1 anticlockwise).

        Returns:
            ActionResult.INVALID for free, inactive or locked cells
        """
        assert dirn in (1, -1), f"rotation direction must be +1 or -1, got {dirn}"
        c = self.cell(x, y)
        if c.is_inactive or c.is_free or c.is_locked:
            return ActionResult.INVALID
        c.rotate(dirn * 90)
        return ActionResult.OK

    def toggle_lock(self, x: int, y: int) -> ActionResult:
        """Lock or unlock a cell. Free and inactive cells can't be locked."""
        c = self.cell(x, y)
        if c.is_inactive or c.is_free:
            return ActionResult.INVALID
        c.is_locked = not c.is_locked
        return ActionResult.OK

    # =============================================================================
    # VALIDATION
    # =============================================================================

    def validate_board(self) -> List[ValidationError]:
        """
        Return a list[ValidationError]. Empty list == VALID.
        Rules (hard errors):
        - Exactly one root, inside the active board
        - Reciprocal adjacency of the generated layout
        - No cable on inactive positions
        """
        errors: List[ValidationError] = []

        roots = [(c.x, c.y) for c in self.cells if c.is_root]
        if len(roots) != 1:
            errors.append(ValidationError("error", f"Expected one root, found {len(roots)}"))
        if self.root_location is not None:
            if not self.topology.is_active(*self.root_location):
                errors.append(ValidationError("error", "Root outside the active board",
                                              location=self.root_location))
            elif self.root_location not in roots:
                errors.append(ValidationError("error", "Root cell is not flagged as root",
                                              location=self.root_location))

        for c in self.cells:
            if c.is_inactive:
                continue
            if not self.topology.is_active(c.x, c.y):
                errors.append(ValidationError("error", "Cable outside the active board",
                                              location=(c.x, c.y)))
                continue
            for d in CARDINALS:
                if not (c.generated_dirs & d):
                    continue
                other = self.neighbor(c, d)
                if other is None:
                    errors.append(ValidationError(
                        "error", f"Connection {d.name} leads off the board", location=(c.x, c.y)))
                elif other.generated_dirs is None or not (other.generated_dirs & reverse(d)):
                    errors.append(ValidationError(
                        "error",
                        f"Asymmetric connection: ({c.x},{c.y}) {d.name} but not back",
                        location=(c.x, c.y)))

        return errors

    def get_statistics(self) -> Dict:
        """
        Get board statistics.

        Returns:
            Dict with cell counts by role and connection state
        """
        stats = {
            "active_cells": 0,
            "used_cells": 0,
            "free_cells": 0,
            "terminals": 0,
            "connected_cells": 0,
            "rotated_cells": 0,
            "locked_cells": 0,
            "blind_cells": 0,
        }
        for c in self.active_cells():
            stats["active_cells"] += 1
            if c.is_free:
                stats["free_cells"] += 1
                continue
            stats["used_cells"] += 1
            if c.num_dirs() == 1:
                stats["terminals"] += 1
            if c.is_connected:
                stats["connected_cells"] += 1
            if c.is_rotated():
                stats["rotated_cells"] += 1
            if c.is_locked:
                stats["locked_cells"] += 1
            if c.is_blind:
                stats["blind_cells"] += 1
        return stats

    def views(self) -> List[CellView]:
        """Read-only state for every cell, row by row."""
        return [c.view(focused=(c.x, c.y) == self.focus_location) for c in self.cells]
