"""
Save and restore of board state.

Saved layout (JSON-compatible dict):
    {
      "gridWidth": int, "gridHeight": int,
      "rootX": int, "rootY": int, "focusX": int, "focusY": int,
      "wrapped": bool (optional), "skill": str (optional),
      "cells": [cell, ...],            # row by row, index y * gridWidth + x
      "solvedSnapshot": [cell, ...]    # optional, same order
    }
    cell = {"generatedDirs": "U_D_", "rotationOffset": 90.0,
            "isConnected": bool, "isFullyConnected": bool, "isBlind": bool,
            "isRoot": bool, "isLocked": bool}

A save taken on a grid of transposed shape (device turned a quarter) is
restored by turning the whole board a quarter to fit. Any other size
mismatch is rejected and the caller should start a new game.
"""
import json
import logging
from typing import Callable, Dict, List, Optional, Tuple

from gridutils.coords import rotate_left, rotate_right
from gridutils.directions import dirs_to_name, name_to_dirs, normalize_angle, rotate_dirs
from netscramble.board import Board, Cell, GridTopology
from netscramble.types import RestoreResult

logger = logging.getLogger(__name__)

Transform = Callable[[int, int], Tuple[int, int]]


# =============================================================================
# SAVE
# =============================================================================

def cell_to_dict(cell: Cell) -> Dict:
    """Per-cell saved state."""
    return {
        "generatedDirs": dirs_to_name(cell.generated_dirs),
        "rotationOffset": float(cell.rotation_offset),
        "isConnected": cell.is_connected,
        "isFullyConnected": cell.is_fully_connected,
        "isBlind": cell.is_blind,
        "isRoot": cell.is_root,
        "isLocked": cell.is_locked,
    }


def save_board(board: Board, solved: Optional[Board] = None, skill: Optional[str] = None) -> Dict:
    """Export the board (and its solved snapshot) to a dict."""
    assert board.root_location is not None, "cannot save a board without a root"
    rx, ry = board.root_location
    fx, fy = board.focus_location
    data = {
        "gridWidth": board.grid_width,
        "gridHeight": board.grid_height,
        "rootX": rx,
        "rootY": ry,
        "focusX": fx,
        "focusY": fy,
        "wrapped": board.topology.wrap,
        "cells": [cell_to_dict(c) for c in board.cells],
    }
    if skill is not None:
        data["skill"] = skill
    if solved is not None:
        data["solvedSnapshot"] = [cell_to_dict(c) for c in solved.cells]
    return data


# =============================================================================
# RESTORE
# =============================================================================

def _pick_transform(saved_w: int, saved_h: int,
                    grid_width: int, grid_height: int) -> Optional[Tuple[Transform, int]]:
    """
    Coordinate remap and compensating turn for a saved grid size.

    Returns None when the sizes are neither identical nor transposed.
    """
    if (saved_w, saved_h) == (grid_width, grid_height):
        return (lambda x, y: (x, y)), 0
    if (saved_w, saved_h) == (grid_height, grid_width):
        if grid_width > grid_height:
            return (lambda x, y: rotate_left(x, y, grid_height)), -90
        return (lambda x, y: rotate_right(x, y, grid_width)), 90
    return None


def _restore_cell(cell: Cell, data: Dict, turn: int) -> None:
    dirs = name_to_dirs(data["generatedDirs"])
    offset = float(data["rotationOffset"])
    if offset != int(offset):
        raise ValueError(f"Rotation offset {offset} is not a whole angle")
    offset = int(offset)
    if offset % 90 != 0:
        raise ValueError(f"Rotation offset {offset} is not a multiple of 90")

    cell.reset(dirs)
    # Turn the layout itself so the offset keeps meaning "away from solved"
    if dirs is not None and turn:
        cell.generated_dirs = rotate_dirs(dirs, turn)
    cell.rotation_offset = normalize_angle(offset)
    cell.is_connected = bool(data["isConnected"])
    cell.is_fully_connected = bool(data["isFullyConnected"])
    cell.is_blind = bool(data["isBlind"])
    cell.is_locked = bool(data["isLocked"])


def _restore_matrix(cells: List[Dict], saved_w: int, saved_h: int,
                    grid_width: int, grid_height: int, wrap: bool,
                    transform: Transform, turn: int, root: Tuple[int, int]) -> Board:
    """Build a Board from a saved cell list. Raises ValueError if inconsistent."""
    if len(cells) != saved_w * saved_h:
        raise ValueError(f"Expected {saved_w * saved_h} cells, found {len(cells)}")

    board = Board(grid_width, grid_height)
    for index, cell_data in enumerate(cells):
        x, y = transform(index % saved_w, index // saved_w)
        _restore_cell(board.cell(x, y), cell_data, turn)

    # The active board is the box holding every active cell
    active = [(c.x, c.y) for c in board.cells if not c.is_inactive]
    if not active:
        raise ValueError("Saved board has no active cells")
    xs = [x for x, _ in active]
    ys = [y for _, y in active]
    board.topology = GridTopology(grid_width, grid_height,
                                  min(xs), min(ys), max(xs) + 1, max(ys) + 1, wrap)
    if len(active) != board.active_count():
        raise ValueError("Active cells do not form a rectangle")

    if not board.topology.is_active(*root):
        raise ValueError(f"Root {root} is not on the active board")
    for c in board.cells:
        c.is_root = False
    board.set_root(*root)
    return board


def restore_board(data: Dict, grid_width: int, grid_height: int,
                  wrap: Optional[bool] = None) -> RestoreResult:
    """
    Rebuild a board saved by save_board onto a grid of the given size.

    Args:
        data: Saved state
        grid_width, grid_height: Live grid size
        wrap: Wrap mode of the game's skill. Overrides the saved "wrapped"
            flag; a save without one and no wrap given is taken as unwrapped.

    Returns:
        RestoreResult; ok is False for incompatible sizes, damaged data, or
        a layout that is broken on the resulting topology
    """
    try:
        saved_w = int(data["gridWidth"])
        saved_h = int(data["gridHeight"])
        picked = _pick_transform(saved_w, saved_h, grid_width, grid_height)
        if picked is None:
            msg = (f"Saved grid {saved_w}x{saved_h} does not fit "
                   f"live grid {grid_width}x{grid_height}")
            logger.warning(msg)
            return RestoreResult(ok=False, message=msg)
        transform, turn = picked

        if wrap is None:
            wrap = bool(data.get("wrapped", False))
        root = transform(int(data["rootX"]), int(data["rootY"]))
        focus = transform(int(data["focusX"]), int(data["focusY"]))

        board = _restore_matrix(data["cells"], saved_w, saved_h, grid_width, grid_height,
                                wrap, transform, turn, root)
        if board.topology.in_grid(*focus):
            board.set_focus(*focus)
        else:
            board.set_focus(*root)

        solved = None
        if data.get("solvedSnapshot") is not None:
            solved = _restore_matrix(data["solvedSnapshot"], saved_w, saved_h,
                                     grid_width, grid_height, wrap, transform, turn, root)
            solved.set_focus(*board.focus_location)

        for name, restored in (("board", board), ("solved snapshot", solved)):
            errors = restored.validate_board() if restored is not None else []
            if errors:
                raise ValueError(f"Saved {name} is invalid (wrap={wrap}): {errors[0]}")
    except (KeyError, ValueError, TypeError) as e:
        logger.warning("Rejected saved board: %s", e)
        return RestoreResult(ok=False, message=str(e))

    logger.debug("Restored %dx%d board onto %dx%d (turn %d)",
                 saved_w, saved_h, grid_width, grid_height, turn)
    return RestoreResult(ok=True, board=board, solved=solved)


# =============================================================================
# FILES
# =============================================================================

def save_json(filename: str, data: Dict) -> None:
    """Write saved state to a JSON file."""
    with open(filename, 'w') as f:
        json.dump(data, f, indent=2)


def load_json(filename: str) -> Dict:
    """Read saved state from a JSON file."""
    with open(filename, 'r') as f:
        return json.load(f)
