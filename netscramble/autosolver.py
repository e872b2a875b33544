"""
Autosolver: plan the quarter turns that bring a scrambled board back to its
solved layout.

Cells are visited breadth-first from the server along the solved network, so
each move hooks a cell onto a neighbor that has already been put right.
"""
import logging
import random
from typing import List, Optional

from gridutils.directions import normalize_angle, rotate_dirs
from netscramble.board import Board, Cell
from netscramble.connectivity import traverse
from netscramble.types import AutosolveState, Move

logger = logging.getLogger(__name__)


def _generated_link(cell: Cell, direction, other: Cell) -> bool:
    return bool(cell.generated_dirs & direction)


def _turn_needed(current: Cell, target: Cell) -> Optional[int]:
    """
    Angle in [-180, 180) that takes current to target, or None if no turn does.

    When both cells share a layout the rotation offsets decide; otherwise
    the facing connections are compared.
    """
    if current.generated_dirs == target.generated_dirs:
        return normalize_angle(target.rotation_offset - current.rotation_offset)
    if current.current_dirs is None or target.current_dirs is None:
        return None
    for angle in (0, 90, -90, -180):
        if rotate_dirs(current.current_dirs, angle) == target.current_dirs:
            return angle
    return None


def plan_moves(board: Board, solved: Board, rng: random.Random) -> List[Move]:
    """
    Ordered moves that turn board into solved.

    A cell a quarter turn out needs one move; a cell half a turn out gets two
    moves of the same, randomly chosen, sense.
    """
    assert (board.grid_width, board.grid_height) == (solved.grid_width, solved.grid_height), \
        "solved snapshot does not match the board size"
    if solved.root is None:
        return []

    moves: List[Move] = []
    for target in traverse(solved, solved.root, _generated_link):
        current = board.cell(target.x, target.y)
        angle = _turn_needed(current, target)
        if angle is None:
            logger.warning("Cell (%d,%d) can't be turned to its solved layout",
                           target.x, target.y)
        elif angle in (90, -90):
            moves.append(Move(current.x, current.y, angle))
        elif angle == -180:
            rot = rng.choice((90, -90))
            moves.append(Move(current.x, current.y, rot))
            moves.append(Move(current.x, current.y, rot))
    return moves


class Autosolver:
    """
    One autosolve session.

    States: IDLE -> PLANNING -> STEPPING -> IDLE when the plan runs out, or
    CANCELLED when stopped between steps.
    """

    def __init__(self, rng: random.Random):
        self.rng = rng
        self.state = AutosolveState.IDLE
        self.moves: List[Move] = []
        self.position = 0

    @property
    def active(self) -> bool:
        return self.state == AutosolveState.STEPPING

    @property
    def remaining(self) -> int:
        return len(self.moves) - self.position

    def start(self, board: Board, solved: Board) -> int:
        """Plan afresh, dropping any unexecuted moves. Returns the plan length."""
        self.state = AutosolveState.PLANNING
        self.moves = plan_moves(board, solved, self.rng)
        self.position = 0
        self.state = AutosolveState.STEPPING if self.moves else AutosolveState.IDLE
        logger.info("Autosolve planned %d moves", len(self.moves))
        return len(self.moves)

    def next_move(self) -> Optional[Move]:
        """Hand out the next move, or None when not stepping."""
        if self.state != AutosolveState.STEPPING:
            return None
        move = self.moves[self.position]
        self.position += 1
        logger.debug("Autosolve step %d of %d: %s", self.position, len(self.moves), move)
        if self.position >= len(self.moves):
            self.state = AutosolveState.IDLE
        return move

    def cancel(self) -> bool:
        """Stop between steps. Returns False if nothing was running."""
        if self.state != AutosolveState.STEPPING:
            return False
        self.state = AutosolveState.CANCELLED
        self.moves = []
        self.position = 0
        return True
