"""
NetGame - the engine facade a host application drives.

The host feeds discrete commands in (rotate, lock, undo/redo, autosolve
start/stop/step, focus moves) and reads cell views out. Every command runs
to completion before returning; a host with several threads must serialize
calls itself.
"""
import logging
import random
from typing import Callable, Dict, List, Optional

from gridutils.directions import Direction, delta
from netscramble.autosolver import Autosolver
from netscramble.board import Board
from netscramble.commands import CommandHistory, RotateCellCommand, ToggleLockCommand
from netscramble.config import DEFAULT_SETTINGS, GeneratorSettings, ScreenSize, Skill
from netscramble.connectivity import recompute
from netscramble.generator import NetworkGenerator
from netscramble.persistence import restore_board, save_board
from netscramble.scrambler import scramble
from netscramble.solvability import is_solved, mark_solved, unconnected_cells
from netscramble.types import ActionResult, CellView, GenerationResult, Move, ValidationError

logger = logging.getLogger(__name__)


class NetGame:
    """
    One player's game on one screen-sized grid.

    Events:
        connectivity listeners get the number of newly connected cells
        whenever it is non-zero; solved listeners get a summary dict once
        per game.

    Attributes:
        board: Live board
        solved: Snapshot of the board as generated, before scrambling
        skill: Skill of the current game
        click_count: Player rotations, ignoring repeats on the same cell
        solved_flag: True once the current game has been won
    """

    def __init__(self, screen: ScreenSize = ScreenSize.MEDIUM, landscape: bool = False,
                 rng: Optional[random.Random] = None,
                 settings: GeneratorSettings = DEFAULT_SETTINGS):
        self.screen = screen
        grid_width, grid_height = screen.grid_size(landscape)
        self.board: Board = Board(grid_width, grid_height)
        self.solved: Optional[Board] = None
        self.rng = rng if rng is not None else random.Random()
        self.generator = NetworkGenerator(self.rng, settings)
        self.autosolver = Autosolver(self.rng)
        self.command_history = CommandHistory(max_history=100)
        self.skill: Skill = Skill.NOVICE
        self.click_count = 0
        self.solved_flag = False
        self.last_generation: Optional[GenerationResult] = None
        self._prev_clicked = None
        self._connectivity_listeners: List[Callable[[int], None]] = []
        self._solved_listeners: List[Callable[[Dict], None]] = []

    # =============================================================================
    # LISTENERS
    # =============================================================================

    def add_connectivity_listener(self, callback: Callable[[int], None]) -> None:
        self._connectivity_listeners.append(callback)

    def add_solved_listener(self, callback: Callable[[Dict], None]) -> None:
        self._solved_listeners.append(callback)

    # =============================================================================
    # GAME SETUP
    # =============================================================================

    def new_game(self, skill: Optional[Skill] = None) -> GenerationResult:
        """Generate, snapshot and scramble a fresh board."""
        self.cancel_autosolve()
        if skill is not None:
            self.skill = skill
        board = self.board
        board_width, board_height = self.screen.board_size(
            self.skill, board.grid_width, board.grid_height)
        board.reset(board_width, board_height, self.skill.wrapped)

        result = self.generator.generate(board, self.skill.branches)
        self.last_generation = result
        board.set_focus(*board.root_location)
        self.solved = board.snapshot()

        scramble(board, self.rng, self.skill.blind)
        recompute(board)

        self.command_history.clear_history()
        self.click_count = 0
        self.solved_flag = False
        self._prev_clicked = None
        logger.info("New %s game: %d cells, coverage %.2f",
                    self.skill.label, result.cells, result.coverage)
        return result

    # =============================================================================
    # PLAYER COMMANDS
    # =============================================================================

    def rotate(self, x: int, y: int, dirn: int = 1) -> ActionResult:
        """Turn a cell a quarter (dirn +1 clockwise, -1 anticlockwise)."""
        if self.autosolver.active:
            return ActionResult.IGNORED
        command = RotateCellCommand(x, y, dirn)
        self.command_history.execute_command(command, self.board)
        if command.result != ActionResult.OK:
            logger.debug("Rotate refused at (%d,%d)", x, y)
            return command.result

        self._count_click(x, y)
        self._update()
        return ActionResult.OK

    def toggle_lock(self, x: int, y: int) -> ActionResult:
        """Lock or unlock a cell."""
        if self.autosolver.active:
            return ActionResult.IGNORED
        command = ToggleLockCommand(x, y)
        self.command_history.execute_command(command, self.board)
        return command.result

    def undo(self) -> bool:
        """Undo the last rotate or lock."""
        if self.autosolver.active:
            return False
        success = self.command_history.undo(self.board)
        if success:
            self._update()
        return success

    def redo(self) -> bool:
        """Redo the last undone rotate or lock."""
        if self.autosolver.active:
            return False
        success = self.command_history.redo(self.board)
        if success:
            self._update()
        return success

    def move_focus(self, direction: Direction) -> None:
        """
        Move the focus one cell. Where the board has no neighbor the focus
        wraps around the whole grid.
        """
        focus = self.board.focus
        other = self.board.neighbor(focus, direction)
        if other is not None:
            self.board.set_focus(other.x, other.y)
            return
        dx, dy = delta(direction)
        self.board.set_focus((focus.x + dx) % self.board.grid_width,
                             (focus.y + dy) % self.board.grid_height)

    def _count_click(self, x: int, y: int) -> None:
        # Repeat turns of one cell count once, since a tap only turns clockwise
        if not self.solved_flag and (x, y) != self._prev_clicked:
            self.click_count += 1
            self._prev_clicked = (x, y)

    # =============================================================================
    # AUTOSOLVE
    # =============================================================================

    def start_autosolve(self) -> int:
        """Plan the moves back to the solved layout. Returns the plan length."""
        if self.solved is None:
            return 0
        self.command_history.clear_history()
        return self.autosolver.start(self.board, self.solved)

    def cancel_autosolve(self) -> bool:
        return self.autosolver.cancel()

    def step_autosolve(self) -> Optional[Move]:
        """
        Apply the next planned move in one step.

        The target cell gets the focus, is unlocked and made visible, then
        turned. Returns the move, or None when there is nothing to do.
        """
        move = self.autosolver.next_move()
        if move is None:
            return None
        cell = self.board.cell(move.x, move.y)
        self.board.set_focus(move.x, move.y)
        cell.is_locked = False
        cell.is_blind = False
        cell.rotate(move.angle)
        self._update()
        return move

    def run_autosolve(self) -> int:
        """Plan and apply every move. Returns the number of moves applied."""
        self.start_autosolve()
        count = 0
        while self.step_autosolve() is not None:
            count += 1
        return count

    # =============================================================================
    # STATE
    # =============================================================================

    def _update(self) -> int:
        """Recompute connectivity, fire events and check for a win."""
        newly = recompute(self.board)
        if newly:
            for callback in self._connectivity_listeners:
                callback(newly)

        if not self.solved_flag and is_solved(self.board):
            self.solved_flag = True
            mark_solved(self.board)
            summary = self.summary()
            logger.info("Solved in %d clicks with %d unused cells",
                        summary["clicks"], summary["unused"])
            for callback in self._solved_listeners:
                callback(summary)
        return newly

    def summary(self) -> Dict:
        t = self.board.topology
        return {
            "skill": self.skill.label,
            "tiles": t.board_width * t.board_height,
            "clicks": self.click_count,
            "unused": unconnected_cells(self.board),
            "solved": self.solved_flag,
        }

    def cell_views(self) -> List[CellView]:
        return self.board.views()

    def validate(self) -> List[ValidationError]:
        return self.board.validate_board()

    def get_statistics(self) -> Dict:
        stats = self.board.get_statistics()
        stats.update(self.summary())
        stats["history"] = self.command_history.get_history_info()
        return stats

    def save_state(self) -> Dict:
        """Board, solved snapshot and game progress as a dict."""
        data = save_board(self.board, self.solved, self.skill.name)
        data["clickCount"] = self.click_count
        data["isSolved"] = self.solved_flag
        return data

    def restore_state(self, data: Dict, skill: Optional[Skill] = None) -> bool:
        """
        Load a saved game. Returns False if it can't be used on this grid;
        the caller should then start a new game.

        The wrap mode comes from the skill: the one given, else the one in
        the save. With neither, the save's own wrap flag is used.
        """
        if skill is None and data.get("skill") in Skill.__members__:
            skill = Skill[data["skill"]]
        wrap = skill.wrapped if skill is not None else None
        result = restore_board(data, self.board.grid_width, self.board.grid_height, wrap)
        if not result.ok:
            return False

        self.cancel_autosolve()
        self.board = result.board
        self.solved = result.solved
        if skill is not None:
            self.skill = skill
        self.click_count = int(data.get("clickCount", 0))
        self.command_history.clear_history()
        self._prev_clicked = None

        recompute(self.board)
        self.solved_flag = bool(data.get("isSolved", False)) or is_solved(self.board)
        return True
