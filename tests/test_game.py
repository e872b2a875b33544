"""
Game session and command history:
- Undo/redo of rotations and locks
- Click counting
- Input ignored while the autosolver runs
- Connectivity and solved events
- Focus movement
"""

from gridutils.directions import Direction
from netscramble.commands import CommandHistory, RotateCellCommand, ToggleLockCommand
from netscramble.config import Skill
from netscramble.types import ActionResult


def _cable_cells(game, count):
    """Non-root cable cells, in board order."""
    cells = [c for c in game.board.active_cells() if not c.is_free and not c.is_root]
    assert len(cells) >= count
    return cells[:count]


def _break_server(game):
    """Turn the server off its canonical orientation so no click can win."""
    game.board.root.rotation_offset = 90


# =============================================================================
# COMMANDS
# =============================================================================

def test_rotate_command_undo_redo(cross_board):
    history = CommandHistory()
    cmd = RotateCellCommand(1, 0, 1)
    assert history.execute_command(cmd, cross_board)
    assert cross_board.cell(1, 0).rotation_offset == 90
    assert history.get_undo_description() == "Rotate cell (1,0) clockwise"

    assert history.undo(cross_board)
    assert cross_board.cell(1, 0).rotation_offset == 0
    assert history.can_redo()
    assert history.redo(cross_board)
    assert cross_board.cell(1, 0).rotation_offset == 90


def test_refused_commands_are_not_recorded(cross_board):
    history = CommandHistory()
    cmd = RotateCellCommand(0, 0, 1)
    assert not history.execute_command(cmd, cross_board)
    assert cmd.result == ActionResult.INVALID
    assert not history.can_undo()


def test_lock_command_undo(cross_board):
    history = CommandHistory()
    history.execute_command(ToggleLockCommand(2, 1), cross_board)
    assert cross_board.cell(2, 1).is_locked
    history.undo(cross_board)
    assert not cross_board.cell(2, 1).is_locked


def test_new_command_clears_redo(cross_board):
    history = CommandHistory()
    history.execute_command(RotateCellCommand(1, 0, 1), cross_board)
    history.undo(cross_board)
    history.execute_command(RotateCellCommand(2, 1, -1), cross_board)
    assert not history.can_redo()
    info = history.get_history_info()
    assert info["undo_depth"] == 1 and info["redo_depth"] == 0


def test_history_is_bounded(cross_board):
    history = CommandHistory(max_history=3)
    for _ in range(5):
        history.execute_command(RotateCellCommand(1, 0, 1), cross_board)
    assert len(history.undo_stack) == 3


# =============================================================================
# GAME
# =============================================================================

def test_new_game_shape(new_game):
    game = new_game(Skill.NOVICE)
    t = game.board.topology
    assert (game.board.grid_width, game.board.grid_height) == (7, 11)
    assert (t.board_width, t.board_height) == (5, 5)
    assert not t.wrap
    assert game.validate() == []
    assert game.board.focus_location == game.board.root_location
    assert game.click_count == 0
    assert not game.solved_flag
    assert game.solved.validate_board() == []


def test_master_game_wraps_whole_grid(new_game):
    game = new_game(Skill.MASTER)
    t = game.board.topology
    assert t.wrap
    assert (t.board_width, t.board_height) == (7, 11)


def test_invalid_rotations(new_game):
    game = new_game(Skill.NOVICE)
    assert game.board.cell(0, 0).is_inactive
    assert game.rotate(0, 0) == ActionResult.INVALID
    cell = _cable_cells(game, 1)[0]
    assert game.toggle_lock(cell.x, cell.y) == ActionResult.OK
    assert game.rotate(cell.x, cell.y) == ActionResult.INVALID
    assert game.click_count == 0


def test_click_counting(new_game):
    game = new_game(Skill.EXPERT)
    _break_server(game)
    a, b = _cable_cells(game, 2)
    game.rotate(a.x, a.y)
    game.rotate(a.x, a.y)
    assert game.click_count == 1
    game.rotate(b.x, b.y)
    game.rotate(a.x, a.y, -1)
    assert game.click_count == 3


def test_undo_redo_through_game(new_game):
    game = new_game(Skill.NORMAL)
    _break_server(game)
    cell = _cable_cells(game, 1)[0]
    before = cell.rotation_offset
    game.rotate(cell.x, cell.y)
    assert game.board.cell(cell.x, cell.y).rotation_offset != before
    assert game.undo()
    assert game.board.cell(cell.x, cell.y).rotation_offset == before
    assert game.redo()
    assert not game.redo()


def test_autosolve_solves_and_fires_events_once(new_game):
    game = new_game(Skill.EXPERT)
    _break_server(game)
    solved_events = []
    newly = []
    game.add_solved_listener(solved_events.append)
    game.add_connectivity_listener(newly.append)

    moves = game.run_autosolve()
    assert moves > 0
    assert game.solved_flag
    assert len(solved_events) == 1
    assert solved_events[0]["clicks"] == 0
    assert solved_events[0]["tiles"] == 11 * 7
    assert all(n > 0 for n in newly)
    assert all(c.rotation_offset == 0 for c in game.board.cells)

    # Breaking and re-making the network does not win twice
    cell = _cable_cells(game, 1)[0]
    game.rotate(cell.x, cell.y)
    game.rotate(cell.x, cell.y, -1)
    assert len(solved_events) == 1
    assert game.click_count == 0


def test_solved_board_is_fully_connected_and_visible(new_game):
    game = new_game(Skill.INSANE)
    _break_server(game)
    game.run_autosolve()
    for c in game.board.active_cells():
        assert not c.is_blind
        if not c.is_free:
            assert c.is_connected
    assert game.board.root.is_fully_connected


def test_input_ignored_while_autosolving(new_game):
    game = new_game(Skill.NORMAL)
    _break_server(game)
    cell = _cable_cells(game, 1)[0]
    assert game.start_autosolve() > 0
    assert game.rotate(cell.x, cell.y) == ActionResult.IGNORED
    assert game.toggle_lock(cell.x, cell.y) == ActionResult.IGNORED
    assert not game.undo()

    assert game.cancel_autosolve()
    assert game.rotate(cell.x, cell.y) == ActionResult.OK


def test_autosolve_unlocks_its_targets(new_game):
    game = new_game(Skill.NORMAL)
    _break_server(game)
    root = game.board.root
    game.toggle_lock(root.x, root.y)
    assert root.is_locked

    game.start_autosolve()
    # The server is planned first
    move = game.step_autosolve()
    assert (move.x, move.y) == (root.x, root.y)
    assert not game.board.root.is_locked
    assert game.board.focus_location == (root.x, root.y)


def test_move_focus_wraps_over_grid(new_game):
    game = new_game(Skill.NOVICE)
    game.board.set_focus(0, 0)
    game.move_focus(Direction.L)
    assert game.board.focus_location == (6, 0)
    game.move_focus(Direction.U)
    assert game.board.focus_location == (6, 10)
    game.move_focus(Direction.D)
    assert game.board.focus_location == (6, 0)


def test_statistics(new_game):
    game = new_game(Skill.NOVICE)
    stats = game.get_statistics()
    assert stats["active_cells"] == 25
    assert stats["used_cells"] == game.last_generation.cells
    assert stats["skill"] == "novice"
    assert stats["history"]["undo_depth"] == 0
