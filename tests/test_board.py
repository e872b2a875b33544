"""
Board model:
- Active rectangle, inactive cells and neighbor lookup
- Player actions on free, inactive and locked cells
- Structural validation
"""

import pytest

from gridutils.directions import FREE, Direction
from netscramble.board import Board, GridTopology
from netscramble.types import ActionResult

U, R, D, L = Direction.U, Direction.R, Direction.D, Direction.L


def test_bad_dimensions_raise():
    with pytest.raises(ValueError):
        Board(0, 5)
    with pytest.raises(ValueError):
        GridTopology.centered(5, 5, 6, 5)
    with pytest.raises(ValueError):
        GridTopology(5, 5, 2, 0, 2, 5)


def test_reset_centres_active_board():
    board = Board(7, 11)
    board.reset(5, 5, wrap=False)
    t = board.topology
    assert t.bounds == (1, 3, 6, 8)
    assert board.active_count() == 25
    assert board.cell(1, 3).is_free
    assert board.cell(0, 0).is_inactive
    assert board.cell(6, 8).is_inactive
    assert board.root is None


def test_neighbors_stop_at_edges_without_wrap():
    board = Board(4, 4)
    board.reset(2, 2, wrap=False)
    corner = board.cell(1, 1)
    assert board.neighbor(corner, R) is board.cell(2, 1)
    assert board.neighbor(corner, L) is None
    assert board.neighbor(corner, U) is None
    # Inactive cells have no neighbors at all
    assert board.neighbor(board.cell(0, 0), R) is None


def test_two_by_two_wrap_left_of_origin():
    board = Board(2, 2)
    board.reset(2, 2, wrap=True)
    assert board.neighbor(board.cell(0, 0), L) is board.cell(1, 0)
    assert board.neighbor(board.cell(0, 0), U) is board.cell(0, 1)


def test_cell_access_out_of_range_asserts():
    board = Board(3, 3)
    with pytest.raises(AssertionError):
        board.cell(3, 0)
    with pytest.raises(AssertionError):
        board.cell(0, -1)


def test_current_dirs_follow_offset(cross_board):
    cell = cross_board.cell(1, 0)
    assert cell.current_dirs == D
    cell.rotate(90)
    assert cell.current_dirs == L
    cell.rotate(90)
    assert cell.rotation_offset == -180
    assert cell.current_dirs == U
    assert cell.generated_dirs == D


def test_single_root(cross_board):
    cross_board.set_root(1, 0)
    roots = [c for c in cross_board.cells if c.is_root]
    assert roots == [cross_board.cell(1, 0)]
    assert cross_board.root_location == (1, 0)


def test_rotate_rules(cross_board):
    assert cross_board.rotate_cell(1, 0, 1) == ActionResult.OK
    assert cross_board.cell(1, 0).rotation_offset == 90
    assert cross_board.rotate_cell(1, 0, -1) == ActionResult.OK
    assert cross_board.cell(1, 0).rotation_offset == 0
    # Corner cells carry no cable
    assert cross_board.rotate_cell(0, 0, 1) == ActionResult.INVALID
    assert cross_board.cell(0, 0).rotation_offset == 0


def test_rotate_inactive_is_invalid():
    board = Board(4, 4)
    board.reset(2, 2, wrap=False)
    assert board.rotate_cell(0, 0, 1) == ActionResult.INVALID


def test_lock_blocks_rotation(cross_board):
    assert cross_board.toggle_lock(1, 0) == ActionResult.OK
    assert cross_board.cell(1, 0).is_locked
    assert cross_board.rotate_cell(1, 0, 1) == ActionResult.INVALID
    assert cross_board.toggle_lock(1, 0) == ActionResult.OK
    assert cross_board.rotate_cell(1, 0, 1) == ActionResult.OK
    assert cross_board.toggle_lock(0, 0) == ActionResult.INVALID


def test_validate_accepts_reciprocal_layout(cross_board):
    assert cross_board.validate_board() == []


def test_validate_flags_one_way_link(cross_board):
    cross_board.cell(0, 1).generated_dirs = FREE
    errors = cross_board.validate_board()
    assert any("Asymmetric" in e.message and e.location == (1, 1) for e in errors)


def test_validate_flags_cable_off_board(make_board):
    board = make_board(2, 1, {(0, 0): L | R, (1, 0): L}, (0, 0))
    errors = board.validate_board()
    assert any("off the board" in e.message for e in errors)


def test_statistics(cross_board):
    cross_board.cell(1, 0).rotate(90)
    cross_board.toggle_lock(2, 1)
    stats = cross_board.get_statistics()
    assert stats["active_cells"] == 9
    assert stats["used_cells"] == 5
    assert stats["free_cells"] == 4
    assert stats["terminals"] == 4
    assert stats["rotated_cells"] == 1
    assert stats["locked_cells"] == 1


def test_views_mark_focus(cross_board):
    cross_board.set_focus(2, 2)
    views = cross_board.views()
    assert len(views) == 9
    focused = [v for v in views if v.is_focused]
    assert [(v.x, v.y) for v in focused] == [(2, 2)]
    assert views[4].is_root
    assert not views[4].is_inactive
