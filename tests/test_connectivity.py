"""
Live connectivity and the win condition:
- Server must sit at its canonical orientation
- Recompute is idempotent and reports newly connected cells
- Wrapped boards connect across the edge
- Free cells are never connected and never terminals
"""

from gridutils.directions import FREE, Direction
from netscramble.connectivity import recompute, traverse, live_link
from netscramble.solvability import is_solved, mark_solved, unconnected_cells

U, R, D, L = Direction.U, Direction.R, Direction.D, Direction.L


def test_solved_layout_connects_everything(cross_board):
    assert recompute(cross_board) == 5
    assert all(c.is_connected for c in cross_board.cells if not c.is_free)
    assert not any(c.is_connected for c in cross_board.cells if c.is_free)
    assert is_solved(cross_board)


def test_recompute_is_idempotent(cross_board):
    cross_board.cell(2, 1).rotate(90)
    first = recompute(cross_board)
    flags = [c.is_connected for c in cross_board.cells]
    assert recompute(cross_board) == 0
    assert [c.is_connected for c in cross_board.cells] == flags
    assert first == 4


def test_rotated_root_connects_nothing(cross_board):
    """A four-way server turned half round looks the same but is not live."""
    cross_board.root.rotate(180)
    assert cross_board.root.current_dirs == U | R | D | L
    assert recompute(cross_board) == 0
    assert not any(c.is_connected for c in cross_board.cells)
    assert not is_solved(cross_board)


def test_two_quarter_turns_bring_server_back(cross_board):
    cross_board.root.rotate(180)
    recompute(cross_board)
    assert not cross_board.root.is_connected
    cross_board.root.rotate(90)
    assert recompute(cross_board) == 0
    cross_board.root.rotate(90)
    assert recompute(cross_board) == 5
    assert is_solved(cross_board)


def test_terminal_turned_away_is_unconnected(cross_board):
    recompute(cross_board)
    cross_board.cell(1, 0).rotate(90)
    assert recompute(cross_board) == 0
    assert not cross_board.cell(1, 0).is_connected
    assert cross_board.cell(2, 1).is_connected
    assert not is_solved(cross_board)
    assert unconnected_cells(cross_board) == 1


def test_disconnect_clears_fully_connected(cross_board):
    recompute(cross_board)
    mark_solved(cross_board)
    assert cross_board.cell(1, 0).is_fully_connected
    cross_board.cell(1, 0).rotate(-90)
    recompute(cross_board)
    assert not cross_board.cell(1, 0).is_fully_connected
    assert cross_board.cell(0, 1).is_fully_connected


def test_wrap_propagates_across_edge(make_board):
    board = make_board(2, 2, {(0, 0): L, (1, 0): R}, (0, 0), wrap=True)
    assert board.validate_board() == []
    assert recompute(board) == 2
    assert board.cell(1, 0).is_connected
    assert is_solved(board)


def test_same_layout_without_wrap_is_broken(make_board):
    board = make_board(2, 2, {(0, 0): L, (1, 0): R}, (0, 0), wrap=False)
    assert recompute(board) == 1
    assert not board.cell(1, 0).is_connected


def test_free_cells_never_connect_or_count_as_terminals(make_board):
    board = make_board(3, 1, {(0, 0): R, (1, 0): L}, (0, 0))
    free = board.cell(2, 0)
    assert free.generated_dirs == FREE
    recompute(board)
    assert not free.is_connected
    assert free.num_dirs() == 0
    # Only real terminals gate the win
    assert is_solved(board)


def test_traverse_visits_breadth_first(cross_board):
    order = traverse(cross_board, cross_board.root, live_link)
    assert order[0] is cross_board.root
    assert len(order) == 5
    assert {(c.x, c.y) for c in order[1:]} == {(1, 0), (2, 1), (1, 2), (0, 1)}


def test_mark_solved_reveals_blind_cells(cross_board):
    for c in cross_board.active_cells():
        c.is_blind = True
    recompute(cross_board)
    mark_solved(cross_board)
    assert not any(c.is_blind for c in cross_board.cells)
    assert all(c.is_fully_connected for c in cross_board.cells if not c.is_free)
