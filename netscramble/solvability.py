"""
Win condition and wasted-cable diagnostics.
"""
from netscramble.board import Board


def is_solved(board: Board) -> bool:
    """True when every terminal (one-connection cell) is connected."""
    for c in board.active_cells():
        if c.num_dirs() == 1 and not c.is_connected:
            return False
    return True


def unconnected_cells(board: Board) -> int:
    """
    Cable cells that are not connected.

    Normally zero on a win, but some layouts can be solved without using
    every piece of cable.
    """
    return sum(1 for c in board.active_cells() if not c.is_free and not c.is_connected)


def mark_solved(board: Board) -> None:
    """Flag the connected network as complete and reveal blind cells."""
    for c in board.active_cells():
        c.is_blind = False
        if c.is_connected:
            c.is_fully_connected = True
