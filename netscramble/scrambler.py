"""
Scrambling: turn every cable cell by a random number of quarter turns.
"""
import random

from netscramble.board import Board

ROTATIONS = (-180, -90, 0, 90)


def is_blind_for(num_dirs: int, threshold: int) -> bool:
    """Cells with at least `threshold` connections are drawn blind."""
    return num_dirs >= threshold


def scramble(board: Board, rng: random.Random, blind_threshold: int = 9) -> None:
    """
    Give each cable cell, root included, a random rotation offset.

    Free cells are skipped on purpose and keep offset 0: a turn there could
    never be seen, and the autosolver would have to undo it. The default threshold
    is the one used by every skill but INSANE, where no cell can go blind.
    """
    for c in board.active_cells():
        if c.is_free:
            continue
        c.rotation_offset = rng.choice(ROTATIONS)
        c.is_blind = is_blind_for(c.num_dirs(), blind_threshold)
