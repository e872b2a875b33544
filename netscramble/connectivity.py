"""
Live connectivity: which cells the server currently reaches.
"""
from collections import deque
from typing import Callable, List, Set, Tuple

from gridutils.directions import CARDINALS, Direction, reverse
from netscramble.board import Board, Cell

LinkTest = Callable[[Cell, Direction, Cell], bool]


def live_link(cell: Cell, direction: Direction, other: Cell) -> bool:
    """Both cells currently point at each other."""
    return cell.has_connection(direction) and other.has_connection(reverse(direction))


def traverse(board: Board, start: Cell, link: LinkTest) -> List[Cell]:
    """
    Breadth-first order of the cells reachable from start.

    Args:
        board: Board whose topology gives the neighbors
        start: First cell, always included
        link: Predicate deciding whether cell connects to other via direction

    Returns:
        Cells in visiting order, start first
    """
    order = [start]
    visited: Set[Tuple[int, int]] = {(start.x, start.y)}
    queue = deque([start])

    while queue:
        cell = queue.popleft()
        for d in CARDINALS:
            other = board.neighbor(cell, d)
            if other is None or (other.x, other.y) in visited:
                continue
            if not link(cell, d, other):
                continue
            visited.add((other.x, other.y))
            order.append(other)
            queue.append(other)

    return order


def recompute(board: Board) -> int:
    """
    Recompute every cell's connected flag from scratch.

    The server only feeds the network while it sits at its canonical
    orientation. Calling this twice without a rotation in between gives the
    same result.

    Returns:
        Number of cells that were not connected before and are now
    """
    root = board.root
    connected: Set[Tuple[int, int]] = set()
    if root is not None and not root.is_free and not root.is_rotated():
        connected = {(c.x, c.y) for c in traverse(board, root, live_link)}

    newly = 0
    for c in board.cells:
        now = (c.x, c.y) in connected
        if now and not c.is_connected:
            newly += 1
        c.is_connected = now
        if not now:
            c.is_fully_connected = False
    return newly
