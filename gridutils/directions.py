# gridutils/directions.py
"""
Direction bitmasks for square cable grids.

Bit layout (4-bit field):
- L = 0b0001
- D = 0b0010
- R = 0b0100
- U = 0b1000

A cell's connections are a mask over these bits. A mask of 0 is a FREE cell
(exists, but carries no cable). Rotating a mask by 90 degrees is a cyclic
shift inside the 4-bit field; +90 is clockwise (U -> R -> D -> L -> U).

Screen convention: x grows to the right, y grows downward.
"""

from __future__ import annotations
from enum import IntFlag
from typing import Dict, Optional, Tuple


class Direction(IntFlag):
    """Cardinal connection bits."""
    L = 1
    D = 2
    R = 4
    U = 8


FREE = Direction(0)
ALL_DIRS = Direction.U | Direction.R | Direction.D | Direction.L

# Scan order used by flood fills and the generator
CARDINALS: Tuple[Direction, ...] = (Direction.L, Direction.D, Direction.R, Direction.U)

_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.L: (-1,  0),
    Direction.D: ( 0,  1),
    Direction.R: ( 1,  0),
    Direction.U: ( 0, -1),
}

_REVERSE: Dict[Direction, Direction] = {
    Direction.U: Direction.D,
    Direction.R: Direction.L,
    Direction.D: Direction.U,
    Direction.L: Direction.R,
}

# Name order matches the cable tile naming: U, R, D, L
_NAME_ORDER: Tuple[Tuple[Direction, str], ...] = (
    (Direction.U, "U"),
    (Direction.R, "R"),
    (Direction.D, "D"),
    (Direction.L, "L"),
)

FREE_NAME = "FREE"
NONE_NAME = "NONE"


def delta(direction: Direction) -> Tuple[int, int]:
    """(dx, dy) step for a single cardinal direction."""
    return _DELTAS[direction]


def reverse(direction: Direction) -> Direction:
    """Opposite cardinal direction (U<->D, L<->R)."""
    return _REVERSE[direction]


def normalize_angle(angle: int) -> int:
    """
    Fold a multiple of 90 into the range [-180, 180).

    Raises:
        AssertionError: If the angle is not a multiple of 90
    """
    assert angle % 90 == 0, f"angle {angle} is not a multiple of 90"
    return ((angle + 180) % 360) - 180


def rotate_dirs(bits: int, angle: int) -> Direction:
    """
    Rotate a direction mask by a multiple of 90 degrees.

    Positive angles turn clockwise. Four quarter turns return the original
    mask.
    """
    assert angle % 90 == 0, f"angle {angle} is not a multiple of 90"
    bits = int(bits) & 0x0f
    for _ in range((angle // 90) % 4):
        # One clockwise quarter turn: L->U, D->L, R->D, U->R
        bits = ((bits & 0x01) << 3) | ((bits & 0x0e) >> 1)
    return Direction(bits)


def count_dirs(bits: int) -> int:
    """Number of connection bits set in a mask."""
    return bin(int(bits) & 0x0f).count("1")


def dirs_to_name(bits: Optional[int]) -> str:
    """
    Stable text name of a direction mask.

    None (inactive) -> "NONE", 0 -> "FREE", else e.g. "U_D_".
    """
    if bits is None:
        return NONE_NAME
    if int(bits) == 0:
        return FREE_NAME
    return "".join(ch if bits & d else "_" for d, ch in _NAME_ORDER)


def name_to_dirs(name: str) -> Optional[Direction]:
    """Inverse of dirs_to_name. Raises ValueError for unknown names."""
    if name == NONE_NAME:
        return None
    if name == FREE_NAME:
        return FREE
    if len(name) != 4:
        raise ValueError(f"Bad direction name: {name!r}")
    bits = FREE
    for (d, ch), got in zip(_NAME_ORDER, name):
        if got == ch:
            bits |= d
        elif got != "_":
            raise ValueError(f"Bad direction name: {name!r}")
    return bits


def step(
    x: int,
    y: int,
    direction: Direction,
    bounds: Tuple[int, int, int, int],
    wrap: bool,
) -> Optional[Tuple[int, int]]:
    """
    Neighbor coordinate of (x, y) inside an active rectangle.

    Args:
        x, y: Cell coordinate (must lie inside bounds)
        direction: Single cardinal direction
        bounds: (start_x, start_y, end_x, end_y), end exclusive
        wrap: If True, stepping off an edge re-enters at the opposite edge

    Returns:
        (x, y) of the neighbor, or None at an unwrapped edge

    Raises:
        AssertionError: If (x, y) is outside bounds
    """
    sx, sy, ex, ey = bounds
    assert sx <= x < ex, f"x {x} out of range [{sx}, {ex})"
    assert sy <= y < ey, f"y {y} out of range [{sy}, {ey})"

    dx, dy = _DELTAS[direction]
    nx, ny = x + dx, y + dy

    if sx <= nx < ex and sy <= ny < ey:
        return (nx, ny)
    if not wrap:
        return None

    # Wrap inside the active rectangle, not the whole grid
    nx = sx + (nx - sx) % (ex - sx)
    ny = sy + (ny - sy) % (ey - sy)
    return (nx, ny)
